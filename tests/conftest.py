"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O, fake completion capabilities
- integration/ Component boundaries, real I/O to temp locations

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from models import Business, ProviderTable


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


def _json_reply(prose: str = "Here is my assessment:", **fields) -> str:
    return f"{prose}\n```json\n{json.dumps(fields)}\n```\nLet me know if you need more."


@pytest.fixture
def json_reply():
    """Builds a model reply with a fenced JSON block surrounded by prose."""
    return _json_reply


@pytest.fixture
def sample_business():
    """Standard test business."""
    return Business(
        name="Joe's Pizza",
        type="restaurant",
        location="Austin, TX",
        website="https://joespizza.example.com",
    )


@pytest.fixture
def four_provider_table():
    """The four default platforms, two models each."""
    return ProviderTable.from_mapping({
        "chatgpt": ["gpt-a", "gpt-b"],
        "claude": ["claude-a", "claude-b"],
        "gemini": ["gemini-a", "gemini-b"],
        "perplexity": ["sonar-a", "sonar-b"],
    })


@pytest.fixture
def all_keys():
    """Credential lookup that knows every provider."""
    return lambda provider_id: f"key-{provider_id}"


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Add timing summary at end of test run."""
    stats = terminalreporter.stats

    # Collect slowest tests
    if 'passed' in stats:
        durations = []
        for report in stats['passed']:
            if hasattr(report, 'duration'):
                durations.append((report.duration, report.nodeid))

        if durations:
            durations.sort(reverse=True)
            terminalreporter.write_sep("=", "slowest 5 tests")
            for duration, nodeid in durations[:5]:
                terminalreporter.write_line(f"  {duration:.2f}s  {nodeid}")
