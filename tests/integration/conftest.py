"""
Integration test fixtures.

Integration tests:
- Test component boundaries
- Use real I/O but to temp locations
- Should be deterministic
"""

import pytest
import tempfile
import shutil
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Temporary directory for test data."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with no provider API keys set."""
    from config import PROVIDER_REGISTRY

    for spec in PROVIDER_REGISTRY.values():
        for env_key in spec.env_keys:
            monkeypatch.delenv(env_key, raising=False)
    monkeypatch.delenv("VISIBILITY_PROVIDERS", raising=False)
    return monkeypatch
