"""
Visibility - estimate how well language models know a business.

The core principle: ask every configured model the same self-assessment
question at once, normalize whatever comes back, and let the strongest
answer speak for each provider.

Modules:
- targets: Flatten the provider table into (provider, model) targets
- adapters: One query per target, credential check, completion, normalization
- normalize: Raw reply -> KnowledgeAssessment (JSON first, keyword scan fallback)
- scoring: Weighted 0-100 visibility score
- scheduler: Concurrent fan-out that waits for every query to settle
- selection: Deterministic best-result tie-break per provider
- report: Per-provider summaries and overall score
- compare: Main business vs competitors table
- engine: Entry point tying it together
"""

from .errors import VisibilityError, ConfigurationError, ProviderError
from .targets import enumerate_targets
from .normalize import normalize_response, extract_candidate
from .scoring import calculate_score, round_half_away
from .prompts import SYSTEM_PROMPT, build_query_prompt
from .adapters import (
    QuerySettings,
    LiveCompletion,
    CompletionFn,
    CredentialFn,
    query_target,
)
from .scheduler import gather_outcomes, group_by_provider
from .selection import select_best, select_best_result, tie_break_key
from .report import summarize_provider, overall_score, build_report
from .compare import build_knowledge_comparison
from .engine import check_visibility, check_visibility_async

__all__ = [
    # errors
    'VisibilityError',
    'ConfigurationError',
    'ProviderError',
    # targets
    'enumerate_targets',
    # normalize
    'normalize_response',
    'extract_candidate',
    # scoring
    'calculate_score',
    'round_half_away',
    # prompts
    'SYSTEM_PROMPT',
    'build_query_prompt',
    # adapters
    'QuerySettings',
    'LiveCompletion',
    'CompletionFn',
    'CredentialFn',
    'query_target',
    # scheduler
    'gather_outcomes',
    'group_by_provider',
    # selection
    'select_best',
    'select_best_result',
    'tie_break_key',
    # report
    'summarize_provider',
    'overall_score',
    'build_report',
    # compare
    'build_knowledge_comparison',
    # engine
    'check_visibility',
    'check_visibility_async',
]
