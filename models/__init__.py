"""
Domain models - single source of truth for engine values.

Design principles:
- Every value defined once
- Immutable after construction
- Validation at the boundary
"""

from .base import FrozenModel
from .business import Business, Location
from .targets import QueryTarget, ProviderTable
from .assessment import KnowledgeAssessment, KnowledgeLevel, ParseQuality
from .outcome import FailureReason, ModelResult, QueryFailure, ProviderOutcome
from .report import (
    ScorePolicy,
    ProviderSummary,
    AggregateReport,
    ComparisonRow,
    KnowledgeComparison,
)

__all__ = [
    # Base
    "FrozenModel",
    # Business
    "Business",
    "Location",
    # Targets
    "QueryTarget",
    "ProviderTable",
    # Assessment
    "KnowledgeAssessment",
    "KnowledgeLevel",
    "ParseQuality",
    # Outcome
    "FailureReason",
    "ModelResult",
    "QueryFailure",
    "ProviderOutcome",
    # Report
    "ScorePolicy",
    "ProviderSummary",
    "AggregateReport",
    "ComparisonRow",
    "KnowledgeComparison",
]
