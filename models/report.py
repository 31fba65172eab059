"""
Report models - per-provider rollups and the cross-provider report.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from .assessment import KnowledgeAssessment
from .base import FrozenModel
from .outcome import QueryFailure


class ScorePolicy(str, Enum):
    """
    How providers without a successful model enter overall_score.

    EXCLUDE_FAILED is the default: such providers are left out of the mean.
    """
    EXCLUDE_FAILED = "exclude_failed"
    FAILED_AS_ZERO = "failed_as_zero"
    WEIGHTED_BY_SUCCESSES = "weighted_by_successes"


class ProviderSummary(FrozenModel):
    """
    One provider's rollup.

    best is set iff models_succeeded > 0. A provider whose every model
    failed still appears here, so "not mentioned" and "unreachable" differ.
    """
    provider_id: str
    best: Optional[KnowledgeAssessment] = None
    best_model: Optional[str] = None
    models_attempted: int = Field(default=0, ge=0)
    models_succeeded: int = Field(default=0, ge=0)
    failures: tuple[QueryFailure, ...] = ()

    @model_validator(mode="after")
    def _check_best(self):
        if (self.best is not None) != (self.models_succeeded > 0):
            raise ValueError("best must be set exactly when models_succeeded > 0")
        if self.models_succeeded > self.models_attempted:
            raise ValueError("models_succeeded cannot exceed models_attempted")
        return self

    @property
    def score(self) -> int:
        """Summary view score: 0 for a provider with no successes."""
        return self.best.score if self.best else 0

    @property
    def mentioned(self) -> bool:
        return bool(self.best and self.best.mentioned)

    @property
    def status(self) -> str:
        return "success" if self.best else "error"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(score=self.score, mentioned=self.mentioned, status=self.status)
        return data


class AggregateReport(FrozenModel):
    """Final cross-provider output of one engine invocation."""
    provider_summaries: tuple[ProviderSummary, ...] = ()
    providers_with_mention: int = 0
    overall_score: int = Field(default=0, ge=0, le=100)
    total_models_queried: int = 0
    total_models_succeeded: int = 0
    policy: ScorePolicy = ScorePolicy.EXCLUDE_FAILED

    @property
    def is_empty(self) -> bool:
        """True when no provider produced a result (valid "no data" outcome)."""
        return all(s.best is None for s in self.provider_summaries)

    def summary_for(self, provider_id: str) -> Optional[ProviderSummary]:
        for summary in self.provider_summaries:
            if summary.provider_id == provider_id:
                return summary
        return None

    def provider_scores(self) -> dict[str, int]:
        return {s.provider_id: s.score for s in self.provider_summaries}

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["provider_summaries"] = [s.to_dict() for s in self.provider_summaries]
        return data


class ComparisonRow(FrozenModel):
    """One business's per-provider scores."""
    name: str
    domain: str = "N/A"
    scores: dict[str, int] = Field(default_factory=dict)


class KnowledgeComparison(FrozenModel):
    """Main business against its competitors, provider by provider."""
    main_business: ComparisonRow
    competitors: tuple[ComparisonRow, ...] = ()
