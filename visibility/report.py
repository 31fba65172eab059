"""
Aggregation - per-provider summaries and the overall report.
"""

import logging
from typing import Sequence

from models import (
    AggregateReport,
    ModelResult,
    ProviderOutcome,
    ProviderSummary,
    QueryFailure,
    ScorePolicy,
)
from .scoring import round_half_away
from .selection import select_best_result


logger = logging.getLogger(__name__)


def summarize_provider(provider_id: str, outcomes: Sequence[ProviderOutcome]) -> ProviderSummary:
    """
    Reduce one provider's outcomes to a summary.

    Failures count as attempted but never influence best.
    """
    results = [o for o in outcomes if isinstance(o, ModelResult)]
    failures = tuple(o for o in outcomes if isinstance(o, QueryFailure))
    best = select_best_result(results)

    return ProviderSummary(
        provider_id=provider_id,
        best=best.assessment if best else None,
        best_model=best.model_id if best else None,
        models_attempted=len(outcomes),
        models_succeeded=len(results),
        failures=failures,
    )


def overall_score(summaries: Sequence[ProviderSummary],
                  policy: ScorePolicy = ScorePolicy.EXCLUDE_FAILED) -> int:
    """
    Mean provider score under the given policy, 0 when nothing counts.

    EXCLUDE_FAILED: mean over providers with a best result.
    FAILED_AS_ZERO: providers with no successes contribute 0.
    WEIGHTED_BY_SUCCESSES: weighted by models_succeeded.
    """
    if policy == ScorePolicy.FAILED_AS_ZERO:
        if not summaries:
            return 0
        return round_half_away(sum(s.score for s in summaries) / len(summaries))

    scored = [s for s in summaries if s.best is not None]
    if not scored:
        return 0

    if policy == ScorePolicy.WEIGHTED_BY_SUCCESSES:
        weight = sum(s.models_succeeded for s in scored)
        return round_half_away(sum(s.best.score * s.models_succeeded for s in scored) / weight)

    return round_half_away(sum(s.best.score for s in scored) / len(scored))


def build_report(grouped: dict[str, list[ProviderOutcome]],
                 policy: ScorePolicy = ScorePolicy.EXCLUDE_FAILED) -> AggregateReport:
    """Combine grouped outcomes into the final report."""
    summaries = tuple(summarize_provider(pid, outcomes) for pid, outcomes in grouped.items())

    report = AggregateReport(
        provider_summaries=summaries,
        providers_with_mention=sum(1 for s in summaries if s.mentioned),
        overall_score=overall_score(summaries, policy),
        total_models_queried=sum(s.models_attempted for s in summaries),
        total_models_succeeded=sum(s.models_succeeded for s in summaries),
        policy=policy,
    )

    if report.is_empty:
        logger.warning("[report] No provider returned a usable result")
    else:
        logger.info("[report] Overall %d/100, mentioned by %d of %d providers",
                    report.overall_score, report.providers_with_mention, len(summaries))
    return report
