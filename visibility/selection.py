"""
Best-result selection per provider.

Tie-break order, each descending:
1. mention_count  - corroborated recall
2. confidence     - self-reported certainty
3. len(facts_known)
4. score          - derived from the above, so only breaks what is left

Sort is stable: full ties keep configuration order.
"""

from typing import Optional, Sequence

from models import KnowledgeAssessment, ModelResult


def tie_break_key(assessment: KnowledgeAssessment) -> tuple[int, int, int, int]:
    return (
        assessment.mention_count,
        assessment.confidence,
        len(assessment.facts_known),
        assessment.score,
    )


def select_best(assessments: Sequence[KnowledgeAssessment]) -> Optional[KnowledgeAssessment]:
    """Representative assessment, or None for an empty list."""
    if not assessments:
        return None
    return sorted(assessments, key=tie_break_key, reverse=True)[0]


def select_best_result(results: Sequence[ModelResult]) -> Optional[ModelResult]:
    """Same ordering, keeping the model id alongside the assessment."""
    if not results:
        return None
    return sorted(results, key=lambda r: tie_break_key(r.assessment), reverse=True)[0]
