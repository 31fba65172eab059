"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no network, fake completion capabilities)
- Deterministic (same result every time)
"""

import pytest

from models import (
    KnowledgeAssessment,
    KnowledgeLevel,
    ModelResult,
    ParseQuality,
    QueryFailure,
    QueryTarget,
    FailureReason,
)


@pytest.fixture
def make_assessment():
    """Factory for assessments with explicit tie-break fields."""
    def make(mention_count=0, confidence=0, facts=(), score=0, mentioned=None,
             level=KnowledgeLevel.LOW):
        return KnowledgeAssessment(
            mentioned=mention_count > 0 if mentioned is None else mentioned,
            mention_count=mention_count,
            knowledge_level=level,
            facts_known=tuple(facts),
            confidence=confidence,
            score=score,
            detail_note="test",
            parse_quality=ParseQuality.STRUCTURED_JSON,
        )
    return make


@pytest.fixture
def make_result(make_assessment):
    """Factory for a successful outcome."""
    def make(provider_id, model_id, **kwargs):
        return ModelResult(
            target=QueryTarget(provider_id=provider_id, model_id=model_id),
            assessment=make_assessment(**kwargs),
        )
    return make


@pytest.fixture
def make_failure():
    """Factory for a failed outcome."""
    def make(provider_id, model_id, reason=FailureReason.PROVIDER_ERROR, message="boom"):
        return QueryFailure(
            target=QueryTarget(provider_id=provider_id, model_id=model_id),
            reason=reason,
            message=message,
        )
    return make
