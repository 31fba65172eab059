"""
Visibility score from a normalized assessment.

score = clamp(round(base + mention_bonus + confidence_adjustment), 0, 100)

Rounding is half-away-from-zero on the final sum only.
"""

from decimal import Decimal, ROUND_HALF_UP

from models import KnowledgeLevel


BASE_SCORES = {
    KnowledgeLevel.HIGH: 85,
    KnowledgeLevel.MEDIUM: 65,
    KnowledgeLevel.LOW: 35,
    KnowledgeLevel.NONE: 0,
}

MENTION_BONUS_CAP = 15
MAX_MENTIONS = 10
MAX_CONFIDENCE = 100


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def round_half_away(value: float) -> int:
    """Round to nearest int, .5 away from zero (Python's round() is banker's)."""
    # ROUND_HALF_UP in decimal rounds away from zero for negatives too
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def mention_bonus(mention_count: int) -> int:
    return min(mention_count * 2, MENTION_BONUS_CAP)


def confidence_adjustment(confidence: int) -> float:
    """Roughly +/-5 around a neutral confidence of 50."""
    return (confidence - 50) / 10


def calculate_score(knowledge_level: KnowledgeLevel, mention_count: int, confidence: int) -> int:
    """
    Compute the 0-100 visibility score.

    Inputs are expected already clamped; they are clamped again so the
    function is total.
    """
    mention_count = clamp(mention_count, 0, MAX_MENTIONS)
    confidence = clamp(confidence, 0, MAX_CONFIDENCE)

    raw = BASE_SCORES[knowledge_level] + mention_bonus(mention_count) + confidence_adjustment(confidence)
    return clamp(round_half_away(raw), 0, 100)
