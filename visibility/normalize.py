"""
Normalize raw model replies into KnowledgeAssessment records.

LLM replies are not guaranteed to be valid JSON even when asked for it.
Two tiers:
1. Structured: fenced block (or the whole text) parsed as strict JSON.
2. Heuristic: keyword scan of the raw text when parsing fails.

normalize_response() never raises.
"""

import json
import logging
import math
import re
from typing import Any, Optional

from models import KnowledgeAssessment, KnowledgeLevel, ParseQuality
from .scoring import calculate_score, clamp, MAX_CONFIDENCE, MAX_MENTIONS


logger = logging.getLogger(__name__)

# ```json ... ``` or plain ``` ... ```; first block wins.
# A language tag only counts when a newline follows it, so ```true``` keeps its content.
FENCED_BLOCK = re.compile(r"```(?:[\w-]+[ \t]*\n)?(.*?)```", re.DOTALL)

# Any match counts as recognition in the fallback branch
MENTION_KEYWORDS = ("yes", "know about", "familiar with")

FALLBACK_CONFIDENCE = 30
FALLBACK_MENTIONED_SCORE = 25


def extract_candidate(text: str) -> str:
    """Contents of the first fenced code block, else the full text."""
    match = FENCED_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_json_object(candidate: str) -> Optional[dict]:
    """Strict JSON parse. Only an object counts; anything else is None."""
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def _as_int(value: Any, default: int = 0) -> int:
    # bool is an int subclass; "true" is not a count
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if not isinstance(value, float) or not math.isfinite(value):
        return default
    return int(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == value and value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return False


def _as_facts(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    facts = []
    for item in value:
        if item is None:
            continue
        fact = item if isinstance(item, str) else json.dumps(item, ensure_ascii=False)
        fact = fact.strip()
        if fact:
            facts.append(fact)
    return tuple(facts)


def from_structured(data: dict) -> KnowledgeAssessment:
    """Build an assessment from a parsed JSON object, applying defaults and clamps."""
    level = KnowledgeLevel.parse(data.get("knowledge_level")) or KnowledgeLevel.NONE
    mention_count = clamp(_as_int(data.get("mention_count")), 0, MAX_MENTIONS)
    confidence = clamp(_as_int(data.get("confidence")), 0, MAX_CONFIDENCE)

    return KnowledgeAssessment(
        mentioned=_as_bool(data.get("mentioned", False)),
        mention_count=mention_count,
        knowledge_level=level,
        facts_known=_as_facts(data.get("facts_known")),
        confidence=confidence,
        score=calculate_score(level, mention_count, confidence),
        detail_note=f"Structured JSON: {level.value} knowledge, {confidence}% confidence",
        parse_quality=ParseQuality.STRUCTURED_JSON,
    )


def from_heuristic(text: str) -> KnowledgeAssessment:
    """Keyword scan used when the reply is not a JSON object."""
    lowered = text.lower()
    mentioned = any(keyword in lowered for keyword in MENTION_KEYWORDS)
    level = KnowledgeLevel.LOW if mentioned else KnowledgeLevel.NONE

    return KnowledgeAssessment(
        mentioned=mentioned,
        mention_count=1 if mentioned else 0,
        knowledge_level=level,
        facts_known=(),
        confidence=FALLBACK_CONFIDENCE,
        score=FALLBACK_MENTIONED_SCORE if mentioned else 0,
        detail_note=(
            f"Heuristic fallback: {level.value} knowledge, "
            f"{FALLBACK_CONFIDENCE}% confidence"
        ),
        parse_quality=ParseQuality.HEURISTIC_FALLBACK,
    )


def normalize_response(text: Optional[str]) -> KnowledgeAssessment:
    """
    Turn one raw reply into a KnowledgeAssessment.

    Never raises: malformed replies degrade to the heuristic branch.
    """
    text = text or ""
    data = parse_json_object(extract_candidate(text))
    if data is not None:
        return from_structured(data)

    logger.debug("[normalize] No JSON object in reply, using keyword scan (%d chars)", len(text))
    return from_heuristic(text)
