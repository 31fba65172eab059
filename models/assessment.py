"""
Knowledge assessment - the normalized verdict from one model reply.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import FrozenModel


class KnowledgeLevel(str, Enum):
    """Self-reported knowledge tier."""
    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, value) -> Optional["KnowledgeLevel"]:
        """Case-insensitive lookup, None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for level in cls:
            if level.value.lower() == wanted:
                return level
        return None


class ParseQuality(str, Enum):
    """Which normalization branch produced the assessment."""
    STRUCTURED_JSON = "StructuredJSON"
    HEURISTIC_FALLBACK = "HeuristicFallback"


class KnowledgeAssessment(FrozenModel):
    """
    Normalized per-model result.

    Built by visibility.normalize from one raw reply.
    """
    mentioned: bool = False
    mention_count: int = Field(default=0, ge=0, le=10)
    knowledge_level: KnowledgeLevel = KnowledgeLevel.NONE
    facts_known: tuple[str, ...] = ()
    confidence: int = Field(default=0, ge=0, le=100)
    score: int = Field(default=0, ge=0, le=100)
    detail_note: str = ""
    parse_quality: ParseQuality = ParseQuality.STRUCTURED_JSON
