"""
Outcome of one (provider, model) query attempt.
"""

from enum import Enum
from typing import Literal, Union

from .assessment import KnowledgeAssessment
from .base import FrozenModel
from .targets import QueryTarget


class FailureReason(str, Enum):
    """Why a query produced no assessment."""
    MISSING_CREDENTIAL = "MissingCredential"
    PROVIDER_ERROR = "ProviderError"


class ModelResult(FrozenModel):
    """A successful query: the assessment tagged with its target."""
    target: QueryTarget
    assessment: KnowledgeAssessment

    succeeded: Literal[True] = True

    @property
    def provider_id(self) -> str:
        return self.target.provider_id

    @property
    def model_id(self) -> str:
        return self.target.model_id


class QueryFailure(FrozenModel):
    """A failed query. Counts toward models_attempted only."""
    target: QueryTarget
    reason: FailureReason
    message: str = ""

    succeeded: Literal[False] = False

    @property
    def provider_id(self) -> str:
        return self.target.provider_id

    @property
    def model_id(self) -> str:
        return self.target.model_id


ProviderOutcome = Union[ModelResult, QueryFailure]
