"""
Query targets - which (provider, model) pairs get asked.
"""

from typing import Mapping, Sequence

from pydantic import Field

from .base import FrozenModel


class QueryTarget(FrozenModel):
    """One (provider, model) pair. Immutable."""
    provider_id: str
    model_id: str

    @property
    def key(self) -> str:
        return f"{self.provider_id}/{self.model_id}"


class ProviderTable(FrozenModel):
    """
    Provider -> ordered model ids.

    Passed into the engine explicitly so any configuration can be used,
    including a single fake provider in tests. Order follows configuration
    insertion order and carries no meaning beyond that.
    """
    providers: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "ProviderTable":
        return cls(providers={pid: tuple(models) for pid, models in mapping.items()})

    @property
    def provider_ids(self) -> list[str]:
        return list(self.providers)

    def models_for(self, provider_id: str) -> tuple[str, ...]:
        return self.providers.get(provider_id, ())

    @property
    def model_count(self) -> int:
        """Total (provider, model) pairs."""
        return sum(len(models) for models in self.providers.values())
