"""
Base model classes.
"""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """
    Base for values produced by the engine.

    Created once per invocation, never mutated afterwards.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def to_dict(self) -> dict:
        """Export for API responses."""
        return self.model_dump(mode="json")
