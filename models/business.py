"""
Business descriptor - what we ask the models about.
"""

from typing import Optional, Union
from urllib.parse import urlparse

from pydantic import Field, field_validator

from .base import FrozenModel


class Location(FrozenModel):
    """Structured location."""
    city: str = ""
    state: str = ""

    def label(self) -> str:
        return ", ".join(part for part in (self.city, self.state) if part)


class Business(FrozenModel):
    """
    A local business to assess.

    location may be free text ("Austin, TX") or a {city, state} object.
    """
    name: str = Field(min_length=1)
    type: Optional[str] = None
    location: Optional[Union[Location, str]] = None
    website: Optional[str] = None

    @field_validator("type", "website", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def location_label(self) -> Optional[str]:
        """Location rendered for prompts, None if unknown."""
        if isinstance(self.location, Location):
            return self.location.label() or None
        return self.location or None

    @property
    def domain(self) -> str:
        """Website hostname, 'N/A' if there is no usable website."""
        if not self.website:
            return "N/A"
        url = self.website if "://" in self.website else f"https://{self.website}"
        return urlparse(url).hostname or "N/A"
