"""Shared models for the wizard session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionState(str, Enum):
    """States of the wizard session loop."""

    RUNNING = "running"
    DONE = "done"
    RESTART = "restart"


@dataclass(slots=True, frozen=True)
class PrivacyZone:
    """Circle the renderer must leave out of the dashboard."""

    latitude: str
    longitude: str
    radius: str

    @classmethod
    def from_values(
        cls, latitude: Optional[str], longitude: Optional[str], radius: Optional[str]
    ) -> Optional["PrivacyZone"]:
        """Return a zone only when all three values are present."""

        if latitude and longitude and radius:
            return cls(latitude, longitude, radius)
        return None

    def as_argument(self) -> str:
        return f"{self.latitude},{self.longitude},{self.radius}"


__all__ = ["SessionState", "PrivacyZone"]
