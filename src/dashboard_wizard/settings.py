"""Persisted wizard defaults stored as a flat JSON object."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import PrivacyZone

DEFAULT_SETTINGS_PATH = Path("iadt.json")


class SettingsError(Exception):
    """Raised when the settings file cannot be written."""


class Settings(BaseModel):
    """Last used selections of the wizard.

    Keys unknown to this version are kept as extras and written back as they
    were read.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, validate_assignment=True)

    video_dir: Optional[str] = Field(default=None, alias="videoDir")
    video_file: Optional[str] = Field(default=None, alias="videoFile")
    layout_file: Optional[str] = Field(default=None, alias="layoutFile")
    gpx_file: Optional[str] = Field(default=None, alias="gpxFile")
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    privacy_radius: Optional[str] = Field(default=None, alias="privacyRadius")

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_value(cls, value: Any) -> Any:
        # anything other than a number or non-empty text reads as unset
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and value:
            return value
        return None

    @property
    def privacy_zone(self) -> Optional[PrivacyZone]:
        return PrivacyZone.from_values(self.latitude, self.longitude, self.privacy_radius)

    def apply_privacy(self, zone: Optional[PrivacyZone]) -> None:
        """Store a privacy zone, or clear all three privacy fields."""

        self.latitude = zone.latitude if zone else None
        self.longitude = zone.longitude if zone else None
        self.privacy_radius = zone.radius if zone else None

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class SettingsStore:
    """Load and save :class:`Settings` at a single well-known path."""

    def __init__(self, path: Path = DEFAULT_SETTINGS_PATH) -> None:
        self.path = path

    def load(self) -> Settings:
        """Return the stored settings, falling back to defaults on any problem."""

        if not self.path.exists():
            settings = Settings()
            try:
                self._write(settings)
            except OSError as exc:
                logger.warning("Could not create settings file {}: {}", self.path, exc)
            else:
                logger.debug("Created default settings file {}", self.path)
            return settings

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Settings.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.debug("Ignoring unusable settings file {}: {}", self.path, exc)
            return Settings()

    def save(self, settings: Settings) -> None:
        try:
            self._write(settings)
        except OSError as exc:
            raise SettingsError(f"Could not save settings to {self.path}: {exc}") from exc
        logger.debug("Saved settings to {}", self.path)

    def forget(self) -> Settings:
        """Reset the known fields to null, keeping any unknown keys."""

        current = self.load()
        cleared = Settings.model_validate(dict(current.model_extra or {}))
        self.save(cleared)
        return cleared

    def _write(self, settings: Settings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings.to_json_dict(), indent=2) + "\n", encoding="utf-8")


__all__ = ["DEFAULT_SETTINGS_PATH", "Settings", "SettingsError", "SettingsStore"]
