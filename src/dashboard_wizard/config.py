"""Configuration loading and validation for the dashboard wizard."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .settings import DEFAULT_SETTINGS_PATH


class RendererConfig(BaseModel):
    """How the external dashboard renderer is invoked."""

    interpreter: str = "python3"
    script: str = "venv/bin/gopro-dashboard.py"
    font: str = "Verdana.ttf"
    layout_kind: str = "xml"
    output_suffix: str = "_dashboard"

    @field_validator("interpreter", "script", "output_suffix")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class ScanConfig(BaseModel):
    """File suffixes offered by the selection steps."""

    video_suffix: str = ".mp4"
    layout_suffix: str = ".xml"
    gpx_suffix: str = ".gpx"

    @field_validator("video_suffix", "layout_suffix", "gpx_suffix")
    @classmethod
    def _normalize_suffix(cls, value: str) -> str:
        value = value.strip().lower().lstrip(".")
        if not value:
            raise ValueError("File suffixes cannot be empty")
        return f".{value}"


class WizardConfig(BaseModel):
    """Top-level configuration."""

    settings_path: Path = DEFAULT_SETTINGS_PATH
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)


class ConfigError(Exception):
    """Raised when a configuration file is invalid."""


def load_config(path: Path) -> WizardConfig:
    """Load configuration from YAML file."""

    try:
        data = yaml.safe_load(path.read_text())
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML: {exc}") from exc

    try:
        return WizardConfig.model_validate(data or {})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def save_config(config: WizardConfig, path: Path) -> None:
    """Persist configuration to disk as YAML."""

    rendered = config.model_dump(mode="json")
    path.write_text(yaml.safe_dump(rendered, sort_keys=False))


__all__ = [
    "ConfigError",
    "RendererConfig",
    "ScanConfig",
    "WizardConfig",
    "load_config",
    "save_config",
]
