"""Assemble the argument list for the external dashboard renderer."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import List, Optional, Sequence

from .config import RendererConfig
from .models import PrivacyZone
from .settings import Settings


class IncompleteSettingsError(Exception):
    """Raised when a command is requested before directory and video are known."""


def output_file_name(name: str, suffix: str = "_dashboard") -> str:
    """Insert ``suffix`` before the extension: ``GX020125.MP4`` -> ``GX020125_dashboard.MP4``."""

    stem, dot, extension = name.rpartition(".")
    if not dot:
        return name
    return f"{stem}{suffix}.{extension}"


def _in_dir(video_dir: str, name: str) -> str:
    return str(Path(video_dir) / name)


def build_dashboard_args(
    video_dir: str,
    video_file: str,
    gpx_file: Optional[str],
    layout_file: Optional[str],
    output_file: str,
    privacy: Optional[PrivacyZone] = None,
    *,
    renderer: RendererConfig | None = None,
) -> List[str]:
    """Return the renderer arguments, without the interpreter.

    Layout and GPX flags are left out entirely when no such file was chosen.
    """

    renderer = renderer or RendererConfig()
    args = [
        renderer.script,
        # privacy zone
        "--privacy" if privacy else "",
        privacy.as_argument() if privacy else "",
        # font
        "--font",
        renderer.font,
        # layout
        "--layout" if layout_file else "",
        renderer.layout_kind if layout_file else "",
        "--layout-xml" if layout_file else "",
        _in_dir(video_dir, layout_file) if layout_file else "",
        # telemetry
        "--gpx" if gpx_file else "",
        _in_dir(video_dir, gpx_file) if gpx_file else "",
        # input and output video
        _in_dir(video_dir, video_file),
        _in_dir(video_dir, output_file),
    ]
    return [arg for arg in args if arg]


def dashboard_args_for(settings: Settings, renderer: RendererConfig | None = None) -> List[str]:
    """Build the renderer arguments from a resolved settings record."""

    renderer = renderer or RendererConfig()
    if not settings.video_dir or not settings.video_file:
        raise IncompleteSettingsError("A video directory and a video file are required")
    return build_dashboard_args(
        settings.video_dir,
        settings.video_file,
        settings.gpx_file,
        settings.layout_file,
        output_file_name(settings.video_file, renderer.output_suffix),
        settings.privacy_zone,
        renderer=renderer,
    )


def renderer_command(args: Sequence[str], renderer: RendererConfig | None = None) -> List[str]:
    renderer = renderer or RendererConfig()
    return [renderer.interpreter, *args]


def format_command(command: Sequence[str]) -> str:
    return shlex.join(command)


__all__ = [
    "IncompleteSettingsError",
    "build_dashboard_args",
    "dashboard_args_for",
    "format_command",
    "output_file_name",
    "renderer_command",
]
