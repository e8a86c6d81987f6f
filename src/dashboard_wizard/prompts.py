"""Interactive steps that collect the wizard's selections."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Optional, Protocol

from loguru import logger
from rich.console import Console
from rich.markup import escape

from .config import ScanConfig
from .models import PrivacyZone
from .settings import Settings

_ORDINAL = re.compile(r"[0-9]+")


class NoVideoFilesError(Exception):
    """Raised when the chosen directory holds no video files."""


class Terminal(Protocol):
    """Line based question and answer exchange with the user."""

    def ask(self, question: str) -> str:
        ...

    def say(self, text: str) -> None:
        ...

    def warn(self, text: str) -> None:
        ...

    def error(self, text: str) -> None:
        ...


class ConsoleTerminal:
    """:class:`Terminal` backed by rich consoles for stdout and stderr."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def ask(self, question: str) -> str:
        self.say(question)
        return self.console.input()

    def say(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def warn(self, text: str) -> None:
        self.console.print(f"[yellow]{escape(text)}[/yellow]", highlight=False, soft_wrap=True)

    def error(self, text: str) -> None:
        self.err_console.print(text, markup=False, highlight=False, soft_wrap=True)


def list_matching(directory: Path, suffix: str) -> List[str]:
    """Return the sorted names of files in ``directory`` ending in ``suffix``, ignoring case."""

    suffix = suffix.lower()
    names = [
        entry.name
        for entry in directory.iterdir()
        if len(entry.name) > len(suffix) and entry.name.lower().endswith(suffix) and entry.is_file()
    ]
    return sorted(names)


def parse_ordinal(answer: str, count: int) -> Optional[int]:
    """Return ``answer`` as a 1-based ordinal in ``[1, count]``, else ``None``."""

    if not _ORDINAL.fullmatch(answer):
        return None
    number = int(answer)
    if 1 <= number <= count:
        return number
    return None


def _accessible_dir(answer: str) -> Optional[Path]:
    try:
        path = Path(answer).expanduser()
        if path.is_dir() and os.access(path, os.R_OK | os.X_OK):
            return path
    except (OSError, RuntimeError, ValueError):
        pass
    return None


class PromptSequencer:
    """Ask for directory, video, layout, GPX file and privacy zone, in that order.

    Each step writes its result into ``settings``; values already present
    there are offered as defaults. Invalid answers repeat the step.
    """

    def __init__(self, terminal: Terminal, settings: Settings, scan: ScanConfig | None = None) -> None:
        self.terminal = terminal
        self.settings = settings
        self.scan = scan or ScanConfig()

    def run(self) -> Settings:
        self.settings.video_dir = self.prompt_video_dir()
        self.terminal.say(f"videoDir set to: {self.settings.video_dir}")
        self.settings.video_file = self.prompt_video_file()
        self.settings.layout_file = self.prompt_layout()
        self.settings.gpx_file = self.prompt_gpx()
        self.settings.apply_privacy(self.prompt_privacy())
        return self.settings

    def prompt_video_dir(self) -> str:
        default = self.settings.video_dir
        while True:
            answer = self._ask("Which directory contains the video?", default) or default
            path = _accessible_dir(answer) if answer else None
            if path is not None:
                return str(path)
            logger.debug("Rejected video directory {!r}", answer)
            self.terminal.warn("Invalid directory. Try again or press control + c.")

    def prompt_video_file(self) -> str:
        video = self._choose(
            self.scan.video_suffix,
            "Which video file? Type the number in front of it.",
            self.settings.video_file,
        )
        if video is None:
            raise NoVideoFilesError("The folder did not contain video files")
        return video

    def prompt_layout(self) -> Optional[str]:
        return self._choose(
            self.scan.layout_suffix,
            "Which layout? Type the number in front of it.",
            self.settings.layout_file,
        )

    def prompt_gpx(self) -> Optional[str]:
        return self._choose(
            self.scan.gpx_suffix,
            "Which GPX? Type the number in front of it.",
            self.settings.gpx_file,
        )

    def prompt_privacy(self) -> Optional[PrivacyZone]:
        stored = self.settings
        while True:
            default = "y" if stored.privacy_zone else None
            answer = self._ask("Do you want to set a privacy zone? (y/n)", default) or default
            if answer != "y":
                return None

            latitude = self._ask("Latitude of the privacy zone?", stored.latitude) or stored.latitude
            longitude = self._ask("Longitude of the privacy zone?", stored.longitude) or stored.longitude
            radius = (
                self._ask("Radius of the privacy zone?", stored.privacy_radius) or stored.privacy_radius
            )
            zone = PrivacyZone.from_values(latitude, longitude, radius)
            if zone is not None:
                return zone
            self.terminal.warn("A privacy zone needs a latitude, a longitude and a radius.")

    def _ask(self, question: str, default: Optional[str] = None) -> str:
        if default:
            question = f"{question} [{default}]"
        return self.terminal.ask(question).strip()

    def _directory(self) -> Path:
        if not self.settings.video_dir:
            raise ValueError("No video directory has been chosen yet")
        return Path(self.settings.video_dir)

    def _choose(self, suffix: str, question: str, default: Optional[str]) -> Optional[str]:
        while True:
            candidates = list_matching(self._directory(), suffix)
            logger.debug("Found {} '{}' files in {}", len(candidates), suffix, self.settings.video_dir)
            if not candidates:
                return None

            for index, name in enumerate(candidates, start=1):
                self.terminal.say(f"{index}) {name}")
            usable = default if default in candidates else None
            answer = self._ask(question, usable)
            if not answer and usable:
                return usable
            number = parse_ordinal(answer, len(candidates))
            if number is not None:
                return candidates[number - 1]
            logger.debug("Rejected answer {!r} for {} choices", answer, len(candidates))


__all__ = [
    "ConsoleTerminal",
    "NoVideoFilesError",
    "PromptSequencer",
    "Terminal",
    "list_matching",
    "parse_ordinal",
]
