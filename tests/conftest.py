from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest


class ScriptExhausted(BaseException):
    """Raised when a test runs out of scripted answers.

    Derives from BaseException so the session's restart loop lets it through.
    """


class ScriptedTerminal:
    """Terminal that replays canned answers and records everything shown."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers: List[str] = list(answers)
        self.questions: List[str] = []
        self.output: List[str] = []
        self.warnings: List[str] = []
        self.errors: List[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise ScriptExhausted(question)
        return self.answers.pop(0)

    def say(self, text: str) -> None:
        self.output.append(text)

    def warn(self, text: str) -> None:
        self.warnings.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)


@pytest.fixture()
def terminal_factory():
    def _factory(*answers: str) -> ScriptedTerminal:
        return ScriptedTerminal(answers)

    return _factory


@pytest.fixture()
def video_dir_factory(tmp_path: Path):
    def _factory(*filenames: str, name: str = "videos") -> Path:
        directory = tmp_path / name
        directory.mkdir(exist_ok=True)
        for filename in filenames:
            (directory / filename).write_text("")
        return directory

    return _factory
