from __future__ import annotations

import os
from pathlib import Path

import pytest

from dashboard_wizard.config import ScanConfig
from dashboard_wizard.models import PrivacyZone
from dashboard_wizard.prompts import (
    NoVideoFilesError,
    PromptSequencer,
    list_matching,
    parse_ordinal,
)
from dashboard_wizard.settings import Settings


def _sequencer(terminal, directory: Path | None = None, **values) -> PromptSequencer:
    settings = Settings(video_dir=str(directory) if directory else None, **values)
    return PromptSequencer(terminal, settings)


def test_parse_ordinal_bounds() -> None:
    assert parse_ordinal("1", 3) == 1
    assert parse_ordinal("3", 3) == 3
    assert parse_ordinal("0", 3) is None
    assert parse_ordinal("4", 3) is None
    assert parse_ordinal("2abc", 3) is None
    assert parse_ordinal("-1", 3) is None
    assert parse_ordinal("", 3) is None


def test_list_matching_ignores_case_and_directories(video_dir_factory) -> None:
    directory = video_dir_factory("b.MP4", "a.mp4", "notes.txt", ".mp4")
    (directory / "folder.mp4").mkdir()
    assert list_matching(directory, ".mp4") == ["a.mp4", "b.MP4"]


def test_video_dir_retries_until_valid(terminal_factory, video_dir_factory, tmp_path: Path) -> None:
    directory = video_dir_factory()
    terminal = terminal_factory(str(tmp_path / "missing"), "", f"  {directory}  ")
    assert _sequencer(terminal).prompt_video_dir() == str(directory)
    assert len(terminal.warnings) == 2
    assert all("Invalid directory" in warning for warning in terminal.warnings)


def test_video_dir_accepts_default(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory()
    terminal = terminal_factory("")
    assert _sequencer(terminal, directory).prompt_video_dir() == str(directory)
    assert terminal.questions[0].endswith(f"[{directory}]")


def test_video_file_without_videos_fails(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("layout.xml", "track.gpx")
    terminal = terminal_factory()
    with pytest.raises(NoVideoFilesError):
        _sequencer(terminal, directory).prompt_video_file()
    assert terminal.questions == []


def test_video_file_repeats_on_invalid_ordinal(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("b.MP4", "a.mp4")
    terminal = terminal_factory("0", "abc", "3", "2")
    assert _sequencer(terminal, directory).prompt_video_file() == "b.MP4"
    assert len(terminal.questions) == 4
    assert terminal.output[:2] == ["1) a.mp4", "2) b.MP4"]


def test_video_file_default_must_still_exist(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("a.mp4", "b.mp4")

    terminal = terminal_factory("")
    assert _sequencer(terminal, directory, video_file="b.mp4").prompt_video_file() == "b.mp4"
    assert terminal.questions[0].endswith("[b.mp4]")

    terminal = terminal_factory("", "1")
    assert _sequencer(terminal, directory, video_file="gone.mp4").prompt_video_file() == "a.mp4"
    assert "gone.mp4" not in terminal.questions[0]
    assert len(terminal.questions) == 2


def test_layout_and_gpx_resolve_to_none_without_files(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("A.mp4")
    terminal = terminal_factory()
    sequencer = _sequencer(terminal, directory, layout_file="old.xml", gpx_file="old.gpx")
    assert sequencer.prompt_layout() is None
    assert sequencer.prompt_gpx() is None
    assert terminal.questions == []


def test_gpx_step_repeats_itself(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("layout.xml", "track.gpx")
    terminal = terminal_factory("9", "1")
    assert _sequencer(terminal, directory).prompt_gpx() == "track.gpx"
    assert all(question.startswith("Which GPX?") for question in terminal.questions)


def test_privacy_declined(terminal_factory) -> None:
    for answer in ("n", "", "yes", "Y"):
        assert _sequencer(terminal_factory(answer)).prompt_privacy() is None


def test_privacy_incomplete_restarts_whole_step(terminal_factory) -> None:
    terminal = terminal_factory("y", "52.1", "5.2", "", "y", "52.1", "5.2", "0.5")
    zone = _sequencer(terminal).prompt_privacy()
    assert zone == PrivacyZone("52.1", "5.2", "0.5")
    assert len(terminal.questions) == 8
    assert terminal.questions[4].startswith("Do you want to set a privacy zone?")
    assert len(terminal.warnings) == 1


def test_privacy_uses_stored_defaults(terminal_factory) -> None:
    terminal = terminal_factory("", "", "6.0", "")
    sequencer = _sequencer(terminal, latitude="52.1", longitude="5.2", privacy_radius="0.5")
    assert sequencer.prompt_privacy() == PrivacyZone("52.1", "6.0", "0.5")
    assert terminal.questions[0].endswith("[y]")
    assert terminal.questions[1].endswith("[52.1]")


def test_privacy_partial_defaults_do_not_offer_yes(terminal_factory) -> None:
    terminal = terminal_factory("")
    assert _sequencer(terminal, latitude="52.1").prompt_privacy() is None
    assert not terminal.questions[0].endswith("[y]")


def test_run_fills_settings(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("A.mp4", "layout.xml", "track.gpx")
    terminal = terminal_factory(str(directory), "1", "1", "1", "y", "1", "2", "3")
    settings = PromptSequencer(terminal, Settings(), ScanConfig()).run()
    assert settings.video_dir == str(directory)
    assert settings.video_file == "A.mp4"
    assert settings.layout_file == "layout.xml"
    assert settings.gpx_file == "track.gpx"
    assert settings.privacy_zone == PrivacyZone("1", "2", "3")
    assert f"videoDir set to: {directory}" in terminal.output


def test_run_clears_privacy_when_declined(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("A.mp4")
    settings = Settings(latitude="1", longitude="2", privacy_radius="3")
    terminal = terminal_factory(str(directory), "1", "n")
    PromptSequencer(terminal, settings).run()
    assert settings.privacy_zone is None
    assert settings.latitude is None


def test_video_dir_rejects_regular_file(terminal_factory, video_dir_factory) -> None:
    directory = video_dir_factory("A.mp4")
    terminal = terminal_factory(str(directory / "A.mp4"), str(directory))
    assert _sequencer(terminal).prompt_video_dir() == str(directory)
    assert terminal.warnings == ["Invalid directory. Try again or press control + c."]
    assert len(terminal.questions) == 2


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="needs a POSIX user that file permissions apply to",
)
def test_video_dir_rejects_unreadable_directory(terminal_factory, video_dir_factory) -> None:
    locked = video_dir_factory(name="locked")
    directory = video_dir_factory()
    locked.chmod(0)
    try:
        terminal = terminal_factory(str(locked), str(directory))
        assert _sequencer(terminal).prompt_video_dir() == str(directory)
    finally:
        locked.chmod(0o755)
    assert len(terminal.warnings) == 1
