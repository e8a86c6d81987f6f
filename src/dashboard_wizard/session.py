"""End-to-end wizard run with restart on failure."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

from loguru import logger

from .command import dashboard_args_for, format_command, output_file_name, renderer_command
from .config import WizardConfig
from .models import SessionState
from .process import LineHandler, run_renderer
from .prompts import PromptSequencer, Terminal
from .settings import Settings, SettingsError, SettingsStore

Runner = Callable[..., int]


class WizardSession:
    """Drive load, prompts, command building and rendering until one run completes.

    Any exception escaping a run is reported and the wizard starts over with
    a freshly loaded settings record.
    """

    def __init__(
        self,
        store: SettingsStore,
        terminal: Terminal,
        config: WizardConfig | None = None,
        runner: Runner = run_renderer,
        cwd: Path | None = None,
    ) -> None:
        self.store = store
        self.terminal = terminal
        self.config = config or WizardConfig()
        self.runner = runner
        self.cwd = cwd
        self.state = SessionState.RUNNING
        self.restarts = 0
        self.last_error: Optional[Exception] = None
        self.settings: Optional[Settings] = None

    def run(self) -> int:
        """Run the wizard until the renderer finishes and return its exit code."""

        self.state = SessionState.RUNNING
        code = 0
        while self.state is not SessionState.DONE:
            if self.state is SessionState.RESTART:
                self.restarts += 1
                self.state = SessionState.RUNNING
            try:
                code = self.run_once()
            except EOFError:
                # stdin closed: nobody is left to answer the prompts
                raise
            except Exception as exc:
                self.last_error = exc
                logger.opt(exception=exc).debug("Restarting wizard after failure")
                self.terminal.say(str(exc) or exc.__class__.__name__)
                self.state = SessionState.RESTART
            else:
                self.state = SessionState.DONE
        return code

    def run_once(self) -> int:
        renderer = self.config.renderer
        self.settings = settings = self.store.load()
        PromptSequencer(self.terminal, settings, self.config.scan).run()

        args = dashboard_args_for(settings, renderer)
        command = renderer_command(args, renderer)
        self._print_summary(settings)
        self.terminal.say(f"Executing command: {format_command(command)}")

        code = self._render(command)
        try:
            self.store.save(settings)
        except SettingsError as exc:
            logger.warning("{}", exc)
            self.terminal.warn(str(exc))
        self.terminal.say("Done. Have a nice day!")
        return code

    def _render(self, command: Sequence[str]) -> int:
        on_stdout: LineHandler = self.terminal.say
        on_stderr: LineHandler = self.terminal.error
        return self.runner(command, on_stdout=on_stdout, on_stderr=on_stderr, cwd=self.cwd)

    def _print_summary(self, settings: Settings) -> None:
        video_file = settings.video_file or ""
        zone = settings.privacy_zone
        lines = [
            f"videoDir: {settings.video_dir}",
            f"videoFile: {settings.video_file}",
            f"layoutFile: {settings.layout_file or '-'}",
            f"gpx: {settings.gpx_file or '-'}",
            f"privacy: {zone.as_argument() if zone else '-'}",
            f"outputVideoFile: {output_file_name(video_file, self.config.renderer.output_suffix)}",
        ]
        for line in lines:
            self.terminal.say(line)


__all__ = ["WizardSession"]
