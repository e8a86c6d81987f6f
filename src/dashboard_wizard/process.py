"""Run the external renderer and stream its output."""

from __future__ import annotations

import subprocess
import threading
from pathlib import Path
from typing import Callable, IO, Sequence

from loguru import logger

from .command import format_command

LineHandler = Callable[[str], None]


class RendererError(Exception):
    """Raised when the renderer process cannot be started."""


def _pump(stream: IO[str], handler: LineHandler) -> None:
    with stream:
        for line in stream:
            handler(line.rstrip("\r\n"))


def run_renderer(
    command: Sequence[str],
    *,
    on_stdout: LineHandler,
    on_stderr: LineHandler,
    cwd: Path | None = None,
) -> int:
    """Run ``command`` to completion and return its exit code.

    Output lines are handed to the callbacks as soon as they are read. Stderr
    is drained on a helper thread so a chatty renderer cannot stall on a full
    pipe. If the stdout callback raises, the renderer is killed and reaped
    before the error propagates.
    """

    logger.debug("Spawning renderer: {}", format_command(command))
    try:
        process = subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            bufsize=1,
            cwd=cwd,
        )
    except OSError as exc:
        raise RendererError(f"Unable to start renderer: {exc}") from exc

    stderr_thread = threading.Thread(
        target=_pump, args=(process.stderr, on_stderr), name="renderer-stderr", daemon=True
    )
    stderr_thread.start()
    try:
        _pump(process.stdout, on_stdout)
    except BaseException:
        logger.warning("Stopping renderer after an output error")
        process.kill()
        raise
    finally:
        code = process.wait()
        stderr_thread.join()
    logger.debug("Renderer exited with code {}", code)
    return code


__all__ = ["RendererError", "run_renderer"]
