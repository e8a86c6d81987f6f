"""Typer-based CLI for the dashboard wizard."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from .config import ConfigError, RendererConfig, ScanConfig, WizardConfig, load_config, save_config
from .prompts import ConsoleTerminal
from .session import WizardSession
from .settings import SettingsError, SettingsStore

app = typer.Typer(help="Burn a telemetry dashboard onto a GoPro video, one question at a time.")
console = Console()
err_console = Console(stderr=True)


def _console_sink(message) -> None:
    err_console.print(str(message).rstrip("\n"), markup=False, highlight=False)


def _configure_logging(level: str, log_file: Path | None) -> None:
    logger.remove()
    logger.add(_console_sink, level=level)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level)


def _resolve_config(config: Path | None, settings: Path | None) -> WizardConfig:
    try:
        wizard_config = load_config(config) if config else WizardConfig()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=4)
    if settings:
        wizard_config.settings_path = settings
    return wizard_config


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, "--config", help="Path to configuration YAML"),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings file holding the last answers"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write the log to this file"),
) -> None:
    """Ask for the inputs, render the dashboard and exit with the renderer's code."""

    _configure_logging(log_level.upper(), log_file)
    wizard_config = _resolve_config(config, settings)
    session = WizardSession(
        SettingsStore(wizard_config.settings_path),
        ConsoleTerminal(console, err_console),
        wizard_config,
    )
    try:
        code = session.run()
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Aborted.[/yellow]")
        raise typer.Exit(code=130)
    raise typer.Exit(code=code)


@app.command("settings")
def show_settings(
    config: Optional[Path] = typer.Option(None, "--config"),
    settings: Optional[Path] = typer.Option(None, "--settings"),
) -> None:
    """Show the defaults remembered from the last run."""

    wizard_config = _resolve_config(config, settings)
    stored = SettingsStore(wizard_config.settings_path).load()

    table = Table(title=f"Stored settings ({wizard_config.settings_path})")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in stored.to_json_dict().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


@app.command()
def forget(
    config: Optional[Path] = typer.Option(None, "--config"),
    settings: Optional[Path] = typer.Option(None, "--settings"),
) -> None:
    """Clear the remembered defaults."""

    wizard_config = _resolve_config(config, settings)
    try:
        SettingsStore(wizard_config.settings_path).forget()
    except SettingsError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Cleared stored settings in {wizard_config.settings_path}[/green]")


@app.command("init-config")
def init_config(path: Path = typer.Argument(..., writable=True, resolve_path=True)) -> None:
    """Write an example configuration file to PATH."""

    config = WizardConfig(
        settings_path=Path("iadt.json"),
        renderer=RendererConfig(
            interpreter="python3",
            script="venv/bin/gopro-dashboard.py",
            font="Verdana.ttf",
        ),
        scan=ScanConfig(),
    )
    save_config(config, path)
    console.print(f"[green]Wrote configuration to {path}[/green]")


if __name__ == "__main__":
    app()
