from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

import typer
from rich import box
from rich.panel import Panel
from rich.table import Table
from typer.main import get_command

from . import __version__
from .commands.daily import today
from .core.config import AppConfig, ConfigLoadResult, load_config
from .core.console import console, setup_logging
from .core.registry import discover_commands

app = typer.Typer(help="notes: daily and general notes kept as plain text files.")
logger = logging.getLogger(__name__)


@dataclass
class AppState:
    config: AppConfig
    config_meta: ConfigLoadResult
    logger: logging.Logger


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a notes config file (TOML or JSON)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Open today's daily note when no command is given."""
    # load_config never raises; a broken file falls back to defaults
    loaded_config, meta = load_config(config_path=config)
    logger = setup_logging(level=loaded_config.user.log_level, verbose=verbose)

    ctx.obj = AppState(config=loaded_config, config_meta=meta, logger=logger)

    if meta.error:
        # Display "Safe Mode" Warning
        console.print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {meta.path}:\n{meta.error}\n\n"
                f"[yellow]Using default settings. Run `notes init` to rewrite it.[/yellow]",
                border_style="red",
            )
        )
    else:
        logger.debug(
            "Loaded configuration from %s (env overrides: %s)",
            meta.path,
            sorted(meta.env_overrides),
        )

    if ctx.invoked_subcommand is None:
        today(ctx)


@app.command("com")
def command_catalog() -> None:
    """Display the available notes commands and their descriptions."""
    click_app = get_command(app)
    table = Table(title="notes commands", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Summary", style="white")

    # TyperGroup is not always a click.Group subclass
    commands = getattr(click_app, "commands", {})
    for name, command in sorted(commands.items()):
        if name == "help":
            continue
        summary = (command.help or command.short_help or "").strip()
        table.add_row(name, summary.splitlines()[0] if summary else "-")

    console.print(table)


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Show the active configuration and where it came from."""
    state: AppState = ctx.obj
    config = state.config
    meta = state.config_meta

    table = Table(title="Config", box=box.SIMPLE, expand=True)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    for group, values in config.model_dump().items():
        for key, value in values.items():
            table.add_row(f"{group}.{key}", str(value))

    console.print(table)

    meta_lines = [
        f"Path: {meta.path}",
        "File loaded: yes" if meta.file_loaded else "File loaded: no (using defaults + env)",
    ]

    if meta.env_overrides:
        meta_lines.append("Env overrides: " + ", ".join(sorted(meta.env_overrides)))

    console.print(Panel("\n".join(meta_lines), title="Config source", box=box.SIMPLE))


@app.command("version")
def show_version() -> None:
    """Print the daynotes version."""
    console.print(__version__)


def _register_commands() -> None:
    commands_path = Path(__file__).resolve().parent / "commands"
    registered = {command.name for command in app.registered_commands}
    for spec in discover_commands(commands_path):
        if spec.name in registered:
            continue
        app.command(spec.name)(spec.handler)
        registered.add(spec.name)


def _register_commands_with_timing() -> None:
    start = perf_counter()
    _register_commands()
    elapsed = perf_counter() - start
    logger.debug("Command registry initialized in %.3f seconds", elapsed)


_register_commands_with_timing()


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
