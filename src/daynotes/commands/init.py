"""Configuration setup.

Provides CLI commands for:
    - Writing an initial notes configuration file interactively
"""

from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent

import typer
from rich.prompt import Prompt

from daynotes.core.config import AppConfig
from daynotes.core.console import console


def _toml_list(items: list[str]) -> str:
    return "[" + ", ".join(json.dumps(item) for item in items) + "]"


def _write_config(path: Path, config: AppConfig) -> None:
    daily = config.daily
    content = dedent(
        f"""
        # daynotes configuration (TOML)
        [daily]
        notes_dir = {json.dumps(str(daily.notes_dir))}
        template = {json.dumps(str(daily.template))}
        carryover_sections = {_toml_list(daily.carryover_sections)}
        noncarryover_sections = {_toml_list(daily.noncarryover_sections)}
        done_marker = {json.dumps(daily.done_marker)}

        [general]
        notes_dir = {json.dumps(str(config.general.notes_dir))}
        template = {json.dumps(str(config.general.template))}

        [user]
        editor = {json.dumps(config.user.editor)}
        log_level = {json.dumps(config.user.log_level)}
        """
    ).strip()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content + "\n", encoding="utf-8")


def _split_names(raw: str, fallback: list[str]) -> list[str]:
    names = [item.strip() for item in raw.split(",") if item.strip()]
    return names or fallback


def init(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(None, help="Where to write config."),
) -> None:
    """Interactive initializer that writes the active config file."""
    state = ctx.obj
    defaults: AppConfig = state.config
    target_path = (config_path or state.config_meta.path).expanduser()

    daily_dir = Path(Prompt.ask("Daily notes directory", default=str(defaults.daily.notes_dir)))
    general_dir = Path(
        Prompt.ask("General notes directory", default=str(defaults.general.notes_dir))
    )
    editor = Prompt.ask("Editor command", default=defaults.user.editor)
    log_level = Prompt.ask("Log level", default=defaults.user.log_level)
    carryover = _split_names(
        Prompt.ask(
            "Carryover sections (comma separated)",
            default=",".join(defaults.daily.carryover_sections),
        ),
        defaults.daily.carryover_sections,
    )
    noncarryover = _split_names(
        Prompt.ask(
            "Sections that start empty (comma separated)",
            default=",".join(defaults.daily.noncarryover_sections),
        ),
        defaults.daily.noncarryover_sections,
    )

    config = defaults.model_copy(
        update={
            "daily": defaults.daily.model_copy(
                update={
                    "notes_dir": daily_dir.expanduser(),
                    "carryover_sections": carryover,
                    "noncarryover_sections": noncarryover,
                }
            ),
            "general": defaults.general.model_copy(update={"notes_dir": general_dir.expanduser()}),
            "user": defaults.user.model_copy(update={"editor": editor, "log_level": log_level}),
        }
    )

    for target in [config.daily.notes_dir, config.general.notes_dir]:
        target.mkdir(parents=True, exist_ok=True)

    _write_config(target_path, config)
    console.print(f"[green]Wrote config to[/green] {target_path}")
    console.print("You can rerun `notes init` anytime to update these values.")
