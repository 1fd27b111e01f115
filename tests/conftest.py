from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def ensure_commands_registered() -> None:
    """Ensure CLI commands are registered before tests run."""
    from daynotes.main import _register_commands

    _register_commands()


@pytest.fixture
def notes_home(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture(autouse=True)
def isolate_config(notes_home: Path, monkeypatch: Any) -> Path:
    """Point config and every note directory at a temp tree."""
    cfg_path = notes_home / "config.toml"
    cfg_path.write_text(
        "\n".join(
            [
                "[daily]",
                f'notes_dir = "{(notes_home / "daily_notes").as_posix()}"',
                f'template = "{(notes_home / ".daily_note_template").as_posix()}"',
                f'archive_dir = "{(notes_home / "archives").as_posix()}"',
                "",
                "[general]",
                f'notes_dir = "{(notes_home / "notes").as_posix()}"',
                f'template = "{(notes_home / ".general_note_template").as_posix()}"',
                "",
                "[user]",
                'editor = "true"',
                "",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("DAYNOTES_CONFIG", str(cfg_path))
    return cfg_path


@pytest.fixture(autouse=True)
def editor_calls(monkeypatch: Any) -> MagicMock:
    """Record editor launches instead of spawning a process."""
    import daynotes.commands.daily as daily_cmd

    fake = MagicMock(return_value=0)
    monkeypatch.setattr(daily_cmd, "open_in_editor", fake)
    return fake


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use a wide recording Rich console during tests."""
    test_console = Console(record=True, width=200)
    import daynotes.commands.daily as daily_cmd
    import daynotes.commands.general as general_cmd
    import daynotes.commands.init as init_cmd
    import daynotes.core.console as core_console
    import daynotes.core.decorators as decorators
    import daynotes.main as notes_main

    for module in (core_console, notes_main, daily_cmd, general_cmd, init_cmd, decorators):
        monkeypatch.setattr(module, "console", test_console)
    return test_console
