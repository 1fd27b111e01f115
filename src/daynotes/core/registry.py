from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class CommandSpec:
    name: str
    handler: Callable[..., None]


_FUNCTION_COMMANDS: dict[str, dict[str, str]] = {
    "daily": {
        "today": "today",
        "yesterday": "yesterday",
        "date": "open_date",
        "list": "list_daily",
        "search": "search_daily",
        "calendar": "calendar_cmd",
        "archive-year": "archive_year_cmd",
        "summary": "summary",
    },
    "general": {
        "new": "new_note",
        "update-tags": "update_tags_cmd",
        "list-general": "list_general",
        "search-general": "search_general",
        "search-tag": "search_tag",
    },
    "init": {"init": "init"},
}


def _module_name(path: Path) -> str:
    return path.stem


def _import_module(module_name: str) -> object | None:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:  # pragma: no cover
        logger.error("Failed to import command module %s: %s", module_name, exc)
        return None


def _build_function_commands(module_name: str, module: object) -> list[CommandSpec]:
    specs: list[CommandSpec] = []
    mapping = _FUNCTION_COMMANDS.get(module_name, {})
    for cmd_name, attr in mapping.items():
        handler = getattr(module, attr, None)
        if callable(handler):
            specs.append(CommandSpec(name=cmd_name, handler=handler))
        else:  # pragma: no cover
            logger.error("Command %s.%s not found or not callable", module_name, attr)
    return specs


def discover_commands(package_path: Path, package: str = "daynotes.commands") -> list[CommandSpec]:
    """Import each command module and collect its registered command callables."""
    function_commands: list[CommandSpec] = []

    for file in sorted(package_path.glob("*.py")):
        if file.name.startswith("_"):
            continue
        module_name = _module_name(file)
        import_path = f"{package}.{module_name}"
        module = _import_module(import_path)
        if module is None:
            continue

        function_commands.extend(_build_function_commands(module_name, module))

    return function_commands
