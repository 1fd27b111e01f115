"""Shared Rich consoles for the notes CLI.

Command output (note paths, search hits, tables) goes to ``console`` on
stdout. Log records go to ``stderr_console`` so piping ``notes list`` or
``notes search`` never mixes diagnostics into the results.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER = "daynotes"

console = Console()
stderr_console = Console(stderr=True)


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    # unknown names such as "LOUD" fall back to WARNING
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | int = logging.WARNING, verbose: bool = False) -> logging.Logger:
    """Route log records through Rich on stderr.

    ``verbose`` (the ``--verbose`` flag) forces DEBUG over ``user.log_level``.
    Calling this again replaces the previous handler rather than stacking one.
    """
    threshold = logging.DEBUG if verbose else _level_number(level)

    handler = RichHandler(
        console=stderr_console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(threshold)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(threshold)
    root.addHandler(handler)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.handlers.clear()
    app_logger.setLevel(threshold)
    app_logger.propagate = False
    app_logger.addHandler(handler)
    return app_logger


__all__ = ["APP_LOGGER", "console", "setup_logging", "stderr_console"]
