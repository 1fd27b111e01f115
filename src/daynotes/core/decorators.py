from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import typer
from rich.markup import escape

from daynotes.core.console import console
from daynotes.core.result import DayNotesError

F = TypeVar("F", bound=Callable[..., Any])


def _handle_exception(exc: Exception) -> NoReturn:
    console.print(f"[red]{escape(str(exc))}[/red]")
    raise typer.Exit(code=1)


def handle_exceptions(func: F) -> F:
    """Decorate CLI entrypoints to present friendly errors and exit cleanly."""

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (DayNotesError, PermissionError) as exc:
            _handle_exception(exc)

    return sync_wrapper  # type: ignore[return-value]


__all__ = ["handle_exceptions"]
