"""
Result types and error hierarchy for daynotes.

This module provides:
1. Result[T, E] type for explicit error handling
2. Domain-specific exception hierarchy

Usage:
    from daynotes.core.result import Ok, Err, Result, NoteNotFoundError

    def find_note(path: Path) -> Result[Path, NoteNotFoundError]:
        if not path.exists():
            return Err(NoteNotFoundError("No such note", context={"path": str(path)}))
        return Ok(path)

    match find_note(path):
        case Ok(found):
            print(found)
        case Err(err):
            print(err.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the contained error."""
        raise self.error


# Type alias for Result
Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class DayNotesError(Exception):
    """Base exception for all daynotes errors.

    All custom exceptions inherit from this class so the CLI can present
    them uniformly.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ParseError(DayNotesError):
    """Raised for malformed user input.

    Examples:
    - Date not in YYYY-MM-DD form
    - Impossible dates such as 2025-02-30
    - Month argument not in YYYY-MM form
    """


class StorageError(DayNotesError):
    """Raised when the note store cannot be read or written.

    Examples:
    - Permission denied creating a year/month directory
    - Disk full while writing a note
    """


class NoteNotFoundError(DayNotesError):
    """Raised when an operation requires a note that does not exist.

    Examples:
    - Opening yesterday's note when none was written
    - Updating tags of an unknown general note
    - Archiving a year without notes
    """


class ConfigurationError(DayNotesError):
    """Raised for configuration issues.

    Examples:
    - Config file parse errors
    - Config root that is not a mapping
    """


class EditorError(DayNotesError):
    """Raised when the configured editor cannot be launched."""


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "DayNotesError",
    "ParseError",
    "StorageError",
    "NoteNotFoundError",
    "ConfigurationError",
    "EditorError",
]
