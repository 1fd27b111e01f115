from __future__ import annotations

from pathlib import Path

from daynotes.core.dates import CalendarDate
from daynotes.core.result import StorageError

NOTE_EXTENSION = ".txt"


def note_directory(value: CalendarDate, root: Path) -> Path:
    return root / f"{value.year:04d}" / f"{value.month:02d}"


def resolve_path(value: CalendarDate, root: Path) -> Path:
    """Map a date to ``<root>/<YYYY>/<MM>/<YYYY-MM-DD>.txt``.

    Pure: no filesystem access. Callers create the parent with
    ``ensure_directory`` before writing.
    """
    return note_directory(value, root) / f"{value.isoformat()}{NOTE_EXTENSION}"


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and its parents if missing."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(
            f"Cannot create notes directory {path}", context={"error": str(exc)}
        ) from exc
    return path
