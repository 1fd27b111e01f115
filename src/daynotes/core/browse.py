"""Read-only helpers over the note store.

Provides:
    - Listing and keyword search of note files
    - Days with notes for a calendar month
    - Counts per store and per year
    - Archiving a year of daily notes into a tar.gz
"""

from __future__ import annotations

import logging
import re
import tarfile
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from daynotes.core.paths import NOTE_EXTENSION
from daynotes.core.result import Err, NoteNotFoundError, Ok, ParseError, Result, StorageError

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"^[0-9]{4}\Z")


@dataclass(frozen=True)
class SearchHit:
    path: Path
    line_number: int
    line: str


@dataclass
class Summary:
    daily_count: int
    general_count: int
    daily_by_year: dict[str, int] = field(default_factory=dict)


def list_notes(root: Path, *, recursive: bool = True) -> list[Path]:
    """Return note files under ``root`` in sorted order."""
    if not root.is_dir():
        return []
    pattern = f"*{NOTE_EXTENSION}"
    found = root.rglob(pattern) if recursive else root.glob(pattern)
    return sorted(path for path in found if path.is_file())


def search_lines(paths: Iterable[Path], matches: Callable[[str], bool]) -> list[SearchHit]:
    hits: list[SearchHit] = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Skipping unreadable note %s: %s", path, exc)
            continue
        for number, line in enumerate(text.splitlines(), start=1):
            if matches(line):
                hits.append(SearchHit(path=path, line_number=number, line=line))
    return hits


def search_notes(root: Path, keyword: str, *, recursive: bool = True) -> list[SearchHit]:
    """Case-insensitive keyword search over every note under ``root``."""
    needle = keyword.lower()
    return search_lines(list_notes(root, recursive=recursive), lambda line: needle in line.lower())


def calendar_days(root: Path, year: int, month: int) -> list[int]:
    """Return the sorted day numbers of ``year-month`` that have a daily note."""
    month_dir = root / f"{year:04d}" / f"{month:02d}"
    days: set[int] = set()
    for path in list_notes(month_dir, recursive=False):
        day = path.stem[8:10]
        if day.isdigit():
            days.add(int(day))
    return sorted(days)


def summarize(daily_root: Path, general_root: Path) -> Summary:
    by_year: dict[str, int] = {}
    if daily_root.is_dir():
        for year_dir in sorted(p for p in daily_root.iterdir() if p.is_dir()):
            by_year[year_dir.name] = len(list_notes(year_dir))
    return Summary(
        daily_count=len(list_notes(daily_root)),
        general_count=len(list_notes(general_root)),
        daily_by_year=by_year,
    )


def archive_year(
    root: Path, year: str, dest_dir: Path
) -> Result[Path, ParseError | NoteNotFoundError | StorageError]:
    """Pack ``<root>/<year>`` into ``<dest_dir>/daily_notes_<year>.tar.gz``.

    The archive holds the ``<year>`` directory itself; the notes are left in
    place. ``year`` must be four digits, so the archive never reaches outside
    ``root``.
    """
    if not _YEAR_RE.match(year):
        return Err(ParseError("Expected a year in YYYY form", context={"value": year}))

    year_dir = root / year
    if not year_dir.is_dir():
        return Err(
            NoteNotFoundError(f"No daily notes found for {year}.", context={"path": str(year_dir)})
        )

    archive_path = dest_dir / f"daily_notes_{year}.tar.gz"
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive_path, "w:gz") as tar:
            tar.add(year_dir, arcname=year)
    except (OSError, tarfile.TarError) as exc:
        return Err(
            StorageError(
                "Failed to create archive",
                context={"archive": str(archive_path), "error": str(exc)},
            )
        )

    logger.info("Archived %s into %s", year_dir, archive_path)
    return Ok(archive_path)


__all__ = [
    "SearchHit",
    "Summary",
    "archive_year",
    "calendar_days",
    "list_notes",
    "search_notes",
    "summarize",
]
