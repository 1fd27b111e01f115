"""General (free-form) notes.

General notes live flat in one directory, one file per title, named after a
slug of the title. They may carry a single ``Tags:`` line.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from daynotes.core.browse import SearchHit, list_notes, search_lines
from daynotes.core.dates import CalendarDate
from daynotes.core.paths import NOTE_EXTENSION
from daynotes.core.result import Err, NoteNotFoundError, Ok, ParseError, Result
from daynotes.core.storage import LocalStorage, NoteStorage
from daynotes.core.templates import load_template, render_general

logger = logging.getLogger(__name__)

TAGS_PREFIX = "Tags:"
_SLUG_DROP_RE = re.compile(r"[^a-z0-9_-]")


@dataclass(frozen=True)
class TagUpdate:
    path: Path
    added: bool


def slugify(title: str) -> str:
    """Lowercase, spaces to underscores, and drop anything outside ``[a-z0-9_-]``."""
    return _SLUG_DROP_RE.sub("", title.lower().replace(" ", "_"))


def general_note_path(root: Path, title: str) -> Path:
    if not title.strip():
        raise ParseError("Please provide a title for the general note.")
    slug = slugify(title)
    if not slug:
        raise ParseError(
            "Title has no usable characters for a file name.", context={"title": title}
        )
    return root / f"{slug}{NOTE_EXTENSION}"


def default_general_layout(title: str, tags: str, now: dt.datetime) -> str:
    lines = [f"# General Note: {title}"]
    if tags:
        lines.append(f"{TAGS_PREFIX} {tags}")
    lines.append(f"Created on: {now.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("")
    return "\n".join(lines) + "\n"


def create_general_note(
    root: Path,
    title: str,
    tags: str = "",
    *,
    template_path: Path | None = None,
    storage: NoteStorage | None = None,
    now: dt.datetime | None = None,
) -> tuple[Path, bool]:
    """Create the note for ``title`` if missing and return ``(path, created)``."""
    store = storage or LocalStorage()
    path = general_note_path(root, title)
    if store.exists(path):
        return path, False

    store.mkdir_all(root)
    now = now or dt.datetime.now()
    template = load_template(template_path)
    if template is not None:
        content = render_general(template, title, tags, CalendarDate.from_date(now.date()))
    else:
        content = default_general_layout(title, tags, now)

    store.write(path, content)
    logger.info("Created general note %s", path)
    return path, True


def update_tags(
    root: Path,
    title: str,
    new_tags: str,
    *,
    storage: NoteStorage | None = None,
) -> Result[TagUpdate, NoteNotFoundError]:
    """Replace the first ``Tags:`` line, or insert one after the title line."""
    store = storage or LocalStorage()
    path = general_note_path(root, title)
    if not store.exists(path):
        return Err(
            NoteNotFoundError(
                f'General note for "{title}" does not exist.', context={"path": str(path)}
            )
        )

    lines = store.read(path).splitlines()
    tag_line = f"{TAGS_PREFIX} {new_tags}"
    added = True
    for index, line in enumerate(lines):
        if line.startswith(TAGS_PREFIX):
            lines[index] = tag_line
            added = False
            break
    else:
        lines.insert(1, tag_line)

    store.write(path, "\n".join(lines) + "\n")
    return Ok(TagUpdate(path=path, added=added))


def search_by_tag(root: Path, tag: str) -> list[SearchHit]:
    """Find general notes whose ``Tags:`` line mentions ``tag`` (case-insensitive).

    Only lines that start with ``Tags:`` count; a ``Tags:`` quoted mid-line does not.
    """
    needle = tag.lower()
    prefix = TAGS_PREFIX.lower()

    def _matches(line: str) -> bool:
        lowered = line.lower()
        return lowered.startswith(prefix) and needle in lowered[len(prefix) :]

    return search_lines(list_notes(root, recursive=True), _matches)


__all__ = [
    "TagUpdate",
    "create_general_note",
    "general_note_path",
    "search_by_tag",
    "slugify",
    "update_tags",
]
