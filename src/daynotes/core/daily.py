"""Daily note orchestration.

``DailyNotes.open`` moves a request through these states:

    NOT_REQUESTED -> PATH_RESOLVED -> EXISTING | TO_BE_CREATED -> READY

An existing note is returned untouched. A missing note is generated from the
most recent earlier note (if any) and written once. Only a READY note is handed
to the editor.

Two processes creating the same date at the same moment are not coordinated;
the last write wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from daynotes.core.dates import CalendarDate
from daynotes.core.paths import resolve_path
from daynotes.core.result import NoteNotFoundError
from daynotes.core.scanner import DEFAULT_HORIZON, find_most_recent_existing
from daynotes.core.sections import SectionCatalog, extract_carryover
from daynotes.core.storage import LocalStorage, NoteStorage
from daynotes.core.templates import instantiate, load_template

logger = logging.getLogger(__name__)


class NoteState(Enum):
    NOT_REQUESTED = "not_requested"
    PATH_RESOLVED = "path_resolved"
    EXISTING = "existing"
    TO_BE_CREATED = "to_be_created"
    READY = "ready"


@dataclass(frozen=True)
class OpenedNote:
    date: CalendarDate
    path: Path
    created: bool
    previous: CalendarDate | None = None

    @property
    def origin(self) -> NoteState:
        return NoteState.TO_BE_CREATED if self.created else NoteState.EXISTING


class DailyNotes:
    """Create-or-open daily notes under ``root``."""

    def __init__(
        self,
        root: Path,
        catalog: SectionCatalog | None = None,
        *,
        template_path: Path | None = None,
        horizon: CalendarDate = DEFAULT_HORIZON,
        storage: NoteStorage | None = None,
    ) -> None:
        self.root = root
        self.catalog = catalog or SectionCatalog()
        self.template_path = template_path
        self.horizon = horizon
        self.storage = storage or LocalStorage()
        self.state = NoteState.NOT_REQUESTED

    def path_for(self, value: CalendarDate) -> Path:
        return resolve_path(value, self.root)

    def open(self, value: CalendarDate) -> OpenedNote:
        """Return the note for ``value``, generating it on first access."""
        path = self.path_for(value)
        self.state = NoteState.PATH_RESOLVED
        logger.debug("Daily note for %s resolves to %s", value, path)

        if self.storage.exists(path):
            self.state = NoteState.EXISTING
            logger.debug("Daily note %s already exists", path)
            self.state = NoteState.READY
            return OpenedNote(date=value, path=path, created=False)

        self.state = NoteState.TO_BE_CREATED
        previous = find_most_recent_existing(value, self.root, self.horizon, self.storage)
        content = self.render(value, previous)

        self.storage.mkdir_all(path.parent)
        self.storage.write(path, content)
        logger.info("Created daily note %s", path)

        self.state = NoteState.READY
        return OpenedNote(date=value, path=path, created=True, previous=previous)

    def render(self, value: CalendarDate, previous: CalendarDate | None) -> str:
        """Build the text of a new note for ``value`` carrying from ``previous``."""
        carryover: dict[str, list[str]] = {}
        if previous is not None:
            logger.debug("Carrying sections over from %s", previous)
            prior_text = self.storage.read(self.path_for(previous))
            carryover = extract_carryover(prior_text, self.catalog)
        else:
            logger.debug("No earlier note found; carryover sections start empty")

        template = load_template(self.template_path)
        return instantiate(template, value, carryover, self.catalog)

    def open_existing(self, value: CalendarDate) -> Path:
        """Return the path of an existing note without ever creating one."""
        path = self.path_for(value)
        if not self.storage.exists(path):
            raise NoteNotFoundError(f"No note found for {value}.", context={"path": str(path)})
        return path


__all__ = ["DailyNotes", "NoteState", "OpenedNote"]
