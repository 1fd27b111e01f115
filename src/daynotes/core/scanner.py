"""Backward search for the most recent daily note before a date."""

from __future__ import annotations

import logging
from pathlib import Path

from daynotes.core.dates import CalendarDate
from daynotes.core.paths import resolve_path
from daynotes.core.storage import LocalStorage, NoteStorage

logger = logging.getLogger(__name__)

DEFAULT_HORIZON = CalendarDate(1970, 1, 1)


def find_most_recent_existing(
    before: CalendarDate,
    root: Path,
    horizon: CalendarDate = DEFAULT_HORIZON,
    storage: NoteStorage | None = None,
) -> CalendarDate | None:
    """Return the closest date earlier than ``before`` that has a stored note.

    Steps back one day at a time. The scan stops without a result once the
    stepped date reaches ``horizon``; the horizon date itself is never
    examined. Work is bounded by the calendar span between ``before`` and
    ``horizon``, not by the number of notes.
    """
    store = storage or LocalStorage()
    current = before
    steps = 0
    while current > horizon:
        current = current.previous_day()
        steps += 1
        if current <= horizon:
            break
        if store.exists(resolve_path(current, root)):
            logger.debug("Found previous note %s after %d step(s)", current, steps)
            return current

    logger.debug("No note found between %s and horizon %s", before, horizon)
    return None


__all__ = ["DEFAULT_HORIZON", "find_most_recent_existing"]
