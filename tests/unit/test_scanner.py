from __future__ import annotations

from pathlib import Path

from daynotes.core.dates import CalendarDate
from daynotes.core.paths import resolve_path
from daynotes.core.scanner import find_most_recent_existing


def _touch(root: Path, value: CalendarDate) -> None:
    path = resolve_path(value, root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")


class CountingStorage:
    def __init__(self, existing: set[Path]) -> None:
        self.existing = existing
        self.checked: list[Path] = []

    def exists(self, path: Path) -> bool:
        self.checked.append(path)
        return path in self.existing


def test_returns_none_without_notes(tmp_path: Path) -> None:
    horizon = CalendarDate(2024, 12, 1)
    assert find_most_recent_existing(CalendarDate(2025, 1, 5), tmp_path, horizon) is None


def test_finds_note_across_gap(tmp_path: Path) -> None:
    _touch(tmp_path, CalendarDate(2025, 1, 3))
    found = find_most_recent_existing(CalendarDate(2025, 1, 5), tmp_path)
    assert found == CalendarDate(2025, 1, 3)


def test_finds_closest_of_several(tmp_path: Path) -> None:
    for day in (CalendarDate(2024, 11, 20), CalendarDate(2024, 12, 30), CalendarDate(2025, 1, 9)):
        _touch(tmp_path, day)
    found = find_most_recent_existing(CalendarDate(2025, 1, 5), tmp_path)
    assert found == CalendarDate(2024, 12, 30)


def test_never_returns_the_target_itself(tmp_path: Path) -> None:
    _touch(tmp_path, CalendarDate(2025, 1, 5))
    horizon = CalendarDate(2024, 12, 1)
    assert find_most_recent_existing(CalendarDate(2025, 1, 5), tmp_path, horizon) is None


def test_horizon_date_is_not_examined(tmp_path: Path) -> None:
    horizon = CalendarDate(2025, 1, 1)
    _touch(tmp_path, horizon)
    assert find_most_recent_existing(CalendarDate(2025, 1, 5), tmp_path, horizon) is None

    _touch(tmp_path, CalendarDate(2025, 1, 2))
    found = find_most_recent_existing(CalendarDate(2025, 1, 5), tmp_path, horizon)
    assert found == CalendarDate(2025, 1, 2)


def test_scan_is_bounded_by_horizon() -> None:
    root = Path("/notes")
    storage = CountingStorage(existing=set())
    horizon = CalendarDate(2024, 12, 31)

    found = find_most_recent_existing(CalendarDate(2025, 1, 31), root, horizon, storage)

    assert found is None
    # 2025-01-30 back to 2025-01-01
    assert len(storage.checked) == 30
    assert storage.checked[0] == resolve_path(CalendarDate(2025, 1, 30), root)


def test_target_at_or_before_horizon_returns_none() -> None:
    storage = CountingStorage(existing=set())
    horizon = CalendarDate(2025, 1, 5)
    assert find_most_recent_existing(horizon, Path("/notes"), horizon, storage) is None
    assert storage.checked == []
