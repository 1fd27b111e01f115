from __future__ import annotations

from pathlib import Path

import pytest

from daynotes.core.daily import DailyNotes, NoteState
from daynotes.core.dates import CalendarDate
from daynotes.core.paths import resolve_path
from daynotes.core.result import NoteNotFoundError, StorageError
from daynotes.core.sections import extract_section


class MemoryStorage:
    """In-memory stand-in for LocalStorage."""

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}
        self.dirs: set[Path] = set()
        self.writes = 0

    def exists(self, path: Path) -> bool:
        return path in self.files

    def read(self, path: Path) -> str:
        return self.files[path]

    def write(self, path: Path, content: str) -> None:
        self.writes += 1
        self.files[path] = content

    def mkdir_all(self, path: Path) -> None:
        self.dirs.add(path)


class FailingStorage(MemoryStorage):
    def write(self, path: Path, content: str) -> None:
        raise StorageError("disk full", context={"path": str(path)})


def _write_note(root: Path, value: CalendarDate, content: str) -> Path:
    path = resolve_path(value, root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path / "daily_notes"


def test_carryover_skips_done_items_across_gap(root: Path) -> None:
    _write_note(
        root,
        CalendarDate(2025, 1, 3),
        "# Daily Notes for 2025-01-03\n\n## To do\nbuy milk\ncall bank [x]\n\n## Journal\nrain\n",
    )
    notes = DailyNotes(root)

    opened = notes.open(CalendarDate(2025, 1, 5))

    assert opened.created
    assert opened.previous == CalendarDate(2025, 1, 3)
    assert opened.path == root / "2025" / "01" / "2025-01-05.txt"
    content = opened.path.read_text(encoding="utf-8")
    todo = [line for line in extract_section(content, "To do") if line]
    assert todo == ["buy milk"]
    assert extract_section(content, "Journal") == [""]
    assert "rain" not in content


def test_no_prior_note_gives_empty_sections(root: Path) -> None:
    opened = DailyNotes(root, horizon=CalendarDate(2024, 1, 1)).open(CalendarDate(2025, 1, 5))

    content = opened.path.read_text(encoding="utf-8")
    assert opened.previous is None
    for name in ("To do", "Tomorrow", "Reminder", "Keep", "Journal"):
        assert f"## {name}\n\n" in content
        assert extract_section(content, name) == [""]


def test_open_is_idempotent(root: Path) -> None:
    notes = DailyNotes(root, horizon=CalendarDate(2024, 1, 1))
    first = notes.open(CalendarDate(2025, 1, 5))
    before = first.path.read_text(encoding="utf-8")

    second = notes.open(CalendarDate(2025, 1, 5))

    assert first.created and not second.created
    assert second.origin is NoteState.EXISTING
    assert notes.state is NoteState.READY
    assert second.path.read_text(encoding="utf-8") == before


def test_existing_note_is_never_overwritten(root: Path) -> None:
    path = _write_note(root, CalendarDate(2025, 1, 5), "hand written\n")
    _write_note(root, CalendarDate(2025, 1, 4), "## To do\nsomething\n")

    opened = DailyNotes(root).open(CalendarDate(2025, 1, 5))

    assert not opened.created
    assert path.read_text(encoding="utf-8") == "hand written\n"


def test_template_is_used_when_present(root: Path, tmp_path: Path) -> None:
    template = tmp_path / "daily_template"
    template.write_text("Day {{DATE}}\n## To do\n{{CARRYOVER:To do}}\n## Journal\n{{Journal}}\n")
    _write_note(root, CalendarDate(2024, 12, 31), "## To do\nfile taxes\nold [x]\n")

    opened = DailyNotes(root, template_path=template).open(CalendarDate(2025, 1, 2))

    assert opened.path.read_text(encoding="utf-8") == (
        "Day 2025-01-02\n## To do\nfile taxes\n## Journal\n"
    )


def test_chain_of_days_keeps_spacing_stable(root: Path) -> None:
    notes = DailyNotes(root, horizon=CalendarDate(2024, 1, 1))
    first = notes.open(CalendarDate(2025, 1, 1))
    first.path.write_text(
        first.path.read_text(encoding="utf-8").replace("## To do\n", "## To do\nbuy milk\n"),
        encoding="utf-8",
    )

    second = notes.open(CalendarDate(2025, 1, 2)).path.read_text(encoding="utf-8")
    third_path = notes.open(CalendarDate(2025, 1, 3)).path

    assert third_path.read_text(encoding="utf-8") == second.replace("2025-01-02", "2025-01-03")


def test_in_memory_storage() -> None:
    storage = MemoryStorage()
    root = Path("/notes")
    storage.files[resolve_path(CalendarDate(2025, 1, 3), root)] = "## Keep\nwifi password\n"
    notes = DailyNotes(root, storage=storage, horizon=CalendarDate(2024, 12, 1))

    opened = notes.open(CalendarDate(2025, 1, 5))

    assert storage.writes == 1
    assert opened.path.parent in storage.dirs
    assert "## Keep\nwifi password\n" in storage.files[opened.path]


def test_write_failure_leaves_note_absent() -> None:
    storage = FailingStorage()
    notes = DailyNotes(Path("/notes"), storage=storage, horizon=CalendarDate(2024, 12, 1))

    with pytest.raises(StorageError):
        notes.open(CalendarDate(2025, 1, 5))

    assert storage.files == {}


def test_open_existing(root: Path) -> None:
    notes = DailyNotes(root)
    path = _write_note(root, CalendarDate(2025, 1, 4), "x\n")

    assert notes.open_existing(CalendarDate(2025, 1, 4)) == path
    with pytest.raises(NoteNotFoundError):
        notes.open_existing(CalendarDate(2025, 1, 3))
    assert not resolve_path(CalendarDate(2025, 1, 3), root).exists()
