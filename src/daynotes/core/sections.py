"""Section catalog and carryover extraction.

A note is split into sections by header lines made of a marker followed by a
section name (``## To do``). Lines ending with the done marker are finished
items and are left behind when a section is carried into the next note.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

DEFAULT_CARRYOVER = ("To do", "Tomorrow", "Reminder", "Keep")
DEFAULT_NONCARRYOVER = ("Journal",)
DEFAULT_HEADER_MARKER = "## "
DEFAULT_DONE_MARKER = "[x]"


@dataclass(frozen=True)
class SectionCatalog:
    """Ordered section names, split into carryover and non-carryover."""

    carryover: tuple[str, ...] = DEFAULT_CARRYOVER
    non_carryover: tuple[str, ...] = DEFAULT_NONCARRYOVER
    header_marker: str = DEFAULT_HEADER_MARKER
    done_marker: str = DEFAULT_DONE_MARKER

    @classmethod
    def from_names(
        cls,
        carryover: Iterable[str],
        non_carryover: Iterable[str],
        *,
        header_marker: str = DEFAULT_HEADER_MARKER,
        done_marker: str = DEFAULT_DONE_MARKER,
    ) -> SectionCatalog:
        return cls(
            carryover=tuple(carryover),
            non_carryover=tuple(non_carryover),
            header_marker=header_marker,
            done_marker=done_marker,
        )

    @property
    def names(self) -> tuple[str, ...]:
        return self.carryover + self.non_carryover

    def header(self, name: str) -> str:
        return f"{self.header_marker}{name}"

    def is_header(self, line: str) -> bool:
        return line.startswith(self.header_marker)

    def is_done(self, line: str) -> bool:
        return line.endswith(self.done_marker)


def extract_section(
    document: str | Sequence[str],
    name: str,
    catalog: SectionCatalog | None = None,
) -> list[str]:
    """Return the open lines of the first ``name`` section in ``document``.

    Collection starts after the exact header line and stops at the next header
    line or the end of the document. Done lines are dropped; the remaining
    lines keep their order. A missing section yields an empty list.
    """
    catalog = catalog or SectionCatalog()
    lines = document.splitlines() if isinstance(document, str) else document
    target = catalog.header(name)

    collected: list[str] = []
    collecting = False
    for line in lines:
        if collecting:
            if catalog.is_header(line):
                break
            if not catalog.is_done(line):
                collected.append(line)
        elif line == target:
            collecting = True
    return collected


def extract_carryover(document: str, catalog: SectionCatalog) -> dict[str, list[str]]:
    """Extract every carryover section of ``catalog`` from ``document``."""
    lines = document.splitlines()
    return {name: extract_section(lines, name, catalog) for name in catalog.carryover}


__all__ = ["SectionCatalog", "extract_carryover", "extract_section"]
