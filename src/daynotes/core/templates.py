"""Placeholder substitution for note templates.

Templates are plain text with ``{{TOKEN}}`` placeholders. Rendering builds a
closed table of token -> replacement and applies it in a single pass:
replacements are never scanned again and unknown tokens stay verbatim.

Daily note tokens:
    {{DATE}}              canonical date of the new note
    {{CARRYOVER:<name>}}  open lines carried from the previous note
    {{<name>}}            non-carryover section, always emptied
    {{TAGS}}              always emptied (daily notes carry no tags)

General note tokens:
    {{TITLE}}, {{DATE}}, {{TAGS}}
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from pathlib import Path

from daynotes.core.dates import CalendarDate
from daynotes.core.result import StorageError
from daynotes.core.sections import SectionCatalog

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{([^{}]+)\}\}")

DATE_TOKEN = "DATE"
TAGS_TOKEN = "TAGS"
TITLE_TOKEN = "TITLE"
CARRYOVER_PREFIX = "CARRYOVER:"


def substitute(template: str, table: Mapping[str, str]) -> str:
    """Replace every ``{{TOKEN}}`` found in ``table``; leave the rest untouched."""

    def _replace(match: re.Match[str]) -> str:
        return table.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(_replace, template)


def load_template(path: Path | None) -> str | None:
    """Read a template file, returning ``None`` when it does not exist."""
    if path is None:
        return None
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(
            "Failed to read template", context={"path": str(path), "error": str(exc)}
        ) from exc


def _join_lines(lines: Sequence[str]) -> str:
    # Trailing blank lines are dropped so spacing does not grow day over day.
    return "\n".join(lines).rstrip("\n")


def daily_substitutions(
    value: CalendarDate,
    carryover: Mapping[str, Sequence[str]],
    catalog: SectionCatalog,
) -> dict[str, str]:
    table = {DATE_TOKEN: value.isoformat(), TAGS_TOKEN: ""}
    for name in catalog.carryover:
        table[f"{CARRYOVER_PREFIX}{name}"] = _join_lines(carryover.get(name, ()))
    for name in catalog.non_carryover:
        table[name] = ""
    return table


def default_daily_layout(
    value: CalendarDate,
    carryover: Mapping[str, Sequence[str]],
    catalog: SectionCatalog,
) -> str:
    lines = [f"# Daily Notes for {value.isoformat()}", ""]
    for name in catalog.carryover:
        lines.append(catalog.header(name))
        carried = _join_lines(carryover.get(name, ()))
        if carried:
            lines.append(carried)
        lines.append("")
    for name in catalog.non_carryover:
        lines.append(catalog.header(name))
        lines.append("")
    return "\n".join(lines) + "\n"


def instantiate(
    template: str | None,
    value: CalendarDate,
    carryover: Mapping[str, Sequence[str]],
    catalog: SectionCatalog,
) -> str:
    """Build the full text of a new daily note.

    With a template, section order follows the template. Without one, the
    catalog's sections are laid out in canonical order.
    """
    if template is None:
        return default_daily_layout(value, carryover, catalog)

    rendered = substitute(template, daily_substitutions(value, carryover, catalog))
    leftover = sorted(set(PLACEHOLDER_RE.findall(rendered)))
    if leftover:
        logger.debug("Template placeholders left unresolved: %s", ", ".join(leftover))
    return rendered.rstrip("\n") + "\n"


def render_general(template: str, title: str, tags: str, created: CalendarDate) -> str:
    table = {
        TITLE_TOKEN: title,
        TAGS_TOKEN: f"Tags: {tags}" if tags else "",
        DATE_TOKEN: created.isoformat(),
    }
    return substitute(template, table).rstrip("\n") + "\n"


__all__ = [
    "PLACEHOLDER_RE",
    "default_daily_layout",
    "instantiate",
    "load_template",
    "render_general",
    "substitute",
]
