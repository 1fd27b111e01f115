"""Daily note commands.

Provides CLI commands for:
    - Opening today's, yesterday's, or any date's note (created on first use)
    - Listing and searching daily notes
    - Month calendar with the days that have notes
    - Archiving a year of notes
    - Summary counts across daily and general notes
"""

from __future__ import annotations

import calendar
from pathlib import Path

import typer
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from daynotes.core import browse
from daynotes.core import dates as dates_core
from daynotes.core.config import AppConfig
from daynotes.core.console import console
from daynotes.core.daily import DailyNotes, OpenedNote
from daynotes.core.decorators import handle_exceptions
from daynotes.core.editor import open_in_editor
from daynotes.core.result import Err, Ok


def build_daily_notes(config: AppConfig) -> DailyNotes:
    return DailyNotes(
        config.daily.notes_dir,
        config.daily.section_catalog(),
        template_path=config.daily.template,
        horizon=config.daily.horizon(),
    )


def edit_note(config: AppConfig, path: Path) -> None:
    exit_code = open_in_editor(config.user.editor, path)
    if exit_code != 0:
        console.print(f"[red]Editor exited with code {exit_code}[/red]")


def open_daily(ctx: typer.Context, value: dates_core.CalendarDate) -> OpenedNote:
    """Create-or-open the note for ``value`` and hand it to the editor."""
    state = ctx.obj
    opened = build_daily_notes(state.config).open(value)
    if opened.created and opened.previous is None:
        state.logger.debug("No earlier note to carry over from for %s", value)
    edit_note(state.config, opened.path)
    return opened


@handle_exceptions
def today(ctx: typer.Context) -> None:
    """Open today's daily note, creating it if needed."""
    open_daily(ctx, dates_core.today())


@handle_exceptions
def yesterday(ctx: typer.Context) -> None:
    """Open yesterday's daily note if it exists."""
    state = ctx.obj
    target = dates_core.previous_day(dates_core.today())
    path = build_daily_notes(state.config).open_existing(target)
    edit_note(state.config, path)


@handle_exceptions
def open_date(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="Date of the note (YYYY-MM-DD)."),
) -> None:
    """Open or create the daily note for DATE."""
    open_daily(ctx, dates_core.CalendarDate.parse(date))


def list_daily(ctx: typer.Context) -> None:
    """List all existing daily note files."""
    root = ctx.obj.config.daily.notes_dir
    console.print(f"Available daily notes in {root}:")
    notes = browse.list_notes(root)
    if not notes:
        console.print("[yellow]No daily notes found.[/yellow]")
        return
    for path in notes:
        console.print(str(path), markup=False, highlight=False)


def print_hits(hits: list[browse.SearchHit]) -> None:
    if not hits:
        console.print("[yellow]No matches found.[/yellow]")
        return
    for hit in hits:
        console.print(
            f"[cyan]{escape(str(hit.path))}[/cyan]:[green]{hit.line_number}[/green]:"
            f"{escape(hit.line)}",
            highlight=False,
        )


def search_daily(
    ctx: typer.Context,
    keyword: str = typer.Argument(..., help="Keyword to search for (case-insensitive)."),
) -> None:
    """Recursively search daily notes for KEYWORD."""
    root = ctx.obj.config.daily.notes_dir
    console.print(f"Searching for '{escape(keyword)}' in daily notes under {root}...")
    print_hits(browse.search_notes(root, keyword))


@handle_exceptions
def calendar_cmd(
    ctx: typer.Context,
    month: str | None = typer.Argument(None, help="Month to show (YYYY-MM, default current)."),
) -> None:
    """Display a month calendar and the days that have notes."""
    if month:
        year, month_number = dates_core.parse_month(month)
    else:
        current = dates_core.today()
        year, month_number = current.year, current.month

    grid = calendar.TextCalendar(calendar.SUNDAY).formatmonth(year, month_number)
    console.print(
        Panel(grid.rstrip(), title=f"Calendar for {year:04d}-{month_number:02d}", box=box.SIMPLE),
        highlight=False,
    )

    days = browse.calendar_days(ctx.obj.config.daily.notes_dir, year, month_number)
    if days:
        console.print("Notes exist for day(s): " + " ".join(str(day) for day in days))
    else:
        console.print("[yellow]No daily notes found for this month.[/yellow]")


def archive_year_cmd(
    ctx: typer.Context,
    year: str = typer.Argument(..., help="Year to archive (YYYY)."),
) -> None:
    """Archive all daily notes of YEAR into a tar.gz."""
    config: AppConfig = ctx.obj.config
    match browse.archive_year(config.daily.notes_dir, year, config.daily.archive_dir):
        case Err(err):
            console.print(f"[red]{escape(err.message)}[/red]")
            raise typer.Exit(code=1)
        case Ok(archive_path):
            console.print(f"[green]Done. Created archive:[/green] {archive_path}")


def summary(ctx: typer.Context) -> None:
    """Show how many daily and general notes exist, with daily notes per year."""
    config: AppConfig = ctx.obj.config
    result = browse.summarize(config.daily.notes_dir, config.general.notes_dir)

    table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Notes", style="cyan", no_wrap=True)
    table.add_column("Count", style="white", justify="right")
    table.add_row("Daily notes", str(result.daily_count))
    table.add_row("General notes", str(result.general_count))
    for year_name, count in result.daily_by_year.items():
        table.add_row(f"  {year_name}", str(count))
    console.print(table)
