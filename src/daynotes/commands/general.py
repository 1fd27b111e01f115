"""General note commands.

Provides CLI commands for:
    - Creating or opening a titled note with optional tags
    - Updating the Tags: line of an existing note
    - Listing and searching general notes, by keyword or by tag
"""

from __future__ import annotations

import typer
from rich.markup import escape

from daynotes.commands.daily import edit_note, print_hits
from daynotes.core import browse
from daynotes.core import general as general_core
from daynotes.core.config import AppConfig
from daynotes.core.console import console
from daynotes.core.decorators import handle_exceptions
from daynotes.core.result import Err, Ok


@handle_exceptions
def new_note(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the general note."),
    tags: str = typer.Option("", "--tags", help='Comma separated tags, e.g. "work, ideas".'),
) -> None:
    """Create or open a general note with TITLE and optional tags."""
    config: AppConfig = ctx.obj.config
    path, created = general_core.create_general_note(
        config.general.notes_dir,
        title,
        tags,
        template_path=config.general.template,
    )
    if not created:
        ctx.obj.logger.debug("Opening existing general note %s", path)
    edit_note(config, path)


@handle_exceptions
def update_tags_cmd(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the general note."),
    tags: str = typer.Argument(..., help="New tags."),
) -> None:
    """Update or set the Tags: line in the general note for TITLE."""
    config: AppConfig = ctx.obj.config
    match general_core.update_tags(config.general.notes_dir, title, tags):
        case Err(err):
            console.print(f"[red]{escape(err.message)}[/red]")
            raise typer.Exit(code=1)
        case Ok(update):
            verb = "Added tags to" if update.added else "Updated tags in"
            console.print(f'[green]{verb}[/green] general note for "{escape(title)}".')


def list_general(ctx: typer.Context) -> None:
    """List all existing general note files."""
    root = ctx.obj.config.general.notes_dir
    console.print(f"Available general notes in {root}:")
    notes = browse.list_notes(root, recursive=False)
    if not notes:
        console.print("[yellow]No general notes found.[/yellow]")
        return
    for path in notes:
        console.print(str(path), markup=False, highlight=False)


def search_general(
    ctx: typer.Context,
    keyword: str = typer.Argument(..., help="Keyword to search for (case-insensitive)."),
) -> None:
    """Recursively search general notes for KEYWORD."""
    root = ctx.obj.config.general.notes_dir
    console.print(f"Searching for '{escape(keyword)}' in {root}...")
    print_hits(browse.search_notes(root, keyword))


def search_tag(
    ctx: typer.Context,
    tag: str = typer.Argument(..., help="Tag to look for on Tags: lines."),
) -> None:
    """Search general notes whose Tags: line includes TAG."""
    root = ctx.obj.config.general.notes_dir
    console.print(f"Searching for tag '{escape(tag)}' in general notes under {root}...")
    print_hits(general_core.search_by_tag(root, tag))
