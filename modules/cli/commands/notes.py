"""
Note Commands.

Drive the note list and note editor sessions from the command line.
Each command opens the store, runs one session to completion and exits.
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from modules.backend.core.database import dispose_engine, get_db_session, init_db
from modules.backend.core.exceptions import ApplicationError, NotFoundError
from modules.backend.schemas.note import SortOrder
from modules.backend.schemas.session import (
    Choice,
    ConfirmationKind,
    ExitOutcome,
    PendingConfirmation,
)
from modules.backend.services.editor_session import EditorSession
from modules.backend.services.list_session import ListSession
from modules.backend.services.note import NoteService

app = typer.Typer(help="Create, list, edit and delete notes")
console = Console()

T = TypeVar("T")

_OUTCOME_MESSAGES = {
    ExitOutcome.SAVED: "[green]Saved[/green]",
    ExitOutcome.UNCHANGED: "[dim]No changes[/dim]",
    ExitOutcome.DISCARDED: "[yellow]Changes discarded[/yellow]",
    ExitOutcome.CANCELED: "[yellow]Empty note removed[/yellow]",
    ExitOutcome.DELETED: "[green]Note deleted[/green]",
    ExitOutcome.VANISHED: "[yellow]Note was deleted elsewhere, nothing saved[/yellow]",
    ExitOutcome.FAILED: "[red]Could not write to the note store, changes not saved[/red]",
}

_CONFIRM_PROMPTS = {
    ConfirmationKind.SAVE_OR_DISCARD: "Save changes?",
    ConfirmationKind.DELETE_OR_DISCARD: "The note is now empty. Delete it?",
    ConfirmationKind.CONFIRM_DELETE: "Delete this note?",
}


async def _with_store(work: Callable[[NoteService], Awaitable[T]]) -> T:
    await init_db()
    try:
        async with get_db_session() as session:
            return await work(NoteService(session))
    finally:
        await dispose_engine()


def _run(work: Callable[[NoteService], Awaitable[T]]) -> T:
    try:
        return asyncio.run(_with_store(work))
    except NotFoundError:
        console.print("[red]Note not found[/red]")
        raise typer.Exit(1)
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


def _read_text(value: Optional[str]) -> Optional[str]:
    """'-' reads the value from stdin."""
    if value == "-":
        return sys.stdin.read()
    return value


def _answer(pending: PendingConfirmation, assume_yes: bool) -> Choice:
    """First choice is the affirmative one, second the negative."""
    affirmative, negative = pending.choices
    if assume_yes or typer.confirm(_CONFIRM_PROMPTS[pending.kind], default=False):
        return affirmative
    return negative


def _report(outcome: ExitOutcome, note_id: str) -> None:
    console.print(f"{_OUTCOME_MESSAGES[outcome]} ({note_id})")
    if outcome is ExitOutcome.FAILED:
        raise typer.Exit(1)


@app.command("list")
def list_notes(
    sort: Optional[SortOrder] = typer.Option(None, "--sort", "-s", help="Sort order"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Filter by title"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum rows"),
) -> None:
    """
    List notes, most recently modified first.

    Examples:
        cli.py notes list
        cli.py notes list --sort title_asc --search groceries
    """

    async def work(store: NoteService):
        notes = ListSession.from_config(store, sort_order=sort, search=search, limit=limit)
        await notes.refresh()
        return notes

    notes = _run(work)

    table = Table(title=f"Notes ({notes.total})", show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")
    table.add_column("Modified", no_wrap=True)
    for entry in notes.entries:
        table.add_row(
            entry.id,
            entry.title or "[dim](untitled)[/dim]",
            entry.modified_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Print a note."""

    async def work(store: NoteService):
        return await store.get_note(note_id)

    note = _run(work)
    console.print(f"[bold]{note.title or '(untitled)'}[/bold]", highlight=False)
    console.print(f"[dim]{note.id}  modified {note.modified_at:%Y-%m-%d %H:%M:%S}[/dim]")
    console.print()
    console.print(note.body, highlight=False, markup=False)


@app.command()
def new(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Note title"),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Note body, '-' for stdin"),
) -> None:
    """
    Create a note. A note with neither title nor body is not kept.

    Examples:
        cli.py notes new --body "Buy milk"
        echo "Long text" | cli.py notes new --title Draft --body -
    """
    text = _read_text(body)

    async def work(store: NoteService):
        notes = ListSession(store)
        editor = await notes.open_editor(notes.create_new())
        editor.set_title(title or "")
        editor.set_body(text or "")
        return editor.note_id, await editor.save()

    note_id, outcome = _run(work)
    _report(outcome, note_id)


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="New body, '-' for stdin"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to the exit confirmation"),
    discard: bool = typer.Option(False, "--discard", help="Discard the edits instead of saving"),
) -> None:
    """
    Edit a note and leave the editor.

    Leaving with unsaved changes asks whether to save them; leaving with
    an emptied note asks whether to delete it.

    Examples:
        cli.py notes edit <id> --body "New text"
        cli.py notes edit <id> --title "" --body "" --yes
    """
    text = _read_text(body)

    async def work(store: NoteService):
        notes = ListSession(store)
        editor: EditorSession = await notes.open_editor(notes.select(note_id))
        if title is not None:
            editor.set_title(title)
        if text is not None:
            editor.set_body(text)

        if discard:
            return await editor.discard()

        pending = editor.request_exit()
        if pending is None:
            return await editor.commit_on_exit()
        return await editor.resolve(_answer(pending, yes))

    outcome = _run(work)
    _report(outcome, note_id)


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a note after confirmation."""

    async def work(store: NoteService):
        notes = ListSession(store)
        pending = notes.request_delete(note_id)
        return await notes.resolve(_answer(pending, yes))

    removed = _run(work)
    if removed:
        console.print(f"[green]Note deleted[/green] ({note_id})")
    else:
        console.print("[dim]Nothing deleted[/dim]")


@app.command()
def pick(
    index: Optional[int] = typer.Option(None, "--index", "-i", min=1, help="Row number to pick"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Filter by title"),
) -> None:
    """
    Choose a note from the list and print its ID.

    Examples:
        cli.py notes pick
        cli.py notes pick --search todo --index 1
    """

    async def work(store: NoteService):
        notes = ListSession.from_config(store, search=search, pick=True)
        await notes.refresh()
        return notes

    notes = _run(work)
    entries = notes.entries
    if not entries:
        console.print("[yellow]No notes to pick from[/yellow]")
        raise typer.Exit(1)

    if index is None:
        for number, entry in enumerate(entries, start=1):
            console.print(f"{number:>3}  {entry.title or '(untitled)'}", highlight=False, markup=False)
        index = typer.prompt("Pick a note", type=int)
    if not 1 <= index <= len(entries):
        console.print(f"[red]No row {index}[/red]")
        raise typer.Exit(1)

    request = notes.select(entries[index - 1].id)
    typer.echo(request.note_id)
