"""
Database Commands.

Commands for the note store's SQLite database.
"""

import asyncio

import typer
from rich.console import Console

from modules.backend.core.config import get_database_url
from modules.backend.core.database import dispose_engine, init_db
from modules.backend.core.exceptions import StorageUnavailableError

app = typer.Typer(help="Note store database commands")
console = Console()


async def _init() -> None:
    try:
        await init_db()
    finally:
        await dispose_engine()


@app.command()
def init() -> None:
    """
    Create the notes table if it does not exist.

    Examples:
        cli.py db init
    """
    try:
        asyncio.run(_init())
    except StorageUnavailableError as e:
        console.print(f"[red]Error initializing database: {e.message}[/red]")
        raise typer.Exit(1)
    console.print("[green]Database ready[/green]")


@app.command()
def url() -> None:
    """
    Show the database URL in use.

    Examples:
        cli.py db url
    """
    typer.echo(get_database_url())
