#!/usr/bin/env python3
"""
Notepad CLI.

Command-line host for the note store.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                  # Show help

    # Notes
    python cli.py notes list                              # Most recently modified first
    python cli.py notes list --sort title_asc -q todo     # Sorted and filtered
    python cli.py notes show <id>                         # Print one note
    python cli.py notes new --title Groceries --body Milk # Create a note
    python cli.py notes edit <id> --body "New text"       # Edit, asks to save
    python cli.py notes delete <id>                       # Delete, asks to confirm
    python cli.py notes pick                              # Choose a note, print its ID

    # Database
    python cli.py db init                                 # Create tables
    python cli.py db url                                  # Show database URL

    # System info
    python cli.py system info                             # Show app info
    python cli.py system config                           # Show configuration

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from modules.backend.core.config import validate_project_root
from modules.backend.core.logging import setup_logging
from modules.cli.commands import db_app, notes_app, system_app

app = typer.Typer(
    name="notepad",
    help="Notepad CLI - create, list, edit and delete notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(db_app, name="db")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notepad CLI.

    Notes, database setup and configuration.
    """
    validate_project_root()

    # Configure logging based on flags; by default logs only go to the file
    if debug:
        setup_logging(level="DEBUG", format_type="console", enable_console=True)
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console", enable_console=True)
    else:
        setup_logging(enable_console=False)


if __name__ == "__main__":
    app()
