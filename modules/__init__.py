"""
Application Modules.

- backend/: Note store, note sessions, database, configuration
- cli/: Command-line host for the note sessions (Typer + Rich)
"""
