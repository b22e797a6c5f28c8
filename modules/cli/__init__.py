"""
CLI Host Module.

Command-line host for the note sessions, built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All note logic lives in modules.backend.services
- The CLI answers session confirmations (prompt or --yes)

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes new --body "Buy milk"
"""
