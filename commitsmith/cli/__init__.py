"""CLI entry point for commitsmith.

This module provides the main CLI application: the interactive commit
command as the default behavior, plus the `completions` subcommand.
"""

import typer

from commitsmith.cli.completions import completions_command
from commitsmith.cli.main import main_command

# Main application
app = typer.Typer(
    name="commitsmith",
    help="commitsmith: interactive conventional commits",
    add_completion=False,
)

app.command("completions")(completions_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "completions_command",
    "main_command",
]
