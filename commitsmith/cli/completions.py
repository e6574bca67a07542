"""CLI command for generating shell completion scripts."""

from enum import Enum

import typer
from click.shell_completion import get_completion_class


class Shell(str, Enum):
    """Shells a completion script can be generated for."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"


def completions_command(
    ctx: typer.Context,
    shell: Shell = typer.Argument(..., help="Shell to generate completions for"),
) -> None:
    """Print a shell completion script to stdout.

    e.g. commitsmith completions bash > ~/.local/share/bash-completion/completions/commitsmith
    """
    root = ctx.find_root()
    prog_name = root.info_name or "commitsmith"
    complete_var = f"_{prog_name.replace('-', '_').upper()}_COMPLETE"

    completion_class = get_completion_class(shell.value)
    if completion_class is None:
        typer.echo(f"Unsupported shell: {shell.value}", err=True)
        raise typer.Exit(1)

    completion = completion_class(root.command, {}, prog_name, complete_var)
    typer.echo(completion.source())
