"""Shared utility functions for CLI commands."""

from pathlib import Path
from typing import Optional

import typer

from commitsmith.config import ResolvedConfig
from commitsmith.conventional import parse_summary
from commitsmith.git import get_head_summary, read_commit_msg
from commitsmith.git.status import StagingState, StagingStatus


def first_message_line(message: str) -> Optional[str]:
    """Return the first line of a commit message that is not blank or a comment."""
    for line in message.splitlines():
        if line.strip() and not line.startswith("#"):
            return line.strip()
    return None


def get_previous_summary(git_dir: Path, config: ResolvedConfig) -> Optional[str]:
    """Recover the summary of a commit that was not created.

    When a commit fails (e.g. a pre-commit hook rejects it), its message stays
    in COMMIT_EDITMSG. If that message is not the one of the HEAD commit, its
    summary is returned so it can pre-fill the prompt. The emoji prefix that
    was added for the commit type is removed, since it is added again when
    the message is assembled.

    Args:
        git_dir: The repository's git directory.
        config: The resolved configuration.

    Returns:
        The previous summary, or None if there is nothing to recover.
    """
    message = read_commit_msg(git_dir)
    if message is None:
        return None

    header = first_message_line(message)
    if header is None or header == get_head_summary(config.workdir):
        return None

    try:
        parsed = parse_summary(header)
    except ValueError:
        return None

    summary = parsed.summary
    commit_type = config.commit_types.get(parsed.commit_type)
    if config.emoji and commit_type is not None and commit_type.emoji:
        prefix = f"{commit_type.emoji} "
        if summary.startswith(prefix):
            summary = summary[len(prefix):]
    return summary or None


def report_staging_status(status: StagingStatus) -> None:
    """Warn about unstaged changes to tracked files."""
    if status.state is StagingState.PARTIAL:
        typer.echo(
            f"Warning: {status.staged} staged and {status.unstaged} unstaged "
            f"change(s); only staged changes will be committed.",
            err=True,
        )


def confirm_message(message: str) -> bool:
    """Show the message and ask whether to commit it."""
    typer.echo("")
    typer.echo("=" * 60)
    typer.echo(message)
    typer.echo("=" * 60)
    typer.echo("")
    confirm = typer.prompt(
        "Commit with this message? [Y/n]",
        default="y",
        show_default=False,
    )
    return confirm.lower() in ("y", "yes", "")
