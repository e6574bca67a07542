"""Main CLI command for authoring a conventional commit."""

from pathlib import Path
from typing import Optional

import typer

from commitsmith import __version__
from commitsmith.answers import Answers, AssemblyError, assemble
from commitsmith.config import ConfigContext, ConfigError, ConfigOverrides, load_config
from commitsmith.conventional import is_conventional
from commitsmith.git import (
    CommitError,
    RepositoryError,
    StagingError,
    StagingState,
    check_staging,
    create_commit,
    get_existing_scopes,
    get_git_dir,
    read_commit_msg,
    write_commit_msg,
)
from commitsmith.questions import PromptError, prompt_answers
from commitsmith.cli.utils import (
    confirm_message,
    get_previous_summary,
    report_staging_status,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"commitsmith {__version__}")
        raise typer.Exit(0)


def _check_exclusive(**flags: bool) -> None:
    """Exit with an error if more than one of the given flags is set."""
    given = [f"--{name}" for name, value in flags.items() if value]
    if len(given) > 1:
        typer.echo(f"Error: {' and '.join(given)} cannot be used together.", err=True)
        raise typer.Exit(2)


def main_command(
    ctx: typer.Context,
    autocomplete: Optional[bool] = typer.Option(
        None,
        "--autocomplete/--no-autocomplete",
        help="Suggest scopes from the commit history",
        show_default=False,
    ),
    breaking_changes: Optional[bool] = typer.Option(
        None,
        "--breaking-changes/--no-breaking-changes",
        help="Ask about breaking changes",
        show_default=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to an additional config file",
        resolve_path=True,
    ),
    emoji: Optional[bool] = typer.Option(
        None,
        "--emoji/--no-emoji",
        help="Prepend the summary with the commit type's emoji",
        show_default=False,
    ),
    hook: bool = typer.Option(
        False,
        "--hook",
        help="Run as a prepare-commit-msg hook and write the message to COMMIT_EDITMSG",
    ),
    stdout: bool = typer.Option(
        False,
        "--stdout",
        help="Print the message instead of committing",
    ),
    issues: Optional[bool] = typer.Option(
        None,
        "--issues/--no-issues",
        help="Ask about affected issues",
        show_default=False,
    ),
    sign: Optional[bool] = typer.Option(
        None,
        "--sign/--no-sign",
        help="Sign the commit",
        show_default=False,
    ),
    all_: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Stage all changes, untracked files included, before committing",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Bypass confirmation prompt and commit immediately",
    ),
    workdir: Optional[Path] = typer.Option(
        None,
        "-C",
        help="Run as if started in this directory",
        resolve_path=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Create a conventional commit interactively."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    _check_exclusive(hook=hook, stdout=stdout, all=all_)

    overrides = ConfigOverrides(
        path=config,
        autocomplete=autocomplete,
        breaking_changes=breaking_changes,
        emoji=emoji,
        issues=issues,
        sign=sign,
    )

    try:
        # Step 1: Resolve configuration
        settings = load_config(overrides, ConfigContext.from_environment(workdir))

        # Step 2: Find the repository
        git_dir = get_git_dir(settings.workdir)

        # Step 3: In hook mode, keep a message that is already conventional
        # (e.g. from `git commit -m`)
        if hook:
            existing = read_commit_msg(git_dir)
            if existing is not None and is_conventional(existing):
                raise typer.Exit(0)

        # Step 4: Make sure there is something to commit
        if not hook and not all_:
            status = check_staging(settings.workdir)
            if status.state is StagingState.EMPTY:
                raise StagingError(
                    "Nothing staged for commit. Stage your changes with 'git add <file>...' "
                    "or pass --all."
                )
            report_staging_status(status)

        # Step 5: Ask the questions
        scopes = get_existing_scopes(settings.workdir) if settings.autocomplete else []
        default_summary = get_previous_summary(git_dir, settings)
        answers = Answers.from_dict(prompt_answers(settings, scopes, default_summary))

        # Step 6: Assemble the message
        message = assemble(answers, settings)

        if stdout:
            typer.echo(message)
            raise typer.Exit(0)

        if hook:
            write_commit_msg(git_dir, message)
            return

        # Step 7: Commit
        if not yes and not confirm_message(message):
            typer.echo("Commit cancelled.", err=True)
            raise typer.Exit(0)

        typer.echo("Committing...", err=True)
        output = create_commit(settings.workdir, message, sign=settings.sign, stage_all=all_)
        typer.echo("Commit successful!", err=True)
        if output:
            typer.echo(output)

    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)
    except StagingError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except CommitError as e:
        typer.echo("Commit failed!", err=True)
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except RepositoryError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except PromptError as e:
        typer.echo(f"{e}", err=True)
        raise typer.Exit(1)
    except AssemblyError as e:
        typer.echo(f"Internal error: {e}", err=True)
        raise typer.Exit(1)
