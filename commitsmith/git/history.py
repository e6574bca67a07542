"""Commit history utilities.

Contains:
- get_existing_scopes: Collect the scopes used in previous commit summaries
- get_head_summary: Get the summary line of the HEAD commit
"""

from typing import Optional

from commitsmith.conventional import parse_summary
from commitsmith.git.exceptions import RepositoryError
from commitsmith.git.runner import PathLike, run_git


def get_existing_scopes(workdir: Optional[PathLike] = None) -> list[str]:
    """Get the unique scopes used in the commit history.

    Commits are walked newest first, so the most recently used scopes come
    first. Summaries that are not conventional commits are ignored.

    Args:
        workdir: Directory inside the repository.

    Returns:
        Unique scopes in the order they were first seen.
    """
    try:
        output = run_git(["log", "--format=%s"], cwd=workdir)
    except RepositoryError:
        # No commits yet in the repo
        return []

    scopes: list[str] = []
    for summary in output.split("\n"):
        try:
            scope = parse_summary(summary).scope
        except ValueError:
            continue
        if scope and scope not in scopes:
            scopes.append(scope)

    return scopes


def get_head_summary(workdir: Optional[PathLike] = None) -> Optional[str]:
    """Get the summary line of the HEAD commit.

    Returns:
        The summary, or None if there are no commits yet.
    """
    try:
        return run_git(["log", "-n1", "--format=%s"], cwd=workdir) or None
    except RepositoryError:
        # No commits yet in the repo
        return None
