"""Git command runner and repository utilities.

Contains:
- run_git: Run a git command and return its output
- get_git_dir: Get the .git directory of the repository containing a path
"""

import subprocess
from pathlib import Path
from typing import Optional, Union

from commitsmith.git.exceptions import RepositoryError

PathLike = Union[str, Path]


def run_git(
    args: list[str],
    cwd: Optional[PathLike] = None,
    input: Optional[str] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in. Defaults to the current directory.
        input: Text to send to git on stdin.
        strip: Whether to strip surrounding whitespace from the output.
            Pass False for -z output, where whitespace may be part of a path.

    Returns:
        The stdout of the git command.

    Raises:
        RepositoryError: If the command fails or git is not installed.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            input=input,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.CalledProcessError as e:
        raise RepositoryError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise RepositoryError("Git is not installed or not in PATH.")


def get_git_dir(workdir: Optional[PathLike] = None) -> Path:
    """Get the git directory (usually .git) of the repository containing workdir.

    Raises:
        RepositoryError: If workdir is not inside a git repository.
    """
    try:
        git_dir = run_git(["rev-parse", "--absolute-git-dir"], cwd=workdir)
    except RepositoryError:
        raise RepositoryError(
            "Not in a git repository. Please run this command from within a git repo."
        )
    return Path(git_dir)
