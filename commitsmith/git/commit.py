"""Writing and committing the assembled message.

Contains:
- get_commit_msg_file: Path to COMMIT_EDITMSG
- read_commit_msg: Read an existing COMMIT_EDITMSG
- write_commit_msg: Write the message to COMMIT_EDITMSG (hook mode)
- create_commit: Create the commit with git
"""

from pathlib import Path
from typing import Optional

from commitsmith.git.exceptions import CommitError, RepositoryError
from commitsmith.git.runner import PathLike, run_git

COMMIT_MSG_FILE = "COMMIT_EDITMSG"


def get_commit_msg_file(git_dir: Path) -> Path:
    """Return the path to the commit message file in git_dir."""
    return Path(git_dir) / COMMIT_MSG_FILE


def read_commit_msg(git_dir: Path) -> Optional[str]:
    """Read the commit message left in COMMIT_EDITMSG, if any.

    Returns:
        The message, or None if the file is missing, unreadable or blank.
    """
    msg_file = get_commit_msg_file(git_dir)
    try:
        message = msg_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return message if message.strip() else None


def write_commit_msg(git_dir: Path, message: str) -> Path:
    """Write the message to COMMIT_EDITMSG in one buffer.

    The message is written verbatim, without a trailing newline or any other
    post-processing.

    Returns:
        Path of the written file.

    Raises:
        RepositoryError: If the file cannot be written.
    """
    msg_file = get_commit_msg_file(git_dir)
    try:
        msg_file.write_bytes(message.encode("utf-8"))
    except OSError as e:
        raise RepositoryError(f"Failed to write commit message to {msg_file}: {e}")
    return msg_file


def create_commit(
    workdir: Optional[PathLike],
    message: str,
    sign: bool = False,
    stage_all: bool = False,
) -> str:
    """Create a commit with the given message.

    Args:
        workdir: Directory inside the repository.
        message: The full commit message.
        sign: Whether to GPG/SSH sign the commit (git commit -S).
        stage_all: Whether to stage every change, untracked files included,
            before committing.

    Returns:
        The output of git commit.

    Raises:
        CommitError: If staging or committing fails.
    """
    try:
        if stage_all:
            run_git(["add", "--all"], cwd=workdir)

        args = ["commit", "--file", "-", "--cleanup", "verbatim"]
        if sign:
            args.append("--gpg-sign")
        return run_git(args, cwd=workdir, input=message)
    except RepositoryError as e:
        raise CommitError(str(e))
