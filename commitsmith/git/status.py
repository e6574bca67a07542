"""Staging status of the working tree.

Compares the HEAD tree with the index (staged changes) and the index with
the worktree (unstaged changes to tracked files), and classifies the result:

- EMPTY: nothing is staged
- PARTIAL: something is staged, but tracked files have unstaged changes too
- READY: something is staged and the worktree matches the index
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from commitsmith.git.runner import PathLike, run_git


class StagingState(Enum):
    """Classification of the staging area."""

    EMPTY = "empty"
    PARTIAL = "partial"
    READY = "ready"


@dataclass(frozen=True)
class StagingStatus:
    """Result of check_staging."""

    state: StagingState
    staged: int = 0
    unstaged: int = 0

    @classmethod
    def classify(cls, staged: int, unstaged: int) -> "StagingStatus":
        """Classify change counts into a StagingStatus.

        Nothing staged is always EMPTY, whatever the worktree holds.
        """
        if staged == 0:
            return cls(StagingState.EMPTY)
        if unstaged == 0:
            return cls(StagingState.READY, staged=staged)
        return cls(StagingState.PARTIAL, staged=staged, unstaged=unstaged)


def _count_paths(output: str) -> int:
    # NUL-separated (-z), so a path containing a newline counts once
    return len([path for path in output.split("\0") if path])


def count_staged(workdir: Optional[PathLike] = None) -> int:
    """Count entries that differ between the HEAD tree and the index.

    On an unborn branch git compares against the empty tree.
    """
    args = ["--no-optional-locks", "diff", "--cached", "--no-renames", "--name-only", "-z"]
    return _count_paths(run_git(args, cwd=workdir, strip=False))


def count_unstaged(workdir: Optional[PathLike] = None) -> int:
    """Count tracked entries that differ between the index and the worktree.

    Untracked files are not counted.
    """
    args = ["--no-optional-locks", "diff", "--no-renames", "--name-only", "-z"]
    return _count_paths(run_git(args, cwd=workdir, strip=False))


def check_staging(workdir: Optional[PathLike] = None) -> StagingStatus:
    """Classify the staging area of the repository containing workdir.

    Read-only: neither the index nor the worktree is modified.

    Raises:
        RepositoryError: If either comparison cannot be computed.
    """
    staged = count_staged(workdir)
    unstaged = count_unstaged(workdir)
    return StagingStatus.classify(staged, unstaged)
