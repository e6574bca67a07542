"""Git-related exception classes.

Contains all exception classes for Git operations:
- RepositoryError: Base exception for repository access errors
- StagingError: Raised when there is nothing staged to commit
- CommitError: Raised when creating the commit fails
"""


class RepositoryError(Exception):
    """Raised when the repository cannot be found or read."""

    pass


class StagingError(RepositoryError):
    """Raised when there are no staged changes."""

    pass


class CommitError(RepositoryError):
    """Raised when git fails to create the commit."""

    pass
