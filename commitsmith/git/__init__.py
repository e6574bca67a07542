"""Git access for commitsmith.

This package wraps the git executable:
- exceptions: RepositoryError, StagingError, CommitError
- runner: run_git, get_git_dir
- status: check_staging, StagingStatus, StagingState
- history: get_existing_scopes, get_head_summary
- commit: read_commit_msg, write_commit_msg, create_commit
"""

# Exceptions
from commitsmith.git.exceptions import (
    CommitError,
    RepositoryError,
    StagingError,
)

# Runner utilities
from commitsmith.git.runner import (
    get_git_dir,
    run_git,
)

# Staging status
from commitsmith.git.status import (
    StagingState,
    StagingStatus,
    check_staging,
)

# History
from commitsmith.git.history import get_existing_scopes, get_head_summary

# Commit sink
from commitsmith.git.commit import (
    create_commit,
    get_commit_msg_file,
    read_commit_msg,
    write_commit_msg,
)


__all__ = [
    # Exceptions
    "CommitError",
    "RepositoryError",
    "StagingError",
    # Runner
    "get_git_dir",
    "run_git",
    # Status
    "StagingState",
    "StagingStatus",
    "check_staging",
    # History
    "get_existing_scopes",
    "get_head_summary",
    # Commit
    "create_commit",
    "get_commit_msg_file",
    "read_commit_msg",
    "write_commit_msg",
]
