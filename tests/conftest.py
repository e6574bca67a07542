"""Shared test fixtures and configuration."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from commitsmith.commit_types import DEFAULT_COMMIT_TYPES, CommitTypeRegistry
from commitsmith.config import ResolvedConfig


def _git(repo: Path, *args: str) -> str:
    """Run a git command in repo for test setup."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir):
    """Create an empty git repository with a local identity."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = temp_dir / "repo"
    repo.mkdir()
    _git(repo, "init", "--quiet")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def repo_with_commit(git_repo):
    """A git repository with one commit containing a.txt and b.txt."""
    (git_repo / "a.txt").write_text("a\n")
    (git_repo / "b.txt").write_text("b\n")
    _git(git_repo, "add", "a.txt", "b.txt")
    _git(git_repo, "commit", "--quiet", "-m", "chore(init): initial commit")
    return git_repo


@pytest.fixture
def default_config(temp_dir):
    """Resolved config with defaults and the built-in commit types."""
    return ResolvedConfig(
        autocomplete=False,
        breaking_changes=True,
        emoji=False,
        issues=True,
        sign=False,
        workdir=temp_dir,
        commit_types=CommitTypeRegistry(DEFAULT_COMMIT_TYPES),
    )


@pytest.fixture
def git():
    """Helper that runs a git command in a repository for test setup."""
    return _git
