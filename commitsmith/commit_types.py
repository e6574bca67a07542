"""Commit type definitions and the commit type registry.

Contains:
- CommitType: A single selectable commit type (name, emoji, description)
- DEFAULT_COMMIT_TYPES: The built-in commit types
- CommitTypeRegistry: Ordered, read-only mapping of name to CommitType
- build_registry: Build a registry from defaults and user-declared types
"""

from collections.abc import Iterator, Mapping
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict


class CommitType(BaseModel):
    """A commit type as declared in a configuration document.

    Attributes:
        name: The type keyword used in the header (e.g., "feat").
        emoji: Optional glyph prepended to the summary when emoji is enabled.
        description: Human readable description shown in the prompt.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    emoji: Optional[str] = None


DEFAULT_COMMIT_TYPES = [
    CommitType(name="feat", emoji="✨", description="A new feature"),
    CommitType(name="fix", emoji="🐛", description="A bug fix"),
    CommitType(name="docs", emoji="📚", description="Documentation only changes"),
    CommitType(
        name="style",
        emoji="💎",
        description="Changes that do not affect the meaning of the code (white-space, formatting, missing semi-colons, etc)",
    ),
    CommitType(
        name="refactor",
        emoji="🔨",
        description="A code change that neither fixes a bug nor adds a feature",
    ),
    CommitType(name="perf", emoji="🚀", description="A code change that improves performance"),
    CommitType(name="test", emoji="🚨", description="Adding missing tests or correcting existing tests"),
    CommitType(
        name="build",
        emoji="📦",
        description="Changes that affect the build system or external dependencies (example scopes: gulp, broccoli, npm)",
    ),
    CommitType(name="ci", emoji="🤖", description="Changes to our CI configuration files and scripts"),
    CommitType(name="chore", emoji="🧹", description="Other changes that don't modify src or test files"),
    CommitType(name="revert", emoji="⏪", description="Reverts a previous commit"),
]


class CommitTypeRegistry(Mapping):
    """Ordered, read-only mapping of commit type name to CommitType.

    Iteration order is the order in which the types are shown in the prompt.
    """

    def __init__(self, commit_types: Iterable[CommitType] = ()):
        self._types: dict[str, CommitType] = {}
        for commit_type in commit_types:
            # Last declaration wins, first position is kept
            self._types[commit_type.name] = commit_type

    def __getitem__(self, name: str) -> CommitType:
        return self._types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"CommitTypeRegistry({list(self._types)!r})"


def build_registry(
    default_types: Iterable[CommitType],
    declared_types: Optional[Iterable[CommitType]] = None,
) -> CommitTypeRegistry:
    """Build the commit type registry.

    User-declared types replace the defaults entirely: declaring a single
    custom type discards every built-in one.

    Args:
        default_types: The built-in commit types.
        declared_types: Commit types declared by the user, if any.

    Returns:
        The registry of commit types to offer.
    """
    declared = list(declared_types or [])
    if declared:
        return CommitTypeRegistry(declared)
    return CommitTypeRegistry(default_types)
