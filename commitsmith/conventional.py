"""Conventional commit parsing and formatting.

Contains:
- ParsedSummary: The parts of a conventional commit header
- parse_summary: Parse a `type(scope)!: summary` header line
- is_conventional: Check whether a message starts with a valid header
- format_conventional_message: Build a message from its parts
"""

import re
from dataclasses import dataclass
from typing import Optional

# type(scope)!: summary
_HEADER_PATTERN = re.compile(
    r"^(?P<type>[\w-]+)"
    r"(?:\((?P<scope>[^()\r\n]+)\))?"
    r"(?P<breaking>!)?"
    r": (?P<summary>\S.*)$"
)


@dataclass(frozen=True)
class ParsedSummary:
    """The parts of a conventional commit header line."""

    commit_type: str
    scope: Optional[str]
    is_breaking_change: bool
    summary: str


def parse_summary(line: str) -> ParsedSummary:
    """Parse a conventional commit header line.

    Args:
        line: The first line of a commit message.

    Returns:
        The parsed header.

    Raises:
        ValueError: If the line is not a conventional commit header.
    """
    match = _HEADER_PATTERN.match(line.strip())
    if not match:
        raise ValueError(f"Not a conventional commit header: {line!r}")

    return ParsedSummary(
        commit_type=match.group("type"),
        scope=match.group("scope"),
        is_breaking_change=match.group("breaking") is not None,
        summary=match.group("summary").strip(),
    )


def is_conventional(message: str) -> bool:
    """Return True if the message starts with a conventional commit header.

    Git comment lines (starting with '#') and leading blank lines are ignored.
    """
    for line in message.splitlines():
        if not line.strip() or line.startswith("#"):
            continue
        try:
            parse_summary(line)
            return True
        except ValueError:
            return False
    return False


def format_conventional_message(
    commit_type: str,
    scope: Optional[str],
    summary: str,
    body: Optional[str] = None,
    is_breaking_change: bool = False,
) -> str:
    """Format a conventional commit message.

    Format:
        <type>(<scope>)!: <summary>

        <body>

    Args:
        commit_type: The commit type (e.g., "feat").
        scope: Optional scope, omitted from the header when None or empty.
        summary: The summary line text.
        body: Optional body, including any footers.
        is_breaking_change: Whether to mark the header with '!'.

    Returns:
        The formatted message.
    """
    header = commit_type
    if scope:
        header += f"({scope})"
    if is_breaking_change:
        header += "!"
    header += f": {summary}"

    if body:
        return f"{header}\n\n{body}"
    return header
