"""Prompt answers and commit message assembly.

Contains:
- Answers: Raw answers collected from the interactive prompt
- ExtractedAnswers: Answers turned into the fields of a commit
- extract_answers: Decorate the summary and amend the body with footers
- assemble: Build the final conventional commit message
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from commitsmith.commit_types import CommitTypeRegistry
from commitsmith.config import ResolvedConfig
from commitsmith.conventional import format_conventional_message
from commitsmith.shortcodes import replace_emoji_shortcodes, replace_optional


class AssemblyError(Exception):
    """Raised when answers refer to a commit type that is not configured."""

    pass


def _optional_text(value: Any) -> Optional[str]:
    """Return None for missing or blank answers, the stripped text otherwise."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class Answers:
    """Answers collected from one interactive session."""

    commit_type: str
    summary: str
    scope: Optional[str] = None
    body: Optional[str] = None
    is_breaking_change: bool = False
    breaking_change_text: Optional[str] = None
    has_open_issue: bool = False
    issue_reference: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Answers":
        """Create Answers from a prompt result keyed by question name.

        Blank optional answers become None, and follow-up texts are dropped
        when the question they depend on was answered no.
        """
        is_breaking_change = bool(data.get("is_breaking_change", False))
        has_open_issue = bool(data.get("has_open_issue", False))

        return cls(
            commit_type=str(data["commit_type"]),
            summary=str(data.get("summary", "")).strip(),
            scope=_optional_text(data.get("scope")),
            body=_optional_text(data.get("body")),
            is_breaking_change=is_breaking_change,
            breaking_change_text=(
                _optional_text(data.get("breaking_change_text")) if is_breaking_change else None
            ),
            has_open_issue=has_open_issue,
            issue_reference=(
                _optional_text(data.get("issue_reference")) if has_open_issue else None
            ),
        )


@dataclass(frozen=True)
class ExtractedAnswers:
    """The fields of a commit, ready for formatting or committing."""

    commit_type: str
    scope: Optional[str]
    summary: str
    body: Optional[str]
    is_breaking_change: bool


def get_summary(
    summary: str,
    use_emoji: bool,
    commit_type: str,
    commit_types: CommitTypeRegistry,
) -> str:
    """Get the summary, prepending the commit type's emoji if enabled.

    Args:
        summary: The summary as typed by the user.
        use_emoji: Whether emoji decoration is enabled.
        commit_type: The selected commit type name.
        commit_types: The configured commit types.

    Returns:
        The summary with shortcodes replaced and, if both emoji is enabled
        and the commit type has one, the emoji prefix.

    Raises:
        AssemblyError: If commit_type is not in commit_types.
    """
    if commit_type not in commit_types:
        raise AssemblyError(f"Unknown commit type: {commit_type!r}")

    emoji = commit_types[commit_type].emoji
    summary = replace_emoji_shortcodes(summary)

    if use_emoji and emoji:
        return f"{emoji} {summary}"
    return summary


def into_breaking_footer(breaking_text: Optional[str]) -> Optional[str]:
    """Turn breaking change text into a `BREAKING CHANGE:` footer."""
    if not breaking_text:
        return None
    return f"BREAKING CHANGE: {breaking_text}"


def get_amended_body(
    body: Optional[str],
    issue_reference: Optional[str],
    breaking_footer: Optional[str],
) -> Optional[str]:
    """Append the footers to the body.

    The issue reference comes first, then the breaking change footer, on
    consecutive lines. A blank line separates the body from the footers.

    Args:
        body: The body text, if any.
        issue_reference: The issue reference footer, if any.
        breaking_footer: The full `BREAKING CHANGE: ...` footer, if any.

    Returns:
        The amended body, or None if every part is absent.
    """
    footers = "\n".join(f for f in (issue_reference, breaking_footer) if f)
    sections = [section for section in (body, footers) if section]
    if not sections:
        return None
    return replace_emoji_shortcodes("\n\n".join(sections))


def extract_answers(answers: Answers, config: ResolvedConfig) -> ExtractedAnswers:
    """Turn prompt answers into the fields of a commit.

    Args:
        answers: The collected answers.
        config: The resolved configuration.

    Returns:
        The extracted commit fields.

    Raises:
        AssemblyError: If the commit type is not configured.
    """
    breaking_footer = None
    if answers.is_breaking_change:
        breaking_footer = into_breaking_footer(answers.breaking_change_text)

    issue_reference = answers.issue_reference if answers.has_open_issue else None

    return ExtractedAnswers(
        commit_type=answers.commit_type,
        scope=replace_optional(answers.scope),
        summary=get_summary(
            answers.summary,
            config.emoji,
            answers.commit_type,
            config.commit_types,
        ),
        body=get_amended_body(answers.body, issue_reference, breaking_footer),
        is_breaking_change=answers.is_breaking_change,
    )


def assemble(answers: Answers, config: ResolvedConfig) -> str:
    """Assemble the conventional commit message for the given answers.

    Args:
        answers: The collected answers.
        config: The resolved configuration.

    Returns:
        The commit message.

    Raises:
        AssemblyError: If the commit type is not configured.
    """
    extracted = extract_answers(answers, config)
    return format_conventional_message(
        extracted.commit_type,
        extracted.scope,
        extracted.summary,
        extracted.body,
        extracted.is_breaking_change,
    )
