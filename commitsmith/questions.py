"""Interactive questions for building a commit.

The prompt is an ordered list of Question objects. Each question has a
`when` predicate evaluated against the answers collected so far, so
follow-up questions (e.g. the issue reference) are only asked when the
question they depend on was answered yes.

Contains:
- Question, QuestionKind: Declarative question definitions
- build_questions: The commit questions for a resolved config
- ask_questions: Walk the questions with an asker
- questionary_asker: Render a question in the terminal with questionary
- render_commit_type_choice: Format a commit type menu entry
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

import questionary

from commitsmith.commit_types import CommitType, CommitTypeRegistry
from commitsmith.config import ResolvedConfig


class PromptError(Exception):
    """Raised when the prompt is cancelled or its input stream is closed."""

    pass


# Question names, also the keys read by Answers.from_dict
Q_COMMIT_TYPE = "commit_type"
Q_SCOPE = "scope"
Q_SUMMARY = "summary"
Q_BODY = "body"
Q_IS_BREAKING_CHANGE = "is_breaking_change"
Q_BREAKING_CHANGE_TEXT = "breaking_change_text"
Q_HAS_OPEN_ISSUE = "has_open_issue"
Q_ISSUE_REFERENCE = "issue_reference"

Validator = Callable[[str], Union[bool, str]]


class QuestionKind(Enum):
    """How a question is rendered."""

    SELECT = "select"
    TEXT = "text"
    CONFIRM = "confirm"


def _always(answers: dict) -> bool:
    return True


@dataclass
class Question:
    """A single prompt question.

    Attributes:
        name: Key of the answer in the collected answers.
        kind: How the question is rendered.
        message: Text shown to the user.
        when: Predicate on the answers so far; the question is skipped if False.
        validate: Returns True if the input is valid, or an error message.
        default: Default answer.
        choices: (title, value) pairs for SELECT questions.
        completions: Suggestions offered while typing a TEXT answer.
    """

    name: str
    kind: QuestionKind
    message: str
    when: Callable[[dict], bool] = _always
    validate: Optional[Validator] = None
    default: Any = None
    choices: list[tuple[str, str]] = field(default_factory=list)
    completions: list[str] = field(default_factory=list)


Asker = Callable[[Question, dict], Any]


def required(error_message: str) -> Validator:
    """Build a validator that rejects blank input."""

    def validate(text: str) -> Union[bool, str]:
        if text and text.strip():
            return True
        return error_message

    return validate


def answered_yes(name: str) -> Callable[[dict], bool]:
    """Build a predicate that is True when question `name` was answered yes."""

    def when(answers: dict) -> bool:
        return bool(answers.get(name, False))

    return when


def render_commit_type_choice(
    use_emoji: bool,
    commit_type: CommitType,
    commit_types: CommitTypeRegistry,
) -> str:
    """Format a commit type menu entry, aligning descriptions in a column.

    e.g.
        feat:     ✨ A new feature
        refactor: 🔨 A code change that neither fixes a bug nor adds a feature
    """
    use_emoji = use_emoji and commit_type.emoji is not None
    emoji = f"{commit_type.emoji} " if use_emoji else ""

    longest = max(len(name) for name in commit_types)
    width = longest - len(commit_type.name) + (5 if use_emoji else 3)

    return f"{commit_type.name}:{emoji:>{width}}{commit_type.description}"


def build_questions(
    config: ResolvedConfig,
    scopes: Optional[list[str]] = None,
    default_summary: Optional[str] = None,
) -> list[Question]:
    """Build the ordered list of commit questions.

    Args:
        config: The resolved configuration.
        scopes: Scope suggestions (from the commit history).
        default_summary: Pre-filled summary, e.g. from a failed commit.

    Returns:
        The questions, in the order they are asked.
    """
    breaking_changes_enabled = config.breaking_changes
    issues_enabled = config.issues

    return [
        Question(
            name=Q_COMMIT_TYPE,
            kind=QuestionKind.SELECT,
            message="What type of change are you committing?",
            choices=[
                (render_commit_type_choice(config.emoji, t, config.commit_types), t.name)
                for t in config.commit_types.values()
            ],
        ),
        Question(
            name=Q_SCOPE,
            kind=QuestionKind.TEXT,
            message="What is the scope of this change? (press enter to skip)",
            completions=list(scopes or []) if config.autocomplete else [],
        ),
        Question(
            name=Q_SUMMARY,
            kind=QuestionKind.TEXT,
            message="Write a short, imperative tense description of the change.",
            validate=required("A description is required."),
            default=default_summary,
        ),
        Question(
            name=Q_BODY,
            kind=QuestionKind.TEXT,
            message="Provide a longer description of the change. (press enter to skip)",
        ),
        Question(
            name=Q_IS_BREAKING_CHANGE,
            kind=QuestionKind.CONFIRM,
            message="Are there any breaking changes?",
            when=lambda answers: breaking_changes_enabled,
            default=False,
        ),
        Question(
            name=Q_BREAKING_CHANGE_TEXT,
            kind=QuestionKind.TEXT,
            message="Describe the breaking changes in detail:",
            when=answered_yes(Q_IS_BREAKING_CHANGE),
        ),
        Question(
            name=Q_HAS_OPEN_ISSUE,
            kind=QuestionKind.CONFIRM,
            message="Does this change affect any open issues?",
            when=lambda answers: issues_enabled,
            default=False,
        ),
        Question(
            name=Q_ISSUE_REFERENCE,
            kind=QuestionKind.TEXT,
            message='Add the issue reference: (e.g. "fix #123", "re #123")',
            when=answered_yes(Q_HAS_OPEN_ISSUE),
            validate=required(
                "An issue reference is required if this commit is related to an open issue."
            ),
        ),
    ]


def ask_questions(questions: list[Question], asker: Asker) -> dict:
    """Ask each question in order, skipping those whose predicate is False.

    Args:
        questions: The questions, in order.
        asker: Callable that asks one question and returns the answer. It
            receives the answers collected so far.

    Returns:
        Answers keyed by question name.
    """
    answers: dict = {}
    for question in questions:
        if not question.when(answers):
            continue
        answers[question.name] = asker(question, answers)
    return answers


def _build_prompt(question: Question) -> questionary.Question:
    if question.kind is QuestionKind.SELECT:
        return questionary.select(
            question.message,
            choices=[questionary.Choice(title=title, value=value) for title, value in question.choices],
        )

    if question.kind is QuestionKind.CONFIRM:
        return questionary.confirm(question.message, default=bool(question.default))

    default = question.default or ""
    validate = question.validate or (lambda text: True)
    if question.completions:
        return questionary.autocomplete(
            question.message,
            choices=question.completions,
            default=default,
            validate=validate,
        )
    return questionary.text(question.message, default=default, validate=validate)


def questionary_asker(question: Question, answers: dict) -> Any:
    """Ask a question in the terminal.

    Raises:
        PromptError: If the user cancels the prompt or input is closed.
    """
    try:
        answer = _build_prompt(question).unsafe_ask()
    except (KeyboardInterrupt, EOFError):
        raise PromptError("Prompt cancelled, nothing was committed.")

    if answer is None:
        raise PromptError("Prompt cancelled, nothing was committed.")
    return answer


def prompt_answers(
    config: ResolvedConfig,
    scopes: Optional[list[str]] = None,
    default_summary: Optional[str] = None,
    asker: Asker = questionary_asker,
) -> dict:
    """Ask all commit questions for the given config."""
    return ask_questions(build_questions(config, scopes, default_summary), asker)
