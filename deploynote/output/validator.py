"""Structural validator for deploy notes.

The validator is total: whatever the model returned, ``NoteValidator.validate``
hands back a DeployNote that passes every structural check, substituting the
canonical null note when the candidate does not.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from deploynote.drafter.models import ChangeContext, RawCandidate
from deploynote.errors import ValidationError

logger = logging.getLogger(__name__)

TITLE_MARKER = "###"
TEST_SCRIPT_MARKER = "**Test Script**"
LAUNCH_REQUIREMENTS_MARKER = "**Launch Requirements**"

NOTHING_TO_TEST = "Nothing to test"
NO_SPECIAL_REQUIREMENTS = "No special requirements"


class DeployNote(BaseModel):
    """A validated deploy note, safe to store and post."""

    model_config = ConfigDict(frozen=True)

    text: str
    fallback: bool = False
    reasons: tuple[str, ...] = ()

    @property
    def is_null_note(self) -> bool:
        return _test_script_body(self.text) == NOTHING_TO_TEST


def null_note(title: str, url: str) -> str:
    """Render the canonical null note for a pull request."""
    return (
        f"{TITLE_MARKER} [{title}]({url})\n"
        "\n"
        f"{TEST_SCRIPT_MARKER}\n"
        "\n"
        f"{NOTHING_TO_TEST}\n"
        "\n"
        f"{LAUNCH_REQUIREMENTS_MARKER}\n"
        "\n"
        f"{NO_SPECIAL_REQUIREMENTS}"
    )


def _test_script_body(text: str) -> str:
    start = text.find(TEST_SCRIPT_MARKER)
    if start == -1:
        return ""
    start += len(TEST_SCRIPT_MARKER)
    end = text.find(LAUNCH_REQUIREMENTS_MARKER, start)
    if end == -1:
        return ""
    return text[start:end].strip()


def check_structure(text: str | None) -> list[str]:
    """Return every structural problem found in ``text`` (empty list if none)."""
    if text is None or not text.strip():
        return ["deploy note is empty"]

    problems: list[str] = []
    if TEST_SCRIPT_MARKER not in text:
        problems.append(f"missing {TEST_SCRIPT_MARKER} section")
    if LAUNCH_REQUIREMENTS_MARKER not in text:
        problems.append(f"missing {LAUNCH_REQUIREMENTS_MARKER} section")
    if TITLE_MARKER not in text:
        problems.append(f"missing PR title header ({TITLE_MARKER} [PR Title](PR URL))")
    if problems:
        return problems

    ts_end = text.find(TEST_SCRIPT_MARKER) + len(TEST_SCRIPT_MARKER)
    if text.find(LAUNCH_REQUIREMENTS_MARKER, ts_end) == -1:
        problems.append(f"{LAUNCH_REQUIREMENTS_MARKER} must follow {TEST_SCRIPT_MARKER}")
    elif not _test_script_body(text):
        problems.append(
            f"{TEST_SCRIPT_MARKER} section is empty (at minimum '{NOTHING_TO_TEST}')"
        )
    return problems


class NoteValidator:
    """Turns an untrusted RawCandidate into a DeployNote.

    Never raises: an invalid candidate is logged and replaced with the null
    note built from the change title and URL.
    """

    def validate(self, candidate: RawCandidate | str | None, context: ChangeContext) -> DeployNote:
        text = candidate.text if isinstance(candidate, RawCandidate) else candidate
        try:
            self._check(text)
        except ValidationError as e:
            logger.warning("Deploy note rejected (%s). Using null deploy note.", e)
            return DeployNote(
                text=null_note(context.title, context.url),
                fallback=True,
                reasons=tuple(e.reasons),
            )
        logger.info("Deploy note validation passed")
        return DeployNote(text=text)

    @staticmethod
    def _check(text: str | None) -> None:
        problems = check_structure(text)
        if problems:
            raise ValidationError(problems)
