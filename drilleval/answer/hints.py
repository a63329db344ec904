"""
Retry hint progression.

An incorrect answer is retried up to a fixed number of attempts with
progressively more revealing hints:

- attempt 1: no letters, encouragement only
- attempt 2: the first letter
- intermediate attempts: a growing share of the answer
- last attempt: the full answer, no further retry

Hints count base letters only; tashkeel travels with its letter and
whitespace is preserved without being counted.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from drilleval.core.config import Settings, get_settings
from drilleval.text.arabic import remove_tashkeel, split_units

RETRY_MESSAGES: tuple[str, ...] = (
    "Errors are part of learning! Each attempt strengthens your memory.",
    "You're building neural pathways. Try again!",
    "Retrieval practice works best when it's challenging. Keep going!",
    "Almost there! Struggling now means remembering later.",
    "Here's the answer. Study it carefully for next time.",
)

SUCCESS_AFTER_RETRY_MESSAGE = "The struggle made this stronger in your memory!"

ELLIPSIS = "..."


class RetryState(BaseModel):
    """
    Hint state for one attempt.

    Attributes:
        attempt_number: 1-based attempt number (clamped to max_attempts)
        max_attempts: Attempts allowed for the exercise
        level: Hint level (equal to the attempt number)
        message: Encouraging message for the learner
        hint_text: Partially revealed answer, None on the first attempt
        revealed_units: Number of answer letters shown in ``hint_text``
        terminal: True on the last attempt, when the full answer is shown
    """

    model_config = ConfigDict(frozen=True)

    attempt_number: int = Field(ge=1)
    max_attempts: int = Field(ge=2)
    level: int
    message: str
    hint_text: str | None = None
    revealed_units: int = 0
    terminal: bool = False

    @property
    def show_full_answer(self) -> bool:
        return self.terminal


class RetryOutcome(BaseModel):
    """How a retried exercise ended."""

    model_config = ConfigDict(frozen=True)

    succeeded_after_retries: bool
    retry_count: int = 0
    message: str = ""


def _is_letter(unit: str) -> bool:
    base = remove_tashkeel(unit)
    return bool(base) and not base.isspace()


def count_letters(answer: str) -> int:
    """Count the letters a hint can reveal (tashkeel and spaces excluded)."""
    return sum(1 for unit in split_units(answer) if _is_letter(unit))


def reveal_prefix(answer: str, count: int) -> str:
    """
    Reveal the first ``count`` letters of ``answer``.

    Tashkeel stays attached to revealed letters and spaces between
    revealed words are kept. When letters remain hidden the result ends
    with ``...``.

    Args:
        answer: Full answer
        count: Number of letters to show

    Returns:
        Partially revealed answer
    """
    if count <= 0:
        return ""
    units = split_units(answer.strip())
    total = sum(1 for unit in units if _is_letter(unit))
    if count >= total:
        return answer.strip()

    shown: list[str] = []
    revealed = 0
    for unit in units:
        if revealed >= count:
            break
        shown.append(unit)
        if _is_letter(unit):
            revealed += 1
    return "".join(shown).rstrip() + ELLIPSIS


def reveal_count(
    answer: str,
    attempt_number: int,
    max_attempts: int,
    settings: Settings | None = None,
) -> int:
    """
    Number of letters revealed at ``attempt_number``.

    The count is non-decreasing in the attempt number: 0 on the first
    attempt, 1 on the second, then ``ceil(letters * fraction)`` on the
    intermediate attempts, and every letter on the last attempt. The
    fraction comes from INTERMEDIATE_REVEAL_FRACTIONS when it has one
    entry per intermediate attempt (0.4 then 0.6 for five attempts);
    otherwise it grows linearly from FIRST_REVEAL_FRACTION to
    LAST_REVEAL_FRACTION.
    """
    settings = settings or get_settings()
    total = count_letters(answer)
    if attempt_number <= 1:
        return 0
    if attempt_number >= max_attempts:
        return total
    if attempt_number == 2:
        return min(1, total)

    table = settings.INTERMEDIATE_REVEAL_FRACTIONS
    span = max_attempts - 3
    if len(table) == span:
        fraction = table[attempt_number - 3]
    else:
        progress = (attempt_number - 2) / span
        fraction = settings.FIRST_REVEAL_FRACTION + progress * (
            settings.LAST_REVEAL_FRACTION - settings.FIRST_REVEAL_FRACTION
        )
    return min(total, max(1, math.ceil(total * fraction)))


def _message_for(attempt_number: int, max_attempts: int) -> str:
    if attempt_number >= max_attempts:
        return RETRY_MESSAGES[-1]
    return RETRY_MESSAGES[min(attempt_number - 1, len(RETRY_MESSAGES) - 2)]


def get_retry_hint(
    answer: str,
    attempt_number: int,
    max_attempts: int | None = None,
    settings: Settings | None = None,
) -> RetryState:
    """
    Build the hint state for an attempt.

    Out-of-range attempt numbers are clamped, so asking past the last
    attempt returns the exhausted state again.

    Args:
        answer: The correct answer
        attempt_number: 1-based attempt number
        max_attempts: Attempts allowed (defaults to MAX_RETRY_ATTEMPTS)
        settings: Engine settings

    Returns:
        RetryState for the (clamped) attempt
    """
    settings = settings or get_settings()
    max_attempts = max_attempts or settings.MAX_RETRY_ATTEMPTS
    attempt = max(1, min(attempt_number, max_attempts))
    terminal = attempt == max_attempts

    if attempt == 1:
        hint_text = None
        revealed = 0
    elif terminal:
        hint_text = answer.strip()
        revealed = count_letters(answer)
    else:
        revealed = reveal_count(answer, attempt, max_attempts, settings)
        hint_text = reveal_prefix(answer, revealed)

    return RetryState(
        attempt_number=attempt,
        max_attempts=max_attempts,
        level=attempt,
        message=_message_for(attempt, max_attempts),
        hint_text=hint_text,
        revealed_units=revealed,
        terminal=terminal,
    )


class RetryProgression(BaseModel):
    """
    Per-exercise retry state machine.

    ``attempt_number`` is 0 until the first incorrect submission
    (unattempted); each incorrect submission advances it until
    ``max_attempts`` is reached (exhausted). A correct submission ends
    the machine.

    Example:
        >>> progression = RetryProgression(answer="كِتَاب", max_attempts=3)
        >>> progression.record_incorrect().hint_text is None
        True
        >>> progression.record_incorrect().hint_text
        'كِ...'
    """

    answer: str
    max_attempts: int = Field(default_factory=lambda: get_settings().MAX_RETRY_ATTEMPTS, ge=2)
    attempt_number: int = Field(default=0, ge=0)

    @property
    def exhausted(self) -> bool:
        return self.attempt_number >= self.max_attempts

    @property
    def can_retry(self) -> bool:
        return not self.exhausted

    @property
    def current(self) -> RetryState | None:
        """Hint state of the latest attempt, None while unattempted."""
        if self.attempt_number == 0:
            return None
        return get_retry_hint(self.answer, self.attempt_number, self.max_attempts)

    def record_incorrect(self) -> RetryState:
        """Register an incorrect submission and return the next hint state."""
        if not self.exhausted:
            self.attempt_number += 1
        return get_retry_hint(self.answer, self.attempt_number, self.max_attempts)

    def record_correct(self) -> RetryOutcome:
        """Register a correct submission and end the machine."""
        retries = self.attempt_number
        self.attempt_number = 0
        return RetryOutcome(
            succeeded_after_retries=retries > 0,
            retry_count=retries,
            message=SUCCESS_AFTER_RETRY_MESSAGE if retries > 0 else "",
        )
