"""
Answer comparison (lenient and strict).

Two comparator entry points are exposed so callers can pick one
statically:

- ``compare_answers``: lenient, ignores tashkeel, spacing and case
- ``compare_answers_strict``: tashkeel must match exactly; only
  surrounding whitespace is ignored

Both go through ``canonical_form`` so the two policies cannot drift apart.
"""

from __future__ import annotations

from enum import Enum

from drilleval.text.arabic import is_arabic_text, normalize


class ComparisonPolicy(str, Enum):
    """Strictness used when comparing a learner answer to the expected one."""

    LENIENT = "lenient"
    STRICT = "strict"


def canonical_form(text: str, policy: ComparisonPolicy = ComparisonPolicy.LENIENT) -> str:
    """
    Canonicalize ``text`` for comparison under ``policy``.

    Args:
        text: Raw text
        policy: LENIENT normalizes fully, STRICT only trims the ends

    Returns:
        Canonical text
    """
    if ComparisonPolicy(policy) is ComparisonPolicy.STRICT:
        return text.strip()
    return normalize(text)


def is_blank(text: str | None) -> bool:
    """Check if an answer is missing or whitespace-only."""
    return text is None or not text.strip()


def compare(expected: str, actual: str | None, policy: ComparisonPolicy = ComparisonPolicy.LENIENT) -> bool:
    """
    Compare a learner answer with the expected answer.

    Args:
        expected: The correct answer
        actual: The learner's answer
        policy: Comparison strictness

    Returns:
        True if the answers match; a blank answer never matches
    """
    if is_blank(actual):
        return False
    return canonical_form(actual, policy) == canonical_form(expected, policy)


def compare_answers(expected: str, actual: str | None) -> bool:
    """Lenient comparison: tashkeel, spacing and case are ignored."""
    return compare(expected, actual, ComparisonPolicy.LENIENT)


def compare_answers_strict(expected: str, actual: str | None) -> bool:
    """Strict comparison: tashkeel must match, surrounding whitespace is ignored."""
    return compare(expected, actual, ComparisonPolicy.STRICT)


def policy_for(require_tashkeel: bool, expected: str) -> ComparisonPolicy:
    """
    Select the comparison policy for an exercise attempt.

    Tashkeel can only be required of Arabic answers; an English meaning
    is always compared leniently.

    Args:
        require_tashkeel: Challenge flag supplied by the session
        expected: The expected answer

    Returns:
        ComparisonPolicy to apply
    """
    if require_tashkeel and is_arabic_text(expected):
        return ComparisonPolicy.STRICT
    return ComparisonPolicy.LENIENT
