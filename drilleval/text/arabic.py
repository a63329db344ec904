"""
Arabic text utilities for answer normalization and comparison.

Learners may type answers with or without tashkeel (diacritical marks)
and with irregular spacing. The helpers here canonicalize text so that
comparisons can ignore those differences, and expose the structural
pieces (base letters with their attached marks) the diff engine and
error classifier work on.

Tashkeel code points handled:
    U+064B-U+064D  tanween (fathatan, dammatan, kasratan)
    U+064E-U+0650  fatha, damma, kasra
    U+0651         shadda
    U+0652         sukun
    U+0653-U+065F  maddah, hamza marks and other Quranic marks
    U+0670         superscript (dagger) alef
"""

from __future__ import annotations

import re
import unicodedata
from enum import Enum

TASHKEEL_PATTERN = re.compile("[\u064B-\u065F\u0670]")

# Shadda and sukun are kept by partial scaffolding
_NON_STRUCTURAL_TASHKEEL = re.compile("[\u064B-\u0650\u0653-\u065F\u0670]")

ARABIC_PATTERN = re.compile("[\u0600-\u06FF\u0750-\u077F]")

_WHITESPACE = re.compile(r"\s+")


class TashkeelLevel(str, Enum):
    """How much tashkeel to show when scaffolding a prompt."""

    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


def remove_tashkeel(text: str) -> str:
    """Remove all tashkeel from ``text``."""
    return TASHKEEL_PATTERN.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def normalize(text: str) -> str:
    """
    Canonicalize text for lenient comparison.

    Steps:
    1. Remove tashkeel
    2. Collapse whitespace runs and trim
    3. Case-fold (Arabic letters have no case, so only other scripts change)

    The result is idempotent: ``normalize(normalize(s)) == normalize(s)``.

    Args:
        text: Raw text (may be empty)

    Returns:
        Normalized text
    """
    if not text:
        return ""
    return collapse_whitespace(remove_tashkeel(text)).casefold()


def is_tashkeel(char: str) -> bool:
    """Check if a single character is a tashkeel mark."""
    return len(char) == 1 and TASHKEEL_PATTERN.match(char) is not None


def extract_tashkeel(text: str) -> list[str]:
    """Return the tashkeel marks of ``text`` in order."""
    return TASHKEEL_PATTERN.findall(text)


def has_tashkeel(text: str) -> bool:
    return TASHKEEL_PATTERN.search(text) is not None


def count_tashkeel(text: str) -> int:
    return len(extract_tashkeel(text))


def is_arabic_text(text: str) -> bool:
    """Check if ``text`` contains any Arabic-block character."""
    return ARABIC_PATTERN.search(text) is not None


def _is_combining(char: str) -> bool:
    return is_tashkeel(char) or unicodedata.combining(char) != 0


def split_units(text: str) -> list[str]:
    """
    Split text into grapheme-equivalent units.

    A unit is a base character followed by every combining mark attached
    to it, so an Arabic letter and its tashkeel travel together.
    Combining marks with no base (at the start, or after whitespace)
    form a unit of their own.

    Args:
        text: Text to split

    Returns:
        List of units; ``"".join(split_units(s)) == s``
    """
    units: list[str] = []
    for char in text:
        if units and _is_combining(char) and not units[-1][-1].isspace():
            units[-1] += char
        else:
            units.append(char)
    return units


def letter_marks(text: str) -> list[tuple[str, tuple[str, ...]]]:
    """
    Pair every non-space base letter with the tashkeel attached to it.

    Orphan marks (no base letter in front of them) are credited to the
    next letter. Base letters are case-folded so that the sequence lines
    up with ``normalize(text)``.

    Returns:
        List of ``(base_letter, sorted_marks)`` tuples
    """
    pairs: list[tuple[str, tuple[str, ...]]] = []
    pending: list[str] = []
    for unit in split_units(text):
        marks = extract_tashkeel(unit)
        base = remove_tashkeel(unit)
        if not base:
            pending.extend(marks)
            continue
        if base.isspace():
            continue
        pairs.append((base.casefold(), tuple(sorted(pending + marks))))
        pending = []
    if pending and pairs:
        base, marks = pairs[-1]
        pairs[-1] = (base, tuple(sorted(marks + tuple(pending))))
    return pairs


def tokenize(text: str) -> list[str]:
    """Split text on whitespace, dropping empty tokens."""
    return text.split()


def apply_tashkeel_scaffolding(text: str, level: TashkeelLevel | str) -> str:
    """
    Fade tashkeel from a prompt according to the scaffolding level.

    - full: text unchanged
    - partial: only structural marks (shadda, sukun) are kept
    - none: every mark removed

    Args:
        text: Text with full tashkeel
        level: Scaffolding level

    Returns:
        Text with the requested amount of tashkeel
    """
    level = TashkeelLevel(level)
    if level is TashkeelLevel.FULL:
        return text
    if level is TashkeelLevel.NONE:
        return remove_tashkeel(text)
    return _NON_STRUCTURAL_TASHKEEL.sub("", text)


def tashkeel_level_for_strength(strength: float) -> TashkeelLevel:
    """
    Pick a scaffolding level from a word's mastery strength (0-100).

    New/learning words (< 40) get full tashkeel, familiar words (40-69)
    keep structural marks only, mastered words (>= 70) get none.
    """
    if strength >= 70:
        return TashkeelLevel.NONE
    if strength >= 40:
        return TashkeelLevel.PARTIAL
    return TashkeelLevel.FULL
