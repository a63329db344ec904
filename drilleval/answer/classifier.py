"""
Error classification for incorrect answers.

Each incorrect answer gets exactly one category from a fixed taxonomy,
so the learner can be told *why* it is wrong (missing tashkeel, a
commonly confused letter, a word-order swap, ...). Rules are checked in
a fixed priority order and the first match wins.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from drilleval.answer.compare import is_blank
from drilleval.answer.diff import CharDiffResult, DiffOp, compute_char_diff, edit_distance
from drilleval.core.config import Settings, get_settings
from drilleval.core.logging import get_logger
from drilleval.text.arabic import letter_marks, normalize, remove_tashkeel, tokenize
from drilleval.text.lexicon import Lexicon, default_lexicon

logger = get_logger(__name__)


class ErrorClassification(str, Enum):
    """Why an answer is wrong."""

    TASHKEEL_MISSING = "tashkeel_missing"
    TASHKEEL_WRONG = "tashkeel_wrong"
    LETTER_CONFUSION = "letter_confusion"
    WORD_ORDER = "word_order"
    VOCABULARY_UNKNOWN = "vocabulary_unknown"
    PARTIAL_MATCH = "partial_match"
    SPELLING_ERROR = "spelling_error"
    TYPO = "typo"


ERROR_TYPE_LABELS: dict[ErrorClassification, str] = {
    ErrorClassification.TASHKEEL_MISSING: "Missing Tashkeel",
    ErrorClassification.TASHKEEL_WRONG: "Wrong Tashkeel",
    ErrorClassification.LETTER_CONFUSION: "Letter Confusion",
    ErrorClassification.WORD_ORDER: "Word Order",
    ErrorClassification.VOCABULARY_UNKNOWN: "Unknown Vocabulary",
    ErrorClassification.PARTIAL_MATCH: "Partial Match",
    ErrorClassification.SPELLING_ERROR: "Spelling Error",
    ErrorClassification.TYPO: "Typo",
}

_EXPLANATIONS: dict[ErrorClassification, str] = {
    ErrorClassification.TASHKEEL_MISSING: (
        "Your answer needs diacritical marks (tashkeel). Try adding the vowel marks."
    ),
    ErrorClassification.TASHKEEL_WRONG: (
        "The letters are correct, but check your diacritical marks (tashkeel)."
    ),
    ErrorClassification.LETTER_CONFUSION: "Check for commonly confused letters in your answer.",
    ErrorClassification.TYPO: "Almost correct! Check for any typing mistakes.",
    ErrorClassification.SPELLING_ERROR: "The spelling needs some work. Review the word carefully.",
    ErrorClassification.PARTIAL_MATCH: "Your answer is on the right track, but not quite complete.",
    ErrorClassification.WORD_ORDER: "The words are correct, but the order needs adjustment.",
    ErrorClassification.VOCABULARY_UNKNOWN: "Review this word - it may need more practice.",
}


class LetterConfusion(BaseModel):
    """A base letter the learner swapped for a commonly confused one."""

    model_config = ConfigDict(frozen=True)

    expected: str
    actual: str
    position: int = Field(ge=0, description="Index of the unit in the expected answer")


class ErrorAnalysis(BaseModel):
    """
    Classification plus diagnostic details.

    Attributes:
        error_type: Dominant error category
        details: Short English description of what was detected
        letter_confusions: Confused letter pairs (letter_confusion only)
    """

    model_config = ConfigDict(frozen=True)

    error_type: ErrorClassification
    details: str = ""
    letter_confusions: tuple[LetterConfusion, ...] = ()


def _base(unit: str) -> str:
    return remove_tashkeel(unit).casefold()


def _classify_tashkeel(expected: str, actual: str) -> ErrorAnalysis:
    # Normalized forms are equal here; only marks (or spacing/case) differ
    exp_pairs = letter_marks(expected)
    act_pairs = letter_marks(actual)
    exp_bases = [base for base, _ in exp_pairs]
    act_bases = [base for base, _ in act_pairs]
    if exp_bases != act_bases or exp_pairs == act_pairs:
        return ErrorAnalysis(
            error_type=ErrorClassification.TYPO,
            details="Answer differs only in spacing or letter case",
        )

    subset = all(
        set(act_marks) <= set(exp_marks)
        for (_, exp_marks), (_, act_marks) in zip(exp_pairs, act_pairs)
    )
    if subset:
        return ErrorAnalysis(
            error_type=ErrorClassification.TASHKEEL_MISSING,
            details="Answer missing diacritical marks",
        )
    return ErrorAnalysis(
        error_type=ErrorClassification.TASHKEEL_WRONG,
        details="Incorrect diacritical marks used",
    )


def find_letter_confusions(diff: CharDiffResult, lexicon: Lexicon | None = None) -> list[LetterConfusion]:
    """
    Collect base-letter substitutions in ``diff``.

    Substitutions that only change tashkeel are skipped. The returned
    list is empty unless *every* base-letter substitution is a known
    confusion pair.

    Args:
        diff: Diff between the expected and the learner's answer
        lexicon: Letter tables (defaults to the packaged lexicon)

    Returns:
        Confused letter pairs in expected order
    """
    lexicon = lexicon or default_lexicon()
    confusions = []
    for entry in diff.operations(DiffOp.SUBSTITUTE):
        exp_base, act_base = _base(entry.expected), _base(entry.actual)
        if exp_base == act_base:
            continue
        if not lexicon.is_confusable(exp_base, act_base):
            return []
        confusions.append(LetterConfusion(expected=exp_base, actual=act_base, position=entry.position))
    return confusions


def _has_common_substring(a: str, b: str, length: int = 2) -> bool:
    grams = {a[i:i + length] for i in range(len(a) - length + 1)}
    return any(b[i:i + length] in grams for i in range(len(b) - length + 1))


def analyze_error(
    expected: str,
    actual: str | None,
    diff: CharDiffResult | None = None,
    lexicon: Lexicon | None = None,
    settings: Settings | None = None,
) -> ErrorAnalysis:
    """
    Classify an incorrect answer and describe the error.

    Rules, first match wins:
    1. tashkeel_missing / tashkeel_wrong: letters equal, marks differ
    2. letter_confusion: 1-2 confusable base-letter substitutions
    3. word_order: same tokens, different order
    4. typo / spelling_error: small normalized edit distance
    5. vocabulary_unknown: nothing in common with the expected answer
    6. partial_match: everything else

    A blank answer is classified as vocabulary_unknown.

    Args:
        expected: The correct answer
        actual: The learner's answer
        diff: Precomputed diff of the raw strings (computed if omitted)
        lexicon: Letter tables (defaults to the packaged lexicon)
        settings: Threshold settings (defaults to global settings)

    Returns:
        ErrorAnalysis with exactly one error type
    """
    if is_blank(actual):
        return ErrorAnalysis(
            error_type=ErrorClassification.VOCABULARY_UNKNOWN,
            details="No answer provided",
        )

    settings = settings or get_settings()
    norm_expected = normalize(expected)
    norm_actual = normalize(actual)

    if norm_expected == norm_actual:
        return _classify_tashkeel(expected, actual)

    distance = edit_distance(norm_expected, norm_actual)

    if distance <= settings.LETTER_CONFUSION_MAX_DISTANCE:
        diff = diff if diff is not None else compute_char_diff(expected, actual)
        confusions = find_letter_confusions(diff, lexicon)
        if 1 <= len(confusions) <= 2:
            pairs = ", ".join(f"{c.actual} → {c.expected}" for c in confusions)
            return ErrorAnalysis(
                error_type=ErrorClassification.LETTER_CONFUSION,
                details=f"Letter confusion: {pairs}",
                letter_confusions=tuple(confusions),
            )

    exp_tokens = tokenize(norm_expected)
    act_tokens = tokenize(norm_actual)
    if len(exp_tokens) >= 2 and Counter(exp_tokens) == Counter(act_tokens):
        return ErrorAnalysis(
            error_type=ErrorClassification.WORD_ORDER,
            details="Words are correct but in the wrong order",
        )

    if distance == 1:
        return ErrorAnalysis(error_type=ErrorClassification.TYPO, details="Minor typing error detected")
    threshold = max(1, round(settings.SPELLING_DISTANCE_RATIO * len(norm_expected)))
    if distance <= threshold:
        return ErrorAnalysis(
            error_type=ErrorClassification.SPELLING_ERROR,
            details="Spelling error in Arabic",
        )

    if not _has_common_substring(norm_expected, norm_actual) and not set(exp_tokens) & set(act_tokens):
        return ErrorAnalysis(
            error_type=ErrorClassification.VOCABULARY_UNKNOWN,
            details="Answer does not match expected word",
        )

    return ErrorAnalysis(error_type=ErrorClassification.PARTIAL_MATCH, details="Answer partially correct")


def classify(
    expected: str,
    actual: str | None,
    diff: CharDiffResult | None = None,
    lexicon: Lexicon | None = None,
    settings: Settings | None = None,
) -> ErrorClassification:
    """Return the dominant error category for an incorrect answer."""
    analysis = analyze_error(expected, actual, diff, lexicon, settings)
    logger.debug(
        "Classified answer",
        extra={"extra_data": {"error_type": analysis.error_type.value, "details": analysis.details}},
    )
    return analysis.error_type


def get_error_explanation(
    error_type: ErrorClassification | str,
    expected: str = "",
    actual: str = "",
    diff: CharDiffResult | None = None,
) -> str:
    """
    Get a learner-facing explanation for an error category.

    For letter confusions the first confused pair is named when it can
    be recovered from the answers.

    Args:
        error_type: Error category
        expected: The correct answer
        actual: The learner's answer
        diff: Precomputed diff of the raw strings

    Returns:
        English explanation string
    """
    error_type = ErrorClassification(error_type)
    if error_type is ErrorClassification.LETTER_CONFUSION and expected and actual:
        diff = diff if diff is not None else compute_char_diff(expected, actual)
        confusions = find_letter_confusions(diff)
        if confusions:
            first = confusions[0]
            return (
                f'You wrote "{first.actual}" but the correct letter is "{first.expected}". '
                "These letters are commonly confused."
            )
    return _EXPLANATIONS[error_type]


def get_error_type_label(error_type: ErrorClassification | str) -> str:
    """Get the short display label for an error category."""
    return ERROR_TYPE_LABELS[ErrorClassification(error_type)]
