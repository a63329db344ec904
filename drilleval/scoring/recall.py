"""
Free-recall scoring.

The learner lists every word they remember for a prompt (a lesson, a
root family) with no cues. Order does not matter; each expected word is
recalled when any entry matches it leniently.
"""

from __future__ import annotations

from typing import Literal, Sequence

from drilleval.answer.compare import compare_answers, is_blank

from .result import ItemResult, MultiItemScoreResult

RecallGrade = Literal["A", "B", "C", "D", "F"]


class RecallScoreResult(MultiItemScoreResult):
    """
    Free-recall result.

    Attributes:
        recalled: Expected words the learner produced
        forgotten: Expected words the learner did not produce
        recall_rate: Share of expected words recalled (0.0-1.0)
        grade: Letter grade for ``recall_rate``
    """

    recalled: tuple[str, ...] = ()
    forgotten: tuple[str, ...] = ()
    recall_rate: float = 0.0
    grade: RecallGrade = "F"


def recall_grade(recall_rate: float) -> RecallGrade:
    """Map a recall rate to a letter grade."""
    if recall_rate >= 0.9:
        return "A"
    if recall_rate >= 0.8:
        return "B"
    if recall_rate >= 0.7:
        return "C"
    if recall_rate >= 0.6:
        return "D"
    return "F"


def recall_feedback(recall_rate: float) -> str:
    if recall_rate >= 0.9:
        return "Excellent memory! You recalled almost everything."
    if recall_rate >= 0.8:
        return "Great job! Your memory is strong for these words."
    if recall_rate >= 0.7:
        return "Good recall! A few words need more practice."
    if recall_rate >= 0.5:
        return "Not bad! Keep practicing to strengthen these connections."
    if recall_rate >= 0.3:
        return "Some words came to mind. Review the forgotten ones."
    return "This is challenging! Review these words and try again."


def score_recall(expected_words: Sequence[str], entries: Sequence[str]) -> RecallScoreResult:
    """
    Score a free-recall attempt.

    Args:
        expected_words: Words the prompt covers
        entries: Words the learner listed, in any order

    Returns:
        RecallScoreResult; entries matching no expected word are
        reported in ``extraneous_items``
    """
    entries = [entry.strip() for entry in entries if not is_blank(entry)]

    items = []
    for word in expected_words:
        match = next((entry for entry in entries if compare_answers(word, entry)), "")
        items.append(
            ItemResult(item_id=word, is_correct=bool(match), correct_answer=word, user_answer=match)
        )

    extra = [entry for entry in entries if not any(compare_answers(word, entry) for word in expected_words)]
    recalled = tuple(item.correct_answer for item in items if item.is_correct)
    forgotten = tuple(item.correct_answer for item in items if not item.is_correct)
    recall_rate = len(recalled) / len(items) if items else 0.0

    return RecallScoreResult.from_items(
        items,
        feedback=recall_feedback(recall_rate),
        extraneous_items=extra,
        recalled=recalled,
        forgotten=forgotten,
        recall_rate=recall_rate,
        grade=recall_grade(recall_rate),
    )
