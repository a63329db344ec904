"""
Shared result shape for exercises with several sub-answers.

Every composite scorer (cloze, category sort, sequence reconstruction,
free recall) returns a MultiItemScoreResult or a subclass of it, so the
session layer can treat all composite drills alike.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, computed_field

from drilleval.answer.answer_hash import AnswerResult
from drilleval.answer.graders import AverageGrader


class FeedbackTier(str, Enum):
    """Coarse feedback band for a composite answer."""

    PERFECT = "perfect"
    ALMOST = "almost"
    PRACTICE = "practice"


class ItemResult(BaseModel):
    """
    Verdict for one sub-answer.

    Attributes:
        item_id: Blank index, word, or token identifying the item
        is_correct: Whether the sub-answer is correct
        correct_answer: Expected value for the item
        user_answer: What the learner gave ("" if nothing)
        answer: Full evaluation detail when the item is free text
    """

    model_config = ConfigDict(frozen=True)

    item_id: str
    is_correct: bool
    correct_answer: str
    user_answer: str = ""
    answer: AnswerResult | None = None

    @property
    def score(self) -> float:
        return 1.0 if self.is_correct else 0.0


def feedback_tier(is_correct: bool, correct_count: int) -> FeedbackTier:
    """Map a verdict and the number of correct items to a tier."""
    if is_correct:
        return FeedbackTier.PERFECT
    if correct_count == 0:
        return FeedbackTier.PRACTICE
    return FeedbackTier.ALMOST


class MultiItemScoreResult(BaseModel):
    """
    Aggregate verdict for a composite answer.

    ``is_correct`` holds only when every scored item is correct, at
    least one item was scored, nothing extraneous was submitted and no
    item was left unscored.

    Attributes:
        per_item_results: Item verdicts in exercise order
        correct_count: Number of correct items
        total_count: Number of scored items
        is_correct: Aggregate verdict
        feedback_tier: Coarse feedback band
        feedback: Learner-facing message
        extraneous_items: Submitted items the exercise does not contain
        unscored_items: Items the learner left unanswered and that were
            kept out of the denominator
    """

    model_config = ConfigDict(frozen=True)

    per_item_results: tuple[ItemResult, ...] = ()
    correct_count: int = 0
    total_count: int = 0
    is_correct: bool = False
    feedback_tier: FeedbackTier = FeedbackTier.PRACTICE
    feedback: str = ""
    extraneous_items: tuple[str, ...] = ()
    unscored_items: tuple[str, ...] = ()

    @computed_field
    @property
    def accuracy(self) -> int:
        """Percentage of scored items that are correct (0-100)."""
        if not self.total_count:
            return 0
        return round(self.correct_count / self.total_count * 100)

    @property
    def score(self) -> float:
        """Fraction of scored items that are correct (0.0-1.0)."""
        return AverageGrader().grade(self.per_item_results)

    @classmethod
    def from_items(
        cls,
        items: Iterable[ItemResult],
        feedback: str = "",
        extraneous_items: Iterable[str] = (),
        unscored_items: Iterable[str] = (),
        **fields: Any,
    ) -> "MultiItemScoreResult":
        """
        Build a result, deriving counts, verdict and tier from the items.

        Args:
            items: Scored item verdicts
            feedback: Learner-facing message
            extraneous_items: Items the exercise does not contain
            unscored_items: Items left out of the denominator
            **fields: Extra fields of a subclass

        Returns:
            Result instance of ``cls``
        """
        items = tuple(items)
        extraneous_items = tuple(extraneous_items)
        unscored_items = tuple(unscored_items)
        correct_count = sum(1 for item in items if item.is_correct)
        is_correct = (
            bool(items)
            and correct_count == len(items)
            and not extraneous_items
            and not unscored_items
        )
        return cls(
            per_item_results=items,
            correct_count=correct_count,
            total_count=len(items),
            is_correct=is_correct,
            feedback_tier=feedback_tier(is_correct, correct_count),
            feedback=feedback,
            extraneous_items=extraneous_items,
            unscored_items=unscored_items,
            **fields,
        )
