"""
Category-sort scoring (semantic field exercises).

The learner drags each word into a labelled bucket. A placed word is
correct when its bucket is the word's true category. Unplaced words are
not scored but keep the exercise from counting as correct.
"""

from __future__ import annotations

from typing import Mapping

from drilleval.core.logging import get_logger
from drilleval.exercises import SemanticFieldExercise, SemanticWord

from .result import ItemResult, MultiItemScoreResult

logger = get_logger(__name__)


def _sort_feedback(correct_count: int, total: int, unplaced: int, accuracy: int) -> str:
    if total and correct_count == total:
        if unplaced:
            return f"All placed words are correct. {unplaced} word(s) still to place."
        return "Perfect! All words correctly categorized."
    if correct_count == 0:
        return "Keep trying! Review the word meanings."
    if accuracy >= 80:
        return f"Almost perfect! {correct_count} of {total} correct."
    if accuracy >= 50:
        return f"Good progress! {correct_count} of {total} correct."
    return f"{correct_count} of {total} correct. Keep practicing!"


def score_category_sort(
    ground_truth: Mapping[str, str],
    placements: Mapping[str, str | None],
) -> MultiItemScoreResult:
    """
    Score word placements against their true categories.

    Args:
        ground_truth: Word -> correct category id
        placements: Word -> category id chosen by the learner; a missing
            key or a None value means the word was not placed

    Returns:
        MultiItemScoreResult with one item per placed word; unplaced
        words are listed in ``unscored_items``, placements of words the
        exercise does not contain in ``extraneous_items``
    """
    items = []
    unplaced = []
    for word, category in ground_truth.items():
        chosen = placements.get(word)
        if chosen is None:
            unplaced.append(word)
            continue
        items.append(
            ItemResult(
                item_id=word,
                is_correct=chosen == category,
                correct_answer=category,
                user_answer=chosen,
            )
        )

    extraneous = [word for word in placements if word not in ground_truth and placements[word] is not None]
    correct_count = sum(1 for item in items if item.is_correct)
    accuracy = round(correct_count / len(items) * 100) if items else 0

    logger.debug(
        "Category sort scored",
        extra={"extra_data": {"correct": correct_count, "placed": len(items), "unplaced": len(unplaced)}},
    )
    return MultiItemScoreResult.from_items(
        items,
        feedback=_sort_feedback(correct_count, len(items), len(unplaced), accuracy),
        extraneous_items=extraneous,
        unscored_items=unplaced,
    )


def score_semantic_field(
    exercise: SemanticFieldExercise,
    placements: Mapping[str, str | None],
) -> MultiItemScoreResult:
    """Score placements against a semantic-field exercise."""
    return score_category_sort(exercise.ground_truth, placements)


def correct_grouping(exercise: SemanticFieldExercise) -> dict[str, list[SemanticWord]]:
    """Category id -> its words, in category order (for showing the solution)."""
    grouping: dict[str, list[SemanticWord]] = {category.id: [] for category in exercise.categories}
    for word in exercise.words:
        grouping[word.category].append(word)
    return grouping


def placement_progress(
    exercise: SemanticFieldExercise,
    placements: Mapping[str, str | None],
) -> tuple[int, int]:
    """Return ``(placed, total)`` word counts."""
    placed = sum(1 for word in exercise.words if placements.get(word.arabic) is not None)
    return placed, len(exercise.words)
