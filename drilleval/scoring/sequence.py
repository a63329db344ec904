"""
Sequence-reconstruction scoring (sentence unscramble).

The learner arranges word tiles into a sentence; some tiles are
distractors that do not belong. Three checks are made independently:

- missing words: expected tokens the arrangement lacks
- included distractors: distractor tiles the arrangement uses
- order: the arrangement's sentence tokens equal the expected sequence

so feedback can name the specific problem.
"""

from __future__ import annotations

from typing import Collection, Sequence

from drilleval.core.logging import get_logger
from drilleval.exercises import SentenceUnscrambleExercise
from drilleval.text.arabic import normalize

from .result import ItemResult, MultiItemScoreResult

logger = get_logger(__name__)


class SequenceScoreResult(MultiItemScoreResult):
    """
    Unscramble result.

    Attributes:
        missing_words: Expected tokens not used
        included_distractors: Distractor tokens used
        extraneous_words: Tokens that are neither expected nor distractors
        order_correct: Sentence tokens are in the expected order
        correct_positions: Positions holding the expected token
        points: 0-100 score with penalties for distractors and missing words
    """

    missing_words: tuple[str, ...] = ()
    included_distractors: tuple[str, ...] = ()
    extraneous_words: tuple[str, ...] = ()
    order_correct: bool = False
    correct_positions: int = 0
    points: int = 0


def _take(candidates: list[int], tokens: Sequence[str], token: str) -> int | None:
    for index in candidates:
        if tokens[index] == token:
            candidates.remove(index)
            return index
    return None


def _sequence_feedback(
    is_correct: bool,
    included: Sequence[str],
    extraneous: Sequence[str],
    missing: Sequence[str],
) -> str:
    if is_correct:
        return "Perfect! The sentence is correct."
    if included or extraneous:
        return "Some words don't belong in this sentence. Try removing them."
    if missing:
        return f"You're missing {len(missing)} word(s). Include all the correct words."
    return "The words are correct, but the order needs adjustment."


def _points(is_correct: bool, correct_positions: int, total: int, included: int, missing: int) -> int:
    if is_correct:
        return 100
    position_score = correct_positions / total * 70 if total else 0
    return round(max(0, position_score - included * 10 - missing * 15))


def score_sequence(
    expected: Sequence[str],
    arrangement: Sequence[str],
    distractors: Sequence[str] = (),
    distractor_positions: Collection[int] = (),
) -> SequenceScoreResult:
    """
    Score a learner's arrangement of word tiles.

    Each arranged token is matched, in this order, to an unused expected
    token with identical text, to a distractor with identical text, to an
    unused expected token under lenient comparison, then to a distractor
    under lenient comparison; anything else is extraneous. Exact matches
    go first so a distractor differing from a sentence word only by
    tashkeel is still recognised as a distractor.

    Args:
        expected: Sentence tokens in the correct order
        arrangement: Tokens as arranged by the learner
        distractors: Tokens that do not belong in the sentence
        distractor_positions: Arrangement indices known to hold distractor
            tiles; these count as included distractors whatever their text

    Returns:
        SequenceScoreResult with one item per expected position
    """
    expected = [token.strip() for token in expected]
    distractors = [token.strip() for token in distractors]
    norm_expected = [normalize(token) for token in expected]
    norm_distractors = {normalize(token) for token in distractors}

    unused = list(range(len(expected)))
    placed: list[str] = []
    included: list[str] = []
    extraneous: list[str] = []

    for position, raw in enumerate(arrangement):
        token = raw.strip()
        if not token:
            continue
        if position in distractor_positions:
            included.append(token)
        elif _take(unused, expected, token) is not None:
            placed.append(token)
        elif token in distractors:
            included.append(token)
        elif _take(unused, norm_expected, normalize(token)) is not None:
            placed.append(token)
        elif normalize(token) in norm_distractors:
            included.append(token)
        else:
            extraneous.append(token)

    missing = [expected[index] for index in unused]
    norm_placed = [normalize(token) for token in placed]
    order_correct = norm_placed == norm_expected

    items = []
    for index, token in enumerate(expected):
        user = placed[index] if index < len(placed) else ""
        items.append(
            ItemResult(
                item_id=str(index),
                is_correct=index < len(norm_placed) and norm_placed[index] == norm_expected[index],
                correct_answer=token,
                user_answer=user,
            )
        )
    correct_positions = sum(1 for item in items if item.is_correct)
    is_correct = order_correct and not missing and not included and not extraneous and bool(expected)

    logger.debug(
        "Sequence scored",
        extra={
            "extra_data": {
                "missing": len(missing),
                "distractors": len(included),
                "extraneous": len(extraneous),
                "order_correct": order_correct,
            }
        },
    )
    return SequenceScoreResult.from_items(
        items,
        feedback=_sequence_feedback(is_correct, included, extraneous, missing),
        extraneous_items=included + extraneous,
        missing_words=tuple(missing),
        included_distractors=tuple(included),
        extraneous_words=tuple(extraneous),
        order_correct=order_correct,
        correct_positions=correct_positions,
        points=_points(is_correct, correct_positions, len(expected), len(included), len(missing)),
    )


def score_unscramble(
    exercise: SentenceUnscrambleExercise,
    arrangement: Sequence[str],
) -> SequenceScoreResult:
    """
    Score an arrangement against an unscramble exercise.

    ``arrangement`` may hold tile ids or tile texts. Ids are resolved to
    their text, and a distractor tile picked by id is always an included
    distractor, even when its text equals a sentence word.
    """
    by_id = {word.id: word for word in exercise.words}
    tokens = []
    picked_distractors = set()
    for position, entry in enumerate(arrangement):
        tile = by_id.get(entry)
        if tile is None:
            tokens.append(entry)
            continue
        tokens.append(tile.text)
        if tile.is_distractor:
            picked_distractors.add(position)
    return score_sequence(
        exercise.expected_tokens,
        tokens,
        exercise.distractors,
        distractor_positions=picked_distractors,
    )


def sequence_hint(result: SequenceScoreResult) -> str:
    """
    Hint naming the most important problem with an arrangement.

    Distractors come first, then missing words, then the first position
    holding the wrong word.
    """
    if result.included_distractors or result.extraneous_words:
        return "Some words don't belong in this sentence. Try removing them."
    if result.missing_words:
        return f"You're missing {len(result.missing_words)} word(s). Include all the correct words."
    if not result.order_correct:
        for position, item in enumerate(result.per_item_results, start=1):
            if not item.is_correct:
                return f"Word {position} is not in the right position."
        return "Check the word order carefully."
    return "Keep trying!"
