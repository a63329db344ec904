"""
Multi-blank cloze scoring and blank selection.

Each blank is evaluated independently with the text evaluator; the
sentence is correct only when every blank is. Blank selection skips
particles and very short words and takes an explicit random source.
"""

from __future__ import annotations

import math
import random
from typing import Sequence

from drilleval.answer.compare import ComparisonPolicy, is_blank
from drilleval.answer.evaluators.text import TextEvaluator
from drilleval.answer.hints import reveal_prefix
from drilleval.core.config import Settings, get_settings
from drilleval.core.logging import get_logger
from drilleval.exercises import ClozeBlank, MultiClozeExercise
from drilleval.text.arabic import remove_tashkeel, tokenize
from drilleval.text.lexicon import Lexicon, default_lexicon

from .result import ItemResult, MultiItemScoreResult

logger = get_logger(__name__)

BLANK_MARKER = "_____"


class ClozeScoreResult(MultiItemScoreResult):
    """Cloze result; ``total_blanks`` counts the exercise's blanks."""

    total_blanks: int = 0


def _cloze_feedback(correct_count: int, total: int, extraneous: int) -> str:
    if correct_count == total and total:
        if extraneous:
            return "All blanks correct, but there were more answers than blanks."
        return "Excellent! All blanks correct."
    if correct_count == 0:
        return "Keep practicing! Review the correct answers."
    if correct_count == total - 1:
        return f"Almost! {correct_count} of {total} correct."
    return f"{correct_count} of {total} correct. Keep going!"


def score_cloze(
    expected: Sequence[str],
    answers: Sequence[str | None],
    policy: ComparisonPolicy = ComparisonPolicy.LENIENT,
) -> ClozeScoreResult:
    """
    Score the answers of a multi-blank sentence.

    Args:
        expected: Expected answer per blank, in sentence order
        answers: Learner answers in the same order; may be shorter
            (missing blanks score as incorrect) or longer (the surplus is
            reported as extraneous)
        policy: Comparison policy for every blank

    Returns:
        ClozeScoreResult with one item per blank
    """
    items = []
    for index, correct in enumerate(expected):
        user = answers[index] if index < len(answers) else None
        result = TextEvaluator(correct_answer=correct, policy=policy).evaluate(user)
        result.label = f"blank_{index}"
        items.append(
            ItemResult(
                item_id=str(index),
                is_correct=result.correct,
                correct_answer=correct,
                user_answer=user or "",
                answer=result,
            )
        )

    extraneous = [answer for answer in answers[len(expected):] if not is_blank(answer)]
    correct_count = sum(1 for item in items if item.is_correct)

    logger.debug(
        "Cloze scored",
        extra={"extra_data": {"correct": correct_count, "total": len(items), "extraneous": len(extraneous)}},
    )
    return ClozeScoreResult.from_items(
        items,
        feedback=_cloze_feedback(correct_count, len(items), len(extraneous)),
        extraneous_items=extraneous,
        total_blanks=len(expected),
    )


def score_multi_cloze(
    exercise: MultiClozeExercise,
    answers: Sequence[str | None],
    policy: ComparisonPolicy = ComparisonPolicy.LENIENT,
) -> ClozeScoreResult:
    """Score answers against a multi-cloze exercise's blanks."""
    return score_cloze(exercise.expected_answers, answers, policy)


def is_blankable_word(
    word: str,
    lexicon: Lexicon | None = None,
    settings: Settings | None = None,
) -> bool:
    """
    Check if a word is suitable for becoming a blank.

    Stop words (prepositions, particles) are rejected with and without
    their clitic prefix, as are words shorter than MIN_BLANK_LENGTH
    letters. A leading letter that looks like a clitic is only stripped
    when MIN_BLANK_LENGTH letters remain, so "فم" stays blankable.
    """
    lexicon = lexicon or default_lexicon()
    min_length = (settings or get_settings()).MIN_BLANK_LENGTH

    bare = remove_tashkeel(word)
    if len(bare) < min_length:
        return False

    stripped = lexicon.strip_clitic(word, min_remainder=min_length)
    if lexicon.is_stop_word(bare) or lexicon.is_stop_word(stripped):
        return False
    return len(stripped) >= min_length


def select_blank_positions(
    words: Sequence[str],
    num_blanks: int | None = None,
    rng: random.Random | None = None,
    lexicon: Lexicon | None = None,
    settings: Settings | None = None,
) -> list[int]:
    """
    Choose which word positions become blanks.

    Args:
        words: Tokens of the sentence
        num_blanks: Blanks wanted (defaults to DEFAULT_BLANKS, capped at MAX_BLANKS)
        rng: Random source; pass a seeded ``random.Random`` for repeatable picks
        lexicon: Stop-word tables
        settings: Engine settings

    Returns:
        Sorted word indices; fewer than requested when fewer are eligible
    """
    settings = settings or get_settings()
    wanted = min(num_blanks or settings.DEFAULT_BLANKS, settings.MAX_BLANKS)
    eligible = [
        index for index, word in enumerate(words) if is_blankable_word(word, lexicon, settings)
    ]
    if len(eligible) <= wanted:
        return eligible

    rng = rng or random.Random()
    return sorted(rng.sample(eligible, wanted))


def create_prompt_with_blanks(words: Sequence[str], blank_positions: Sequence[int]) -> str:
    """Join ``words`` with the chosen positions replaced by the blank marker."""
    positions = set(blank_positions)
    return " ".join(BLANK_MARKER if index in positions else word for index, word in enumerate(words))


def build_multi_cloze(
    sentence: str,
    exercise_id: str,
    num_blanks: int | None = None,
    rng: random.Random | None = None,
    seed: int | None = None,
    prompt_en: str | None = None,
    item_ids: Sequence[str] = (),
    settings: Settings | None = None,
) -> MultiClozeExercise | None:
    """
    Build a multi-cloze exercise from a complete sentence.

    Args:
        sentence: The complete sentence
        exercise_id: Id for the new exercise
        num_blanks: Blanks wanted
        rng: Random source (takes precedence over ``seed``)
        seed: Seed for a private random source
        prompt_en: English translation hint
        item_ids: Vocabulary items practised
        settings: Engine settings

    Returns:
        The exercise, or None if the sentence is too short or fewer
        than two blanks could be placed
    """
    settings = settings or get_settings()
    words = tokenize(sentence)
    if len(words) < settings.MIN_WORDS_FOR_MULTI_CLOZE:
        return None

    wanted = min(num_blanks or settings.DEFAULT_BLANKS, settings.MAX_BLANKS, len(words) // 2)
    if rng is None:
        rng = random.Random(seed)
    positions = select_blank_positions(words, wanted, rng=rng, settings=settings)
    if len(positions) < 2:
        return None

    return MultiClozeExercise(
        id=exercise_id,
        prompt=create_prompt_with_blanks(words, positions),
        prompt_en=prompt_en,
        blanks=[ClozeBlank(position=position, answer=words[position]) for position in positions],
        complete_sentence=sentence,
        item_ids=list(item_ids),
    )


def reconstruct_sentence(exercise: MultiClozeExercise, answers: Sequence[str | None]) -> str:
    """
    Rebuild the sentence with the learner's answers in the blanks.

    Unanswered blanks keep the blank marker.
    """
    words = tokenize(exercise.complete_sentence)
    by_position = {blank.position: index for index, blank in enumerate(exercise.blanks)}
    rebuilt = []
    for position, word in enumerate(words):
        blank_index = by_position.get(position)
        if blank_index is None:
            rebuilt.append(word)
            continue
        answer = answers[blank_index] if blank_index < len(answers) else None
        rebuilt.append(BLANK_MARKER if is_blank(answer) else answer.strip())
    return " ".join(rebuilt)


def blank_hint(blank: ClozeBlank, reveal_level: int) -> str:
    """
    Progressive hint for one blank.

    Level 1 shows the first letter, level 2 the first two, level 3 and
    above half of the word; level 0 shows nothing.
    """
    if reveal_level <= 0:
        return ""
    if reveal_level <= 2:
        return reveal_prefix(blank.answer, reveal_level)
    letters = len(remove_tashkeel(blank.answer).replace(" ", ""))
    return reveal_prefix(blank.answer, math.ceil(letters / 2))
