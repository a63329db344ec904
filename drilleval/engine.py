"""
Exercise evaluation entry point.

``evaluate_exercise`` dispatches on the exercise variant to the matching
scorer and wraps the verdict in an ExerciseOutcome, the one shape the
session tracker consumes for every drill format.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from drilleval.answer.answer_hash import AnswerResult
from drilleval.answer.compare import ComparisonPolicy, is_blank, policy_for
from drilleval.answer.evaluator import create_evaluator
from drilleval.answer.graders import AverageGrader, Grader
from drilleval.core.logging import get_context_logger
from drilleval.exercises import (
    ChallengeConfig,
    ErrorCorrectionExercise,
    Exercise,
    MeaningToWordExercise,
    MultiClozeExercise,
    SemanticFieldExercise,
    SentenceUnscrambleExercise,
    SingleAnswerExercise,
    WordToMeaningExercise,
)
from drilleval.scoring.category_sort import score_semantic_field
from drilleval.scoring.cloze import score_multi_cloze
from drilleval.scoring.result import MultiItemScoreResult
from drilleval.scoring.sequence import score_unscramble


class ExerciseOutcome(BaseModel):
    """
    Verdict on one exercise submission, with response metadata.

    Exactly one of ``answer_result`` (single-answer drills) and
    ``score_result`` (composite drills) is set.
    """

    model_config = ConfigDict(frozen=True)

    exercise_id: str
    exercise_type: str
    is_correct: bool
    unanswered: bool = False
    policy: ComparisonPolicy = ComparisonPolicy.LENIENT
    answer_result: AnswerResult | None = None
    score_result: MultiItemScoreResult | None = None
    feedback: str = ""
    elapsed_ms: int | None = Field(default=None, ge=0)
    timed_out: bool = False
    retry_count: int = Field(default=0, ge=0)

    @property
    def score(self) -> float:
        if self.answer_result is not None:
            return self.answer_result.score
        if self.score_result is not None:
            return self.score_result.score
        return 0.0


def reverse_exercise(
    exercise: WordToMeaningExercise | MeaningToWordExercise,
) -> WordToMeaningExercise | MeaningToWordExercise:
    """Swap prompt and answer, turning word-to-meaning into meaning-to-word and back."""
    data = exercise.model_dump(exclude={"type", "prompt", "answer", "alternative_answers"})
    if isinstance(exercise, WordToMeaningExercise):
        return MeaningToWordExercise(**data, prompt=exercise.answer, answer=exercise.prompt)
    return WordToMeaningExercise(**data, prompt=exercise.answer, answer=exercise.prompt)


def apply_challenge(exercise: Exercise, challenge: ChallengeConfig) -> Exercise:
    """Reverse meaning exercises when the challenge asks for it; others pass through."""
    if challenge.reversed_direction and isinstance(exercise, (WordToMeaningExercise, MeaningToWordExercise)):
        return reverse_exercise(exercise)
    return exercise


def _evaluate_single(exercise: SingleAnswerExercise, response: Any, challenge: ChallengeConfig) -> dict[str, Any]:
    if response is not None and not isinstance(response, str):
        raise TypeError(f"{exercise.type} expects a text response, got {type(response).__name__}")
    policy = policy_for(challenge.require_tashkeel, exercise.answer)
    evaluator = create_evaluator(
        "text",
        exercise.answer,
        policy=policy,
        alternative_answers=exercise.alternative_answers,
    )
    result = evaluator.evaluate(response)
    return {
        "is_correct": result.correct,
        "unanswered": result.unanswered,
        "policy": policy,
        "answer_result": result,
        "feedback": result.explanation or result.answer_message,
    }


def _evaluate_error_correction(
    exercise: ErrorCorrectionExercise, response: Any, challenge: ChallengeConfig
) -> dict[str, Any]:
    if response is not None and not isinstance(response, str):
        raise TypeError(f"{exercise.type} expects a text response, got {type(response).__name__}")
    evaluator = create_evaluator(
        "error_correction",
        exercise.correct_sentence,
        error_word=exercise.error_word,
        correct_word=exercise.correct_word,
        error_type=exercise.error_type,
    )
    result = evaluator.evaluate(response)
    return {
        "is_correct": result.correct,
        "unanswered": result.unanswered,
        "answer_result": result,
        "feedback": result.answer_message,
    }


def _as_sequence(exercise: Exercise, response: Any) -> Sequence[Any]:
    if response is None:
        return []
    if isinstance(response, (str, bytes)) or not isinstance(response, Sequence):
        raise TypeError(f"{exercise.type} expects a list response, got {type(response).__name__}")
    return response


def _evaluate_multi_cloze(exercise: MultiClozeExercise, response: Any, challenge: ChallengeConfig) -> dict[str, Any]:
    answers = _as_sequence(exercise, response)
    result = score_multi_cloze(exercise, answers)
    return {
        "is_correct": result.is_correct,
        "unanswered": all(is_blank(answer) for answer in answers),
        "score_result": result,
        "feedback": result.feedback,
    }


def _evaluate_semantic_field(
    exercise: SemanticFieldExercise, response: Any, challenge: ChallengeConfig
) -> dict[str, Any]:
    if response is None:
        response = {}
    if not isinstance(response, Mapping):
        raise TypeError(f"{exercise.type} expects a word -> category mapping, got {type(response).__name__}")
    result = score_semantic_field(exercise, response)
    return {
        "is_correct": result.is_correct,
        "unanswered": not any(category is not None for category in response.values()),
        "score_result": result,
        "feedback": result.feedback,
    }


def _evaluate_unscramble(
    exercise: SentenceUnscrambleExercise, response: Any, challenge: ChallengeConfig
) -> dict[str, Any]:
    arrangement = _as_sequence(exercise, response)
    result = score_unscramble(exercise, arrangement)
    return {
        "is_correct": result.is_correct,
        "unanswered": not arrangement,
        "score_result": result,
        "feedback": result.feedback,
    }


_SCORERS: dict[str, Callable[[Any, Any, ChallengeConfig], dict[str, Any]]] = {
    "fill-blank": _evaluate_single,
    "translate-to-arabic": _evaluate_single,
    "word-to-meaning": _evaluate_single,
    "meaning-to-word": _evaluate_single,
    "construct-sentence": _evaluate_single,
    "grammar-apply": _evaluate_single,
    "error-correction": _evaluate_error_correction,
    "multi-cloze": _evaluate_multi_cloze,
    "semantic-field": _evaluate_semantic_field,
    "sentence-unscramble": _evaluate_unscramble,
}


def evaluate_exercise(
    exercise: Exercise,
    response: Any,
    challenge: ChallengeConfig | None = None,
    elapsed_ms: int | None = None,
    retry_count: int = 0,
) -> ExerciseOutcome:
    """
    Evaluate a learner's response to an exercise.

    Response shapes by variant:
    - single-answer variants and error-correction: ``str``
    - multi-cloze: list of answers in blank order
    - semantic-field: mapping of word -> category id
    - sentence-unscramble: list of tile ids or tile texts in order

    Args:
        exercise: Validated exercise (see ``load_exercise``)
        response: Learner response (None when nothing was submitted)
        challenge: Challenge settings for this attempt
        elapsed_ms: Time the learner took
        retry_count: Retries used before this submission

    Returns:
        ExerciseOutcome for the session tracker

    Raises:
        TypeError: If the response shape does not fit the exercise variant
    """
    challenge = challenge or ChallengeConfig()
    exercise = apply_challenge(exercise, challenge)
    logger = get_context_logger(__name__, exercise_id=exercise.id, exercise_type=exercise.type)

    fields = _SCORERS[exercise.type](exercise, response, challenge)
    timed_out = bool(
        challenge.timer_seconds and elapsed_ms is not None and elapsed_ms > challenge.timer_seconds * 1000
    )

    outcome = ExerciseOutcome(
        exercise_id=exercise.id,
        exercise_type=exercise.type,
        elapsed_ms=elapsed_ms,
        timed_out=timed_out,
        retry_count=retry_count,
        **fields,
    )
    logger.debug(
        "Exercise evaluated",
        extra_data={"is_correct": outcome.is_correct, "unanswered": outcome.unanswered, "retry_count": retry_count},
    )
    return outcome


def session_score(outcomes: Sequence[ExerciseOutcome], grader: Grader | None = None) -> float:
    """
    Combine the scores of a session's exercise outcomes.

    Args:
        outcomes: Outcomes in session order
        grader: Grading strategy (defaults to an unweighted average)

    Returns:
        Session score (0.0 to 1.0)
    """
    return (grader or AverageGrader()).grade(outcomes)
