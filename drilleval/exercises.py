"""
Exercise definitions.

Exercises are authored content: each variant carries its expected
answer(s) and is tagged by ``type``. ``Exercise`` is a discriminated
union over all variants, and ``load_exercise`` validates raw dicts
(from JSON or YAML content files) into it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator

from drilleval.answer.evaluators.error_correction import SentenceErrorType
from drilleval.core.errors import ExerciseDefinitionError
from drilleval.text.arabic import tokenize


class ChallengeConfig(BaseModel):
    """Per-attempt challenge settings supplied by the session."""

    is_challenge: bool = False
    timer_seconds: int = Field(default=0, ge=0, description="30 for challenges, 0 for normal")
    require_tashkeel: bool = Field(default=False, description="Learner must type correct diacritics")
    hide_english_hint: bool = False
    reversed_direction: bool = False


class BaseExercise(BaseModel):
    """Fields shared by every exercise variant."""

    id: str = Field(..., description="Exercise identifier")
    item_ids: list[str] = Field(default_factory=list, description="Vocabulary items practised")


class SingleAnswerExercise(BaseExercise):
    """An exercise with one free-text expected answer."""

    answer: str = Field(..., min_length=1, description="Expected answer")
    alternative_answers: list[str] = Field(default_factory=list, description="Other accepted answers")


class FillBlankExercise(SingleAnswerExercise):
    type: Literal["fill-blank"] = "fill-blank"
    prompt: str
    prompt_en: str | None = None


class TranslateExercise(SingleAnswerExercise):
    type: Literal["translate-to-arabic"] = "translate-to-arabic"
    prompt: str


class WordToMeaningExercise(SingleAnswerExercise):
    type: Literal["word-to-meaning"] = "word-to-meaning"
    prompt: str


class MeaningToWordExercise(SingleAnswerExercise):
    type: Literal["meaning-to-word"] = "meaning-to-word"
    prompt: str


class ConstructSentenceExercise(SingleAnswerExercise):
    type: Literal["construct-sentence"] = "construct-sentence"
    words: list[str] = Field(default_factory=list, description="Word bank shown to the learner")


class GrammarApplyExercise(SingleAnswerExercise):
    type: Literal["grammar-apply"] = "grammar-apply"
    prompt: str
    prompt_en: str | None = None


class ErrorCorrectionExercise(BaseExercise):
    """Find and fix the mistake planted in a sentence."""

    type: Literal["error-correction"] = "error-correction"
    sentence_with_error: str
    correct_sentence: str = Field(..., min_length=1)
    error_word: str
    correct_word: str
    error_type: SentenceErrorType
    english_hint: str | None = None
    explanation: str | None = None


class ClozeBlank(BaseModel):
    """One blank of a multi-cloze sentence."""

    position: int = Field(..., ge=0, description="0-based word index in the sentence")
    answer: str = Field(..., min_length=1)
    hint: str | None = None


class MultiClozeExercise(BaseExercise):
    """A sentence with two or three blanks."""

    type: Literal["multi-cloze"] = "multi-cloze"
    prompt: str = Field(..., description="Sentence with blanks marked as _____")
    prompt_en: str | None = None
    blanks: list[ClozeBlank] = Field(..., min_length=1)
    complete_sentence: str

    @field_validator("blanks")
    @classmethod
    def validate_blank_positions(cls, v: list[ClozeBlank]) -> list[ClozeBlank]:
        """Blank positions must be unique."""
        positions = [blank.position for blank in v]
        if len(set(positions)) != len(positions):
            raise ValueError("blank positions must be unique")
        return v

    @property
    def expected_answers(self) -> list[str]:
        return [blank.answer for blank in self.blanks]


class SemanticCategory(BaseModel):
    id: str
    name_en: str = ""
    name_ar: str = ""


class SemanticWord(BaseModel):
    arabic: str
    english: str = ""
    category: str = Field(..., description="Id of the category the word belongs to")


class SemanticFieldExercise(BaseExercise):
    """Sort words into labelled categories."""

    type: Literal["semantic-field"] = "semantic-field"
    categories: list[SemanticCategory] = Field(..., min_length=2)
    words: list[SemanticWord] = Field(..., min_length=1)
    instruction: str = "Drag each word to the correct category"

    @model_validator(mode="after")
    def validate_word_categories(self) -> "SemanticFieldExercise":
        """Every word must belong to a declared category, once."""
        category_ids = {category.id for category in self.categories}
        unknown = sorted({word.category for word in self.words} - category_ids)
        if unknown:
            raise ValueError(f"words reference unknown categories: {unknown}")
        arabic = [word.arabic for word in self.words]
        if len(set(arabic)) != len(arabic):
            raise ValueError("words must be unique")
        return self

    @property
    def ground_truth(self) -> dict[str, str]:
        """Word -> category id."""
        return {word.arabic: word.category for word in self.words}


class UnscrambleWord(BaseModel):
    """A word tile; distractor tiles do not belong in the sentence."""

    id: str
    text: str
    is_distractor: bool = False


class SentenceUnscrambleExercise(BaseExercise):
    """Arrange word tiles into the sentence, leaving distractors out."""

    type: Literal["sentence-unscramble"] = "sentence-unscramble"
    correct_sentence: str = Field(..., min_length=1)
    words: list[UnscrambleWord] = Field(default_factory=list)
    english_hint: str | None = None

    @property
    def expected_tokens(self) -> list[str]:
        return tokenize(self.correct_sentence)

    @property
    def distractors(self) -> list[str]:
        return [word.text for word in self.words if word.is_distractor]

    @property
    def distractor_count(self) -> int:
        return len(self.distractors)


Exercise = Annotated[
    Union[
        FillBlankExercise,
        TranslateExercise,
        WordToMeaningExercise,
        MeaningToWordExercise,
        ConstructSentenceExercise,
        GrammarApplyExercise,
        ErrorCorrectionExercise,
        MultiClozeExercise,
        SemanticFieldExercise,
        SentenceUnscrambleExercise,
    ],
    Field(discriminator="type"),
]

_exercise_adapter: TypeAdapter[Exercise] = TypeAdapter(Exercise)


def load_exercise(data: dict[str, Any]) -> Exercise:
    """
    Validate a raw exercise definition.

    Args:
        data: Exercise dict with a ``type`` tag

    Returns:
        The matching exercise model

    Raises:
        ExerciseDefinitionError: If the definition is malformed
    """
    try:
        return _exercise_adapter.validate_python(data)
    except ValidationError as e:
        exercise_id = data.get("id") if isinstance(data, dict) else None
        raise ExerciseDefinitionError(
            f"Invalid exercise definition: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
            exercise_id=exercise_id,
        ) from e


def load_exercises(path: str | Path) -> list[Exercise]:
    """
    Load a list of exercise definitions from a YAML (or JSON) file.

    Args:
        path: Content file holding a list of exercise dicts

    Returns:
        Validated exercises in file order

    Raises:
        ExerciseDefinitionError: If the file is not a list or an entry is malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []

    if not isinstance(data, list):
        raise ExerciseDefinitionError(f"Exercise file must contain a list: {path}")
    return [load_exercise(entry) for entry in data]
