"""Tests for exercise definitions and loading."""

import pytest
from pydantic import ValidationError

from drilleval.answer.evaluators import SentenceErrorType
from drilleval.core.errors import ExerciseDefinitionError
from drilleval.exercises import (
    FillBlankExercise,
    MultiClozeExercise,
    SemanticFieldExercise,
    SentenceUnscrambleExercise,
    load_exercise,
    load_exercises,
)


class TestLoadExercise:
    """Test validating raw definitions into variants."""

    def test_fill_blank(self):
        """Test dispatch on the type tag."""
        exercise = load_exercise(
            {"type": "fill-blank", "id": "fb-1", "prompt": "هَذَا ___", "answer": "كِتَابٌ"}
        )
        assert isinstance(exercise, FillBlankExercise)
        assert exercise.alternative_answers == []

    def test_error_correction(self):
        """Test that error types are parsed."""
        exercise = load_exercise(
            {
                "type": "error-correction",
                "id": "ec-1",
                "sentence_with_error": "الطَّالِبَةُ ذَكِيٌّ",
                "correct_sentence": "الطَّالِبَةُ ذَكِيَّةٌ",
                "error_word": "ذَكِيٌّ",
                "correct_word": "ذَكِيَّةٌ",
                "error_type": "gender",
            }
        )
        assert exercise.error_type is SentenceErrorType.GENDER

    def test_unknown_type(self):
        """Test that an unknown tag is a definition error."""
        with pytest.raises(ExerciseDefinitionError) as exc_info:
            load_exercise({"type": "karaoke", "id": "k-1"})
        assert exc_info.value.details["exercise_id"] == "k-1"
        assert exc_info.value.details["errors"]

    def test_missing_answer(self):
        """Test that a single-answer variant needs its answer."""
        with pytest.raises(ExerciseDefinitionError):
            load_exercise({"type": "translate-to-arabic", "id": "t-1", "prompt": "book", "answer": ""})


class TestVariantValidation:
    """Test per-variant invariants."""

    def test_blank_positions_unique(self):
        """Test that two blanks cannot share a position."""
        with pytest.raises(ValidationError):
            MultiClozeExercise(
                id="mc",
                prompt="_____ _____",
                blanks=[{"position": 0, "answer": "a"}, {"position": 0, "answer": "b"}],
                complete_sentence="a b",
            )

    def test_unknown_category(self):
        """Test that words must use declared categories."""
        with pytest.raises(ValidationError):
            SemanticFieldExercise(
                id="sf",
                categories=[{"id": "fruit"}, {"id": "animal"}],
                words=[{"arabic": "سيارة", "category": "vehicle"}],
            )

    def test_duplicate_words(self):
        """Test that a word appears once."""
        with pytest.raises(ValidationError):
            SemanticFieldExercise(
                id="sf",
                categories=[{"id": "fruit"}, {"id": "animal"}],
                words=[
                    {"arabic": "تفاح", "category": "fruit"},
                    {"arabic": "تفاح", "category": "animal"},
                ],
            )

    def test_unscramble_tokens(self):
        """Test derived token and distractor lists."""
        exercise = SentenceUnscrambleExercise(
            id="su",
            correct_sentence="  ذَهَبَ   الطَّالِبُ ",
            words=[{"id": "w3", "text": "الطَّالِبَ", "is_distractor": True}],
        )
        assert exercise.expected_tokens == ["ذَهَبَ", "الطَّالِبُ"]
        assert exercise.distractors == ["الطَّالِبَ"]


class TestLoadExercises:
    """Test loading content files."""

    def test_yaml_file(self, tmp_path):
        """Test a list of definitions."""
        path = tmp_path / "lesson.yaml"
        path.write_text(
            "- type: word-to-meaning\n"
            "  id: wm-1\n"
            "  prompt: كِتَابٌ\n"
            "  answer: book\n"
            "- type: meaning-to-word\n"
            "  id: mw-1\n"
            "  prompt: pen\n"
            "  answer: قَلَمٌ\n",
            encoding="utf-8",
        )
        exercises = load_exercises(path)
        assert [e.id for e in exercises] == ["wm-1", "mw-1"]
        assert exercises[1].answer == "قَلَمٌ"

    def test_empty_file(self, tmp_path):
        """Test that an empty file holds no exercises."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_exercises(path) == []

    def test_not_a_list(self, tmp_path):
        """Test that a mapping at the top level is rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text("type: fill-blank\n", encoding="utf-8")
        with pytest.raises(ExerciseDefinitionError):
            load_exercises(path)
