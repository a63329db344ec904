"""Tests for the exercise evaluation entry point."""

import pytest

from drilleval.answer.classifier import ErrorClassification
from drilleval.answer.compare import ComparisonPolicy
from drilleval.answer.graders import StandardGrader
from drilleval.engine import apply_challenge, evaluate_exercise, reverse_exercise, session_score
from drilleval.exercises import (
    ChallengeConfig,
    MeaningToWordExercise,
    WordToMeaningExercise,
    load_exercise,
)


@pytest.fixture
def fill_blank():
    return load_exercise(
        {"type": "fill-blank", "id": "fb-1", "prompt": "هَذَا ___ جَدِيدٌ", "answer": "كِتَابٌ"}
    )


@pytest.fixture
def word_to_meaning():
    return WordToMeaningExercise(id="wm-1", prompt="كِتَابٌ", answer="book", item_ids=["v-1"])


class TestSingleAnswer:
    """Test single-answer variants."""

    def test_lenient_by_default(self, fill_blank):
        """Test that tashkeel is not required outside challenges."""
        outcome = evaluate_exercise(fill_blank, "كتاب")
        assert outcome.is_correct
        assert outcome.policy is ComparisonPolicy.LENIENT
        assert outcome.score == 1.0

    def test_required_tashkeel(self, fill_blank):
        """Test that a challenge can require diacritics."""
        outcome = evaluate_exercise(fill_blank, "كتاب", ChallengeConfig(require_tashkeel=True))
        assert not outcome.is_correct
        assert outcome.policy is ComparisonPolicy.STRICT
        assert outcome.answer_result.error_type is ErrorClassification.TASHKEEL_MISSING
        assert outcome.feedback == outcome.answer_result.explanation

    def test_english_answer_never_strict(self, word_to_meaning):
        """Test that required tashkeel does not apply to English meanings."""
        outcome = evaluate_exercise(word_to_meaning, "Book", ChallengeConfig(require_tashkeel=True))
        assert outcome.is_correct
        assert outcome.policy is ComparisonPolicy.LENIENT

    def test_unanswered(self, fill_blank):
        """Test a missing response."""
        outcome = evaluate_exercise(fill_blank, None)
        assert outcome.unanswered
        assert not outcome.is_correct
        assert outcome.feedback == "No answer provided."

    def test_wrong_response_shape(self, fill_blank):
        """Test that a list is rejected for a text exercise."""
        with pytest.raises(TypeError):
            evaluate_exercise(fill_blank, ["كتاب"])


class TestChallenge:
    """Test challenge handling."""

    def test_reverse_exercise(self, word_to_meaning):
        """Test swapping prompt and answer."""
        reversed_exercise = reverse_exercise(word_to_meaning)
        assert isinstance(reversed_exercise, MeaningToWordExercise)
        assert reversed_exercise.prompt == "book"
        assert reversed_exercise.answer == "كِتَابٌ"
        assert reversed_exercise.item_ids == ["v-1"]

    def test_reversed_direction(self, word_to_meaning):
        """Test that a reversed challenge expects the Arabic word."""
        outcome = evaluate_exercise(word_to_meaning, "كتاب", ChallengeConfig(reversed_direction=True))
        assert outcome.is_correct
        assert outcome.exercise_type == "meaning-to-word"

    def test_other_variants_not_reversed(self, fill_blank):
        """Test that reversal leaves other variants alone."""
        assert apply_challenge(fill_blank, ChallengeConfig(reversed_direction=True)) is fill_blank

    def test_timer(self, fill_blank):
        """Test the timed-out flag."""
        challenge = ChallengeConfig(is_challenge=True, timer_seconds=30)
        assert evaluate_exercise(fill_blank, "كتاب", challenge, elapsed_ms=31000).timed_out
        assert not evaluate_exercise(fill_blank, "كتاب", challenge, elapsed_ms=30000).timed_out
        assert not evaluate_exercise(fill_blank, "كتاب", elapsed_ms=99000).timed_out


class TestCompositeVariants:
    """Test dispatch to the multi-item scorers."""

    def test_multi_cloze(self):
        """Test a cloze response list."""
        exercise = load_exercise(
            {
                "type": "multi-cloze",
                "id": "mc-1",
                "prompt": "هَذَا _____ وَذَلِكَ _____",
                "blanks": [{"position": 1, "answer": "كِتَابٌ"}, {"position": 3, "answer": "قَلَمٌ"}],
                "complete_sentence": "هَذَا كِتَابٌ وَذَلِكَ قَلَمٌ",
            }
        )
        outcome = evaluate_exercise(exercise, ["كتاب", "بيت"])
        assert not outcome.is_correct
        assert outcome.score_result.correct_count == 1
        assert outcome.score == pytest.approx(0.5)
        assert not outcome.unanswered

    def test_semantic_field(self):
        """Test a placement mapping."""
        exercise = load_exercise(
            {
                "type": "semantic-field",
                "id": "sf-1",
                "categories": [{"id": "fruit"}, {"id": "animal"}],
                "words": [
                    {"arabic": "تفاح", "category": "fruit"},
                    {"arabic": "قطة", "category": "animal"},
                ],
            }
        )
        outcome = evaluate_exercise(exercise, {"تفاح": "fruit", "قطة": "animal"})
        assert outcome.is_correct
        with pytest.raises(TypeError):
            evaluate_exercise(exercise, ["تفاح"])

    def test_sentence_unscramble(self):
        """Test a tile arrangement."""
        exercise = load_exercise(
            {
                "type": "sentence-unscramble",
                "id": "su-1",
                "correct_sentence": "ذَهَبَ الطَّالِبُ",
                "words": [
                    {"id": "w1", "text": "ذَهَبَ"},
                    {"id": "w2", "text": "الطَّالِبُ"},
                    {"id": "w3", "text": "الطَّالِبَ", "is_distractor": True},
                ],
            }
        )
        outcome = evaluate_exercise(exercise, ["w2", "w1"], retry_count=1)
        assert not outcome.is_correct
        assert outcome.retry_count == 1
        assert outcome.feedback == "The words are correct, but the order needs adjustment."
        with pytest.raises(TypeError):
            evaluate_exercise(exercise, "w1 w2")

    def test_error_correction(self):
        """Test an error-correction response."""
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
        outcome = evaluate_exercise(exercise, "الطالبة ذكية")
        assert outcome.is_correct
        assert outcome.answer_result.metadata["corrected_properly"] is True


class TestSessionScore:
    """Test combining outcomes."""

    def test_average(self, fill_blank):
        """Test the default average and a custom grader."""
        outcomes = [evaluate_exercise(fill_blank, "كتاب"), evaluate_exercise(fill_blank, "قلم")]
        assert session_score(outcomes) == pytest.approx(0.5)
        assert session_score(outcomes, StandardGrader()) == 0.0
        assert session_score([]) == 0.0
