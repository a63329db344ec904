"""Tests for multi-blank cloze scoring and blank selection."""

import random

import pytest

from drilleval.answer.classifier import ErrorClassification
from drilleval.answer.compare import ComparisonPolicy
from drilleval.exercises import ClozeBlank, MultiClozeExercise
from drilleval.scoring.cloze import (
    BLANK_MARKER,
    blank_hint,
    build_multi_cloze,
    create_prompt_with_blanks,
    is_blankable_word,
    reconstruct_sentence,
    score_cloze,
    score_multi_cloze,
    select_blank_positions,
)
from drilleval.scoring.result import FeedbackTier

SENTENCE = "ذَهَبَ الطَّالِبُ إِلَى المَدْرَسَةِ فِي الصَّبَاحِ"


@pytest.fixture
def exercise():
    return MultiClozeExercise(
        id="mc-1",
        prompt=f"{BLANK_MARKER} الطَّالِبُ إِلَى {BLANK_MARKER} فِي الصَّبَاحِ",
        blanks=[
            ClozeBlank(position=0, answer="ذَهَبَ"),
            ClozeBlank(position=3, answer="المَدْرَسَةِ"),
        ],
        complete_sentence=SENTENCE,
    )


class TestScoreCloze:
    """Test per-blank scoring."""

    def test_one_of_two_correct(self):
        """Test a half-right sentence."""
        result = score_cloze(["كِتَابٌ", "هُنَا"], ["كِتَابٌ", "خَطَأ"])
        assert result.correct_count == 1
        assert result.total_blanks == 2
        assert result.is_correct is False
        assert result.feedback_tier is FeedbackTier.ALMOST
        assert result.feedback == "Almost! 1 of 2 correct."

    def test_all_correct_leniently(self):
        """Test that unvowelled answers fill vowelled blanks."""
        result = score_cloze(["كِتَابٌ", "هُنَا"], ["كتاب", " هنا "])
        assert result.is_correct is True
        assert result.feedback_tier is FeedbackTier.PERFECT
        assert result.feedback == "Excellent! All blanks correct."
        assert result.accuracy == 100
        assert result.score == 1.0

    def test_nothing_answered(self):
        """Test that missing answers score as unanswered blanks."""
        result = score_cloze(["كِتَابٌ", "هُنَا"], [])
        assert result.correct_count == 0
        assert result.feedback_tier is FeedbackTier.PRACTICE
        assert result.feedback == "Keep practicing! Review the correct answers."
        assert all(item.answer.unanswered for item in result.per_item_results)

    def test_partial_of_three(self):
        """Test the generic progress message."""
        result = score_cloze(["أ", "ب", "ج"], ["أ", "x", "y"])
        assert result.feedback == "1 of 3 correct. Keep going!"

    def test_extra_answers_are_extraneous(self):
        """Test that surplus answers block a perfect score."""
        result = score_cloze(["كتاب", "هنا"], ["كتاب", "هنا", "زائد"])
        assert result.correct_count == 2
        assert result.extraneous_items == ("زائد",)
        assert result.is_correct is False
        assert result.feedback == "All blanks correct, but there were more answers than blanks."

    def test_blank_surplus_ignored(self):
        """Test that trailing blank answers are not extraneous."""
        result = score_cloze(["كتاب"], ["كتاب", "  "])
        assert result.is_correct is True

    def test_strict_policy(self):
        """Test that strict blanks carry tashkeel classification."""
        result = score_cloze(["كِتَابٌ"], ["كتاب"], ComparisonPolicy.STRICT)
        item = result.per_item_results[0]
        assert not item.is_correct
        assert item.answer.error_type is ErrorClassification.TASHKEEL_MISSING

    def test_items_labelled(self):
        """Test item ids and answer labels."""
        result = score_cloze(["كتاب", "هنا"], ["كتاب", "هنا"])
        assert [item.item_id for item in result.per_item_results] == ["0", "1"]
        assert result.per_item_results[1].answer.label == "blank_1"

    def test_score_multi_cloze(self, exercise):
        """Test scoring against an exercise."""
        result = score_multi_cloze(exercise, ["ذهب", "المدرسة"])
        assert result.is_correct


class TestBlankSelection:
    """Test choosing blank positions."""

    def test_blankable_words(self, lexicon, settings):
        """Test stop words, clitics and length rules."""
        assert is_blankable_word("كِتَابٌ", lexicon, settings)
        assert not is_blankable_word("فِي", lexicon, settings)
        assert not is_blankable_word("وفي", lexicon, settings)
        assert not is_blankable_word("و", lexicon, settings)
        assert not is_blankable_word("وَفِي", lexicon, settings)

    def test_short_words_keep_leading_clitic_letter(self, lexicon, settings):
        """Test that two-letter words starting with a clitic letter stay blankable."""
        assert is_blankable_word("فم", lexicon, settings)
        assert is_blankable_word("كل", lexicon, settings)
        assert is_blankable_word("بِنْتٌ", lexicon, settings)

    def test_positions_from_eligible_words(self, rng, settings):
        """Test that only content words are picked."""
        words = SENTENCE.split()
        positions = select_blank_positions(words, 2, rng=rng, settings=settings)
        assert len(positions) == 2
        assert positions == sorted(positions)
        assert set(positions) <= {0, 1, 3, 5}

    def test_seeded_selection_repeatable(self, settings):
        """Test that equal seeds give equal picks."""
        words = SENTENCE.split()
        first = select_blank_positions(words, 2, rng=random.Random(7), settings=settings)
        second = select_blank_positions(words, 2, rng=random.Random(7), settings=settings)
        assert first == second

    def test_capped_at_max_blanks(self, rng, settings):
        """Test the blank cap."""
        assert len(select_blank_positions(SENTENCE.split(), 10, rng=rng, settings=settings)) == 3

    def test_fewer_eligible_than_wanted(self, settings):
        """Test that all eligible words are returned when there are few."""
        assert select_blank_positions(["في", "من", "كتاب"], 2, settings=settings) == [2]

    def test_prompt_with_blanks(self):
        """Test the blanked prompt."""
        assert create_prompt_with_blanks(["a", "b", "c"], [1]) == f"a {BLANK_MARKER} c"


class TestBuildMultiCloze:
    """Test generating exercises from sentences."""

    def test_builds_exercise(self, settings):
        """Test a generated exercise."""
        exercise = build_multi_cloze(SENTENCE, "mc-9", seed=3, prompt_en="The student went", settings=settings)
        assert exercise is not None
        assert len(exercise.blanks) == 2
        assert exercise.prompt.count(BLANK_MARKER) == 2
        words = SENTENCE.split()
        assert [b.answer for b in exercise.blanks] == [words[b.position] for b in exercise.blanks]

    def test_seed_is_repeatable(self, settings):
        """Test that the same seed builds the same exercise."""
        first = build_multi_cloze(SENTENCE, "a", seed=11, settings=settings)
        second = build_multi_cloze(SENTENCE, "a", seed=11, settings=settings)
        assert first.blanks == second.blanks

    def test_short_sentence(self, settings):
        """Test that short sentences are rejected."""
        assert build_multi_cloze("ذهب الطالب", "a", settings=settings) is None

    def test_too_few_content_words(self, settings):
        """Test that a sentence with one content word is rejected."""
        assert build_multi_cloze("في من إلى البيت", "a", settings=settings) is None


class TestClozeHelpers:
    """Test sentence reconstruction and blank hints."""

    def test_reconstruct(self, exercise):
        """Test learner answers placed back in the sentence."""
        rebuilt = reconstruct_sentence(exercise, ["ذهب"])
        assert rebuilt == f"ذهب الطَّالِبُ إِلَى {BLANK_MARKER} فِي الصَّبَاحِ"

    def test_blank_hint_levels(self):
        """Test progressive blank hints."""
        blank = ClozeBlank(position=0, answer="المدرسة")
        assert blank_hint(blank, 0) == ""
        assert blank_hint(blank, 1) == "ا..."
        assert blank_hint(blank, 2) == "ال..."
        assert blank_hint(blank, 3) == "المد..."
