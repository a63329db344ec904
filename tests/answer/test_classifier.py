"""Tests for error classification and explanations."""

import pytest

from drilleval.answer.classifier import (
    ErrorClassification,
    analyze_error,
    classify,
    find_letter_confusions,
    get_error_explanation,
    get_error_type_label,
)
from drilleval.answer.diff import compute_char_diff
from drilleval.core.config import Settings


class TestTashkeelErrors:
    """Test classification when only diacritics differ."""

    def test_missing_tashkeel(self):
        """Test an unvowelled answer to a vowelled word."""
        assert classify("هَذَا", "هذا") is ErrorClassification.TASHKEEL_MISSING

    def test_some_marks_missing(self):
        """Test that dropping a subset of marks is still missing tashkeel."""
        assert classify("كَتَبَ", "كَتَب") is ErrorClassification.TASHKEEL_MISSING

    def test_wrong_tashkeel(self):
        """Test that changed vowels are wrong tashkeel."""
        analysis = analyze_error("كَتَبَ", "كُتِبَ")
        assert analysis.error_type is ErrorClassification.TASHKEEL_WRONG
        assert analysis.details == "Incorrect diacritical marks used"

    def test_extra_mark_is_wrong(self):
        """Test that an added mark counts as wrong, not missing."""
        assert classify("كتاب", "كِتاب") is ErrorClassification.TASHKEEL_WRONG

    def test_spacing_only_difference_is_typo(self):
        """Test that inner spacing differences under strict checking are typos."""
        assert classify("ذَهَبَ الطَّالِبُ", "ذَهَبَ  الطَّالِبُ") is ErrorClassification.TYPO

    def test_case_only_difference_is_typo(self):
        """Test that case-only differences are typos."""
        assert classify("Book", "book") is ErrorClassification.TYPO


class TestLetterConfusion:
    """Test commonly confused letter detection."""

    def test_ta_marbuta_and_ha(self):
        """Test the ة/ه confusion."""
        analysis = analyze_error("مدرسة", "مدرسه")
        assert analysis.error_type is ErrorClassification.LETTER_CONFUSION
        assert analysis.details == "Letter confusion: ه → ة"
        assert [(c.expected, c.actual, c.position) for c in analysis.letter_confusions] == [("ة", "ه", 4)]

    def test_confusion_with_vowelled_expected(self):
        """Test that marks on the expected word do not hide a confusion."""
        assert classify("مَدْرَسَةٌ", "مدرسه") is ErrorClassification.LETTER_CONFUSION

    def test_two_confusions(self):
        """Test that two confused letters are still a confusion."""
        analysis = analyze_error("صيف", "سىف")
        assert analysis.error_type is ErrorClassification.LETTER_CONFUSION
        assert len(analysis.letter_confusions) == 2

    def test_unrelated_substitution_is_typo(self):
        """Test that a non-confusable swap falls through to typo."""
        assert classify("كتاب", "كتات") is ErrorClassification.TYPO

    def test_distance_limit_from_settings(self):
        """Test that the confusion check respects the configured distance."""
        settings = Settings(_env_file=None, LETTER_CONFUSION_MAX_DISTANCE=0)
        assert classify("مدرسة", "مدرسه", settings=settings) is ErrorClassification.TYPO

    def test_find_letter_confusions_skips_mark_changes(self, lexicon):
        """Test that tashkeel-only substitutions are ignored."""
        diff = compute_char_diff("كِتَابَة", "كتابه")
        confusions = find_letter_confusions(diff, lexicon)
        assert [(c.expected, c.actual) for c in confusions] == [("ة", "ه")]

    def test_find_letter_confusions_requires_all_known(self, lexicon):
        """Test that one unknown substitution empties the result."""
        diff = compute_char_diff("مدرسة", "بدرسه")
        assert find_letter_confusions(diff, lexicon) == []


class TestOtherCategories:
    """Test the remaining categories in priority order."""

    def test_word_order(self):
        """Test swapped words."""
        assert classify("ذَهَبَ الطَّالِبُ", "الطالب ذهب") is ErrorClassification.WORD_ORDER

    def test_single_deletion_is_typo(self):
        """Test that one missing letter is a typo."""
        assert classify("مستشفى", "مسشفى") is ErrorClassification.TYPO

    def test_two_edits_is_spelling(self):
        """Test that a small edit distance is a spelling error."""
        assert classify("مستشفى", "مسشف") is ErrorClassification.SPELLING_ERROR

    def test_unrelated_word_is_vocabulary(self):
        """Test that an unrelated answer is unknown vocabulary."""
        assert classify("كتاب", "قلم") is ErrorClassification.VOCABULARY_UNKNOWN

    def test_blank_is_vocabulary(self):
        """Test that an empty answer is unknown vocabulary."""
        analysis = analyze_error("كتاب", "  ")
        assert analysis.error_type is ErrorClassification.VOCABULARY_UNKNOWN
        assert analysis.details == "No answer provided"

    def test_shared_word_is_partial(self):
        """Test that an incomplete answer is a partial match."""
        assert classify("كتاب جديد", "كتاب") is ErrorClassification.PARTIAL_MATCH

    def test_precomputed_diff_accepted(self):
        """Test that a caller-supplied diff is used."""
        diff = compute_char_diff("مدرسة", "مدرسه")
        assert classify("مدرسة", "مدرسه", diff=diff) is ErrorClassification.LETTER_CONFUSION


class TestExplanations:
    """Test learner-facing explanations and labels."""

    def test_letter_confusion_names_letters(self):
        """Test that the explanation names the confused pair."""
        text = get_error_explanation(ErrorClassification.LETTER_CONFUSION, "مدرسة", "مدرسه")
        assert text == 'You wrote "ه" but the correct letter is "ة". These letters are commonly confused.'

    def test_letter_confusion_without_answers(self):
        """Test the generic confusion message."""
        assert get_error_explanation("letter_confusion") == "Check for commonly confused letters in your answer."

    @pytest.mark.parametrize("error_type", list(ErrorClassification))
    def test_every_type_explained(self, error_type):
        """Test that every category has an explanation and a label."""
        assert get_error_explanation(error_type)
        assert get_error_type_label(error_type)

    def test_labels(self):
        """Test a few display labels."""
        assert get_error_type_label("tashkeel_missing") == "Missing Tashkeel"
        assert get_error_type_label(ErrorClassification.TYPO) == "Typo"

    def test_unknown_type_rejected(self):
        """Test that an unknown category name raises."""
        with pytest.raises(ValueError):
            get_error_type_label("grammar")
