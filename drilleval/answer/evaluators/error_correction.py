"""
Error-correction answer evaluator.

The learner is shown a sentence containing one deliberate mistake and
must type the corrected sentence. Besides the overall verdict the
evaluator reports whether the faulty word was found and whether it was
fixed, so feedback can be specific.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from drilleval.text.arabic import normalize

from ..answer_hash import AnswerResult
from ..compare import compare_answers, is_blank
from ..evaluator import AnswerEvaluator


class SentenceErrorType(str, Enum):
    """Kind of mistake planted in an error-correction sentence."""

    GENDER = "gender"
    NUMBER = "number"
    CASE = "case"
    DEFINITENESS = "definiteness"
    WORD_ORDER = "word_order"
    VOCABULARY = "vocabulary"
    TASHKEEL = "tashkeel"
    SPELLING = "spelling"


ERROR_TYPE_DESCRIPTIONS: dict[SentenceErrorType, str] = {
    SentenceErrorType.GENDER: "Gender agreement error",
    SentenceErrorType.NUMBER: "Number agreement error",
    SentenceErrorType.CASE: "Case ending error",
    SentenceErrorType.DEFINITENESS: "Definite/indefinite error",
    SentenceErrorType.WORD_ORDER: "Word order error",
    SentenceErrorType.VOCABULARY: "Wrong word used",
    SentenceErrorType.TASHKEEL: "Vowel marks error",
    SentenceErrorType.SPELLING: "Spelling error",
}


class ErrorCorrectionEvaluator(AnswerEvaluator):
    """
    Evaluator for error-correction sentences.

    ``correct_answer`` is the corrected sentence; ``error_word`` and
    ``correct_word`` locate the planted mistake. The sentence is always
    compared leniently.
    """

    answer_type = "error_correction"

    error_word: str = Field(description="The faulty word or phrase shown to the learner")
    correct_word: str = Field(description="What the faulty word should be")
    error_type: SentenceErrorType = SentenceErrorType.VOCABULARY

    def evaluate(self, student_answer: str | None) -> AnswerResult:
        """Evaluate a corrected sentence."""
        if is_blank(student_answer):
            return AnswerResult.answer_unanswered(
                correct_ans=self.correct_answer, answer_type=self.answer_type
            )

        student_value = self.parse_student_answer(student_answer)
        description = ERROR_TYPE_DESCRIPTIONS[self.error_type]

        if compare_answers(self.correct_answer, student_value):
            result = AnswerResult.answer_correct(
                student_ans=student_value,
                correct_ans=self.correct_answer,
                answer_type=self.answer_type,
                message="Correct! You found and fixed the error.",
            )
            identified, corrected = True, True
        else:
            normalized = normalize(student_value)
            has_error_word = normalize(self.error_word) in normalized
            has_correct_word = normalize(self.correct_word) in normalized

            if has_error_word and not has_correct_word:
                identified, corrected = False, False
                message = f'The error is in "{self.error_word}". {description}.'
            elif not has_error_word and not has_correct_word:
                identified, corrected = True, False
                message = f'Good - you found the error! But the correction should be "{self.correct_word}".'
            else:
                identified, corrected = True, True
                message = "You fixed the error, but something else changed. Check the rest of the sentence."

            result = AnswerResult.answer_incorrect(
                student_ans=student_value,
                correct_ans=self.correct_answer,
                answer_type=self.answer_type,
                message=message,
            )

        result.original_student_answer = student_answer
        result.metadata.update(
            {
                "identified_error": identified,
                "corrected_properly": corrected,
                "error_type": self.error_type.value,
            }
        )
        return result

    def check_identification(self, selected_word: str) -> bool:
        """Check whether the learner picked out the faulty word."""
        return compare_answers(self.error_word, selected_word)
