"""
Free-text answer evaluator.

Handles Arabic and English text answers under the lenient or strict
comparison policy, with optional alternative accepted answers.
"""

from __future__ import annotations

from pydantic import Field

from drilleval.core.logging import get_logger

from ..answer_hash import AnswerResult
from ..classifier import analyze_error, get_error_explanation
from ..compare import is_blank
from ..diff import compute_char_diff
from ..evaluator import AnswerEvaluator

logger = get_logger(__name__)


class TextEvaluator(AnswerEvaluator):
    """
    Evaluator for free-text answers.

    Supports:
    - Lenient matching (tashkeel, spacing and case ignored)
    - Strict matching (tashkeel must match)
    - Alternative accepted answers
    - Diff and error classification on incorrect answers
    """

    answer_type = "text"

    alternative_answers: list[str] = Field(
        default_factory=list, description="Other answers accepted as correct"
    )

    def accepted_answers(self) -> list[str]:
        """Return the correct answer followed by its alternatives."""
        return [self.correct_answer, *self.alternative_answers]

    def evaluate(self, student_answer: str | None) -> AnswerResult:
        """Evaluate text answer."""
        if is_blank(student_answer):
            return AnswerResult.answer_unanswered(
                correct_ans=self.correct_answer,
                answer_type=self.answer_type,
                policy=self.policy,
            )

        student_value = self.parse_student_answer(student_answer)
        for candidate in self.accepted_answers():
            is_correct, _ = self.compare(student_value, candidate)
            if is_correct:
                result = AnswerResult.answer_correct(
                    student_ans=student_value,
                    correct_ans=self.correct_answer,
                    answer_type=self.answer_type,
                    policy=self.policy,
                )
                result.original_student_answer = student_answer
                if candidate != self.correct_answer:
                    result.metadata["matched_alternative"] = candidate
                return result

        diff = compute_char_diff(self.correct_answer, student_value)
        analysis = analyze_error(self.correct_answer, student_value, diff)
        result = AnswerResult.answer_incorrect(
            student_ans=student_value,
            correct_ans=self.correct_answer,
            answer_type=self.answer_type,
            policy=self.policy,
        )
        result.original_student_answer = student_answer
        result.error_type = analysis.error_type
        result.explanation = get_error_explanation(
            analysis.error_type, self.correct_answer, student_value, diff
        )
        result.diff = diff
        result.metadata["error_details"] = analysis.details

        logger.debug(
            "Incorrect text answer",
            extra={
                "extra_data": {
                    "policy": self.policy.value,
                    "error_type": analysis.error_type.value,
                    "distance": diff.distance,
                }
            },
        )
        return result
