"""
Answer result data structure.

This module provides the AnswerResult class which encapsulates the result
of evaluating one free-text answer, including:
- Correctness score (0.0 to 1.0)
- Learner/correct answers and the comparison policy used
- Error classification, explanation and character diff on failure
- Messages and feedback
- Metadata for the session tracker
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator

from drilleval.answer.classifier import ErrorClassification
from drilleval.answer.compare import ComparisonPolicy
from drilleval.answer.diff import CharDiffResult


class AnswerResult(BaseModel):
    """
    Result of answer evaluation.

    Attributes:
        score: Correctness score (0.0 = wrong, 1.0 = correct)
        correct: Boolean indicating if answer is considered correct
        student_answer: Learner's answer as submitted
        correct_answer: The expected answer (for display)
        original_student_answer: Unprocessed learner input
        answer_message: Primary feedback message shown to the learner
        messages: Additional feedback messages
        type: Answer type (text, error_correction, ...)
        policy: Comparison policy the verdict was reached under
        unanswered: True if the learner submitted nothing
        error_type: Error classification (incorrect answers only)
        explanation: Learner-facing explanation of ``error_type``
        diff: Character diff against ``correct_answer`` (incorrect answers only)
        label: Sub-answer label (blank index, item id)
        metadata: Additional metadata for the session tracker
    """

    model_config = ConfigDict(validate_assignment=True)

    # Core fields (always present)
    score: float = 0.0
    correct: StrictBool = False

    student_answer: str = ""
    correct_answer: str = ""
    original_student_answer: str = ""

    answer_message: str = ""
    messages: list[str] = []

    type: str = "text"
    policy: ComparisonPolicy = ComparisonPolicy.LENIENT
    unanswered: bool = False

    # Failure feedback
    error_type: ErrorClassification | None = None
    explanation: str = ""
    diff: CharDiffResult | None = None

    label: str = ""

    metadata: dict[str, Any] = {}

    def model_post_init(self, __context: Any) -> None:
        """Sync derived fields after initialization."""
        # Sync correct flag with score (1.0 = correct)
        if self.score >= 1.0:
            self.correct = True
        elif self.score <= 0.0:
            self.correct = False

        if not self.original_student_answer and self.student_answer:
            self.original_student_answer = self.student_answer

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: float) -> float:
        """Validate score is in valid range."""
        if not isinstance(v, (int, float)):
            raise ValueError("score must be numeric")
        if v < 0.0 or v > 1.0:
            raise ValueError("score must be between 0.0 and 1.0")
        return float(v)

    @field_validator("messages", mode="before")
    @classmethod
    def validate_messages(cls, v: Any) -> list[str]:
        """Ensure messages is a list."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("messages must be a list")
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, v: Any) -> dict[str, Any]:
        """Ensure metadata is a dict."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("metadata must be a dict")
        return v

    def add_message(self, message: str) -> None:
        """Add a feedback message."""
        if message and message.strip() and message not in self.messages:
            self.messages.append(message)

    def is_partial_credit(self) -> bool:
        """Check if answer received partial credit."""
        return 0.0 < self.score < 1.0

    def is_blank(self) -> bool:
        """Check if learner answer is blank."""
        return not (self.original_student_answer.strip() or self.student_answer.strip())

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary representation suitable for JSON responses
        """
        result = {
            "score": self.score,
            "correct": self.correct,
            "student_answer": self.student_answer,
            "correct_answer": self.correct_answer,
            "original_student_answer": self.original_student_answer,
            "answer_message": self.answer_message,
            "messages": self.messages,
            "type": self.type,
            "policy": self.policy.value,
            "unanswered": self.unanswered,
            "label": self.label,
            "metadata": self.metadata,
        }

        if self.error_type is not None:
            result["error_type"] = self.error_type.value
            result["explanation"] = self.explanation
        if self.diff is not None:
            result["diff"] = {
                "expected": [c.model_dump() for c in self.diff.expected_view],
                "actual": [c.model_dump() for c in self.diff.actual_view],
                "similarity": self.diff.similarity,
            }

        return result

    @classmethod
    def answer_correct(
        cls,
        student_ans: str,
        correct_ans: str,
        answer_type: str = "text",
        message: str = "",
        policy: ComparisonPolicy = ComparisonPolicy.LENIENT,
    ) -> AnswerResult:
        """
        Create a correct answer result (convenience factory).

        Args:
            student_ans: Learner's answer
            correct_ans: Correct answer
            answer_type: Type of answer
            message: Optional feedback message
            policy: Comparison policy used

        Returns:
            AnswerResult with score=1.0, correct=True
        """
        return cls(
            score=1.0,
            correct=True,
            student_answer=student_ans,
            correct_answer=correct_ans,
            type=answer_type,
            policy=policy,
            answer_message=message or "Correct!",
        )

    @classmethod
    def answer_incorrect(
        cls,
        student_ans: str,
        correct_ans: str,
        answer_type: str = "text",
        message: str = "",
        policy: ComparisonPolicy = ComparisonPolicy.LENIENT,
    ) -> AnswerResult:
        """
        Create an incorrect answer result (convenience factory).

        Args:
            student_ans: Learner's answer
            correct_ans: Correct answer
            answer_type: Type of answer
            message: Optional feedback message
            policy: Comparison policy used

        Returns:
            AnswerResult with score=0.0, correct=False
        """
        return cls(
            score=0.0,
            correct=False,
            student_answer=student_ans,
            correct_answer=correct_ans,
            type=answer_type,
            policy=policy,
            answer_message=message or "Incorrect.",
        )

    @classmethod
    def answer_unanswered(
        cls,
        correct_ans: str,
        answer_type: str = "text",
        policy: ComparisonPolicy = ComparisonPolicy.LENIENT,
    ) -> AnswerResult:
        """
        Create a result for a blank submission.

        No diff or classification is attached to an unanswered result.

        Args:
            correct_ans: Correct answer
            answer_type: Type of answer
            policy: Comparison policy in effect

        Returns:
            AnswerResult with unanswered=True, score=0.0
        """
        return cls(
            score=0.0,
            correct=False,
            correct_answer=correct_ans,
            type=answer_type,
            policy=policy,
            unanswered=True,
            answer_message="No answer provided.",
        )
