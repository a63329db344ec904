"""
Base answer evaluator framework.

Provides abstract base class for answer evaluators and a registry
for type-based dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from drilleval.core.errors import UnknownAnswerTypeError

from .answer_hash import AnswerResult
from .compare import ComparisonPolicy, compare


class AnswerEvaluator(BaseModel, ABC):
    """
    Abstract base class for answer evaluators.

    Each evaluator is responsible for checking answers of a specific type
    (free text, error correction, ...) against a correct answer.

    Subclasses must implement:
    - evaluate(): Core evaluation logic
    - answer_type: Class variable for type identification
    """

    model_config = ConfigDict(validate_assignment=True)

    # Type identifier (must be set by subclasses)
    answer_type: ClassVar[str] = "unknown"

    correct_answer: str = Field(description="The correct answer to compare against")
    policy: ComparisonPolicy = Field(
        default=ComparisonPolicy.LENIENT,
        description="Comparison strictness: 'lenient' ignores tashkeel, 'strict' requires it",
    )
    options: dict = Field(default_factory=dict, description="Additional evaluator-specific options")

    @abstractmethod
    def evaluate(self, student_answer: str | None) -> AnswerResult:
        """
        Evaluate learner's answer against correct answer.

        Args:
            student_answer: Learner's answer (None or blank means unanswered)

        Returns:
            AnswerResult with score, messages, etc.

        This method should:
        1. Short-circuit blank input to an unanswered result
        2. Compare with correct answer under ``policy``
        3. Attach feedback to incorrect results
        """

    def parse_student_answer(self, answer: str) -> str:
        """
        Prepare the learner's raw input for comparison.

        Override this in subclasses to provide type-specific parsing.

        Args:
            answer: Raw learner input

        Returns:
            Parsed answer
        """
        return answer.strip()

    def compare(self, student_value: str, correct_value: str) -> tuple[bool, float]:
        """
        Compare learner and correct values.

        Override this in subclasses for type-specific comparison.

        Args:
            student_value: Parsed learner answer
            correct_value: Correct answer

        Returns:
            Tuple of (is_correct, score)
        """
        is_correct = compare(correct_value, student_value, self.policy)
        return is_correct, 1.0 if is_correct else 0.0

    def get_correct_answer_display(self) -> str:
        """
        Get display string for correct answer.

        Returns:
            String representation of correct answer
        """
        return self.correct_answer


class EvaluatorRegistry(BaseModel):
    """
    Registry for answer evaluators.

    Provides type-based dispatch to appropriate evaluator.
    """

    _evaluators: dict[str, type[AnswerEvaluator]] = PrivateAttr(default_factory=dict)

    def register(self, answer_type: str, evaluator_class: type[AnswerEvaluator]) -> None:
        """
        Register an evaluator for a specific answer type.

        Args:
            answer_type: Type identifier (e.g., "text", "error_correction")
            evaluator_class: Evaluator class to use for this type

        Raises:
            TypeError: If evaluator_class is not an AnswerEvaluator subclass
        """
        if not (isinstance(evaluator_class, type) and issubclass(evaluator_class, AnswerEvaluator)):
            raise TypeError(f"evaluator_class must be a subclass of AnswerEvaluator, got {evaluator_class}")
        self._evaluators[answer_type] = evaluator_class

    def get_evaluator(self, answer_type: str) -> type[AnswerEvaluator] | None:
        """
        Get evaluator class for an answer type.

        Args:
            answer_type: Type identifier

        Returns:
            Evaluator class, or None if not found
        """
        return self._evaluators.get(answer_type)

    def create_evaluator(self, answer_type: str, correct_answer: str, **options: Any) -> AnswerEvaluator:
        """
        Create evaluator instance for an answer type.

        Args:
            answer_type: Type identifier
            correct_answer: Correct answer
            **options: Evaluator fields (policy, alternative_answers, ...)

        Returns:
            Evaluator instance

        Raises:
            UnknownAnswerTypeError: If answer type not registered
        """
        evaluator_class = self.get_evaluator(answer_type)
        if evaluator_class is None:
            raise UnknownAnswerTypeError(answer_type)

        return evaluator_class(correct_answer=correct_answer, **options)

    def get_registered_types(self) -> list[str]:
        """
        Get list of all registered answer types.

        Returns:
            List of type identifiers
        """
        return list(self._evaluators.keys())


# Global registry instance
_global_registry = EvaluatorRegistry()


def register_evaluator(answer_type: str, evaluator_class: type[AnswerEvaluator]) -> None:
    """
    Register an evaluator in the global registry.

    Args:
        answer_type: Type identifier
        evaluator_class: Evaluator class
    """
    _global_registry.register(answer_type, evaluator_class)


def get_evaluator(answer_type: str) -> type[AnswerEvaluator] | None:
    """Get evaluator from global registry."""
    return _global_registry.get_evaluator(answer_type)


def create_evaluator(answer_type: str, correct_answer: str, **options: Any) -> AnswerEvaluator:
    """
    Create evaluator instance from global registry.

    Args:
        answer_type: Type identifier
        correct_answer: Correct answer
        **options: Evaluator fields

    Returns:
        Evaluator instance
    """
    return _global_registry.create_evaluator(answer_type, correct_answer, **options)
