"""
Graders for combining the scores of several sub-answers.

A grader folds per-item scores (cloze blanks, sorted words, whole
exercises in a session) into one score between 0.0 and 1.0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Scored(Protocol):
    """Anything carrying a 0.0-1.0 score (AnswerResult, ItemResult, ...)."""

    @property
    def score(self) -> float: ...


class Grader(BaseModel, ABC):
    """
    Abstract base class for graders.

    Graders take a list of scored results (one per sub-answer) and
    compute an overall score.
    """

    model_config = ConfigDict(validate_assignment=True)

    @abstractmethod
    def grade(self, answers: Sequence[Scored]) -> float:
        """
        Compute overall score from individual results.

        Args:
            answers: Scored results, one per sub-answer

        Returns:
            Overall score (0.0 to 1.0)
        """


class StandardGrader(Grader):
    """
    Standard (all-or-nothing) grader.

    Score is 1.0 only if every sub-answer is fully correct, 0.0 otherwise.
    """

    def grade(self, answers: Sequence[Scored]) -> float:
        if not answers:
            return 0.0
        return 1.0 if all(ans.score >= 1.0 for ans in answers) else 0.0


class AverageGrader(Grader):
    """
    Average grader (supports partial credit).

    Score is the average of the individual scores, optionally weighted.
    """

    weights: Optional[list[float]] = Field(
        default=None,
        description="Optional weights for each answer (must sum to 1.0)"
    )

    @field_validator('weights')
    @classmethod
    def validate_weights(cls, v: Optional[list[float]]) -> Optional[list[float]]:
        """Validate that weights are non-negative; the sum is checked in grade()."""
        if v is not None:
            if not all(w >= 0 for w in v):
                raise ValueError("All weights must be non-negative")
        return v

    def grade(self, answers: Sequence[Scored]) -> float:
        """
        Grade using weighted or unweighted average.

        Args:
            answers: Scored results

        Returns:
            Average score (0.0 to 1.0)

        Raises:
            ValueError: If weights do not fit the answers
        """
        if not answers:
            return 0.0

        if self.weights is None:
            return sum(ans.score for ans in answers) / len(answers)

        if len(self.weights) != len(answers):
            raise ValueError(
                f"Number of weights ({len(self.weights)}) must match "
                f"number of answers ({len(answers)})"
            )

        weight_sum = sum(self.weights)
        if abs(weight_sum - 1.0) > 0.001:
            raise ValueError(f"Weights must sum to 1.0 (got {weight_sum})")

        return sum(ans.score * weight for ans, weight in zip(answers, self.weights))
