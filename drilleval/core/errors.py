"""
Engine exceptions.

Learner mistakes are never exceptions; they are reported through
``ErrorClassification`` and score results. The classes here cover the
few software-level faults: malformed exercise content and lookups of
answer types nobody registered.
"""

from typing import Any, Dict, Optional


class DrillEvalError(Exception):
    """Base exception for engine errors"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ExerciseDefinitionError(DrillEvalError):
    """Raised when exercise content cannot be validated"""

    def __init__(self, message: str, errors: Optional[list[Any]] = None, exercise_id: Optional[str] = None):
        details: Dict[str, Any] = {}
        if exercise_id:
            details["exercise_id"] = exercise_id
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details)


class UnknownAnswerTypeError(DrillEvalError, ValueError):
    """Raised when no evaluator is registered for an answer type"""

    def __init__(self, answer_type: str):
        super().__init__(
            message=f"No evaluator registered for type: {answer_type}",
            details={"answer_type": answer_type}
        )
