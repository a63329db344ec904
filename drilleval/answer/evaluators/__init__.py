"""
Type-specific answer evaluators.

Each module implements an evaluator for a specific answer type.
"""

from .error_correction import ErrorCorrectionEvaluator, SentenceErrorType
from .text import TextEvaluator

__all__ = [
    "TextEvaluator",
    "ErrorCorrectionEvaluator",
    "SentenceErrorType",
]
