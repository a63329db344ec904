"""
Answer evaluation: comparison, diffing, error classification and hints.

Provides:
- Lenient and strict comparators sharing one normalization primitive
- Character-level diff over letter+tashkeel units
- Error classification with learner-facing explanations
- Pluggable evaluators behind a registry
- Graders for combining sub-answer scores
- Retry hint progression
"""

from .answer_hash import AnswerResult
from .classifier import (
    ErrorAnalysis,
    ErrorClassification,
    LetterConfusion,
    analyze_error,
    classify,
    get_error_explanation,
    get_error_type_label,
)
from .compare import (
    ComparisonPolicy,
    canonical_form,
    compare,
    compare_answers,
    compare_answers_strict,
    is_blank,
    policy_for,
)
from .diff import CharDiffResult, DiffChar, DiffEntry, DiffOp, apply_diff, compute_char_diff, edit_distance
from .evaluator import (
    AnswerEvaluator,
    EvaluatorRegistry,
    create_evaluator,
    get_evaluator,
    register_evaluator,
)
from .evaluators import ErrorCorrectionEvaluator, SentenceErrorType, TextEvaluator
from .graders import AverageGrader, Grader, StandardGrader
from .hints import RetryOutcome, RetryProgression, RetryState, get_retry_hint

register_evaluator(TextEvaluator.answer_type, TextEvaluator)
register_evaluator(ErrorCorrectionEvaluator.answer_type, ErrorCorrectionEvaluator)

__all__ = [
    "AnswerResult",
    "ComparisonPolicy",
    "canonical_form",
    "compare",
    "compare_answers",
    "compare_answers_strict",
    "is_blank",
    "policy_for",
    "CharDiffResult",
    "DiffChar",
    "DiffEntry",
    "DiffOp",
    "apply_diff",
    "compute_char_diff",
    "edit_distance",
    "ErrorAnalysis",
    "ErrorClassification",
    "LetterConfusion",
    "analyze_error",
    "classify",
    "get_error_explanation",
    "get_error_type_label",
    "AnswerEvaluator",
    "EvaluatorRegistry",
    "create_evaluator",
    "get_evaluator",
    "register_evaluator",
    "TextEvaluator",
    "ErrorCorrectionEvaluator",
    "SentenceErrorType",
    "Grader",
    "StandardGrader",
    "AverageGrader",
    "RetryOutcome",
    "RetryProgression",
    "RetryState",
    "get_retry_hint",
]
