"""
Scoring for exercises with several sub-answers.

All scorers return a MultiItemScoreResult (or a subclass) carrying the
per-item breakdown, the aggregate verdict and a feedback tier.
"""

from .category_sort import correct_grouping, placement_progress, score_category_sort, score_semantic_field
from .cloze import (
    BLANK_MARKER,
    ClozeScoreResult,
    blank_hint,
    build_multi_cloze,
    create_prompt_with_blanks,
    is_blankable_word,
    reconstruct_sentence,
    score_cloze,
    score_multi_cloze,
    select_blank_positions,
)
from .recall import RecallScoreResult, recall_feedback, recall_grade, score_recall
from .result import FeedbackTier, ItemResult, MultiItemScoreResult, feedback_tier
from .sequence import SequenceScoreResult, score_sequence, score_unscramble, sequence_hint

__all__ = [
    "FeedbackTier",
    "ItemResult",
    "MultiItemScoreResult",
    "feedback_tier",
    "BLANK_MARKER",
    "ClozeScoreResult",
    "blank_hint",
    "build_multi_cloze",
    "create_prompt_with_blanks",
    "is_blankable_word",
    "reconstruct_sentence",
    "score_cloze",
    "score_multi_cloze",
    "select_blank_positions",
    "correct_grouping",
    "placement_progress",
    "score_category_sort",
    "score_semantic_field",
    "SequenceScoreResult",
    "score_sequence",
    "score_unscramble",
    "sequence_hint",
    "RecallScoreResult",
    "recall_feedback",
    "recall_grade",
    "score_recall",
]
