"""
Text utilities: Arabic normalization, grapheme units and lexicon tables.
"""

from .arabic import (
    TashkeelLevel,
    apply_tashkeel_scaffolding,
    collapse_whitespace,
    count_tashkeel,
    extract_tashkeel,
    has_tashkeel,
    is_arabic_text,
    is_tashkeel,
    letter_marks,
    normalize,
    remove_tashkeel,
    split_units,
    tashkeel_level_for_strength,
    tokenize,
)
from .lexicon import Lexicon, default_lexicon

__all__ = [
    "TashkeelLevel",
    "apply_tashkeel_scaffolding",
    "collapse_whitespace",
    "count_tashkeel",
    "extract_tashkeel",
    "has_tashkeel",
    "is_arabic_text",
    "is_tashkeel",
    "letter_marks",
    "normalize",
    "remove_tashkeel",
    "split_units",
    "tashkeel_level_for_strength",
    "tokenize",
    "Lexicon",
    "default_lexicon",
]
