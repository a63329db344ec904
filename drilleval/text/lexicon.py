"""
Lexicon data for Arabic answer evaluation.

The lexicon bundles the language-specific tables the engine needs:
- Commonly confused letter pairs (error classification)
- Stop words that must never become cloze blanks
- Clitic prefixes stripped before the stop-word check

Tables live in ``data/arabic.yaml`` so content authors can extend them
without touching code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

from .arabic import remove_tashkeel

DEFAULT_LEXICON_PATH = Path(__file__).parent / "data" / "arabic.yaml"


@dataclass(frozen=True)
class Lexicon:
    """
    Language tables used by the classifier and the blank selector.

    All stop words and prefixes are stored without tashkeel.

    Attributes:
        letter_confusions: Unordered pairs of confusable base letters
        stop_words: Tokens excluded from cloze blanks
        clitic_prefixes: Prefixes removed before the stop-word lookup
    """

    letter_confusions: frozenset[frozenset[str]] = field(default_factory=frozenset)
    stop_words: frozenset[str] = field(default_factory=frozenset)
    clitic_prefixes: tuple[str, ...] = ()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Lexicon":
        """
        Load lexicon from YAML file.

        Args:
            path: Path to YAML lexicon file

        Returns:
            Lexicon instance
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        confusions = frozenset(
            frozenset(pair)
            for pair in data.get("letter_confusions", [])
            if len(pair) == 2 and pair[0] != pair[1]
        )
        stop_words = frozenset(
            remove_tashkeel(str(word)) for word in data.get("stop_words", [])
        )
        # Longest first so "ال" wins over any one-letter prefix
        prefixes = tuple(
            sorted(
                {remove_tashkeel(str(p)) for p in data.get("clitic_prefixes", [])},
                key=len,
                reverse=True,
            )
        )
        return cls(
            letter_confusions=confusions,
            stop_words=stop_words,
            clitic_prefixes=prefixes,
        )

    def is_confusable(self, a: str, b: str) -> bool:
        """Check if two base letters form a known confusion pair."""
        return frozenset((a, b)) in self.letter_confusions

    def is_stop_word(self, word: str) -> bool:
        """Check a token (with or without tashkeel) against the stop words."""
        return remove_tashkeel(word) in self.stop_words

    def strip_clitic(self, word: str, min_remainder: int = 1) -> str:
        """
        Remove tashkeel and the first matching clitic prefix from ``word``.

        The prefix is kept when fewer than ``min_remainder`` letters would
        remain; with ``min_remainder=2`` a word such as "فم" is not read as
        a prefix plus a one-letter stem.
        """
        bare = remove_tashkeel(word)
        for prefix in self.clitic_prefixes:
            if bare.startswith(prefix) and len(bare) - len(prefix) >= min_remainder:
                return bare[len(prefix):]
        return bare


@lru_cache(maxsize=None)
def default_lexicon() -> Lexicon:
    """Get the packaged lexicon (loaded once)."""
    return Lexicon.from_yaml(DEFAULT_LEXICON_PATH)
