"""
Lexicon: the set of words accepted for scoring.

Loaded once per process from a plain-text word list and never mutated
afterwards, so it can be shared freely between concurrent room operations.
"""

from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional
import logging

from .exceptions import LexiconLoadError

logger = logging.getLogger(__name__)

DEFAULT_WORD_LIST = Path(__file__).parent / "data" / "tr_words.txt"

# str.upper() maps "i" to "I"; Turkish needs the dotted capital.
_TURKISH_UPPER = str.maketrans({"i": "İ", "ı": "I"})


def normalize_word(word: str) -> str:
    """Trim whitespace and uppercase using Turkish casing rules."""
    return word.strip().translate(_TURKISH_UPPER).upper()


class Lexicon:
    """
    Immutable set of valid words with O(1) membership checks.

    Example:
        lexicon = Lexicon(["kedi", "KÖPEK"])
        lexicon.contains("  Kedi ")  # True
    """

    def __init__(self, words: Iterable[str]):
        self._words: frozenset[str] = frozenset(
            normalized for normalized in (normalize_word(w) for w in words) if normalized
        )

    def contains(self, word: str) -> bool:
        return normalize_word(word) in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)


def load_lexicon(path: Path) -> Lexicon:
    """
    Load a lexicon from a word list file.

    One word per line; blank lines and lines starting with ``#`` are skipped.

    Raises:
        LexiconLoadError: If the file cannot be read
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LexiconLoadError(str(path), str(e)) from e

    words = [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
    lexicon = Lexicon(words)
    logger.info(f"Loaded lexicon from {path}: {len(lexicon)} words")
    return lexicon


@lru_cache
def load_default_lexicon(path: Optional[str] = None) -> Lexicon:
    """
    Get the process-wide lexicon.

    Uses lru_cache so the word list is read only once per path.

    Args:
        path: Optional word list override (Settings.lexicon_path)
    """
    return load_lexicon(Path(path) if path else DEFAULT_WORD_LIST)
