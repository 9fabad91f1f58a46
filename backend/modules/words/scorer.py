"""
Word scoring.

Points grow faster than word length to make long words worth hunting for:

    length  3  4  5  6  7+
    points  1  2  4  6  10

Words shorter than three letters are rejected without a lexicon lookup.
"""

from .interfaces import ILexicon
from .lexicon import normalize_word
from .models import WordValidation

MIN_WORD_LENGTH = 3

POINTS_BY_LENGTH = {3: 1, 4: 2, 5: 4, 6: 6}
LONG_WORD_POINTS = 10


def points_for_length(length: int) -> int:
    """Points for a valid word of the given length."""
    if length < MIN_WORD_LENGTH:
        return 0
    return POINTS_BY_LENGTH.get(length, LONG_WORD_POINTS)


class WordScorer:
    """Stateless scorer; the room applies the already-submitted discount."""

    def __init__(self, lexicon: ILexicon):
        self._lexicon = lexicon

    def score(self, raw_word: str) -> WordValidation:
        word = normalize_word(raw_word)

        if len(word) < MIN_WORD_LENGTH:
            return WordValidation(word=word, is_valid=False, points=0)

        is_valid = self._lexicon.contains(word)
        return WordValidation(
            word=word,
            is_valid=is_valid,
            points=points_for_length(len(word)) if is_valid else 0,
            definition=f"{word} geçerli bir Türkçe kelimedir." if is_valid else None,
        )
