"""
Words module interfaces.

The rooms module depends on these protocols, not on the concrete lexicon,
so tests can hand it a tiny fixed word set.
"""

from typing import Protocol, runtime_checkable

from .models import Board, WordValidation


@runtime_checkable
class ILexicon(Protocol):
    """Read-only set of valid words."""

    def contains(self, word: str) -> bool:
        """
        Check dictionary membership.

        The word is normalized (trimmed, Turkish uppercase) before lookup.
        """
        ...


@runtime_checkable
class IBoardGenerator(Protocol):
    """Produces letter boards for new rooms."""

    def generate(self) -> Board:
        """Generate a fresh 4x4 board."""
        ...


@runtime_checkable
class IWordScorer(Protocol):
    """Validates and scores a single word, with no room state."""

    def score(self, raw_word: str) -> WordValidation:
        """
        Normalize, validate and score a word.

        Args:
            raw_word: Word as typed or traced by the player

        Returns:
            WordValidation with the normalized word, validity and points
        """
        ...
