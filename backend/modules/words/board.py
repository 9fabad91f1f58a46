"""
Letter board generation.

Each cell is drawn independently: a vowel with probability 0.30, otherwise
a consonant, uniformly within the chosen set. No adjacency or solvability
check is made, so some boards contain few long words.
"""

from typing import Optional
import random

from .models import Board

VOWELS = "AEIİOÖUÜ"
CONSONANTS = "BCÇDFGĞHJKLMNPRSŞTVYZ"

BOARD_SIZE = 4
VOWEL_PROBABILITY = 0.30


class BoardGenerator:
    """
    Generates square letter boards from the Turkish alphabet.

    Args:
        rng: Random source; pass a seeded random.Random for reproducible boards
        vowel_probability: Chance that a cell is a vowel
        size: Board edge length
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        vowel_probability: float = VOWEL_PROBABILITY,
        size: int = BOARD_SIZE,
    ):
        if not 0.0 <= vowel_probability <= 1.0:
            raise ValueError(f"vowel_probability must be within [0, 1], got {vowel_probability}")
        self._rng = rng or random.Random()
        self._vowel_probability = vowel_probability
        self._size = size

    def generate(self) -> Board:
        return [
            [self._draw_letter() for _ in range(self._size)]
            for _ in range(self._size)
        ]

    def _draw_letter(self) -> str:
        use_vowel = self._rng.random() < self._vowel_probability
        letters = VOWELS if use_vowel else CONSONANTS
        return self._rng.choice(letters)
