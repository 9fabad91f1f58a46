"""
Words module.

Lexicon, letter board generation and word scoring.

Public API:
- ILexicon, IBoardGenerator, IWordScorer: Interfaces used by the rooms module
- Lexicon: Set-backed word list
- BoardGenerator: 4x4 board with vowel/consonant weighting
- WordScorer: Length-based scoring against the lexicon
- WordValidation: Scoring result
"""

from .interfaces import ILexicon, IBoardGenerator, IWordScorer
from .models import Board, WordValidation
from .exceptions import LexiconLoadError
from .lexicon import Lexicon, load_lexicon, load_default_lexicon, normalize_word
from .board import BoardGenerator, VOWELS, CONSONANTS
from .scorer import WordScorer, points_for_length, MIN_WORD_LENGTH

__all__ = [
    # Interfaces
    "ILexicon",
    "IBoardGenerator",
    "IWordScorer",
    # Models
    "Board",
    "WordValidation",
    # Exceptions
    "LexiconLoadError",
    # Lexicon
    "Lexicon",
    "load_lexicon",
    "load_default_lexicon",
    "normalize_word",
    # Board
    "BoardGenerator",
    "VOWELS",
    "CONSONANTS",
    # Scoring
    "WordScorer",
    "points_for_length",
    "MIN_WORD_LENGTH",
]
