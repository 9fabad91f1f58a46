"""
Words module data models.
"""

from typing import Optional

from pydantic import BaseModel, Field

# 4x4 grid of single uppercase letters, row-major.
Board = list[list[str]]


class WordValidation(BaseModel):
    """
    Result of scoring a submitted word.

    ``points`` already reflects any discount applied by the room (a word the
    player scored before is worth 0), while ``is_valid`` always reports
    dictionary membership truthfully.
    """

    word: str = Field(..., description="Normalized (trimmed, uppercased) word")
    is_valid: bool = Field(..., description="Whether the word is in the lexicon")
    points: int = Field(default=0, ge=0, description="Points awarded")
    definition: Optional[str] = Field(None, description="Short note for valid words")
    already_submitted: bool = Field(
        default=False,
        description="True when the player had already scored this word in the room",
    )
