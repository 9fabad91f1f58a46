"""
Words module exceptions.
"""

from shared.exceptions import KelimeError


class LexiconLoadError(KelimeError):
    """Raised when the word list file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not load lexicon from {path}: {reason}",
            code="LEXICON_LOAD_ERROR",
            details={"path": path, "reason": reason},
        )
