from __future__ import annotations


class UnknownPitch(ValueError):
    """Raised when a buffer has no lag below the YIN threshold."""

    def __init__(self, message: str = "no pitch could be determined") -> None:
        super().__init__(message)
