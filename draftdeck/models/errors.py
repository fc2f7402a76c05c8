"""
Deck engine errors.

The engine absorbs most irregularities (empty pools, zero-weight colors,
candidate exhaustion) and returns degenerate-but-valid results. Only
structurally broken input and impossible targets are raised.
"""


class DeckEngineError(Exception):
    """Base class for deck engine errors."""


class MalformedDeckError(DeckEngineError):
    """
    Raised when a deck is missing required piles or structure.

    The operation fails as a whole; no partial deck is returned.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed deck: {reason}")


class InvalidTargetError(DeckEngineError, ValueError):
    """Raised when a deck size or land target cannot be satisfied."""

    def __init__(self, name: str, value: int, reason: str = "must be positive"):
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name} {value}: {reason}")
