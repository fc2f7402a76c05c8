from draftdeck.models.card import (
    BASIC_LAND_NAMES,
    COLOR_NAMES,
    COLORS,
    Card,
    Color,
    canonical_colors,
)
from draftdeck.models.deck import (
    CREATURE_PILES,
    IN_PLAY_PILES,
    MAIN_DECK_PILES,
    NONLAND_PILES,
    OTHER_PILES,
    PILE_COUNT,
    Deck,
    DeckOptions,
    LandConfiguration,
    PileId,
)
from draftdeck.models.errors import DeckEngineError, InvalidTargetError, MalformedDeckError

__all__ = [
    "BASIC_LAND_NAMES",
    "COLOR_NAMES",
    "COLORS",
    "CREATURE_PILES",
    "Card",
    "Color",
    "Deck",
    "DeckEngineError",
    "DeckOptions",
    "IN_PLAY_PILES",
    "InvalidTargetError",
    "LandConfiguration",
    "MAIN_DECK_PILES",
    "MalformedDeckError",
    "NONLAND_PILES",
    "OTHER_PILES",
    "PILE_COUNT",
    "PileId",
    "canonical_colors",
]
