from draftdeck.parsers.scryfall import (
    CardFetchError,
    CardParseError,
    basic_land_printings,
    card_from_scryfall,
    fetch_set_cards,
    load_cards,
)

__all__ = [
    "CardFetchError",
    "CardParseError",
    "basic_land_printings",
    "card_from_scryfall",
    "fetch_set_cards",
    "load_cards",
]
