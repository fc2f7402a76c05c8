"""
Deck list export.

Renders a deck as plain text, either in the Arena import format
("4 Name (SET) 123") or as a generic "4 Name" list.

This module does not validate or normalize; it formats what it is given
(except for the Arena 60-card export, which normalizes first).
"""

import random
import re
from collections.abc import Iterable, Mapping

from draftdeck.config import settings
from draftdeck.models.card import BASIC_LAND_NAMES, COLORS, Card, Color
from draftdeck.models.deck import MAIN_DECK_PILES, Deck, PileId
from draftdeck.services.deck_normalizer import MAX_SIDEBOARD, normalize_deck

ARENA_FORMAT = "arena"
NORMAL_FORMAT = "normal"

_LEADING_DIGITS = re.compile(r"^(\d+)(.*)$")

BASIC_LAND_TYPE_LINE = "Basic Land"


def is_expansion_set(set_code: str, cards: Iterable[Card] = ()) -> bool:
    """
    Whether cards of this product come from several sets.

    True for configured multi-set products, or when the cards themselves
    span more than one set.
    """
    if set_code.lower() in {code.lower() for code in settings.expansion_set_codes}:
        return True
    return len({card.set_code.lower() for card in cards}) > 1


def _collector_key(collector_number: str) -> tuple[int, int, str]:
    match = _LEADING_DIGITS.match(collector_number)
    if match:
        return (0, int(match.group(1)), match.group(2))
    return (1, 0, collector_number)


def as_text(cards: Iterable[Card], set_code: str, format_variant: str = NORMAL_FORMAT) -> str:
    """
    Render cards as deck list lines, one line per card name.

    Args:
        cards: Cards to render (copies are grouped by name)
        set_code: Set the deck was drafted from
        format_variant: "arena" for Arena import lines, anything else for plain lines

    Returns:
        Newline-separated "<count> <name>" lines
    """
    cards = list(cards)

    if is_expansion_set(set_code, cards):
        ordered = sorted(
            cards,
            key=lambda card: (card.set_code.lower(), _collector_key(card.collector_number)),
        )
    else:
        ordered = sorted(cards, key=lambda card: _collector_key(card.collector_number))

    counts: dict[str, int] = {}
    first_copy: dict[str, Card] = {}
    for card in ordered:
        if card.name not in counts:
            counts[card.name] = 0
            first_copy[card.name] = card
        counts[card.name] += 1

    lines = []
    for name, count in counts.items():
        line = f"{count} {name}"
        if format_variant == ARENA_FORMAT:
            card = first_copy[name]
            line = f"{line} ({card.set_code.upper()}) {card.collector_number}".rstrip()
        lines.append(line)

    return "\n".join(lines)


def basic_land_cards(
    set_code: str,
    basic: Mapping[Color, int],
    printings: Mapping[Color, Card] | None = None,
) -> list[Card]:
    """
    Expand basic land counts into land cards.

    Uses the supplied printing for each color, or a bare card from the
    deck's set when none is given.
    """
    cards: list[Card] = []
    for color in COLORS:
        count = basic.get(color, 0)
        if count <= 0:
            continue
        printing = (printings or {}).get(color) or Card(
            name=BASIC_LAND_NAMES[color],
            type_line=BASIC_LAND_TYPE_LINE,
            set_code=set_code,
        )
        cards.extend([printing] * count)
    return cards


def export_deck(
    set_code: str,
    format_variant: str,
    sealed: bool,
    deck: Deck,
    basic_land_printings: Mapping[Color, Card] | None = None,
) -> str:
    """
    Render a full deck list: main deck, basic lands, then sideboard.

    Blocks are separated by a blank line; empty blocks are left out.
    Draft sideboards are cut to 15 cards.

    Args:
        set_code: Set the deck was drafted from
        format_variant: "arena" or "normal"
        sealed: Sealed decks keep their whole sideboard
        deck: Deck to render
        basic_land_printings: Printing to use for each basic land (Arena only)

    Returns:
        Deck list text
    """
    deck.validate()

    main_deck_list = as_text(deck.cards_in(MAIN_DECK_PILES), set_code, format_variant)

    if format_variant == ARENA_FORMAT:
        basics = basic_land_cards(set_code, deck.lands.basic, basic_land_printings)
        basic_lands_list = as_text(basics, set_code, format_variant)
    else:
        basic_lands_list = "\n".join(
            f"{deck.lands.basic[color]} {BASIC_LAND_NAMES[color]}"
            for color in COLORS
            if deck.lands.basic[color] > 0
        )

    sideboard = deck.piles[PileId.SIDEBOARD]
    if not sealed:
        sideboard = sideboard[:MAX_SIDEBOARD]
    sideboard_list = as_text(sideboard, set_code, format_variant)

    blocks = [main_deck_list, basic_lands_list, sideboard_list]
    return "\n\n".join(block for block in blocks if block)


def export_arena_60(
    set_code: str,
    sealed: bool,
    deck: Deck,
    rng: random.Random | None = None,
    basic_land_printings: Mapping[Color, Card] | None = None,
) -> str:
    """Normalize a deck to 60 cards and render it for Arena import."""
    deck60 = normalize_deck(deck, 60, sealed, rng)
    return export_deck(set_code, ARENA_FORMAT, sealed, deck60, basic_land_printings)
