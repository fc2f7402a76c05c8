"""
Card classification.

Pure predicates that sort cards into creature / other / land and map
each card to its storage pile on the cost ladder.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from draftdeck.models.card import Card
from draftdeck.models.deck import (
    COST_BUCKETS,
    CREATURE_PILES,
    OTHER_PILES,
    Deck,
    LandConfiguration,
    PileId,
)


@dataclass
class CardsByType:
    """Non-land cards split into creatures and everything else."""

    creatures: list[Card] = field(default_factory=list)
    other: list[Card] = field(default_factory=list)


def is_land(card: Card) -> bool:
    return card.is_land


def is_creature(card: Card) -> bool:
    return card.is_creature


def pile_index(card: Card, compact: bool = False) -> PileId:
    """
    Resolve the pile a card is stored in.

    Lands go to the lands pile. Everything else lands on a cost ladder:
    the creature ladder for creatures (or for every spell in compact mode),
    the other-spell ladder otherwise. Cost 1 or less maps to the first
    bucket, cost 6 or more to the last.
    """
    if card.is_land:
        return PileId.LANDS

    ladder = CREATURE_PILES if (compact or card.is_creature) else OTHER_PILES
    bucket = min(max(card.cmc - 1, 0), COST_BUCKETS - 1)
    return ladder[bucket]


def cards_by_type(cards: Iterable[Card]) -> CardsByType:
    """Partition non-land cards into creatures and other spells."""
    result = CardsByType()
    for card in cards:
        if card.is_land:
            continue
        if card.is_creature:
            result.creatures.append(card)
        else:
            result.other.append(card)
    return result


def build_deck(
    cards: Iterable[Card],
    sideboard: Iterable[Card] = (),
    lands: LandConfiguration | None = None,
    compact: bool = False,
) -> Deck:
    """Build a deck by placing each card in its cost/type pile."""
    deck = Deck(lands=lands or LandConfiguration(), compact_arrange_by_cost=compact)
    for card in cards:
        deck.piles[pile_index(card, compact)].append(card)
    deck.piles[PileId.SIDEBOARD].extend(sideboard)
    return deck
