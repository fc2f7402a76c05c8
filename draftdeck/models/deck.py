import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any

from draftdeck.models.card import COLORS, Card, Color
from draftdeck.models.errors import MalformedDeckError

# Cost ladder: 1, 2, 3, 4, 5, 6+
COST_BUCKETS = 6


class PileId(IntEnum):
    """Pile roles within a deck, in storage order."""

    CREATURE_1 = 0
    CREATURE_2 = 1
    CREATURE_3 = 2
    CREATURE_4 = 3
    CREATURE_5 = 4
    CREATURE_6 = 5
    OTHER_1 = 6
    OTHER_2 = 7
    OTHER_3 = 8
    OTHER_4 = 9
    OTHER_5 = 10
    OTHER_6 = 11
    LANDS = 12
    SIDEBOARD = 13
    UNUSED = 14


PILE_COUNT = len(PileId)
CREATURE_PILES = tuple(PileId(i) for i in range(COST_BUCKETS))
OTHER_PILES = tuple(PileId(i) for i in range(COST_BUCKETS, 2 * COST_BUCKETS))
NONLAND_PILES = CREATURE_PILES + OTHER_PILES
MAIN_DECK_PILES = NONLAND_PILES + (PileId.LANDS,)
IN_PLAY_PILES = MAIN_DECK_PILES + (PileId.SIDEBOARD,)


def empty_basics() -> dict[Color, int]:
    return dict.fromkeys(COLORS, 0)


@dataclass
class LandConfiguration:
    """
    Basic land setup for a deck.

    Attributes:
        auto: True when basic counts are derived from the deck's colors,
            False when the user fixed them by hand
        basic: Basic land count per color
    """

    auto: bool = True
    basic: dict[Color, int] = field(default_factory=empty_basics)

    def __post_init__(self) -> None:
        # Accept plain "W"/"U"... keys and fill absent colors with zero
        self.basic = {color: self.basic.get(color, 0) for color in COLORS}

    def total(self) -> int:
        return sum(self.basic.values())


@dataclass
class DeckOptions:
    """Draft/deck options, any subset of which may be supplied."""

    number_of_packs: int = 3
    sealed_number_of_packs: int = 6
    deck_size: int = 40
    deck_list_format: str = "normal"

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None) -> "DeckOptions":
        """Build options from a partial mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (options or {}).items() if k in known})


@dataclass
class Deck:
    """
    A pool of cards partitioned into piles.

    Every card lives in exactly one pile. Piles are indexed by PileId:
    creature cost ladder, other-spell cost ladder, non-basic lands,
    sideboard and unused.
    """

    piles: list[list[Card]] = field(default_factory=lambda: [[] for _ in range(PILE_COUNT)])
    lands: LandConfiguration = field(default_factory=LandConfiguration)
    compact_arrange_by_cost: bool = False

    def pile(self, pile_id: PileId) -> list[Card]:
        return self.piles[pile_id]

    def cards_in(self, pile_ids: Iterable[PileId]) -> list[Card]:
        return [card for pile_id in pile_ids for card in self.piles[pile_id]]

    def nonland_cards(self) -> list[Card]:
        """Cards in the creature and other-spell piles."""
        return self.cards_in(NONLAND_PILES)

    def main_deck_cards(self) -> list[Card]:
        """Nonland piles plus the non-basic lands pile."""
        return self.cards_in(MAIN_DECK_PILES)

    def land_count(self) -> int:
        """Lands pile plus basic land counts."""
        return len(self.piles[PileId.LANDS]) + self.lands.total()

    def total_cards(self) -> int:
        return len(self.nonland_cards()) + self.land_count()

    def copy(self) -> "Deck":
        return copy.deepcopy(self)

    def validate(self) -> None:
        """
        Check structural integrity.

        Raises:
            MalformedDeckError: If piles are missing or basic counts are invalid
        """
        if not isinstance(self.piles, list) or len(self.piles) != PILE_COUNT:
            found = len(self.piles) if isinstance(self.piles, list) else type(self.piles).__name__
            raise MalformedDeckError(f"expected {PILE_COUNT} piles, found {found}")

        for index, pile in enumerate(self.piles):
            if not isinstance(pile, list):
                raise MalformedDeckError(f"pile {PileId(index).name} is not a list")
            for card in pile:
                if not isinstance(card, Card):
                    raise MalformedDeckError(
                        f"pile {PileId(index).name} holds a non-card value {card!r}"
                    )

        if not isinstance(self.lands, LandConfiguration):
            raise MalformedDeckError("missing land configuration")

        for color, count in self.lands.basic.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise MalformedDeckError(f"invalid basic land count {count!r} for {color.value}")
