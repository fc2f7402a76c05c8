"""Request/response bodies shared by the deck endpoints."""

from pydantic import BaseModel, Field

from draftdeck.models.card import COLORS, Card, Color
from draftdeck.models.deck import PILE_COUNT, Deck, LandConfiguration


class CardModel(BaseModel):
    """A single card."""

    name: str
    type_line: str = ""
    colors: list[Color] = Field(default_factory=list)
    mana_cost: str = ""
    cmc: int = Field(default=0, ge=0)
    set_code: str = ""
    collector_number: str = ""
    rating: float = 0.0

    def to_card(self) -> Card:
        return Card(
            name=self.name,
            type_line=self.type_line,
            colors=tuple(self.colors),
            mana_cost=self.mana_cost,
            cmc=self.cmc,
            set_code=self.set_code,
            collector_number=self.collector_number,
            rating=self.rating,
        )

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(
            name=card.name,
            type_line=card.type_line,
            colors=list(card.colors),
            mana_cost=card.mana_cost,
            cmc=card.cmc,
            set_code=card.set_code,
            collector_number=card.collector_number,
            rating=card.rating,
        )


class LandsModel(BaseModel):
    """Basic land configuration."""

    auto: bool = True
    basic: dict[Color, int] = Field(default_factory=dict)


class DeckModel(BaseModel):
    """A deck as 15 piles of cards plus its basic land configuration."""

    piles: list[list[CardModel]] = Field(min_length=PILE_COUNT, max_length=PILE_COUNT)
    lands: LandsModel = Field(default_factory=LandsModel)
    compact_arrange_by_cost: bool = False

    def to_deck(self) -> Deck:
        return Deck(
            piles=[[card.to_card() for card in pile] for pile in self.piles],
            lands=LandConfiguration(auto=self.lands.auto, basic=dict(self.lands.basic)),
            compact_arrange_by_cost=self.compact_arrange_by_cost,
        )

    @classmethod
    def from_deck(cls, deck: Deck) -> "DeckModel":
        return cls(
            piles=[[CardModel.from_card(card) for card in pile] for pile in deck.piles],
            lands=LandsModel(
                auto=deck.lands.auto,
                basic={color: deck.lands.basic[color] for color in COLORS},
            ),
            compact_arrange_by_cost=deck.compact_arrange_by_cost,
        )
