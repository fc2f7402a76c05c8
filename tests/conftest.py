from collections.abc import Callable

import pytest

from draftdeck.models.card import Card, Color
from draftdeck.models.deck import Deck, LandConfiguration
from draftdeck.services.card_classifier import build_deck

CardFactory = Callable[..., Card]


def _cost(cmc: int, colors: tuple[str, ...]) -> str:
    generic = max(cmc - len(colors), 0)
    prefix = f"{{{generic}}}" if generic else ""
    return prefix + "".join(f"{{{c}}}" for c in colors)


@pytest.fixture
def make_creature() -> CardFactory:
    """Factory for creature cards; the mana cost is derived from cmc and colors."""

    def factory(name: str, cmc: int = 2, colors: tuple[str, ...] = ("W",), **kwargs) -> Card:
        kwargs.setdefault("mana_cost", _cost(cmc, colors))
        return Card(name=name, type_line="Creature — Soldier", colors=colors, cmc=cmc, **kwargs)

    return factory


@pytest.fixture
def make_spell() -> CardFactory:
    """Factory for noncreature spells."""

    def factory(name: str, cmc: int = 2, colors: tuple[str, ...] = ("U",), **kwargs) -> Card:
        kwargs.setdefault("mana_cost", _cost(cmc, colors))
        return Card(name=name, type_line="Instant", colors=colors, cmc=cmc, **kwargs)

    return factory


@pytest.fixture
def make_land() -> CardFactory:
    """Factory for non-basic lands."""

    def factory(name: str, colors: tuple[str, ...] = (), **kwargs) -> Card:
        return Card(name=name, type_line="Land", colors=colors, **kwargs)

    return factory


@pytest.fixture
def draft_deck(make_creature: CardFactory, make_spell: CardFactory) -> Deck:
    """
    A typical 40-card draft deck: 14 white creatures, 9 blue spells,
    all singletons, plus 17 basic lands (9 Plains, 8 Island).
    """
    creatures = [
        make_creature(f"Creature {i}", cmc=1 + i % 6, collector_number=str(i + 1))
        for i in range(14)
    ]
    spells = [
        make_spell(f"Spell {i}", cmc=1 + i % 5, collector_number=str(i + 101)) for i in range(9)
    ]
    lands = LandConfiguration(auto=True, basic={Color.W: 9, Color.U: 8})
    return build_deck(creatures + spells, lands=lands)
