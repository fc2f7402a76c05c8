"""Tests for mana base allocation."""

import pytest

from draftdeck.models.card import COLORS, Card, Color
from draftdeck.models.deck import LandConfiguration
from draftdeck.models.errors import InvalidTargetError
from draftdeck.services.card_classifier import build_deck
from draftdeck.services.mana_base import (
    SPLASH_BONUS,
    auto_lands,
    compute_basic_lands,
    land_count_for_deck_size,
)


def _weights(**kwargs: float) -> dict[Color, float]:
    return {color: kwargs.get(color.value, 0) for color in COLORS}


def _spell(name: str, mana_cost: str) -> Card:
    return Card(name=name, type_line="Sorcery", mana_cost=mana_cost, cmc=2)


class TestComputeBasicLands:
    """Proportional allocation with exact-sum rounding."""

    def test_single_color_gets_every_land(self) -> None:
        result = compute_basic_lands(_weights(W=10), [], 17)
        assert result == {Color.W: 17, Color.U: 0, Color.B: 0, Color.R: 0, Color.G: 0}

    def test_even_split(self) -> None:
        result = compute_basic_lands(_weights(R=5, G=5), [], 16)
        assert result[Color.R] == 8
        assert result[Color.G] == 8

    def test_largest_remainder_gets_the_extra_land(self) -> None:
        # Shares: W 8.5, U 5.67, B 2.83 -> floors 8/5/2, two lands short
        result = compute_basic_lands(_weights(W=9, U=6, B=3), [], 17)
        assert result == {Color.W: 8, Color.U: 6, Color.B: 3, Color.R: 0, Color.G: 0}

    def test_minor_color_keeps_a_land(self) -> None:
        result = compute_basic_lands(_weights(W=100, G=1), [], 17)
        assert result[Color.G] == 1
        assert result[Color.W] == 16

    def test_existing_dual_lands_reduce_basics(self) -> None:
        dual = Card(name="Hallowed Fountain", type_line="Land", colors=("W", "U"))
        result = compute_basic_lands(_weights(W=10, U=10), [dual], 17)
        assert result[Color.W] == 8
        assert result[Color.U] == 8
        assert sum(result.values()) == 16

    def test_oversatisfied_color_still_requires_a_basic(self) -> None:
        plains_sources = [
            Card(name=f"White Land {i}", type_line="Land", colors=("W",)) for i in range(6)
        ]
        result = compute_basic_lands(_weights(W=1, U=10), plains_sources, 17)
        assert result[Color.W] >= 1
        assert sum(result.values()) == 11

    def test_zero_weights_give_zero_lands(self) -> None:
        result = compute_basic_lands(_weights(), [], 17)
        assert sum(result.values()) == 0

    def test_zero_target_gives_zero_lands(self) -> None:
        result = compute_basic_lands(_weights(W=3, B=2), [], 0)
        assert sum(result.values()) == 0

    def test_negative_target_raises(self) -> None:
        with pytest.raises(InvalidTargetError):
            compute_basic_lands(_weights(W=1), [], -1)

    def test_more_existing_lands_than_target_raises(self) -> None:
        lands = [Card(name=f"Land {i}", type_line="Land") for i in range(3)]
        with pytest.raises(InvalidTargetError):
            compute_basic_lands(_weights(W=1), lands, 2)

    @pytest.mark.parametrize("total", [0, 1, 2, 7, 16, 17, 23, 24, 40])
    @pytest.mark.parametrize(
        "weights",
        [
            {"W": 1},
            {"W": 1, "U": 1, "B": 1},
            {"W": 13, "U": 2, "B": 7, "R": 1, "G": 5},
            {"R": 0.5, "G": 99.5},
            {"U": 3, "B": 3, "R": 3},
        ],
    )
    def test_exact_sum_and_non_negative(self, weights: dict[str, float], total: int) -> None:
        result = compute_basic_lands(_weights(**weights), [], total)
        assert sum(result.values()) == total
        assert all(count >= 0 for count in result.values())
        assert all(result[color] == 0 for color in COLORS if color.value not in weights)

    def test_exact_sum_with_existing_lands(self) -> None:
        lands = [
            Card(name="Temple", type_line="Land", colors=("U", "B")),
            Card(name="Guildgate", type_line="Land", colors=("U", "B")),
            Card(name="Wilds", type_line="Land"),
        ]
        result = compute_basic_lands(_weights(U=7, B=4, R=2), lands, 17)
        assert sum(result.values()) == 14


class TestLandCountForDeckSize:
    """Total lands by deck size."""

    @pytest.mark.parametrize(
        ("deck_size", "expected"),
        [(40, 17), (60, 24), (45, 18), (100, 40), (41, 16)],
    )
    def test_land_count(self, deck_size: int, expected: int) -> None:
        assert land_count_for_deck_size(deck_size) == expected


class TestAutoLands:
    """Basic lands derived from a deck's spells."""

    def test_empty_deck_has_no_lands(self) -> None:
        deck = build_deck([])
        assert sum(auto_lands(deck, 40).values()) == 0

    def test_splash_bonus_is_applied(self) -> None:
        # W 2 + 8 = 10, U 1 + 8 = 9 -> shares 8.95 / 8.05 of 17
        deck = build_deck(
            [_spell("A", "{1}{W}"), _spell("B", "{1}{W}"), _spell("C", "{1}{U}")]
        )
        result = auto_lands(deck, 40)
        assert SPLASH_BONUS == 8
        assert result[Color.W] == 9
        assert result[Color.U] == 8

    def test_hybrid_symbols_follow_deck_ranking(self) -> None:
        # First pass W 4, U 2, B 1 ranks W, U on top, so {W/B} pays with W
        cards = [_spell(f"White {i}", "{W}") for i in range(3)]
        cards += [_spell("Hybrid", "{W/B}"), _spell("Blue 1", "{U}"), _spell("Blue 2", "{U}")]
        result = auto_lands(build_deck(cards), 40)
        assert result[Color.B] == 0
        assert result[Color.W] == 9
        assert result[Color.U] == 8

    def test_sixty_card_deck_gets_24_lands(self) -> None:
        deck = build_deck([_spell("A", "{R}")])
        assert sum(auto_lands(deck, 60).values()) == 24

    def test_existing_non_basic_lands_are_subtracted(self) -> None:
        wilds = Card(name="Evolving Wilds", type_line="Land")
        deck = build_deck([_spell("A", "{G}"), wilds], lands=LandConfiguration())
        result = auto_lands(deck, 40)
        assert sum(result.values()) == 16

    def test_sideboard_cards_do_not_count(self) -> None:
        deck = build_deck([_spell("A", "{G}")], sideboard=[_spell("B", "{U}")])
        result = auto_lands(deck, 40)
        assert result[Color.U] == 0
        assert result[Color.G] == 17
