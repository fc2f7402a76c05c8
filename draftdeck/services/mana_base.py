"""
Mana base allocation.

Splits a deck's basic land slots across colors in proportion to the
colored mana its spells ask for. The continuous shares are floored and
then corrected one land at a time (largest remainder first) until the
counts add up to exactly the number of basic lands required.
"""

import logging
import math
from collections.abc import Mapping, Sequence

from draftdeck.models.card import COLORS, Card, Color
from draftdeck.models.deck import NONLAND_PILES, Deck, PileId
from draftdeck.models.errors import InvalidTargetError
from draftdeck.services.color_analyzer import count_colors, empty_color_counts, rank_colors

logger = logging.getLogger(__name__)

# Added to every color in use so splashes and secondary colors are not starved
SPLASH_BONUS = 8

# Land counts for the standard limited and constructed deck sizes
STANDARD_LAND_COUNTS: dict[int, int] = {40: 17, 60: 24}
DEFAULT_LAND_RATIO = 0.4


def land_count_for_deck_size(deck_size: int) -> int:
    """Total lands for a deck: 17 for 40 cards, 24 for 60, else 40% rounded."""
    if deck_size in STANDARD_LAND_COUNTS:
        return STANDARD_LAND_COUNTS[deck_size]
    return math.floor(deck_size * DEFAULT_LAND_RATIO + 0.5)


def compute_basic_lands(
    color_weights: Mapping[Color, float],
    existing_lands: Sequence[Card],
    total_lands: int,
) -> dict[Color, int]:
    """
    Compute basic land counts per color.

    Steps:
    1. Each demanded color gets a target share of the total land count
       (at least 1)
    2. Existing non-basic sources of each color are subtracted, but a
       demanded color always keeps at least 1 required source
    3. Basic land slots (total minus existing lands) are split in
       proportion to what is still required
    4. Shares are floored, then adjusted by one land at a time until the
       counts sum exactly to the basic land slots

    Args:
        color_weights: Demand signal per color (pip counts, optionally biased)
        existing_lands: Non-basic lands already in the deck
        total_lands: Target total land count

    Returns:
        Basic land count per color, in canonical order

    Raises:
        InvalidTargetError: If total_lands is negative or smaller than the
            number of existing lands
    """
    if total_lands < 0:
        raise InvalidTargetError("total land count", total_lands, "must not be negative")

    weights = {color: float(color_weights.get(color, 0)) for color in COLORS}
    total_weight = sum(weights.values())

    if total_weight <= 0:
        return empty_color_counts()

    basic_lands_required = total_lands - len(existing_lands)
    if basic_lands_required < 0:
        raise InvalidTargetError(
            "total land count",
            total_lands,
            f"fewer than the {len(existing_lands)} lands already in the deck",
        )

    targets: dict[Color, float] = {}
    for color, weight in weights.items():
        target = weight / total_weight * total_lands
        if target > 0:
            target = max(target, 1.0)
        targets[color] = target

    existing = count_colors(existing_lands)

    required: dict[Color, float] = {}
    for color, target in targets.items():
        if target > 0:
            # At least 1 so a demanded color never drops out of the split
            required[color] = max(target - existing[color], 1.0)
        else:
            required[color] = 0.0

    total_required = sum(required.values())
    shares = {
        color: (needed / total_required * basic_lands_required if total_required > 0 else 0.0)
        for color, needed in required.items()
    }

    rounded = {color: math.floor(share) for color, share in shares.items()}
    rounded_sum = sum(rounded.values())

    while rounded_sum != basic_lands_required:
        too_many = rounded_sum > basic_lands_required
        adjust_color: Color | None = None
        max_difference = 0.0

        for color in COLORS:
            difference = abs(rounded[color] - shares[color])
            if difference <= max_difference:
                continue
            if (too_many and rounded[color] > shares[color]) or (
                not too_many and rounded[color] < shares[color]
            ):
                max_difference = difference
                adjust_color = color

        if adjust_color is None:
            # Only reachable through float drift; fall back to the largest share
            candidates = [c for c in COLORS if not too_many or rounded[c] > 0]
            adjust_color = max(candidates, key=lambda c: shares[c])

        step = -1 if too_many else 1
        rounded[adjust_color] += step
        rounded_sum += step

    logger.debug(
        "basic_lands_computed",
        extra={
            "total_lands": total_lands,
            "existing_lands": len(existing_lands),
            "basic_lands": {color.value: count for color, count in rounded.items()},
        },
    )

    return rounded


def auto_lands(deck: Deck, deck_size: int, total_lands: int | None = None) -> dict[Color, int]:
    """
    Derive basic land counts from the colors of a deck's spells.

    Hybrid symbols are resolved against the deck's own color ranking, and
    every color in use gets a flat bonus before allocation.

    Args:
        deck: Deck whose nonland piles drive the color demand
        deck_size: Deck size, used to pick the total land count
        total_lands: Explicit total land count, overriding the deck size rule

    Returns:
        Basic land count per color
    """
    cards = deck.cards_in(NONLAND_PILES)
    if not cards:
        return empty_color_counts()

    ranking = rank_colors(count_colors(cards))
    weights: dict[Color, float] = {}
    for color, count in count_colors(cards, ranking).items():
        weights[color] = count + SPLASH_BONUS if count > 0 else 0

    if total_lands is None:
        total_lands = land_count_for_deck_size(deck_size)

    return compute_basic_lands(weights, deck.pile(PileId.LANDS), total_lands)
