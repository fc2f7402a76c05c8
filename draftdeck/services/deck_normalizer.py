"""
Deck normalization.

Turns a drafted or sealed pool into a fixed-size constructed deck:
enforces the 4-copy limit, scales the creature / other / land split of
the pool to the target size, fills (or trims) the main deck, tidies the
sideboard and recomputes the basic lands so the land total is exact.

The input deck is never mutated; every call works on a deep copy.
"""

import logging
import random
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from draftdeck.models.card import COLORS, Card
from draftdeck.models.deck import (
    CREATURE_PILES,
    IN_PLAY_PILES,
    MAIN_DECK_PILES,
    NONLAND_PILES,
    OTHER_PILES,
    Deck,
    PileId,
)
from draftdeck.models.errors import InvalidTargetError
from draftdeck.services.card_classifier import cards_by_type, pile_index
from draftdeck.services.color_analyzer import count_colors
from draftdeck.services.mana_base import auto_lands, compute_basic_lands

logger = logging.getLogger(__name__)

MAX_COPIES = 4
MAX_SIDEBOARD = 15
DEFAULT_TARGET_SIZE = 60

# A 23/17 limited deck scales to 35/25 at 60 cards; 36/24 plays better
DEFAULT_RATIO_TARGETS = (35, 25)
DEFAULT_RATIO_OVERRIDE = (36, 24)

COLORLESS_TAG = "C"


@dataclass
class EliminatedCounts:
    """Cards removed by the pool-wide copy limit, by category."""

    creatures: int = 0
    other: int = 0
    lands: int = 0


@dataclass
class DeckTargets:
    """Main deck composition a normalized deck aims for."""

    non_land: int
    land: int


def scale_count(count: int, total: int, size: int) -> int:
    """count / total of size, rounded half up in exact integer arithmetic."""
    if total <= 0:
        return 0
    return (2 * count * size + total) // (2 * total)


def cards_in_deck(card: Card, deck: Deck, entire_pool: bool = False) -> int:
    """
    Count copies of a card by name.

    Counts the main deck (nonland piles plus non-basic lands), or the main
    deck plus sideboard when entire_pool is set.
    """
    pile_ids = IN_PLAY_PILES if entire_pool else MAIN_DECK_PILES
    return sum(1 for other in deck.cards_in(pile_ids) if other.name == card.name)


def enforce_copy_limit(deck: Deck) -> tuple[Deck, EliminatedCounts]:
    """
    Move every in-play copy of a card past its 4th to the unused pile.

    Piles are scanned in order, each from its last card to its first.
    Eliminations from the creature, other and lands piles are tallied so
    pool proportions can still account for them.

    Returns:
        A new deck with the limit applied, and the elimination tally
    """
    deck = deck.copy()
    seen: Counter[str] = Counter()
    eliminated = EliminatedCounts()
    removed: list[Card] = []

    for pile_id in IN_PLAY_PILES:
        pile = deck.piles[pile_id]
        kept_reversed: list[Card] = []
        for card in reversed(pile):
            if seen[card.name] >= MAX_COPIES:
                removed.append(card)
                if pile_id in CREATURE_PILES:
                    eliminated.creatures += 1
                elif pile_id in OTHER_PILES:
                    eliminated.other += 1
                elif pile_id == PileId.LANDS:
                    eliminated.lands += 1
                continue
            seen[card.name] += 1
            kept_reversed.append(card)
        deck.piles[pile_id] = kept_reversed[::-1]

    deck.piles[PileId.UNUSED].extend(removed)

    if removed:
        logger.info(
            "copy_limit_enforced",
            extra={
                "eliminated_creatures": eliminated.creatures,
                "eliminated_other": eliminated.other,
                "eliminated_lands": eliminated.lands,
            },
        )

    return deck, eliminated


def compute_targets(non_land: int, land: int, total: int, target_size: int) -> DeckTargets:
    """
    Scale a pool's non-land / land split to the target deck size.

    Non-land cards round up, lands round down, and any gap left over goes
    to the non-land side. The default 35/25 result becomes 36/24.
    """
    if total <= 0:
        return DeckTargets(non_land=target_size, land=0)

    target_non_land = -(-non_land * target_size // total)
    target_land = land * target_size // total
    target_non_land += target_size - (target_non_land + target_land)

    if (target_non_land, target_land) == DEFAULT_RATIO_TARGETS:
        target_non_land, target_land = DEFAULT_RATIO_OVERRIDE

    return DeckTargets(non_land=target_non_land, land=target_land)


def order_unplayed_pile(deck: Deck, pile_id: PileId, deck_colors_only: bool = False) -> list[Card]:
    """
    Order a pile of unplayed cards by how well they fit the deck's colors.

    Cards are grouped by color signature (their colors joined, or "C"),
    and sorted by how often that signature occurs among the deck's
    nonland cards, then signature, creatures first, then cost.

    Args:
        deck: Deck whose nonland piles define the color frequencies
        pile_id: Pile to order
        deck_colors_only: Drop cards whose signature never occurs in the deck

    Returns:
        New ordered list; the pile itself is untouched
    """
    color_counts: Counter[str] = Counter()
    for card in deck.cards_in(NONLAND_PILES):
        for color in card.colors:
            color_counts[color.value] += 1
        color_counts[_color_tag(card)] += 1

    cards = list(deck.piles[pile_id])
    if deck_colors_only:
        cards = [card for card in cards if color_counts[_color_tag(card)] > 0]

    return sorted(
        cards,
        key=lambda card: (
            -color_counts[_color_tag(card)],
            _color_tag(card),
            0 if card.is_creature else 1,
            card.cmc,
        ),
    )


def _color_tag(card: Card) -> str:
    if card.colors:
        return ",".join(color.value for color in card.colors)
    return COLORLESS_TAG


def _add_cards(
    deck: Deck,
    candidates: Sequence[Card],
    count: int,
    target_pile: PileId | None = None,
    entire_pool: bool = False,
) -> int:
    """Add up to count candidates, skipping any that would pass 4 copies."""
    added = 0
    for card in candidates:
        if added >= count:
            break
        if cards_in_deck(card, deck, entire_pool) >= MAX_COPIES:
            continue
        if target_pile is None:
            deck.piles[pile_index(card, deck.compact_arrange_by_cost)].append(card)
        else:
            deck.piles[target_pile].append(card)
        added += 1
    return added


def _move_to_pile(
    deck: Deck,
    cards: Iterable[Card],
    source_piles: Iterable[PileId],
    dest: PileId,
) -> None:
    source_ids = tuple(source_piles)
    for card in cards:
        for pile_id in source_ids:
            pile = deck.piles[pile_id]
            if card in pile:
                # Last matching copy
                del pile[len(pile) - 1 - pile[::-1].index(card)]
                break
        deck.piles[dest].append(card)


def _trim_candidates(cards: Sequence[Card], count: int) -> list[Card]:
    """The count weakest cards: lowest rating, then most expensive, then latest."""
    indexed = sorted(enumerate(cards), key=lambda item: (item[1].rating, -item[1].cmc, -item[0]))
    return [card for _, card in indexed[:count]]


def _fill_non_land(
    deck: Deck,
    creatures: list[Card],
    other: list[Card],
    creatures_required: int,
    other_required: int,
) -> int:
    added_creatures = _add_cards(deck, creatures, creatures_required)
    shortfall = creatures_required - added_creatures
    added_other = _add_cards(deck, other, other_required + shortfall)
    shortfall = other_required + shortfall - added_other
    if shortfall > 0 and added_creatures == creatures_required:
        added_creatures += _add_cards(deck, creatures, shortfall)
    return added_creatures + added_other


def _trim_non_land(deck: Deck, excess: int, creature_count: int, other_count: int) -> None:
    by_type = cards_by_type(deck.cards_in(NONLAND_PILES))
    creature_excess = scale_count(creature_count, creature_count + other_count, excess)
    creature_excess = min(creature_excess, len(by_type.creatures))
    other_excess = min(excess - creature_excess, len(by_type.other))
    creature_excess = min(excess - other_excess, len(by_type.creatures))

    removed = _trim_candidates(by_type.creatures, creature_excess)
    removed += _trim_candidates(by_type.other, other_excess)
    _move_to_pile(deck, removed, NONLAND_PILES, PileId.SIDEBOARD)

    logger.info("non_land_trimmed", extra={"moved_to_sideboard": len(removed)})


def _prune_sideboard(deck: Deck, sealed: bool) -> None:
    """Enforce the copy limit across main deck and sideboard, then the 15-card cap."""
    copies = Counter(card.name for card in deck.cards_in(MAIN_DECK_PILES))
    kept: list[Card] = []
    pruned: list[Card] = []
    for card in deck.piles[PileId.SIDEBOARD]:
        if copies[card.name] < MAX_COPIES:
            copies[card.name] += 1
            kept.append(card)
        else:
            pruned.append(card)
    deck.piles[PileId.SIDEBOARD] = kept
    deck.piles[PileId.UNUSED].extend(pruned)

    if not sealed and len(kept) > MAX_SIDEBOARD:
        # With no main deck there are no deck colors to filter by
        in_colors = order_unplayed_pile(
            deck, PileId.SIDEBOARD, deck_colors_only=bool(deck.nonland_cards())
        )
        best = sorted(in_colors, key=lambda card: -card.rating)[:MAX_SIDEBOARD]
        remaining = list(kept)
        for card in best:
            remaining.remove(card)
        deck.piles[PileId.SIDEBOARD] = best
        deck.piles[PileId.UNUSED].extend(remaining)

        logger.info(
            "sideboard_trimmed",
            extra={"kept": len(best), "moved_to_unused": len(remaining)},
        )

    deck.piles[PileId.SIDEBOARD] = order_unplayed_pile(deck, PileId.SIDEBOARD)


def _rebalance_lands(deck: Deck, target_land: int, rng: random.Random) -> None:
    """Keep the pool's share of non-basic lands at the new land total."""
    lands = deck.piles[PileId.LANDS]
    non_basic = len(lands)
    non_basic_target = scale_count(non_basic, deck.land_count(), target_land)

    if non_basic > non_basic_target:
        excess = _trim_candidates(lands, non_basic - non_basic_target)
        _move_to_pile(deck, excess, (PileId.LANDS,), PileId.SIDEBOARD)
        logger.info("non_basic_lands_trimmed", extra={"moved_to_sideboard": len(excess)})
    elif non_basic < non_basic_target:
        candidates = list(lands)
        rng.shuffle(candidates)
        _add_cards(
            deck,
            candidates,
            non_basic_target - non_basic,
            target_pile=PileId.LANDS,
            entire_pool=True,
        )


def normalize_deck(
    deck: Deck,
    target_size: int = DEFAULT_TARGET_SIZE,
    sealed: bool = False,
    rng: random.Random | None = None,
) -> Deck:
    """
    Normalize a pool into a target-size constructed deck.

    Steps:
    1. Work on a deep copy of the input deck
    2. Set aside copies of any card past its 4th across the pool
    3. Measure the creature / other / land split of the original pool
    4. Scale it to target_size (35/25 becomes 36/24)
    5. Add extra copies of the deck's own cards (or move surplus cards to
       the sideboard) until the non-land target is met
    6. Keep the sideboard within the copy limit and, for drafts, 15 cards
    7. Restore the share of non-basic lands and recompute basic lands so
       the land total matches the target exactly

    Args:
        deck: Pool to normalize (left unmodified)
        target_size: Main deck size to produce
        sealed: Sealed pools keep their whole sideboard
        rng: Random source used to order copy candidates

    Returns:
        A new, normalized Deck

    Raises:
        InvalidTargetError: If target_size is not positive
        MalformedDeckError: If the deck is structurally broken
    """
    if target_size <= 0:
        raise InvalidTargetError("deck size", target_size)

    deck.validate()
    rng = rng or random.Random()
    total_cards = deck.total_cards()
    if total_cards == 0:
        logger.info("normalize_empty_pool", extra={"target_size": target_size})
        deck, _ = enforce_copy_limit(deck)
        _prune_sideboard(deck, sealed)
        return deck

    deck, eliminated = enforce_copy_limit(deck)

    by_type = cards_by_type(deck.cards_in(NONLAND_PILES))
    creature_count = len(by_type.creatures) + eliminated.creatures
    other_count = len(by_type.other) + eliminated.other
    total_land = deck.land_count()
    land_count = total_land + eliminated.lands

    targets = compute_targets(creature_count + other_count, land_count, total_cards, target_size)

    total_non_land = len(by_type.creatures) + len(by_type.other)
    non_land_required = max(targets.non_land - total_non_land, 0)
    land_required = max(targets.land - total_land, 0)
    cards_required = non_land_required + land_required

    creatures_required = scale_count(creature_count, total_cards, cards_required)
    other_required = scale_count(other_count, total_cards, cards_required)
    creatures_required += non_land_required - (creatures_required + other_required)
    if creatures_required < 0:
        other_required += creatures_required
        creatures_required = 0

    logger.info(
        "normalize_targets",
        extra={
            "target_size": target_size,
            "target_non_land": targets.non_land,
            "target_land": targets.land,
            "creatures_required": creatures_required,
            "other_required": other_required,
        },
    )

    if total_non_land > targets.non_land:
        excess = total_non_land - targets.non_land
        _trim_non_land(deck, excess, creature_count, other_count)
    elif non_land_required > 0:
        creatures = list(by_type.creatures)
        other = list(by_type.other)
        rng.shuffle(creatures)
        rng.shuffle(other)
        added = _fill_non_land(deck, creatures, other, creatures_required, other_required)
        if added < non_land_required:
            logger.warning(
                "normalize_candidates_exhausted",
                extra={"required": non_land_required, "added": added},
            )

    _rebalance_lands(deck, targets.land, rng)
    _prune_sideboard(deck, sealed)

    lands_pile = deck.piles[PileId.LANDS]
    if deck.lands.auto:
        deck.lands.basic = auto_lands(deck, target_size, targets.land)
    else:
        non_basics = count_colors(lands_pile)
        weights = {color: non_basics[color] + deck.lands.basic[color] for color in COLORS}
        deck.lands.basic = compute_basic_lands(weights, lands_pile, targets.land)

    return deck
