"""
Color analysis.

Counts colored-mana requirements across cards, resolving hybrid symbols
against a color ranking, and summarizes the color makeup of a card list.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from draftdeck.models.card import COLOR_NAMES, COLORS, Card, Color

# One mana symbol, e.g. {W}, {2}, {W/U}, {2/B}, {G/P}
MANA_SYMBOL_PATTERN = re.compile(r"\{([^}]*)\}")

# Phyrexian symbols ({G/P}, {W/U/P}) add no color demand
PHYREXIAN = "P"

# Two-color archetype orderings (Azorius, Dimir, Rakdos, Gruul, Selesnya,
# Orzhov, Izzet, Golgari, Boros, Simic)
STANDARD_PAIRS: tuple[tuple[Color, Color], ...] = (
    (Color.W, Color.U),
    (Color.U, Color.B),
    (Color.B, Color.R),
    (Color.R, Color.G),
    (Color.G, Color.W),
    (Color.W, Color.B),
    (Color.U, Color.R),
    (Color.B, Color.G),
    (Color.R, Color.W),
    (Color.G, Color.U),
)


@dataclass
class ColorInfo:
    """Color share of a card list."""

    code: Color
    name: str
    count: int = 0
    percent: float = 0.0


def empty_color_counts() -> dict[Color, int]:
    return dict.fromkeys(COLORS, 0)


def _symbol_colors(symbol: str) -> list[Color]:
    """Colors named inside a single mana symbol, in the order written."""
    parts = symbol.upper().split("/")
    if PHYREXIAN in parts:
        return []
    colors: list[Color] = []
    for part in parts:
        for char in part:
            if char in Color.__members__ and char != Color.C.value:
                colors.append(Color(char))
    return colors


def _ranked_top_two(color: Color, ranking: Sequence[Color]) -> bool:
    try:
        return ranking.index(color) < 2
    except ValueError:
        return False


def count_colors(
    cards: Iterable[Card],
    color_ranking: Sequence[Color] | None = None,
) -> dict[Color, int]:
    """
    Count colored-mana requirements across cards.

    Each colored mana symbol in a card's cost counts once per color it
    names. When a ranking is supplied, a two-color hybrid symbol counts
    only the favored color if exactly one of its colors sits in the
    ranking's top two. Phyrexian symbols count no color. Cards without a
    mana cost (lands, mostly) count their listed colors instead.

    Args:
        cards: Cards to count
        color_ranking: Colors ordered most-favored first

    Returns:
        Per-color totals in canonical order
    """
    counts = empty_color_counts()
    ranking = [Color(c) for c in color_ranking] if color_ranking else None

    for card in cards:
        if not card.mana_cost:
            for color in card.colors:
                if color in counts:
                    counts[color] += 1
            continue

        for symbol in MANA_SYMBOL_PATTERN.findall(card.mana_cost):
            symbol_colors = _symbol_colors(symbol)
            if not symbol_colors:
                continue

            if ranking and len(symbol_colors) == 2:
                first, second = symbol_colors
                if _ranked_top_two(first, ranking) and not _ranked_top_two(second, ranking):
                    symbol_colors = [first]
                elif _ranked_top_two(second, ranking) and not _ranked_top_two(first, ranking):
                    symbol_colors = [second]

            for color in COLORS:
                if color in symbol_colors:
                    counts[color] += 1

    return counts


def rank_colors(color_counts: Mapping[Color, float]) -> list[Color]:
    """Colors ordered by descending count; ties keep input order."""
    return [color for color, _ in sorted(color_counts.items(), key=lambda item: -item[1])]


def card_colors(
    cards: Iterable[Card],
    include_lands: bool = False,
    percent_filter: float | None = None,
    max_colors: int | None = None,
) -> list[ColorInfo]:
    """
    Summarize the color makeup of a card list.

    Cards with no colors count as colorless ("C"). Lands are skipped
    unless include_lands is set.

    Args:
        cards: Cards to summarize
        include_lands: Count land cards too
        percent_filter: Keep only colors whose share exceeds this fraction
        max_colors: Keep at most this many colors

    Returns:
        ColorInfo entries sorted by descending count
    """
    infos = {color: ColorInfo(code=color, name=COLOR_NAMES[color]) for color in (*COLORS, Color.C)}

    for card in cards:
        if card.is_land and not include_lands:
            continue
        if not card.colors:
            infos[Color.C].count += 1
        else:
            for color in card.colors:
                infos[color].count += 1

    total = sum(info.count for info in infos.values())
    for info in infos.values():
        info.percent = info.count / total if total > 0 else 0.0

    result = sorted(infos.values(), key=lambda info: -info.count)

    if percent_filter is not None:
        result = [info for info in result if info.percent > percent_filter]

    if max_colors is not None:
        result = result[:max_colors]

    return result


def order_color_pair(colors: list[ColorInfo]) -> list[ColorInfo]:
    """Put a two-color pair into its standard archetype order."""
    if len(colors) == 2:
        first, second = colors
        for pair in STANDARD_PAIRS:
            if first.code == pair[1] and second.code == pair[0]:
                return [second, first]
    return colors


def deck_colors(cards: Iterable[Card]) -> list[ColorInfo]:
    """The (up to) two main colors of a card list, in standard pair order."""
    return order_color_pair(card_colors(cards, include_lands=False, percent_filter=0, max_colors=2))
