"""
DraftDeck services.

Pure deck-construction logic: classification, color analysis, mana base
allocation, normalization and export.
"""

from draftdeck.services.card_classifier import (
    CardsByType,
    build_deck,
    cards_by_type,
    is_creature,
    is_land,
    pile_index,
)
from draftdeck.services.color_analyzer import (
    ColorInfo,
    card_colors,
    count_colors,
    deck_colors,
    order_color_pair,
    rank_colors,
)
from draftdeck.services.deck_list_formatter import (
    ARENA_FORMAT,
    NORMAL_FORMAT,
    as_text,
    export_arena_60,
    export_deck,
)
from draftdeck.services.deck_normalizer import (
    MAX_COPIES,
    MAX_SIDEBOARD,
    cards_in_deck,
    normalize_deck,
    order_unplayed_pile,
)
from draftdeck.services.mana_base import (
    auto_lands,
    compute_basic_lands,
    land_count_for_deck_size,
)

__all__ = [
    # Classification
    "CardsByType",
    "build_deck",
    "cards_by_type",
    "is_creature",
    "is_land",
    "pile_index",
    # Color analysis
    "ColorInfo",
    "card_colors",
    "count_colors",
    "deck_colors",
    "order_color_pair",
    "rank_colors",
    # Mana base
    "auto_lands",
    "compute_basic_lands",
    "land_count_for_deck_size",
    # Normalization
    "MAX_COPIES",
    "MAX_SIDEBOARD",
    "cards_in_deck",
    "normalize_deck",
    "order_unplayed_pile",
    # Export
    "ARENA_FORMAT",
    "NORMAL_FORMAT",
    "as_text",
    "export_arena_60",
    "export_deck",
]
