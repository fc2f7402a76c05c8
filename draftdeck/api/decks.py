"""
Deck API endpoints.

Normalizes pools to constructed decks, computes basic lands and exports
deck lists.
"""

import random

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from draftdeck.api.schemas import DeckModel
from draftdeck.config import settings
from draftdeck.models.card import COLORS, Color
from draftdeck.models.deck import DeckOptions
from draftdeck.models.errors import DeckEngineError
from draftdeck.services.color_analyzer import deck_colors
from draftdeck.services.deck_list_formatter import ARENA_FORMAT, export_arena_60, export_deck
from draftdeck.services.deck_normalizer import normalize_deck
from draftdeck.services.mana_base import auto_lands

router = APIRouter(prefix="/decks", tags=["decks"])


class NormalizeRequest(BaseModel):
    """Request body for deck normalization."""

    deck: DeckModel
    size: int = Field(default_factory=lambda: settings.default_deck_size)
    sealed: bool = False
    seed: int | None = None


class ExportRequest(BaseModel):
    """Request body for deck list export."""

    deck: DeckModel
    set_code: str
    format: str = "normal"
    sealed: bool = False
    seed: int | None = None


class ExportResponse(BaseModel):
    """Rendered deck list."""

    text: str


class LandsRequest(BaseModel):
    """Request body for automatic basic lands."""

    deck: DeckModel
    deck_size: int = Field(default_factory=lambda: DeckOptions().deck_size, gt=0)


class LandsResponse(BaseModel):
    """Basic land counts per color, plus the deck's main colors."""

    basic: dict[Color, int]
    total: int
    colors: list[Color]


def _rng(seed: int | None) -> random.Random:
    return random.Random(seed if seed is not None else settings.random_seed)


def _bad_request(error: DeckEngineError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


@router.post("/normalize", response_model=DeckModel)
async def normalize(request: NormalizeRequest) -> DeckModel:
    """
    Normalize a pool into a constructed deck of the requested size.

    Returns 400 if the deck is malformed or the size is not positive.
    """
    try:
        deck = normalize_deck(
            request.deck.to_deck(), request.size, request.sealed, _rng(request.seed)
        )
    except DeckEngineError as e:
        raise _bad_request(e) from e

    return DeckModel.from_deck(deck)


@router.post("/export", response_model=ExportResponse)
async def export(request: ExportRequest) -> ExportResponse:
    """
    Export a deck list.

    The Arena format exports the deck normalized to 60 cards; any other
    format exports the deck as given.
    """
    try:
        if request.format == ARENA_FORMAT:
            text = export_arena_60(
                request.set_code, request.sealed, request.deck.to_deck(), _rng(request.seed)
            )
        else:
            text = export_deck(
                request.set_code, request.format, request.sealed, request.deck.to_deck()
            )
    except DeckEngineError as e:
        raise _bad_request(e) from e

    return ExportResponse(text=text)


@router.post("/lands", response_model=LandsResponse)
async def lands(request: LandsRequest) -> LandsResponse:
    """Compute automatic basic land counts for a deck."""
    deck = request.deck.to_deck()
    try:
        deck.validate()
        basic = auto_lands(deck, request.deck_size)
    except DeckEngineError as e:
        raise _bad_request(e) from e

    return LandsResponse(
        basic={color: basic[color] for color in COLORS},
        total=sum(basic.values()),
        colors=[info.code for info in deck_colors(deck.nonland_cards())],
    )
