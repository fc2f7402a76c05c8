"""
Scryfall card data parsing.

Builds Card values from Scryfall-style card JSON, e.g. the objects in a
set's card list or a bulk data export, and fetches a set's cards from
the search API.

Card objects: https://scryfall.com/docs/api/cards
"""

import asyncio
import json
import logging
import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx

from draftdeck.models.card import BASIC_LAND_NAMES, Card, Color

logger = logging.getLogger(__name__)

SCRYFALL_API = "https://api.scryfall.com"
USER_AGENT = "DraftDeck/1.0"

# Scryfall asks for at most 10 requests per second
RATE_LIMIT_DELAY = 0.1


class CardParseError(ValueError):
    """Raised when a card object lacks the fields a Card needs."""


class CardFetchError(Exception):
    """Raised when fetching card data from Scryfall fails."""


def _front_face(data: dict[str, Any]) -> dict[str, Any]:
    faces = data.get("card_faces") or []
    return faces[0] if faces else {}


def card_from_scryfall(data: dict[str, Any]) -> Card:
    """
    Build a Card from a Scryfall card object.

    Double-faced cards keep mana cost, type line and colors on their
    faces; the front face fills whatever the top level lacks.

    Raises:
        CardParseError: If the object has no name
    """
    name = data.get("name")
    if not name:
        raise CardParseError(f"Card object has no name: {data!r}")

    front = _front_face(data)
    colors = data.get("colors")
    if colors is None:
        colors = front.get("colors", [])

    cmc = data.get("cmc", 0) or 0

    return Card(
        name=name,
        type_line=data.get("type_line") or front.get("type_line", ""),
        colors=tuple(colors),
        mana_cost=data.get("mana_cost") or front.get("mana_cost", ""),
        cmc=math.floor(float(cmc)),
        set_code=data.get("set", ""),
        collector_number=str(data.get("collector_number", "")),
        rating=float(data.get("rating", 0.0) or 0.0),
    )


def load_cards(path: Path) -> list[Card]:
    """
    Load cards from a JSON file holding an array of card objects.

    Args:
        path: Path to the JSON file

    Returns:
        Cards in file order
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    return [card_from_scryfall(entry) for entry in data]


async def fetch_set_cards(set_code: str) -> list[Card]:
    """
    Fetch every card of a set from the Scryfall search API.

    Args:
        set_code: Set code, e.g. "m19"

    Returns:
        Cards in the order Scryfall lists them

    Raises:
        CardFetchError: If the API request fails
    """
    cards: list[Card] = []
    url = f"{SCRYFALL_API}/cards/search"
    params = {"q": f"set:{set_code.lower()}", "unique": "prints", "order": "set"}

    try:
        async with httpx.AsyncClient(timeout=30.0, headers={"User-Agent": USER_AGENT}) as client:
            has_more = True
            while has_more:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()

                cards.extend(card_from_scryfall(entry) for entry in data.get("data", []))

                has_more = data.get("has_more", False)
                if has_more:
                    url = data.get("next_page", "")
                    params = {}  # next_page already carries the query
                    await asyncio.sleep(RATE_LIMIT_DELAY)
    except httpx.HTTPStatusError as e:
        raise CardFetchError(
            f"Failed to fetch cards for {set_code}: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise CardFetchError(f"Failed to fetch cards for {set_code}: {e}") from e

    logger.info("set_cards_fetched", extra={"set_code": set_code, "count": len(cards)})
    return cards


def basic_land_printings(cards: Iterable[Card]) -> dict[Color, Card]:
    """First basic land printing of each color found among cards."""
    by_name = {name: color for color, name in BASIC_LAND_NAMES.items()}
    printings: dict[Color, Card] = {}
    for card in cards:
        color = by_name.get(card.name)
        if color is not None and card.is_basic_land and color not in printings:
            printings[color] = card
    return printings
