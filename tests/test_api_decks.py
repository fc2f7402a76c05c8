"""Tests for deck API endpoints."""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from draftdeck.api.schemas import DeckModel
from draftdeck.main import app
from draftdeck.models.deck import Deck


@pytest.fixture
async def client():
    """Provide an async test client bound to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def deck_payload(draft_deck: Deck) -> dict[str, Any]:
    return DeckModel.from_deck(draft_deck).model_dump(mode="json")


def _deck_size(deck: dict[str, Any]) -> int:
    main_deck = sum(len(pile) for pile in deck["piles"][:13])
    return main_deck + sum(deck["lands"]["basic"].values())


class TestHealth:
    def test_app_title(self) -> None:
        assert app.title == "DraftDeck"

    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "app": "DraftDeck"}


class TestNormalize:
    async def test_normalizes_to_requested_size(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/decks/normalize", json={"deck": deck_payload, "size": 60, "seed": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["piles"]) == 15
        assert _deck_size(data) == 60

    async def test_same_seed_same_deck(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        body = {"deck": deck_payload, "size": 60, "seed": 3}

        first = await client.post("/decks/normalize", json=body)
        second = await client.post("/decks/normalize", json=body)

        assert first.json() == second.json()

    async def test_non_positive_size_is_rejected(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        response = await client.post("/decks/normalize", json={"deck": deck_payload, "size": 0})

        assert response.status_code == 400
        assert "size" in response.json()["detail"]

    async def test_negative_basic_count_is_rejected(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        deck_payload["lands"]["basic"]["W"] = -1

        response = await client.post("/decks/normalize", json={"deck": deck_payload})

        assert response.status_code == 400

    async def test_wrong_pile_count_fails_validation(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        deck_payload["piles"] = deck_payload["piles"][:14]

        response = await client.post("/decks/normalize", json={"deck": deck_payload})

        assert response.status_code == 422


class TestExport:
    async def test_normal_export(self, client: AsyncClient, deck_payload: dict[str, Any]) -> None:
        response = await client.post(
            "/decks/export", json={"deck": deck_payload, "set_code": "m19"}
        )

        assert response.status_code == 200
        text = response.json()["text"]
        assert "9 Plains\n8 Island" in text
        assert sum(int(line.split(" ", 1)[0]) for line in text.splitlines() if line) == 40

    async def test_arena_export_is_sixty_cards(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/decks/export",
            json={"deck": deck_payload, "set_code": "m19", "format": "arena", "seed": 1},
        )

        assert response.status_code == 200
        text = response.json()["text"]
        assert sum(int(line.split(" ", 1)[0]) for line in text.splitlines() if line) == 60


class TestLands:
    async def test_computes_basics_for_deck_size(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/decks/lands", json={"deck": deck_payload, "deck_size": 40}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 17
        assert data["basic"]["W"] > data["basic"]["U"]
        assert data["basic"]["B"] == 0
        assert data["colors"] == ["W", "U"]

    async def test_zero_deck_size_fails_validation(
        self, client: AsyncClient, deck_payload: dict[str, Any]
    ) -> None:
        response = await client.post("/decks/lands", json={"deck": deck_payload, "deck_size": 0})

        assert response.status_code == 422
