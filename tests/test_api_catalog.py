"""Tests for catalog API endpoints."""

import httpx
import respx
from httpx import AsyncClient

from ryunix.config import settings
from ryunix.models.catalog import Rating
from ryunix.services.registry import ServiceRegistry


class TestBrowse:
    async def test_decks_sorted_by_name(self, client: AsyncClient) -> None:
        response = await client.get("/catalog/decks")

        assert response.status_code == 200
        data = response.json()
        assert [i["name"] for i in data["items"]] == [
            "Blue-Eyes",
            "Dark Magician",
            "Pot of Greed",
            "Sky Striker",
        ]
        assert data["total"] == 4
        assert data["pages"] == 1

    async def test_overrides_and_removals_visible(
        self, client: AsyncClient, services: ServiceRegistry
    ) -> None:
        """Browsing shows merged values and hides removed items."""
        services.overlay.set_rating("Blue-Eyes", Rating.S)
        services.overlay.set_display_name("Blue-Eyes", "Blue-Eyes Ultimate")
        services.overlay.mark_removed("Pot of Greed")

        response = await client.get("/catalog/decks", params={"sort_by": "price-desc"})

        data = response.json()
        first = data["items"][0]
        assert first["name"] == "Blue-Eyes"
        assert first["display_name"] == "Blue-Eyes Ultimate"
        assert first["price"] == 200
        assert "Pot of Greed" not in [i["name"] for i in data["items"]]
        assert data["version"] == services.overlay.version

    async def test_filter_and_paginate(self, client: AsyncClient) -> None:
        response = await client.get(
            "/catalog/staples", params={"search": "a", "per_page": 1, "page": 2}
        )

        data = response.json()
        assert data["total"] == 2
        assert data["pages"] == 2
        assert [i["name"] for i in data["items"]] == ["Called by the Grave"]

    async def test_rating_filter(self, client: AsyncClient) -> None:
        response = await client.get("/catalog/decks", params={"rating": "B"})

        assert [i["name"] for i in response.json()["items"]] == ["Dark Magician"]

    async def test_invalid_sort_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/catalog/decks", params={"sort_by": "popularity"})

        assert response.status_code == 422

    async def test_unknown_category(self, client: AsyncClient) -> None:
        response = await client.get("/catalog/bundles")

        assert response.status_code == 422


class TestArchetypeCards:
    @respx.mock
    async def test_resolved_pool(self, client: AsyncClient, services: ServiceRegistry) -> None:
        """The pool merges directory cards with the overlay's edits."""
        respx.get(settings.card_directory_url, params={"archetype": "Blue-Eyes"}).mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": [
                        {
                            "name": "Sage with Eyes of Blue",
                            "card_images": [
                                {"image_url": "sage.jpg", "image_url_small": "sage_s.jpg"}
                            ],
                        },
                        {"name": "Blue-Eyes White Dragon", "card_images": []},
                        {"name": "The White Stone of Ancients"},
                    ]
                },
            )
        )
        services.overlay.remove_card_from_archetype("Blue-Eyes", "The White Stone of Ancients")

        response = await client.get("/catalog/archetypes/Blue-Eyes/cards")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["cards"]] == [
            "Blue-Eyes White Dragon",
            "Sage with Eyes of Blue",
        ]
        assert data["cards"][1]["image_url_small"] == "sage_s.jpg"
        assert data["excluded_cards"] == ["The White Stone of Ancients"]

    @respx.mock
    async def test_directory_outage_is_empty_pool(self, client: AsyncClient) -> None:
        respx.get(settings.card_directory_url).mock(return_value=httpx.Response(503))

        response = await client.get("/catalog/archetypes/Dark Magician/cards")

        assert response.status_code == 200
        assert response.json()["cards"] == []

    async def test_unlisted_archetype(self, client: AsyncClient) -> None:
        response = await client.get("/catalog/archetypes/Nonexistent/cards")

        assert response.status_code == 404


class TestPurchase:
    async def test_purchase(self, client: AsyncClient, make_user) -> None:
        user_id = await make_user(coin=30)

        response = await client.post(
            "/catalog/purchase",
            json={"user_id": user_id, "item_name": "Blue-Eyes", "category": "decks"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Purchased Blue-Eyes!"
        assert data["balance_after"] == 5

        collection = await client.get(f"/collection/{user_id}")
        assert collection.json()["coin"] == 5
        assert collection.json()["counts"] == {"Deck": 1}

    async def test_insufficient_funds_envelope(self, client: AsyncClient, make_user) -> None:
        """Economic failures come back classified with their status code."""
        user_id = await make_user(coin=10)

        response = await client.post(
            "/catalog/purchase",
            json={"user_id": user_id, "item_name": "Dark Magician", "category": "decks"},
        )

        assert response.status_code == 402
        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "insufficient_funds"
        assert data["failure"]["message"] == "Insufficient coins!"

    async def test_duplicate_is_conflict(self, client: AsyncClient, make_user) -> None:
        user_id = await make_user(coin=100)
        body = {"user_id": user_id, "item_name": "Blue-Eyes", "category": "decks"}

        await client.post("/catalog/purchase", json=body)
        response = await client.post("/catalog/purchase", json=body)

        assert response.status_code == 409
        assert response.json()["failure"]["kind"] == "duplicate_ownership"
        ledger = await client.get(f"/collection/{user_id}/ledger")
        assert ledger.json()["coin"] == 75
        assert len(ledger.json()["entries"]) == 1

    async def test_unknown_item(self, client: AsyncClient, make_user) -> None:
        user_id = await make_user(coin=100)

        response = await client.post(
            "/catalog/purchase",
            json={"user_id": user_id, "item_name": "Nope", "category": "staples"},
        )

        assert response.status_code == 404
        assert response.json()["failure"]["kind"] == "not_found"
