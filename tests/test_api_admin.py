"""Tests for admin API endpoints."""

from unittest.mock import AsyncMock, patch

import httpx
import respx
from httpx import AsyncClient

from ryunix.config import settings
from ryunix.db.operations import get_modifications
from ryunix.services.registry import ServiceRegistry


class TestCatalogEdits:
    async def test_set_rating_moves_price(self, client: AsyncClient) -> None:
        response = await client.put("/admin/catalog/Blue-Eyes/rating", json={"rating": "A"})

        assert response.status_code == 200
        assert response.json()["rating"] == "A"
        assert response.json()["price"] == 100

    async def test_rating_change_is_published_for_decks(
        self, client: AsyncClient, services: ServiceRegistry
    ) -> None:
        """Deck price edits are sent to the catalog rewrite endpoint."""
        with patch.object(
            services.publisher, "publish", new_callable=AsyncMock, return_value=True
        ) as publish:
            await client.put("/admin/catalog/Blue-Eyes/price", json={"price": 40})
            await client.put("/admin/catalog/Called by the Grave/price", json={"price": 40})

        publish.assert_awaited_once()
        assert publish.await_args.args[0] == "Blue-Eyes"
        assert publish.await_args.args[2] == 40

    async def test_negative_price_rejected(self, client: AsyncClient) -> None:
        response = await client.put("/admin/catalog/Blue-Eyes/price", json={"price": -1})

        assert response.status_code == 422

    async def test_display_name_and_reset(self, client: AsyncClient) -> None:
        response = await client.put(
            "/admin/catalog/Blue-Eyes/display-name", json={"display_name": "BEWD"}
        )
        assert response.json()["display_name"] == "BEWD"

        response = await client.put("/admin/catalog/Blue-Eyes/display-name", json={})
        assert response.json()["display_name"] == "Blue-Eyes"

    async def test_image_override(self, client: AsyncClient) -> None:
        response = await client.put(
            "/admin/catalog/Blue-Eyes/image", json={"image_url": "https://img/new.jpg"}
        )

        assert response.json()["image_url"] == "https://img/new.jpg"

    async def test_remove_and_restore(self, client: AsyncClient) -> None:
        await client.put("/admin/catalog/Blue-Eyes/rating", json={"rating": "S"})

        response = await client.post("/admin/catalog/Blue-Eyes/remove")
        assert response.status_code == 204
        names = [i["name"] for i in (await client.get("/catalog/decks")).json()["items"]]
        assert "Blue-Eyes" not in names

        response = await client.post("/admin/catalog/Blue-Eyes/restore")
        assert response.json()["rating"] == "S"
        names = [i["name"] for i in (await client.get("/catalog/decks")).json()["items"]]
        assert "Blue-Eyes" in names

    async def test_update_catalog_requires_all_fields(self, client: AsyncClient) -> None:
        response = await client.post("/admin/update-catalog", json={"archetypeName": "Blue-Eyes"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"

    async def test_update_catalog(self, client: AsyncClient) -> None:
        response = await client.post(
            "/admin/update-catalog",
            json={"archetypeName": "Blue-Eyes", "rating": "B", "price": 33},
        )

        assert response.json()["rating"] == "B"
        assert response.json()["price"] == 33


class TestStaples:
    async def test_add_and_remove_custom_staple(self, client: AsyncClient) -> None:
        response = await client.post(
            "/admin/staples", json={"name": "Infinite Impermanence", "rating": "S"}
        )
        assert response.json()["price"] == 200
        names = [i["name"] for i in (await client.get("/catalog/staples")).json()["items"]]
        assert "Infinite Impermanence" in names

        response = await client.delete("/admin/staples/Infinite Impermanence")
        assert response.status_code == 204
        names = [i["name"] for i in (await client.get("/catalog/staples")).json()["items"]]
        assert "Infinite Impermanence" not in names

    async def test_remove_base_staple(self, client: AsyncClient) -> None:
        await client.delete("/admin/staples/Forbidden Droplet")

        names = [i["name"] for i in (await client.get("/catalog/staples")).json()["items"]]
        assert names == ["Ash Blossom & Joyous Spring", "Called by the Grave"]


class TestArchetypePools:
    async def test_add_custom_card_with_data(
        self, client: AsyncClient, services: ServiceRegistry
    ) -> None:
        response = await client.post(
            "/admin/archetypes/Blue-Eyes/cards",
            json={"card_name": "Maiden with Eyes of Blue", "card": {"id": 88241506}},
        )

        assert response.status_code == 200
        assert response.json()["changed"] is True
        custom = services.overlay.custom_cards("Blue-Eyes")
        assert [c.name for c in custom] == ["Maiden with Eyes of Blue"]
        assert custom[0].data == {"id": 88241506, "name": "Maiden with Eyes of Blue"}

    async def test_remove_directory_card(
        self, client: AsyncClient, services: ServiceRegistry
    ) -> None:
        response = await client.delete("/admin/archetypes/Blue-Eyes/cards/Sage with Eyes of Blue")

        assert response.json()["custom"] is False
        assert services.overlay.excluded_cards("Blue-Eyes") == {"Sage with Eyes of Blue"}

    @respx.mock
    async def test_refresh(self, client: AsyncClient) -> None:
        respx.get(settings.card_directory_url, params={"archetype": "Blue-Eyes"}).mock(
            return_value=httpx.Response(200, json={"data": [{"name": "Blue-Eyes White Dragon"}]})
        )

        response = await client.post("/admin/archetypes/Blue-Eyes/refresh")

        assert response.json() == {"archetype": "Blue-Eyes", "cards": 1}

    @respx.mock
    async def test_refresh_errors(self, client: AsyncClient) -> None:
        respx.get(settings.card_directory_url, params={"archetype": "Nope"}).mock(
            return_value=httpx.Response(400, json={"error": "No card matching your query"})
        )
        respx.get(settings.card_directory_url, params={"archetype": "Blue-Eyes"}).mock(
            return_value=httpx.Response(503)
        )

        assert (await client.post("/admin/archetypes/Nope/refresh")).status_code == 404
        assert (await client.post("/admin/archetypes/Blue-Eyes/refresh")).status_code == 502


class TestGachaPacks:
    async def test_pack_lifecycle(self, client: AsyncClient) -> None:
        response = await client.post(
            "/admin/gacha/packs",
            json={
                "name": "Dragons",
                "single_cost": 6,
                "multi_cost": 120,
                "card_pool": ["Blue-Eyes"],
            },
        )
        assert response.status_code == 201
        pack_id = response.json()["id"]

        response = await client.patch(
            f"/admin/gacha/packs/{pack_id}", json={"card_pool": ["Blue-Eyes", "Dark Magician"]}
        )
        assert response.json()["card_pool"] == ["Blue-Eyes", "Dark Magician"]

        response = await client.post(f"/admin/gacha/packs/{pack_id}/toggle")
        assert response.json()["is_active"] is False
        public = [p["id"] for p in (await client.get("/gacha/packs")).json()]
        assert pack_id not in public
        every = [p["id"] for p in (await client.get("/admin/gacha/packs")).json()]
        assert pack_id in every

        assert (await client.delete(f"/admin/gacha/packs/{pack_id}")).status_code == 204
        assert (await client.delete(f"/admin/gacha/packs/{pack_id}")).status_code == 404

    async def test_missing_pack(self, client: AsyncClient) -> None:
        assert (await client.patch("/admin/gacha/packs/x", json={"name": "y"})).status_code == 404
        assert (await client.post("/admin/gacha/packs/x/toggle")).status_code == 404


class TestSync:
    async def test_flush_persists_pending_edits(
        self, client: AsyncClient, services: ServiceRegistry, session_factory
    ) -> None:
        await client.put("/admin/catalog/Blue-Eyes/rating", json={"rating": "S+"})

        status = (await client.get("/admin/sync")).json()
        assert status["sync_pending"] is True

        status = (await client.post("/admin/sync/flush")).json()

        assert status["sync_pending"] is False
        assert status["persist_count"] == 1
        async with session_factory() as session:
            stored = await get_modifications(session)
        assert stored["archetypes"]["Blue-Eyes"]["rating"] == "S+"

    async def test_reload_discards_unsaved_edits(
        self, client: AsyncClient, services: ServiceRegistry
    ) -> None:
        await client.put("/admin/catalog/Blue-Eyes/rating", json={"rating": "S+"})

        response = await client.post("/admin/sync/reload")

        assert response.status_code == 200
        assert services.overlay.record("Blue-Eyes") is None
        deck = (await client.get("/catalog/decks", params={"search": "Blue"})).json()["items"][0]
        assert deck["rating"] == "C"
