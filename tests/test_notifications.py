"""Tests for the in-process notification broker and the catalog rewrite client."""

import json

import httpx
import respx

from ryunix.models.catalog import Rating
from ryunix.services.catalog_publisher import CatalogRewriteClient
from ryunix.services.notifications import InMemoryBroker

REWRITE_URL = "https://catalog.test/update"


class TestInMemoryBroker:
    async def test_fan_out_and_unsubscribe(self) -> None:
        broker = InMemoryBroker()
        seen: list[tuple[str, dict]] = []

        async def first(payload: dict) -> None:
            seen.append(("first", payload))

        async def second(payload: dict) -> None:
            seen.append(("second", payload))

        unsubscribe = broker.subscribe("mods", first)
        broker.subscribe("mods", second)
        await broker.publish("mods", {"type": "updated"})
        unsubscribe()
        await broker.publish("mods", {"type": "updated"})

        assert [name for name, _ in seen] == ["first", "second", "second"]
        assert broker.subscriber_count("mods") == 1

    async def test_failing_handler_does_not_block_others(self) -> None:
        """One broken subscriber is logged and skipped."""
        broker = InMemoryBroker()
        seen: list[dict] = []

        async def broken(payload: dict) -> None:
            raise RuntimeError("boom")

        async def working(payload: dict) -> None:
            seen.append(payload)

        broker.subscribe("mods", broken)
        broker.subscribe("mods", working)
        await broker.publish("mods", {"type": "updated"})

        assert seen == [{"type": "updated"}]

    async def test_topics_are_isolated(self) -> None:
        broker = InMemoryBroker()
        seen: list[dict] = []

        async def handler(payload: dict) -> None:
            seen.append(payload)

        broker.subscribe("mods", handler)
        await broker.publish("other", {"type": "updated"})

        assert seen == []


class TestCatalogRewriteClient:
    async def test_disabled_without_url(self) -> None:
        client = CatalogRewriteClient(url="")

        assert client.enabled is False
        assert await client.publish("Blue-Eyes", Rating.A, 100) is False

    @respx.mock
    async def test_posts_new_values(self) -> None:
        route = respx.post(REWRITE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))

        ok = await CatalogRewriteClient(url=REWRITE_URL).publish("Blue-Eyes", Rating.S, 200)

        assert ok is True
        body = json.loads(route.calls.last.request.content)
        assert body == {"archetypeName": "Blue-Eyes", "rating": "S", "price": 200}

    @respx.mock
    async def test_failure_is_swallowed(self) -> None:
        """Rewrite failures are logged and reported as False."""
        respx.post(REWRITE_URL).mock(return_value=httpx.Response(500))

        client = CatalogRewriteClient(url=REWRITE_URL)

        assert await client.publish("Blue-Eyes", Rating.S, 200) is False
