"""
Card pool resolution.

Turns an archetype name into the list of card records a player sees or can
pull. Lookup order for the base pool:

1. in-memory cache
2. the `cards` table, by archetype tag
3. the card directory, whose results are written back to the table

The effective pool is the base pool minus the overlay's excluded cards plus
its custom cards. Directory failures are logged here and surface to callers
as an empty pool or None, never as an exception.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ryunix.config import ARCHETYPE_POOL_LIMIT, settings
from ryunix.db.operations import (
    get_card,
    get_cards_by_archetype,
    remove_archetype_from_card,
    upsert_cards,
)
from ryunix.models.card import card_name
from ryunix.services.card_directory import (
    CardDirectoryClient,
    CardNotFoundError,
    DirectoryLookupError,
    DirectoryUnavailableError,
)
from ryunix.services.catalog_overlay import CatalogOverlay
from ryunix.services.notifications import MESSAGE_CARDS_UPDATED, NotificationPort

logger = logging.getLogger(__name__)


class CardPoolResolver:
    def __init__(
        self,
        overlay: CatalogOverlay,
        directory: CardDirectoryClient,
        session_factory: async_sessionmaker[AsyncSession],
        broker: NotificationPort | None = None,
        channel: str | None = None,
        instance_id: str | None = None,
        limit: int = ARCHETYPE_POOL_LIMIT,
    ) -> None:
        self.overlay = overlay
        self.directory = directory
        self.channel = channel or settings.broadcast_channel
        self.instance_id = instance_id
        self.limit = limit
        self._session_factory = session_factory
        self._broker = broker
        self._cache: dict[str, list[dict[str, Any]]] = {}
        self._unsubscribe = (
            broker.subscribe(self.channel, self._on_message) if broker is not None else None
        )

    def invalidate(self, archetype: str | None = None) -> None:
        """Drop cached base pools; all of them when `archetype` is None."""
        if archetype is None:
            self._cache.clear()
        else:
            self._cache.pop(archetype, None)

    def cached_archetypes(self) -> list[str]:
        return sorted(self._cache)

    async def _on_message(self, payload: dict[str, Any]) -> None:
        if payload.get("type") != MESSAGE_CARDS_UPDATED:
            return
        if self.instance_id is not None and payload.get("origin") == self.instance_id:
            return
        self.invalidate(payload.get("archetype"))

    async def _announce(self, archetype: str | None) -> None:
        if self._broker is None:
            return
        await self._broker.publish(
            self.channel,
            {"type": MESSAGE_CARDS_UPDATED, "archetype": archetype, "origin": self.instance_id},
        )

    def _log_lookup_failure(self, what: str, error: DirectoryLookupError) -> None:
        if isinstance(error, CardNotFoundError):
            logger.warning("directory_no_match: %s (%s)", what, error.query)
        elif isinstance(error, DirectoryUnavailableError):
            logger.warning("directory_unavailable: %s (%s)", what, error.reason)
        else:
            logger.warning("directory lookup failed for %s: %s", what, error)

    async def _fetch_archetype(self, archetype: str) -> list[dict[str, Any]]:
        cards = (await self.directory.cards_by_archetype(archetype))[: self.limit]
        async with self._session_factory() as session:
            await upsert_cards(session, cards, archetype=archetype)
            await session.commit()
        return cards

    async def base_cards(self, archetype: str) -> list[dict[str, Any]]:
        """
        Cards the directory associates with an archetype.

        Returns an empty list when neither the store nor the directory knows it.
        """
        cached = self._cache.get(archetype)
        if cached is not None:
            return list(cached)

        async with self._session_factory() as session:
            rows = await get_cards_by_archetype(session, archetype, limit=self.limit)
        cards = [row.data for row in rows]

        if not cards:
            try:
                cards = await self._fetch_archetype(archetype)
            except DirectoryLookupError as e:
                self._log_lookup_failure(f"archetype {archetype}", e)
                return []
            logger.info("Fetched %d cards for archetype %s", len(cards), archetype)

        self._cache[archetype] = cards
        return list(cards)

    async def archetype_cards(self, archetype: str, fuzzy: bool = False) -> list[dict[str, Any]]:
        """
        Effective pool for an archetype: base minus exclusions plus custom cards.

        With `fuzzy`, an empty base pool falls back to a name-fragment search,
        which suits catalog browsing of decks named after a single card.
        """
        base = await self.base_cards(archetype)
        if not base and fuzzy:
            base = await self.search(archetype)

        excluded = self.overlay.excluded_cards(archetype)
        pool = [c for c in base if card_name(c) not in excluded]
        seen = {card_name(c) for c in pool}

        for custom in self.overlay.custom_cards(archetype):
            if custom.name in seen:
                continue
            data = custom.data or await self.card_by_name(custom.name)
            if data is None:
                continue
            pool.append(data)
            seen.add(custom.name)
        return pool

    async def card_by_name(self, name: str) -> dict[str, Any] | None:
        """Exact card lookup, store first then directory. None if unresolvable."""
        async with self._session_factory() as session:
            row = await get_card(session, name)
        if row is not None:
            return row.data

        try:
            card = await self.directory.card_by_name(name)
        except DirectoryLookupError as e:
            self._log_lookup_failure(f"card {name}", e)
            return None

        async with self._session_factory() as session:
            await upsert_cards(session, [card])
            await session.commit()
        return card

    async def search(self, fragment: str) -> list[dict[str, Any]]:
        """Fuzzy directory search; not cached under any archetype."""
        try:
            cards = await self.directory.search(fragment, limit=self.limit)
        except DirectoryLookupError as e:
            self._log_lookup_failure(f"search {fragment}", e)
            return []
        async with self._session_factory() as session:
            await upsert_cards(session, cards)
            await session.commit()
        return cards

    async def refresh(self, archetype: str) -> int:
        """
        Re-fetch an archetype from the directory and tell peers to drop their cache.

        Raises DirectoryLookupError so the admin sees why a refresh failed.
        """
        cards = await self._fetch_archetype(archetype)
        self._cache[archetype] = cards
        logger.info("Refreshed archetype %s: %d cards", archetype, len(cards))
        await self._announce(archetype)
        return len(cards)

    async def add_card(self, archetype: str, card: str | dict[str, Any]) -> bool:
        """Attach a card to an archetype pool. Returns True if the pool changed."""
        changed = self.overlay.add_custom_card_to_archetype(archetype, card)
        if isinstance(card, dict):
            # Cached without the archetype tag so the base pool stays directory-shaped
            async with self._session_factory() as session:
                await upsert_cards(session, [card])
                await session.commit()
        if changed:
            await self._announce(archetype)
        return changed

    async def remove_card(self, archetype: str, name: str) -> bool:
        """
        Take a card out of an archetype pool.

        Returns True if it was a custom card, False if it was excluded from the base pool.
        """
        was_custom = self.overlay.remove_card_from_archetype(archetype, name)
        async with self._session_factory() as session:
            untagged = await remove_archetype_from_card(session, name, archetype)
            await session.commit()
        if untagged:
            self.invalidate(archetype)
        await self._announce(archetype)
        return was_custom

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
