"""
Banlist overlay.

In-memory cache of non-default ban statuses, backed by the `banlist` table.
Reads are synchronous cache lookups; writes go to the store first and update
the cache only once the store accepted them.
"""

import logging
from collections import Counter
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ryunix.db.operations import (
    banned_card_to_model,
    delete_ban,
    get_banlist,
    upsert_ban,
    upsert_bans,
)
from ryunix.models.banlist import (
    BAN_STATUS_INFO,
    BanlistEntry,
    BannedCard,
    BanSource,
    BanStatus,
)
from ryunix.models.failure import InvalidOverlayMutationError

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

E = TypeVar("E", bound=Enum)


def _require_enum(enum_cls: type[E], value: Any, what: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidOverlayMutationError(f"Unknown {what}: {value!r}") from e


class BanlistOverlay:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._cache: dict[str, BannedCard] = {}
        self._version = 0
        self._listeners: list[Listener] = []

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Banlist listener failed")

    async def load(self) -> int:
        """
        Replace the cache with a full scan of the store.

        A store failure leaves an empty cache (every card unlimited).
        Returns the number of entries loaded.
        """
        try:
            async with self._session_factory() as session:
                rows = await get_banlist(session)
        except Exception:
            logger.exception("Failed to load banlist; treating every card as unlimited")
            self._cache = {}
            self._changed()
            return 0

        self._cache = {row.card_name: banned_card_to_model(row) for row in rows}
        logger.info("Loaded banlist with %d entries", len(self._cache))
        self._changed()
        return len(self._cache)

    # --- Reads ---

    def get_status(self, card_name: str) -> BanStatus:
        entry = self._cache.get(card_name)
        return entry.ban_status if entry else BanStatus.UNLIMITED

    def get_entry(self, card_name: str) -> BannedCard | None:
        return self._cache.get(card_name)

    def entries(self) -> list[BannedCard]:
        return sorted(self._cache.values(), key=lambda e: e.card_name)

    def is_banned(self, card_name: str) -> bool:
        return self.get_status(card_name) == BanStatus.FORBIDDEN

    def allowed_copies(self, card_name: str) -> int:
        return BAN_STATUS_INFO[self.get_status(card_name)].copies

    def counts(self) -> dict[BanStatus, int]:
        """Entries per non-default status."""
        counter = Counter(e.ban_status for e in self._cache.values())
        return {
            status: counter.get(status, 0)
            for status in BanStatus
            if status != BanStatus.UNLIMITED
        }

    # --- Writes ---

    async def set_status(
        self,
        card_name: str,
        status: BanStatus | str,
        source: BanSource | str = BanSource.MANUAL,
    ) -> BannedCard | None:
        """
        Set a card's status. Unlimited removes the entry.

        Store errors propagate and leave the cache unchanged.
        """
        if not card_name or not card_name.strip():
            raise InvalidOverlayMutationError("Card name cannot be empty")
        status = _require_enum(BanStatus, status, "ban status")
        source = _require_enum(BanSource, source, "ban source")
        if status == BanStatus.UNLIMITED:
            await self.unban(card_name)
            return None

        async with self._session_factory() as session:
            row = await upsert_ban(session, card_name, status, source)
            entry = banned_card_to_model(row)
            await session.commit()

        self._cache[card_name] = entry
        logger.info("Set %s to %s (%s)", card_name, status.value, source.value)
        self._changed()
        return entry

    async def unban(self, card_name: str) -> bool:
        """Remove a card's entry. Returns True if one existed in the store."""
        async with self._session_factory() as session:
            deleted = await delete_ban(session, card_name)
            await session.commit()

        self._cache.pop(card_name, None)
        logger.info("Unbanned %s", card_name)
        self._changed()
        return deleted

    async def bulk_update_from_external_source(self, entries: list[BanlistEntry]) -> int:
        """
        Apply an imported list in one transaction, then reload the cache.

        Entries are tagged with the TCG source. Cards not in `entries` keep
        whatever status they already have.
        """
        async with self._session_factory() as session:
            applied = await upsert_bans(session, entries, source=BanSource.TCG)
            await session.commit()

        logger.info("Applied %d banlist entries from external source", applied)
        await self.load()
        return applied
