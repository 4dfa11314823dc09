"""
Modification synchronizer.

Keeps a CatalogOverlay in step with the persistent store and with peer
instances:

- local edits are coalesced with a debounce window and written as one
  snapshot upsert, then announced on the broadcast channel
- an "updated" message from a peer reloads the snapshot from the store
  without writing it back
- a failed write is logged and surfaced through `last_error`; the in-memory
  edit stays applied and the next edit (or `flush()`) tries again
"""

import asyncio
import logging
import uuid
from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ryunix.config import settings
from ryunix.db.operations import get_modifications, upsert_modifications
from ryunix.models.catalog import OverlaySnapshot
from ryunix.services.catalog_overlay import CatalogOverlay
from ryunix.services.notifications import MESSAGE_UPDATED, NotificationPort

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    PENDING_PERSIST = "pending_persist"
    PERSISTING = "persisting"


class ModificationSynchronizer:
    """Debounced persistence and cross-instance reload for a CatalogOverlay."""

    def __init__(
        self,
        overlay: CatalogOverlay,
        session_factory: async_sessionmaker[AsyncSession],
        broker: NotificationPort | None = None,
        debounce_seconds: float | None = None,
        channel: str | None = None,
        instance_id: str | None = None,
    ) -> None:
        self.overlay = overlay
        self.instance_id = instance_id or uuid.uuid4().hex
        self.channel = channel or settings.broadcast_channel
        self.debounce_seconds = (
            settings.persist_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.state = SyncState.IDLE
        self.last_error: str | None = None
        self.persist_count = 0

        self._session_factory = session_factory
        self._broker = broker
        self._dirty = False
        self._applying_remote = False
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[bool]] = set()

        self._unsubscribe_overlay = overlay.subscribe(self._on_local_change)
        self._unsubscribe_channel = (
            broker.subscribe(self.channel, self._on_message) if broker is not None else None
        )

    @property
    def sync_pending(self) -> bool:
        """True while local edits are not yet confirmed in the store."""
        return self._dirty or self._timer is not None or self.state == SyncState.PERSISTING

    # --- Local edits ---

    def _on_local_change(self) -> None:
        if self._applying_remote:
            return
        self._dirty = True
        self._schedule()

    def _schedule(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Edits made outside an event loop wait for flush()
            logger.debug("No running event loop; deferring persistence until flush")
            if self.state == SyncState.IDLE:
                self.state = SyncState.PENDING_PERSIST
            return

        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.debounce_seconds, self._start_persist)
        if self.state != SyncState.PERSISTING:
            self.state = SyncState.PENDING_PERSIST

    def _start_persist(self) -> None:
        self._timer = None
        task = asyncio.ensure_future(self.persist())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _settle(self) -> None:
        self.state = SyncState.PENDING_PERSIST if self._timer is not None else SyncState.IDLE

    async def persist(self) -> bool:
        """
        Write the current overlay snapshot to the store and announce it.

        Returns True on success. Failures are logged and recorded in
        `last_error`; the in-memory overlay is left as is.
        """
        self.state = SyncState.PERSISTING
        snapshot = self.overlay.snapshot().to_dict()
        self._dirty = False

        try:
            async with self._session_factory() as session:
                await upsert_modifications(session, snapshot)
                await session.commit()
        except Exception as e:
            self._dirty = True
            self.last_error = str(e) or type(e).__name__
            logger.exception("Failed to persist catalog modifications")
            self._settle()
            return False

        self.persist_count += 1
        self.last_error = None
        logger.info(
            "Persisted catalog modifications: %d records, %d custom staples, %d removed staples",
            len(snapshot["archetypes"]),
            len(snapshot["customStaples"]),
            len(snapshot["removedStaples"]),
        )

        if self._broker is not None:
            await self._broker.publish(
                self.channel, {"type": MESSAGE_UPDATED, "origin": self.instance_id}
            )
        self._settle()
        return True

    async def drain(self) -> None:
        """Wait for in-flight writes without forcing pending ones."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def flush(self) -> bool:
        """Write pending edits now instead of waiting for the debounce window."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        await self.drain()
        if self._dirty:
            return await self.persist()
        self._settle()
        return True

    # --- Store and peer reloads ---

    async def reload(self) -> bool:
        """
        Replace the overlay layers with the stored snapshot.

        The reload does not count as a local edit, so it is never written back.
        Returns False if the store could not be read; the overlay keeps its state.
        """
        try:
            async with self._session_factory() as session:
                data = await get_modifications(session)
            snapshot = OverlaySnapshot.from_dict(data)
        except Exception:
            logger.exception("Failed to load catalog modifications from store")
            return False

        self._applying_remote = True
        try:
            self.overlay.load_snapshot(snapshot)
        finally:
            self._applying_remote = False

        logger.info(
            "Loaded catalog modifications: %d records, %d custom staples (version %d)",
            len(snapshot.archetypes),
            len(snapshot.custom_staples),
            self.overlay.version,
        )
        return True

    # Startup load uses the same path as a peer-triggered reload
    load = reload

    async def _on_message(self, payload: dict[str, Any]) -> None:
        if payload.get("origin") == self.instance_id:
            return
        if payload.get("type") == MESSAGE_UPDATED:
            logger.info("Catalog modifications updated by %s; reloading", payload.get("origin"))
            await self.reload()

    def close(self) -> None:
        """Stop listening. Pending edits are dropped unless flush() ran first."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._unsubscribe_overlay()
        if self._unsubscribe_channel is not None:
            self._unsubscribe_channel()
