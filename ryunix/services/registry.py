"""
Service wiring.

One ServiceRegistry per process holds the overlays and the collaborators
built around them. The FastAPI lifespan builds it, loads the overlays from
the store, and flushes pending edits on shutdown.
"""

import logging
import uuid
from dataclasses import dataclass, field

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ryunix.config import settings
from ryunix.services.banlist_overlay import BanlistOverlay
from ryunix.services.card_directory import USER_AGENT, CardDirectoryClient
from ryunix.services.card_pool import CardPoolResolver
from ryunix.services.catalog_overlay import CatalogOverlay
from ryunix.services.catalog_publisher import CatalogRewriteClient
from ryunix.services.gacha import GachaEngine
from ryunix.services.notifications import InMemoryBroker, NotificationPort
from ryunix.services.sync import ModificationSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class ServiceRegistry:
    session_factory: async_sessionmaker[AsyncSession]
    overlay: CatalogOverlay
    synchronizer: ModificationSynchronizer
    banlist: BanlistOverlay
    directory: CardDirectoryClient
    resolver: CardPoolResolver
    gacha: GachaEngine
    publisher: CatalogRewriteClient
    broker: NotificationPort
    http_client: httpx.AsyncClient | None = field(default=None, repr=False)

    async def start(self) -> None:
        """Load overlay state from the store."""
        await self.synchronizer.load()
        await self.banlist.load()
        logger.info(
            "Services started (instance %s, overlay version %d)",
            self.synchronizer.instance_id,
            self.overlay.version,
        )

    async def stop(self) -> None:
        """Flush pending overlay edits and release connections."""
        await self.synchronizer.flush()
        self.synchronizer.close()
        self.resolver.close()
        if self.http_client is not None:
            await self.http_client.aclose()


def build_services(
    session_factory: async_sessionmaker[AsyncSession],
    broker: NotificationPort | None = None,
    http_client: httpx.AsyncClient | None = None,
    overlay: CatalogOverlay | None = None,
    debounce_seconds: float | None = None,
) -> ServiceRegistry:
    """
    Build the service graph.

    Pass `broker` to join other instances in the same process (tests do this
    to simulate several tabs or workers sharing one store).
    """
    broker = broker or InMemoryBroker()
    overlay = overlay or CatalogOverlay()
    if http_client is None:
        http_client = httpx.AsyncClient(
            timeout=settings.card_directory_timeout,
            headers={"User-Agent": USER_AGENT},
        )
    instance_id = uuid.uuid4().hex

    directory = CardDirectoryClient(client=http_client)
    resolver = CardPoolResolver(
        overlay, directory, session_factory, broker=broker, instance_id=instance_id
    )
    return ServiceRegistry(
        session_factory=session_factory,
        overlay=overlay,
        synchronizer=ModificationSynchronizer(
            overlay,
            session_factory,
            broker=broker,
            debounce_seconds=debounce_seconds,
            instance_id=instance_id,
        ),
        banlist=BanlistOverlay(session_factory),
        directory=directory,
        resolver=resolver,
        gacha=GachaEngine(overlay, resolver, session_factory),
        publisher=CatalogRewriteClient(client=http_client),
        broker=broker,
        http_client=http_client,
    )
