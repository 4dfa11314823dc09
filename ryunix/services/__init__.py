"""
Ryunix services.

Catalog and banlist overlays, their persistence, card pool resolution and
the coin economy (catalog purchases and gacha pulls).
"""

from ryunix.services.banlist_overlay import BanlistOverlay
from ryunix.services.card_directory import (
    CardDirectoryClient,
    CardNotFoundError,
    DirectoryLookupError,
    DirectoryUnavailableError,
)
from ryunix.services.card_pool import CardPoolResolver
from ryunix.services.catalog_overlay import CatalogOverlay
from ryunix.services.catalog_publisher import CatalogRewriteClient
from ryunix.services.gacha import GachaEngine
from ryunix.services.notifications import InMemoryBroker, NotificationPort
from ryunix.services.purchases import PurchaseReceipt, purchase_catalog_item
from ryunix.services.registry import ServiceRegistry, build_services
from ryunix.services.sync import ModificationSynchronizer, SyncState

__all__ = [
    "BanlistOverlay",
    "CardDirectoryClient",
    "CardNotFoundError",
    "CardPoolResolver",
    "CatalogOverlay",
    "CatalogRewriteClient",
    "DirectoryLookupError",
    "DirectoryUnavailableError",
    "GachaEngine",
    "InMemoryBroker",
    "ModificationSynchronizer",
    "NotificationPort",
    "PurchaseReceipt",
    "ServiceRegistry",
    "SyncState",
    "build_services",
    "purchase_catalog_item",
]
