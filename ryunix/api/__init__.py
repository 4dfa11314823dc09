from ryunix.api.admin import router as admin_router
from ryunix.api.banlist import router as banlist_router
from ryunix.api.catalog import router as catalog_router
from ryunix.api.collection import router as collection_router
from ryunix.api.gacha import router as gacha_router
from ryunix.api.health import router as health_router

__all__ = [
    "admin_router",
    "banlist_router",
    "catalog_router",
    "collection_router",
    "gacha_router",
    "health_router",
]
