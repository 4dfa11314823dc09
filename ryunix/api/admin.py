"""
Admin API endpoints.

Catalog overlay edits, archetype pool edits, banlist management, gacha pack
CRUD and sync control. Overlay edits apply in memory immediately and are
persisted by the synchronizer after its debounce window.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ryunix.api.banlist import BanlistEntryResponse
from ryunix.api.catalog import CatalogEntryResponse
from ryunix.api.deps import Services
from ryunix.api.gacha import PackResponse
from ryunix.db import (
    create_gacha_pack,
    delete_gacha_pack,
    gacha_pack_to_model,
    get_gacha_pack,
    update_gacha_pack,
)
from ryunix.db.database import get_session
from ryunix.jobs.import_banlist import run_banlist_import
from ryunix.models.banlist import BanSource, BanStatus
from ryunix.models.catalog import CatalogCategory, CatalogItem, Rating, price_for_rating
from ryunix.models.gacha import GachaPackDefinition, PackType
from ryunix.services.card_directory import (
    CardNotFoundError,
    DirectoryLookupError,
)
from ryunix.services.registry import ServiceRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# --- Request/response models ---


class RatingUpdate(BaseModel):
    rating: Rating


class PriceUpdate(BaseModel):
    price: int = Field(..., ge=0)


class DisplayNameUpdate(BaseModel):
    display_name: str | None = Field(default=None, description="None restores the base name")


class ImageUpdate(BaseModel):
    image_url: str | None = Field(default=None, description="None restores the base image")


class CustomCardRequest(BaseModel):
    card_name: str = Field(..., min_length=1)
    card: dict[str, Any] | None = Field(
        default=None, description="Full directory record, if the admin already has it"
    )


class CustomCardResponse(BaseModel):
    archetype: str
    card_name: str
    changed: bool
    custom: bool


class StapleRequest(BaseModel):
    name: str = Field(..., min_length=1)
    rating: Rating
    card: dict[str, Any] | None = None


class RefreshResponse(BaseModel):
    archetype: str
    cards: int


class BanRequest(BaseModel):
    status: BanStatus
    source: BanSource = BanSource.MANUAL


class BanlistActionResponse(BaseModel):
    count: int
    message: str


class PackCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    pack_type: PackType = PackType.STANDARD
    single_cost: int = Field(..., ge=0)
    multi_cost: int = Field(..., ge=0)
    image_url: str | None = None
    card_pool: list[str] = Field(default_factory=list)
    is_active: bool = True


class PackUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    pack_type: PackType | None = None
    single_cost: int | None = Field(default=None, ge=0)
    multi_cost: int | None = Field(default=None, ge=0)
    image_url: str | None = None
    card_pool: list[str] | None = None
    is_active: bool | None = None


class SyncStatusResponse(BaseModel):
    instance_id: str
    state: str
    sync_pending: bool
    last_error: str | None = None
    overlay_version: int
    persist_count: int


class UpdateCatalogRequest(BaseModel):
    archetypeName: str | None = None  # noqa: N815
    rating: Rating | None = None
    price: int | None = Field(default=None, ge=0)


def _entry_for(services: ServiceRegistry, name: str) -> CatalogEntryResponse:
    item = services.overlay.find_item(name)
    if item is None:
        # Edits to removed or unknown items still apply; show the raw overrides
        record = services.overlay.record(name)
        rating = Rating.C
        if record is not None and record.rating is not None:
            rating = record.rating
        item = CatalogItem(name=name, rating=rating, price=price_for_rating(rating))
    return CatalogEntryResponse.from_entry(services.overlay.effective(item))


def _sync_status(services: ServiceRegistry) -> SyncStatusResponse:
    sync = services.synchronizer
    return SyncStatusResponse(
        instance_id=sync.instance_id,
        state=sync.state.value,
        sync_pending=sync.sync_pending,
        last_error=sync.last_error,
        overlay_version=services.overlay.version,
        persist_count=sync.persist_count,
    )


# --- Catalog overlay ---


@router.put("/catalog/{name:path}/rating", response_model=CatalogEntryResponse)
async def set_rating(
    name: str, request: RatingUpdate, services: Services
) -> CatalogEntryResponse:
    """Set a rating; the price follows the rating table."""
    services.overlay.set_rating(name, request.rating)
    entry = _entry_for(services, name)
    if services.overlay.find_item(name, CatalogCategory.DECKS) is not None:
        await services.publisher.publish(name, entry.rating, entry.price)
    return entry


@router.put("/catalog/{name:path}/price", response_model=CatalogEntryResponse)
async def set_price(name: str, request: PriceUpdate, services: Services) -> CatalogEntryResponse:
    services.overlay.set_price(name, request.price)
    entry = _entry_for(services, name)
    if services.overlay.find_item(name, CatalogCategory.DECKS) is not None:
        await services.publisher.publish(name, entry.rating, entry.price)
    return entry


@router.put("/catalog/{name:path}/display-name", response_model=CatalogEntryResponse)
async def set_display_name(
    name: str, request: DisplayNameUpdate, services: Services
) -> CatalogEntryResponse:
    services.overlay.set_display_name(name, request.display_name)
    return _entry_for(services, name)


@router.put("/catalog/{name:path}/image", response_model=CatalogEntryResponse)
async def set_image(name: str, request: ImageUpdate, services: Services) -> CatalogEntryResponse:
    services.overlay.set_image_url(name, request.image_url)
    return _entry_for(services, name)


@router.post("/catalog/{name:path}/remove", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item(name: str, services: Services) -> None:
    """Hide an item from the shop. Its overrides are kept for a later restore."""
    services.overlay.mark_removed(name)


@router.post("/catalog/{name:path}/restore", response_model=CatalogEntryResponse)
async def restore_item(name: str, services: Services) -> CatalogEntryResponse:
    services.overlay.restore(name)
    return _entry_for(services, name)


# --- Archetype pools ---


@router.post("/archetypes/{name:path}/cards", response_model=CustomCardResponse)
async def add_archetype_card(
    name: str, request: CustomCardRequest, services: Services
) -> CustomCardResponse:
    """Attach a card to an archetype pool."""
    card: str | dict[str, Any] = request.card_name
    if request.card is not None:
        card = {**request.card, "name": request.card_name}
    changed = await services.resolver.add_card(name, card)
    return CustomCardResponse(
        archetype=name, card_name=request.card_name, changed=changed, custom=True
    )


@router.delete("/archetypes/{name:path}/cards/{card_name}", response_model=CustomCardResponse)
async def remove_archetype_card(
    name: str, card_name: str, services: Services
) -> CustomCardResponse:
    """Take a card out of an archetype pool, whether it was custom or from the directory."""
    was_custom = await services.resolver.remove_card(name, card_name)
    return CustomCardResponse(archetype=name, card_name=card_name, changed=True, custom=was_custom)


@router.post("/archetypes/{name:path}/refresh", response_model=RefreshResponse)
async def refresh_archetype(name: str, services: Services) -> RefreshResponse:
    """Re-fetch an archetype's cards from the directory."""
    try:
        count = await services.resolver.refresh(name)
    except CardNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No cards found for archetype '{name}'",
        ) from e
    except DirectoryLookupError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Card directory unavailable: {e}",
        ) from e
    return RefreshResponse(archetype=name, cards=count)


# --- Staples ---


@router.post("/staples", response_model=CatalogEntryResponse)
async def add_staple(request: StapleRequest, services: Services) -> CatalogEntryResponse:
    card: str | dict[str, Any] = request.name
    if request.card is not None:
        card = {**request.card, "name": request.name}
    services.overlay.add_custom_staple(card, request.rating)
    return _entry_for(services, request.name)


@router.delete("/staples/{name:path}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_staple(name: str, services: Services) -> None:
    services.overlay.remove_staple(name)


# --- Banlist ---


@router.put("/banlist/{card_name:path}", response_model=BanlistEntryResponse)
async def set_ban_status(
    card_name: str, request: BanRequest, services: Services
) -> BanlistEntryResponse:
    """Set a card's status. Setting unlimited removes the entry."""
    entry = await services.banlist.set_status(card_name, request.status, request.source)
    return BanlistEntryResponse.from_status(card_name, request.status, entry)


@router.delete("/banlist/{card_name:path}", response_model=BanlistEntryResponse)
async def unban(card_name: str, services: Services) -> BanlistEntryResponse:
    await services.banlist.unban(card_name)
    return BanlistEntryResponse.from_status(card_name, BanStatus.UNLIMITED)


@router.post("/banlist/reload", response_model=BanlistActionResponse)
async def reload_banlist(services: Services) -> BanlistActionResponse:
    count = await services.banlist.load()
    return BanlistActionResponse(count=count, message=f"Loaded {count} banlist entries")


@router.post("/banlist/import", response_model=BanlistActionResponse)
async def import_banlist(services: Services) -> BanlistActionResponse:
    """Import the official TCG list into the banlist store."""
    count = await run_banlist_import(services.banlist, services.directory)
    if count == 0:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="No banlist entries imported; the card directory may be unavailable",
        )
    return BanlistActionResponse(count=count, message=f"Imported {count} banlist entries")


# --- Gacha packs ---


@router.get("/gacha/packs", response_model=list[PackResponse])
async def list_all_packs(services: Services) -> list[PackResponse]:
    """Every pack, inactive ones included."""
    packs = await services.gacha.list_packs(include_inactive=True)
    return [PackResponse.from_pack(p) for p in packs]


@router.post("/gacha/packs", response_model=PackResponse, status_code=status.HTTP_201_CREATED)
async def create_pack(
    request: PackCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PackResponse:
    definition = GachaPackDefinition(
        id="",
        name=request.name,
        description=request.description,
        pack_type=request.pack_type,
        single_cost=request.single_cost,
        multi_cost=request.multi_cost,
        image_url=request.image_url,
        card_pool=request.card_pool,
        is_active=request.is_active,
    )
    row = await create_gacha_pack(session, definition)
    logger.info("Created gacha pack %s (%s)", row.name, row.id)
    return PackResponse.from_pack(gacha_pack_to_model(row))


@router.patch("/gacha/packs/{pack_id}", response_model=PackResponse)
async def update_pack(
    pack_id: str,
    request: PackUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PackResponse:
    updates = request.model_dump(exclude_unset=True)
    if "card_pool" in updates:
        updates["cards_archetypes"] = updates.pop("card_pool")
    row = await update_gacha_pack(session, pack_id, updates)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pack '{pack_id}' not found",
        )
    return PackResponse.from_pack(gacha_pack_to_model(row))


@router.post("/gacha/packs/{pack_id}/toggle", response_model=PackResponse)
async def toggle_pack(
    pack_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PackResponse:
    """Flip a pack between active and hidden."""
    row = await get_gacha_pack(session, pack_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pack '{pack_id}' not found",
        )
    row.is_active = not row.is_active
    await session.flush()
    logger.info("Pack %s is now %s", row.name, "active" if row.is_active else "hidden")
    return PackResponse.from_pack(gacha_pack_to_model(row))


@router.delete("/gacha/packs/{pack_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_pack(
    pack_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    if not await delete_gacha_pack(session, pack_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pack '{pack_id}' not found",
        )


# --- Sync ---


@router.get("/sync", response_model=SyncStatusResponse)
async def sync_status(services: Services) -> SyncStatusResponse:
    return _sync_status(services)


@router.post("/sync/flush", response_model=SyncStatusResponse)
async def flush_sync(services: Services) -> SyncStatusResponse:
    """Persist pending overlay edits now."""
    await services.synchronizer.flush()
    return _sync_status(services)


@router.post("/sync/reload", response_model=SyncStatusResponse)
async def reload_sync(services: Services) -> SyncStatusResponse:
    """Replace in-memory overlay state with the stored snapshot."""
    await services.synchronizer.reload()
    return _sync_status(services)


# --- Catalog rewrite ---


@router.post("/update-catalog", response_model=CatalogEntryResponse)
async def update_catalog(
    request: UpdateCatalogRequest, services: Services
) -> CatalogEntryResponse:
    """Apply a rating and price pair for an archetype, as sent by the rewrite client."""
    if not request.archetypeName or request.rating is None or request.price is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields",
        )
    services.overlay.set_rating(request.archetypeName, request.rating)
    services.overlay.set_price(request.archetypeName, request.price)
    return _entry_for(services, request.archetypeName)
