"""
Catalog API endpoints.

Browse the merged deck and staple listings, view an archetype's resolved
card pool, and buy catalog items.
"""

from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ryunix.api.deps import Services
from ryunix.config import CATALOG_PAGE_SIZE
from ryunix.db.database import get_session
from ryunix.models.card import card_image_url, card_name
from ryunix.models.catalog import CatalogCategory, CatalogEntry, Rating
from ryunix.services.purchases import purchase_catalog_item

router = APIRouter(prefix="/catalog", tags=["catalog"])

SortOption = Literal["name", "price-asc", "price-desc", "rating"]


class CatalogEntryResponse(BaseModel):
    name: str
    display_name: str
    rating: Rating
    price: int
    image_url: str | None = None

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "CatalogEntryResponse":
        return cls(
            name=entry.name,
            display_name=entry.display_name,
            rating=entry.rating,
            price=entry.price,
            image_url=entry.image_url,
        )


class CatalogPageResponse(BaseModel):
    category: CatalogCategory
    items: list[CatalogEntryResponse]
    total: int
    page: int
    pages: int
    version: int = Field(..., description="Overlay version the page was built from")


class ArchetypeCardsResponse(BaseModel):
    archetype: str
    cards: list[dict[str, Any]]
    custom_cards: list[str] = Field(default_factory=list)
    excluded_cards: list[str] = Field(default_factory=list)


class PurchaseRequest(BaseModel):
    user_id: str
    item_name: str = Field(..., min_length=1)
    category: CatalogCategory


class PurchaseResponse(BaseModel):
    item_name: str
    display_name: str
    kind: str
    price: int
    balance_after: int
    message: str


@router.get("/archetypes/{name:path}/cards", response_model=ArchetypeCardsResponse)
async def get_archetype_cards(name: str, services: Services) -> ArchetypeCardsResponse:
    """
    Resolved card pool of a listed archetype.

    Archetypes that are really single cards fall back to a name search.
    """
    if services.overlay.find_item(name, CatalogCategory.DECKS) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Archetype '{name}' not found",
        )

    pool = await services.resolver.archetype_cards(name, fuzzy=True)
    cards = [
        {**card, "image_url_small": card_image_url(card, small=True)}
        for card in sorted(pool, key=card_name)
    ]
    return ArchetypeCardsResponse(
        archetype=name,
        cards=cards,
        custom_cards=[c.name for c in services.overlay.custom_cards(name)],
        excluded_cards=sorted(services.overlay.excluded_cards(name)),
    )


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase(
    request: PurchaseRequest,
    services: Services,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PurchaseResponse:
    """
    Buy a deck or staple at its current effective price.

    402 if the balance is too low, 409 if already owned.
    """
    receipt = await purchase_catalog_item(
        session, services.overlay, request.user_id, request.item_name, request.category
    )
    return PurchaseResponse(
        item_name=receipt.item_name,
        display_name=receipt.display_name,
        kind=receipt.kind.value,
        price=receipt.price,
        balance_after=receipt.balance_after,
        message=f"Purchased {receipt.display_name}!",
    )


@router.get("/{category}", response_model=CatalogPageResponse)
async def browse_catalog(
    category: CatalogCategory,
    services: Services,
    search: str | None = None,
    rating: Rating | None = None,
    sort_by: SortOption = "name",
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = CATALOG_PAGE_SIZE,
) -> CatalogPageResponse:
    """List effective catalog items. Removed items are never shown."""
    result = services.overlay.browse(
        category,
        search=search,
        rating=rating,
        sort_by=sort_by,
        page=page,
        per_page=per_page,
    )
    return CatalogPageResponse(
        category=category,
        items=[CatalogEntryResponse.from_entry(e) for e in result.items],
        total=result.total,
        page=result.page,
        pages=result.pages,
        version=services.overlay.version,
    )
