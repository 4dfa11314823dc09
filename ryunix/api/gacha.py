"""
Gacha API endpoints.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ryunix.api.deps import Services
from ryunix.models.card import card_image_url, card_name
from ryunix.models.gacha import GachaPackDefinition, PackType, PullSummary, Rarity

router = APIRouter(prefix="/gacha", tags=["gacha"])


class PackResponse(BaseModel):
    id: str
    name: str
    description: str = ""
    pack_type: PackType
    single_cost: int
    multi_cost: int
    image_url: str | None = None
    card_pool: list[str] = Field(default_factory=list)
    is_active: bool = True

    @classmethod
    def from_pack(cls, pack: GachaPackDefinition) -> "PackResponse":
        return cls(
            id=pack.id,
            name=pack.name,
            description=pack.description,
            pack_type=pack.pack_type,
            single_cost=pack.single_cost,
            multi_cost=pack.multi_cost,
            image_url=pack.image_url,
            card_pool=list(pack.card_pool),
            is_active=pack.is_active,
        )


class PullRequest(BaseModel):
    user_id: str
    pack_id: str
    pull_count: int = Field(..., description="9 for a single pack, 216 for a box")


class PulledCard(BaseModel):
    name: str
    rarity: Rarity
    is_new: bool
    source: str
    image_url: str | None = None
    card: dict[str, Any]


class PullResponse(BaseModel):
    pack_id: str
    requested: int
    fulfilled: int
    cost: int
    balance_after: int
    cards: list[PulledCard]
    failed_entries: list[str] = Field(default_factory=list)
    partial: bool = False
    message: str

    @classmethod
    def from_summary(cls, summary: PullSummary) -> "PullResponse":
        new_count = sum(1 for r in summary.results if r.is_new)
        message = f"Pulled {summary.fulfilled} cards ({new_count} new)"
        if summary.partial:
            message += f"; {len(summary.failed_entries)} pulls could not be resolved"
        return cls(
            pack_id=summary.pack_id,
            requested=summary.requested,
            fulfilled=summary.fulfilled,
            cost=summary.cost,
            balance_after=summary.balance_after,
            cards=[
                PulledCard(
                    name=card_name(r.card),
                    rarity=r.rarity,
                    is_new=r.is_new,
                    source=r.source_pool_entry,
                    image_url=card_image_url(r.card),
                    card=r.card,
                )
                for r in summary.results
            ],
            failed_entries=summary.failed_entries,
            partial=summary.partial,
            message=message,
        )


@router.get("/packs", response_model=list[PackResponse])
async def list_packs(services: Services) -> list[PackResponse]:
    """Active packs: the two built-in banners followed by admin packs."""
    return [PackResponse.from_pack(p) for p in await services.gacha.list_packs()]


@router.post("/pull", response_model=PullResponse)
async def pull(request: PullRequest, services: Services) -> PullResponse:
    """
    Pull a single pack (9 cards) or a box (216 cards).

    A partially resolved batch still charges the full price and lists the
    unresolved pool entries in `failed_entries`.
    """
    pack = await services.gacha.get_pack(request.pack_id)
    summary = await services.gacha.pull(pack, request.pull_count, request.user_id)
    return PullResponse.from_summary(summary)
