"""
Banlist API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from ryunix.api.deps import Services
from ryunix.models.banlist import BAN_STATUS_INFO, BannedCard, BanSource, BanStatus

router = APIRouter(prefix="/banlist", tags=["banlist"])


class BanlistEntryResponse(BaseModel):
    card_name: str
    status: BanStatus
    label: str
    copies: int
    source: BanSource | None = None
    last_updated: str | None = None

    @classmethod
    def from_status(
        cls, card_name: str, status: BanStatus, entry: BannedCard | None = None
    ) -> "BanlistEntryResponse":
        info = BAN_STATUS_INFO[status]
        return cls(
            card_name=card_name,
            status=status,
            label=info.label,
            copies=info.copies,
            source=entry.source if entry else None,
            last_updated=entry.last_updated if entry else None,
        )


class BanlistResponse(BaseModel):
    entries: list[BanlistEntryResponse]
    counts: dict[BanStatus, int]
    version: int


@router.get("", response_model=BanlistResponse)
async def get_banlist(services: Services) -> BanlistResponse:
    """Every non-unlimited card, by name."""
    banlist = services.banlist
    return BanlistResponse(
        entries=[
            BanlistEntryResponse.from_status(e.card_name, e.ban_status, e)
            for e in banlist.entries()
        ],
        counts=banlist.counts(),
        version=banlist.version,
    )


@router.get("/{card_name:path}", response_model=BanlistEntryResponse)
async def get_card_status(card_name: str, services: Services) -> BanlistEntryResponse:
    """Status of one card. Cards with no entry are unlimited."""
    banlist = services.banlist
    return BanlistEntryResponse.from_status(
        card_name, banlist.get_status(card_name), banlist.get_entry(card_name)
    )
