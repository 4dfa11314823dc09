"""
Collection API endpoints.

Shows what a user owns and how their balance got there.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ryunix.db import get_coin_log, get_purchases_by_user, get_user
from ryunix.db.database import get_session
from ryunix.models.ledger import ItemKind

router = APIRouter(prefix="/collection", tags=["collection"])


class OwnedItem(BaseModel):
    item_name: str
    kind: ItemKind
    bought_at: datetime | None = None


class CollectionResponse(BaseModel):
    user_id: str
    coin: int
    items: list[OwnedItem] = Field(default_factory=list)
    counts: dict[str, int] = Field(
        default_factory=dict,
        description="Owned item counts by kind (Deck, Staple, Bundle, Gacha)",
    )


class LedgerEntry(BaseModel):
    amount: int
    reason: str
    created_at: datetime | None = None


class LedgerResponse(BaseModel):
    user_id: str
    coin: int
    entries: list[LedgerEntry]


@router.get("/{user_id}", response_model=CollectionResponse)
async def get_user_collection(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionResponse:
    """Everything a user owns, oldest first, with their current balance."""
    user = await get_user(session, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' not found",
        )

    purchases = await get_purchases_by_user(session, user_id)
    items = [
        OwnedItem(item_name=p.item_name, kind=ItemKind(p.item_kind), bought_at=p.bought_at)
        for p in purchases
    ]
    counts: dict[str, int] = {}
    for item in items:
        counts[item.kind.value] = counts.get(item.kind.value, 0) + 1

    return CollectionResponse(user_id=user_id, coin=user.coin, items=items, counts=counts)


@router.get("/{user_id}/ledger", response_model=LedgerResponse)
async def get_user_ledger(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> LedgerResponse:
    """The user's coin log, oldest first."""
    user = await get_user(session, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' not found",
        )

    entries = await get_coin_log(session, user_id)
    return LedgerResponse(
        user_id=user_id,
        coin=user.coin,
        entries=[
            LedgerEntry(amount=e.amount, reason=e.reason, created_at=e.created_at)
            for e in entries
        ],
    )
