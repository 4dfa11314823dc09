"""
Database CRUD operations.

Provides async functions for the overlay snapshot, banlist, card cache,
gacha packs and the economy ledger. Functions flush but never commit;
the caller owns the transaction.
"""

import json
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Text, cast, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ryunix.config import settings
from ryunix.models.banlist import BanlistEntry, BannedCard, BanSource, BanStatus
from ryunix.models.db import (
    BannedCardDB,
    CardDB,
    CardModificationsDB,
    CoinLogDB,
    GachaPackDB,
    PurchaseDB,
    UserDB,
)
from ryunix.models.gacha import GachaPackDefinition, PackType
from ryunix.models.ledger import ItemKind

# Constant key of the single overlay snapshot row
MODIFICATIONS_KEY = "card_mods"

# --- Catalog Overlay Snapshot ---


async def get_modifications(session: AsyncSession) -> dict[str, Any]:
    """
    Get the stored overlay snapshot blob.

    Returns an empty dict if nothing has been persisted yet.
    """
    result = await session.execute(
        select(CardModificationsDB).where(CardModificationsDB.key == MODIFICATIONS_KEY)
    )
    row = result.scalar_one_or_none()
    if row is None:
        return {}
    return dict(row.data or {})


async def upsert_modifications(
    session: AsyncSession,
    data: dict[str, Any],
    updated_by: str | None = None,
) -> CardModificationsDB:
    """Insert or replace the overlay snapshot blob."""
    result = await session.execute(
        select(CardModificationsDB).where(CardModificationsDB.key == MODIFICATIONS_KEY)
    )
    existing = result.scalar_one_or_none()

    if existing:
        existing.data = data
        existing.updated_by = updated_by
        await session.flush()
        return existing

    row = CardModificationsDB(key=MODIFICATIONS_KEY, data=data, updated_by=updated_by)
    session.add(row)
    await session.flush()
    return row


# --- Banlist Operations ---


async def get_banlist(session: AsyncSession) -> list[BannedCardDB]:
    """Get every banlist row."""
    result = await session.execute(select(BannedCardDB).order_by(BannedCardDB.card_name))
    return list(result.scalars().all())


async def get_banned_card(session: AsyncSession, card_name: str) -> BannedCardDB | None:
    """Get a banlist row by card name."""
    result = await session.execute(
        select(BannedCardDB).where(BannedCardDB.card_name == card_name)
    )
    return result.scalar_one_or_none()


async def upsert_ban(
    session: AsyncSession,
    card_name: str,
    status: BanStatus,
    source: BanSource = BanSource.MANUAL,
) -> BannedCardDB:
    """
    Insert or update a banlist row.

    Callers must not pass UNLIMITED; that status is stored as absence.
    """
    if status == BanStatus.UNLIMITED:
        raise ValueError("Unlimited is the default status and is never stored")

    now = datetime.now(UTC)
    existing = await get_banned_card(session, card_name)
    if existing:
        existing.ban_status = status.value
        existing.source = source.value
        existing.last_updated = now
        await session.flush()
        return existing

    row = BannedCardDB(
        card_name=card_name,
        ban_status=status.value,
        source=source.value,
        last_updated=now,
    )
    session.add(row)
    await session.flush()
    return row


async def upsert_bans(
    session: AsyncSession,
    entries: list[BanlistEntry],
    source: BanSource = BanSource.TCG,
) -> int:
    """
    Upsert many banlist rows in one transaction.

    Unlimited entries delete any existing row. Returns the number of entries applied.
    """
    for entry in entries:
        if entry.status == BanStatus.UNLIMITED:
            await delete_ban(session, entry.name)
        else:
            await upsert_ban(session, entry.name, entry.status, source)
    return len(entries)


async def delete_ban(session: AsyncSession, card_name: str) -> bool:
    """
    Delete a banlist row.

    Returns True if a row was deleted.
    """
    result = await session.execute(
        delete(BannedCardDB).where(BannedCardDB.card_name == card_name)
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


def banned_card_to_model(row: BannedCardDB) -> BannedCard:
    """Convert a banlist row to a domain model."""
    return BannedCard(
        card_name=row.card_name,
        ban_status=BanStatus(row.ban_status),
        last_updated=row.last_updated.isoformat() if row.last_updated else "",
        source=BanSource(row.source),
    )


# --- Card Cache Operations ---


async def get_card(session: AsyncSession, name: str) -> CardDB | None:
    """Get a cached card by name, case-insensitively."""
    result = await session.execute(
        select(CardDB).where(func.lower(CardDB.name) == name.lower()).limit(1)
    )
    return result.scalar_one_or_none()


async def get_cards_by_archetype(
    session: AsyncSession, archetype: str, limit: int = 200
) -> list[CardDB]:
    """Get cached cards tagged with an archetype."""
    # JSON list stored as text; match the serialized element to stay portable
    needle = json.dumps(archetype)
    result = await session.execute(
        select(CardDB)
        .where(cast(CardDB.archetypes, Text).contains(needle, autoescape=True))
        .order_by(CardDB.name)
        .limit(limit)
    )
    return [row for row in result.scalars().all() if archetype in (row.archetypes or [])]


async def upsert_cards(
    session: AsyncSession,
    cards: list[dict[str, Any]],
    archetype: str | None = None,
) -> int:
    """
    Cache directory card records.

    Existing rows get their data replaced and `archetype` merged into their
    tags. Only an explicit `archetype` tags a row: a tag means the row came
    from a full archetype fetch. Returns the number of cards stored.
    """
    stored = 0
    for card in cards:
        name = card.get("name")
        if not name:
            continue
        tags = {archetype} if archetype else set()

        existing = await get_card(session, name)
        if existing:
            existing.data = card
            merged = list(existing.archetypes or [])
            merged.extend(sorted(tags - set(merged)))
            existing.archetypes = merged
        else:
            session.add(CardDB(name=name, data=card, archetypes=sorted(tags)))
        stored += 1

    await session.flush()
    return stored


async def remove_archetype_from_card(session: AsyncSession, name: str, archetype: str) -> bool:
    """
    Drop an archetype tag from a cached card.

    Returns True if the tag was present.
    """
    existing = await get_card(session, name)
    if not existing or archetype not in (existing.archetypes or []):
        return False
    existing.archetypes = [a for a in existing.archetypes if a != archetype]
    await session.flush()
    return True


# --- Gacha Pack Operations ---


async def get_gacha_packs(session: AsyncSession, active_only: bool = False) -> list[GachaPackDB]:
    """Get gacha packs, newest first."""
    query = select(GachaPackDB)
    if active_only:
        query = query.where(GachaPackDB.is_active.is_(True))
    result = await session.execute(query.order_by(GachaPackDB.created_at.desc()))
    return list(result.scalars().all())


async def get_gacha_pack(session: AsyncSession, pack_id: str) -> GachaPackDB | None:
    """Get a gacha pack by id."""
    return await session.get(GachaPackDB, pack_id)


async def create_gacha_pack(session: AsyncSession, pack: GachaPackDefinition) -> GachaPackDB:
    """Create a gacha pack. The definition's id is ignored; a new one is assigned."""
    row = GachaPackDB(
        name=pack.name,
        description=pack.description,
        pack_type=pack.pack_type.value,
        single_cost=pack.single_cost,
        multi_cost=pack.multi_cost,
        image_url=pack.image_url,
        cards_archetypes=list(pack.card_pool),
        is_active=pack.is_active,
    )
    session.add(row)
    await session.flush()
    return row


_PACK_FIELDS = frozenset(
    {
        "name",
        "description",
        "pack_type",
        "single_cost",
        "multi_cost",
        "image_url",
        "cards_archetypes",
        "is_active",
    }
)


async def update_gacha_pack(
    session: AsyncSession, pack_id: str, updates: dict[str, Any]
) -> GachaPackDB | None:
    """
    Update columns of a gacha pack.

    Returns None if the pack does not exist.
    """
    unknown = set(updates) - _PACK_FIELDS
    if unknown:
        raise ValueError(f"Unknown gacha pack fields: {sorted(unknown)}")

    row = await get_gacha_pack(session, pack_id)
    if row is None:
        return None

    for key, value in updates.items():
        if isinstance(value, PackType):
            value = value.value
        setattr(row, key, value)
    await session.flush()
    return row


async def delete_gacha_pack(session: AsyncSession, pack_id: str) -> bool:
    """
    Delete a gacha pack.

    Returns True if deleted, False if not found.
    """
    row = await get_gacha_pack(session, pack_id)
    if row is None:
        return False
    await session.delete(row)
    await session.flush()
    return True


def gacha_pack_to_model(row: GachaPackDB) -> GachaPackDefinition:
    """Convert a gacha pack row to a domain model."""
    return GachaPackDefinition(
        id=row.id,
        name=row.name,
        description=row.description or "",
        single_cost=row.single_cost,
        multi_cost=row.multi_cost,
        pack_type=PackType(row.pack_type),
        card_pool=list(row.cards_archetypes or []),
        is_active=row.is_active,
        image_url=row.image_url,
    )


# --- Ledger Operations ---


async def get_user(session: AsyncSession, user_id: str) -> UserDB | None:
    """Get a user by id."""
    return await session.get(UserDB, user_id)


async def get_user_by_username(session: AsyncSession, username: str) -> UserDB | None:
    """Get a user by username."""
    result = await session.execute(select(UserDB).where(UserDB.username == username))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    username: str,
    coin: int | None = None,
    is_admin: bool = False,
    password_hash: str = "",
) -> UserDB:
    """
    Create a user.

    New users get the configured starting balance unless `coin` is given.
    Raises IntegrityError if the username is taken.
    """
    if coin is None:
        coin = settings.starting_coins
    user = UserDB(username=username, coin=coin, is_admin=is_admin, password_hash=password_hash)
    session.add(user)
    await session.flush()
    return user


async def add_coin_log(session: AsyncSession, user_id: str, amount: int, reason: str) -> CoinLogDB:
    """Append a ledger entry."""
    entry = CoinLogDB(user_id=user_id, amount=amount, reason=reason)
    session.add(entry)
    await session.flush()
    return entry


async def get_coin_log(session: AsyncSession, user_id: str) -> list[CoinLogDB]:
    """Get a user's ledger entries, oldest first."""
    result = await session.execute(
        select(CoinLogDB).where(CoinLogDB.user_id == user_id).order_by(CoinLogDB.id)
    )
    return list(result.scalars().all())


async def get_purchases_by_user(session: AsyncSession, user_id: str) -> list[PurchaseDB]:
    """Get a user's ownership records, oldest first."""
    result = await session.execute(
        select(PurchaseDB).where(PurchaseDB.user_id == user_id).order_by(PurchaseDB.id)
    )
    return list(result.scalars().all())


async def get_purchase(session: AsyncSession, user_id: str, item_name: str) -> PurchaseDB | None:
    """Get a single ownership record."""
    result = await session.execute(
        select(PurchaseDB).where(
            PurchaseDB.user_id == user_id,
            PurchaseDB.item_name == item_name,
        )
    )
    return result.scalar_one_or_none()


async def insert_purchase(
    session: AsyncSession, user_id: str, item_name: str, kind: ItemKind
) -> PurchaseDB:
    """
    Insert an ownership record.

    Raises IntegrityError if the user already owns the item.
    """
    purchase = PurchaseDB(user_id=user_id, item_name=item_name, item_kind=kind.value)
    session.add(purchase)
    await session.flush()
    return purchase


async def add_gacha_card(session: AsyncSession, user_id: str, card_name: str) -> bool:
    """
    Record a pulled card as owned.

    Returns False when the user already owns the card; repeats are harmless.
    """
    if await get_purchase(session, user_id, card_name):
        return False

    await insert_purchase(session, user_id, card_name, ItemKind.GACHA)
    return True
