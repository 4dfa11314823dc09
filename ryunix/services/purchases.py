"""
Catalog purchases.

Buying a deck or staple charges its effective price, writes one ownership
row and one ledger entry. Both economic checks run before any write.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ryunix.db.operations import add_coin_log, get_purchase, get_user, insert_purchase
from ryunix.models.catalog import CatalogCategory
from ryunix.models.failure import DuplicateOwnershipError, InsufficientFundsError, NotFoundError
from ryunix.models.ledger import EXCLUSIVE_KINDS, ItemKind
from ryunix.services.catalog_overlay import CatalogOverlay

logger = logging.getLogger(__name__)

_KIND_BY_CATEGORY = {
    CatalogCategory.DECKS: ItemKind.DECK,
    CatalogCategory.STAPLES: ItemKind.STAPLE,
}


@dataclass
class PurchaseReceipt:
    item_name: str
    display_name: str
    kind: ItemKind
    price: int
    balance_after: int


async def purchase_catalog_item(
    session: AsyncSession,
    overlay: CatalogOverlay,
    user_id: str,
    item_name: str,
    category: CatalogCategory,
) -> PurchaseReceipt:
    """
    Buy a listed catalog item.

    Args:
        session: Database session; the caller commits
        overlay: Source of the effective price and display name
        user_id: Buyer
        item_name: Catalog key name of the item
        category: Shop section the item is listed in

    Returns:
        PurchaseReceipt with the new balance

    Raises:
        NotFoundError: If the user or a listed item does not exist
        InsufficientFundsError: If the balance is below the effective price
        DuplicateOwnershipError: If the user already owns the item
    """
    item = overlay.find_item(item_name, category)
    if item is None:
        raise NotFoundError("Item", item_name)

    user = await get_user(session, user_id)
    if user is None:
        raise NotFoundError("User", user_id)

    entry = overlay.effective(item)
    if user.coin < entry.price:
        raise InsufficientFundsError(user.coin, entry.price)
    kind = _KIND_BY_CATEGORY[category]
    if kind in EXCLUSIVE_KINDS and await get_purchase(session, user_id, item.name):
        raise DuplicateOwnershipError(item.name)

    await insert_purchase(session, user_id, item.name, kind)
    user.coin -= entry.price
    await add_coin_log(session, user_id, -entry.price, f"Purchased {entry.display_name}")

    logger.info(
        "User %s purchased %s %s for %d coins", user_id, kind.value, item.name, entry.price
    )
    return PurchaseReceipt(
        item_name=item.name,
        display_name=entry.display_name,
        kind=kind,
        price=entry.price,
        balance_after=user.coin,
    )
