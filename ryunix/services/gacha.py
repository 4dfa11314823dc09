"""
Gacha engine.

A pull batch runs in three phases:

1. Pre-flight: validate the tier, load the user, reject an unaffordable pull
   before any directory traffic, and snapshot owned names for `is_new`.
2. Resolution: each pull picks a pool entry, resolves it as an archetype and
   falls back to an exact card name. Unresolvable entries are recorded and
   skipped; they never abort the batch.
3. Settlement: if at least one card resolved, charge the flat tier price
   once, write the ledger entry and record every new card, all in one
   transaction. If nothing resolved the user is not charged.
"""

import logging
import random
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ryunix.db.operations import (
    add_coin_log,
    add_gacha_card,
    gacha_pack_to_model,
    get_gacha_pack,
    get_gacha_packs,
    get_purchases_by_user,
    get_user,
)
from ryunix.models.card import card_name
from ryunix.models.failure import (
    GachaPullFailedError,
    InsufficientFundsError,
    InvalidPullCountError,
    NotFoundError,
)
from ryunix.models.gacha import (
    ALLOWED_PULL_COUNTS,
    DEFAULT_PACKS,
    GachaPackDefinition,
    GachaResult,
    PackType,
    PullSummary,
    Rarity,
    rarity_for_roll,
)
from ryunix.services.card_pool import CardPoolResolver
from ryunix.services.catalog_overlay import CatalogOverlay

logger = logging.getLogger(__name__)


def pull_reason(pack: GachaPackDefinition, pull_count: int) -> str:
    """Ledger reason for a pull batch."""
    return f"Gacha pull: {pack.name} x{pull_count}"


class GachaEngine:
    def __init__(
        self,
        overlay: CatalogOverlay,
        resolver: CardPoolResolver,
        session_factory: async_sessionmaker[AsyncSession],
        rng: random.Random | None = None,
    ) -> None:
        self.overlay = overlay
        self.resolver = resolver
        self._session_factory = session_factory
        self._rng = rng or random.Random()

    async def list_packs(self, include_inactive: bool = False) -> list[GachaPackDefinition]:
        """Built-in packs followed by admin-defined packs."""
        async with self._session_factory() as session:
            rows = await get_gacha_packs(session, active_only=not include_inactive)
        return [*DEFAULT_PACKS, *(gacha_pack_to_model(row) for row in rows)]

    async def get_pack(self, pack_id: str) -> GachaPackDefinition:
        for pack in DEFAULT_PACKS:
            if pack.id == pack_id:
                return pack
        async with self._session_factory() as session:
            row = await get_gacha_pack(session, pack_id)
        if row is None or not row.is_active:
            raise NotFoundError("Pack", pack_id)
        return gacha_pack_to_model(row)

    def roll_rarity(self, pack_type: PackType) -> Rarity:
        return rarity_for_roll(pack_type, self._rng.random())

    async def _resolve_entry(self, entry: str) -> list[dict[str, Any]]:
        cards = await self.resolver.archetype_cards(entry)
        if cards:
            return cards
        # Pool entries may name a single card rather than an archetype
        card = await self.resolver.card_by_name(entry)
        return [card] if card is not None else []

    async def pull(
        self, pack: GachaPackDefinition, pull_count: int, user_id: str
    ) -> PullSummary:
        """
        Run a pull batch for a user.

        Args:
            pack: Pack to pull from
            pull_count: 9 (one pack) or 216 (one box)
            user_id: Paying user

        Returns:
            PullSummary with every resolved card and any failed pool entries

        Raises:
            InvalidPullCountError: If pull_count is not a tier size
            NotFoundError: If the user does not exist
            InsufficientFundsError: If the balance is below the tier price
            GachaPullFailedError: If no pull resolved to a card
        """
        if pull_count not in ALLOWED_PULL_COUNTS:
            raise InvalidPullCountError(pull_count, ALLOWED_PULL_COUNTS)
        cost = pack.cost_for(pull_count)

        async with self._session_factory() as session:
            user = await get_user(session, user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if user.coin < cost:
                raise InsufficientFundsError(user.coin, cost)
            owned = {p.item_name.lower() for p in await get_purchases_by_user(session, user_id)}

        pool = list(pack.card_pool) or self.overlay.archetype_names()
        if not pool:
            raise GachaPullFailedError(pack.name, pull_count)

        results: list[GachaResult] = []
        failed: list[str] = []
        resolved: dict[str, list[dict[str, Any]]] = {}

        for _ in range(pull_count):
            entry = self._rng.choice(pool)
            if entry not in resolved:
                resolved[entry] = await self._resolve_entry(entry)
            candidates = resolved[entry]
            if not candidates:
                failed.append(entry)
                continue

            card = self._rng.choice(candidates)
            rarity = self.roll_rarity(pack.pack_type)
            name = card_name(card)
            results.append(
                GachaResult(
                    card=card,
                    rarity=rarity,
                    is_new=name.lower() not in owned,
                    source_pool_entry=entry,
                )
            )
            logger.debug("Pulled %s (%s) from %s", name, rarity.value, entry)

        if not results:
            logger.error(
                "Gacha pull failed: 0 of %d pulls resolved for %s", pull_count, pack.name
            )
            raise GachaPullFailedError(pack.name, pull_count)

        async with self._session_factory() as session:
            user = await get_user(session, user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            # Balance may have moved while cards were resolving
            if user.coin < cost:
                raise InsufficientFundsError(user.coin, cost)

            user.coin -= cost
            await add_coin_log(session, user_id, -cost, pull_reason(pack, pull_count))

            recorded: set[str] = set()
            new_cards = 0
            for result in results:
                name = card_name(result.card)
                if not name or name in recorded:
                    continue
                recorded.add(name)
                if await add_gacha_card(session, user_id, name):
                    new_cards += 1

            await session.commit()
            balance_after = user.coin

        if failed:
            logger.warning(
                "Partial gacha pull for %s: %d of %d resolved, unresolved entries: %s",
                pack.name,
                len(results),
                pull_count,
                sorted(set(failed)),
            )
        logger.info(
            "User %s pulled %s x%d for %d coins: %d cards, %d new",
            user_id,
            pack.name,
            pull_count,
            cost,
            len(results),
            new_cards,
        )

        return PullSummary(
            pack_id=pack.id,
            requested=pull_count,
            cost=cost,
            balance_after=balance_after,
            results=results,
            failed_entries=failed,
        )
