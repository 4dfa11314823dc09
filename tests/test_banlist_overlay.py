"""Tests for the banlist overlay."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from ryunix.db.operations import get_banlist, upsert_ban
from ryunix.models.banlist import BanlistEntry, BanSource, BanStatus
from ryunix.models.failure import InvalidOverlayMutationError
from ryunix.services.banlist_overlay import BanlistOverlay


@pytest.fixture
def banlist(session_factory) -> BanlistOverlay:
    return BanlistOverlay(session_factory)


class TestReads:
    def test_absent_card_is_unlimited(self, banlist: BanlistOverlay) -> None:
        """Cards with no entry default to unlimited with three copies."""
        assert banlist.get_status("Dark Magician") == BanStatus.UNLIMITED
        assert banlist.allowed_copies("Dark Magician") == 3
        assert banlist.is_banned("Dark Magician") is False

    async def test_load_populates_cache(self, banlist: BanlistOverlay, session_factory) -> None:
        """load() reads every stored entry."""
        async with session_factory() as session:
            await upsert_ban(session, "Pot of Greed", BanStatus.FORBIDDEN, BanSource.TCG)
            await upsert_ban(session, "Graceful Charity", BanStatus.LIMITED)
            await session.commit()

        count = await banlist.load()

        assert count == 2
        assert banlist.is_banned("Pot of Greed")
        assert banlist.allowed_copies("Graceful Charity") == 1
        assert banlist.get_entry("Pot of Greed").source == BanSource.TCG

    async def test_load_failure_fails_open(self, banlist: BanlistOverlay) -> None:
        """A store failure leaves every card unlimited."""
        with patch(
            "ryunix.services.banlist_overlay.get_banlist",
            new_callable=AsyncMock,
            side_effect=OperationalError("SELECT", {}, Exception("down")),
        ):
            count = await banlist.load()

        assert count == 0
        assert banlist.entries() == []
        assert banlist.get_status("Pot of Greed") == BanStatus.UNLIMITED

    async def test_counts(self, banlist: BanlistOverlay) -> None:
        """Counts are reported per non-default status."""
        await banlist.set_status("Pot of Greed", BanStatus.FORBIDDEN)
        await banlist.set_status("Raigeki", BanStatus.FORBIDDEN)
        await banlist.set_status("Monster Reborn", BanStatus.SEMI_LIMITED)

        assert banlist.counts() == {
            BanStatus.FORBIDDEN: 2,
            BanStatus.LIMITED: 0,
            BanStatus.SEMI_LIMITED: 1,
        }


class TestWrites:
    async def test_set_then_reload_round_trip(
        self, banlist: BanlistOverlay, session_factory
    ) -> None:
        """A status set on one overlay is seen by a fresh overlay after load."""
        await banlist.set_status("Pot of Greed", BanStatus.FORBIDDEN)

        fresh = BanlistOverlay(session_factory)
        await fresh.load()

        assert fresh.get_status("Pot of Greed") == BanStatus.FORBIDDEN

    async def test_set_accepts_plain_strings(self, banlist: BanlistOverlay) -> None:
        """Status and source may be given as their string values."""
        entry = await banlist.set_status("Pot of Greed", "forbidden", "manual")

        assert entry.ban_status == BanStatus.FORBIDDEN
        assert entry.source == BanSource.MANUAL
        assert banlist.get_status("Pot of Greed") == BanStatus.FORBIDDEN

        await banlist.unban("Pot of Greed")
        assert banlist.get_status("Pot of Greed") == BanStatus.UNLIMITED

    async def test_unknown_status_rejected(self, banlist: BanlistOverlay) -> None:
        with pytest.raises(InvalidOverlayMutationError):
            await banlist.set_status("Pot of Greed", "banished")
        with pytest.raises(InvalidOverlayMutationError):
            await banlist.set_status("Pot of Greed", "limited", "ocg")

        assert banlist.entries() == []

    async def test_set_unlimited_removes_entry(
        self, banlist: BanlistOverlay, session_factory
    ) -> None:
        """Unlimited is stored as absence."""
        await banlist.set_status("Pot of Greed", BanStatus.LIMITED)

        result = await banlist.set_status("Pot of Greed", BanStatus.UNLIMITED)

        assert result is None
        assert banlist.get_entry("Pot of Greed") is None
        async with session_factory() as session:
            assert await get_banlist(session) == []

    async def test_unban(self, banlist: BanlistOverlay) -> None:
        """unban() reports whether an entry existed."""
        await banlist.set_status("Raigeki", BanStatus.FORBIDDEN)

        assert await banlist.unban("Raigeki") is True
        assert await banlist.unban("Raigeki") is False
        assert banlist.get_status("Raigeki") == BanStatus.UNLIMITED

    async def test_writes_bump_version_and_notify(self, banlist: BanlistOverlay) -> None:
        """Listeners hear about every change."""
        calls: list[int] = []
        banlist.subscribe(lambda: calls.append(banlist.version))

        await banlist.set_status("Raigeki", BanStatus.FORBIDDEN)
        await banlist.unban("Raigeki")

        assert calls == [1, 2]

    async def test_empty_name_rejected(self, banlist: BanlistOverlay) -> None:
        """Blank card names are invalid."""
        with pytest.raises(InvalidOverlayMutationError):
            await banlist.set_status(" ", BanStatus.FORBIDDEN)

    async def test_store_failure_leaves_cache_unchanged(self, banlist: BanlistOverlay) -> None:
        """A rejected write propagates and is not cached."""
        with (
            patch(
                "ryunix.services.banlist_overlay.upsert_ban",
                new_callable=AsyncMock,
                side_effect=OperationalError("INSERT", {}, Exception("down")),
            ),
            pytest.raises(OperationalError),
        ):
            await banlist.set_status("Raigeki", BanStatus.FORBIDDEN)

        assert banlist.get_status("Raigeki") == BanStatus.UNLIMITED


class TestBulkUpdate:
    async def test_bulk_update_tags_source_and_reloads(self, banlist: BanlistOverlay) -> None:
        """Imported entries are stored with the TCG source and cached."""
        applied = await banlist.bulk_update_from_external_source(
            [
                BanlistEntry("Pot of Greed", BanStatus.FORBIDDEN),
                BanlistEntry("Harpie's Feather Duster", BanStatus.LIMITED),
            ]
        )

        assert applied == 2
        assert banlist.is_banned("Pot of Greed")
        assert banlist.get_entry("Harpie's Feather Duster").source == BanSource.TCG

    async def test_bulk_update_keeps_unlisted_entries(self, banlist: BanlistOverlay) -> None:
        """Cards not in the import keep their existing status."""
        await banlist.set_status("Raigeki", BanStatus.SEMI_LIMITED)

        await banlist.bulk_update_from_external_source(
            [BanlistEntry("Pot of Greed", BanStatus.FORBIDDEN)]
        )

        assert banlist.get_status("Raigeki") == BanStatus.SEMI_LIMITED
        assert banlist.get_entry("Raigeki").source == BanSource.MANUAL

    async def test_bulk_update_overrides_manual_status(self, banlist: BanlistOverlay) -> None:
        """An imported status replaces a manual one for the same card."""
        await banlist.set_status("Pot of Greed", BanStatus.LIMITED)

        await banlist.bulk_update_from_external_source(
            [BanlistEntry("Pot of Greed", BanStatus.FORBIDDEN)]
        )

        entry = banlist.get_entry("Pot of Greed")
        assert entry.ban_status == BanStatus.FORBIDDEN
        assert entry.source == BanSource.TCG
