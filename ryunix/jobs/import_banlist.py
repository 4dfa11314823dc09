"""
Scheduled job to import the official TCG banlist.

Fetches every card on the TCG list from the card directory and applies the
statuses to the banlist store in one transaction. Cards dropped from the
official list keep their stored status; unban them by hand.
Can be run as a standalone script or called from the admin API.
"""

import asyncio
import logging
from typing import Any

from ryunix.db.database import async_session_factory
from ryunix.models.banlist import TCG_STATUS_LABELS, BanlistEntry
from ryunix.services.banlist_overlay import BanlistOverlay
from ryunix.services.card_directory import CardDirectoryClient, DirectoryLookupError

logger = logging.getLogger(__name__)


def parse_tcg_banlist(cards: list[dict[str, Any]]) -> list[BanlistEntry]:
    """
    Map directory records to banlist entries.

    Cards without a recognised `banlist_info.ban_tcg` value are skipped.
    """
    entries: list[BanlistEntry] = []
    for card in cards:
        name = card.get("name")
        label = (card.get("banlist_info") or {}).get("ban_tcg")
        status = TCG_STATUS_LABELS.get(label) if label else None
        if not name or status is None:
            continue
        entries.append(BanlistEntry(name=name, status=status))
    return entries


async def run_banlist_import(
    banlist: BanlistOverlay | None = None,
    directory: CardDirectoryClient | None = None,
) -> int:
    """
    Import the TCG banlist.

    Args:
        banlist: Overlay to update; a fresh one on the default store if None
        directory: Directory client; a default client if None

    Returns:
        Number of entries applied, 0 if the directory could not be read
    """
    banlist = banlist or BanlistOverlay(async_session_factory)
    directory = directory or CardDirectoryClient()

    logger.info("Fetching TCG banlist...")
    try:
        cards = await directory.tcg_banlist()
    except DirectoryLookupError as e:
        logger.error("Error fetching TCG banlist: %s", e)
        return 0

    entries = parse_tcg_banlist(cards)
    logger.info("Fetched %d banlist entries", len(entries))

    count = await banlist.bulk_update_from_external_source(entries)
    logger.info("Banlist import complete. Entries applied: %d", count)
    return count


def main() -> None:
    """CLI entry point for running the banlist import."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_banlist_import())


if __name__ == "__main__":
    main()
