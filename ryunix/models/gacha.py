"""
Gacha domain models.

A pack definition names a card pool (archetype or exact card names) and two
flat tier prices: one for a single pack of 9 pulls, one for a box of 216.
Rarity is display flavor only; it never influences which card is drawn.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ryunix.config import BOX_PULLS, SINGLE_PACK_PULLS


class PackType(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"


class Rarity(str, Enum):
    COMMON = "Common"
    RARE = "Rare"
    SUPER_RARE = "Super Rare"
    ULTRA_RARE = "Ultra Rare"


# Cumulative thresholds, checked in order; anything above the last is Common
RARITY_THRESHOLDS: dict[PackType, list[tuple[float, Rarity]]] = {
    PackType.STANDARD: [
        (0.02, Rarity.ULTRA_RARE),
        (0.10, Rarity.SUPER_RARE),
        (0.30, Rarity.RARE),
    ],
    PackType.PREMIUM: [
        (0.05, Rarity.ULTRA_RARE),
        (0.20, Rarity.SUPER_RARE),
        (0.50, Rarity.RARE),
    ],
}

ALLOWED_PULL_COUNTS = (SINGLE_PACK_PULLS, BOX_PULLS)


def rarity_for_roll(pack_type: PackType, roll: float) -> Rarity:
    """Map a uniform [0, 1) roll to a rarity for the pack tier."""
    for threshold, rarity in RARITY_THRESHOLDS[pack_type]:
        if roll < threshold:
            return rarity
    return Rarity.COMMON


@dataclass
class GachaPackDefinition:
    """
    A pullable pack.

    Attributes:
        id: Pack identifier ("standard"/"premium" for the built-in banners)
        name: Display name
        single_cost: Coin cost of one pack (9 pulls)
        multi_cost: Coin cost of one box (216 pulls)
        pack_type: Rarity table to use
        card_pool: Archetype or exact card names; empty means every archetype
        is_active: Inactive packs are hidden from players
    """

    id: str
    name: str
    single_cost: int
    multi_cost: int
    pack_type: PackType = PackType.STANDARD
    card_pool: list[str] = field(default_factory=list)
    is_active: bool = True
    description: str = ""
    image_url: str | None = None

    def cost_for(self, pull_count: int) -> int:
        """Flat tier price; not scaled by count."""
        return self.single_cost if pull_count == SINGLE_PACK_PULLS else self.multi_cost


DEFAULT_PACKS: list[GachaPackDefinition] = [
    GachaPackDefinition(
        id="standard",
        name="Standard Pack",
        description="Pull random cards from all available archetypes",
        single_cost=4,
        multi_cost=90,
        pack_type=PackType.STANDARD,
        image_url="/common.png",
    ),
    GachaPackDefinition(
        id="premium",
        name="Premium Pack",
        description="Higher chance for rare cards",
        single_cost=5,
        multi_cost=115,
        pack_type=PackType.PREMIUM,
        image_url="/premium.png",
    ),
]


@dataclass
class GachaResult:
    """One pulled card. Not persisted; only its side effects are."""

    card: dict[str, Any]
    rarity: Rarity
    is_new: bool
    source_pool_entry: str


@dataclass
class PullSummary:
    """
    Outcome of a pull batch.

    `failed_entries` lists pool entries that could not be resolved; when it is
    non-empty the user was still charged the full tier price.
    """

    pack_id: str
    requested: int
    cost: int
    balance_after: int
    results: list[GachaResult] = field(default_factory=list)
    failed_entries: list[str] = field(default_factory=list)

    @property
    def fulfilled(self) -> int:
        return len(self.results)

    @property
    def partial(self) -> bool:
        return bool(self.failed_entries)
