"""
Catalog domain models.

Base catalog items are immutable static data. Admin edits live in
ModificationRecords keyed by base item name; an absent field means
"inherit from the base item", a present field means "override".
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Rating(str, Enum):
    """Meta rating, ordered F < D < C < B < A < S < S+."""

    F = "F"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"
    S_PLUS = "S+"

    @property
    def rank(self) -> int:
        return _RATING_ORDER.index(self)


_RATING_ORDER = list(Rating)

RATING_PRICES: dict[Rating, int] = {
    Rating.F: 0,
    Rating.D: 10,
    Rating.C: 25,
    Rating.B: 50,
    Rating.A: 100,
    Rating.S: 200,
    Rating.S_PLUS: 400,
}


def price_for_rating(rating: Rating) -> int:
    """Fixed shop price for a rating."""
    return RATING_PRICES[rating]


class CatalogCategory(str, Enum):
    """Shop sections."""

    DECKS = "decks"
    STAPLES = "staples"


@dataclass(frozen=True)
class CatalogItem:
    """
    A shop entry: an archetype deck or a staple card.

    Attributes:
        name: Unique key across all overlays
        rating: Meta rating
        price: Coin price, derived from rating unless overridden
        image_url: Optional artwork URL
    """

    name: str
    rating: Rating
    price: int
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "rating": self.rating.value,
            "price": self.price,
        }
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogItem":
        rating = Rating(data.get("rating", Rating.C.value))
        price = data.get("price")
        return cls(
            name=str(data["name"]),
            rating=rating,
            price=int(price) if price is not None else price_for_rating(rating),
            image_url=data.get("imageUrl"),
        )


@dataclass
class CustomCard:
    """A card an admin attached to an archetype pool, optionally with full card data."""

    name: str
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.data is None:
            return {"name": self.name}
        return {"name": self.name, "data": self.data}

    @classmethod
    def from_value(cls, value: Any) -> "CustomCard":
        # Older snapshots stored bare card names
        if isinstance(value, str):
            return cls(name=value)
        return cls(name=str(value["name"]), data=value.get("data"))


@dataclass
class ModificationRecord:
    """Per-item overrides layered over a base catalog item."""

    rating: Rating | None = None
    price: int | None = None
    display_name: str | None = None
    image_url: str | None = None
    custom_cards: list[CustomCard] | None = None
    excluded_cards: list[str] | None = None
    is_removed: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.rating is not None:
            data["rating"] = self.rating.value
        if self.price is not None:
            data["price"] = self.price
        if self.display_name is not None:
            data["displayName"] = self.display_name
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        if self.custom_cards is not None:
            data["customCards"] = [c.to_dict() for c in self.custom_cards]
        if self.excluded_cards is not None:
            data["excludedCards"] = list(self.excluded_cards)
        if self.is_removed:
            data["is_removed"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModificationRecord":
        rating = data.get("rating")
        price = data.get("price")
        custom = data.get("customCards")
        excluded = data.get("excludedCards")
        return cls(
            rating=Rating(rating) if rating is not None else None,
            price=int(price) if price is not None else None,
            display_name=data.get("displayName"),
            image_url=data.get("imageUrl"),
            custom_cards=[CustomCard.from_value(c) for c in custom] if custom is not None else None,
            excluded_cards=[str(n) for n in excluded] if excluded is not None else None,
            is_removed=bool(data.get("is_removed", False)),
        )


@dataclass
class OverlaySnapshot:
    """The unit of persistence for all catalog overlay layers."""

    archetypes: dict[str, ModificationRecord] = field(default_factory=dict)
    custom_staples: list[CatalogItem] = field(default_factory=list)
    removed_staples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "archetypes": {name: rec.to_dict() for name, rec in self.archetypes.items()},
            "customStaples": [s.to_dict() for s in self.custom_staples],
            "removedStaples": list(self.removed_staples),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "OverlaySnapshot":
        """
        Parse a stored blob.

        Missing or malformed sections load as empty; individual records and
        staples that fail to parse are skipped.
        """
        if not data:
            return cls()

        archetypes_raw = data.get("archetypes")
        staples_raw = data.get("customStaples")
        removed_raw = data.get("removedStaples")

        archetypes = {}
        if isinstance(archetypes_raw, dict):
            for name, rec in archetypes_raw.items():
                if not isinstance(rec, dict):
                    continue
                try:
                    archetypes[str(name)] = ModificationRecord.from_dict(rec)
                except (KeyError, TypeError, ValueError):
                    logger.warning("Skipping malformed modification record for %s", name)

        custom_staples = []
        if isinstance(staples_raw, list):
            for staple in staples_raw:
                if not isinstance(staple, dict):
                    continue
                try:
                    custom_staples.append(CatalogItem.from_dict(staple))
                except (KeyError, TypeError, ValueError):
                    logger.warning("Skipping malformed custom staple: %r", staple)

        return cls(
            archetypes=archetypes,
            custom_staples=custom_staples,
            removed_staples=(
                [str(n) for n in removed_raw] if isinstance(removed_raw, list) else []
            ),
        )


@dataclass(frozen=True)
class CatalogEntry:
    """Effective (merged) view of a catalog item."""

    name: str
    display_name: str
    rating: Rating
    price: int
    image_url: str | None = None


@dataclass
class CatalogPage:
    """One page of a filtered, sorted catalog listing."""

    items: list[CatalogEntry]
    total: int
    page: int
    pages: int
