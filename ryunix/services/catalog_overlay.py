"""
Catalog overlay.

Holds the static base catalog plus three mutable layers:

- per-item ModificationRecords (rating, price, display name, image,
  custom cards, excluded cards, removed flag)
- admin-added staple entries
- names of base staples the admin removed

Reads merge the layers over the base data; every write goes through
`_changed()`, which bumps the version and notifies listeners synchronously.
Nothing here awaits, so a mutation is atomic from the caller's point of view.
The overlay never throws for unknown names, only for structurally invalid input.
"""

import copy
import logging
import math
from collections.abc import Callable, Iterable
from typing import Any

from ryunix.config import CATALOG_PAGE_SIZE
from ryunix.data.catalog import ARCHETYPE_DECKS, STAPLE_CARDS
from ryunix.models.card import card_image_url
from ryunix.models.catalog import (
    CatalogCategory,
    CatalogEntry,
    CatalogItem,
    CatalogPage,
    CustomCard,
    ModificationRecord,
    OverlaySnapshot,
    Rating,
    price_for_rating,
)
from ryunix.models.failure import InvalidOverlayMutationError

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

SORT_OPTIONS = ("name", "price-asc", "price-desc", "rating")


def _require_name(name: Any, what: str = "Name") -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidOverlayMutationError(f"{what} cannot be empty")
    return name


def _require_rating(rating: Any) -> Rating:
    try:
        return Rating(rating)
    except ValueError as e:
        raise InvalidOverlayMutationError(f"Unknown rating: {rating!r}") from e


class CatalogOverlay:
    """Merged view of the base catalog and admin modifications."""

    def __init__(
        self,
        archetypes: Iterable[CatalogItem] | None = None,
        staples: Iterable[CatalogItem] | None = None,
    ) -> None:
        self._base_archetypes = list(ARCHETYPE_DECKS if archetypes is None else archetypes)
        self._base_staples = list(STAPLE_CARDS if staples is None else staples)
        self._base_staple_names = {s.name for s in self._base_staples}

        self._records: dict[str, ModificationRecord] = {}
        self._custom_staples: list[CatalogItem] = []
        self._removed_staples: set[str] = set()

        self._version = 0
        self._listeners: list[Listener] = []
        self._effective_staples: list[CatalogItem] | None = None

    # --- Versioning and listeners ---

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self._effective_staples = None
        self._version += 1
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Catalog overlay listener failed")

    def _record_for(self, name: str) -> ModificationRecord:
        record = self._records.get(name)
        if record is None:
            record = ModificationRecord()
            self._records[name] = record
        return record

    # --- Merged reads ---

    @property
    def base_archetypes(self) -> list[CatalogItem]:
        return list(self._base_archetypes)

    @property
    def base_staples(self) -> list[CatalogItem]:
        return list(self._base_staples)

    def record(self, name: str) -> ModificationRecord | None:
        """Copy of the modification record for a name, if any."""
        record = self._records.get(name)
        return copy.deepcopy(record) if record is not None else None

    def get_display_name(self, item: CatalogItem) -> str:
        record = self._records.get(item.name)
        if record and record.display_name is not None:
            return record.display_name
        return item.name

    def get_rating(self, item: CatalogItem) -> Rating:
        record = self._records.get(item.name)
        if record and record.rating is not None:
            return record.rating
        return item.rating

    def get_price(self, item: CatalogItem) -> int:
        record = self._records.get(item.name)
        if record and record.price is not None:
            return record.price
        return item.price

    def get_image_url(self, item: CatalogItem) -> str | None:
        record = self._records.get(item.name)
        if record and record.image_url is not None:
            return record.image_url
        return item.image_url

    def is_removed(self, item: CatalogItem | str) -> bool:
        name = item if isinstance(item, str) else item.name
        record = self._records.get(name)
        return bool(record and record.is_removed)

    def effective(self, item: CatalogItem) -> CatalogEntry:
        """All merged fields of an item."""
        return CatalogEntry(
            name=item.name,
            display_name=self.get_display_name(item),
            rating=self.get_rating(item),
            price=self.get_price(item),
            image_url=self.get_image_url(item),
        )

    def get_effective_archetypes(self) -> list[CatalogItem]:
        return [a for a in self._base_archetypes if not self.is_removed(a)]

    def archetype_names(self) -> list[str]:
        """Names of every archetype still listed."""
        return [a.name for a in self.get_effective_archetypes()]

    def get_effective_staples(self) -> list[CatalogItem]:
        """(base staples - removed staples) + custom staples, minus soft-removed items."""
        if self._effective_staples is None:
            staples = [
                s
                for s in self._base_staples
                if s.name not in self._removed_staples and not self.is_removed(s)
            ]
            seen = {s.name for s in staples}
            for custom in self._custom_staples:
                if custom.name in seen or custom.name in self._removed_staples:
                    continue
                if self.is_removed(custom):
                    continue
                staples.append(custom)
                seen.add(custom.name)
            self._effective_staples = staples
        return list(self._effective_staples)

    def custom_staples(self) -> list[CatalogItem]:
        return list(self._custom_staples)

    def removed_staples(self) -> set[str]:
        return set(self._removed_staples)

    def custom_cards(self, archetype: str) -> list[CustomCard]:
        record = self._records.get(archetype)
        if not record or not record.custom_cards:
            return []
        return copy.deepcopy(record.custom_cards)

    def excluded_cards(self, archetype: str) -> set[str]:
        record = self._records.get(archetype)
        if not record or not record.excluded_cards:
            return set()
        return set(record.excluded_cards)

    def find_item(
        self, name: str, category: CatalogCategory | None = None
    ) -> CatalogItem | None:
        """
        Find a listed (not removed) item by key name.

        Searches archetypes, staples or both depending on `category`.
        """
        pools: list[list[CatalogItem]] = []
        if category in (None, CatalogCategory.DECKS):
            pools.append(self.get_effective_archetypes())
        if category in (None, CatalogCategory.STAPLES):
            pools.append(self.get_effective_staples())
        for pool in pools:
            for item in pool:
                if item.name == name:
                    return item
        return None

    def browse(
        self,
        category: CatalogCategory,
        search: str | None = None,
        rating: Rating | None = None,
        sort_by: str = "name",
        page: int = 1,
        per_page: int = CATALOG_PAGE_SIZE,
    ) -> CatalogPage:
        """
        Filtered, sorted, paginated listing of effective items.

        Removed items never appear. Search matches the display name
        case-insensitively; rating filters on the effective rating.
        """
        if sort_by not in SORT_OPTIONS:
            raise ValueError(f"Invalid sort: {sort_by}. Must be one of {SORT_OPTIONS}")
        if per_page < 1:
            raise ValueError("per_page must be positive")

        items = (
            self.get_effective_archetypes()
            if category == CatalogCategory.DECKS
            else self.get_effective_staples()
        )
        entries = [self.effective(item) for item in items]

        if search:
            needle = search.strip().lower()
            entries = [e for e in entries if needle in e.display_name.lower()]
        if rating is not None:
            entries = [e for e in entries if e.rating == rating]

        if sort_by == "name":
            entries.sort(key=lambda e: e.display_name.lower())
        elif sort_by == "price-asc":
            entries.sort(key=lambda e: (e.price, e.display_name.lower()))
        elif sort_by == "price-desc":
            entries.sort(key=lambda e: (-e.price, e.display_name.lower()))
        else:
            entries.sort(key=lambda e: (-e.rating.rank, e.display_name.lower()))

        total = len(entries)
        pages = max(1, math.ceil(total / per_page))
        page = min(max(page, 1), pages)
        start = (page - 1) * per_page
        return CatalogPage(
            items=entries[start : start + per_page],
            total=total,
            page=page,
            pages=pages,
        )

    # --- Mutations ---

    def set_rating(self, name: str, rating: Rating | str) -> None:
        """Override the rating and reset the price from the rating table."""
        _require_name(name)
        value = _require_rating(rating)
        record = self._record_for(name)
        record.rating = value
        record.price = price_for_rating(value)
        self._changed()

    def set_price(self, name: str, price: int) -> None:
        _require_name(name)
        if isinstance(price, bool) or not isinstance(price, int) or price < 0:
            raise InvalidOverlayMutationError(f"Price must be a non-negative integer: {price!r}")
        self._record_for(name).price = price
        self._changed()

    def set_display_name(self, name: str, display_name: str | None) -> None:
        """Rename an item for display. None clears the override."""
        _require_name(name)
        if display_name is not None:
            display_name = _require_name(display_name, "Display name").strip()
        self._record_for(name).display_name = display_name
        self._changed()

    def set_image_url(self, name: str, image_url: str | None) -> None:
        """Override an item's artwork. None clears the override."""
        _require_name(name)
        if image_url is not None:
            image_url = _require_name(image_url, "Image URL")
        self._record_for(name).image_url = image_url
        self._changed()

    def mark_removed(self, name: str) -> None:
        """Soft-delete: hide the item from listings, keep its overrides."""
        _require_name(name)
        self._record_for(name).is_removed = True
        self._changed()

    def restore(self, name: str) -> None:
        _require_name(name)
        record = self._records.get(name)
        if record is None or not record.is_removed:
            return
        record.is_removed = False
        self._changed()

    def add_custom_card_to_archetype(
        self, archetype: str, card: str | dict[str, Any]
    ) -> bool:
        """
        Attach a card to an archetype's pool.

        Idempotent by card name. Clears any earlier exclusion of the same card.
        Returns True if the overlay changed.
        """
        _require_name(archetype, "Archetype name")
        if isinstance(card, str):
            custom = CustomCard(name=_require_name(card, "Card name"))
        else:
            custom = CustomCard(name=_require_name(card.get("name"), "Card name"), data=dict(card))

        record = self._record_for(archetype)
        changed = False
        if record.excluded_cards and custom.name in record.excluded_cards:
            record.excluded_cards = [n for n in record.excluded_cards if n != custom.name]
            changed = True

        existing = record.custom_cards or []
        if not any(c.name == custom.name for c in existing):
            record.custom_cards = [*existing, custom]
            changed = True

        if changed:
            self._changed()
        return changed

    def remove_card_from_archetype(self, archetype: str, card_name: str) -> bool:
        """
        Remove a card from an archetype's resolved pool.

        Custom cards are dropped from `custom_cards`; cards from the directory
        backed base pool are recorded in `excluded_cards`. Returns True if the
        card was a custom card.
        """
        _require_name(archetype, "Archetype name")
        _require_name(card_name, "Card name")

        record = self._record_for(archetype)
        custom = record.custom_cards or []
        remaining = [c for c in custom if c.name != card_name]
        was_custom = len(remaining) != len(custom)

        if was_custom:
            record.custom_cards = remaining
        else:
            excluded = record.excluded_cards or []
            if card_name not in excluded:
                record.excluded_cards = [*excluded, card_name]

        self._changed()
        return was_custom

    def add_custom_staple(self, card: str | dict[str, Any], rating: Rating | str) -> None:
        """
        List a card as a staple.

        Re-adding a removed base staple lifts the removal instead of creating a
        duplicate custom entry, so no name is ever both custom and removed.
        """
        if isinstance(card, str):
            name, image_url = _require_name(card), None
        else:
            name, image_url = _require_name(card.get("name")), card_image_url(card, small=True)
        value = _require_rating(rating)

        if name in self._base_staple_names:
            self._removed_staples.discard(name)
            record = self._record_for(name)
            record.rating = value
            record.price = price_for_rating(value)
            record.is_removed = False
        else:
            item = CatalogItem(
                name=name, rating=value, price=price_for_rating(value), image_url=image_url
            )
            self._custom_staples = [s for s in self._custom_staples if s.name != name]
            self._custom_staples.append(item)
            self._removed_staples.discard(name)
            if name in self._records:
                self._records[name].is_removed = False

        self._changed()

    def remove_staple(self, name: str) -> None:
        """Unlist a staple: drop a custom entry, or record a base staple as removed."""
        _require_name(name)
        if any(s.name == name for s in self._custom_staples):
            self._custom_staples = [s for s in self._custom_staples if s.name != name]
        elif name in self._base_staple_names:
            self._removed_staples.add(name)
        else:
            logger.debug("remove_staple: %s is not a staple", name)
            return
        self._changed()

    # --- Snapshot ---

    def snapshot(self) -> OverlaySnapshot:
        """Deep copy of all mutable layers."""
        return OverlaySnapshot(
            archetypes=copy.deepcopy(self._records),
            custom_staples=list(self._custom_staples),
            removed_staples=sorted(self._removed_staples),
        )

    def load_snapshot(self, snapshot: OverlaySnapshot) -> None:
        """Replace every mutable layer wholesale."""
        self._records = copy.deepcopy(snapshot.archetypes)
        self._custom_staples = list(snapshot.custom_staples)
        self._removed_staples = set(snapshot.removed_staples)
        self._changed()
