from enum import Enum


class ItemKind(str, Enum):
    """What a purchase/ownership row represents."""

    DECK = "Deck"
    STAPLE = "Staple"
    # No flow sells bundles yet; the value keeps existing ledger rows readable
    BUNDLE = "Bundle"
    GACHA = "Gacha"


# Kinds where owning the item twice is an error rather than a harmless repeat
EXCLUSIVE_KINDS = frozenset({ItemKind.DECK, ItemKind.STAPLE, ItemKind.BUNDLE})
