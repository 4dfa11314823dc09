"""
Card records returned by the external card directory.

Only the fields the service reads are declared; directory payloads carry more.
"""

from typing import Any, TypedDict


class CardImage(TypedDict, total=False):
    id: int
    image_url: str
    image_url_small: str
    image_url_cropped: str


class BanlistInfo(TypedDict, total=False):
    ban_tcg: str
    ban_ocg: str


# A card as served by the directory (YGOPRODeck cardinfo schema).
# Functional form because "def" is a field name.
CardRecord = TypedDict(
    "CardRecord",
    {
        "id": int,
        "name": str,
        "type": str,
        "desc": str,
        "atk": int,
        "def": int,
        "level": int,
        "race": str,
        "attribute": str,
        "archetype": str,
        "card_images": list[CardImage],
        "banlist_info": BanlistInfo,
    },
    total=False,
)


def card_name(card: dict[str, Any]) -> str:
    """Name of a card record, empty string if absent."""
    return str(card.get("name") or "")


def card_image_url(card: dict[str, Any], small: bool = False) -> str | None:
    """First image URL of a card record, if any."""
    images = card.get("card_images") or []
    if not images:
        return None
    key = "image_url_small" if small else "image_url"
    return images[0].get(key) or images[0].get("image_url")
