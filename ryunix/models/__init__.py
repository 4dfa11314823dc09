from ryunix.models.banlist import (
    BAN_STATUS_INFO,
    TCG_STATUS_LABELS,
    BanlistEntry,
    BannedCard,
    BanSource,
    BanStatus,
    BanStatusInfo,
)
from ryunix.models.card import CardRecord, card_image_url, card_name
from ryunix.models.catalog import (
    RATING_PRICES,
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
from ryunix.models.failure import (
    ApiResponse,
    DuplicateOwnershipError,
    FailureDetail,
    FailureKind,
    GachaPullFailedError,
    InsufficientFundsError,
    InvalidOverlayMutationError,
    InvalidPullCountError,
    KnownError,
    NotFoundError,
    OutcomeType,
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
from ryunix.models.ledger import EXCLUSIVE_KINDS, ItemKind

__all__ = [
    "ALLOWED_PULL_COUNTS",
    "BAN_STATUS_INFO",
    "DEFAULT_PACKS",
    "EXCLUSIVE_KINDS",
    "RATING_PRICES",
    "TCG_STATUS_LABELS",
    "ApiResponse",
    "BanSource",
    "BanStatus",
    "BanStatusInfo",
    "BanlistEntry",
    "BannedCard",
    "CardRecord",
    "CatalogCategory",
    "CatalogEntry",
    "CatalogItem",
    "CatalogPage",
    "CustomCard",
    "DuplicateOwnershipError",
    "FailureDetail",
    "FailureKind",
    "GachaPackDefinition",
    "GachaPullFailedError",
    "GachaResult",
    "InsufficientFundsError",
    "InvalidOverlayMutationError",
    "InvalidPullCountError",
    "ItemKind",
    "KnownError",
    "ModificationRecord",
    "NotFoundError",
    "OutcomeType",
    "OverlaySnapshot",
    "PackType",
    "PullSummary",
    "Rarity",
    "Rating",
    "card_image_url",
    "card_name",
    "price_for_rating",
    "rarity_for_roll",
]
