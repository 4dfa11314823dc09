from dataclasses import dataclass
from enum import Enum


class BanStatus(str, Enum):
    FORBIDDEN = "forbidden"
    LIMITED = "limited"
    SEMI_LIMITED = "semi-limited"
    UNLIMITED = "unlimited"


class BanSource(str, Enum):
    """tcg = imported from the official list, manual = admin override."""

    TCG = "tcg"
    MANUAL = "manual"


@dataclass(frozen=True)
class BanStatusInfo:
    copies: int
    label: str


BAN_STATUS_INFO: dict[BanStatus, BanStatusInfo] = {
    BanStatus.FORBIDDEN: BanStatusInfo(copies=0, label="Forbidden"),
    BanStatus.LIMITED: BanStatusInfo(copies=1, label="Limited"),
    BanStatus.SEMI_LIMITED: BanStatusInfo(copies=2, label="Semi-Limited"),
    BanStatus.UNLIMITED: BanStatusInfo(copies=3, label="Unlimited"),
}

# Directory banlist_info.ban_tcg values
TCG_STATUS_LABELS: dict[str, BanStatus] = {
    "Forbidden": BanStatus.FORBIDDEN,
    "Limited": BanStatus.LIMITED,
    "Semi-Limited": BanStatus.SEMI_LIMITED,
}


@dataclass(frozen=True)
class BannedCard:
    """
    A banlist row.

    Unlimited is the default and is never stored; absence means unlimited.
    """

    card_name: str
    ban_status: BanStatus
    last_updated: str
    source: BanSource = BanSource.MANUAL


@dataclass(frozen=True)
class BanlistEntry:
    """One status assignment from an external source."""

    name: str
    status: BanStatus
