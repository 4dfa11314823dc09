"""
Failure classification for the economy service.

Every failure that can reach an API caller is a KnownError subclass with a
FailureKind and an HTTP status. Economic-invariant failures are raised before
any side effect; directory and persistence failures are absorbed by the
services that call those collaborators and never reach this layer.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    # Nothing usable came back, e.g. a pull where no entry resolved
    EMPTY_RESULT = "empty_result"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    DUPLICATE_OWNERSHIP = "duplicate_ownership"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"


class FailureDetail(BaseModel):
    kind: FailureKind
    message: str = Field(..., description="Shown to the user as is")
    detail: str | None = None
    suggestion: str | None = Field(
        default=None, description="e.g. whether coins were spent"
    )


class ApiResponse(BaseModel):
    """Error envelope returned for every KnownError."""

    outcome: OutcomeType = OutcomeType.KNOWN_FAILURE
    failure: FailureDetail


class KnownError(Exception):
    """A failure the service can explain to the caller."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        return ApiResponse(
            failure=FailureDetail(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
            )
        )


class InvalidOverlayMutationError(KnownError, ValueError):
    """Structurally invalid input to an overlay setter (empty name, negative price)."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            status_code=400,
        )


class NotFoundError(KnownError):
    """A user, pack or catalog item does not exist."""

    def __init__(self, what: str, name: str):
        self.what = what
        self.name = name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"{what} '{name}' not found",
            status_code=404,
        )


class InsufficientFundsError(KnownError):
    """
    The user cannot afford the operation.

    Raised before any card resolution or ledger write, so no coins were spent.
    """

    def __init__(self, balance: int, cost: int):
        self.balance = balance
        self.cost = cost
        super().__init__(
            kind=FailureKind.INSUFFICIENT_FUNDS,
            message="Insufficient coins!",
            detail=f"Balance {balance}, cost {cost}",
            suggestion="Your coins were not spent.",
            status_code=402,
        )


class DuplicateOwnershipError(KnownError):
    """A second Deck/Staple/Bundle purchase of an item the user already owns."""

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(
            kind=FailureKind.DUPLICATE_OWNERSHIP,
            message="You already own this item!",
            detail=item_name,
            status_code=409,
        )


class InvalidPullCountError(KnownError):
    """Gacha pull counts are fixed tiers."""

    def __init__(self, pull_count: int, allowed: tuple[int, ...]):
        self.pull_count = pull_count
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Invalid pull count {pull_count}. Must be one of {list(allowed)}",
            status_code=400,
        )


class GachaPullFailedError(KnownError):
    """
    No pull in the batch resolved to a card.

    The user is not charged when this is raised.
    """

    def __init__(self, pack_name: str, attempted: int):
        self.pack_name = pack_name
        self.attempted = attempted
        super().__init__(
            kind=FailureKind.EMPTY_RESULT,
            message="Failed to pull cards. Please try again.",
            detail=f"0 of {attempted} pulls resolved for pack '{pack_name}'",
            suggestion="Your coins were not spent.",
            status_code=502,
        )
