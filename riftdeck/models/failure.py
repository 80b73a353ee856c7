"""
Failure Classification — Known, Explainable Errors.

Every mutation failure the engine can produce is a KnownError subclass with
a fixed FailureKind and an HTTP-equivalent status code. These are
deterministic rejections: callers fix the input, nothing is retried.

Rule violations are NOT failures. An invalid deck is an expected state while
editing and is reported through ValidationResult instead.

INVARIANT: A rejected mutation leaves the deck unchanged.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Structural failures (ZoneLedger)
    INVALID_QUANTITY = "invalid_quantity"

    # Consistency failures (DeckValidationService)
    TYPE_MISMATCH = "type_mismatch"
    UNKNOWN_CARD = "unknown_card"

    # Resource failures
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

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

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail payload."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InvalidQuantityError(KnownError):
    """Raised when a delta is not positive or a target quantity is negative."""

    def __init__(self, card_id: str, quantity: int, reason: str):
        self.card_id = card_id
        self.quantity = quantity
        super().__init__(
            kind=FailureKind.INVALID_QUANTITY,
            message=f"Invalid quantity {quantity} for card '{card_id}': {reason}",
            suggestion="Use a positive amount to add, or zero to remove the card.",
            status_code=400,
        )


class TypeMismatchError(KnownError):
    """Raised when a card's type does not belong in the target zone or slot."""

    def __init__(self, card_id: str, card_type: str, target: str):
        self.card_id = card_id
        self.card_type = card_type
        self.target = target
        super().__init__(
            kind=FailureKind.TYPE_MISMATCH,
            message=f"Card '{card_id}' of type {card_type} cannot be placed in {target}.",
            suggestion="RUNE cards go in the RUNE zone, BATTLEFIELD cards in the "
            "BATTLEFIELD zone, LEGEND cards in the legend slot, everything else in MAIN.",
            status_code=400,
        )


class UnknownCardError(KnownError):
    """Raised when the card catalog has no card with the given id."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.UNKNOWN_CARD,
            message=f"Card '{card_id}' not found.",
            status_code=404,
        )


class DeckNotFoundError(KnownError):
    """Raised when a deck id does not exist in the store."""

    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Deck '{deck_id}' not found.",
            status_code=404,
        )


class PlacementNotFoundError(KnownError):
    """Raised when a card-level request targets a card the deck does not hold."""

    def __init__(self, deck_id: str, card_id: str):
        self.deck_id = deck_id
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card '{card_id}' not found in deck '{deck_id}'.",
            status_code=404,
        )


class AmbiguousZoneError(KnownError):
    """Raised when a card sits in several zones and the request names none."""

    def __init__(self, card_id: str, zones: list[str]):
        self.card_id = card_id
        self.zones = zones
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Card '{card_id}' is in several zones: {', '.join(zones)}.",
            suggestion="Specify the zone to update.",
            status_code=400,
        )
