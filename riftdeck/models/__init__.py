from riftdeck.models.card import Card, CardType, Domain
from riftdeck.models.deck import (
    ZONE_ORDER,
    AddCard,
    Deck,
    DeckCardPlacement,
    DeckMutation,
    DeckStatus,
    RemoveCard,
    SetLegend,
    SetQuantity,
    Zone,
    expected_zone,
)
from riftdeck.models.failure import (
    AmbiguousZoneError,
    DeckNotFoundError,
    FailureDetail,
    FailureKind,
    InvalidQuantityError,
    KnownError,
    PlacementNotFoundError,
    TypeMismatchError,
    UnknownCardError,
)
from riftdeck.models.ruleset import DEFAULT_RULESET, Ruleset, ZoneBounds
from riftdeck.models.stats import DeckStats
from riftdeck.models.validation import (
    CopyLimitViolation,
    DomainViolation,
    InvalidLegendViolation,
    MissingLegendViolation,
    RuleKind,
    TypeMismatchViolation,
    UnknownCardViolation,
    ValidationResult,
    ValidationViolation,
    ZoneCountViolation,
)

__all__ = [
    "AddCard",
    "AmbiguousZoneError",
    "Card",
    "CardType",
    "CopyLimitViolation",
    "DEFAULT_RULESET",
    "Deck",
    "DeckCardPlacement",
    "DeckMutation",
    "DeckNotFoundError",
    "DeckStats",
    "DeckStatus",
    "Domain",
    "DomainViolation",
    "FailureDetail",
    "FailureKind",
    "InvalidLegendViolation",
    "InvalidQuantityError",
    "KnownError",
    "MissingLegendViolation",
    "PlacementNotFoundError",
    "RemoveCard",
    "RuleKind",
    "Ruleset",
    "SetLegend",
    "SetQuantity",
    "TypeMismatchError",
    "TypeMismatchViolation",
    "UnknownCardError",
    "UnknownCardViolation",
    "ValidationResult",
    "ValidationViolation",
    "ZONE_ORDER",
    "Zone",
    "ZoneBounds",
    "ZoneCountViolation",
    "expected_zone",
]
