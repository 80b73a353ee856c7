"""
Validation results — Rule Violations as Data.

An invalid deck is a normal state while a deck is being built, so rule
violations are returned as records, never raised. Each rule has its own
violation type carrying exactly the fields that rule reports, so consumers
can match on the type instead of inspecting loose payloads.

INVARIANT: A ValidationResult is derived purely from a deck snapshot, the
catalog lookups and a Ruleset. It is never mutated after construction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Literal

from riftdeck.models.card import CardType
from riftdeck.models.deck import Zone


class RuleKind(str, Enum):
    """Identifier of the rule a violation breaks."""

    ZONE_COUNT = "ZONE_COUNT"
    MISSING_LEGEND = "MISSING_LEGEND"
    INVALID_LEGEND = "INVALID_LEGEND"
    COPY_LIMIT = "COPY_LIMIT"
    DOMAIN_RESTRICTION = "DOMAIN_RESTRICTION"
    ZONE_TYPE_MISMATCH = "ZONE_TYPE_MISMATCH"
    UNKNOWN_CARD = "UNKNOWN_CARD"


BoundKind = Literal["min", "max", "exact"]


@dataclass(frozen=True, slots=True)
class ZoneCountViolation:
    """A zone holds too few or too many cards."""

    rule: ClassVar[RuleKind] = RuleKind.ZONE_COUNT

    zone: Zone
    bound: BoundKind
    required: int
    actual: int

    @property
    def message(self) -> str:
        if self.bound == "exact":
            return (
                f"{self.zone.value} zone must have exactly {self.required} card(s). "
                f"Currently has {self.actual}."
            )
        limit = "at least" if self.bound == "min" else "at most"
        return (
            f"{self.zone.value} zone must have {limit} {self.required} cards. "
            f"Currently has {self.actual}."
        )

    def details(self) -> dict[str, Any]:
        return {
            "zone": self.zone.value,
            "bound": self.bound,
            "required": self.required,
            "actual": self.actual,
        }


@dataclass(frozen=True, slots=True)
class MissingLegendViolation:
    """No legend is selected (or the selected one no longer resolves)."""

    rule: ClassVar[RuleKind] = RuleKind.MISSING_LEGEND

    legend_card_id: str | None = None

    @property
    def message(self) -> str:
        if self.legend_card_id:
            return f"Legend card '{self.legend_card_id}' could not be found."
        return "Deck must have a legend card assigned."

    def details(self) -> dict[str, Any]:
        return {"legendCardId": self.legend_card_id}


@dataclass(frozen=True, slots=True)
class InvalidLegendViolation:
    """The selected legend is not a LEGEND card."""

    rule: ClassVar[RuleKind] = RuleKind.INVALID_LEGEND

    card_id: str
    card_type: CardType

    @property
    def message(self) -> str:
        return (
            f"Legend must be a LEGEND card. Card '{self.card_id}' "
            f"is type {self.card_type.value}."
        )

    def details(self) -> dict[str, Any]:
        return {"cardId": self.card_id, "cardType": self.card_type.value}


@dataclass(frozen=True, slots=True)
class CopyLimitViolation:
    """More copies of a card than the ruleset allows."""

    rule: ClassVar[RuleKind] = RuleKind.COPY_LIMIT

    card_id: str
    actual: int
    maximum: int

    @property
    def message(self) -> str:
        return (
            f"Card '{self.card_id}' has {self.actual} copies. "
            f"Maximum is {self.maximum} copies per card."
        )

    def details(self) -> dict[str, Any]:
        return {"cardId": self.card_id, "actual": self.actual, "max": self.maximum}


@dataclass(frozen=True, slots=True)
class DomainViolation:
    """A card shares no domain with the legend."""

    rule: ClassVar[RuleKind] = RuleKind.DOMAIN_RESTRICTION

    card_id: str
    card_domains: tuple[str, ...]
    legend_domains: tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            f"Card '{self.card_id}' does not share any domain with the legend. "
            f"Legend domains: [{', '.join(self.legend_domains)}]. "
            f"Card domains: [{', '.join(self.card_domains)}]."
        )

    def details(self) -> dict[str, Any]:
        return {
            "cardId": self.card_id,
            "cardDomains": list(self.card_domains),
            "legendDomains": list(self.legend_domains),
        }


@dataclass(frozen=True, slots=True)
class TypeMismatchViolation:
    """A card sits in a zone its type does not belong in."""

    rule: ClassVar[RuleKind] = RuleKind.ZONE_TYPE_MISMATCH

    card_id: str
    zone: Zone
    card_type: CardType

    @property
    def message(self) -> str:
        return (
            f"Card '{self.card_id}' is type {self.card_type.value} "
            f"and cannot be placed in the {self.zone.value} zone."
        )

    def details(self) -> dict[str, Any]:
        return {
            "cardId": self.card_id,
            "zone": self.zone.value,
            "cardType": self.card_type.value,
        }


@dataclass(frozen=True, slots=True)
class UnknownCardViolation:
    """A placement references a card the catalog cannot resolve."""

    rule: ClassVar[RuleKind] = RuleKind.UNKNOWN_CARD

    card_id: str
    zone: Zone

    @property
    def message(self) -> str:
        return f"Card '{self.card_id}' in the {self.zone.value} zone could not be found."

    def details(self) -> dict[str, Any]:
        return {"cardId": self.card_id, "zone": self.zone.value}


ValidationViolation = (
    ZoneCountViolation
    | MissingLegendViolation
    | InvalidLegendViolation
    | CopyLimitViolation
    | DomainViolation
    | TypeMismatchViolation
    | UnknownCardViolation
)


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for a deck: valid iff no violations were produced."""

    violations: tuple[ValidationViolation, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def rules(self) -> list[RuleKind]:
        """Rule of each violation, in output order."""
        return [v.rule for v in self.violations]

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: {isValid, errors: [{rule, message, details}]}."""
        return {
            "isValid": self.is_valid,
            "errors": [
                {"rule": v.rule.value, "message": v.message, "details": v.details()}
                for v in self.violations
            ],
        }
