"""
Rule Validator — Deck Legality as a Pure Function.

Checks, in output order:
1. Zone count bounds (MAIN, RUNE ranges; BATTLEFIELD exact)
2. Legend presence and type
3. Copy limit per card across the whole deck
4. Domain compatibility with the legend
5. Zone/type consistency
6. Placements whose card cannot be resolved

Every check runs; nothing short-circuits, so a caller can show every
problem at once. Within a check, violations are ordered by zone
(MAIN, RUNE, BATTLEFIELD) and then by placement insertion order.

INVARIANT: Same placements + same catalog lookups + same Ruleset produce
the same ValidationResult, violation for violation.
"""

import logging
from collections.abc import Iterable, Mapping

from riftdeck.models.card import Card, CardType
from riftdeck.models.deck import ZONE_ORDER, DeckCardPlacement, Zone, expected_zone
from riftdeck.models.ruleset import Ruleset, ZoneBounds
from riftdeck.models.validation import (
    CopyLimitViolation,
    DomainViolation,
    InvalidLegendViolation,
    MissingLegendViolation,
    TypeMismatchViolation,
    UnknownCardViolation,
    ValidationResult,
    ValidationViolation,
    ZoneCountViolation,
)

logger = logging.getLogger(__name__)

# Card types exempt from the copy limit
_COPY_LIMIT_EXEMPT = frozenset({CardType.LEGEND, CardType.BATTLEFIELD})


def _zone_sorted(placements: Iterable[DeckCardPlacement]) -> list[DeckCardPlacement]:
    """Placements ordered by zone, insertion order preserved within a zone."""
    rank = {zone: i for i, zone in enumerate(ZONE_ORDER)}
    return sorted(placements, key=lambda p: rank[p.zone])


def zone_totals(placements: Iterable[DeckCardPlacement]) -> dict[Zone, int]:
    """Copies per zone, every zone present."""
    totals = {zone: 0 for zone in ZONE_ORDER}
    for placement in placements:
        totals[placement.zone] += placement.quantity
    return totals


def _check_range(zone: Zone, bounds: ZoneBounds, actual: int) -> list[ValidationViolation]:
    if bounds.contains(actual):
        return []
    if actual < bounds.min:
        return [ZoneCountViolation(zone=zone, bound="min", required=bounds.min, actual=actual)]
    return [ZoneCountViolation(zone=zone, bound="max", required=bounds.max, actual=actual)]


def check_zone_counts(
    placements: list[DeckCardPlacement], ruleset: Ruleset
) -> list[ValidationViolation]:
    """Rule 1: MAIN and RUNE within bounds, BATTLEFIELD exact."""
    totals = zone_totals(placements)
    violations = _check_range(Zone.MAIN, ruleset.main_deck, totals[Zone.MAIN])
    violations += _check_range(Zone.RUNE, ruleset.rune_deck, totals[Zone.RUNE])

    battlefield = totals[Zone.BATTLEFIELD]
    if battlefield != ruleset.battlefield_count:
        violations.append(
            ZoneCountViolation(
                zone=Zone.BATTLEFIELD,
                bound="exact",
                required=ruleset.battlefield_count,
                actual=battlefield,
            )
        )
    return violations


def check_legend(legend_card_id: str | None, legend: Card | None) -> list[ValidationViolation]:
    """
    Rule 2: exactly one legend, and it must be a LEGEND card.

    A deck without a legend is the expected state before one is chosen; it is
    reported like any other violation.
    """
    if legend is None:
        return [MissingLegendViolation(legend_card_id=legend_card_id)]
    if legend.card_type != CardType.LEGEND:
        return [InvalidLegendViolation(card_id=legend.id, card_type=legend.card_type)]
    return []


def check_copy_limit(
    placements: list[DeckCardPlacement],
    cards: Mapping[str, Card],
    legend_card_id: str | None,
    ruleset: Ruleset,
) -> list[ValidationViolation]:
    """Rule 3: copies of each card, summed over every zone, within the limit."""
    totals: dict[str, int] = {}
    for placement in placements:
        card = cards.get(placement.card_id)
        if card is None or placement.zone == Zone.BATTLEFIELD:
            continue
        if card.id == legend_card_id or card.card_type in _COPY_LIMIT_EXEMPT:
            continue
        totals[card.id] = totals.get(card.id, 0) + placement.quantity

    return [
        CopyLimitViolation(card_id=card_id, actual=count, maximum=ruleset.max_copies_per_card)
        for card_id, count in totals.items()
        if count > ruleset.max_copies_per_card
    ]


def check_domains(
    placements: list[DeckCardPlacement],
    cards: Mapping[str, Card],
    legend: Card | None,
) -> list[ValidationViolation]:
    """
    Rule 4: every card shares a domain with the legend.

    Domain-less cards are always legal. Skipped until a LEGEND is selected.
    """
    if legend is None or legend.card_type != CardType.LEGEND:
        return []

    legend_domains = tuple(legend.sorted_domains())
    violations: list[ValidationViolation] = []
    reported: set[str] = set()
    for placement in placements:
        card = cards.get(placement.card_id)
        if card is None or card.card_type == CardType.LEGEND or card.id in reported:
            continue
        if card.is_domainless or card.shares_domain_with(legend.domains):
            continue
        reported.add(card.id)
        violations.append(
            DomainViolation(
                card_id=card.id,
                card_domains=tuple(card.sorted_domains()),
                legend_domains=legend_domains,
            )
        )
    return violations


def check_zone_types(
    placements: list[DeckCardPlacement], cards: Mapping[str, Card]
) -> list[ValidationViolation]:
    """
    Rule 5: each card sits in the zone its type belongs in.

    Unreachable when every mutation goes through the catalog-aware service,
    but stored data can be edited around it.
    """
    violations: list[ValidationViolation] = []
    for placement in placements:
        card = cards.get(placement.card_id)
        if card is None:
            continue
        if expected_zone(card.card_type) != placement.zone:
            violations.append(
                TypeMismatchViolation(
                    card_id=card.id, zone=placement.zone, card_type=card.card_type
                )
            )
    return violations


def check_unresolved(
    placements: list[DeckCardPlacement], cards: Mapping[str, Card]
) -> list[ValidationViolation]:
    """Placements whose card the catalog could not resolve."""
    return [
        UnknownCardViolation(card_id=p.card_id, zone=p.zone)
        for p in placements
        if p.card_id not in cards
    ]


def validate_deck(
    placements: Iterable[DeckCardPlacement],
    cards: Mapping[str, Card],
    legend_card_id: str | None,
    ruleset: Ruleset,
) -> ValidationResult:
    """
    Validate a deck snapshot against a ruleset.

    Args:
        placements: Ledger snapshot (insertion order)
        cards: Catalog lookups by card id; missing ids count as unresolved
        legend_card_id: Selected legend, or None
        ruleset: Rules to apply

    Returns:
        ValidationResult with every violation found, in stable order.
    """
    ordered = _zone_sorted(placements)
    legend = cards.get(legend_card_id) if legend_card_id else None

    violations: list[ValidationViolation] = []
    violations += check_zone_counts(ordered, ruleset)
    violations += check_legend(legend_card_id, legend)
    violations += check_copy_limit(ordered, cards, legend_card_id, ruleset)
    violations += check_domains(ordered, cards, legend)
    violations += check_zone_types(ordered, cards)
    violations += check_unresolved(ordered, cards)

    result = ValidationResult(violations=tuple(violations))
    logger.debug(
        "Validated %d placements: %s",
        len(ordered),
        "valid" if result.is_valid else f"{len(violations)} violation(s)",
    )
    return result
