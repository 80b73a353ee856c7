"""
Deck Validation Service — The Engine's Only Entry Point.

Orchestrates:
1. Catalog resolution (card type checked BEFORE the ledger is touched)
2. ZoneLedger mutation
3. Rule validation and stats, recomputed from a fresh snapshot

INVARIANT: A rejected mutation leaves the deck unchanged. Mutations return a
new Deck; the input Deck is never modified.

INVARIANT: A mutation that changes nothing returns the input Deck itself,
so repeating a SetQuantity is idempotent (no duplicate placements, no
timestamp drift).
"""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from riftdeck.engine.rule_validator import validate_deck
from riftdeck.engine.stats_calculator import calculate_stats
from riftdeck.engine.zone_ledger import ZoneLedger
from riftdeck.models.card import Card, CardType
from riftdeck.models.deck import (
    AddCard,
    Deck,
    DeckMutation,
    DeckStatus,
    RemoveCard,
    SetLegend,
    SetQuantity,
    Zone,
    expected_zone,
)
from riftdeck.models.failure import KnownError, TypeMismatchError, UnknownCardError
from riftdeck.models.ruleset import DEFAULT_RULESET, Ruleset
from riftdeck.models.stats import DeckStats
from riftdeck.models.validation import RuleKind, ValidationResult
from riftdeck.services.card_catalog import CardCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeckEdit:
    """A mutated deck together with its recomputed verdict."""

    deck: Deck
    validation: ValidationResult

    @property
    def status(self) -> DeckStatus:
        return deck_status(self.deck, self.validation)


def deck_status(deck: Deck, validation: ValidationResult) -> DeckStatus:
    """
    Conceptual construction state: NO_LEGEND until a legend is chosen, then
    INVALID or VALID depending on the latest validation.
    """
    if deck.legend_card_id is None or RuleKind.MISSING_LEGEND in validation.rules():
        return DeckStatus.NO_LEGEND
    return DeckStatus.VALID if validation.is_valid else DeckStatus.INVALID


class DeckValidationService:
    """
    Applies mutations to decks and computes their verdicts and statistics.

    Args:
        catalog: Card lookups. Must already hold every card the deck uses
            (see db.operations.load_catalog_for_deck for the async path).
        ruleset: Rules to validate against
    """

    def __init__(self, catalog: CardCatalog, ruleset: Ruleset = DEFAULT_RULESET):
        self.catalog = catalog
        self.ruleset = ruleset

    def _resolve(self, card_id: str) -> Card:
        card = self.catalog.get(card_id)
        if card is None:
            raise UnknownCardError(card_id)
        return card

    def _require_zone(self, card: Card, zone: Zone) -> None:
        if expected_zone(card.card_type) != zone:
            raise TypeMismatchError(card.id, card.card_type.value, f"the {zone.value} zone")

    def apply_mutation(self, deck: Deck, mutation: DeckMutation) -> Deck:
        """
        Apply one mutation and return the updated deck.

        Raises:
            UnknownCardError: If the card is not in the catalog
            TypeMismatchError: If the card's type doesn't fit the zone or legend slot
            InvalidQuantityError: If the quantity is structurally invalid
        """
        try:
            updated = self._apply(deck, mutation)
        except KnownError as e:
            logger.warning("Rejected %s on deck %s: %s", type(mutation).__name__, deck.id, e)
            raise

        if updated is not deck:
            logger.info("Applied %s to deck %s", type(mutation).__name__, deck.id)
        return updated

    def _apply(self, deck: Deck, mutation: DeckMutation) -> Deck:
        legend_card_id = deck.legend_card_id
        ledger = ZoneLedger.from_placements(deck.placements)

        if isinstance(mutation, AddCard):
            card = self._resolve(mutation.card_id)
            self._require_zone(card, mutation.zone)
            ledger.add_card(card.id, mutation.zone, mutation.quantity)

        elif isinstance(mutation, SetQuantity):
            if mutation.quantity > 0:
                card = self._resolve(mutation.card_id)
                self._require_zone(card, mutation.zone)
            ledger.set_quantity(mutation.card_id, mutation.zone, mutation.quantity)

        elif isinstance(mutation, RemoveCard):
            zones = [mutation.zone] if mutation.zone else ledger.zones_for(mutation.card_id)
            for zone in zones:
                ledger.remove_card(mutation.card_id, zone)

        elif isinstance(mutation, SetLegend):
            if mutation.card_id is not None:
                card = self._resolve(mutation.card_id)
                if card.card_type != CardType.LEGEND:
                    raise TypeMismatchError(card.id, card.card_type.value, "the legend slot")
            legend_card_id = mutation.card_id

        else:
            raise TypeError(f"Unsupported mutation: {mutation!r}")

        placements = ledger.snapshot()
        if placements == deck.placements and legend_card_id == deck.legend_card_id:
            return deck

        return replace(
            deck,
            placements=placements,
            legend_card_id=legend_card_id,
            updated_at=datetime.now(UTC),
        )

    def _lookup(self, deck: Deck) -> dict[str, Card]:
        return self.catalog.get_many(deck.card_ids())

    def validate(self, deck: Deck) -> ValidationResult:
        """Validate the deck against the service's ruleset."""
        return validate_deck(deck.placements, self._lookup(deck), deck.legend_card_id, self.ruleset)

    def compute_stats(self, deck: Deck) -> DeckStats:
        """Statistics for the deck. Never fails on unresolved cards."""
        return calculate_stats(deck.placements, self._lookup(deck))

    def edit(self, deck: Deck, mutation: DeckMutation) -> DeckEdit:
        """Apply a mutation, then revalidate the result."""
        updated = self.apply_mutation(deck, mutation)
        return DeckEdit(deck=updated, validation=self.validate(updated))
