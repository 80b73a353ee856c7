"""
Zone Ledger — Structural Bookkeeping for a Deck's Placements.

The ledger owns add/remove/quantity mutation for one deck and enforces only
structural invariants:
1. No placement has a quantity below 1 (zero removes, negatives are rejected)
2. At most one placement per (card, zone)

INVARIANT: The ledger never consults a Ruleset. Rule-illegal states (five
copies of a card, an empty rune deck) are allowed so a deck can pass through
them while it is being edited. Rule enforcement belongs to the validator.
"""

from collections.abc import Iterable

from riftdeck.models.deck import DeckCardPlacement, Zone
from riftdeck.models.failure import InvalidQuantityError

PlacementKey = tuple[str, Zone]


class ZoneLedger:
    """Mutable placements of one deck, keyed by (card_id, zone) in insertion order."""

    def __init__(self) -> None:
        self._quantities: dict[PlacementKey, int] = {}

    @classmethod
    def from_placements(cls, placements: Iterable[DeckCardPlacement]) -> "ZoneLedger":
        """
        Build a ledger from stored placements.

        Duplicate (card, zone) entries are merged into the first one's
        position. Non-positive quantities are rejected.
        """
        ledger = cls()
        for placement in placements:
            ledger.add_card(placement.card_id, placement.zone, placement.quantity)
        return ledger

    def add_card(self, card_id: str, zone: Zone, delta: int = 1) -> int:
        """
        Add `delta` copies of a card to a zone.

        Returns:
            The new quantity.

        Raises:
            InvalidQuantityError: If delta is not positive
        """
        if delta <= 0:
            raise InvalidQuantityError(card_id, delta, "amount to add must be at least 1")

        key = (card_id, zone)
        quantity = self._quantities.get(key, 0) + delta
        self._quantities[key] = quantity
        return quantity

    def set_quantity(self, card_id: str, zone: Zone, quantity: int) -> None:
        """
        Set copies of a card in a zone. Zero removes the placement.

        An existing placement keeps its position; a new one goes last.

        Raises:
            InvalidQuantityError: If quantity is negative
        """
        if quantity < 0:
            raise InvalidQuantityError(card_id, quantity, "quantity cannot be negative")

        if quantity == 0:
            self.remove_card(card_id, zone)
            return

        self._quantities[(card_id, zone)] = quantity

    def remove_card(self, card_id: str, zone: Zone) -> None:
        """Remove a placement. Absent placements are ignored."""
        self._quantities.pop((card_id, zone), None)

    def quantity(self, card_id: str, zone: Zone) -> int:
        """Copies of a card in a zone, 0 if absent."""
        return self._quantities.get((card_id, zone), 0)

    def zones_for(self, card_id: str) -> list[Zone]:
        """Zones holding the card, in insertion order."""
        return [zone for (cid, zone) in self._quantities if cid == card_id]

    def snapshot(self) -> tuple[DeckCardPlacement, ...]:
        """Immutable view of all placements in insertion order."""
        return tuple(
            DeckCardPlacement(card_id=card_id, zone=zone, quantity=quantity)
            for (card_id, zone), quantity in self._quantities.items()
        )

    def __len__(self) -> int:
        return len(self._quantities)

    def __contains__(self, key: object) -> bool:
        return key in self._quantities
