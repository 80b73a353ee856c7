from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from riftdeck.models.card import CardType


class Zone(str, Enum):
    """Card placement areas of a deck. The legend is tracked outside them."""

    MAIN = "MAIN"
    RUNE = "RUNE"
    BATTLEFIELD = "BATTLEFIELD"


# Canonical zone order used for counts and violation ordering
ZONE_ORDER: tuple[Zone, ...] = (Zone.MAIN, Zone.RUNE, Zone.BATTLEFIELD)


def expected_zone(card_type: CardType) -> Zone | None:
    """
    Zone a card type belongs in.

    Returns None for legends, which are never placed in a zone.
    """
    if card_type == CardType.RUNE:
        return Zone.RUNE
    if card_type == CardType.BATTLEFIELD:
        return Zone.BATTLEFIELD
    if card_type == CardType.LEGEND:
        return None
    return Zone.MAIN


@dataclass(frozen=True, slots=True)
class DeckCardPlacement:
    """How many copies of a card occupy a zone. Quantity is always >= 1."""

    card_id: str
    zone: Zone
    quantity: int


class DeckStatus(str, Enum):
    """Conceptual construction state of a deck. Decks are always editable."""

    NO_LEGEND = "NO_LEGEND"
    INVALID = "INVALID"
    VALID = "VALID"


@dataclass(frozen=True)
class Deck:
    """
    A user's deck.

    Attributes:
        id: Deck identifier
        owner_id: Owning user
        name: Deck name
        description: Free-form description
        legend_card_id: Chosen legend, None until one is selected
        is_public: Whether other users may see the deck
        placements: Card placements in insertion order
        created_at: Creation timestamp
        updated_at: Last content change
    """

    id: str
    owner_id: str
    name: str
    description: str = ""
    legend_card_id: str | None = None
    is_public: bool = False
    placements: tuple[DeckCardPlacement, ...] = field(default_factory=tuple)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def card_ids(self) -> list[str]:
        """Unique card ids referenced by the deck, legend included, in first-seen order."""
        ids: dict[str, None] = {}
        if self.legend_card_id:
            ids[self.legend_card_id] = None
        for placement in self.placements:
            ids[placement.card_id] = None
        return list(ids)

    def zones_for(self, card_id: str) -> list[Zone]:
        """Zones holding `card_id`, in canonical zone order."""
        held = {p.zone for p in self.placements if p.card_id == card_id}
        return [zone for zone in ZONE_ORDER if zone in held]

    def total_placed(self) -> int:
        """Total quantity across all zones (legend excluded)."""
        return sum(p.quantity for p in self.placements)


# --- Mutations ---


@dataclass(frozen=True, slots=True)
class AddCard:
    """Add `quantity` copies of a card to a zone."""

    card_id: str
    zone: Zone
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class SetQuantity:
    """Set the copies of a card in a zone. Zero removes the placement."""

    card_id: str
    zone: Zone
    quantity: int


@dataclass(frozen=True, slots=True)
class RemoveCard:
    """Remove a card from a zone, or from every zone when `zone` is None."""

    card_id: str
    zone: Zone | None = None


@dataclass(frozen=True, slots=True)
class SetLegend:
    """Choose the deck's legend. None clears it."""

    card_id: str | None


DeckMutation = AddCard | SetQuantity | RemoveCard | SetLegend
