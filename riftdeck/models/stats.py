from dataclasses import dataclass, field
from typing import Any

from riftdeck.models.deck import ZONE_ORDER, Zone


def _empty_zone_counts() -> dict[Zone, int]:
    return {zone: 0 for zone in ZONE_ORDER}


@dataclass
class DeckStats:
    """
    Presentation statistics for a deck.

    Ephemeral: recomputed on demand and never treated as authoritative.

    Attributes:
        total_cards: Copies across all zones (legend excluded)
        cards_by_zone: Copies per zone, every zone present
        mana_curve: MAIN-zone copies per energy cost
        domain_distribution: Copies per domain (multi-domain cards count once per domain)
        cards_by_type: Copies per card type
        estimated_value: Sum of market price x quantity, rounded to cents
        unresolved_cards: Placements skipped because the catalog had no card
    """

    total_cards: int = 0
    cards_by_zone: dict[Zone, int] = field(default_factory=_empty_zone_counts)
    mana_curve: dict[int, int] = field(default_factory=dict)
    domain_distribution: dict[str, int] = field(default_factory=dict)
    cards_by_type: dict[str, int] = field(default_factory=dict)
    estimated_value: float = 0.0
    unresolved_cards: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Wire shape used by the stats endpoint."""
        return {
            "totalCards": self.total_cards,
            "cardsByZone": {zone.value: count for zone, count in self.cards_by_zone.items()},
            "manaCurve": dict(sorted(self.mana_curve.items())),
            "domainDistribution": dict(self.domain_distribution),
            "cardsByType": dict(self.cards_by_type),
            "estimatedValue": self.estimated_value,
            "unresolvedCards": self.unresolved_cards,
        }
