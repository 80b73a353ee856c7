from dataclasses import dataclass, field
from enum import Enum


class CardType(str, Enum):
    """Riftbound card types as reported by the card catalog."""

    UNIT = "UNIT"
    SPELL = "SPELL"
    GEAR = "GEAR"
    RUNE = "RUNE"
    BATTLEFIELD = "BATTLEFIELD"
    LEGEND = "LEGEND"
    TOKEN = "TOKEN"


class Domain(str, Enum):
    """Color/affinity tags. A legend's domains gate which cards are legal."""

    FURY = "FURY"
    CALM = "CALM"
    MIND = "MIND"
    BODY = "BODY"
    CHAOS = "CHAOS"
    ORDER = "ORDER"


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable catalog entry for a single card.

    Attributes:
        id: Catalog identifier (stable across printings of the same card)
        name: Display name
        card_type: One of CardType
        domains: Domains the card belongs to (empty for neutral cards)
        rarity: Rarity label from the catalog (e.g., "COMMON", "EPIC")
        market_price: Current market price in dollars, if known
        energy_cost: Energy cost used for the curve; None for legends and
            cards without a printed cost
    """

    id: str
    name: str
    card_type: CardType
    domains: frozenset[Domain] = field(default_factory=frozenset)
    rarity: str = "COMMON"
    market_price: float | None = None
    energy_cost: int | None = None

    @property
    def is_domainless(self) -> bool:
        """True for neutral cards that are legal under any legend."""
        return not self.domains

    def shares_domain_with(self, domains: frozenset[Domain]) -> bool:
        """True if this card has at least one domain in common with `domains`."""
        return not self.domains.isdisjoint(domains)

    def sorted_domains(self) -> list[str]:
        """Domain values in a stable order for messages and payloads."""
        return sorted(d.value for d in self.domains)
