"""
Stats Calculator — Presentation Statistics for a Deck.

Pure and validation-agnostic: runs on invalid decks too.

A placement whose card the catalog cannot resolve (e.g., a deleted card) is
left out of every figure and counted in `unresolved_cards`. The calculation
never fails because of it.
"""

import logging
from collections.abc import Iterable, Mapping

from riftdeck.models.card import Card
from riftdeck.models.deck import DeckCardPlacement, Zone
from riftdeck.models.stats import DeckStats

logger = logging.getLogger(__name__)


def calculate_stats(
    placements: Iterable[DeckCardPlacement],
    cards: Mapping[str, Card],
) -> DeckStats:
    """
    Derive statistics from a deck snapshot.

    Args:
        placements: Ledger snapshot
        cards: Catalog lookups by card id

    Returns:
        DeckStats. The legend is not a placement and never counts.
    """
    stats = DeckStats()
    value = 0.0

    for placement in placements:
        card = cards.get(placement.card_id)
        if card is None:
            stats.unresolved_cards += 1
            continue

        qty = placement.quantity
        stats.total_cards += qty
        stats.cards_by_zone[placement.zone] += qty

        type_key = card.card_type.value
        stats.cards_by_type[type_key] = stats.cards_by_type.get(type_key, 0) + qty

        # No energy cost is not the same as a free card: leave it off the curve
        if placement.zone == Zone.MAIN and card.energy_cost is not None:
            cost = card.energy_cost
            stats.mana_curve[cost] = stats.mana_curve.get(cost, 0) + qty

        for domain in card.sorted_domains():
            stats.domain_distribution[domain] = stats.domain_distribution.get(domain, 0) + qty

        value += (card.market_price or 0.0) * qty

    stats.estimated_value = round(value, 2)

    if stats.unresolved_cards:
        logger.warning("Stats skipped %d unresolved placement(s)", stats.unresolved_cards)

    return stats
