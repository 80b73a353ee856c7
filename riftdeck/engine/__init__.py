"""
Deck rules engine.

Synchronous and side-effect free over its inputs. Catalog lookups must be
resolved before any of these functions run.
"""

from riftdeck.engine.rule_validator import validate_deck, zone_totals
from riftdeck.engine.stats_calculator import calculate_stats
from riftdeck.engine.zone_ledger import ZoneLedger

__all__ = [
    "ZoneLedger",
    "calculate_stats",
    "validate_deck",
    "zone_totals",
]
