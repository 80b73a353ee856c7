"""
RiftDeck services.

Catalog access and deck orchestration on top of the rules engine.
"""

from riftdeck.services.card_catalog import (
    CardCatalog,
    InMemoryCardCatalog,
    load_card_catalog,
    parse_card,
)
from riftdeck.services.deck_validation import (
    DeckEdit,
    DeckValidationService,
    deck_status,
)

__all__ = [
    "CardCatalog",
    "DeckEdit",
    "DeckValidationService",
    "InMemoryCardCatalog",
    "deck_status",
    "load_card_catalog",
    "parse_card",
]
