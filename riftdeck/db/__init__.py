from riftdeck.db.database import get_session, init_db
from riftdeck.db.operations import (
    card_to_model,
    create_deck,
    deck_to_model,
    delete_deck,
    get_card,
    get_cards_by_ids,
    get_deck,
    list_decks,
    load_catalog,
    load_catalog_for_deck,
    new_deck,
    save_deck,
    upsert_card,
)

__all__ = [
    "card_to_model",
    "create_deck",
    "deck_to_model",
    "delete_deck",
    "get_card",
    "get_cards_by_ids",
    "get_deck",
    "get_session",
    "init_db",
    "list_decks",
    "load_catalog",
    "load_catalog_for_deck",
    "new_deck",
    "save_deck",
    "upsert_card",
]
