"""
Card catalog access.

The catalog is owned by the external card data provider; this engine only
reads from it. Lookups are batched by card id and resolved into an
in-memory snapshot before any rule or stats computation runs.
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from riftdeck.models.card import Card, CardType, Domain


class CardCatalog(Protocol):
    """Read-only card lookup."""

    def get(self, card_id: str) -> Card | None:
        """Return the card, or None if the catalog has no such id."""
        ...

    def get_many(self, card_ids: Iterable[str]) -> dict[str, Card]:
        """Return the cards that exist among `card_ids`, keyed by id."""
        ...


class InMemoryCardCatalog:
    """Catalog snapshot held in a dict. Used for resolved batches and tests."""

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: dict[str, Card] = {card.id: card for card in cards}

    def get(self, card_id: str) -> Card | None:
        return self._cards.get(card_id)

    def get_many(self, card_ids: Iterable[str]) -> dict[str, Card]:
        return {cid: self._cards[cid] for cid in card_ids if cid in self._cards}

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards


def parse_card(data: Mapping[str, Any]) -> Card:
    """
    Build a Card from a catalog record.

    Accepts the provider's camelCase keys (cardType, marketPrice, energyCost).

    Raises:
        ValueError: If required fields are missing or enums are unknown
    """
    try:
        card_id = str(data["id"])
        name = str(data["name"])
        card_type = CardType(str(data["cardType"]).upper())
    except KeyError as e:
        raise ValueError(f"Card record missing field {e}") from e

    domains = frozenset(Domain(str(d).upper()) for d in data.get("domains") or [])

    price = data.get("marketPrice")
    cost = data.get("energyCost")

    return Card(
        id=card_id,
        name=name,
        card_type=card_type,
        domains=domains,
        rarity=str(data.get("rarity", "COMMON")),
        market_price=float(price) if price is not None else None,
        energy_cost=int(cost) if cost is not None else None,
    )


def load_card_catalog(path: Path) -> list[Card]:
    """
    Load cards from a JSON file holding a list of catalog records.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a record is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Card catalog not found at {path}.")

    with open(path, encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Card catalog at {path} must be a JSON list")

    return [parse_card(record) for record in records]
