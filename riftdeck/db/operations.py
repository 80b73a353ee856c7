"""
Database CRUD operations.

Provides async functions for reading catalog cards and for creating,
reading, saving, and deleting decks. Rules live in the engine; nothing here
validates deck legality.
"""

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from riftdeck.models.card import Card, CardType, Domain
from riftdeck.models.db import CardDB, DeckCardDB, DeckDB
from riftdeck.models.deck import Deck, DeckCardPlacement, Zone
from riftdeck.models.failure import DeckNotFoundError
from riftdeck.services.card_catalog import InMemoryCardCatalog

# --- Card Operations ---


async def get_card(session: AsyncSession, card_id: str) -> CardDB | None:
    """Get a catalog card by id."""
    return await session.get(CardDB, card_id)


async def get_cards_by_ids(session: AsyncSession, card_ids: Iterable[str]) -> list[CardDB]:
    """
    Get catalog cards in one query.

    Ids with no matching card are simply absent from the result.
    """
    ids = list(dict.fromkeys(card_ids))
    if not ids:
        return []
    result = await session.execute(select(CardDB).where(CardDB.id.in_(ids)))
    return list(result.scalars().all())


async def upsert_card(session: AsyncSession, card: Card) -> CardDB:
    """
    Insert or update a catalog card.

    If a card with the same id exists, updates it.
    Otherwise creates a new record.
    """
    existing = await get_card(session, card.id)
    domains = card.sorted_domains()

    if existing:
        existing.name = card.name
        existing.card_type = card.card_type.value
        existing.domains = domains
        existing.rarity = card.rarity
        existing.market_price = card.market_price
        existing.energy_cost = card.energy_cost
        await session.flush()
        return existing

    db_card = CardDB(
        id=card.id,
        name=card.name,
        card_type=card.card_type.value,
        domains=domains,
        rarity=card.rarity,
        market_price=card.market_price,
        energy_cost=card.energy_cost,
    )
    session.add(db_card)
    await session.flush()
    return db_card


def card_to_model(db_card: CardDB) -> Card:
    """Convert a database card to a domain model."""
    return Card(
        id=db_card.id,
        name=db_card.name,
        card_type=CardType(db_card.card_type),
        domains=frozenset(Domain(d) for d in db_card.domains or []),
        rarity=db_card.rarity,
        market_price=db_card.market_price,
        energy_cost=db_card.energy_cost,
    )


async def load_catalog(session: AsyncSession, card_ids: Iterable[str]) -> InMemoryCardCatalog:
    """Resolve a batch of card ids into an in-memory catalog snapshot."""
    db_cards = await get_cards_by_ids(session, card_ids)
    return InMemoryCardCatalog(card_to_model(c) for c in db_cards)


async def load_catalog_for_deck(
    session: AsyncSession, deck: Deck, *extra_card_ids: str
) -> InMemoryCardCatalog:
    """
    Resolve every card a deck references, plus any extra ids a pending
    mutation needs, before the engine runs.
    """
    return await load_catalog(session, [*deck.card_ids(), *extra_card_ids])


# --- Deck Operations ---


async def get_deck(session: AsyncSession, deck_id: str) -> DeckDB | None:
    """
    Get a deck with its placements.

    Returns None if no deck has this id.
    """
    result = await session.execute(
        select(DeckDB).where(DeckDB.id == deck_id).options(selectinload(DeckDB.cards))
    )
    return result.scalar_one_or_none()


async def list_decks(session: AsyncSession, owner_id: str, limit: int = 50) -> list[DeckDB]:
    """Get a user's decks, most recently updated first."""
    result = await session.execute(
        select(DeckDB)
        .where(DeckDB.owner_id == owner_id)
        .options(selectinload(DeckDB.cards))
        .order_by(DeckDB.updated_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def create_deck(session: AsyncSession, deck: Deck) -> DeckDB:
    """
    Persist a new deck, placements included.

    Raises IntegrityError if a deck with this id already exists.
    """
    db_deck = DeckDB(
        id=deck.id,
        owner_id=deck.owner_id,
        name=deck.name,
        description=deck.description,
        legend_card_id=deck.legend_card_id,
        is_public=deck.is_public,
        created_at=deck.created_at,
        updated_at=deck.updated_at,
        cards=[
            DeckCardDB(card_id=p.card_id, zone=p.zone.value, quantity=p.quantity, position=i)
            for i, p in enumerate(deck.placements)
        ],
    )
    session.add(db_deck)
    await session.flush()
    return db_deck


async def save_deck(session: AsyncSession, deck: Deck) -> DeckDB:
    """
    Write a deck's current state over its stored record.

    Placements that still exist keep their rows; removed ones are deleted
    and new ones inserted, so (deck, card, zone) stays unique throughout.

    Raises:
        DeckNotFoundError: If the deck was never created
    """
    db_deck = await get_deck(session, deck.id)
    if db_deck is None:
        raise DeckNotFoundError(deck.id)

    db_deck.name = deck.name
    db_deck.description = deck.description
    db_deck.legend_card_id = deck.legend_card_id
    db_deck.is_public = deck.is_public
    db_deck.updated_at = deck.updated_at

    existing = {(row.card_id, row.zone): row for row in db_deck.cards}
    rows: list[DeckCardDB] = []
    for position, placement in enumerate(deck.placements):
        row = existing.get((placement.card_id, placement.zone.value))
        if row is None:
            row = DeckCardDB(card_id=placement.card_id, zone=placement.zone.value)
        row.quantity = placement.quantity
        row.position = position
        rows.append(row)

    # Rows left out of the new list are orphans and get deleted
    db_deck.cards = rows

    await session.flush()
    return db_deck


def deck_to_model(db_deck: DeckDB) -> Deck:
    """Convert a database deck to a domain model."""
    rows = sorted(db_deck.cards, key=lambda row: row.position)
    return Deck(
        id=db_deck.id,
        owner_id=db_deck.owner_id,
        name=db_deck.name,
        description=db_deck.description or "",
        legend_card_id=db_deck.legend_card_id,
        is_public=bool(db_deck.is_public),
        placements=tuple(
            DeckCardPlacement(card_id=row.card_id, zone=Zone(row.zone), quantity=row.quantity)
            for row in rows
        ),
        created_at=db_deck.created_at,
        updated_at=db_deck.updated_at,
    )


def new_deck(
    owner_id: str,
    name: str,
    description: str = "",
    is_public: bool = False,
) -> Deck:
    """Build an empty, unsaved deck with a fresh id."""
    now = datetime.now(UTC)
    return Deck(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        name=name,
        description=description,
        is_public=is_public,
        created_at=now,
        updated_at=now,
    )


async def delete_deck(session: AsyncSession, deck_id: str) -> bool:
    """
    Delete a deck and its placements.

    Returns True if deleted, False if not found.
    """
    deck = await get_deck(session, deck_id)
    if not deck:
        return False

    await session.delete(deck)
    return True
