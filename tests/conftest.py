import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from riftdeck.models.card import Card, CardType, Domain
from riftdeck.models.db import Base
from riftdeck.models.deck import Deck, DeckCardPlacement, Zone

FURY = Domain.FURY
CALM = Domain.CALM


def _unit(n: int) -> Card:
    # Odd units are FURY, even units CALM; costs cycle 1-5
    return Card(
        id=f"unit-{n:02d}",
        name=f"Unit {n}",
        card_type=CardType.UNIT,
        domains=frozenset({FURY if n % 2 else CALM}),
        rarity="COMMON",
        market_price=0.25,
        energy_cost=(n - 1) % 5 + 1,
    )


@pytest.fixture
def cards() -> dict[str, Card]:
    """Catalog for a FURY/CALM legend deck, plus off-domain and misfit cards."""
    catalog = [
        Card("legend-1", "Lee Sin", CardType.LEGEND, frozenset({FURY, CALM}), "LEGENDARY", 12.0),
        Card("legend-2", "Lux", CardType.LEGEND, frozenset({Domain.MIND, Domain.ORDER})),
        *(_unit(n) for n in range(1, 15)),
        Card("spell-mind", "Mystic Shot", CardType.SPELL, frozenset({Domain.MIND}), energy_cost=2),
        Card("gear-neutral", "Long Sword", CardType.GEAR, energy_cost=1),
        Card("unit-nocost", "Strange Unit", CardType.UNIT, frozenset({FURY})),
        Card("rune-fury-1", "Fury Rune", CardType.RUNE, frozenset({FURY}), market_price=0.1),
        Card("rune-fury-2", "Fury Rune (Alt)", CardType.RUNE, frozenset({FURY}), market_price=0.1),
        Card("rune-calm-1", "Calm Rune", CardType.RUNE, frozenset({CALM}), market_price=0.1),
        Card("rune-calm-2", "Calm Rune (Alt)", CardType.RUNE, frozenset({CALM}), market_price=0.1),
        Card("rune-calm-3", "Calm Rune (Foil)", CardType.RUNE, frozenset({CALM})),
        Card("bf-arena", "The Arena", CardType.BATTLEFIELD, market_price=3.5),
        Card("bf-forest", "Whispering Forest", CardType.BATTLEFIELD),
    ]
    return {card.id: card for card in catalog}


@pytest.fixture
def legal_placements() -> tuple[DeckCardPlacement, ...]:
    """30 MAIN (10 units x3), 10 RUNE, 1 BATTLEFIELD. Legal under legend-1."""
    main = [DeckCardPlacement(f"unit-{n:02d}", Zone.MAIN, 3) for n in range(1, 11)]
    rune = [
        DeckCardPlacement("rune-fury-1", Zone.RUNE, 3),
        DeckCardPlacement("rune-fury-2", Zone.RUNE, 3),
        DeckCardPlacement("rune-calm-1", Zone.RUNE, 3),
        DeckCardPlacement("rune-calm-2", Zone.RUNE, 1),
    ]
    battlefield = [DeckCardPlacement("bf-arena", Zone.BATTLEFIELD, 1)]
    return (*main, *rune, *battlefield)


@pytest.fixture
def legal_deck(legal_placements: tuple[DeckCardPlacement, ...]) -> Deck:
    return Deck(
        id="deck-1",
        owner_id="user-1",
        name="Lee Sin Tempo",
        legend_card_id="legend-1",
        placements=legal_placements,
    )


@pytest.fixture
def empty_deck() -> Deck:
    return Deck(id="deck-empty", owner_id="user-1", name="Brewing")


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session
