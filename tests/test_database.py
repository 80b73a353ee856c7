"""Tests for deck store sessions and table creation."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from riftdeck.db import database
from riftdeck.db.operations import get_deck
from riftdeck.models.db import DeckDB


@pytest.fixture
def patched_factory(monkeypatch: pytest.MonkeyPatch, session_factory):
    monkeypatch.setattr(database, "async_session_factory", session_factory)
    return session_factory


def _deck_row() -> DeckDB:
    return DeckDB(id="deck-1", owner_id="user-1", name="Draft")


class TestGetSession:
    async def test_commits_when_route_returns(self, patched_factory) -> None:
        sessions = database.get_session()
        session = await anext(sessions)
        session.add(_deck_row())

        with pytest.raises(StopAsyncIteration):
            await anext(sessions)

        async with patched_factory() as check:
            assert await get_deck(check, "deck-1") is not None

    async def test_rolls_back_on_database_error(self, patched_factory) -> None:
        sessions = database.get_session()
        session = await anext(sessions)
        session.add(_deck_row())
        await session.flush()

        with pytest.raises(SQLAlchemyError):
            await sessions.athrow(SQLAlchemyError("write failed"))

        async with patched_factory() as check:
            assert await get_deck(check, "deck-1") is None


class TestInitDb:
    async def test_creates_tables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        monkeypatch.setattr(database, "engine", engine)

        await database.init_db()

        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync: inspect(sync).get_table_names())
        await engine.dispose()

        assert {"cards", "decks", "deck_cards"} <= set(tables)
