"""
Engine and sessions for the deck store.

One async engine backs the card catalog (``cards``) and the deck tables
(``decks``, ``deck_cards``). Deck routes get a request-scoped session from
``get_session``; the catalog import job opens its own through
``async_session_factory``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from riftdeck.config import settings
from riftdeck.models.db import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Loaded deck rows stay readable after the route's commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session for the deck routes.

    A deck edit is committed only if the route returns normally. A database
    error rolls back the whole edit, so a partially applied placement diff
    is never stored.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the cards, decks and deck_cards tables if they are missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
