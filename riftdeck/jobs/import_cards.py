"""
Import card catalog records into the database.

Loads a JSON list of cards exported from the card data provider and upserts
them, so deck validation can resolve card types, domains and prices.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from riftdeck.config import settings
from riftdeck.db.database import async_session_factory, init_db
from riftdeck.db.operations import upsert_card
from riftdeck.services.card_catalog import load_card_catalog

logger = logging.getLogger(__name__)


async def run_import(
    path: Path,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> int:
    """
    Upsert every card in `path`.

    Returns:
        Number of cards written.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If any record is malformed (nothing is written)
    """
    logger.info("Loading card catalog from %s...", path)
    cards = load_card_catalog(path)

    async with session_factory() as session:
        for card in cards:
            await upsert_card(session, card)
        await session.commit()

    logger.info("Imported %d cards", len(cards))
    return len(cards)


async def _main(path: Path) -> None:
    await init_db()
    try:
        await run_import(path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to import card catalog: %s", e)
        raise


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Import a card catalog JSON file.")
    parser.add_argument("path", nargs="?", default=settings.card_catalog_path)
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(_main(Path(args.path)))


if __name__ == "__main__":
    main()
