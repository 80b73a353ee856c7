"""Tests for scheduled jobs."""

import json
from pathlib import Path

import pytest
from sqlalchemy import func, select

from riftdeck.db import get_card
from riftdeck.jobs.import_cards import run_import
from riftdeck.models.db import CardDB

SAMPLE_CATALOG = Path(__file__).parent.parent / "data" / "cards.json"


class TestRunImport:
    async def test_imports_sample_catalog(self, session_factory) -> None:
        count = await run_import(SAMPLE_CATALOG, session_factory=session_factory)

        assert count == 5
        async with session_factory() as session:
            darius = await get_card(session, "2")
            assert darius is not None
            assert darius.card_type == "LEGEND"
            assert darius.domains == ["BODY", "FURY"]

    async def test_reimport_updates_in_place(self, session_factory, tmp_path: Path) -> None:
        path = tmp_path / "cards.json"
        record = {"id": "1", "name": "Armed Assailant", "cardType": "UNIT", "marketPrice": 0.5}
        path.write_text(json.dumps([record]))
        await run_import(path, session_factory=session_factory)

        path.write_text(json.dumps([{**record, "marketPrice": 1.25}]))
        await run_import(path, session_factory=session_factory)

        async with session_factory() as session:
            total = await session.scalar(select(func.count()).select_from(CardDB))
            card = await get_card(session, "1")

        assert total == 1
        assert card is not None
        assert card.market_price == 1.25

    async def test_malformed_record_writes_nothing(
        self, session_factory, tmp_path: Path
    ) -> None:
        path = tmp_path / "cards.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "1", "name": "Fine", "cardType": "UNIT"},
                    {"id": "2", "name": "No Type"},
                ]
            )
        )

        with pytest.raises(ValueError):
            await run_import(path, session_factory=session_factory)

        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(CardDB)) == 0

    async def test_missing_file(self, session_factory, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await run_import(tmp_path / "nope.json", session_factory=session_factory)
