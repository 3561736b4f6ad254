"""Tests for the holding snapshot archive."""

from datetime import datetime, timedelta, timezone

import pytest

from portfolio_tracker.core.portfolio.archive import HoldingArchive
from portfolio_tracker.core.portfolio.models import Holding
from portfolio_tracker.db.database import init_db, make_engine, make_session_factory


@pytest.fixture
def archive(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'holdings.db'}")
    init_db(engine)
    yield HoldingArchive(make_session_factory(engine))
    engine.dispose()


class TestHoldingArchive:
    """Tests for HoldingArchive."""

    def test_empty_archive_loads_nothing(self, archive):
        assert archive.load() == []

    def test_save_then_load_preserves_order(self, archive):
        added_at = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
        holdings = [
            Holding(symbol="NVDA", shares=3, purchase_price=400.0, added_at=added_at),
            Holding(symbol="AAPL", shares=1.5, purchase_price=150.0, name="Apple Inc.", added_at=added_at),
        ]

        archive.save(holdings)

        assert archive.load() == holdings

    def test_save_replaces_previous_snapshot(self, archive):
        archive.save([Holding(symbol="AAPL", shares=1, purchase_price=150.0)])
        archive.save([Holding(symbol="MSFT", shares=2, purchase_price=300.0)])

        assert [h.symbol for h in archive.load()] == ["MSFT"]

    def test_added_at_is_stored_as_utc(self, archive):
        local = datetime(2024, 3, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

        archive.save([Holding(symbol="AAPL", shares=1, purchase_price=150.0, added_at=local)])

        loaded = archive.load()[0].added_at
        assert loaded == local
        assert loaded.tzinfo == timezone.utc
        assert loaded.hour == 12
