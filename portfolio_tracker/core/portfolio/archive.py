"""Holding snapshot archive.

Keeps a copy of the store's holdings in the database so a portfolio can
outlive a single process. The store calls it only at process boundaries;
nothing here is consulted during valuation.
"""

from __future__ import annotations

import logging
from datetime import timezone
from typing import Callable, Iterable, List

from sqlalchemy.orm import Session

from portfolio_tracker.db.database import SessionLocal, get_db
from portfolio_tracker.db.models import HoldingRecord
from .models import Holding

logger = logging.getLogger(__name__)


class HoldingArchive:
    """load()/save() of a whole portfolio snapshot."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def load(self) -> List[Holding]:
        """Load saved holdings in their original insertion order."""
        with get_db(self.session_factory) as db:
            records = db.query(HoldingRecord).order_by(HoldingRecord.position).all()
            holdings = [
                Holding(
                    symbol=r.symbol,
                    shares=r.shares,
                    purchase_price=r.purchase_price,
                    name=r.name,
                    # SQLite drops tzinfo; timestamps are stored as UTC
                    added_at=r.added_at.replace(tzinfo=timezone.utc),
                )
                for r in records
            ]
        logger.debug(f"Loaded {len(holdings)} holding(s) from archive")
        return holdings

    def save(self, holdings: Iterable[Holding]) -> None:
        """Replace the saved snapshot with the given holdings."""
        holdings = list(holdings)
        with get_db(self.session_factory) as db:
            db.query(HoldingRecord).delete()
            for position, h in enumerate(holdings):
                db.add(
                    HoldingRecord(
                        symbol=h.symbol,
                        name=h.name,
                        shares=h.shares,
                        purchase_price=h.purchase_price,
                        position=position,
                        added_at=h.added_at.astimezone(timezone.utc).replace(tzinfo=None),
                    )
                )
        logger.debug(f"Saved {len(holdings)} holding(s) to archive")
