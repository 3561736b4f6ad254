"""In-memory holding store."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from portfolio_tracker.core.errors import (
    CapacityExceededError,
    HoldingNotFoundError,
    HoldingValidationError,
)
from .models import Holding, HoldingCreate
from .validation import DEFAULT_POLICY, ValidationPolicy, normalize_symbol, validate_candidate

logger = logging.getLogger(__name__)


class HoldingStore:
    """Ordered collection of holdings for a single portfolio.

    Holdings are keyed by canonical symbol and listed in insertion order.
    All access goes through one lock, so a listing never observes a holding
    mid-insert or mid-removal.
    """

    def __init__(
        self,
        max_holdings: Optional[int] = None,
        policy: ValidationPolicy = DEFAULT_POLICY,
    ):
        """Initialize an empty store.

        Args:
            max_holdings: Capacity limit. None means unbounded.
            policy: Optional validation policies (e.g. single share)
        """
        if max_holdings is not None and max_holdings < 1:
            raise ValueError(f"max_holdings must be positive or None, got {max_holdings}")
        self.max_holdings = max_holdings
        self.policy = policy
        self._holdings: Dict[str, Holding] = {}
        self._held_back: List[Holding] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._holdings)

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        with self._lock:
            return normalize_symbol(symbol) in self._holdings

    def add(self, candidate: HoldingCreate) -> Holding:
        """Validate and insert a new holding.

        Args:
            candidate: Holding to add

        Returns:
            The stored holding

        Raises:
            HoldingValidationError: Invalid symbol/shares/price, duplicate
                symbol, or portfolio at capacity
        """
        with self._lock:
            valid = validate_candidate(candidate, self._holdings.keys(), self.policy)

            if self.max_holdings is not None and len(self._holdings) >= self.max_holdings:
                raise CapacityExceededError(self.max_holdings)

            holding = Holding(
                symbol=valid.symbol,
                shares=valid.shares,
                purchase_price=valid.purchase_price,
                name=(valid.name or "").strip() or None,
            )
            self._holdings[holding.symbol] = holding

        logger.info(f"Added {holding.symbol}: {holding.shares} shares @ ${holding.purchase_price:.2f}")
        return holding

    def remove(self, symbol: str) -> None:
        """Remove a holding by symbol (case-insensitive).

        Raises:
            HoldingNotFoundError: No holding with that symbol
        """
        key = normalize_symbol(symbol)
        with self._lock:
            if key not in self._holdings:
                raise HoldingNotFoundError(key)
            del self._holdings[key]
        logger.info(f"Removed {key}")

    def get(self, symbol: str) -> Holding:
        """Get a holding by symbol (case-insensitive).

        Raises:
            HoldingNotFoundError: No holding with that symbol
        """
        key = normalize_symbol(symbol)
        with self._lock:
            holding = self._holdings.get(key)
        if holding is None:
            raise HoldingNotFoundError(key)
        return holding

    def list(self) -> List[Holding]:
        """Snapshot of all holdings in insertion order."""
        with self._lock:
            return list(self._holdings.values())

    def symbols(self) -> List[str]:
        with self._lock:
            return list(self._holdings.keys())

    def restore(self, holdings: Iterable[Holding]) -> int:
        """Seed the store from previously saved holdings.

        Each record goes through the same rules as ``add``. Records that no
        longer pass (e.g. a lower capacity or a stricter share policy) are
        held back rather than admitted, and ``snapshot`` hands them back so
        the next save keeps them.

        Returns:
            Number of holdings admitted
        """
        admitted = 0
        with self._lock:
            for saved in holdings:
                candidate = HoldingCreate(
                    symbol=saved.symbol,
                    shares=saved.shares,
                    purchase_price=saved.purchase_price,
                    name=saved.name,
                )
                try:
                    valid = validate_candidate(candidate, self._holdings.keys(), self.policy)
                    if self.max_holdings is not None and len(self._holdings) >= self.max_holdings:
                        raise CapacityExceededError(self.max_holdings)
                except HoldingValidationError as e:
                    logger.warning(f"Holding back saved holding {saved.symbol}: {e}")
                    self._held_back.append(saved)
                    continue

                self._holdings[valid.symbol] = saved.model_copy(update={"symbol": valid.symbol})
                admitted += 1

        logger.info(f"Restored {admitted} holding(s)")
        return admitted

    def snapshot(self) -> List[Holding]:
        """Everything a save should write back.

        The live holdings in insertion order, followed by the saved records
        ``restore`` held back. A held-back record is dropped once a live
        holding has taken its symbol.
        """
        with self._lock:
            holdings = list(self._holdings.values())
            seen = set(self._holdings)
            for saved in self._held_back:
                key = normalize_symbol(saved.symbol)
                if key not in seen:
                    seen.add(key)
                    holdings.append(saved)
            return holdings
