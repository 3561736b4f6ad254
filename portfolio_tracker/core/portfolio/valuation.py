"""Valuation service - enriches holdings with live quotes and summarizes them."""

from __future__ import annotations

import logging
import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, Iterable, List, Optional

from portfolio_tracker.core.errors import QuoteError
from portfolio_tracker.data.market.base import QuoteSource
from portfolio_tracker.data.market.models import Price
from .models import EnrichedHolding, Holding, PortfolioSummary, PortfolioValuation, TopPerformer
from .store import HoldingStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8
DEFAULT_TIMEOUT_SECONDS = 10.0


def enrich_holding(holding: Holding, current_price: Optional[float]) -> EnrichedHolding:
    """Attach a current price and derived metrics to a holding.

    Gain/loss and percent change are only computed when a price is known.
    """
    total_investment = holding.shares * holding.purchase_price

    if current_price is None:
        return EnrichedHolding(
            **holding.model_dump(),
            current_price=None,
            current_value=total_investment,
            total_investment=total_investment,
        )

    delta = current_price - holding.purchase_price
    return EnrichedHolding(
        **holding.model_dump(),
        current_price=current_price,
        current_value=holding.shares * current_price,
        total_investment=total_investment,
        gain_loss=delta * holding.shares,
        percent_change=delta / holding.purchase_price * 100,
    )


def summarize(holdings: Iterable[EnrichedHolding]) -> PortfolioSummary:
    """Aggregate enriched holdings into portfolio-level metrics.

    Holdings without a current price are valued at cost and contribute no
    gain or loss; they are never considered for top performer.
    """
    total_value = 0.0
    total_investment = 0.0
    total_gain_loss = 0.0
    holdings_count = 0
    priced_count = 0
    top: Optional[EnrichedHolding] = None

    for h in holdings:
        holdings_count += 1
        total_value += h.current_value
        total_investment += h.total_investment

        if not h.is_priced:
            continue

        priced_count += 1
        total_gain_loss += h.gain_loss
        # Strict comparison keeps the earliest holding on ties
        if top is None or h.percent_change > top.percent_change:
            top = h

    gain_loss_pct = (total_gain_loss / total_investment) * 100 if total_investment > 0 else 0.0

    return PortfolioSummary(
        total_value=total_value,
        total_investment=total_investment,
        total_gain_loss=total_gain_loss,
        gain_loss_percentage=gain_loss_pct,
        top_performer=(
            TopPerformer(symbol=top.symbol, gain_percentage=top.percent_change) if top else None
        ),
        holdings_count=holdings_count,
        priced_count=priced_count,
    )


class ValuationService:
    """Service for valuing the holdings of one store against a quote source."""

    def __init__(
        self,
        store: HoldingStore,
        quote_source: QuoteSource,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Initialize the valuation service.

        Args:
            store: Holding store to value
            quote_source: Source of current prices
            max_workers: Size of the quote fan-out pool
            timeout_seconds: How long to wait for all quotes before treating
                the stragglers as failed
        """
        self.store = store
        self.quote_source = quote_source
        self.max_workers = max_workers
        self.timeout_seconds = timeout_seconds
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="quote_fetch"
                )
            return self._executor

    def shutdown(self) -> None:
        """Release the fan-out pool. In-flight fetches are left to finish."""
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=False)
                self._executor = None

    def fetch_prices(self, symbols: List[str]) -> Dict[str, float]:
        """Fetch prices for many symbols concurrently.

        Each fetch succeeds or fails on its own. Fetches still running when
        the timeout expires are abandoned, not cancelled.

        Args:
            symbols: Stock ticker symbols

        Returns:
            Dict of symbol -> price (only includes successful fetches)
        """
        if not symbols:
            return {}

        executor = self._get_executor()
        futures: Dict[Future, str] = {
            executor.submit(self.quote_source.fetch_price, symbol): symbol for symbol in symbols
        }
        done, not_done = wait(futures, timeout=self.timeout_seconds)

        for future in not_done:
            logger.warning(
                f"Price fetch for {futures[future]} did not complete within {self.timeout_seconds}s"
            )

        prices: Dict[str, float] = {}
        for future in done:
            symbol = futures[future]
            try:
                price = future.result()
            except QuoteError as e:
                logger.warning(str(e))
                continue
            except Exception as e:
                logger.warning(f"Unexpected error fetching price for {symbol}: {e}")
                continue

            if (
                isinstance(price, bool)
                or not isinstance(price, (int, float))
                or not math.isfinite(price)
                or price <= 0
            ):
                logger.warning(f"Ignoring invalid price for {symbol}: {price!r}")
                continue
            prices[symbol] = float(price)

        return prices

    def valuate(self) -> PortfolioValuation:
        """Enrich every holding and summarize, from one snapshot and one round of quotes."""
        holdings = self.store.list()
        prices = self.fetch_prices([h.symbol for h in holdings])

        enriched = [enrich_holding(h, prices.get(h.symbol)) for h in holdings]
        unpriced = [h.symbol for h in enriched if not h.is_priced]

        if unpriced:
            logger.info(f"Partial valuation: no price for {', '.join(unpriced)}")

        return PortfolioValuation(
            holdings=enriched,
            summary=summarize(enriched),
            partial=bool(unpriced),
            unpriced_symbols=unpriced,
        )

    def list_enriched(self) -> List[EnrichedHolding]:
        return self.valuate().holdings

    def summary(self) -> PortfolioSummary:
        return self.valuate().summary

    def get_quote(self, symbol: str) -> Price:
        """Look up a single symbol.

        Raises:
            QuoteError: If the price could not be fetched
        """
        return self.quote_source.get_quote(symbol)
