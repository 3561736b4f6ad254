"""FastAPI application setup."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from portfolio_tracker.api.deps import limiter
from portfolio_tracker.api.routes import portfolio, quotes
from portfolio_tracker.config import (
    PRODUCT_DESCRIPTION,
    PRODUCT_NAME,
    PRODUCT_TAGLINE,
    PRODUCT_VERSION,
    Settings,
    get_settings,
)
from portfolio_tracker.core.portfolio.store import HoldingStore
from portfolio_tracker.core.portfolio.validation import ValidationPolicy
from portfolio_tracker.core.portfolio.valuation import ValuationService
from portfolio_tracker.data.market import QuoteSource, get_quote_source

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[HoldingStore] = None,
    quote_source: Optional[QuoteSource] = None,
) -> FastAPI:
    """Build the API with its own store and valuation service.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        store: Holding store to serve. Built from settings if omitted.
        quote_source: Quote source for valuations. Built from settings if omitted.
    """
    settings = settings or get_settings()
    if store is None:
        store = HoldingStore(
            max_holdings=settings.holding_capacity,
            policy=ValidationPolicy(require_single_share=settings.require_single_share),
        )
    if quote_source is None:
        quote_source = get_quote_source(settings)

    valuation = ValuationService(
        store=store,
        quote_source=quote_source,
        max_workers=settings.valuation_max_workers,
        timeout_seconds=settings.valuation_timeout_seconds,
    )

    app = FastAPI(
        title=f"{PRODUCT_NAME} API",
        description=PRODUCT_DESCRIPTION,
        version=PRODUCT_VERSION,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.valuation = valuation

    # Add rate limiter to app state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.on_event("startup")
    def startup():
        """Restore saved holdings."""
        if settings.persist_holdings:
            from portfolio_tracker.core.portfolio.archive import HoldingArchive
            from portfolio_tracker.db.database import init_db

            init_db()
            store.restore(HoldingArchive().load())

    @app.on_event("shutdown")
    def shutdown():
        """Save holdings and release the quote pool."""
        if settings.persist_holdings:
            from portfolio_tracker.core.portfolio.archive import HoldingArchive

            holdings = store.snapshot()
            HoldingArchive().save(holdings)
            logger.info(f"Saved {len(holdings)} holding(s)")
        valuation.shutdown()

    @app.get("/api/health")
    def health():
        """Health check endpoint."""
        return {
            "name": PRODUCT_NAME,
            "version": PRODUCT_VERSION,
            "status": "ok",
            "tagline": PRODUCT_TAGLINE,
        }

    # Mount API routers
    app.include_router(portfolio.router, prefix="/api/portfolio", tags=["portfolio"])
    app.include_router(quotes.router, prefix="/api/quotes", tags=["quotes"])

    return app


app = create_app()
