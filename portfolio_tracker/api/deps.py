"""FastAPI dependencies."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from portfolio_tracker.core.portfolio.store import HoldingStore
from portfolio_tracker.core.portfolio.valuation import ValuationService

# Rate limiter - key by IP address
limiter = Limiter(key_func=get_remote_address)


def get_store(request: Request) -> HoldingStore:
    """The holding store owned by this application instance."""
    return request.app.state.store


def get_valuation_service(request: Request) -> ValuationService:
    """The valuation service owned by this application instance."""
    return request.app.state.valuation
