"""Portfolio API routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from portfolio_tracker.api.deps import get_store, get_valuation_service, limiter
from portfolio_tracker.core.errors import (
    CapacityExceededError,
    DuplicateSymbolError,
    HoldingNotFoundError,
    HoldingValidationError,
)
from portfolio_tracker.core.portfolio.models import (
    EnrichedHolding,
    Holding,
    HoldingCreate,
    PortfolioSummary,
    PortfolioValuation,
)
from portfolio_tracker.core.portfolio.store import HoldingStore
from portfolio_tracker.core.portfolio.valuation import ValuationService

router = APIRouter()


def _error_detail(error: Exception) -> dict:
    return {"error": error.code, "message": str(error)}


@router.get("/", response_model=List[EnrichedHolding])
def list_holdings(valuation: ValuationService = Depends(get_valuation_service)):
    """List all holdings with current prices.

    Holdings whose quote could not be fetched are still listed, without a
    current price, gain/loss or percent change.
    """
    return valuation.list_enriched()


@router.get("/summary", response_model=PortfolioSummary)
def get_summary(valuation: ValuationService = Depends(get_valuation_service)):
    """Get portfolio totals and the top performer."""
    return valuation.summary()


@router.get("/valuation", response_model=PortfolioValuation)
def get_valuation(valuation: ValuationService = Depends(get_valuation_service)):
    """Get enriched holdings and the summary from a single round of quotes."""
    return valuation.valuate()


@router.post("/", response_model=Holding, status_code=status.HTTP_201_CREATED)
@limiter.limit("60/minute")
def add_holding(
    request: Request,
    payload: HoldingCreate,
    store: HoldingStore = Depends(get_store),
):
    """Add a new holding."""
    try:
        return store.add(payload)
    except (DuplicateSymbolError, CapacityExceededError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=_error_detail(e))
    except HoldingValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_error_detail(e))


@router.get("/{symbol}", response_model=Holding)
def get_holding(symbol: str, store: HoldingStore = Depends(get_store)):
    """Get a specific holding by symbol."""
    try:
        return store.get(symbol)
    except HoldingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_error_detail(e))


@router.delete("/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
def delete_holding(symbol: str, store: HoldingStore = Depends(get_store)):
    """Delete a holding by symbol."""
    try:
        store.remove(symbol)
    except HoldingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_error_detail(e))
