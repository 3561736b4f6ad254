"""Quote lookup routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio_tracker.api.deps import get_valuation_service
from portfolio_tracker.core.errors import QuoteError
from portfolio_tracker.core.portfolio.valuation import ValuationService
from portfolio_tracker.data.market.models import Price

router = APIRouter()


@router.get("/{symbol}", response_model=Price)
def get_quote(symbol: str, valuation: ValuationService = Depends(get_valuation_service)):
    """Get the current price for any symbol, held or not."""
    try:
        return valuation.get_quote(symbol)
    except QuoteError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": e.code, "message": str(e)},
        )
