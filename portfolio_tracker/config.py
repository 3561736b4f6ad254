"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

# ===========================================
# Product Branding
# ===========================================
PRODUCT_NAME = "Stock Portfolio Tracker"
PRODUCT_TAGLINE = "Know what your holdings are worth right now."
PRODUCT_VERSION = "1.0.0"
PRODUCT_DESCRIPTION = "Track a small set of stock holdings against live market quotes."


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API server
    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)

    # Holding snapshot archive
    database_url: str = "sqlite:///./portfolio_tracker.db"
    persist_holdings: bool = True

    # Market Data
    quote_source: str = "yfinance"  # yfinance, alphavantage
    alpha_vantage_api_key: str = ""
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    quote_timeout_seconds: int = 10

    # Valuation fan-out
    valuation_timeout_seconds: float = 15.0
    valuation_max_workers: int = 8

    # Portfolio policy
    max_holdings: Optional[int] = 5  # None or <= 0 means unbounded
    require_single_share: bool = False

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def holding_capacity(self) -> Optional[int]:
        """Capacity passed to the store, None when unbounded."""
        if self.max_holdings is None or self.max_holdings <= 0:
            return None
        return self.max_holdings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
