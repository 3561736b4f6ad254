"""API server entry point."""

import logging

import uvicorn

from portfolio_tracker.config import get_settings

logger = logging.getLogger(__name__)


def run() -> None:
    """Serve the portfolio API on the configured host and port."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Serving API on {settings.host}:{settings.port}")

    uvicorn.run(
        "portfolio_tracker.api.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
