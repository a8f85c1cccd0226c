"""
Asset Tracker — Application Entrypoint

Configures structlog and serves the FastAPI app with uvicorn.

Run via:
    python -m asset_tracker.main
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from asset_tracker import __version__
from asset_tracker.api import create_app
from asset_tracker.config import settings


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def _configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Configure stdlib logging first (uvicorn, httpx, sqlalchemy)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Application Startup
# ---------------------------------------------------------------------------


def main() -> None:
    _configure_logging(log_level=settings.LOG_LEVEL)
    logger = structlog.get_logger(__name__)

    logger.info(
        "asset_tracker_startup_begin",
        version=__version__,
        host=settings.HOST,
        port=settings.PORT,
        scrape_timeout_seconds=settings.SCRAPE_TIMEOUT_SECONDS,
    )

    uvicorn.run(create_app(), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
