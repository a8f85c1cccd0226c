"""
Asset Tracker — Fetch-and-Extract Wrapper

The single shared path behind every scrape entry point:
fetch the profile's page, run the extractor, and fold any failure into an
ExtractionResult. Never raises.
"""

from __future__ import annotations

import structlog

from asset_tracker.errors import PageFetchError
from asset_tracker.extractor import FetchError, Found, NotFound
from asset_tracker.extractor.price_extractor import extract
from asset_tracker.extractor.profiles import SourceProfile
from asset_tracker.pipeline.fetcher import PageFetcher

logger = structlog.get_logger(__name__)


async def scrape_price(
    profile: SourceProfile,
    fetcher: PageFetcher,
) -> Found | NotFound | FetchError:
    """
    Fetch `profile.source_url` and extract its price.

    Args:
        profile: Source profile to scrape.
        fetcher: An initialized PageFetcher.

    Returns:
        Found, NotFound, or FetchError for network and parsing failures.
    """
    logger.info("scrape_requested", profile=profile.name, url=profile.source_url)

    try:
        html = await fetcher.fetch_page(profile.source_url)
    except PageFetchError as e:
        return FetchError(message=str(e))

    try:
        return extract(html, profile)
    except Exception as e:
        logger.error(
            "scrape_parse_failed",
            profile=profile.name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return FetchError(message=str(e) or type(e).__name__)
