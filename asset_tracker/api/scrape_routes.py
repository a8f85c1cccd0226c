"""
Asset Tracker — Scrape Endpoints

Every scrape endpoint shares one handler; registering a source is a single
line that picks its profile. Outcomes map to:
    Found     -> 200 {price, success: true}
    NotFound  -> 404 {error, success: false}
    FetchError-> 500 {error, success: false}
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends

from asset_tracker.api.dependencies import get_fetcher
from asset_tracker.extractor import unwrap_price
from asset_tracker.extractor.profiles import GOLD_PNJ_PROFILE, SILVER_PROFILE, SourceProfile
from asset_tracker.pipeline.fetcher import PageFetcher
from asset_tracker.pipeline.scrape import scrape_price

router = APIRouter(prefix="/api", tags=["scrape"])


def scrape_endpoint(profile: SourceProfile) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def endpoint(fetcher: PageFetcher = Depends(get_fetcher)) -> dict[str, Any]:
        result = await scrape_price(profile, fetcher)
        # NotFound / FetchError are raised here and rendered by the app's error handler.
        price = unwrap_price(result, profile.label)
        return {"price": price, "success": True}

    endpoint.__name__ = f"scrape_{profile.name}"
    return endpoint


router.add_api_route("/scrape-silver", scrape_endpoint(SILVER_PROFILE), methods=["GET"])
router.add_api_route("/scrape-gold", scrape_endpoint(GOLD_PNJ_PROFILE), methods=["GET"])
