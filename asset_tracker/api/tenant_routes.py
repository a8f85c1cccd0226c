"""
Asset Tracker — Tenant Endpoints

All routes are scoped by an opaque tenant id (the UI passcode): market prices,
assets, the portfolio summary and passcode changes. Writing a market price
refreshes current_price on every asset of the same category.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from asset_tracker.api.dependencies import get_fetcher, get_session
from asset_tracker.config import AssetCategory
from asset_tracker.engine import calculate_portfolio_stats
from asset_tracker.extractor import unwrap_price
from asset_tracker.extractor.profiles import get_profile
from asset_tracker.pipeline.fetcher import PageFetcher
from asset_tracker.pipeline.scrape import scrape_price
from asset_tracker.store import assets as asset_store
from asset_tracker.store import market_prices as store
from asset_tracker.store import tenants as tenant_store

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/tenants/{tenant_id}", tags=["tenants"])


class MarketPriceIn(BaseModel):
    price: Decimal = Field(..., ge=0)


class MarketPriceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    price: Decimal
    updated_at: datetime | None = None


class AssetIn(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = "Unnamed Asset"
    category: AssetCategory = AssetCategory.OTHER
    type: str = "N/A"
    units: Decimal = Field(default=Decimal("0"), ge=0)
    buy_price: Decimal = Field(default=Decimal("0"), ge=0)
    current_price: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = "VND"
    buy_date: str | None = None
    note: str = ""


class AssetUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str | None = None
    category: AssetCategory | None = None
    type: str | None = None
    units: Decimal | None = Field(default=None, ge=0)
    buy_price: Decimal | None = Field(default=None, ge=0)
    current_price: Decimal | None = Field(default=None, ge=0)
    currency: str | None = None
    buy_date: str | None = None
    note: str | None = None


class AssetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    type: str
    units: Decimal
    buy_price: Decimal
    current_price: Decimal
    currency: str
    buy_date: str | None = None
    note: str
    updated_at: datetime | None = None


class TenantRename(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    new_tenant_id: str = Field(..., min_length=1)


@router.post("/market-prices/{profile_name}/sync")
async def sync_market_price(
    tenant_id: str,
    profile_name: str,
    fetcher: PageFetcher = Depends(get_fetcher),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Scrape a source and store its price under the profile's symbol."""
    profile = get_profile(profile_name)
    result = await scrape_price(profile, fetcher)
    price = unwrap_price(result, profile.label)

    updated = await store.update_market_price(session, tenant_id, profile.symbol, price)
    logger.info(
        "market_price_synced",
        tenant_id=tenant_id,
        profile=profile.name,
        price=price,
        assets_updated=updated,
    )
    return {
        "symbol": profile.symbol,
        "price": price,
        "updated_assets": updated,
        "success": True,
    }


@router.put("/market-prices/{symbol}")
async def put_market_price(
    tenant_id: str,
    symbol: str,
    body: MarketPriceIn,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    updated = await store.update_market_price(session, tenant_id, symbol, body.price)
    record = await store.get_market_price(session, tenant_id, symbol)
    return {
        **MarketPriceOut.model_validate(record).model_dump(mode="json"),
        "updated_assets": updated,
        "success": True,
    }


@router.get("/market-prices")
async def list_market_prices(
    tenant_id: str,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    records = await store.list_market_prices(session, tenant_id)
    return {
        "market_prices": [MarketPriceOut.model_validate(r).model_dump(mode="json") for r in records],
        "success": True,
    }


@router.delete("/market-prices/{symbol}")
async def delete_market_price(
    tenant_id: str,
    symbol: str,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    await store.delete_market_price(session, tenant_id, symbol)
    return {"success": True}


@router.get("/portfolio")
async def get_portfolio(
    tenant_id: str,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    assets = await asset_store.list_assets(session, tenant_id)
    stats = calculate_portfolio_stats(assets)
    return {**stats.model_dump(mode="json"), "success": True}


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


def _asset_payload(asset: Any) -> dict[str, Any]:
    return AssetOut.model_validate(asset).model_dump(mode="json")


@router.post("/assets", status_code=status.HTTP_201_CREATED)
async def create_asset(
    tenant_id: str,
    body: AssetIn,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    asset = await asset_store.create_asset(session, tenant_id, body.model_dump())
    return {"asset": _asset_payload(asset), "success": True}


@router.get("/assets")
async def list_assets(
    tenant_id: str,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    assets = await asset_store.list_assets(session, tenant_id)
    return {"assets": [_asset_payload(a) for a in assets], "success": True}


@router.get("/assets/{asset_id}")
async def get_asset(
    tenant_id: str,
    asset_id: int,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    asset = await asset_store.get_asset(session, tenant_id, asset_id)
    return {"asset": _asset_payload(asset), "success": True}


@router.patch("/assets/{asset_id}")
async def update_asset(
    tenant_id: str,
    asset_id: int,
    body: AssetUpdate,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Partial update: only fields present in the body change."""
    asset = await asset_store.update_asset(
        session, tenant_id, asset_id, body.model_dump(exclude_unset=True, exclude_none=True)
    )
    return {"asset": _asset_payload(asset), "success": True}


@router.delete("/assets/{asset_id}")
async def delete_asset(
    tenant_id: str,
    asset_id: int,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    await asset_store.delete_asset(session, tenant_id, asset_id)
    return {"success": True}


# ---------------------------------------------------------------------------
# Passcode change
# ---------------------------------------------------------------------------


@router.post("/rename")
async def rename_tenant(
    tenant_id: str,
    body: TenantRename,
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Move every asset and market price to a new tenant id."""
    moved = await tenant_store.rename_tenant(session, tenant_id, body.new_tenant_id)
    return {"tenant_id": body.new_tenant_id, "moved": moved, "success": True}
