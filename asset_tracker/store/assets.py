"""
Asset Tracker — Asset Store

Tenant-scoped create / update / delete for holdings. An asset saved without a
current price, or moved to another category, picks up the tenant's market
price for that category when one is set.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from asset_tracker.errors import AssetNotFoundError
from asset_tracker.models import Asset, MarketPrice
from asset_tracker.store.market_prices import symbol_matches_category

logger = structlog.get_logger(__name__)

EDITABLE_FIELDS = frozenset({
    "name",
    "category",
    "type",
    "units",
    "buy_price",
    "current_price",
    "currency",
    "buy_date",
    "note",
})


async def market_price_for_category(
    session: AsyncSession, tenant_id: str, category: str
) -> Decimal | None:
    """The tenant's positive market price for `category`, or None."""
    records = (
        await session.execute(select(MarketPrice).where(MarketPrice.tenant_id == tenant_id))
    ).scalars().all()
    for record in records:
        if symbol_matches_category(category, record.symbol) and record.price > 0:
            return record.price
    return None


async def create_asset(session: AsyncSession, tenant_id: str, fields: dict[str, Any]) -> Asset:
    """
    Insert a new asset for the tenant.

    A zero or missing current_price is replaced by the category's market
    price when the tenant has one.
    """
    values = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    if not values.get("current_price"):
        market_price = await market_price_for_category(session, tenant_id, values.get("category", ""))
        if market_price is not None:
            values["current_price"] = market_price

    asset = Asset(tenant_id=tenant_id, updated_at=datetime.now(timezone.utc), **values)
    session.add(asset)
    try:
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error("asset_create_failed", tenant_id=tenant_id, error=str(e))
        raise

    logger.info("asset_created", tenant_id=tenant_id, asset_id=asset.id, category=asset.category)
    return asset


async def get_asset(session: AsyncSession, tenant_id: str, asset_id: int) -> Asset:
    asset = await session.get(Asset, asset_id)
    if asset is None or asset.tenant_id != tenant_id:
        raise AssetNotFoundError(f"No asset with id {asset_id}")
    return asset


async def list_assets(session: AsyncSession, tenant_id: str) -> list[Asset]:
    result = await session.execute(
        select(Asset).where(Asset.tenant_id == tenant_id).order_by(Asset.id)
    )
    return list(result.scalars().all())


async def update_asset(
    session: AsyncSession,
    tenant_id: str,
    asset_id: int,
    changes: dict[str, Any],
) -> Asset:
    """
    Apply a partial update.

    Changing the category without also setting current_price re-prices the
    asset from the new category's market price, if there is one.
    """
    asset = await get_asset(session, tenant_id, asset_id)
    values = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}

    new_category = values.get("category")
    if (
        new_category is not None
        and new_category != asset.category
        and "current_price" not in values
    ):
        market_price = await market_price_for_category(session, tenant_id, new_category)
        if market_price is not None:
            values["current_price"] = market_price

    for field, value in values.items():
        setattr(asset, field, value)
    asset.updated_at = datetime.now(timezone.utc)

    try:
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error("asset_update_failed", tenant_id=tenant_id, asset_id=asset_id, error=str(e))
        raise

    logger.info("asset_updated", tenant_id=tenant_id, asset_id=asset_id, fields=sorted(values))
    return asset


async def delete_asset(session: AsyncSession, tenant_id: str, asset_id: int) -> None:
    asset = await get_asset(session, tenant_id, asset_id)
    await session.delete(asset)
    await session.commit()
    logger.info("asset_deleted", tenant_id=tenant_id, asset_id=asset_id)
