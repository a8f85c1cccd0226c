"""
Asset Tracker — Market Price Store

Persists the latest price per (tenant, symbol) and propagates it to every
asset of that tenant whose category matches the symbol. Each write commits
its own unit of work.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from asset_tracker.errors import MarketPriceNotFoundError
from asset_tracker.models import Asset, MarketPrice

logger = structlog.get_logger(__name__)


def symbol_matches_category(category: str | None, symbol: str) -> bool:
    """Categories match symbols after trimming, ignoring case."""
    return (category or "").strip().lower() == symbol.strip().lower()


async def update_market_price(
    session: AsyncSession,
    tenant_id: str,
    symbol: str,
    price: Decimal | int,
) -> int:
    """
    Upsert the market price and refresh matching assets.

    Args:
        session: Async DB session.
        tenant_id: Opaque tenant identifier.
        symbol: Market price symbol, compared case-insensitively to asset category.
        price: New price; must be non-negative.

    Returns:
        Number of assets whose current_price was updated.
    """
    price = Decimal(price)
    if price < Decimal("0"):
        raise ValueError(f"price must be non-negative, got {price}")

    now = datetime.now(timezone.utc)

    try:
        record = await session.get(MarketPrice, (tenant_id, symbol))
        if record is None:
            record = MarketPrice(tenant_id=tenant_id, symbol=symbol, price=price, updated_at=now)
            session.add(record)
        else:
            record.price = price
            record.updated_at = now

        assets = (
            await session.execute(select(Asset).where(Asset.tenant_id == tenant_id))
        ).scalars().all()

        updated = 0
        for asset in assets:
            if symbol_matches_category(asset.category, symbol):
                asset.current_price = price
                asset.updated_at = now
                updated += 1

        await session.commit()

    except Exception as e:
        await session.rollback()
        logger.error(
            "market_price_update_failed",
            tenant_id=tenant_id,
            symbol=symbol,
            error=str(e),
        )
        raise

    logger.info(
        "market_price_updated",
        tenant_id=tenant_id,
        symbol=symbol,
        price=str(price),
        assets_updated=updated,
    )
    return updated


async def get_market_price(session: AsyncSession, tenant_id: str, symbol: str) -> MarketPrice:
    record = await session.get(MarketPrice, (tenant_id, symbol))
    if record is None:
        raise MarketPriceNotFoundError(f"No market price for {symbol}")
    return record


async def list_market_prices(session: AsyncSession, tenant_id: str) -> list[MarketPrice]:
    result = await session.execute(
        select(MarketPrice)
        .where(MarketPrice.tenant_id == tenant_id)
        .order_by(MarketPrice.symbol)
    )
    return list(result.scalars().all())


async def delete_market_price(session: AsyncSession, tenant_id: str, symbol: str) -> None:
    """Remove a market price. Assets keep their last current_price."""
    record = await get_market_price(session, tenant_id, symbol)
    await session.delete(record)
    await session.commit()
    logger.info("market_price_deleted", tenant_id=tenant_id, symbol=symbol)

