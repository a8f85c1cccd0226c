"""
Asset Tracker — Tenant Store

A tenant is identified only by its passcode, so changing the passcode moves
every asset and market price to the new id. Whatever the new id held before
is replaced. Nothing happens when the old id has no data.
"""

from __future__ import annotations

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from asset_tracker.models import Asset, MarketPrice

logger = structlog.get_logger(__name__)


async def _count(session: AsyncSession, model: type, tenant_id: str) -> int:
    result = await session.execute(
        select(func.count()).select_from(model).where(model.tenant_id == tenant_id)
    )
    return result.scalar_one()


async def rename_tenant(session: AsyncSession, old_tenant_id: str, new_tenant_id: str) -> dict[str, int]:
    """
    Move all data from `old_tenant_id` to `new_tenant_id`.

    Returns:
        {"assets": n, "market_prices": m} rows moved.
    """
    moved = {"assets": 0, "market_prices": 0}
    if old_tenant_id == new_tenant_id:
        return moved

    assets = await _count(session, Asset, old_tenant_id)
    prices = await _count(session, MarketPrice, old_tenant_id)
    if assets == 0 and prices == 0:
        logger.info("tenant_rename_skipped", old_tenant_id=old_tenant_id, reason="no_data")
        return moved

    try:
        for model in (Asset, MarketPrice):
            await session.execute(
                delete(model)
                .where(model.tenant_id == new_tenant_id)
                .execution_options(synchronize_session=False)
            )
            await session.execute(
                update(model)
                .where(model.tenant_id == old_tenant_id)
                .values(tenant_id=new_tenant_id)
                .execution_options(synchronize_session=False)
            )
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error(
            "tenant_rename_failed",
            old_tenant_id=old_tenant_id,
            new_tenant_id=new_tenant_id,
            error=str(e),
        )
        raise

    # Bulk statements bypass the identity map.
    session.expunge_all()

    moved = {"assets": assets, "market_prices": prices}
    logger.info(
        "tenant_renamed",
        old_tenant_id=old_tenant_id,
        new_tenant_id=new_tenant_id,
        **moved,
    )
    return moved
