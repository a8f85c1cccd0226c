"""
Asset Tracker — Market Price Model

Latest known price per tenant per symbol ("Gold", "Silver", ...). Written by
scrape syncs and manual entry; read when valuing assets.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, TIMESTAMP, String, func
from sqlalchemy.orm import Mapped, mapped_column

from asset_tracker.models.base import Base


class MarketPrice(Base):
    """
    One row per (tenant_id, symbol).

    tenant_id is the opaque passcode the UI scopes all data by.
    """

    __tablename__ = "market_prices"

    tenant_id: Mapped[str] = mapped_column(
        String, primary_key=True, comment="Opaque tenant identifier (UI passcode)"
    )
    symbol: Mapped[str] = mapped_column(
        String, primary_key=True, comment="Symbol, matched against asset category"
    )
    price: Mapped[Decimal] = mapped_column(
        DECIMAL(18, 2), nullable=False, default=Decimal("0"), comment="Price in full currency units"
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        comment="Last time this price was written",
    )

    def __repr__(self) -> str:
        return (
            f"<MarketPrice tenant_id={self.tenant_id!r} symbol={self.symbol!r} "
            f"price={self.price}>"
        )
