"""
Asset Tracker — Asset Model

A tenant-scoped holding. current_price is refreshed whenever a market price
with a symbol equal to the asset's category is written.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, INTEGER, TIMESTAMP, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from asset_tracker.models.base import Base


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(INTEGER, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(
        String, nullable=False, comment="AssetCategory value, e.g. 'Gold'"
    )
    type: Mapped[str] = mapped_column(
        String, nullable=False, default="", comment="Free-form type, e.g. 'USD', 'AAPL'"
    )
    units: Mapped[Decimal] = mapped_column(DECIMAL(18, 6), nullable=False, default=Decimal("0"))
    buy_price: Mapped[Decimal] = mapped_column(DECIMAL(18, 2), nullable=False, default=Decimal("0"))
    current_price: Mapped[Decimal] = mapped_column(
        DECIMAL(18, 2), nullable=False, default=Decimal("0")
    )
    currency: Mapped[str] = mapped_column(String, nullable=False, default="VND")
    buy_date: Mapped[str | None] = mapped_column(String, nullable=True, comment="ISO date")
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_assets_tenant_category", "tenant_id", "category"),
    )

    def __repr__(self) -> str:
        return (
            f"<Asset id={self.id} tenant_id={self.tenant_id!r} name={self.name!r} "
            f"category={self.category!r}>"
        )
