"""
Asset Tracker — Portfolio Valuation

Totals, profit/loss and per-category distribution for a tenant's assets.
All money values use Decimal — never float.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

import structlog
from pydantic import BaseModel, Field

from asset_tracker.config import AssetCategory

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


class Holding(Protocol):
    category: str
    units: Decimal
    buy_price: Decimal
    current_price: Decimal


class CategorySlice(BaseModel):
    name: str
    value: Decimal
    percentage: Decimal


class PortfolioStats(BaseModel):
    total_value: Decimal
    total_cost: Decimal
    total_profit_loss: Decimal
    profit_loss_percentage: Decimal
    category_distribution: list[CategorySlice] = Field(default_factory=list)


def calculate_portfolio_stats(assets: Iterable[Holding]) -> PortfolioStats:
    """
    Value a portfolio.

    - total_value = Σ units × current_price
    - total_cost = Σ units × buy_price
    - profit_loss_percentage = P/L ÷ cost × 100 (0 when cost is 0)
    - category_distribution keeps AssetCategory order and drops empty categories
    """
    holdings = list(assets)

    by_category: dict[str, Decimal] = {}
    total_value = _ZERO
    total_cost = _ZERO
    for asset in holdings:
        units = Decimal(asset.units)
        value = units * Decimal(asset.current_price)
        total_value += value
        total_cost += units * Decimal(asset.buy_price)
        by_category[asset.category] = by_category.get(asset.category, _ZERO) + value

    total_profit_loss = total_value - total_cost
    profit_loss_percentage = (
        total_profit_loss / total_cost * _HUNDRED if total_cost > _ZERO else _ZERO
    )

    distribution: list[CategorySlice] = []
    for category in AssetCategory:
        value = by_category.get(category.value, _ZERO)
        if value <= _ZERO:
            continue
        percentage = value / total_value * _HUNDRED if total_value > _ZERO else _ZERO
        distribution.append(
            CategorySlice(
                name=category.value,
                value=_quantize(value),
                percentage=_quantize(percentage),
            )
        )

    stats = PortfolioStats(
        total_value=_quantize(total_value),
        total_cost=_quantize(total_cost),
        total_profit_loss=_quantize(total_profit_loss),
        profit_loss_percentage=_quantize(profit_loss_percentage),
        category_distribution=distribution,
    )

    logger.debug(
        "portfolio_stats_calculated",
        asset_count=len(holdings),
        total_value=str(stats.total_value),
        total_profit_loss=str(stats.total_profit_loss),
    )
    return stats
