"""
Models package — export all SQLAlchemy models.
"""

from asset_tracker.models.asset import Asset
from asset_tracker.models.base import Base
from asset_tracker.models.market_price import MarketPrice

__all__ = ["Asset", "Base", "MarketPrice"]
