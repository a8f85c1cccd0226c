from asset_tracker.engine.portfolio import PortfolioStats, calculate_portfolio_stats

__all__ = [
    "PortfolioStats",
    "calculate_portfolio_stats",
]
