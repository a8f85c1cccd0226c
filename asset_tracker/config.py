"""
Asset Tracker — Configuration & Constants

Every timeout, header and connection string lives here. No hardcoded values
in business logic.

Usage:
    from asset_tracker.config import settings
"""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AssetCategory(str, Enum):
    """Portfolio asset categories, in display order."""
    CASH = "Cash"
    STOCK = "Stock"
    TERM_DEPOSIT = "Term Deposit"
    GOLD = "Gold"
    SILVER = "Silver"
    CRYPTO = "Crypto"
    FIXED_INCOME = "Fixed Income"
    OTHER = "Other"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Central configuration for the price service.

    Loads from environment variables with fallback defaults.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # -----------------------------------------------------------------------
    # Server
    # -----------------------------------------------------------------------
    APP_NAME: str = "asset-tracker"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ALLOW_ORIGINS: str = "*"           # Comma-separated origins

    # -----------------------------------------------------------------------
    # Outbound page fetch
    # No retries: a failed fetch is reported to the caller immediately.
    # -----------------------------------------------------------------------
    SCRAPE_TIMEOUT_SECONDS: float = 10.0
    SCRAPE_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # -----------------------------------------------------------------------
    # Database
    # -----------------------------------------------------------------------
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_tracker.db"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


settings = Settings()
