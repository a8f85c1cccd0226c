"""
Asset Tracker — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- Recorded price pages (tests/fixtures/*.html)
- In-memory async database session
- Stub page fetcher for API tests
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from asset_tracker.errors import PageFetchError
from asset_tracker.models import Base

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Fixture Loaders
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def silver_page() -> str:
    """Phu Quy silver price page snapshot."""
    return (FIXTURES_DIR / "phuquy_silver.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def gold_page() -> str:
    """PNJ gold price page snapshot."""
    return (FIXTURES_DIR / "pnj_gold.html").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async database session on in-memory SQLite.

    Creates a fresh database for each test, ensuring isolation.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    await engine.dispose()


# ---------------------------------------------------------------------------
# Fetcher stub
# ---------------------------------------------------------------------------


class StubFetcher:
    """Serves canned bodies by URL, or raises PageFetchError for URLs in `errors`."""

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        errors: dict[str, str] | None = None,
    ) -> None:
        self.pages = pages or {}
        self.errors = errors or {}
        self.requested: list[str] = []

    async def fetch_page(self, url: str, headers=None, timeout=None) -> str:
        self.requested.append(url)
        if url in self.errors:
            raise PageFetchError(self.errors[url], url=url)
        return self.pages.get(url, "<html><body></body></html>")


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()
