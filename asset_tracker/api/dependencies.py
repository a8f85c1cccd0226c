"""
Asset Tracker — Request Dependencies

The shared page fetcher and the session factory are created once in the
application lifespan and handed to routes through these dependencies.
"""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from asset_tracker.pipeline.fetcher import PageFetcher


def get_fetcher(request: Request) -> PageFetcher:
    return request.app.state.fetcher


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session
