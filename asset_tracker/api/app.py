"""
Asset Tracker — HTTP Application

FastAPI application factory. The lifespan owns the shared outbound HTTP
client and the database engine; every failure is rendered as a JSON error
payload so nothing crashes the serving process.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from starlette.exceptions import HTTPException as StarletteHTTPException

from asset_tracker import __version__
from asset_tracker.api import scrape_routes, tenant_routes
from asset_tracker.config import settings
from asset_tracker.errors import PriceServiceError
from asset_tracker.models import Base
from asset_tracker.pipeline.fetcher import PageFetcher

logger = structlog.get_logger(__name__)


def _engine_options(database_url: str) -> dict[str, Any]:
    # In-memory SQLite must share one connection or every session sees an empty DB.
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return {"poolclass": StaticPool}
    return {}


def create_app(database_url: str | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        database_url: Overrides settings.DATABASE_URL (tests use in-memory SQLite).
    """
    db_url = database_url or settings.DATABASE_URL

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = create_async_engine(db_url, echo=False, **_engine_options(db_url))
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        app.state.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        try:
            async with PageFetcher() as fetcher:
                app.state.fetcher = fetcher
                logger.info("app_startup_complete", app_name=settings.APP_NAME, version=__version__)
                yield
        finally:
            await engine.dispose()
            logger.info("app_shutdown_complete", app_name=settings.APP_NAME)

    app = FastAPI(title=settings.APP_NAME, version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(scrape_routes.router)
    app.include_router(tenant_routes.router)

    @app.exception_handler(PriceServiceError)
    async def price_service_error_handler(request: Request, exc: PriceServiceError) -> JSONResponse:
        logger.warning(
            "request_failed",
            path=request.url.path,
            status_code=exc.status_code,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc), "success": False},
        )

    @app.exception_handler(StarletteHTTPException)
    async def api_not_found_handler(request: Request, exc: StarletteHTTPException) -> Any:
        if exc.status_code == 404 and request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=404,
                content={"error": f"API route not found: {request.url.path}"},
            )
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request_unhandled_error",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or type(exc).__name__, "success": False},
        )

    return app
