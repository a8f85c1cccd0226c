"""
Asset Tracker — Price Page Fetcher

Fetches a source page with a fixed identifying User-Agent and a bounded
wait. There is no retry loop: any failure surfaces immediately as
PageFetchError and the operator decides whether to re-sync.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from asset_tracker.config import settings
from asset_tracker.errors import PageFetchError

logger = structlog.get_logger(__name__)


def default_headers() -> dict[str, str]:
    return {"User-Agent": settings.SCRAPE_USER_AGENT}


class PageFetcher:
    """
    Async page fetcher around a shared httpx.AsyncClient.

    Usage:
        async with PageFetcher() as fetcher:
            html = await fetcher.fetch_page("https://giabac.phuquygroup.vn/")
    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ):
        self._timeout = timeout if timeout is not None else settings.SCRAPE_TIMEOUT_SECONDS
        self._headers = headers or default_headers()
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> PageFetcher:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_page(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> str:
        """
        GET `url` and return the decoded body.

        Raises:
            PageFetchError: on timeout, transport error or non-2xx status.
        """
        assert self._client is not None, "Fetcher not initialized. Use 'async with'."

        request_timeout = timeout if timeout is not None else self._timeout
        logger.info("page_fetch_started", url=url, timeout_seconds=request_timeout)

        try:
            response = await self._client.get(
                url,
                headers={**self._headers, **(headers or {})},
                timeout=request_timeout,
            )
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.error("page_fetch_timeout", url=url, timeout_seconds=request_timeout)
            raise PageFetchError(
                f"timeout of {request_timeout:g}s exceeded", url=url
            ) from e

        except httpx.HTTPStatusError as e:
            logger.error(
                "page_fetch_http_error",
                url=url,
                status_code=e.response.status_code,
            )
            raise PageFetchError(
                f"Request failed with status code {e.response.status_code}", url=url
            ) from e

        except httpx.RequestError as e:
            logger.error(
                "page_fetch_request_error",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PageFetchError(str(e) or type(e).__name__, url=url) from e

        logger.info(
            "page_fetch_complete",
            url=url,
            status_code=response.status_code,
            bytes=len(response.content),
        )
        return response.text
