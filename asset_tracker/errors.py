"""
Asset Tracker — Error Taxonomy

PriceNotFoundError: the page was fetched but no price could be located.
A malformed numeric token is reported the same way.

PageFetchError: network failure, timeout or non-2xx response. Never retried
here; the operator re-triggers the sync.
"""

from __future__ import annotations


class PriceServiceError(Exception):
    """Base class for errors surfaced as JSON error payloads."""

    status_code = 500


class PriceNotFoundError(PriceServiceError):
    status_code = 404


class PageFetchError(PriceServiceError):
    status_code = 500

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class UnknownProfileError(PriceServiceError):
    status_code = 404


class MarketPriceNotFoundError(PriceServiceError):
    status_code = 404


class AssetNotFoundError(PriceServiceError):
    status_code = 404
