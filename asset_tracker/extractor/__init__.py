"""Asset Tracker — Price Extraction Layer"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from asset_tracker.errors import PageFetchError, PriceNotFoundError


class Found(BaseModel):
    """A located price. Always strictly positive."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["found"] = "found"
    price: PositiveInt


class NotFound(BaseModel):
    """The page was parsed but no positive price was located."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["not_found"] = "not_found"


class FetchError(BaseModel):
    """The page could not be fetched or parsed."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["fetch_error"] = "fetch_error"
    message: str


ExtractionResult = Annotated[
    Union[Found, NotFound, FetchError],
    Field(discriminator="outcome"),
]


def unwrap_price(result: Found | NotFound | FetchError, label: str = "market") -> int:
    """
    Return the price of a Found result or raise the matching error.

    Raises:
        PriceNotFoundError: result is NotFound.
        PageFetchError: result is FetchError.
    """
    if isinstance(result, Found):
        return result.price
    if isinstance(result, FetchError):
        raise PageFetchError(f"Failed to fetch {label} price: {result.message}")
    raise PriceNotFoundError(f"Could not find {label} price on page")
