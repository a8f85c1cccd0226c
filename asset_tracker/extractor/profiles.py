"""
Asset Tracker — Source Profiles

Static description of each external price page: which rows to look for,
which cell holds the buy price, and how to correct the quoted unit.
Profiles are not user-configurable at runtime.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from asset_tracker.config import AssetCategory
from asset_tracker.errors import UnknownProfileError


class ScaleIfBelowThreshold(BaseModel):
    """Multiply a candidate by `factor` when 0 < candidate < `threshold`."""
    model_config = ConfigDict(frozen=True)

    threshold: PositiveInt
    factor: PositiveInt

    def apply(self, candidate: int) -> int:
        if 0 < candidate < self.threshold:
            return candidate * self.factor
        return candidate


class SourceProfile(BaseModel):
    """How to locate and interpret a price on one external page."""
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str = Field(..., description="Market price symbol the result is stored under")
    label: str = Field(..., description="Wording used in error messages")
    source_url: str
    match_phrases: tuple[str, ...] = Field(..., min_length=1)
    price_column_index: int = Field(..., ge=0)
    min_cell_count: int = Field(..., ge=1)
    include_header_cells: bool = False
    unit_rule: ScaleIfBelowThreshold | None = None

    @property
    def primary_phrase(self) -> str:
        return self.match_phrases[0]


SILVER_PROFILE = SourceProfile(
    name="silver",
    symbol=AssetCategory.SILVER.value,
    label="silver",
    source_url="https://giabac.phuquygroup.vn/",
    match_phrases=(
        "bạc miếng phú quý 999",
        "bạc thương hiệu phú quý",
        "bạc miếng phú quý 999 1 lượng",
    ),
    price_column_index=2,
    min_cell_count=3,
)

# PNJ quotes in thousands of VND per chi: 18,380 means 18,380,000 VND.
# The name cell may be a <th>.
GOLD_PNJ_PROFILE = SourceProfile(
    name="gold",
    symbol=AssetCategory.GOLD.value,
    label="PNJ gold",
    source_url="https://www.pnj.com.vn/site/gia-vang",
    match_phrases=("nhẫn trơn pnj 999.9",),
    price_column_index=1,
    min_cell_count=2,
    include_header_cells=True,
    unit_rule=ScaleIfBelowThreshold(threshold=1_000_000, factor=1000),
)

PROFILES: dict[str, SourceProfile] = {
    profile.name: profile for profile in (SILVER_PROFILE, GOLD_PNJ_PROFILE)
}


def get_profile(name: str) -> SourceProfile:
    """Look up a profile by name (case-insensitive)."""
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise UnknownProfileError(f"Unknown price source: {name}") from None
