"""
View state for the rankings table: filters, sort key and page.

All state objects are frozen; the session swaps in new instances instead of
mutating them.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Market(StrEnum):
    NSE = "NSE"
    BSE = "BSE"
    CMX = "CMX"
    US = "US"


class AssetType(StrEnum):
    STOCK = "stock"
    MUTUAL_FUND = "mutual_fund"
    ETF = "etf"


class RiskProfile(StrEnum):
    CONSERVATIVE = "Conservative"
    MEDIUM = "Medium"
    AGGRESSIVE = "Aggressive"


class Recommendation(StrEnum):
    """Badge category for the agent's free-text recommendation."""

    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"
    OTHER = "Other"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_SORT_PATH: tuple[str, ...] = ("four_pillar_score", "overall_score")


def parse_field_path(path: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """
    Split a dot-separated field path into its segments.

    Examples:
        >>> parse_field_path("four_pillar_score.overall_score")
        ('four_pillar_score', 'overall_score')
    """
    if isinstance(path, str):
        segments = tuple(path.split("."))
    else:
        segments = tuple(path)
    if not segments or any(not segment for segment in segments):
        raise ValueError(f"Invalid field path: {path!r}")
    return segments


class FilterState(BaseModel):
    """
    Market / asset-type selection plus risk profile.

    An empty market or asset-type set acts as a wildcard for that axis.
    """

    model_config = ConfigDict(frozen=True)

    markets: frozenset[Market] = Field(default_factory=lambda: frozenset(Market))
    asset_types: frozenset[AssetType] = Field(default_factory=lambda: frozenset(AssetType))
    risk_profile: RiskProfile = RiskProfile.MEDIUM

    def ordered_markets(self) -> list[Market]:
        """Selected markets in canonical order."""
        return [market for market in Market if market in self.markets]

    def ordered_asset_types(self) -> list[AssetType]:
        """Selected asset types in canonical order."""
        return [asset_type for asset_type in AssetType if asset_type in self.asset_types]


class SortState(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_path: tuple[str, ...] = DEFAULT_SORT_PATH
    direction: SortDirection = SortDirection.DESC

    @field_validator("field_path", mode="before")
    @classmethod
    def split_path(cls, value: Any) -> tuple[str, ...]:
        return parse_field_path(value)

    @property
    def key(self) -> str:
        return ".".join(self.field_path)


class PageState(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default=10, gt=0)
    current_page: int = Field(default=1, ge=1)
