"""
Rankings table derivation: filter -> sort -> paginate.

Pure function of the current analysis result and view state; calling it twice
with the same inputs gives the same table.
"""

from pydantic import BaseModel, Field

from ...models.analysis import AnalysisResult, RankedInvestment
from ...models.view_state import FilterState, PageState, Recommendation, SortState
from ...shared.formatters import format_asset_type
from .filtering import filter_investments
from .pagination import paginate
from .score_codec import pillar_to_percent, recommendation_category, to_display_percent
from .sorting import sort_investments


class RankingRow(BaseModel):
    """One displayed table row."""

    rank: int = Field(..., description="1-based position across all pages")
    investment: RankedInvestment
    overall_percent: float
    recommendation_category: Recommendation
    asset_type_label: str


class RankingView(BaseModel):
    """The rankings table as the user sees it."""

    rows: list[RankingRow] = Field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_items: int = 0
    page_size: int
    has_previous: bool = False
    has_next: bool = False
    sort_key: str
    sort_direction: str


class PillarPercents(BaseModel):
    """Pillar sub-scores as progress-bar percentages."""

    historical_returns: float
    risk_adjusted_returns: float
    fundamentals: float
    dividends: float


class InvestmentDetail(BaseModel):
    """Everything the detail panel shows for one selected investment."""

    investment: RankedInvestment
    overall_percent: float
    pillar_percents: PillarPercents
    recommendation_category: Recommendation
    asset_type_label: str


def build_investment_detail(investment: RankedInvestment) -> InvestmentDetail:
    """Decode the scores of one investment for display."""
    scores = investment.four_pillar_score
    return InvestmentDetail(
        investment=investment,
        overall_percent=to_display_percent(scores.overall_score),
        pillar_percents=PillarPercents(
            historical_returns=pillar_to_percent(scores.historical_returns),
            risk_adjusted_returns=pillar_to_percent(scores.risk_adjusted_returns),
            fundamentals=pillar_to_percent(scores.fundamentals),
            dividends=pillar_to_percent(scores.dividends),
        ),
        recommendation_category=recommendation_category(investment.recommendation),
        asset_type_label=format_asset_type(investment.asset_type),
    )


def derive_rankings(
    result: AnalysisResult | None,
    filter_state: FilterState,
    sort_state: SortState,
    page_state: PageState,
) -> RankingView:
    """
    Build the visible rankings page.

    Args:
        result: Current analysis (None before the first successful response)
        filter_state: Market / asset-type selection
        sort_state: Field path and direction
        page_state: Page size and requested page (clamped here)

    Returns:
        RankingView for the clamped page
    """
    investments = result.ranked_investments if result is not None else []
    filtered = filter_investments(investments, filter_state)
    ordered = sort_investments(filtered, sort_state.field_path, sort_state.direction)
    window = paginate(ordered, page_state.page_size, page_state.current_page)

    rows = [
        RankingRow(
            rank=window.first_rank + index,
            investment=investment,
            overall_percent=to_display_percent(investment.four_pillar_score.overall_score),
            recommendation_category=recommendation_category(investment.recommendation),
            asset_type_label=format_asset_type(investment.asset_type),
        )
        for index, investment in enumerate(window.items)
    ]
    return RankingView(
        rows=rows,
        page=window.page,
        total_pages=window.total_pages,
        total_items=window.total_items,
        page_size=window.page_size,
        has_previous=window.has_previous,
        has_next=window.has_next,
        sort_key=sort_state.key,
        sort_direction=str(sort_state.direction),
    )
