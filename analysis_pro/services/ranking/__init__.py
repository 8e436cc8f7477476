"""
Ranking view-model: score codec, filter, sorter, paginator and the composed
rankings table.
"""

from .filtering import filter_investments
from .pagination import Page, clamp_page, paginate, total_pages
from .score_codec import (
    pillar_to_percent,
    recommendation_category,
    to_display_percent,
)
from .sorting import UNDEFINED, resolve_field_path, sort_investments
from .view import (
    InvestmentDetail,
    PillarPercents,
    RankingRow,
    RankingView,
    build_investment_detail,
    derive_rankings,
)

__all__ = [
    "UNDEFINED",
    "InvestmentDetail",
    "Page",
    "PillarPercents",
    "RankingRow",
    "RankingView",
    "build_investment_detail",
    "clamp_page",
    "derive_rankings",
    "filter_investments",
    "paginate",
    "pillar_to_percent",
    "recommendation_category",
    "resolve_field_path",
    "sort_investments",
    "to_display_percent",
    "total_pages",
]
