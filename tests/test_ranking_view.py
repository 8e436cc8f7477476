"""
Unit tests for the composed rankings table (filter -> sort -> paginate).
"""

import pytest

from analysis_pro.models.analysis import RankedInvestment
from analysis_pro.models.view_state import FilterState, PageState, Recommendation, SortState
from analysis_pro.services.ranking.view import build_investment_detail, derive_rankings
from tests.factories import make_investment


class TestDeriveRankings:
    """Test the visible rankings page"""

    def test_default_view_sorted_by_overall_desc(self, analysis_result):
        """Test default sort is overall score descending, 10 per page"""
        view = derive_rankings(analysis_result, FilterState(), SortState(), PageState())

        scores = [float(row.investment.four_pillar_score.overall_score) for row in view.rows]
        all_scores = sorted(
            (float(inv.four_pillar_score.overall_score) for inv in analysis_result.ranked_investments),
            reverse=True,
        )
        assert scores == all_scores[:10]
        assert view.total_pages == 3
        assert view.total_items == 25
        assert view.sort_key == "four_pillar_score.overall_score"
        assert view.sort_direction == "desc"

    def test_rows_carry_display_fields(self, analysis_result):
        """Test rank, percent, badge and label per row"""
        view = derive_rankings(
            analysis_result, FilterState(), SortState(), PageState(current_page=2)
        )

        first = view.rows[0]
        assert first.rank == 11
        assert first.overall_percent == pytest.approx(
            float(first.investment.four_pillar_score.overall_score) * 10
        )
        assert first.recommendation_category in set(Recommendation)
        assert first.asset_type_label == first.investment.asset_type.replace("_", " ")

    def test_no_result(self):
        """Test an empty table before the first analysis"""
        view = derive_rankings(None, FilterState(), SortState(), PageState())

        assert view.rows == []
        assert view.total_pages == 1
        assert view.page == 1

    def test_filter_shrinks_pages_and_clamps(self, analysis_result):
        """Test a page beyond the filtered count is clamped"""
        view = derive_rankings(
            analysis_result,
            FilterState(markets={"NSE"}),
            SortState(),
            PageState(current_page=3),
        )

        assert view.total_items == 7
        assert view.page == 1
        assert all(row.investment.market == "NSE" for row in view.rows)

    @pytest.mark.parametrize(
        "page,has_previous,has_next",
        [(1, False, True), (2, True, True), (3, True, False)],
    )
    def test_page_navigation_flags(self, analysis_result, page, has_previous, has_next):
        """Test previous/next availability across the three default pages"""
        view = derive_rankings(
            analysis_result, FilterState(), SortState(), PageState(current_page=page)
        )

        assert view.page == page
        assert view.has_previous is has_previous
        assert view.has_next is has_next

    def test_single_page_has_no_navigation(self):
        """Test an empty table offers neither direction"""
        view = derive_rankings(None, FilterState(), SortState(), PageState())

        assert view.has_previous is False
        assert view.has_next is False

    def test_idempotent(self, analysis_result):
        """Test repeated derivation yields identical output and leaves input intact"""
        before = [inv.symbol for inv in analysis_result.ranked_investments]
        state = (FilterState(markets={"US", "NSE"}), SortState(field_path="symbol"), PageState())

        first = derive_rankings(analysis_result, *state)
        second = derive_rankings(analysis_result, *state)

        assert first == second
        assert [inv.symbol for inv in analysis_result.ranked_investments] == before


class TestInvestmentDetail:
    """Test the decoded detail panel for one investment"""

    def test_pillar_labels_decoded(self, analysis_result):
        """Test each pillar label maps through the label table"""
        detail = build_investment_detail(analysis_result.find("SYM00"))

        assert detail.investment.symbol == "SYM00"
        assert detail.overall_percent == pytest.approx(50.0)
        assert detail.pillar_percents.historical_returns == 95.0
        assert detail.pillar_percents.risk_adjusted_returns == 70.0
        assert detail.pillar_percents.fundamentals == 80.0
        assert detail.pillar_percents.dividends == 60.0
        assert detail.recommendation_category == Recommendation.BUY
        assert detail.asset_type_label == "stock"

    def test_unknown_pillar_label_is_midpoint(self):
        """Test unrecognized pillar labels show at 50 and N/A at 0"""
        investment = RankedInvestment.model_validate(
            make_investment(
                1,
                four_pillar_score={
                    "historical_returns": "Above Average",
                    "fundamentals": "N/A",
                    "overall_score": "N/A",
                },
            )
        )

        detail = build_investment_detail(investment)

        assert detail.pillar_percents.historical_returns == 50.0
        assert detail.pillar_percents.fundamentals == 0.0
        assert detail.pillar_percents.risk_adjusted_returns == 0.0
        assert detail.overall_percent == 0.0
