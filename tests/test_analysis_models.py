"""
Unit tests for the agent wire models.

Tests defensive parsing and exact round-tripping of wire field names.
"""

import pytest
from pydantic import ValidationError

from analysis_pro.models.analysis import (
    NOT_AVAILABLE,
    AgentPayload,
    AnalysisResult,
    KeyMetrics,
    RankedInvestment,
)
from analysis_pro.models.view_state import FilterState, PageState, SortState
from tests.factories import make_investment, make_result


class TestAnalysisResult:
    """Test AnalysisResult parsing"""

    def test_round_trip_wire_names(self, result_payload):
        """Test model_dump(by_alias=True) reproduces the wire payload"""
        result = AnalysisResult.model_validate(result_payload)

        assert result.model_dump(by_alias=True) == result_payload

    def test_week_52_aliases(self):
        """Test 52-week fields are read from their wire names"""
        metrics = KeyMetrics.model_validate({"52_week_high": "10", "52_week_low": "5"})

        assert metrics.week_52_high == "10"
        assert metrics.week_52_low == "5"

    def test_missing_nested_fields_default(self):
        """Test missing pillar and metric fields become N/A"""
        investment = RankedInvestment.model_validate(
            {"symbol": "INFY", "four_pillar_score": {"overall_score": 8}, "key_metrics": None}
        )

        assert investment.four_pillar_score.overall_score == "8"
        assert investment.four_pillar_score.dividends == NOT_AVAILABLE
        assert investment.key_metrics.pe_ratio == NOT_AVAILABLE
        assert investment.market == NOT_AVAILABLE

    def test_null_scalars_default(self):
        """Test explicit nulls do not fail validation"""
        investment = RankedInvestment.model_validate(
            {"symbol": "GOLD", "four_pillar_score": {"dividends": None}}
        )

        assert investment.four_pillar_score.dividends == NOT_AVAILABLE

    def test_empty_result(self):
        """Test nulls at the top level become empty values"""
        result = AnalysisResult.model_validate(
            {"ranked_investments": None, "csv_export_data": None, "analysis_summary": None}
        )

        assert result.ranked_investments == []
        assert result.csv_export_data == ""

    def test_symbol_required(self):
        """Test an investment without symbol is rejected"""
        with pytest.raises(ValidationError):
            RankedInvestment.model_validate({"name": "Nameless"})

    def test_duplicate_symbols_rejected(self):
        """Test symbols must be unique within a result"""
        payload = make_result(count=3)
        payload["ranked_investments"].append(make_investment(1))

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_find(self, analysis_result):
        """Test symbol lookup"""
        assert analysis_result.find("SYM07").name == "Company 7"
        assert analysis_result.find("NOPE") is None


class TestChartPoints:
    """Test chart series extraction"""

    def test_aligned_series(self, analysis_result):
        """Test x symbols pair with y scores"""
        points = analysis_result.chart_points()

        assert len(points) == 25
        assert points[0] == ("SYM00", 5.0)

    def test_truncates_to_shorter(self):
        """Test mismatched lengths are cut to the shorter list"""
        result = AnalysisResult(chart_data={"data": [{"x": ["A", "B", "C"], "y": [1, 2]}]})

        assert result.chart_points() == [("A", 1.0), ("B", 2.0)]

    def test_non_numeric_y(self):
        """Test unparseable y values become 0"""
        result = AnalysisResult(chart_data={"data": [{"x": ["A"], "y": ["n/a"]}]})

        assert result.chart_points() == [("A", 0.0)]

    @pytest.mark.parametrize("chart_data", [None, {}, {"data": []}, {"data": [{"x": []}]}, "x"])
    def test_bad_shapes(self, chart_data):
        """Test unexpected chart shapes yield an empty series"""
        assert AnalysisResult(chart_data=chart_data).chart_points() == []


class TestAgentPayload:
    """Test agent response envelope"""

    def test_succeeded(self):
        assert AgentPayload(status="success").succeeded is True
        assert AgentPayload(status="failure").succeeded is False
        assert AgentPayload().succeeded is False

    def test_ignores_extra_fields(self):
        payload = AgentPayload.model_validate({"status": "success", "trace": "abc"})

        assert payload.status == "success"


class TestViewState:
    """Test view state validation"""

    def test_unknown_market_rejected(self):
        with pytest.raises(ValidationError):
            FilterState(markets={"NYSE"})

    def test_filter_state_is_frozen(self):
        with pytest.raises(ValidationError):
            FilterState().risk_profile = "Aggressive"

    def test_page_size_positive(self):
        with pytest.raises(ValidationError):
            PageState(page_size=0)
        with pytest.raises(ValidationError):
            PageState(current_page=0)

    def test_sort_state_from_dotted_string(self):
        state = SortState(field_path="key_metrics.52_week_high", direction="asc")

        assert state.field_path == ("key_metrics", "52_week_high")
        assert state.key == "key_metrics.52_week_high"
