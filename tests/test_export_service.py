"""
Unit tests for CSV export.
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from analysis_pro.core.exceptions import NotFoundError
from analysis_pro.models.analysis import AnalysisResult
from analysis_pro.services.export_service import (
    CSV_MEDIA_TYPE,
    export_csv,
    export_filename,
)
from tests.factories import CSV_TEXT


class TestExportFilename:
    """Test filename generation"""

    def test_uses_export_date(self):
        """Test financial_analysis_<ISO date>.csv"""
        assert export_filename(datetime(2025, 10, 5, 14, 30, tzinfo=UTC)) == (
            "financial_analysis_2025-10-05.csv"
        )

    def test_converts_to_utc(self):
        """Test aware datetimes are dated in UTC"""
        late_evening_new_york = datetime(
            2025, 10, 5, 22, 0, tzinfo=timezone(timedelta(hours=-4))
        )

        assert export_filename(late_evening_new_york) == "financial_analysis_2025-10-06.csv"


class TestExportCsv:
    """Test CSV payload packaging"""

    def test_passes_agent_csv_verbatim(self, analysis_result):
        """Test content is the agent's CSV, byte for byte"""
        export = export_csv(analysis_result, datetime(2025, 1, 2, tzinfo=UTC))

        assert export.content == CSV_TEXT.encode("utf-8")
        assert export.media_type == CSV_MEDIA_TYPE == "text/csv"
        assert export.filename == "financial_analysis_2025-01-02.csv"
        assert export.content_disposition == (
            'attachment; filename="financial_analysis_2025-01-02.csv"'
        )

    def test_unicode_payload(self):
        """Test non-ASCII CSV is UTF-8 encoded"""
        result = AnalysisResult(csv_export_data="Symbol,Name\nRELIANCE,Reliance Industries ₹\n")

        export = export_csv(result, datetime(2025, 1, 2, tzinfo=UTC))

        assert export.content.decode("utf-8").endswith("₹\n")

    def test_defaults_to_now(self, analysis_result):
        """Test filename dated today when no time is given"""
        export = export_csv(analysis_result)

        assert export.filename == f"financial_analysis_{datetime.now(UTC).date().isoformat()}.csv"

    def test_no_result(self):
        """Test exporting before any analysis raises NotFoundError"""
        with pytest.raises(NotFoundError):
            export_csv(None)

    def test_empty_csv(self):
        """Test a result without CSV data raises NotFoundError"""
        with pytest.raises(NotFoundError):
            export_csv(AnalysisResult(csv_export_data=""))
