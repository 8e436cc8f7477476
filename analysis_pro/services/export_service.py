"""
CSV export of the current analysis.

The agent ships its own CSV (csv_export_data); it is passed through byte for
byte rather than regenerated from the table, so filters and sorting do not
affect the export.
"""

from dataclasses import dataclass
from datetime import datetime

import structlog

from ..core.exceptions import NotFoundError
from ..core.utils.date_utils import iso_date, utcnow
from ..models.analysis import AnalysisResult

logger = structlog.get_logger()

CSV_MEDIA_TYPE = "text/csv"
EXPORT_FILENAME_PREFIX = "financial_analysis"


@dataclass(frozen=True)
class CsvExport:
    """Downloadable CSV payload."""

    content: bytes
    filename: str
    media_type: str = CSV_MEDIA_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def export_filename(now: datetime | None = None) -> str:
    """
    Deterministic export filename for the given export time.

    Examples:
        >>> export_filename(datetime(2025, 10, 5, 14, 30))
        'financial_analysis_2025-10-05.csv'
    """
    return f"{EXPORT_FILENAME_PREFIX}_{iso_date(now)}.csv"


def export_csv(result: AnalysisResult | None, now: datetime | None = None) -> CsvExport:
    """
    Package the agent's CSV for download.

    Args:
        result: Current analysis result
        now: Export time (defaults to now, UTC); the analysis time is not used

    Returns:
        CsvExport with UTF-8 content and dated filename

    Raises:
        NotFoundError: If there is no analysis or it carries no CSV data
    """
    if result is None:
        raise NotFoundError("No analysis available to export")
    if not result.csv_export_data:
        raise NotFoundError("Analysis has no CSV export data")

    export = CsvExport(
        content=result.csv_export_data.encode("utf-8"),
        filename=export_filename(now or utcnow()),
    )
    logger.info(
        "CSV export prepared",
        filename=export.filename,
        size_bytes=len(export.content),
    )
    return export
