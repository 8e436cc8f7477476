"""
Analysis models mirroring the remote agent's wire contract.

Field names (and aliases) match the agent's JSON exactly so a result can be
round-tripped with model_dump(by_alias=True). Display values are kept as the
agent's strings; nothing here recomputes scores.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NOT_AVAILABLE = "N/A"


def _to_display_string(value: Any) -> Any:
    """Agents occasionally send bare numbers where strings are expected."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class FourPillarScore(BaseModel):
    """Four named sub-scores plus the overall score, as display strings."""

    historical_returns: str = NOT_AVAILABLE
    risk_adjusted_returns: str = NOT_AVAILABLE
    fundamentals: str = NOT_AVAILABLE
    dividends: str = NOT_AVAILABLE
    overall_score: str = NOT_AVAILABLE

    @field_validator("*", mode="before")
    @classmethod
    def coerce_display_strings(cls, value: Any) -> Any:
        return _to_display_string(value)


class KeyMetrics(BaseModel):
    """Opaque display metrics. Values are not guaranteed numeric."""

    model_config = ConfigDict(populate_by_name=True)

    current_price: str = NOT_AVAILABLE
    pe_ratio: str = NOT_AVAILABLE
    dividend_yield: str = NOT_AVAILABLE
    week_52_high: str = Field(default=NOT_AVAILABLE, alias="52_week_high")
    week_52_low: str = Field(default=NOT_AVAILABLE, alias="52_week_low")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_display_strings(cls, value: Any) -> Any:
        return _to_display_string(value)


class RankedInvestment(BaseModel):
    """One scored investment candidate within an analysis result."""

    symbol: str = Field(..., min_length=1, description="Ticker, unique per result")
    name: str = NOT_AVAILABLE
    market: str = NOT_AVAILABLE
    asset_type: str = NOT_AVAILABLE
    four_pillar_score: FourPillarScore = Field(default_factory=FourPillarScore)
    recommendation: str = NOT_AVAILABLE
    recommendation_rationale: str = ""
    key_metrics: KeyMetrics = Field(default_factory=KeyMetrics)

    @field_validator("four_pillar_score", "key_metrics", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class AnalysisResult(BaseModel):
    """
    Complete output of one successful agent call.

    Replaced wholesale by the next successful call, never merged.
    """

    conversational_insight: str = ""
    analysis_summary: str = ""
    ranked_investments: list[RankedInvestment] = Field(default_factory=list)
    chart_data: Any = None
    csv_export_data: str = ""

    @field_validator("conversational_insight", "analysis_summary", "csv_export_data", mode="before")
    @classmethod
    def none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("ranked_investments", mode="before")
    @classmethod
    def none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def check_unique_symbols(self) -> "AnalysisResult":
        seen: set[str] = set()
        for investment in self.ranked_investments:
            if investment.symbol in seen:
                raise ValueError(f"Duplicate symbol in ranked_investments: {investment.symbol}")
            seen.add(investment.symbol)
        return self

    def find(self, symbol: str) -> RankedInvestment | None:
        """Look up an investment by symbol."""
        for investment in self.ranked_investments:
            if investment.symbol == symbol:
                return investment
        return None

    def chart_points(self) -> list[tuple[str, float]]:
        """
        Extract (symbol, score) pairs from chart_data.data[0].

        x and y are index-aligned; extra entries on either side are dropped.
        Any shape the agent did not follow yields an empty series.
        """
        try:
            series = self.chart_data["data"][0]
            xs = list(series["x"])
            ys = list(series["y"])
        except (KeyError, IndexError, TypeError):
            return []

        points: list[tuple[str, float]] = []
        for x, y in zip(xs, ys):
            try:
                points.append((str(x), float(y)))
            except (TypeError, ValueError):
                points.append((str(x), 0.0))
        return points


class AgentMetadata(BaseModel):
    """Metadata the agent attaches to a successful response."""

    agent_name: str = ""
    timestamp: str = ""
    markets_analyzed: list[str] = Field(default_factory=list)
    analysis_type: str | None = None


class AgentPayload(BaseModel):
    """
    Body of an agent response.

    result is kept raw so that a structurally broken result can be told apart
    from a logical failure.
    """

    model_config = ConfigDict(extra="ignore")

    status: str = "failure"
    result: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
