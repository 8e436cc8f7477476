"""
Pydantic models for the agent wire contract, the conversation and the
rankings view state.
"""

from .analysis import (
    AgentMetadata,
    AgentPayload,
    AnalysisResult,
    FourPillarScore,
    KeyMetrics,
    RankedInvestment,
)
from .conversation import ConversationEntry
from .view_state import (
    AssetType,
    FilterState,
    Market,
    PageState,
    Recommendation,
    RiskProfile,
    SortDirection,
    SortState,
    parse_field_path,
)

__all__ = [
    "AgentMetadata",
    "AgentPayload",
    "AnalysisResult",
    "AssetType",
    "ConversationEntry",
    "FilterState",
    "FourPillarScore",
    "KeyMetrics",
    "Market",
    "PageState",
    "RankedInvestment",
    "Recommendation",
    "RiskProfile",
    "SortDirection",
    "SortState",
    "parse_field_path",
]
