"""
Conversation models.
Everything the user and the agent say is a ConversationEntry; successful
agent responses carry the analysis they produced.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from ..core.utils.date_utils import utcnow
from .analysis import AgentMetadata, AnalysisResult


class ConversationEntry(BaseModel):
    """One message in the session's append-only conversation."""

    role: Literal["user", "assistant"] = Field(..., description="Message role")
    content: str = Field(..., description="Message text")
    timestamp: datetime = Field(default_factory=utcnow)
    data: AnalysisResult | None = Field(
        default=None, description="Analysis produced by this response"
    )
    metadata: AgentMetadata | None = Field(
        default=None, description="Agent metadata for this response"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "role": "assistant",
                "content": "Top long-term picks across NSE and US markets...",
                "timestamp": "2025-10-05T10:15:00Z",
                "metadata": {
                    "agent_name": "Financial Analysis Agent",
                    "timestamp": "2025-10-05T10:15:00Z",
                    "markets_analyzed": ["NSE", "US"],
                },
            }
        }
    }
