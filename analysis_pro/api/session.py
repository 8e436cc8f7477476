"""
Session endpoints: chat with the agent and browse its rankings.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from ..agent.session import AgentSession
from ..models.conversation import ConversationEntry
from ..models.view_state import AssetType, FilterState, Market, RiskProfile, SortState
from ..services.ranking import InvestmentDetail, RankingView

logger = structlog.get_logger()

router = APIRouter(prefix="/api/session", tags=["session"])


def get_session(request: Request) -> AgentSession:
    """Dependency to get the AgentSession from app state."""
    session: AgentSession = request.app.state.session
    return session


# ===== Request / response models =====


class MessageRequest(BaseModel):
    message: str = Field(..., description="Message for the analysis agent")


class MessageResponse(BaseModel):
    reply: ConversationEntry
    conversation_length: int
    busy: bool


class FilterRequest(BaseModel):
    markets: list[Market] = Field(default_factory=list)
    asset_types: list[AssetType] = Field(default_factory=list)
    risk_profile: RiskProfile | None = None


class SortRequest(BaseModel):
    field_path: str = Field(..., examples=["four_pillar_score.overall_score"])


# ===== Conversation =====


@router.post("/messages", response_model=MessageResponse)
async def send_message(
    request: MessageRequest, session: AgentSession = Depends(get_session)
) -> MessageResponse:
    """Send a free-form message to the agent."""
    reply = await session.submit(request.message)
    return MessageResponse(
        reply=reply, conversation_length=len(session.conversation), busy=session.busy
    )


@router.post("/full-analysis", response_model=MessageResponse)
async def run_full_analysis(session: AgentSession = Depends(get_session)) -> MessageResponse:
    """Ask the agent for a full analysis of the current filters and risk profile."""
    reply = await session.run_full_analysis()
    return MessageResponse(
        reply=reply, conversation_length=len(session.conversation), busy=session.busy
    )


@router.get("/conversation", response_model=list[ConversationEntry])
async def get_conversation(session: AgentSession = Depends(get_session)) -> Any:
    return list(session.conversation)


# ===== Rankings =====


@router.get("/rankings", response_model=RankingView)
async def get_rankings(
    page: int | None = None, session: AgentSession = Depends(get_session)
) -> RankingView:
    """Current rankings page; pass page to navigate (clamped)."""
    if page is not None:
        session.go_to_page(page)
    return session.rankings()


@router.put("/filters", response_model=FilterState)
async def update_filters(
    request: FilterRequest, session: AgentSession = Depends(get_session)
) -> FilterState:
    return session.set_filters(request.markets, request.asset_types, request.risk_profile)


@router.delete("/filters", response_model=FilterState)
async def reset_filters(session: AgentSession = Depends(get_session)) -> FilterState:
    return session.reset_filters()


@router.put("/sort", response_model=SortState)
async def toggle_sort(
    request: SortRequest, session: AgentSession = Depends(get_session)
) -> SortState:
    """Select a sort column; selecting the ascending column again flips it."""
    return session.toggle_sort(request.field_path)


@router.get("/investments/{symbol}", response_model=InvestmentDetail)
async def get_investment(
    symbol: str, session: AgentSession = Depends(get_session)
) -> InvestmentDetail:
    detail = session.select_investment(symbol)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Investment {symbol} not found")
    return detail


# ===== Export =====


@router.get("/export.csv")
async def export_csv(session: AgentSession = Depends(get_session)) -> Response:
    """Download the agent's CSV for the current analysis."""
    export = session.export_csv()
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": export.content_disposition},
    )
