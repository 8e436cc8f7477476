"""
Agent session: the conversation + analysis state container.

Owns the conversation, the current analysis result and the rankings view
state (filters, sort, page). The agent call is the only suspension point;
everything applied after it happens in one synchronous step, so callers never
observe a half-applied response.
"""

from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum
from typing import Protocol, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import MalformedDataError, SessionBusyError, ValidationError
from ..models.analysis import AgentMetadata, AgentPayload, AnalysisResult
from ..models.conversation import ConversationEntry
from ..models.view_state import (
    AssetType,
    FilterState,
    Market,
    PageState,
    RiskProfile,
    SortDirection,
    SortState,
    parse_field_path,
)
from ..services.export_service import CsvExport, export_csv
from ..services.ranking import (
    InvestmentDetail,
    RankingView,
    build_investment_detail,
    clamp_page,
    derive_rankings,
    filter_investments,
)
from ..shared.formatters import format_asset_type
from .agent_client import AgentCallResult

logger = structlog.get_logger()

E = TypeVar("E", bound=StrEnum)

NETWORK_ERROR_MESSAGE = "Network error. Please try again."
AGENT_ERROR_MESSAGE = "Sorry, I encountered an error processing your request."
ANALYSIS_COMPLETE_MESSAGE = "Analysis complete."


class AgentCaller(Protocol):
    """Anything that can send a message to the analysis agent."""

    async def call(self, message: str, agent_id: str) -> AgentCallResult: ...


class SessionSnapshot(BaseModel):
    """Read-only copy of the whole session state."""

    conversation: list[ConversationEntry]
    analysis_result: AnalysisResult | None
    filter_state: FilterState
    sort_state: SortState
    page_state: PageState
    busy: bool


def build_analysis_query(filter_state: FilterState) -> str:
    """
    Natural-language query for a full analysis of the current selection.

    Examples:
        >>> build_analysis_query(FilterState(markets={"NSE"}, asset_types={"mutual_fund"}))
        'Give me medium risk investment recommendations for mutual fund in NSE markets for long-term growth'
    """
    markets = ", ".join(str(market) for market in filter_state.ordered_markets())
    assets = ", ".join(
        format_asset_type(str(asset_type)) for asset_type in filter_state.ordered_asset_types()
    )
    risk = str(filter_state.risk_profile).lower()
    return (
        f"Give me {risk} risk investment recommendations for {assets} "
        f"in {markets} markets for long-term growth"
    )


class AgentSession:
    """
    Single-user conversation with the analysis agent.

    One request at a time: submitting while a request is in flight raises
    SessionBusyError instead of queueing.
    """

    def __init__(self, agent_client: AgentCaller, agent_id: str, page_size: int = 10):
        """
        Initialize session.

        Args:
            agent_client: Transport used to reach the agent
            agent_id: Agent identifier sent with every message
            page_size: Rankings rows per page
        """
        self.agent_client = agent_client
        self.agent_id = agent_id

        self._conversation: list[ConversationEntry] = []
        self._analysis_result: AnalysisResult | None = None
        self._filter_state = FilterState()
        self._sort_state = SortState()
        self._page_state = PageState(page_size=page_size)
        self._busy = False

    # ===== State accessors =====

    @property
    def conversation(self) -> tuple[ConversationEntry, ...]:
        return tuple(self._conversation)

    @property
    def analysis_result(self) -> AnalysisResult | None:
        return self._analysis_result

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    @property
    def sort_state(self) -> SortState:
        return self._sort_state

    @property
    def page_state(self) -> PageState:
        return self._page_state

    @property
    def busy(self) -> bool:
        return self._busy

    def snapshot(self) -> SessionSnapshot:
        """Copy of every state field."""
        return SessionSnapshot(
            conversation=list(self._conversation),
            analysis_result=self._analysis_result,
            filter_state=self._filter_state,
            sort_state=self._sort_state,
            page_state=self._page_state,
            busy=self._busy,
        )

    # ===== Conversation =====

    async def submit(self, text: str) -> ConversationEntry:
        """
        Send a message to the agent and apply its response.

        The user entry is appended before the call. Whatever the outcome,
        exactly one assistant entry is appended and busy is cleared.

        Args:
            text: Message to send (surrounding whitespace is stripped)

        Returns:
            The assistant entry appended for this response

        Raises:
            ValidationError: If text is blank
            SessionBusyError: If another request is still in flight
        """
        message = (text or "").strip()
        if not message:
            raise ValidationError("Message must not be empty")
        if self._busy:
            raise SessionBusyError("An analysis request is already in progress")

        self._conversation.append(ConversationEntry(role="user", content=message))
        self._busy = True
        logger.info(
            "Message submitted",
            agent_id=self.agent_id,
            conversation_length=len(self._conversation),
        )

        try:
            try:
                outcome = await self.agent_client.call(message, self.agent_id)
            except Exception as e:
                logger.error("Agent call raised", agent_id=self.agent_id, error=str(e))
                outcome = AgentCallResult.failed(str(e))
            return self._apply_outcome(outcome)
        finally:
            self._busy = False

    async def run_full_analysis(self) -> ConversationEntry:
        """Submit the generated query for the current filters and risk profile."""
        return await self.submit(build_analysis_query(self._filter_state))

    def _apply_outcome(self, outcome: AgentCallResult) -> ConversationEntry:
        if not outcome.success or outcome.response is None:
            logger.warning("Agent transport failed", error=outcome.error)
            return self._append_assistant(NETWORK_ERROR_MESSAGE)

        payload = outcome.response
        if not payload.succeeded:
            logger.warning(
                "Agent reported failure", status=payload.status, has_message=bool(payload.message)
            )
            return self._append_assistant(payload.message or AGENT_ERROR_MESSAGE)

        try:
            result = self._parse_result(payload)
        except MalformedDataError as e:
            logger.warning("Agent payload malformed", error=e.message, **e.context)
            return self._append_assistant(AGENT_ERROR_MESSAGE)

        entry = ConversationEntry(
            role="assistant",
            content=result.conversational_insight
            or result.analysis_summary
            or ANALYSIS_COMPLETE_MESSAGE,
            data=result,
            metadata=self._parse_metadata(payload),
        )
        self._conversation.append(entry)
        self._analysis_result = result
        self._page_state = self._page_state.model_copy(update={"current_page": 1})

        logger.info(
            "Agent response applied",
            investments=len(result.ranked_investments),
            has_csv=bool(result.csv_export_data),
        )
        return entry

    def _append_assistant(self, content: str) -> ConversationEntry:
        entry = ConversationEntry(role="assistant", content=content)
        self._conversation.append(entry)
        return entry

    @staticmethod
    def _parse_result(payload: AgentPayload) -> AnalysisResult:
        if payload.result is None:
            raise MalformedDataError("Successful response without result")
        try:
            return AnalysisResult.model_validate(payload.result)
        except PydanticValidationError as e:
            raise MalformedDataError(
                "Analysis result does not match wire contract",
                error_count=e.error_count(),
            ) from e

    @staticmethod
    def _parse_metadata(payload: AgentPayload) -> AgentMetadata | None:
        if payload.metadata is None:
            return None
        try:
            return AgentMetadata.model_validate(payload.metadata)
        except PydanticValidationError:
            logger.warning("Ignoring malformed agent metadata")
            return None

    # ===== Filters =====

    def set_filters(
        self,
        markets: Iterable[Market | str],
        asset_types: Iterable[AssetType | str],
        risk_profile: RiskProfile | str | None = None,
    ) -> FilterState:
        """
        Replace the filter selection.

        Raises:
            ValidationError: If a market, asset type or risk profile is unknown
        """
        try:
            new_state = FilterState(
                markets=frozenset(markets),
                asset_types=frozenset(asset_types),
                risk_profile=risk_profile or self._filter_state.risk_profile,
            )
        except PydanticValidationError as e:
            raise ValidationError("Invalid filter selection", error_count=e.error_count()) from e
        return self._replace_filters(new_state)

    def toggle_market(self, market: Market | str) -> FilterState:
        """Add the market to the selection, or remove it if already selected."""
        selected = _coerce(Market, market, "market")
        return self._replace_filters(
            self._filter_state.model_copy(
                update={"markets": self._filter_state.markets ^ {selected}}
            )
        )

    def toggle_asset_type(self, asset_type: AssetType | str) -> FilterState:
        """Add the asset type to the selection, or remove it if already selected."""
        selected = _coerce(AssetType, asset_type, "asset_type")
        return self._replace_filters(
            self._filter_state.model_copy(
                update={"asset_types": self._filter_state.asset_types ^ {selected}}
            )
        )

    def set_risk_profile(self, risk_profile: RiskProfile | str) -> FilterState:
        """Change the risk profile used by the next full analysis; rows are unaffected."""
        profile = _coerce(RiskProfile, risk_profile, "risk_profile")
        self._filter_state = self._filter_state.model_copy(update={"risk_profile": profile})
        return self._filter_state

    def reset_filters(self) -> FilterState:
        """All markets, all asset types, medium risk, first page."""
        self._filter_state = FilterState()
        self._page_state = self._page_state.model_copy(update={"current_page": 1})
        return self._filter_state

    def _replace_filters(self, new_state: FilterState) -> FilterState:
        self._filter_state = new_state
        self._clamp_current_page()
        logger.debug(
            "Filters updated",
            markets=[str(m) for m in new_state.ordered_markets()],
            asset_types=[str(a) for a in new_state.ordered_asset_types()],
        )
        return new_state

    # ===== Sorting =====

    def toggle_sort(self, field_path: str | tuple[str, ...]) -> SortState:
        """
        Column-header sort: re-selecting an ascending key flips it to
        descending; any other selection sorts ascending.
        """
        try:
            path = parse_field_path(field_path)
        except ValueError as e:
            raise ValidationError(str(e), field_path=str(field_path)) from e

        if path == self._sort_state.field_path and self._sort_state.direction == SortDirection.ASC:
            direction = SortDirection.DESC
        else:
            direction = SortDirection.ASC
        self._sort_state = SortState(field_path=path, direction=direction)
        return self._sort_state

    def set_sort(
        self, field_path: str | tuple[str, ...], direction: SortDirection | str
    ) -> SortState:
        """
        Set sort key and direction explicitly.

        Raises:
            ValidationError: If the field path is empty or the direction unknown
        """
        try:
            self._sort_state = SortState(field_path=field_path, direction=direction)
        except (PydanticValidationError, ValueError) as e:
            raise ValidationError("Invalid sort", field_path=str(field_path)) from e
        return self._sort_state

    # ===== Pagination =====

    def go_to_page(self, page: int) -> PageState:
        """Move to page, clamped to the pages that exist."""
        self._page_state = self._page_state.model_copy(
            update={
                "current_page": clamp_page(
                    page, self._filtered_count(), self._page_state.page_size
                )
            }
        )
        return self._page_state

    def next_page(self) -> PageState:
        """Advance one page; stays put on the last page."""
        return self.go_to_page(self._page_state.current_page + 1)

    def previous_page(self) -> PageState:
        """Go back one page; stays put on the first page."""
        return self.go_to_page(self._page_state.current_page - 1)

    def _clamp_current_page(self) -> None:
        self.go_to_page(self._page_state.current_page)

    def _filtered_count(self) -> int:
        if self._analysis_result is None:
            return 0
        return len(filter_investments(self._analysis_result.ranked_investments, self._filter_state))

    # ===== Derived views =====

    def rankings(self) -> RankingView:
        """Current rankings page (filter -> sort -> paginate)."""
        return derive_rankings(
            self._analysis_result, self._filter_state, self._sort_state, self._page_state
        )

    def select_investment(self, symbol: str) -> InvestmentDetail | None:
        """Decoded detail view for symbol in the current analysis."""
        if self._analysis_result is None:
            return None
        investment = self._analysis_result.find(symbol)
        if investment is None:
            return None
        return build_investment_detail(investment)

    def export_csv(self, now: datetime | None = None) -> CsvExport:
        """
        Agent CSV for the current analysis.

        Raises:
            NotFoundError: If there is nothing to export
        """
        return export_csv(self._analysis_result, now)


def _coerce(enum_type: type[E], value: E | str, field: str) -> E:
    try:
        return enum_type(value)
    except ValueError as e:
        raise ValidationError(f"Unknown {field}: {value}", **{field: str(value)}) from e
