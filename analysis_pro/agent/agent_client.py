"""
HTTP client for the remote analysis agent.

The client never raises for agent problems: every call returns an
AgentCallResult tagged with success, so the session can turn transport
errors into chat messages.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings
from ..models.analysis import AgentPayload

logger = structlog.get_logger()


@dataclass(frozen=True)
class AgentCallResult:
    """
    Tagged outcome of one agent call.

    success=True carries the decoded payload (whose own status may still be
    "failure"); success=False carries a transport error description.
    """

    success: bool
    response: AgentPayload | None = None
    error: str | None = None

    @classmethod
    def ok(cls, payload: AgentPayload) -> "AgentCallResult":
        return cls(success=True, response=payload)

    @classmethod
    def failed(cls, error: str) -> "AgentCallResult":
        return cls(success=False, error=error)


def _unwrap_payload(body: Any) -> Any:
    # Some gateways wrap the agent body as {"success": ..., "response": {...}}
    if isinstance(body, dict) and "response" in body and "status" not in body:
        return body["response"]
    return body


class AgentClient:
    """
    Async client for the analysis agent endpoint.

    No retry and, unless configured, no timeout: a request runs until the
    agent answers or the connection fails.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        """
        Initialize agent client.

        Args:
            settings: Application settings (agent URL, API key, timeout)
            client: Optional httpx AsyncClient for connection pooling / tests
        """
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.agent_request_timeout)
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.agent_api_key:
            headers["x-api-key"] = self.settings.agent_api_key
        return headers

    async def call(self, message: str, agent_id: str) -> AgentCallResult:
        """
        Send one message to the agent.

        Args:
            message: User message or generated analysis query
            agent_id: Agent identifier

        Returns:
            AgentCallResult.ok(payload) if an HTTP 2xx JSON body came back
            (an envelope that does not fit becomes a "failure" payload),
            AgentCallResult.failed(reason) for connection / HTTP / decode errors
        """
        client = await self._get_client()

        logger.info("Calling analysis agent", agent_id=agent_id, message_length=len(message))

        try:
            response = await client.post(
                self.settings.agent_api_url,
                json={"message": message, "agent_id": agent_id},
                headers=self._headers(),
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Agent returned HTTP error",
                agent_id=agent_id,
                status_code=e.response.status_code,
            )
            return AgentCallResult.failed(f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error("Agent request failed", agent_id=agent_id, error=str(e))
            return AgentCallResult.failed(str(e) or type(e).__name__)
        except ValueError as e:
            logger.error("Agent response is not JSON", agent_id=agent_id, error=str(e))
            return AgentCallResult.failed("Invalid JSON from agent")

        try:
            payload = AgentPayload.model_validate(_unwrap_payload(body))
        except PydanticValidationError as e:
            logger.error(
                "Agent response envelope invalid, treating as failure",
                agent_id=agent_id,
                error_count=e.error_count(),
            )
            return AgentCallResult.ok(AgentPayload(status="failure"))

        logger.info("Agent responded", agent_id=agent_id, status=payload.status)
        return AgentCallResult.ok(payload)
