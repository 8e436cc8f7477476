"""
Agent session and transport for the remote analysis agent.
"""

from .agent_client import AgentCallResult, AgentClient
from .session import AgentSession, SessionSnapshot, build_analysis_query

__all__ = [
    "AgentCallResult",
    "AgentClient",
    "AgentSession",
    "SessionSnapshot",
    "build_analysis_query",
]
