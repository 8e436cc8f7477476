"""
Shared fixtures: agent wire payloads and a session with a mocked agent.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from analysis_pro.agent.session import AgentSession
from analysis_pro.models.analysis import AnalysisResult
from tests.factories import make_result, success_outcome


@pytest.fixture
def result_payload():
    """Wire-format analysis result with 25 investments"""
    return make_result()


@pytest.fixture
def analysis_result(result_payload):
    """Parsed AnalysisResult with 25 investments"""
    return AnalysisResult.model_validate(result_payload)


@pytest.fixture
def mock_agent():
    """Mock agent transport returning a successful 25-investment analysis"""
    agent = Mock()
    agent.call = AsyncMock(return_value=success_outcome())
    return agent


@pytest.fixture
def session(mock_agent):
    """AgentSession with mocked agent transport"""
    return AgentSession(mock_agent, agent_id="agent_test", page_size=10)
