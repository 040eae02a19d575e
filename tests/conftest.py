"""
Pytest configuration for the Itinerary Planner tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from itinerary_planner.config import (
    AGENT_TYPES,
    AgentModelConfig,
    APIConfig,
    PlannerConfig,
    ProviderKind,
    SessionStoreKind,
    SystemConfig,
)
from itinerary_planner.data.models import MeetingDetails, TripRequest, TripType
from itinerary_planner.utils import LogLevel, setup_logging


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up logging for tests."""
    setup_logging(LogLevel.DEBUG)


@pytest.fixture
def mock_gemini_client():
    """Mock GenAI client for testing."""
    mock_client = MagicMock()

    # Mock the aio.models.generate_content method
    mock_response = MagicMock()
    mock_response.text = '{"ok": true}'

    mock_client.aio = MagicMock()
    mock_client.aio.models = MagicMock()
    mock_client.aio.models.generate_content = AsyncMock(return_value=mock_response)

    return mock_client


@pytest.fixture
def test_config():
    """Test application configuration (offline fixtures, in-memory sessions)."""
    return PlannerConfig(
        api=APIConfig(
            gemini_api_key="test-key",
            aws_region="ap-south-1",
            dynamodb_table_name="itinerary-planner-test",
        ),
        system=SystemConfig(
            log_level=LogLevel.DEBUG,
            environment="test",
            orchestration_timeout=5.0,
            provider=ProviderKind.FIXTURE,
            session_store=SessionStoreKind.MEMORY,
        ),
        agent_models={
            agent_type: AgentModelConfig(name="gemini-2.5-flash", temperature=0.2)
            for agent_type in AGENT_TYPES
        },
    )


@pytest.fixture
def goa_request():
    """Three days in Goa for two, on a 50,000 INR budget."""
    return TripRequest(
        destination="Goa",
        duration_days=3,
        people_count=2,
        budget=50000,
        preferences=["beaches", "food"],
    )


@pytest.fixture
def formal_request():
    """A three-day business trip to Goa built around an offline meeting."""
    return TripRequest(
        destination="Goa",
        duration_days=3,
        budget=80000,
        trip_type=TripType.FORMAL,
        meeting=MeetingDetails(
            location="Panaji Convention Centre",
            duration="3 hours",
            facilities=["projector", "wifi"],
        ),
    )
