"""
Unit tests for the Gemini-backed structured generation client.
"""

import json
from unittest.mock import patch

import pytest

from itinerary_planner.config import AgentModelConfig
from itinerary_planner.data.schemas import DestinationProfile
from itinerary_planner.generation import GeminiGenerationClient


@pytest.fixture
def model_configs():
    return {
        "destination": AgentModelConfig(name="gemini-2.5-pro", temperature=0.3),
        "synthesis": AgentModelConfig(name="gemini-2.5-flash", temperature=0.5, max_tokens=8192),
    }


def test_default_client_is_built_when_none_given():
    with patch("itinerary_planner.generation.client.genai") as mock_genai:
        client = GeminiGenerationClient()

    mock_genai.Client.assert_called_once_with()
    assert client.client is mock_genai.Client.return_value


def test_model_for_capability(model_configs, mock_gemini_client):
    client = GeminiGenerationClient(model_configs=model_configs, client=mock_gemini_client)

    assert client.model_for("destination_intelligence").name == "gemini-2.5-pro"
    assert client.model_for("itinerary_synthesis").max_tokens == 8192
    # No configuration for the activity agent
    assert client.model_for("activity_discovery").name == "gemini-2.5-flash"


@pytest.mark.asyncio
async def test_generate_returns_decoded_object(model_configs, mock_gemini_client):
    mock_gemini_client.aio.models.generate_content.return_value.text = (
        '```json\n{"destination": "Goa"}\n```'
    )
    client = GeminiGenerationClient(model_configs=model_configs, client=mock_gemini_client)

    result = await client.generate(
        "destination_intelligence", {"destination": "Goa"}, DestinationProfile
    )

    assert result == {"destination": "Goa"}

    kwargs = mock_gemini_client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.5-pro"
    assert kwargs["config"].response_mime_type == "application/json"
    assert kwargs["config"].temperature == 0.3

    prompt = kwargs["contents"][0].parts[0].text
    assert json.dumps({"destination": "Goa"}, indent=2) in prompt
    assert '"title": "DestinationProfile"' in prompt


@pytest.mark.asyncio
async def test_generate_returns_none_for_unusable_output(mock_gemini_client):
    client = GeminiGenerationClient(client=mock_gemini_client)

    mock_gemini_client.aio.models.generate_content.return_value.text = "not json"
    assert await client.generate("activity_discovery", {}, DestinationProfile) is None

    mock_gemini_client.aio.models.generate_content.return_value.text = "[1, 2]"
    assert await client.generate("activity_discovery", {}, DestinationProfile) is None

    mock_gemini_client.aio.models.generate_content.return_value.text = None
    assert await client.generate("activity_discovery", {}, DestinationProfile) is None


@pytest.mark.asyncio
async def test_unknown_capability_raises(mock_gemini_client):
    client = GeminiGenerationClient(client=mock_gemini_client)
    with pytest.raises(KeyError):
        await client.generate("flight_search", {}, DestinationProfile)
    mock_gemini_client.aio.models.generate_content.assert_not_called()
