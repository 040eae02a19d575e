"""
Destination Intelligence Agent for the itinerary planner system.

This module implements the first-phase agent, responsible for gathering
everything later phases need to know about the destination: climate,
currency, language, safety, culture, logistics, local transport,
accommodation categories and local costs.
"""

from typing import Any

from itinerary_planner.agents.base import (
    AgentConfig,
    AgentInput,
    BaseAgent,
)
from itinerary_planner.data.schemas import DestinationProfile
from itinerary_planner.generation.client import StructuredGenerationClient


class DestinationIntelligenceInput(AgentInput):
    """Input for destination research: just the trip request."""


class DestinationIntelligenceAgent(
    BaseAgent[DestinationIntelligenceInput, DestinationProfile]
):
    """
    Specialized agent for researching the trip destination.

    Its output is read-only input to the activity, accommodation and cost
    agents, each of which receives only the slice it needs.
    """

    input_type = DestinationIntelligenceInput
    output_schema = DestinationProfile

    def __init__(
        self, client: StructuredGenerationClient, config: AgentConfig | None = None
    ):
        default_config = AgentConfig(
            name="Destination Intelligence",
            capability="destination_intelligence",
            failure_message="failed to gather destination intelligence",
        )
        super().__init__(client, config or default_config)

    def build_payload(self, agent_input: DestinationIntelligenceInput) -> dict[str, Any]:
        request = agent_input.request
        return {
            "destination": request.destination,
            "duration_days": request.duration_days,
            "people_count": request.people_count,
            "budget": request.budget,
            "currency": request.currency,
            "travel_dates": request.travel_dates,
            "origin": request.origin,
        }

    def check_output(
        self, output: DestinationProfile, agent_input: DestinationIntelligenceInput
    ) -> DestinationProfile:
        if not output.accommodation:
            raise ValueError("No accommodation categories returned")
        return output
