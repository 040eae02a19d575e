"""
Formal Trip Agent for the itinerary planner system.

Runs after synthesis for formal trips with meeting details. Adjusts the
stay, transport, schedule and buffer times around the meeting.
"""

from typing import Any

from itinerary_planner.agents.base import (
    AgentConfig,
    AgentInput,
    BaseAgent,
    request_payload,
)
from itinerary_planner.data.models import FormalTripAdjustment, ItineraryBundle
from itinerary_planner.generation.client import StructuredGenerationClient


class FormalTripInput(AgentInput):
    bundle: ItineraryBundle


class FormalTripAgent(BaseAgent[FormalTripInput, FormalTripAdjustment]):
    """Specialized agent for fitting a formal trip around its meeting."""

    input_type = FormalTripInput
    output_schema = FormalTripAdjustment

    def __init__(
        self, client: StructuredGenerationClient, config: AgentConfig | None = None
    ):
        default_config = AgentConfig(
            name="Formal Trip",
            capability="formal_adjustment",
            failure_message="failed to adjust the trip for its meeting",
        )
        super().__init__(client, config or default_config)

    def check_input(self, agent_input: FormalTripInput) -> None:
        if not agent_input.request.has_meeting:
            raise ValueError("formal trip with meeting details required")

    def build_payload(self, agent_input: FormalTripInput) -> dict[str, Any]:
        payload = request_payload(agent_input.request)
        payload["itineraries"] = [
            {
                "title": itinerary.title,
                "vibe": itinerary.vibe,
                "hotels": [
                    {"name": hotel.name, "area": hotel.area}
                    for hotel in itinerary.hotel_options
                ],
                "commutes": [commute.type for commute in itinerary.commute_options],
            }
            for itinerary in agent_input.bundle.itineraries
        ]
        return payload
