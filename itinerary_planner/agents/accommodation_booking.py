"""
Accommodation Booking Agent for the itinerary planner system.

Finds 3-8 lodging options across price categories, guided by the
destination's accommodation categories and currency.
"""

from typing import Any

from itinerary_planner.agents.base import (
    AgentConfig,
    AgentInput,
    BaseAgent,
    request_payload,
)
from itinerary_planner.data.schemas import AccommodationSearchResult, DestinationProfile
from itinerary_planner.generation.client import StructuredGenerationClient


class AccommodationBookingInput(AgentInput):
    profile: DestinationProfile


class AccommodationBookingAgent(
    BaseAgent[AccommodationBookingInput, AccommodationSearchResult]
):
    """
    Specialized agent for finding accommodation options.

    Runs concurrently with activity discovery; both read the same
    destination profile and neither depends on the other.
    """

    input_type = AccommodationBookingInput
    output_schema = AccommodationSearchResult

    def __init__(
        self, client: StructuredGenerationClient, config: AgentConfig | None = None
    ):
        default_config = AgentConfig(
            name="Accommodation Booking",
            capability="accommodation_booking",
            failure_message="failed to find accommodation options",
        )
        super().__init__(client, config or default_config)

    def check_input(self, agent_input: AccommodationBookingInput) -> None:
        if not agent_input.profile.accommodation:
            raise ValueError("Destination profile has no accommodation categories")

    def build_payload(self, agent_input: AccommodationBookingInput) -> dict[str, Any]:
        payload = request_payload(agent_input.request)
        payload["destination_intelligence"] = (
            agent_input.profile.accommodation_context()
        )
        return payload

    def check_output(
        self, output: AccommodationSearchResult, agent_input: AccommodationBookingInput
    ) -> AccommodationSearchResult:
        ids = [option.id for option in output.accommodation_options]
        if len(set(ids)) != len(ids):
            raise ValueError("Accommodation ids must be unique")
        return output
