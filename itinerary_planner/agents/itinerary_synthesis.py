"""
Itinerary Synthesis Agent for the itinerary planner system.

The final phase: merges the raw request and every earlier phase's output
into exactly three itineraries with distinct vibes, plus a destination
overview and budget guidance.
"""

from typing import Any

from itinerary_planner.agents.base import (
    AgentConfig,
    AgentInput,
    BaseAgent,
    request_payload,
)
from itinerary_planner.data.models import ItineraryBundle
from itinerary_planner.data.schemas import (
    AccommodationSearchResult,
    ActivityCatalog,
    CostEstimate,
    DestinationProfile,
)
from itinerary_planner.generation.client import StructuredGenerationClient

MIN_OPTIONS = 3
MAX_OPTIONS = 6


class ItinerarySynthesisInput(AgentInput):
    profile: DestinationProfile
    activities: ActivityCatalog
    accommodation: AccommodationSearchResult
    costs: CostEstimate


class ItinerarySynthesisAgent(BaseAgent[ItinerarySynthesisInput, ItineraryBundle]):
    """
    Specialized agent for synthesizing the itinerary bundle.

    Besides the bundle schema (three itineraries, distinct vibes), it checks
    that every itinerary offers 3-6 hotel and commute options and covers each
    trip day exactly once. Derived costs are cleared before returning.
    """

    input_type = ItinerarySynthesisInput
    output_schema = ItineraryBundle

    def __init__(
        self, client: StructuredGenerationClient, config: AgentConfig | None = None
    ):
        default_config = AgentConfig(
            name="Itinerary Synthesis",
            capability="itinerary_synthesis",
            failure_message="failed to synthesize itineraries",
        )
        super().__init__(client, config or default_config)

    def build_payload(self, agent_input: ItinerarySynthesisInput) -> dict[str, Any]:
        return {
            "user_input": request_payload(agent_input.request),
            "destination_data": agent_input.profile.model_dump(mode="json"),
            "activity_data": agent_input.activities.model_dump(mode="json"),
            "accommodation_data": agent_input.accommodation.model_dump(mode="json"),
            "cost_data": agent_input.costs.model_dump(mode="json"),
        }

    def check_output(
        self, output: ItineraryBundle, agent_input: ItinerarySynthesisInput
    ) -> ItineraryBundle:
        for itinerary in output.itineraries:
            for label, options in (
                ("hotel", itinerary.hotel_options),
                ("commute", itinerary.commute_options),
            ):
                if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
                    raise ValueError(
                        f"Itinerary '{itinerary.id}' has {len(options)} {label} "
                        f"options, expected {MIN_OPTIONS}-{MAX_OPTIONS}"
                    )

        output.validate_for(agent_input.request)
        return output.with_stale_costs()
