"""
Cost Estimation Agent for the itinerary planner system.

Turns the destination's cost profile, the discovered activities and the
nightly rates of the accommodation options into budget bands for the trip.
"""

from typing import Any

from itinerary_planner.agents.base import (
    AgentConfig,
    AgentInput,
    BaseAgent,
    request_payload,
)
from itinerary_planner.data.schemas import (
    AccommodationSearchResult,
    ActivityCatalog,
    CostEstimate,
    DestinationProfile,
)
from itinerary_planner.generation.client import StructuredGenerationClient


class CostEstimationInput(AgentInput):
    profile: DestinationProfile
    activities: ActivityCatalog
    accommodation: AccommodationSearchResult


class CostEstimationAgent(BaseAgent[CostEstimationInput, CostEstimate]):
    """Specialized agent for estimating trip costs."""

    input_type = CostEstimationInput
    output_schema = CostEstimate

    def __init__(
        self, client: StructuredGenerationClient, config: AgentConfig | None = None
    ):
        default_config = AgentConfig(
            name="Cost Estimation",
            capability="cost_estimation",
            failure_message="failed to estimate trip costs",
        )
        super().__init__(client, config or default_config)

    def build_payload(self, agent_input: CostEstimationInput) -> dict[str, Any]:
        payload = request_payload(agent_input.request)
        payload["destination_intelligence"] = agent_input.profile.cost_context()
        payload["activities"] = agent_input.activities.flattened()
        payload["accommodation_options"] = agent_input.accommodation.nightly_rates()
        return payload

    def check_output(
        self, output: CostEstimate, agent_input: CostEstimationInput
    ) -> CostEstimate:
        tiers = output.total_trip_cost
        if not (tiers.budget <= tiers.mid_range <= tiers.luxury):
            raise ValueError(
                "Trip cost tiers must be ordered budget <= mid-range <= luxury"
            )
        return output
