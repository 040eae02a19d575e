"""
Activity Discovery Agent for the itinerary planner system.

Finds activities at the destination that fit the traveler's preferences,
using the climate, culture and local cost profile gathered in the first
phase.
"""

from typing import Any

from itinerary_planner.agents.base import (
    AgentConfig,
    AgentInput,
    BaseAgent,
    request_payload,
)
from itinerary_planner.data.schemas import ActivityCatalog, DestinationProfile
from itinerary_planner.generation.client import StructuredGenerationClient


class ActivityDiscoveryInput(AgentInput):
    profile: DestinationProfile


class ActivityDiscoveryAgent(BaseAgent[ActivityDiscoveryInput, ActivityCatalog]):
    """Specialized agent for discovering activities and daily themes."""

    input_type = ActivityDiscoveryInput
    output_schema = ActivityCatalog

    def __init__(
        self, client: StructuredGenerationClient, config: AgentConfig | None = None
    ):
        default_config = AgentConfig(
            name="Activity Discovery",
            capability="activity_discovery",
            failure_message="failed to discover activities",
        )
        super().__init__(client, config or default_config)

    def build_payload(self, agent_input: ActivityDiscoveryInput) -> dict[str, Any]:
        payload = request_payload(agent_input.request)
        payload["destination_intelligence"] = agent_input.profile.activity_context()
        return payload

    def check_output(
        self, output: ActivityCatalog, agent_input: ActivityDiscoveryInput
    ) -> ActivityCatalog:
        if output.total_activities == 0:
            raise ValueError("No activities returned")

        ids = [a.id for group in output.categories for a in group.activities]
        if len(set(ids)) != len(ids):
            raise ValueError("Activity ids must be unique")

        duration = agent_input.request.duration_days
        out_of_range = [t.day for t in output.daily_themes if t.day > duration]
        if out_of_range:
            raise ValueError(f"Daily themes beyond day {duration}: {out_of_range}")
        return output
