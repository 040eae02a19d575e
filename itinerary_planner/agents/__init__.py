"""
Agent modules for the Itinerary Planner system.

This package contains the specialized data agents, one per slice of travel
data, plus the synthesis agent that merges their outputs.
"""

from itinerary_planner.agents.accommodation_booking import (
    AccommodationBookingAgent,
    AccommodationBookingInput,
)
from itinerary_planner.agents.activity_discovery import (
    ActivityDiscoveryAgent,
    ActivityDiscoveryInput,
)
from itinerary_planner.agents.base import AgentConfig, AgentInput, BaseAgent
from itinerary_planner.agents.cost_estimation import (
    CostEstimationAgent,
    CostEstimationInput,
)
from itinerary_planner.agents.destination_intelligence import (
    DestinationIntelligenceAgent,
    DestinationIntelligenceInput,
)
from itinerary_planner.agents.formal_trip import FormalTripAgent, FormalTripInput
from itinerary_planner.agents.itinerary_synthesis import (
    ItinerarySynthesisAgent,
    ItinerarySynthesisInput,
)
from itinerary_planner.agents.result import AgentResult, Err, Ok

__all__ = [
    "AccommodationBookingAgent",
    "AccommodationBookingInput",
    "ActivityDiscoveryAgent",
    "ActivityDiscoveryInput",
    "AgentConfig",
    "AgentInput",
    "AgentResult",
    "BaseAgent",
    "CostEstimationAgent",
    "CostEstimationInput",
    "DestinationIntelligenceAgent",
    "DestinationIntelligenceInput",
    "Err",
    "FormalTripAgent",
    "FormalTripInput",
    "ItinerarySynthesisAgent",
    "ItinerarySynthesisInput",
    "Ok",
]
