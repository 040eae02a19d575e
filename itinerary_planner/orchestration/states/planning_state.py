"""
State representation for the itinerary planner workflow.

The state is a TypedDict so LangGraph can merge the partial updates each
node returns. Every phase writes its own key; ``completed_phases`` uses an
additive reducer because the two discovery phases write it in the same
superstep.
"""

import operator
from typing import Annotated, TypedDict

from itinerary_planner.data.models import (
    FormalTripAdjustment,
    ItineraryBundle,
    TripRequest,
)
from itinerary_planner.data.schemas import (
    AccommodationSearchResult,
    ActivityCatalog,
    CostEstimate,
    DestinationProfile,
)


class PlanningState(TypedDict, total=False):
    """State passed between the nodes of the planning graph."""

    request: TripRequest
    profile: DestinationProfile
    activities: ActivityCatalog
    accommodation: AccommodationSearchResult
    costs: CostEstimate
    bundle: ItineraryBundle
    formal_adjustment: FormalTripAdjustment
    completed_phases: Annotated[list[str], operator.add]


def initial_state(request: TripRequest) -> PlanningState:
    """Build the state a planning run starts from."""
    return {"request": request, "completed_phases": []}
