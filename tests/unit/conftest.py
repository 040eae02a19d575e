"""
Shared fixtures for unit tests: canned agent outputs and a fake
structured generation client that serves them.
"""

from typing import Any

import pytest

from itinerary_planner.data.models import ItineraryBundle
from itinerary_planner.data.schemas import (
    AccommodationSearchResult,
    ActivityCatalog,
    CostEstimate,
    DestinationProfile,
)
from itinerary_planner.generation.client import StructuredGenerationClient

# Per-day (activity id suffix, cost, safety score) rows for the Goa itinerary.
# The three activities sum to 4500.
GOA_ACTIVITIES = [
    ("a1", 1500.0, 80.0),
    ("a2", 2000.0, 70.0),
    ("a3", 1000.0, 90.0),
]


def make_itinerary_data(prefix: str, vibe: str, days: int = 3) -> dict[str, Any]:
    """
    An itinerary dict with one activity per day.

    The first hotel costs 5000/night (safety 90), the first commute option
    400/day (safety 80); flights are 12000 and food 1500/day.
    """
    daily_plan = []
    for day in range(1, days + 1):
        suffix, cost, safety = GOA_ACTIVITIES[(day - 1) % len(GOA_ACTIVITIES)]
        daily_plan.append(
            {
                "day": day,
                "title": f"Day {day}",
                "activities": [
                    {
                        "id": f"{prefix}-d{day}-{suffix}",
                        "name": f"Activity {day}",
                        "cost": cost,
                        "safety_score": safety,
                        "selected": True,
                    }
                ],
            }
        )
    return {
        "id": prefix,
        "vibe": vibe,
        "title": f"{vibe} Goa",
        "daily_plan": daily_plan,
        "hotel_options": [
            {"id": f"{prefix}-h1", "name": "Beach Resort", "cost_per_night": 5000, "safety_score": 90},
            {"id": f"{prefix}-h2", "name": "City Inn", "cost_per_night": 3000, "safety_score": 85},
            {"id": f"{prefix}-h3", "name": "Hostel", "cost_per_night": 1000, "safety_score": 0},
        ],
        "commute_options": [
            {"id": f"{prefix}-c1", "type": "Scooter", "cost": 400, "safety_score": 80},
            {"id": f"{prefix}-c2", "type": "Taxi", "cost": 1500, "safety_score": 88},
            {"id": f"{prefix}-c3", "type": "Bus", "cost": 100, "safety_score": 75},
        ],
        "cost": {
            "flights": 12000,
            "food": 1500,
            "accommodation": 999,
            "activities": 999,
            "commute": 999,
            "total": 999,
        },
    }


def make_bundle_data(days: int = 3) -> dict[str, Any]:
    return {
        "itineraries": [
            make_itinerary_data("goa-relaxed", "Relaxed", days),
            make_itinerary_data("goa-adventure", "Adventurous", days),
            make_itinerary_data("goa-culture", "Cultural", days),
        ],
        "destination_overview": {"destination": "Goa", "currency": "INR"},
        "budget_guidance": {
            "recommended_budget": {"budget": 25000, "mid_range": 45000, "luxury": 90000},
            "cost_saving_tips": ["Travel off-season"],
        },
    }


class FakeGenerationClient(StructuredGenerationClient):
    """
    Serves canned responses keyed by capability.

    A response that is an exception instance is raised instead of returned.
    """

    def __init__(self, responses: dict[str, Any]):
        self.responses = responses
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def generate(self, capability, payload, schema):
        self.calls.append((capability, payload))
        response = self.responses.get(capability)
        if isinstance(response, Exception):
            raise response
        return response

    def capabilities(self) -> list[str]:
        return [capability for capability, _ in self.calls]


@pytest.fixture
def profile_data():
    return {
        "destination": "Goa",
        "country": "India",
        "region": "Konkan",
        "climate": {"season": "Winter", "temperature": "22-32C"},
        "currency": {"local": "INR", "exchange_rate": 1.0},
        "language": {"primary": "Konkani", "english_level": "High"},
        "safety": {"overall_score": 82, "tips": ["Avoid isolated beaches at night"]},
        "culture": {"customs": ["Dress modestly at churches"]},
        "transportation": [
            {
                "type": "Taxi",
                "cost_range": {"min": 800, "max": 2000},
                "safety_score": 85,
            }
        ],
        "accommodation": [
            {"category": "Mid-Range", "average_cost_per_night": 4500, "safety_score": 88}
        ],
        "costs": {
            "meals": {"budget": 600, "mid_range": 1500, "luxury": 4000},
            "activities": {"free": ["Beaches"], "budget_range": {"min": 0, "max": 5000}},
            "shopping": {"markets": ["Anjuna"], "souvenirs": {"min": 200, "max": 3000}},
        },
    }


@pytest.fixture
def catalog_data():
    return {
        "destination": "Goa",
        "categories": [
            {
                "category": "Beaches",
                "activities": [
                    {"id": "act-1", "name": "Calangute Beach", "cost": 0, "safety_score": 80},
                    {
                        "id": "act-2",
                        "name": "Dudhsagar trek",
                        "cost": 2500,
                        "safety_score": 70,
                        "difficulty": "Challenging",
                    },
                ],
            }
        ],
        "daily_themes": [{"day": 1, "theme": "Beaches", "recommended_activities": ["act-1"]}],
    }


@pytest.fixture
def accommodation_data():
    return {
        "destination": "Goa",
        "accommodation_options": [
            {"id": "acc-1", "name": "Taj Fort Aguada", "category": "Luxury", "rating": 4.7, "cost_per_night": 15000, "safety_score": 95},
            {"id": "acc-2", "name": "Casa Anjuna", "category": "Mid-Range", "rating": 4.3, "cost_per_night": 5000, "safety_score": 88},
            {"id": "acc-3", "name": "Zostel Goa", "category": "Backpacker", "rating": 4.1, "cost_per_night": 900, "safety_score": 78},
        ],
    }


@pytest.fixture
def cost_data():
    return {
        "destination": "Goa",
        "total_trip_cost": {"budget": 25000, "mid_range": 45000, "luxury": 90000},
        "flights": {
            "route": "DEL-GOI",
            "economy": {"min": 4000, "max": 9000, "average": 6000},
        },
        "food_per_day": {"budget": 600, "mid_range": 1500, "luxury": 4000},
    }


@pytest.fixture
def bundle_data():
    return make_bundle_data(days=3)


@pytest.fixture
def profile(profile_data):
    return DestinationProfile.model_validate(profile_data)


@pytest.fixture
def catalog(catalog_data):
    return ActivityCatalog.model_validate(catalog_data)


@pytest.fixture
def accommodation(accommodation_data):
    return AccommodationSearchResult.model_validate(accommodation_data)


@pytest.fixture
def costs(cost_data):
    return CostEstimate.model_validate(cost_data)


@pytest.fixture
def bundle(bundle_data):
    return ItineraryBundle.model_validate(bundle_data)


@pytest.fixture
def goa_itinerary(bundle):
    return bundle.itineraries[0]


@pytest.fixture
def adjustment_data():
    return {
        "adjusted_stay": "Stay in Panaji, ten minutes from the convention centre",
        "adjusted_transport": "Pre-booked taxi on the meeting day",
        "adjusted_schedule": "Meeting on day 1 afternoon, sightseeing on day 2",
        "adjusted_buffer_times": "One hour before the meeting",
    }


@pytest.fixture
def capability_responses(
    profile_data, catalog_data, accommodation_data, cost_data, bundle_data, adjustment_data
):
    """A successful response for every capability."""
    return {
        "destination_intelligence": profile_data,
        "activity_discovery": catalog_data,
        "accommodation_booking": accommodation_data,
        "cost_estimation": cost_data,
        "itinerary_synthesis": bundle_data,
        "formal_adjustment": adjustment_data,
    }


@pytest.fixture
def fake_client(capability_responses):
    return FakeGenerationClient(capability_responses)


@pytest.fixture
def make_client():
    """Build a FakeGenerationClient from a capability -> response map."""
    return FakeGenerationClient


@pytest.fixture
def bundle_factory():
    """Build bundle data covering a given number of days."""
    return make_bundle_data
