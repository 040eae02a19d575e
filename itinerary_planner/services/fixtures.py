"""
Static itinerary fixtures.

Three hand-written itinerary variants (relaxed, adventurous, cultural) used
when planning offline or as an opt-in fallback. Day templates repeat to fit
any trip length, and every name is tagged with the requested destination.
"""

from typing import Any

from itinerary_planner.data.models import (
    Activity,
    BudgetGuidance,
    CommuteOption,
    CostBreakdown,
    DailyPlan,
    DestinationOverview,
    Difficulty,
    FormalTripAdjustment,
    Hotel,
    Itinerary,
    ItineraryBundle,
    MeetingMode,
    RecommendedBudget,
    Review,
    TripRequest,
)

FIXTURE_FLIGHTS = 12000.0

# (name, category, duration, cost, difficulty, safety score)
ActivityRow = tuple[str, str, str, float, Difficulty, float]

VIBES: list[dict[str, Any]] = [
    {
        "key": "relaxed",
        "vibe": "Relaxed",
        "title": "Slow Days in {destination}",
        "description": (
            "A laid-back journey around {destination} built on easy mornings, "
            "good food and unhurried sightseeing."
        ),
        "food_per_day": 1500.0,
        "days": [
            (
                "Arrival and Unwinding",
                "Settle in",
                [
                    ("Sunset walk", "Leisure", "1-2 hours", 0.0, Difficulty.EASY, 90),
                    ("Welcome dinner", "Food", "2 hours", 1200.0, Difficulty.EASY, 92),
                ],
            ),
            (
                "Markets and Cafes",
                "Local life",
                [
                    ("Morning market stroll", "Shopping", "2-3 hours", 0.0, Difficulty.EASY, 85),
                    ("Cafe hopping", "Food", "3 hours", 800.0, Difficulty.EASY, 88),
                ],
            ),
            (
                "Spa and Scenic Views",
                "Rest",
                [
                    ("Spa session", "Wellness", "2 hours", 2500.0, Difficulty.EASY, 94),
                    ("Viewpoint visit", "Sightseeing", "1-2 hours", 300.0, Difficulty.EASY, 87),
                ],
            ),
        ],
        "hotels": [
            ("Tranquil Bay Resort", "Luxury", 4.6, 9000.0, 93),
            ("Garden Courtyard Inn", "Mid-Range", 4.2, 5000.0, 90),
            ("Sunny Nest Homestay", "Budget", 4.0, 2200.0, 84),
        ],
        "commutes": [
            ("Taxi", 1500.0, 88),
            ("Scooter Rental", 400.0, 72),
            ("Public Bus", 150.0, 78),
        ],
    },
    {
        "key": "adventurous",
        "vibe": "Adventurous",
        "title": "Thrills Around {destination}",
        "description": (
            "An action-packed trip for those who want to see the wilder side "
            "of {destination}, from outdoor sports to long treks."
        ),
        "food_per_day": 1800.0,
        "days": [
            (
                "Arrival and Water Sports",
                "Get moving",
                [
                    ("Kayaking trip", "Adventure", "3 hours", 1800.0, Difficulty.MODERATE, 78),
                    ("Beach club evening", "Nightlife", "3 hours", 1500.0, Difficulty.EASY, 80),
                ],
            ),
            (
                "Trek Day",
                "Outdoors",
                [
                    ("Guided forest trek", "Adventure", "Half day", 2000.0, Difficulty.CHALLENGING, 74),
                    ("Waterfall swim", "Nature", "2 hours", 0.0, Difficulty.MODERATE, 70),
                ],
            ),
            (
                "Island Excursion",
                "Out to sea",
                [
                    ("Snorkeling tour", "Adventure", "4 hours", 3500.0, Difficulty.MODERATE, 82),
                    ("Night food market", "Food", "2 hours", 600.0, Difficulty.EASY, 84),
                ],
            ),
        ],
        "hotels": [
            ("Basecamp Lodge", "Mid-Range", 4.3, 4500.0, 86),
            ("Ridge View Hotel", "Premium", 4.5, 7000.0, 90),
            ("Trailhead Hostel", "Backpacker", 4.1, 1200.0, 80),
        ],
        "commutes": [
            ("Motorbike Rental", 600.0, 68),
            ("Private Jeep", 3000.0, 85),
            ("Taxi", 1500.0, 88),
        ],
    },
    {
        "key": "cultural",
        "vibe": "Cultural",
        "title": "Heritage Trail of {destination}",
        "description": (
            "Immerse yourself in the history and culture of {destination}: "
            "old quarters, temples and churches, museums and local crafts."
        ),
        "food_per_day": 1400.0,
        "days": [
            (
                "Old Quarter Walk",
                "History",
                [
                    ("Heritage walking tour", "Culture", "3 hours", 700.0, Difficulty.EASY, 90),
                    ("River cruise", "Sightseeing", "1-2 hours", 500.0, Difficulty.EASY, 88),
                ],
            ),
            (
                "Temples and Churches",
                "Faith and architecture",
                [
                    ("Historic places of worship", "Culture", "Half day", 0.0, Difficulty.EASY, 92),
                    ("Cooking class", "Food", "3 hours", 2200.0, Difficulty.EASY, 91),
                ],
            ),
            (
                "Museums and Crafts",
                "Art",
                [
                    ("State museum visit", "Culture", "2-3 hours", 200.0, Difficulty.EASY, 93),
                    ("Craft workshop", "Culture", "2 hours", 1200.0, Difficulty.EASY, 89),
                ],
            ),
        ],
        "hotels": [
            ("Heritage Mansion Hotel", "Premium", 4.6, 6500.0, 92),
            ("Old Town Guesthouse", "Budget", 4.1, 2500.0, 85),
            ("Grand Palace Stay", "Luxury", 4.8, 11000.0, 95),
        ],
        "commutes": [
            ("Auto Rickshaw", 500.0, 76),
            ("Taxi", 1500.0, 88),
            ("Bicycle Rental", 200.0, 74),
        ],
    },
]


def _daily_plan(
    itinerary_id: str, vibe: dict[str, Any], destination: str, duration_days: int
) -> list[DailyPlan]:
    days = vibe["days"]
    plans = []
    for day in range(1, duration_days + 1):
        title, theme, rows = days[(day - 1) % len(days)]
        activities = [
            Activity(
                id=f"{itinerary_id}-d{day}-a{index}",
                name=f"{name} in {destination}",
                category=category,
                duration=duration,
                cost=cost,
                location=destination,
                difficulty=difficulty,
                safety_score=safety,
                review=Review(source="Traveler reviews", snippet="Worth the time.", rating=4.5),
                selected=True,
            )
            for index, (name, category, duration, cost, difficulty, safety) in enumerate(
                rows, start=1
            )
        ]
        plans.append(DailyPlan(day=day, title=title, theme=theme, activities=activities))
    return plans


def _itinerary(vibe: dict[str, Any], destination: str, duration_days: int) -> Itinerary:
    itinerary_id = f"fixture-{vibe['key']}"
    hotels = [
        Hotel(
            id=f"{itinerary_id}-hotel-{index}",
            name=f"{name} {destination}",
            category=category,
            rating=rating,
            cost_per_night=cost,
            safety_score=safety,
            area=destination,
        )
        for index, (name, category, rating, cost, safety) in enumerate(
            vibe["hotels"], start=1
        )
    ]
    commutes = [
        CommuteOption(
            id=f"{itinerary_id}-commute-{index}",
            type=transport,
            cost=cost,
            safety_score=safety,
            availability="Widely available",
        )
        for index, (transport, cost, safety) in enumerate(vibe["commutes"], start=1)
    ]
    return Itinerary(
        id=itinerary_id,
        vibe=vibe["vibe"],
        title=vibe["title"].format(destination=destination),
        description=vibe["description"].format(destination=destination),
        daily_plan=_daily_plan(itinerary_id, vibe, destination, duration_days),
        hotel_options=hotels,
        commute_options=commutes,
        cost=CostBreakdown(flights=FIXTURE_FLIGHTS, food=vibe["food_per_day"]),
    )


def _formal_adjustment(request: TripRequest) -> FormalTripAdjustment | None:
    if not request.has_meeting:
        return None
    meeting = request.meeting
    place = meeting.location or request.destination
    facilities = ", ".join(meeting.facilities) or "a quiet workspace"
    if meeting.mode == MeetingMode.ONLINE:
        stay = f"Pick a hotel in {request.destination} with reliable internet and {facilities}."
        transport = "No meeting commute needed; keep local travel outside call hours."
    else:
        stay = f"Stay within a short ride of {place}, with {facilities}."
        transport = f"Book a taxi to {place} rather than relying on public transport."
    return FormalTripAdjustment(
        adjusted_stay=stay,
        adjusted_transport=transport,
        adjusted_schedule=(
            f"Keep day 1 free of activities before the meeting "
            f"({meeting.duration or 'duration not given'})."
        ),
        adjusted_buffer_times="Allow 60 minutes before and 30 minutes after the meeting.",
    )


def build_fixture_bundle(request: TripRequest) -> ItineraryBundle:
    """Build the three fixture itineraries for a request."""
    destination = request.destination
    return ItineraryBundle(
        itineraries=[
            _itinerary(vibe, destination, request.duration_days) for vibe in VIBES
        ],
        destination_overview=DestinationOverview(
            destination=destination,
            currency=request.currency,
            safety_overview="Sample itineraries; check current advisories before travel.",
        ),
        budget_guidance=BudgetGuidance(
            recommended_budget=RecommendedBudget(
                budget=request.budget * 0.6,
                mid_range=request.budget,
                luxury=request.budget * 1.8,
            ),
            cost_saving_tips=["Book stays early", "Use public transport where safe"],
        ),
        formal_adjustment=_formal_adjustment(request),
    )
