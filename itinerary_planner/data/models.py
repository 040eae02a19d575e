"""
Data models for the itinerary planner system.

This module defines the core data structures used throughout the planning
process: the trip request, the synthesized itinerary bundle, and the
selection and cost records that live in a planning session.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from itinerary_planner.utils.error_handling import ValidationError


class TripType(str, Enum):
    """Kinds of trips a request can describe."""

    FORMAL = "formal"
    INFORMAL = "informal"


class Difficulty(str, Enum):
    """Physical difficulty of an activity."""

    EASY = "Easy"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"


class MeetingMode(str, Enum):
    """How a formal trip's meeting takes place."""

    ONLINE = "online"
    OFFLINE = "offline"


class MeetingDetails(BaseModel):
    """Meeting information attached to a formal trip."""

    location: str = ""
    duration: str = ""
    mode: MeetingMode = MeetingMode.OFFLINE
    facilities: list[str] = Field(default_factory=list)


class TripRequest(BaseModel):
    """
    A user's trip request.

    Created once per planning session from user input and never changed
    afterwards. Every agent consumes it.
    """

    model_config = ConfigDict(frozen=True)

    destination: str = Field(..., min_length=1)
    duration_days: int = Field(..., ge=1)
    people_count: int = Field(default=1, ge=1)
    budget: float = Field(..., gt=0, description="Budget ceiling for the whole trip")
    trip_type: TripType = TripType.INFORMAL
    travel_dates: str = ""
    preferences: list[str] = Field(default_factory=list)
    origin: str = "India"
    round_trip: bool = True
    currency: str = "INR"
    meeting: MeetingDetails | None = None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, value: str) -> str:
        """Strip whitespace and reject blank destinations."""
        value = value.strip()
        if not value:
            raise ValueError("Destination cannot be blank")
        return value

    @field_validator("preferences")
    @classmethod
    def normalize_preferences(cls, value: list[str]) -> list[str]:
        """Preferences behave as a set: de-duplicated and sorted."""
        return sorted({item.strip() for item in value if item and item.strip()})

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def check_meeting(self) -> "TripRequest":
        """Meeting details only make sense for formal trips."""
        if self.meeting is not None and self.trip_type != TripType.FORMAL:
            raise ValueError("Meeting details are only accepted for formal trips")
        return self

    @property
    def night_count(self) -> int:
        """Nights of accommodation, never less than one."""
        return max(self.duration_days - 1, 1)

    @property
    def has_meeting(self) -> bool:
        """A formal trip planned around a meeting."""
        return self.trip_type == TripType.FORMAL and self.meeting is not None


class Review(BaseModel):
    """A review snippet attached to an activity or hotel."""

    source: str
    snippet: str
    rating: float = Field(..., ge=0, le=5)


class Activity(BaseModel):
    """
    A single activity in a day plan.

    ``selected`` is the only field a user may change; the initial value is
    whatever the synthesis step produced.
    """

    id: str
    name: str
    category: str = ""
    duration: str = ""
    cost: float = Field(default=0.0, ge=0)
    location: str = ""
    difficulty: Difficulty = Difficulty.EASY
    safety_score: float = Field(default=0.0, ge=0, le=100)
    booking_required: bool = False
    info_link: str = ""
    review: Review | None = None
    local_tips: list[str] = Field(default_factory=list)
    selected: bool = True


class Hotel(BaseModel):
    """A lodging option within an itinerary."""

    id: str
    name: str
    category: str = ""
    rating: float = Field(default=0.0, ge=0, le=5)
    cost_per_night: float = Field(..., ge=0)
    booking_link: str = ""
    safety_score: float = Field(default=0.0, ge=0, le=100)
    review: Review | None = None
    amenities: list[str] = Field(default_factory=list)
    area: str = ""
    distance_to_center: str = ""
    unique_features: list[str] = Field(default_factory=list)


class CommuteOption(BaseModel):
    """A local transport option; ``cost`` is billed per day of the trip."""

    id: str
    type: str
    cost: float = Field(..., ge=0)
    info_link: str = ""
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    safety_score: float = Field(default=0.0, ge=0, le=100)
    availability: str = ""
    booking_info: str = ""


class DailyPlan(BaseModel):
    """One day of an itinerary."""

    day: int = Field(..., ge=1)
    title: str
    theme: str = ""
    activities: list[Activity] = Field(default_factory=list)
    logistical_notes: list[str] = Field(default_factory=list)


class CostBreakdown(BaseModel):
    """
    Cost model of an itinerary.

    ``flights`` and ``food`` (a per-day rate) are baselines estimated during
    generation. The remaining fields are derived from the current
    selections and are only meaningful after recalculation.
    """

    flights: float = Field(default=0.0, ge=0)
    food: float = Field(default=0.0, ge=0)
    accommodation: float = 0.0
    activities: float = 0.0
    commute: float = 0.0
    total: float = 0.0

    def stale(self) -> "CostBreakdown":
        """Return a copy with every derived field reset to zero."""
        return self.model_copy(
            update={"accommodation": 0.0, "activities": 0.0, "commute": 0.0, "total": 0.0}
        )


def _duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for item_id in ids:
        if item_id in seen and item_id not in dupes:
            dupes.append(item_id)
        seen.add(item_id)
    return dupes


class Itinerary(BaseModel):
    """One complete candidate trip plan."""

    id: str
    vibe: str
    title: str
    description: str = ""
    daily_plan: list[DailyPlan] = Field(default_factory=list)
    hotel_options: list[Hotel] = Field(..., min_length=3, max_length=8)
    commute_options: list[CommuteOption] = Field(..., min_length=3, max_length=8)
    cost: CostBreakdown = Field(default_factory=CostBreakdown)
    overall_safety_score: float = Field(default=0.0, ge=0, le=100)
    unique_experiences: list[str] = Field(default_factory=list)
    local_insights: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Itinerary":
        """Option and activity ids must be unique within the itinerary."""
        for label, ids in (
            ("hotel", [hotel.id for hotel in self.hotel_options]),
            ("commute", [option.id for option in self.commute_options]),
            ("activity", [activity.id for activity in self.activities()]),
        ):
            dupes = _duplicates(ids)
            if dupes:
                raise ValueError(f"Duplicate {label} ids: {', '.join(dupes)}")
        return self

    def activities(self) -> list[Activity]:
        """All activities across every day, in plan order."""
        return [activity for plan in self.daily_plan for activity in plan.activities]

    def find_hotel(self, hotel_id: str | None) -> Hotel | None:
        return next((h for h in self.hotel_options if h.id == hotel_id), None)

    def find_commute(self, commute_id: str | None) -> CommuteOption | None:
        return next((c for c in self.commute_options if c.id == commute_id), None)

    def find_activity(self, activity_id: str) -> Activity | None:
        return next((a for a in self.activities() if a.id == activity_id), None)


class DestinationOverview(BaseModel):
    """Destination summary returned alongside the itineraries."""

    destination: str
    best_time_to_visit: str = ""
    currency: str = ""
    language: str = ""
    safety_overview: str = ""
    cultural_tips: list[str] = Field(default_factory=list)


class RecommendedBudget(BaseModel):
    """Whole-trip cost tiers."""

    budget: float = Field(default=0.0, ge=0)
    mid_range: float = Field(default=0.0, ge=0)
    luxury: float = Field(default=0.0, ge=0)


class BudgetGuidance(BaseModel):
    """Budget advice returned alongside the itineraries."""

    recommended_budget: RecommendedBudget = Field(default_factory=RecommendedBudget)
    cost_saving_tips: list[str] = Field(default_factory=list)
    hidden_costs: list[str] = Field(default_factory=list)


class FormalTripAdjustment(BaseModel):
    """How a formal trip is bent around its meeting."""

    adjusted_stay: str = Field(..., min_length=1)
    adjusted_transport: str = Field(..., min_length=1)
    adjusted_schedule: str = Field(..., min_length=1)
    adjusted_buffer_times: str = Field(..., min_length=1)


class ItineraryBundle(BaseModel):
    """The result of one planning run: exactly three itineraries."""

    itineraries: list[Itinerary] = Field(..., min_length=3, max_length=3)
    destination_overview: DestinationOverview
    budget_guidance: BudgetGuidance = Field(default_factory=BudgetGuidance)
    formal_adjustment: FormalTripAdjustment | None = None

    @field_validator("itineraries")
    @classmethod
    def check_distinct_vibes(cls, value: list[Itinerary]) -> list[Itinerary]:
        """Vibes must differ pairwise, ignoring case."""
        vibes = [itinerary.vibe.strip().casefold() for itinerary in value]
        if len(set(vibes)) != len(vibes):
            raise ValueError(f"Itinerary vibes must be distinct, got {vibes}")
        return value

    def validate_for(self, request: TripRequest) -> "ItineraryBundle":
        """
        Check the bundle against the request it was planned for.

        Each itinerary must cover days 1..duration exactly once.

        Raises:
            ValidationError: If any itinerary has missing, extra or repeated days
        """
        expected = list(range(1, request.duration_days + 1))
        for itinerary in self.itineraries:
            days = sorted(plan.day for plan in itinerary.daily_plan)
            if days != expected:
                raise ValidationError(
                    f"Itinerary '{itinerary.id}' covers days {days}, "
                    f"expected 1..{request.duration_days}"
                )
        return self

    def with_stale_costs(self) -> "ItineraryBundle":
        """Return a copy whose derived cost fields are all reset."""
        return self.model_copy(
            update={
                "itineraries": [
                    itinerary.model_copy(update={"cost": itinerary.cost.stale()})
                    for itinerary in self.itineraries
                ]
            }
        )

    def get_itinerary(self, itinerary_id: str) -> Itinerary | None:
        return next((i for i in self.itineraries if i.id == itinerary_id), None)


class CostSummary(BaseModel):
    """Derived costs and safety score for the current selections."""

    model_config = ConfigDict(frozen=True)

    accommodation: float
    activities: float
    commute: float
    food: float
    flights: float
    total: float
    remaining_budget: float
    overall_safety_score: float
    night_count: int


class SelectionState(BaseModel):
    """
    The user's current selections within a planning session.

    Frozen: every user action produces a new state, so a reader always sees
    a consistent snapshot.
    """

    model_config = ConfigDict(frozen=True)

    itinerary_id: str
    hotel_id: str | None = None
    commute_id: str | None = None
    activity_selections: dict[str, bool] = Field(default_factory=dict)

    def with_hotel(self, hotel_id: str | None) -> "SelectionState":
        return self.model_copy(update={"hotel_id": hotel_id})

    def with_commute(self, commute_id: str | None) -> "SelectionState":
        return self.model_copy(update={"commute_id": commute_id})

    def with_activity(self, activity_id: str, selected: bool) -> "SelectionState":
        selections = {**self.activity_selections, activity_id: selected}
        return self.model_copy(update={"activity_selections": selections})

    @classmethod
    def default_for(cls, itinerary: Itinerary) -> "SelectionState":
        """First hotel and commute option, activities as generated."""
        return cls(
            itinerary_id=itinerary.id,
            hotel_id=itinerary.hotel_options[0].id,
            commute_id=itinerary.commute_options[0].id,
        )


class FinalSelection(BaseModel):
    """The trip the user committed to at the end of a session."""

    request: TripRequest
    itinerary: Itinerary
    hotel: Hotel | None = None
    commute: CommuteOption | None = None
    selected_activities: list[Activity] = Field(default_factory=list)
    summary: CostSummary
    finalized_at: datetime = Field(default_factory=datetime.now)
