"""
Output schemas for the specialized data agents.

Each agent asks the generation client for an object conforming to one of
these models and validates the response against it. The helper methods on
``DestinationProfile``, ``ActivityCatalog`` and ``AccommodationSearchResult``
produce the slices later phases consume.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from itinerary_planner.data.models import Difficulty, Review


class CostRange(BaseModel):
    """A min/max cost band."""

    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "CostRange":
        if self.min > self.max:
            raise ValueError(f"Cost range min {self.min} exceeds max {self.max}")
        return self


class PriceBand(CostRange):
    """A min/max band with a typical value."""

    average: float = Field(..., ge=0)


# Destination intelligence


class ClimateInfo(BaseModel):
    season: str
    temperature: str
    rainfall: str = ""
    clothing: list[str] = Field(default_factory=list)


class CurrencyInfo(BaseModel):
    local: str
    exchange_rate: float = Field(..., gt=0, description="Units of local currency per INR")


class LanguageInfo(BaseModel):
    primary: str
    english_level: str = ""
    key_phrases: list[str] = Field(default_factory=list)


class SafetyOverview(BaseModel):
    overall_score: float = Field(..., ge=0, le=100)
    concerns: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class CultureInfo(BaseModel):
    customs: list[str] = Field(default_factory=list)
    etiquette: list[str] = Field(default_factory=list)
    festivals: list[str] = Field(default_factory=list)


class LogisticsInfo(BaseModel):
    visa: str = ""
    time_zone: str = ""
    electricity: str = ""
    internet: str = ""


class LocalTransportOption(BaseModel):
    """A transport mode available at the destination."""

    type: str
    availability: str = ""
    cost_range: CostRange
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    safety_score: float = Field(..., ge=0, le=100)
    booking_info: str = ""


class AccommodationCategory(BaseModel):
    """A class of lodging with its typical nightly rate."""

    category: str
    average_cost_per_night: float = Field(..., ge=0)
    popular_areas: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    safety_score: float = Field(..., ge=0, le=100)


class MealTiers(BaseModel):
    """Per-day food cost by spending tier."""

    budget: float = Field(..., ge=0)
    mid_range: float = Field(..., ge=0)
    luxury: float = Field(..., ge=0)


class ActivityCostBand(BaseModel):
    free: list[str] = Field(default_factory=list)
    budget_range: CostRange


class ShoppingInfo(BaseModel):
    markets: list[str] = Field(default_factory=list)
    souvenirs: CostRange


class LocalCostProfile(BaseModel):
    meals: MealTiers
    activities: ActivityCostBand
    shopping: ShoppingInfo


class DestinationProfile(BaseModel):
    """Everything the destination agent learns about the place."""

    destination: str
    country: str
    region: str = ""
    climate: ClimateInfo
    currency: CurrencyInfo
    language: LanguageInfo
    safety: SafetyOverview
    culture: CultureInfo
    logistics: LogisticsInfo = Field(default_factory=LogisticsInfo)
    transportation: list[LocalTransportOption] = Field(default_factory=list)
    accommodation: list[AccommodationCategory] = Field(default_factory=list)
    costs: LocalCostProfile

    def activity_context(self) -> dict[str, Any]:
        """Climate, culture and cost profile for activity discovery."""
        return {
            "climate": self.climate.model_dump(),
            "culture": self.culture.model_dump(),
            "costs": self.costs.model_dump(),
        }

    def accommodation_context(self) -> dict[str, Any]:
        """Accommodation categories and currency for the lodging search."""
        return {
            "accommodation": [category.model_dump() for category in self.accommodation],
            "currency": self.currency.model_dump(),
        }

    def cost_context(self) -> dict[str, Any]:
        """Currency and cost profile for cost estimation."""
        return {
            "currency": self.currency.model_dump(),
            "costs": self.costs.model_dump(),
        }


# Activity discovery


class DiscoveredActivity(BaseModel):
    id: str
    name: str
    description: str = ""
    duration: str = ""
    cost: float = Field(..., ge=0)
    location: str = ""
    best_time_to_visit: str = ""
    difficulty: Difficulty = Difficulty.EASY
    booking_required: bool = False
    booking_info: str = ""
    safety_score: float = Field(..., ge=0, le=100)
    local_tips: list[str] = Field(default_factory=list)


class ActivityCategory(BaseModel):
    category: str
    activities: list[DiscoveredActivity] = Field(default_factory=list)


class DailyTheme(BaseModel):
    day: int = Field(..., ge=1)
    theme: str
    description: str = ""
    recommended_activities: list[str] = Field(
        default_factory=list, description="Activity ids recommended for the day"
    )
    logistical_notes: list[str] = Field(default_factory=list)


class ActivityCatalog(BaseModel):
    """Activities found for the destination, grouped by category."""

    destination: str
    categories: list[ActivityCategory] = Field(..., min_length=1)
    daily_themes: list[DailyTheme] = Field(default_factory=list)
    hidden_gems: list[str] = Field(default_factory=list)
    seasonal_highlights: list[str] = Field(default_factory=list)
    local_expert_tips: list[str] = Field(default_factory=list)

    def flattened(self) -> list[dict[str, Any]]:
        """One (name, cost, category) row per activity, for cost estimation."""
        return [
            {"name": activity.name, "cost": activity.cost, "category": group.category}
            for group in self.categories
            for activity in group.activities
        ]

    @property
    def total_activities(self) -> int:
        return sum(len(group.activities) for group in self.categories)


# Accommodation booking


class PriceCategory(str, Enum):
    LUXURY = "Luxury"
    PREMIUM = "Premium"
    MID_RANGE = "Mid-Range"
    BUDGET = "Budget"
    BACKPACKER = "Backpacker"


class AccommodationOption(BaseModel):
    id: str
    name: str
    type: str = "Hotel"
    category: PriceCategory
    rating: float = Field(..., ge=0, le=5)
    area: str = ""
    distance_to_center: str = ""
    cost_per_night: float = Field(..., ge=0)
    booking_link: str = ""
    safety_score: float = Field(..., ge=0, le=100)
    review: Review | None = None
    amenities: list[str] = Field(default_factory=list)
    unique_features: list[str] = Field(default_factory=list)


class AreaRecommendation(BaseModel):
    area: str
    description: str = ""
    best_for: list[str] = Field(default_factory=list)
    average_cost: float = Field(default=0.0, ge=0)
    safety_score: float = Field(default=0.0, ge=0, le=100)


class AccommodationSearchResult(BaseModel):
    """Lodging options found for the destination."""

    destination: str
    accommodation_options: list[AccommodationOption] = Field(
        ..., min_length=3, max_length=8
    )
    area_recommendations: list[AreaRecommendation] = Field(default_factory=list)
    booking_tips: list[str] = Field(default_factory=list)

    def nightly_rates(self) -> list[dict[str, Any]]:
        """(category, cost_per_night) rows for cost estimation."""
        return [
            {"category": option.category.value, "cost_per_night": option.cost_per_night}
            for option in self.accommodation_options
        ]


# Cost estimation


class FlightEstimate(BaseModel):
    route: str
    economy: PriceBand
    booking_tips: list[str] = Field(default_factory=list)


class TransportDailyCost(BaseModel):
    type: str
    daily_cost: PriceBand


class HiddenCost(BaseModel):
    type: str
    description: str = ""
    estimated_cost: float = Field(..., ge=0)


class TripCostTiers(BaseModel):
    budget: float = Field(..., ge=0)
    mid_range: float = Field(..., ge=0)
    luxury: float = Field(..., ge=0)


class CostEstimate(BaseModel):
    """Budget bands for the whole trip."""

    destination: str
    currency: str = "INR"
    total_trip_cost: TripCostTiers
    flights: FlightEstimate
    food_per_day: MealTiers
    local_transport: list[TransportDailyCost] = Field(default_factory=list)
    hidden_costs: list[HiddenCost] = Field(default_factory=list)
    budget_allocation: dict[str, float] = Field(
        default_factory=dict, description="Percent of budget per category"
    )
    cost_saving_tips: list[str] = Field(default_factory=list)
