"""
Prompt templates for the structured generation capabilities.

Each capability has a system instruction and a user template. The user
template receives the agent payload and the target JSON schema, both
already serialized.
"""

from pydantic import BaseModel, Field


def render_template(template: str, **kwargs: str) -> str:
    """Render a template string, leaving unresolved vars as-is."""
    result = template
    for key, value in kwargs.items():
        result = result.replace(f"{{{key}}}", value)
    return result


class PromptTemplate(BaseModel):
    """System instruction plus user prompt for one capability."""

    capability: str
    version: int = 1
    system: str
    template: str = Field(
        default=(
            "INPUT:\n{payload}\n\n"
            "Respond with a single JSON object that conforms to this JSON schema. "
            "Do not add commentary.\n\nSCHEMA:\n{schema}"
        )
    )

    def render(self, **kwargs: str) -> str:
        """Render this template with the given variables."""
        return render_template(self.template, **kwargs)


DESTINATION_INTELLIGENCE = PromptTemplate(
    capability="destination_intelligence",
    system=(
        "You are a destination intelligence expert with comprehensive knowledge "
        "of global travel destinations. Analyze the destination for the given "
        "travel dates and party and provide accurate, current information on "
        "climate, currency and exchange rate to INR, language, safety (score "
        "0-100 with concerns and tips), culture, visa and logistics for Indian "
        "travelers, local transportation with realistic cost ranges, "
        "accommodation categories with average nightly rates, and local costs "
        "for meals, activities and shopping. All costs are in INR and never "
        "negative."
    ),
)

ACTIVITY_DISCOVERY = PromptTemplate(
    capability="activity_discovery",
    system=(
        "You are a local activity expert. Using the destination's climate, "
        "culture and cost profile, discover authentic activities that match "
        "the traveler's preferences. Group them by category, give each a "
        "unique id, a realistic cost in INR (0 for free activities), a "
        "difficulty of Easy, Moderate or Challenging, and a safety score "
        "0-100. Suggest a theme for each day of the trip and include hidden "
        "gems, seasonal highlights and tips from locals."
    ),
)

ACCOMMODATION_BOOKING = PromptTemplate(
    capability="accommodation_booking",
    system=(
        "You are an accommodation booking specialist. Using the destination's "
        "accommodation categories and currency, find between 3 and 8 real "
        "lodging options across price categories (Luxury, Premium, Mid-Range, "
        "Budget, Backpacker). Each option has a unique id, a rating 0-5, the "
        "area and distance to the center, a realistic cost per night in INR, "
        "a booking link, a safety score 0-100, a recent review and amenities. "
        "Add area recommendations and booking tips."
    ),
)

COST_ESTIMATION = PromptTemplate(
    capability="cost_estimation",
    system=(
        "You are a travel cost analyst. Using the destination's currency and "
        "cost profile, the discovered activities and the nightly rates of the "
        "accommodation options, estimate realistic budget, mid-range and "
        "luxury totals for the whole trip, economy flight costs from the "
        "origin, daily food costs per tier, daily local transport costs, "
        "hidden costs, a budget allocation in percent and cost saving tips. "
        "All amounts are in INR and never negative."
    ),
)

ITINERARY_SYNTHESIS = PromptTemplate(
    capability="itinerary_synthesis",
    system=(
        "You are a master travel planner synthesizing the findings of "
        "destination, activity, accommodation and cost specialists. Create "
        "exactly 3 itineraries, each with a distinct vibe (one focused on "
        "cultural immersion, one balancing adventure with relaxation, one on "
        "unique experiences and hidden gems). Each itinerary has one daily "
        "plan per trip day numbered from 1, between 3 and 6 hotel options and "
        "between 3 and 6 commute options drawn from the specialists' data, "
        "unique ids for every activity, hotel and commute option, a flight "
        "cost estimate and a per-day food estimate. Leave accommodation, "
        "activities, commute and total costs at 0. Also return a destination "
        "overview and budget guidance."
    ),
)

FORMAL_ADJUSTMENT = PromptTemplate(
    capability="formal_adjustment",
    system=(
        "You are an expert travel planner specializing in formal business "
        "trips. Given the planned itineraries and the meeting details, adjust "
        "the stay (accommodation close to the meeting location with the "
        "required facilities), the transport (best mode for the meeting "
        "schedule and location), the schedule (the meeting plus preparation "
        "and travel time) and the buffer times (room for delays so the "
        "traveler arrives on time). For online meetings, focus on reliable "
        "internet and a quiet workspace instead of the meeting location."
    ),
)

CAPABILITY_PROMPTS: dict[str, PromptTemplate] = {
    prompt.capability: prompt
    for prompt in (
        DESTINATION_INTELLIGENCE,
        ACTIVITY_DISCOVERY,
        ACCOMMODATION_BOOKING,
        COST_ESTIMATION,
        ITINERARY_SYNTHESIS,
        FORMAL_ADJUSTMENT,
    )
}


def get_prompt(capability: str) -> PromptTemplate:
    """
    Look up the prompt for a capability.

    Raises:
        KeyError: If the capability has no prompt
    """
    try:
        return CAPABILITY_PROMPTS[capability]
    except KeyError:
        raise KeyError(f"No prompt registered for capability '{capability}'") from None
