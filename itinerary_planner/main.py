"""
Main entry point for the Itinerary Planner application.

This module provides a CLI that builds a trip request from flags, plans
three itineraries through the configured provider and prints each one with
the cost summary of its default selections.
"""

import argparse
import asyncio
import json
import os
import sys
import traceback

from pydantic import ValidationError as PydanticValidationError

from itinerary_planner.config import PlannerConfig, ProviderKind, initialize_config
from itinerary_planner.data.dynamodb import DynamoDBClient
from itinerary_planner.data.models import (
    Itinerary,
    ItineraryBundle,
    MeetingDetails,
    MeetingMode,
    SelectionState,
    TripRequest,
    TripType,
)
from itinerary_planner.engine.recalculation import recalculate_for
from itinerary_planner.services.providers import create_provider
from itinerary_planner.utils.error_handling import ItineraryPlannerError, PhaseError
from itinerary_planner.utils.helpers import format_price, get_currency_name
from itinerary_planner.utils.logging import get_logger, setup_logging

# Initialize logger
logger = get_logger(__name__)


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up the argument parser for the CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Multi-agent itinerary planner powered by Google Gemini"
    )

    # System configuration arguments
    system_group = parser.add_argument_group("System Configuration")
    system_group.add_argument(
        "--config",
        type=str,
        help="Path to a custom .env configuration file",
    )
    system_group.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    system_group.add_argument(
        "--log-file",
        type=str,
        help="Write logs to this file as well",
    )
    system_group.add_argument(
        "--provider",
        type=str,
        choices=[kind.value for kind in ProviderKind],
        help="Override ITINERARY_PROVIDER for this run",
    )
    system_group.add_argument(
        "--init-db",
        action="store_true",
        help="Create the DynamoDB session table if it does not exist",
    )

    # Trip request arguments
    trip_group = parser.add_argument_group("Trip Request")
    trip_group.add_argument("--destination", type=str, required=True, help="Destination")
    trip_group.add_argument(
        "--days", type=int, required=True, help="Trip duration in days"
    )
    trip_group.add_argument(
        "--budget", type=float, required=True, help="Budget ceiling for the whole trip"
    )
    trip_group.add_argument(
        "--people", type=int, default=1, help="Number of travelers"
    )
    trip_group.add_argument(
        "--trip-type",
        type=str,
        choices=[kind.value for kind in TripType],
        default=TripType.INFORMAL.value,
        help="Formal (business) or informal trip",
    )
    trip_group.add_argument(
        "--dates", type=str, default="", help="Travel dates, e.g. 'mid December'"
    )
    trip_group.add_argument(
        "--preferences",
        type=str,
        default="",
        help="Comma-separated preference tags, e.g. 'beaches,food'",
    )
    trip_group.add_argument(
        "--origin", type=str, default="India", help="Where the trip starts"
    )
    trip_group.add_argument(
        "--one-way", action="store_true", help="Plan a one-way trip"
    )
    trip_group.add_argument(
        "--currency", type=str, help="Currency for all amounts (default from config)"
    )

    # Meeting details (formal trips only)
    meeting_group = parser.add_argument_group("Meeting Details")
    meeting_group.add_argument("--meeting-location", type=str, help="Meeting venue")
    meeting_group.add_argument(
        "--meeting-duration", type=str, help="Meeting length, e.g. '2 hours'"
    )
    meeting_group.add_argument(
        "--meeting-mode",
        type=str,
        choices=[mode.value for mode in MeetingMode],
        help="Whether the meeting is online or offline",
    )
    meeting_group.add_argument(
        "--facilities",
        type=str,
        default="",
        help="Comma-separated facilities the meeting needs, e.g. 'projector,wifi'",
    )

    # Output options
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--save-to",
        type=str,
        help="Save the itinerary bundle as JSON to this file path",
    )

    return parser


def build_meeting_from_args(args: argparse.Namespace) -> MeetingDetails | None:
    """Meeting details, if any meeting flag was given."""
    if not (args.meeting_location or args.meeting_duration or args.meeting_mode):
        return None
    return MeetingDetails(
        location=args.meeting_location or "",
        duration=args.meeting_duration or "",
        mode=MeetingMode(args.meeting_mode or MeetingMode.OFFLINE.value),
        facilities=[f.strip() for f in args.facilities.split(",") if f.strip()],
    )


def build_trip_request_from_args(
    args: argparse.Namespace, config: PlannerConfig
) -> TripRequest:
    """Build the trip request described by the CLI flags."""
    return TripRequest(
        destination=args.destination,
        duration_days=args.days,
        people_count=args.people,
        budget=args.budget,
        trip_type=TripType(args.trip_type),
        travel_dates=args.dates,
        preferences=[p for p in args.preferences.split(",") if p.strip()],
        origin=args.origin,
        round_trip=not args.one_way,
        currency=args.currency or config.system.default_currency,
        meeting=build_meeting_from_args(args),
    )


def display_itinerary(itinerary: Itinerary, request: TripRequest) -> None:
    """Print one itinerary with the cost summary of its default selections."""
    selection = SelectionState.default_for(itinerary)
    summary = recalculate_for(
        itinerary, selection, request.duration_days, request.budget
    )
    hotel = itinerary.find_hotel(selection.hotel_id)
    commute = itinerary.find_commute(selection.commute_id)

    def price(amount: float) -> str:
        return format_price(amount, request.currency)

    print(f"\n=== {itinerary.vibe}: {itinerary.title} ===")
    if itinerary.description:
        print(itinerary.description)

    for plan in sorted(itinerary.daily_plan, key=lambda p: p.day):
        print(f"\nDay {plan.day}: {plan.title}")
        for activity in plan.activities:
            marker = "x" if activity.selected else " "
            print(f"  [{marker}] {activity.name} ({price(activity.cost)})")

    print("\nStay:    ", f"{hotel.name} ({price(hotel.cost_per_night)}/night)" if hotel else "-")
    print("Commute: ", f"{commute.type} ({price(commute.cost)}/day)" if commute else "-")
    print(f"\nFlights:        {price(summary.flights)}")
    print(f"Accommodation:  {price(summary.accommodation)} ({summary.night_count} nights)")
    print(f"Activities:     {price(summary.activities)}")
    print(f"Commute:        {price(summary.commute)}")
    print(f"Food:           {price(summary.food)}")
    print(f"Total:          {price(summary.total)}")
    print(f"Remaining:      {price(summary.remaining_budget)}")
    print(f"Safety score:   {summary.overall_safety_score:.0f}/100")


def display_bundle(bundle: ItineraryBundle, request: TripRequest) -> None:
    overview = bundle.destination_overview
    print(f"\nItineraries for {overview.destination}")
    if overview.best_time_to_visit:
        print(f"Best time to visit: {overview.best_time_to_visit}")
    currency_name = get_currency_name(request.currency)
    if currency_name:
        print(f"Prices in {currency_name}")
    for itinerary in bundle.itineraries:
        display_itinerary(itinerary, request)

    tips = bundle.budget_guidance.cost_saving_tips
    if tips:
        print("\nCost saving tips:")
        for tip in tips:
            print(f"  - {tip}")

    adjustment = bundle.formal_adjustment
    if adjustment:
        print("\nMeeting plan:")
        print(f"  Stay:      {adjustment.adjusted_stay}")
        print(f"  Transport: {adjustment.adjusted_transport}")
        print(f"  Schedule:  {adjustment.adjusted_schedule}")
        print(f"  Buffers:   {adjustment.adjusted_buffer_times}")


def save_bundle(bundle: ItineraryBundle, file_path: str) -> None:
    """Write the bundle as JSON."""
    directory = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(directory, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(bundle.model_dump(mode="json"), f, indent=2, ensure_ascii=False)


async def run_planner(args: argparse.Namespace, config: PlannerConfig) -> int:
    """Plan, display and optionally save the itinerary bundle."""
    request = build_trip_request_from_args(args, config)
    provider = create_provider(config)

    logger.info(f"Planning {request.duration_days}-day trip to {request.destination}")
    bundle = await provider.provide(request)

    display_bundle(bundle, request)

    if args.save_to:
        save_bundle(bundle, args.save_to)
        logger.info(f"Itinerary bundle saved to {args.save_to}")
    return 0


def _initialize(args: argparse.Namespace) -> PlannerConfig | None:
    """Set up logging and configuration; returns None if startup must stop."""
    setup_logging(log_level=args.log_level or "INFO", log_file=args.log_file)

    system_config = initialize_config(
        custom_config_path=args.config, validate=False
    )
    if args.provider:
        system_config.system.provider = ProviderKind(args.provider)

    setup_logging(
        log_level=args.log_level or system_config.system.log_level,
        log_file=args.log_file,
    )

    if not system_config.validate():
        print("\nERROR: Invalid configuration. Please check your environment:")
        print("  - GEMINI_API_KEY: Required for live generation")
        print("  - ITINERARY_PROVIDER=fixture: Plan offline with sample itineraries")
        return None

    if args.init_db:
        DynamoDBClient(
            table_name=system_config.api.dynamodb_table_name,
            endpoint_url=system_config.api.dynamodb_endpoint,
            region=system_config.api.aws_region,
        ).create_table_if_not_exists()

    return system_config


async def main(argv: list[str] | None = None) -> int:
    """
    Main entry point function.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = setup_argparse().parse_args(argv)

    try:
        system_config = _initialize(args)
        if system_config is None:
            return 1
        return await run_planner(args, system_config)

    except PydanticValidationError as e:
        print(f"\nInvalid trip request:\n{e}")
        return 2
    except PhaseError as e:
        logger.error(f"Planning failed in phase '{e.phase}': {e!s}")
        print(f"\nPlanning failed during {e.phase}. Please try again.")
        return 1
    except ItineraryPlannerError as e:
        logger.error(f"Planning failed: {e!s}")
        print(f"\nError: {e!s}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        print(f"\nError: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nPlanning interrupted. Goodbye!")
        return 0
    except Exception as e:
        logger.error(f"Error in main function: {e!s}\n{traceback.format_exc()}")
        print(f"\nError: {e!s}")
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
