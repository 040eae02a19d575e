"""
AWS Lambda handler for the itinerary planner.

Entry point for backend calls. Routes events by "action" field to the
session service.
"""

import asyncio
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from itinerary_planner.config import config
from itinerary_planner.data.models import TripRequest
from itinerary_planner.data.session_store import create_session_store
from itinerary_planner.services.providers import create_provider
from itinerary_planner.services.session_service import SessionService
from itinerary_planner.utils.error_handling import ItineraryPlannerError
from itinerary_planner.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

_service: SessionService | None = None


def _get_service() -> SessionService:
    """Session service shared by warm invocations."""
    global _service
    if _service is None:
        setup_logging(config.system.log_level, serialize=True)
        _service = SessionService(
            store=create_session_store(config),
            provider=create_provider(config),
        )
    return _service


def route_event(event: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Parse event and extract action + parameters."""
    action = event.get("action", "unknown")
    params: dict[str, Any] = {
        "session_id": event.get("sessionId"),
        "trip": event.get("trip", {}),
        "itinerary_id": event.get("itineraryId"),
        "hotel_id": event.get("hotelId"),
        "commute_id": event.get("commuteId"),
        "activity_id": event.get("activityId"),
        "selected": event.get("selected"),
    }
    return action, params


def _require(params: dict[str, Any], *names: str) -> None:
    missing = [name for name in names if not params.get(name)]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")


def _snapshot_response(snapshot) -> dict[str, Any]:
    return {"status": "ok", **snapshot.model_dump(mode="json")}


async def _handle_plan_trip(params: dict[str, Any]) -> dict[str, Any]:
    request = TripRequest.model_validate(params["trip"])
    bundle, snapshot = await _get_service().start(
        request, session_id=params.get("session_id")
    )
    return {
        **_snapshot_response(snapshot),
        "bundle": bundle.model_dump(mode="json"),
    }


async def _handle_select_itinerary(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id", "itinerary_id")
    snapshot = _get_service().select_itinerary(
        params["session_id"], params["itinerary_id"]
    )
    return _snapshot_response(snapshot)


async def _handle_select_hotel(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id")
    snapshot = _get_service().select_hotel(params["session_id"], params["hotel_id"])
    return _snapshot_response(snapshot)


async def _handle_select_commute(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id")
    snapshot = _get_service().select_commute(
        params["session_id"], params["commute_id"]
    )
    return _snapshot_response(snapshot)


async def _handle_toggle_activity(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id", "activity_id")
    service = _get_service()
    if params.get("selected") is None:
        snapshot = service.toggle_activity(params["session_id"], params["activity_id"])
    else:
        snapshot = service.set_activity(
            params["session_id"], params["activity_id"], bool(params["selected"])
        )
    return _snapshot_response(snapshot)


async def _handle_get_summary(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id")
    summary = _get_service().summary(params["session_id"])
    return {"status": "ok", "summary": summary.model_dump(mode="json")}


async def _handle_finalize_trip(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id")
    final = _get_service().finalize(params["session_id"])
    return {"status": "ok", "final": final.model_dump(mode="json")}


async def _handle_end_session(params: dict[str, Any]) -> dict[str, Any]:
    _require(params, "session_id")
    _get_service().end(params["session_id"])
    return {"status": "ok"}


# Action handlers map
_HANDLERS = {
    "plan_trip": _handle_plan_trip,
    "select_itinerary": _handle_select_itinerary,
    "select_hotel": _handle_select_hotel,
    "select_commute": _handle_select_commute,
    "toggle_activity": _handle_toggle_activity,
    "get_summary": _handle_get_summary,
    "finalize_trip": _handle_finalize_trip,
    "end_session": _handle_end_session,
}


def _error(e: Exception) -> dict[str, Any]:
    return {"status": "error", "error": str(e), "error_type": type(e).__name__}


async def async_handler(event: dict[str, Any]) -> dict[str, Any]:
    """Main async handler."""
    action, params = route_event(event)

    handler_fn = _HANDLERS.get(action)
    if not handler_fn:
        return {
            "status": "error",
            "error": f"Unknown action: {action}",
            "error_type": "UnknownAction",
        }

    try:
        return await handler_fn(params)
    except (ItineraryPlannerError, PydanticValidationError, ValueError) as e:
        logger.warning(f"Error handling {action}: {e}")
        return _error(e)
    except Exception as e:
        logger.exception(f"Unexpected error handling {action}: {e}")
        return _error(e)


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Lambda entry point (sync wrapper)."""
    return asyncio.run(async_handler(event))
