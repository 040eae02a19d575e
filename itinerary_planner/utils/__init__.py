"""
Utility modules for the Itinerary Planner system.
"""

from itinerary_planner.config import LogLevel
from itinerary_planner.utils.error_handling import (
    AgentExecutionError,
    APIError,
    EmptyResultError,
    ItineraryPlannerError,
    OrchestrationError,
    PhaseError,
    ResourceNotFoundError,
    SchemaValidationError,
    ValidationError,
    retry_async,
    with_retry,
)
from itinerary_planner.utils.helpers import (
    format_price,
    generate_session_id,
    get_currency_name,
    get_currency_symbol,
    safe_load_json,
    safe_serialize,
    truncate_text,
)
from itinerary_planner.utils.logging import (
    AgentLogger,
    get_logger,
    phase_context,
    setup_logging,
)

__all__ = [
    "APIError",
    "AgentExecutionError",
    "AgentLogger",
    "EmptyResultError",
    "ItineraryPlannerError",
    "LogLevel",
    "OrchestrationError",
    "PhaseError",
    "ResourceNotFoundError",
    "SchemaValidationError",
    "ValidationError",
    "format_price",
    "generate_session_id",
    "get_currency_name",
    "get_currency_symbol",
    "get_logger",
    "phase_context",
    "retry_async",
    "safe_load_json",
    "safe_serialize",
    "setup_logging",
    "truncate_text",
    "with_retry",
]
