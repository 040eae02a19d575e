"""
Helper utilities for the Itinerary Planner system.

This module provides general utility functions used across the application.
"""

import json
import uuid
from datetime import date, datetime, time
from typing import Any, TypeVar

import pycountry

# Type variables
T = TypeVar("T")


def generate_session_id() -> str:
    """
    Generate a unique session ID for a planning session.

    Returns:
        A unique session ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    unique_part = str(uuid.uuid4())[:8]
    return f"trip-{timestamp}-{unique_part}"


def safe_serialize(obj: Any) -> Any:
    """
    Safely serialize an object to a JSON-compatible format.

    Args:
        obj: Object to serialize

    Returns:
        JSON-compatible representation of the object
    """
    if obj is None or isinstance(obj, str | int | float | bool):
        return obj

    if isinstance(obj, datetime | date | time):
        return obj.isoformat()

    if isinstance(obj, list | tuple | set | frozenset):
        return [safe_serialize(item) for item in obj]

    if isinstance(obj, dict):
        return {k: safe_serialize(v) for k, v in obj.items()}

    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")

    result = safe_serialize(obj.__dict__) if hasattr(obj, "__dict__") else str(obj)
    return result


def safe_load_json(
    json_str: str | None, default: T | None = None
) -> dict[str, Any] | list[Any] | T | None:
    """
    Safely load a JSON string, returning a default value if parsing fails.

    Model output is often wrapped in a markdown code fence; the fence is
    stripped before decoding.

    Args:
        json_str: JSON string to parse
        default: Default value to return if parsing fails

    Returns:
        Parsed JSON data or default value
    """
    if not json_str:
        return default

    text = json_str.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return default


def get_currency_symbol(currency_code: str) -> str:
    """
    Get the currency symbol for a currency code.

    Args:
        currency_code: ISO 4217 currency code

    Returns:
        Currency symbol or original code if not found
    """
    currency_symbols = {
        "INR": "₹",
        "USD": "$",
        "EUR": "€",
        "GBP": "£",
        "JPY": "¥",
        "CNY": "¥",
        "THB": "฿",
        "AUD": "A$",
        "SGD": "S$",
        "AED": "AED ",
    }
    return currency_symbols.get(currency_code.upper(), f"{currency_code} ")


def get_currency_name(currency_code: str) -> str | None:
    """
    Get the ISO 4217 name for a currency code.

    Args:
        currency_code: ISO 4217 currency code

    Returns:
        Currency name (e.g. "Indian Rupee") or None if not found
    """
    currency = pycountry.currencies.get(alpha_3=currency_code.upper())
    if currency:
        return currency.name
    return None


def format_price(amount: float, currency: str = "INR", decimal_places: int = 0) -> str:
    """
    Format a price with the appropriate currency symbol.

    Args:
        amount: Price amount
        currency: ISO 4217 currency code
        decimal_places: Number of decimal places to show

    Returns:
        Formatted price string, e.g. "₹32,200" or "-₹1,500"
    """
    symbol = get_currency_symbol(currency)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimal_places}f}"


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length, adding a suffix if truncated.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix
