"""
Structured generation for the Itinerary Planner system.
"""

from itinerary_planner.generation.client import (
    GeminiGenerationClient,
    StructuredGenerationClient,
)

__all__ = ["GeminiGenerationClient", "StructuredGenerationClient"]
