"""
Itinerary planner powered by Google Gemini and LangGraph.

This package plans three distinct itineraries for a trip with a team of
specialist agents, then lets a traveler tune hotel, commute and activity
selections while costs and safety are recalculated live.
"""

__version__ = "0.1.0"
