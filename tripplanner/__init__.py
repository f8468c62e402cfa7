"""Trip planner backend: place catalog, transport search and itinerary builder."""

__version__ = "1.0.0"
