"""
schemas/itinerary.py
--------------------
Dataclass definitions for the planner's input records and output itinerary.

Times inside an itinerary are wall-clock "HH:MM" strings; costs are integer
currency units.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Optional

# Recognised place categories.  Anything else is accepted but weight-neutral.
PLACE_CATEGORIES: tuple[str, ...] = ("attraction", "restaurant", "experience", "nature")


@dataclass(frozen=True)
class Place:
    """
    A point-of-interest candidate.

    Immutable while a schedule is being built.  Numeric fields default to 0
    so partially-populated catalog records still score (as 0).
    """
    id: str
    name: str = ""
    category: str = ""
    rating: float = 0.0
    review_count: int = 0
    lat: float = 0.0
    lon: float = 0.0
    address: str = ""
    description: str = ""
    open_hours: str = ""
    website: str = ""
    image_url: str = ""
    tags: tuple[str, ...] = ()

    @property
    def position(self) -> tuple[float, float]:
        return (self.lat, self.lon)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Place":
        """Build a Place from a catalog / proxy record (camelCase or snake_case keys)."""
        pos = data.get("position") or {}
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            category=str(data.get("category") or ""),
            rating=as_number(data.get("rating")),
            review_count=int(as_number(data.get("review_count", data.get("reviewCount")))),
            lat=as_number(pos.get("lat", data.get("lat"))),
            lon=as_number(pos.get("lng", pos.get("lon", data.get("lon")))),
            address=str(data.get("address") or ""),
            description=str(data.get("description") or ""),
            open_hours=str(data.get("open_hours", data.get("openHours")) or ""),
            website=str(data.get("website") or ""),
            image_url=str(data.get("image_url", data.get("imageUrl")) or ""),
            tags=tuple(data.get("tags") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "address": self.address,
            "openHours": self.open_hours or None,
            "website": self.website or None,
            "imageUrl": self.image_url or None,
            "description": self.description or None,
            "tags": list(self.tags),
            "position": {"lat": self.lat, "lng": self.lon},
        }


@dataclass(frozen=True)
class ScoredPlace:
    """A Place plus its per-run ranking weight (not persisted)."""
    place: Place
    weight: float


@dataclass(frozen=True)
class TripPreferences:
    """
    Optional user preferences.

    budget: "low" | "medium" | "high"      (None → medium pricing)
    pace:   "relaxed" | "moderate" | "packed" (None → moderate)
    """
    tags: tuple[str, ...] = ()
    budget: Optional[str] = None
    pace: Optional[str] = None


@dataclass(frozen=True)
class DestinationProfile:
    """Per-destination day window, activity density and transport labels."""
    morning_start: str = "09:00"
    evening_end: str = "20:00"
    recommended_activities: int = 4
    transportation: str = "public-transit/walk"   # "<long-hop mode>/<short-hop mode>"


@dataclass
class ItineraryItem:
    """One scheduled activity."""
    title: str
    start_time: str
    end_time: str
    place_id: Optional[str] = None
    transport: Optional[str] = None      # absent on the first item of a day
    cost: Optional[int] = None           # absent when zero
    note: Optional[str] = None
    position: Optional[tuple[float, float]] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "placeId": self.place_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "transport": self.transport,
            "cost": self.cost,
            "note": self.note,
            "position": (
                {"lat": self.position[0], "lng": self.position[1]}
                if self.position is not None else None
            ),
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass
class DayItinerary:
    """One day's ordered activities (day_number is 1-based)."""
    day: int
    items: list[ItineraryItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "items": [i.to_dict() for i in self.items]}


def as_number(value: Any) -> float:
    """Coerce a possibly-missing numeric field to float (0.0 when absent or invalid)."""
    try:
        num = float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0
    return num if math.isfinite(num) else 0.0
