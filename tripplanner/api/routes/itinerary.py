"""
api/routes/itinerary.py
------------------------
POST /v1/itinerary/generate

Builds a day-by-day itinerary.  When the request carries no `places`, the
place catalog is queried for the destination; a failed lookup is treated as
an empty list (the builder then synthesizes sample places).
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tripplanner.schemas.itinerary import Place, TripPreferences
from tripplanner.modules.planning.itinerary_builder import ItineraryBuilder, itinerary_to_dicts
from tripplanner.modules.tool_usage.place_tool import PlaceTool

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Request schemas ────────────────────────────────────────────────────────────

class PositionIn(BaseModel):
    lat: float
    lng: float


class PlaceIn(BaseModel):
    id: str
    name: str = ""
    category: str = Field("", description="attraction | restaurant | experience | nature")
    rating: float = 0.0
    reviewCount: int = Field(0, ge=0)
    position: PositionIn
    address: str = ""
    description: str = ""
    openHours: str = ""
    website: str = ""
    imageUrl: str = ""
    tags: list[str] = Field(default_factory=list)

    def to_place(self) -> Place:
        return Place(
            id=self.id,
            name=self.name,
            category=self.category,
            rating=self.rating,
            review_count=self.reviewCount,
            lat=self.position.lat,
            lon=self.position.lng,
            address=self.address,
            description=self.description,
            open_hours=self.openHours,
            website=self.website,
            image_url=self.imageUrl,
            tags=tuple(self.tags),
        )


class PreferencesIn(BaseModel):
    tags: list[str] = Field(default_factory=list, description="e.g. culture, food, nature, shopping")
    budget: Optional[Literal["low", "medium", "high"]] = None
    pace: Optional[Literal["relaxed", "moderate", "packed"]] = None


class GenerateRequest(BaseModel):
    destination: str = Field(..., min_length=1)
    days: int = Field(..., ge=1, le=30)
    preferences: Optional[PreferencesIn] = None
    places: Optional[list[PlaceIn]] = None


# ── Endpoint ───────────────────────────────────────────────────────────────────

@router.post("/generate", summary="Generate a day-by-day itinerary")
def generate_itinerary(req: GenerateRequest) -> dict:
    """Returns {destination, days: [{day, items: [...]}, ...]}."""
    if req.places is not None:
        places = [p.to_place() for p in req.places]
    else:
        try:
            places = PlaceTool().fetch(req.destination)
        except Exception as exc:
            logger.warning("Place lookup failed for %r: %s", req.destination, exc)
            places = []

    prefs = TripPreferences()
    if req.preferences is not None:
        prefs = TripPreferences(
            tags=tuple(req.preferences.tags),
            budget=req.preferences.budget,
            pace=req.preferences.pace,
        )

    itinerary = ItineraryBuilder().build(req.destination, req.days, prefs, places)
    return {
        "destination": req.destination,
        "days": itinerary_to_dicts(itinerary),
    }
