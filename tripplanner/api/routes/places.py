"""
api/routes/places.py
--------------------
GET /v1/places?destination=...&category=...&sort_by=rating|reviews
"""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Query

from tripplanner.modules.planning.ranking import sort_places_by_rating, sort_places_by_review_count
from tripplanner.modules.tool_usage.place_tool import PlaceTool

router = APIRouter()


@router.get("", summary="List catalog places for a destination")
def list_places(
    destination: str = Query(..., min_length=1),
    category: Optional[str] = None,
    sort_by: Optional[Literal["rating", "reviews"]] = None,
) -> list[dict]:
    places = PlaceTool().fetch(destination, category)
    if sort_by == "rating":
        places = sort_places_by_rating(places)
    elif sort_by == "reviews":
        places = sort_places_by_review_count(places)
    return [p.to_dict() for p in places]
