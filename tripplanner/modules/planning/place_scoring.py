"""
modules/planning/place_scoring.py
----------------------------------
Popularity/preference weight for candidate places.

  weight = rating × category_multiplier × review_count / 1000

Category multipliers come from the user's preference tags:
  "culture" | "history" → attraction 1.5
  "food"                → restaurant 1.5
  "nature"              → nature     1.5
  "shopping"            → experience 1.2
Unrecognised categories are weight-neutral (multiplier 1).
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from tripplanner.schemas.itinerary import PLACE_CATEGORIES, Place, ScoredPlace, as_number

_BASE_MULTIPLIERS: dict[str, float] = dict.fromkeys(PLACE_CATEGORIES, 1.0)

# tag → (category, multiplier)
_TAG_BOOSTS: dict[str, tuple[str, float]] = {
    "culture":  ("attraction", 1.5),
    "history":  ("attraction", 1.5),
    "food":     ("restaurant", 1.5),
    "nature":   ("nature",     1.5),
    "shopping": ("experience", 1.2),
}


def category_multipliers(tags: Optional[Iterable[str]] = None) -> Mapping[str, float]:
    """Return a read-only category → multiplier mapping for *tags*."""
    table = dict(_BASE_MULTIPLIERS)
    for tag in set(tags or ()):
        boost = _TAG_BOOSTS.get(tag)
        if boost is not None:
            category, value = boost
            table[category] = value
    return MappingProxyType(table)


def place_weight(place: Place, multipliers: Mapping[str, float]) -> float:
    rating = as_number(place.rating)
    reviews = as_number(place.review_count)
    return rating * multipliers.get(place.category, 1.0) * reviews / 1000


def score_places(
    places: Iterable[Place],
    tags: Optional[Iterable[str]] = None,
) -> list[ScoredPlace]:
    """Weight every place and return a new list sorted by weight, highest first."""
    multipliers = category_multipliers(tags)
    scored = [ScoredPlace(place=p, weight=place_weight(p, multipliers)) for p in places]
    scored.sort(key=lambda sp: sp.weight, reverse=True)
    return scored
