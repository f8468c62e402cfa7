"""
modules/planning/itinerary_builder.py
--------------------------------------
Greedy multi-day itinerary builder.

Each call:
  1. Resolves the destination profile (day window, activity density,
     transport labels) and adjusts the daily activity target by pace.
  2. Scores the candidate places once (place_scoring.py) into a working pool
     owned by a SchedulingSession.  Synthesizes three sample places when the
     caller supplies none.
  3. For day d = 1..days, starting at the profile's morning start with no
     current position, repeatedly:
       - meal hours [7,9) [12,14) [18,21) → nearest restaurant
         (first restaurant in weight order for the day's first stop)
       - otherwise → smallest distance / weight
         (highest weight for the day's first stop)
       - adds travel time from the previous stop, then the category duration
       - prices the stop, emits an ItineraryItem, removes the place from the pool
     until the evening end is reached, the activity target is met, or the
     pool is empty.

The pool is NOT reset between days: later days get whatever is left.
Days with no items are omitted from the result.  Output is deterministic for
fixed input.
"""

from __future__ import annotations
import logging
import math
import time as _time_mod
from typing import Any, Iterable, Optional, Union

from tripplanner import config
from tripplanner.schemas.itinerary import (
    DayItinerary,
    DestinationProfile,
    ItineraryItem,
    Place,
    ScoredPlace,
    TripPreferences,
)
from tripplanner.modules.planning.place_scoring import score_places
from tripplanner.modules.tool_usage.city_tool import CityTool
from tripplanner.modules.tool_usage.distance_tool import DistanceTool
from tripplanner.modules.observability.logger import StructuredLogger

logger = logging.getLogger(__name__)
_perf_logger = StructuredLogger()


# ── Scheduling constants (time values in minutes) ────────────────────────────
_MEAL_HOURS: tuple[tuple[int, int], ...] = ((7, 9), (12, 14), (18, 21))

_CATEGORY_DURATION_MIN: dict[str, int] = {
    "restaurant": 90,
    "attraction": 120,
    "nature":     150,
    "experience": 120,
}
_DEFAULT_DURATION_MIN = 60

# ── Pricing (integer currency units) ─────────────────────────────────────────
_RESTAURANT_COST: dict[str, int] = {"high": 50000, "low": 15000}
_RESTAURANT_DEFAULT_COST = 25000
_LANDMARK_MARKERS: tuple[str, ...] = ("museum", "tower", "박물관", "타워")
_LANDMARK_COST = 15000
_ATTRACTION_COST = 5000

PreferencesLike = Union[TripPreferences, dict, None]


# ── Module-level helpers ──────────────────────────────────────────────────────

def _t2m(hhmm: str) -> int:
    """'HH:MM' → minutes-from-midnight."""
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def _m2t(mins: int) -> str:
    """Minutes-from-midnight → 'HH:MM'.  Hours are not wrapped at midnight."""
    return f"{mins // 60:02d}:{mins % 60:02d}"


def _is_meal_hour(hour: int) -> bool:
    return any(lo <= hour < hi for lo, hi in _MEAL_HOURS)


def _coerce_preferences(preferences: PreferencesLike) -> TripPreferences:
    if preferences is None:
        return TripPreferences()
    if isinstance(preferences, TripPreferences):
        return preferences
    tags = preferences.get("tags") or ()
    if isinstance(tags, str):
        tags = (tags,)
    return TripPreferences(
        tags=tuple(tags),
        budget=preferences.get("budget"),
        pace=preferences.get("pace"),
    )


def activities_per_day(profile: DestinationProfile, pace: Optional[str]) -> int:
    """Daily activity target after the pace adjustment."""
    base = profile.recommended_activities
    if pace == "relaxed":
        return max(3, base - 1)
    if pace == "packed":
        return base + 1
    return base


def activity_duration(place: Place) -> int:
    return _CATEGORY_DURATION_MIN.get(place.category, _DEFAULT_DURATION_MIN)


def activity_cost(place: Place, budget: Optional[str]) -> int:
    """Estimated spend for one stop; 0 for categories that are free."""
    if place.category == "restaurant":
        return _RESTAURANT_COST.get(budget or "", _RESTAURANT_DEFAULT_COST)
    if place.category == "attraction":
        name = place.name.lower()
        if any(marker in name for marker in _LANDMARK_MARKERS):
            return _LANDMARK_COST
        return _ATTRACTION_COST
    return 0


def sample_places(destination: str, city_tool: Optional[CityTool] = None) -> list[Place]:
    """Three generic places around the destination's base coordinate."""
    lat, lon = (city_tool or CityTool()).center(destination)
    return [
        Place(
            id=f"{destination}-sample-1",
            name=f"{destination} Main Attraction",
            category="attraction",
            rating=4.5,
            review_count=1000,
            lat=lat,
            lon=lon,
            address=f"{destination} Center",
        ),
        Place(
            id=f"{destination}-sample-2",
            name=f"{destination} Local Eats",
            category="restaurant",
            rating=4.3,
            review_count=800,
            lat=lat + 0.01,
            lon=lon + 0.01,
            address=f"{destination} Food Street",
        ),
        Place(
            id=f"{destination}-sample-3",
            name=f"{destination} Nature Spot",
            category="nature",
            rating=4.6,
            review_count=1200,
            lat=lat - 0.01,
            lon=lon + 0.02,
            address=f"{destination} Natural Park",
        ),
    ]


# ── Scheduling session ────────────────────────────────────────────────────────

class SchedulingSession:
    """
    Owns the depleting candidate pool for one build_itinerary call.

    The pool stays in descending weight order; selections never re-sort it,
    so "first in pool" always means "highest remaining weight".
    """

    def __init__(
        self,
        pool: list[ScoredPlace],
        profile: DestinationProfile,
        preferences: TripPreferences,
        distance_tool: DistanceTool,
        min_activity_minutes: int = 30,
    ) -> None:
        self.pool = pool
        self.profile = profile
        self.preferences = preferences
        self.distance_tool = distance_tool
        self.min_activity_minutes = min_activity_minutes
        self.target = activities_per_day(profile, preferences.pace)
        self._day_start = _t2m(profile.morning_start)
        self._day_end = _t2m(profile.evening_end)

    @property
    def remaining(self) -> int:
        return len(self.pool)

    def plan_day(self, day_number: int) -> DayItinerary:
        """Schedule one day from the shared pool."""
        day = DayItinerary(day=day_number)
        clock = self._day_start
        position: Optional[tuple[float, float]] = None

        while self.pool and len(day.items) < self.target:
            idx = self._select(clock // 60, position)
            place = self.pool[idx].place

            travel_min, mode = 0, None
            if position is not None:
                travel_min, mode = self.distance_tool.travel(
                    position, place.position, self.profile.transportation
                )

            start = clock + travel_min
            if day.items and start >= self._day_end - self.min_activity_minutes:
                logger.debug(
                    "Day %d: %r would start at %s, too close to %s; ending day",
                    day_number, place.name, _m2t(start), self.profile.evening_end,
                )
                break
            clock = start + activity_duration(place)

            cost = activity_cost(place, self.preferences.budget)
            day.items.append(ItineraryItem(
                title=place.name,
                place_id=place.id,
                start_time=_m2t(start),
                end_time=_m2t(clock),
                transport=mode,
                cost=cost if cost > 0 else None,
                note=place.description or place.address or None,
                position=place.position,
            ))
            position = place.position
            del self.pool[idx]

            if clock >= self._day_end:
                break

        return day

    # ── selection ─────────────────────────────────────────────────────────

    def _select(self, hour: int, position: Optional[tuple[float, float]]) -> int:
        """Index in the pool of the next place to schedule."""
        if _is_meal_hour(hour):
            restaurants = [i for i, sp in enumerate(self.pool) if sp.place.category == "restaurant"]
            if restaurants:
                if position is None:
                    return restaurants[0]
                return min(
                    restaurants,
                    key=lambda i: self.distance_tool.distance_km(position, self.pool[i].place.position),
                )

        if position is None:
            return 0
        return min(range(len(self.pool)), key=lambda i: self._proximity_ratio(position, self.pool[i]))

    def _proximity_ratio(self, position: tuple[float, float], candidate: ScoredPlace) -> float:
        """distance / weight; lower is better.  Non-positive weights rank last."""
        if candidate.weight <= 0:
            return math.inf
        return self.distance_tool.distance_km(position, candidate.place.position) / candidate.weight


# ── Builder ───────────────────────────────────────────────────────────────────

class ItineraryBuilder:
    """Builds day-by-day plans; tools are injectable for testing."""

    def __init__(
        self,
        distance_tool: DistanceTool | None = None,
        city_tool: CityTool | None = None,
        min_activity_minutes: int | None = None,
    ) -> None:
        self.distance_tool = distance_tool or DistanceTool()
        self.city_tool = city_tool or CityTool()
        self.min_activity_minutes = (
            config.MIN_ACTIVITY_MINUTES if min_activity_minutes is None
            else min_activity_minutes
        )

    def build(
        self,
        destination: str,
        days: int,
        preferences: PreferencesLike = None,
        places: Optional[Iterable[Place]] = None,
    ) -> list[DayItinerary]:
        """
        Generate the day-by-day plan.

        Args:
            destination: City name (any case / native script; see city_tool).
            days:        Number of days requested; < 1 yields [].
            preferences: TripPreferences or a dict with tags / budget / pace.
            places:      Candidate places.  Copied, never mutated.  Empty or
                         None → three synthesized sample places.

        Returns:
            One DayItinerary per day that received at least one item,
            in ascending day order.
        """
        _t0 = _time_mod.perf_counter()
        if days < 1:
            return []

        prefs = _coerce_preferences(preferences)
        candidates = list(places or ())
        if not candidates:
            logger.info("No places supplied for %r; using sample places", destination)
            candidates = sample_places(destination, self.city_tool)

        profile = self.city_tool.profile(destination)
        session = SchedulingSession(
            pool=score_places(candidates, prefs.tags),
            profile=profile,
            preferences=prefs,
            distance_tool=self.distance_tool,
            min_activity_minutes=self.min_activity_minutes,
        )

        itinerary: list[DayItinerary] = []
        for day_number in range(1, days + 1):
            day = session.plan_day(day_number)
            if day.items:
                itinerary.append(day)

        _perf_logger.perf(
            "ItineraryBuilder.build", _t0,
            destination=destination,
            days_requested=days,
            days_planned=len(itinerary),
            places_left=session.remaining,
        )
        return itinerary


def build_itinerary(
    destination: str,
    days: int,
    preferences: PreferencesLike = None,
    places: Optional[Iterable[Place]] = None,
) -> list[DayItinerary]:
    """Convenience wrapper around ItineraryBuilder().build()."""
    return ItineraryBuilder().build(destination, days, preferences, places)


def itinerary_to_dicts(itinerary: Iterable[DayItinerary]) -> list[dict[str, Any]]:
    return [d.to_dict() for d in itinerary]
