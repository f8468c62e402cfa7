"""
test_itinerary_builder.py
──────────────────────────────────────────────────────────────────────────────
Greedy day scheduler: structural guarantees and small end-to-end scenarios.

  PART 1 — Guarantees (determinism, day bounds, no duplicates, chronology,
           evening bound, caller's list untouched)
  PART 2 — Scenarios (exhaustion, meal preference, empty input, budget tiers)
  PART 3 — Profile / pace / pricing details

Run:
    python test_itinerary_builder.py      (or: pytest test_itinerary_builder.py)
──────────────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import os
import tempfile
from unittest.mock import patch

from tripplanner import config
from tripplanner.db.cache import InMemoryCache
from tripplanner.schemas.itinerary import DestinationProfile, Place, TripPreferences
from tripplanner.modules.planning.itinerary_builder import (
    ItineraryBuilder,
    activities_per_day,
    activity_cost,
    build_itinerary,
    itinerary_to_dicts,
    sample_places,
)
from tripplanner.modules.tool_usage.city_tool import CityTool, resolve_profile
from tripplanner.modules.tool_usage.place_tool import PlaceTool
from tripplanner.modules.planning import itinerary_builder
from tripplanner.modules.observability.logger import StructuredLogger


def _ok(msg: str) -> None: print(f"  ✓  {msg}")


def _mins(hhmm: str) -> int:
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


def _tokyo_places() -> list[Place]:
    return PlaceTool(cache=InMemoryCache()).fetch("Tokyo")


def _meal_scenario_places() -> list[Place]:
    # Three attractions walking distance apart along one street, one restaurant
    # at the far end with the lowest weight.
    return [
        Place(id="a1", name="Old Gate", category="attraction", rating=5.0, review_count=4000,
              lat=35.0, lon=135.0),
        Place(id="a2", name="Stone Bridge", category="attraction", rating=4.5, review_count=3000,
              lat=35.0, lon=135.005),
        Place(id="a3", name="Garden Hall", category="attraction", rating=4.0, review_count=2000,
              lat=35.0, lon=135.01),
        Place(id="r1", name="Noodle House", category="restaurant", rating=4.0, review_count=1000,
              lat=35.0, lon=135.02),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# PART 1 — Guarantees
# ─────────────────────────────────────────────────────────────────────────────

def test_deterministic_output():
    prefs = TripPreferences(tags=("culture", "food"), budget="medium", pace="packed")
    first = itinerary_to_dicts(build_itinerary("Tokyo", 3, prefs, _tokyo_places()))
    second = itinerary_to_dicts(build_itinerary("Tokyo", 3, prefs, _tokyo_places()))
    assert first == second
    assert first


def test_day_numbers_bounded_and_increasing():
    days = build_itinerary("Tokyo", 2, None, _tokyo_places())
    numbers = [d.day for d in days]
    assert numbers == sorted(set(numbers))
    assert all(1 <= n <= 2 for n in numbers)


def test_no_place_scheduled_twice():
    days = build_itinerary("Tokyo", 5, {"pace": "packed"}, _tokyo_places())
    ids = [item.place_id for d in days for item in d.items]
    assert len(ids) == len(set(ids))
    assert len(ids) == 8        # catalog fully consumed across five days


def test_items_are_chronological():
    for d in build_itinerary("Paris", 2, None, PlaceTool(cache=InMemoryCache()).fetch("paris")) + \
            build_itinerary("Tokyo", 3, None, _tokyo_places()):
        starts = [_mins(i.start_time) for i in d.items]
        assert starts == sorted(starts)
        for item in d.items:
            assert _mins(item.start_time) <= _mins(item.end_time)


def test_items_start_before_evening_end():
    profile = resolve_profile("Tokyo")
    bound = _mins(profile.evening_end) - config.MIN_ACTIVITY_MINUTES
    for d in build_itinerary("Tokyo", 2, {"pace": "packed"}, _tokyo_places()):
        for item in d.items:
            assert _mins(item.start_time) < bound


def test_callers_list_is_not_consumed():
    places = _tokyo_places()
    snapshot = list(places)
    build_itinerary("Tokyo", 2, None, places)
    assert places == snapshot


def test_zero_or_negative_days_yield_nothing():
    assert build_itinerary("Tokyo", 0, None, _tokyo_places()) == []
    assert build_itinerary("Tokyo", -2) == []


# ─────────────────────────────────────────────────────────────────────────────
# PART 2 — Scenarios
# ─────────────────────────────────────────────────────────────────────────────

def test_exhaustion_omits_empty_days():
    places = [
        Place(id="p1", name="Harbour View", category="attraction", rating=4.5, review_count=900,
              lat=35.10, lon=129.04),
        Place(id="p2", name="Fish Market", category="experience", rating=4.2, review_count=700,
              lat=35.09, lon=129.03),
    ]
    days = build_itinerary("Busan", 3, None, places)
    assert sum(len(d.items) for d in days) == 2
    assert all(d.day <= 2 for d in days)
    assert 3 not in [d.day for d in days]


def test_restaurant_lands_in_meal_window():
    days = build_itinerary("Nowhere", 1, None, _meal_scenario_places())
    assert len(days) == 1
    items = days[0].items
    assert [i.place_id for i in items][:3] == ["a1", "a2", "r1"]

    lunch = next(i for i in items if i.place_id == "r1")
    hour = _mins(lunch.start_time) // 60
    assert any(lo <= hour < hi for lo, hi in ((7, 9), (12, 14), (18, 21)))
    assert lunch.start_time == "13:23"
    assert lunch.transport == "walk"


def test_empty_input_synthesizes_samples():
    days = build_itinerary("Tokyo", 2, None, [])
    total = sum(len(d.items) for d in days)
    assert days
    assert 1 <= total <= 3
    assert all(i.place_id.startswith("Tokyo-sample-") for d in days for i in d.items)


def test_budget_tiers_price_restaurants():
    def restaurant_cost(budget):
        days = build_itinerary("Nowhere", 1, {"budget": budget}, _meal_scenario_places())
        return next(i.cost for d in days for i in d.items if i.place_id == "r1")

    assert restaurant_cost("low") == 15000
    assert restaurant_cost("high") == 50000
    assert restaurant_cost("medium") == 25000
    assert restaurant_cost(None) == 25000


# ─────────────────────────────────────────────────────────────────────────────
# PART 3 — Profiles, pace and pricing
# ─────────────────────────────────────────────────────────────────────────────

def test_pace_adjusts_daily_target():
    tokyo = resolve_profile("tokyo")
    assert activities_per_day(tokyo, None) == 5
    assert activities_per_day(tokyo, "relaxed") == 4
    assert activities_per_day(tokyo, "packed") == 6
    assert activities_per_day(DestinationProfile(), "relaxed") == 3


def test_profile_lookup_normalizes_names():
    assert resolve_profile("  TOKYO ") == resolve_profile("도쿄")
    assert resolve_profile("Jeju").transportation == "rental-car/taxi"
    assert resolve_profile("Atlantis") == DestinationProfile()


def test_first_item_has_no_transport_and_day_starts_at_profile():
    days = build_itinerary("Tokyo", 1, None, _tokyo_places())
    first, second = days[0].items[0], days[0].items[1]
    assert first.transport is None
    assert first.start_time == "08:00"
    assert second.transport in ("subway", "walk")


def test_attraction_and_free_category_pricing():
    assert activity_cost(Place(id="1", name="Louvre Museum", category="attraction"), None) == 15000
    assert activity_cost(Place(id="2", name="Fukuoka Tower", category="attraction"), "low") == 15000
    assert activity_cost(Place(id="3", name="Old Gate", category="attraction"), "high") == 5000
    assert activity_cost(Place(id="4", name="Ueno Park", category="nature"), "high") == 0

    park_only = [Place(id="park", name="Ueno Park", category="nature", rating=4.5,
                       review_count=100, lat=35.7, lon=139.77, address="Taito City")]
    item = build_itinerary("Tokyo", 1, None, park_only)[0].items[0]
    assert item.cost is None
    assert "cost" not in item.to_dict()
    assert item.note == "Taito City"
    assert item.end_time == "10:30"          # nature: 150 minutes


def test_unknown_category_gets_default_duration():
    odd = [Place(id="zoo", name="City Zoo", category="zoo", rating=4.0, review_count=100,
                 lat=35.0, lon=135.0)]
    item = build_itinerary("Nowhere", 1, None, odd)[0].items[0]
    assert (item.start_time, item.end_time) == ("09:00", "10:00")


def test_unranked_places_are_still_scheduled():
    unranked = [
        Place(id="u1", name="Alley", category="attraction", lat=35.0, lon=135.0),
        Place(id="u2", name="Corner", category="attraction", lat=35.0, lon=135.001),
    ]
    days = build_itinerary("Nowhere", 1, None, unranked)
    assert [i.place_id for i in days[0].items] == ["u1", "u2"]


def test_sample_places_fall_back_to_default_center():
    tool = CityTool()
    samples = sample_places("Atlantis", tool)
    assert [p.category for p in samples] == ["attraction", "restaurant", "nature"]
    assert samples[0].position == tool.center("tokyo")


def test_swapped_profile_table_is_used():
    tool = CityTool(profiles={"nowhere": DestinationProfile("10:00", "18:00", 3, "tram/walk")})
    days = ItineraryBuilder(city_tool=tool).build("Nowhere", 1, None, _meal_scenario_places())
    assert days[0].items[0].start_time == "10:00"
    assert len(days[0].items) <= 3


def test_single_string_tag_still_boosts():
    places = [
        Place(id="sight", name="Old Gate", category="attraction", rating=4.0, review_count=1000,
              lat=35.0, lon=135.0),
        Place(id="lunch", name="Noodle House", category="restaurant", rating=4.0, review_count=900,
              lat=35.0, lon=135.001),
    ]
    as_str = build_itinerary("Nowhere", 1, {"tags": "food"}, places)
    as_list = build_itinerary("Nowhere", 1, {"tags": ["food"]}, places)
    assert itinerary_to_dicts(as_str) == itinerary_to_dicts(as_list)
    assert as_str[0].items[0].place_id == "lunch"
    assert build_itinerary("Nowhere", 1, None, places)[0].items[0].place_id == "sight"


def test_unwritable_event_log_does_not_break_planning():
    with tempfile.TemporaryDirectory() as tmp:
        blocker = os.path.join(tmp, "occupied")
        with open(blocker, "w", encoding="utf-8") as fh:
            fh.write("x")
        broken = StructuredLogger(logs_dir=os.path.join(blocker, "logs"))
        with patch.object(itinerary_builder, "_perf_logger", broken):
            days = build_itinerary("Tokyo", 1, None, _tokyo_places()[:1])
    assert [i.place_id for d in days for i in d.items] == ["tokyo-1"]


if __name__ == "__main__":
    for _name, _fn in list(globals().items()):
        if _name.startswith("test_") and callable(_fn):
            _fn()
            _ok(_name)
