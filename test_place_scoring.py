"""
test_place_scoring.py
──────────────────────────────────────────────────────────────────────────────
Place weights, tag-driven category multipliers, and the great-circle /
travel-band helpers the scheduler relies on.

Run:
    python test_place_scoring.py      (or: pytest test_place_scoring.py)
──────────────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import math

from tripplanner.schemas.itinerary import PLACE_CATEGORIES, Place
from tripplanner.modules.planning.place_scoring import (
    category_multipliers,
    place_weight,
    score_places,
)
from tripplanner.modules.tool_usage.distance_tool import (
    DistanceTool,
    estimate_travel,
    haversine_km,
    split_transport_label,
)


def _ok(msg: str) -> None: print(f"  ✓  {msg}")


# ─────────────────────────────────────────────────────────────────────────────
# Category multipliers
# ─────────────────────────────────────────────────────────────────────────────

def test_default_multipliers_are_neutral():
    table = category_multipliers()
    assert dict(table) == {"attraction": 1.0, "restaurant": 1.0, "experience": 1.0, "nature": 1.0}
    assert tuple(table) == PLACE_CATEGORIES


def test_tags_raise_their_categories():
    table = category_multipliers(["history", "food", "shopping"])
    assert table["attraction"] == 1.5
    assert table["restaurant"] == 1.5
    assert table["experience"] == 1.2
    assert table["nature"] == 1.0

    assert category_multipliers(["nature"])["nature"] == 1.5
    assert category_multipliers(["culture", "history"])["attraction"] == 1.5   # set, not multiplied


def test_multiplier_table_is_read_only():
    table = category_multipliers(["food"])
    try:
        table["restaurant"] = 3.0  # type: ignore[index]
    except TypeError:
        pass
    else:
        raise AssertionError("multiplier table should be immutable")
    assert category_multipliers()["restaurant"] == 1.0


# ─────────────────────────────────────────────────────────────────────────────
# Weights
# ─────────────────────────────────────────────────────────────────────────────

def test_weight_formula():
    museum = Place(id="m", name="City Museum", category="attraction", rating=4.0, review_count=2000)
    assert place_weight(museum, category_multipliers()) == 8.0
    assert place_weight(museum, category_multipliers(["culture"])) == 12.0


def test_unknown_category_and_missing_numbers():
    zoo = Place(id="z", category="zoo", rating=4.0, review_count=500)
    assert place_weight(zoo, category_multipliers(["culture", "food"])) == 2.0

    blank = Place(id="b", category="attraction", rating=None, review_count=None)  # type: ignore[arg-type]
    assert place_weight(blank, category_multipliers()) == 0.0


def test_score_places_sorts_descending_and_keeps_input():
    places = [
        Place(id="low", category="nature", rating=3.0, review_count=100),
        Place(id="high", category="attraction", rating=5.0, review_count=5000),
        Place(id="tie-a", category="restaurant", rating=4.0, review_count=1000),
        Place(id="tie-b", category="restaurant", rating=4.0, review_count=1000),
        Place(id="zero", category="attraction", rating=4.9, review_count=0),
    ]
    before = list(places)
    scored = score_places(places)

    assert [sp.place.id for sp in scored] == ["high", "tie-a", "tie-b", "low", "zero"]
    assert scored[-1].weight == 0.0
    assert places == before


def test_food_tag_reorders_restaurants():
    places = [
        Place(id="sight", category="attraction", rating=4.0, review_count=1000),
        Place(id="lunch", category="restaurant", rating=4.0, review_count=900),
    ]
    assert score_places(places)[0].place.id == "sight"
    assert score_places(places, ["food"])[0].place.id == "lunch"


# ─────────────────────────────────────────────────────────────────────────────
# Distances and travel bands
# ─────────────────────────────────────────────────────────────────────────────

def test_haversine_basics():
    assert haversine_km(35.6762, 139.6503, 35.6762, 139.6503) == 0.0
    d1 = haversine_km(35.6762, 139.6503, 34.6937, 135.5023)
    d2 = haversine_km(34.6937, 135.5023, 35.6762, 139.6503)
    assert math.isclose(d1, d2)
    assert 385.0 < d1 < 400.0     # Tokyo → Osaka


def test_distance_tool_identical_points():
    assert DistanceTool().distance_km((48.8566, 2.3522), (48.8566, 2.3522)) == 0.0


def test_transport_label_split():
    assert split_transport_label("subway/walk") == ("subway", "walk")
    assert split_transport_label("bus") == ("bus", "walk")


def test_travel_bands():
    assert estimate_travel(15.0, "rental-car/taxi") == (30, "rental-car")
    assert estimate_travel(7.5, "rental-car/taxi") == (30, "taxi")
    assert estimate_travel(7.5, "bus") == (30, "walk")
    assert estimate_travel(1.5, "rental-car/taxi") == (18, "walk")
    assert estimate_travel(1.01, "subway/walk") == (13, "walk")      # rounded up
    assert estimate_travel(0.0, "subway/walk") == (0, "walk")


if __name__ == "__main__":
    for _name, _fn in list(globals().items()):
        if _name.startswith("test_") and callable(_fn):
            _fn()
            _ok(_name)
