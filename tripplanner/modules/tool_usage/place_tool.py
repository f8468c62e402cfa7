"""
modules/tool_usage/place_tool.py
---------------------------------
Place catalog lookups for a destination.

Proxy mode: PLACES_PROXY_BASE_URL set and USE_STUB_PLACES=false
            GET {base}/api/places?destination=..&category=..
            Records are validated before use; any failure falls back to the
            built-in catalog with a logged warning.
Stub mode:  built-in catalog for Tokyo, Osaka, Jeju, Busan, Fukuoka, Paris.
            Unknown destinations return [] (the itinerary builder then
            synthesizes sample places).

Results are cached per (destination, category) for CACHE_TTL_SECONDS.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from tripplanner import config
from tripplanner.db.cache import get_cache
from tripplanner.schemas.itinerary import Place
from tripplanner.modules.tool_usage.city_tool import CityTool
from tripplanner.modules.validation import filter_valid, validate_place

logger = logging.getLogger(__name__)


def _p(id_, name, category, rating, reviews, address, hours, lat, lng, description, tags) -> dict:
    return {
        "id": id_, "name": name, "category": category, "rating": rating,
        "reviewCount": reviews, "address": address, "openHours": hours,
        "position": {"lat": lat, "lng": lng}, "description": description,
        "tags": tags,
    }


# ── Built-in catalog ──────────────────────────────────────────────────────────
_STUB_PLACES: dict[str, list[dict]] = {
    "tokyo": [
        _p("tokyo-1", "Senso-ji Temple", "attraction", 4.5, 12453,
           "2 Chome-3-1 Asakusa, Taito City, Tokyo", "06:00 - 17:00", 35.7148, 139.7967,
           "Tokyo's oldest temple, a window into traditional culture", ["culture", "history", "photo"]),
        _p("tokyo-2", "Sushi Dai", "restaurant", 4.7, 8921,
           "Tsukiji Market, Chuo City, Tokyo", "05:00 - 14:00", 35.665, 139.7701,
           "Top-tier sushi counter at Tsukiji market", ["food", "sushi", "breakfast"]),
        _p("tokyo-3", "Tokyo Skytree", "attraction", 4.6, 15678,
           "1 Chome-1-2 Oshiage, Sumida City, Tokyo", "09:00 - 21:00", 35.7101, 139.8107,
           "City-wide views from a 634 m observation deck", ["landmark", "view", "photo"]),
        _p("tokyo-4", "Shibuya Crossing", "attraction", 4.4, 9234,
           "Shibuya City, Tokyo", "24 hours", 35.6595, 139.7004,
           "The world's busiest pedestrian scramble", ["landmark", "photo", "shopping"]),
        _p("tokyo-5", "Ichiran Ramen Shinjuku", "restaurant", 4.5, 7823,
           "Shinjuku City, Tokyo", "24 hours", 35.6926, 139.7006,
           "Rich tonkotsu ramen served in private booths", ["food", "ramen", "lunch"]),
        _p("tokyo-6", "Meiji Shrine", "attraction", 4.6, 11234,
           "1-1 Yoyogi-Kamizono-cho, Shibuya City, Tokyo", "06:00 - 18:00", 35.6764, 139.6993,
           "A quiet Shinto shrine in the middle of the city", ["culture", "nature", "history"]),
        _p("tokyo-7", "Ueno Park", "nature", 4.5, 8765,
           "Ueno Park, Taito City, Tokyo", "05:00 - 23:00", 35.7151, 139.7737,
           "Cherry-blossom spot surrounded by museums", ["nature", "park", "culture"]),
        _p("tokyo-8", "Ginza Tendon Yakumo", "restaurant", 4.6, 5432,
           "Ginza, Chuo City, Tokyo", "11:00 - 21:00", 35.6718, 139.7649,
           "Michelin-recommended tempura rice bowls", ["food", "tempura", "lunch"]),
    ],
    "osaka": [
        _p("osaka-1", "Osaka Castle", "attraction", 4.4, 9876,
           "1-1 Osakajo, Chuo Ward, Osaka", "09:00 - 17:00", 34.6873, 135.5262,
           "Osaka's signature historic castle", ["history", "landmark", "photo"]),
        _p("osaka-2", "Ichiran Ramen Dotonbori", "restaurant", 4.5, 7654,
           "Dotonbori, Chuo Ward, Osaka", "24 hours", 34.6686, 135.5021,
           "Ramen specialist with private booths", ["food", "ramen", "dinner"]),
        _p("osaka-3", "Dotonbori", "attraction", 4.6, 13456,
           "Dotonbori, Chuo Ward, Osaka", "24 hours", 34.6687, 135.5017,
           "Osaka's liveliest nightlife and street-food strip", ["shopping", "food", "nightlife"]),
        _p("osaka-4", "Kuromon Market", "experience", 4.4, 6789,
           "Kuromon Market, Chuo Ward, Osaka", "09:00 - 18:00", 34.6656, 135.5072,
           "Osaka's kitchen: fresh seafood and street food", ["food", "market", "shopping"]),
        _p("osaka-5", "Umeda Sky Building", "attraction", 4.5, 5678,
           "Umeda, Kita Ward, Osaka", "10:00 - 22:00", 34.7055, 135.4903,
           "Floating garden observatory 173 m up", ["view", "landmark", "photo"]),
    ],
    "jeju": [
        _p("jeju-1", "Seongsan Ilchulbong", "nature", 4.6, 5432,
           "Seongsan-eup, Seogwipo, Jeju", "07:00 - 19:00", 33.4595, 126.9424,
           "UNESCO natural heritage crater and sunrise spot", ["nature", "sunrise", "hiking"]),
        _p("jeju-2", "Black Pork Street", "restaurant", 4.3, 3210,
           "Geonip-dong, Jeju City, Jeju", "11:00 - 22:00", 33.4996, 126.5312,
           "A street of Jeju black-pork barbecue houses", ["food", "pork", "dinner"]),
        _p("jeju-3", "Hallasan", "nature", 4.7, 6789,
           "Jeju City, Jeju", "05:00 - 13:00 (trail entry)", 33.3617, 126.5292,
           "South Korea's highest peak", ["nature", "hiking", "mountain"]),
        _p("jeju-4", "Jeju Folk Village", "attraction", 4.2, 2345,
           "Pyoseon-myeon, Seogwipo, Jeju", "08:30 - 18:00", 33.3189, 126.7969,
           "Traditional Jeju culture experience", ["culture", "history", "experience"]),
        _p("jeju-5", "Seopjikoji", "nature", 4.5, 4567,
           "Seongsan-eup, Seogwipo, Jeju", "24 hours", 33.4244, 126.9302,
           "Coastal cliffs and canola-flower fields", ["nature", "photo", "ocean"]),
    ],
    "busan": [
        _p("busan-1", "Haeundae Beach", "nature", 4.5, 8765,
           "Haeundae-gu, Busan", "24 hours", 35.1587, 129.1604,
           "Korea's best-known beach resort", ["beach", "ocean", "summer"]),
        _p("busan-2", "Jagalchi Market", "experience", 4.3, 5432,
           "Nampo-dong, Jung-gu, Busan", "05:00 - 22:00", 35.0965, 129.0306,
           "Korea's largest seafood market", ["food", "market", "seafood"]),
        _p("busan-3", "Gamcheon Culture Village", "attraction", 4.6, 6789,
           "Gamcheon-dong, Saha-gu, Busan", "09:00 - 18:00", 35.0976, 129.0104,
           "Hillside art village of painted houses", ["art", "photo", "culture"]),
    ],
    "fukuoka": [
        _p("fukuoka-1", "Fukuoka Tower", "attraction", 4.4, 3456,
           "Fukuoka Tower, Fukuoka", "09:30 - 22:00", 33.5937, 130.3559,
           "234 m observation tower", ["view", "landmark", "photo"]),
        _p("fukuoka-2", "Hakata Ramen Street", "restaurant", 4.5, 5678,
           "Hakata, Fukuoka", "11:00 - 23:00", 33.5904, 130.4197,
           "The home of tonkotsu ramen", ["food", "ramen", "dinner"]),
    ],
    "paris": [
        _p("paris-1", "Eiffel Tower", "attraction", 4.7, 25678,
           "Champ de Mars, Paris", "09:00 - 00:45", 48.8584, 2.2945,
           "The symbol of Paris", ["landmark", "photo", "view"]),
        _p("paris-2", "Louvre Museum", "attraction", 4.8, 34567,
           "Rue de Rivoli, Paris", "09:00 - 18:00", 48.8606, 2.3376,
           "The world's largest art museum", ["art", "culture", "history"]),
        _p("paris-3", "Le Jules Verne", "restaurant", 4.6, 4567,
           "Eiffel Tower, Paris", "12:00 - 14:00, 19:00 - 21:00", 48.8583, 2.2945,
           "Michelin-starred dining inside the Eiffel Tower", ["food", "fine-dining", "view"]),
    ],
}

STUB_CITIES: frozenset[str] = frozenset(_STUB_PLACES)


class PlaceTool:
    """Fetches place records from the catalog proxy or the built-in catalog."""

    def __init__(self, cache=None, city_tool: CityTool | None = None) -> None:
        self.cache = cache if cache is not None else get_cache()
        self.city_tool = city_tool or CityTool()

    def fetch(self, destination: str, category: Optional[str] = None) -> list[Place]:
        """Return places for *destination*, optionally limited to one category."""
        cache_key = f"places_{destination}_{category or 'all'}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return [Place.from_dict(r) for r in cached]

        records: Optional[list[dict]] = None
        if config.PLACES_PROXY_BASE_URL and not config.USE_STUB_PLACES:
            try:
                records = self._fetch_proxy(destination, category)
            except RuntimeError as exc:
                logger.warning("Place proxy failed for %r, using built-in catalog: %s", destination, exc)

        if records is None:
            records = self._fetch_stub(destination, category)

        self.cache.set(cache_key, records)
        return [Place.from_dict(r) for r in records]

    # ── internals ─────────────────────────────────────────────────────────

    def _fetch_stub(self, destination: str, category: Optional[str]) -> list[dict]:
        city = self.city_tool.normalize(destination)
        records = [dict(r) for r in _STUB_PLACES.get(city, [])]
        if category:
            records = [r for r in records if r["category"] == category]
        logger.info("Returning %d built-in places for %r (city=%r)", len(records), destination, city)
        return records

    def _fetch_proxy(self, destination: str, category: Optional[str]) -> list[dict]:
        """GET the proxy's place list.  Raises RuntimeError on any failure."""
        params: dict[str, Any] = {"destination": destination}
        if category:
            params["category"] = category
        url = config.PLACES_PROXY_BASE_URL.rstrip("/") + "/api/places"
        try:
            resp = requests.get(url, params=params, timeout=config.PROXY_REQUEST_TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise RuntimeError(f"place proxy error: {exc}") from exc

        if not isinstance(data, list):
            raise RuntimeError(f"place proxy returned {type(data).__name__}, expected a list")
        return filter_valid([r for r in data if isinstance(r, dict)], validate_place)
