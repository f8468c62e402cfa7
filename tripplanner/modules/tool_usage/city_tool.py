"""
modules/tool_usage/city_tool.py
---------------------------------
Destination lookup tables used before any profile or catalog lookup.

Two tables, both plain configuration data:
  CITY_NAME_ALIASES     native-script / alternate spellings → canonical key
  DESTINATION_PROFILES  canonical key → DestinationProfile

CITY_CENTERS gives the base coordinate used to synthesize sample places.
A CityTool instance can be handed replacement tables (e.g. a localized alias
table) without touching the scheduling code.
"""

from __future__ import annotations
from typing import Mapping, Optional

from tripplanner.schemas.itinerary import DestinationProfile


CITY_NAME_ALIASES: dict[str, str] = {
    # Korean
    "서울":     "seoul",
    "인천":     "incheon",
    "부산":     "busan",
    "제주":     "jeju",
    "도쿄":     "tokyo",
    "오사카":   "osaka",
    "후쿠오카": "fukuoka",
    "삿포로":   "sapporo",
    "교토":     "kyoto",
    "파리":     "paris",
    "런던":     "london",
    "뉴욕":     "newyork",
    # Japanese
    "東京":     "tokyo",
    "大阪":     "osaka",
    "福岡":     "fukuoka",
    # Alternate spellings
    "new york": "newyork",
    "new york city": "newyork",
    "jeju-do":  "jeju",
    "pusan":    "busan",
}

DESTINATION_PROFILES: dict[str, DestinationProfile] = {
    "tokyo":   DestinationProfile("08:00", "21:00", 5, "subway/walk"),
    "osaka":   DestinationProfile("08:30", "21:30", 5, "subway/walk"),
    "jeju":    DestinationProfile("09:00", "19:00", 4, "rental-car/taxi"),
    "busan":   DestinationProfile("09:00", "20:00", 4, "subway/walk"),
    "paris":   DestinationProfile("09:00", "22:00", 5, "metro/walk"),
    "fukuoka": DestinationProfile("09:00", "21:00", 4, "subway/walk"),
}

DEFAULT_PROFILE = DestinationProfile()

CITY_CENTERS: dict[str, tuple[float, float]] = {
    "tokyo": (35.6762, 139.6503),
    "osaka": (34.6937, 135.5023),
    "jeju":  (33.4996, 126.5312),
    "paris": (48.8566, 2.3522),
}

# Used when a destination has no entry in CITY_CENTERS
DEFAULT_CITY_CENTER: tuple[float, float] = CITY_CENTERS["tokyo"]


class CityTool:
    """Resolves destination names against swappable alias / profile tables."""

    def __init__(
        self,
        aliases: Optional[Mapping[str, str]] = None,
        profiles: Optional[Mapping[str, DestinationProfile]] = None,
        centers: Optional[Mapping[str, tuple[float, float]]] = None,
    ) -> None:
        self.aliases = CITY_NAME_ALIASES if aliases is None else aliases
        self.profiles = DESTINATION_PROFILES if profiles is None else profiles
        self.centers = CITY_CENTERS if centers is None else centers

    def normalize(self, city: str) -> str:
        """Lower-case, trim, then map through the alias table."""
        norm = (city or "").strip().lower()
        return self.aliases.get(norm, norm)

    def profile(self, city: str) -> DestinationProfile:
        return self.profiles.get(self.normalize(city), DEFAULT_PROFILE)

    def center(self, city: str) -> tuple[float, float]:
        return self.centers.get(self.normalize(city), DEFAULT_CITY_CENTER)


_default_tool = CityTool()


def normalize_city(city: str) -> str:
    return _default_tool.normalize(city)


def resolve_profile(city: str) -> DestinationProfile:
    return _default_tool.profile(city)
