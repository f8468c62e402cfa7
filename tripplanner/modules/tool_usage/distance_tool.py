"""
modules/tool_usage/distance_tool.py
-------------------------------------
Great-circle distances and straight-line travel estimates.
No external HTTP calls are made.

Travel bands (distance from the previous stop):
  > 10 km      30 km/h   mode = long-hop half of the profile's transport label
  2 – 10 km    15 km/h   mode = short-hop half (or "walk")
  ≤ 2 km        5 km/h   mode = "walk"
"""

from __future__ import annotations
import math

_EARTH_RADIUS_KM = 6371.0

WALK_MODE = "walk"

_LONG_HOP_KM = 10.0
_SHORT_HOP_KM = 2.0
_LONG_HOP_SPEED_KMH = 30.0
_SHORT_HOP_SPEED_KMH = 15.0
_WALK_MIN_PER_KM = 12.0        # 5 km/h


# ---------------------------------------------------------------------------
# Pure maths
# ---------------------------------------------------------------------------

def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    r = _EARTH_RADIUS_KM
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = min(1.0, (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    ))
    return 2 * r * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def split_transport_label(label: str) -> tuple[str, str]:
    """'subway/walk' -> ('subway', 'walk'); a missing half falls back to 'walk'."""
    parts = (label or "").split("/")
    long_hop = parts[0] or WALK_MODE
    short_hop = parts[1] if len(parts) > 1 and parts[1] else WALK_MODE
    return long_hop, short_hop


def estimate_travel(distance_km: float, transportation: str) -> tuple[int, str]:
    """Return (whole minutes rounded up, mode label) for one hop."""
    long_hop, short_hop = split_transport_label(transportation)
    distance_km = max(distance_km, 0.0)
    if distance_km > _LONG_HOP_KM:
        return math.ceil(distance_km / _LONG_HOP_SPEED_KMH * 60), long_hop
    if distance_km > _SHORT_HOP_KM:
        return math.ceil(distance_km / _SHORT_HOP_SPEED_KMH * 60), short_hop
    return math.ceil(distance_km * _WALK_MIN_PER_KM), WALK_MODE


# ---------------------------------------------------------------------------
# DistanceTool
# ---------------------------------------------------------------------------


class DistanceTool:
    """
    Computes distances and travel estimates between (lat, lon) points.
    Wraps the pure functions above so the scheduler can be handed a
    substitute (e.g. a routing-service client) with the same surface.
    """

    def distance_km(self, a: tuple[float, float], b: tuple[float, float]) -> float:
        if a == b:
            return 0.0
        return haversine_km(a[0], a[1], b[0], b[1])

    def travel(
        self,
        a: tuple[float, float],
        b: tuple[float, float],
        transportation: str,
    ) -> tuple[int, str]:
        """Return (minutes, mode) for travelling from *a* to *b*."""
        return estimate_travel(self.distance_km(a, b), transportation)
