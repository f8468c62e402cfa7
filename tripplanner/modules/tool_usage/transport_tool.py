"""
modules/tool_usage/transport_tool.py
--------------------------------------
Transport option search between two cities.

Route keys are "<from>-<to>" on normalized city names (city_tool).  When only
the reverse route is known its options are returned with every segment
reversed.  Unknown routes get a single generic plane option.

Proxy mode mirrors place_tool: PLACES_PROXY_BASE_URL set and
USE_STUB_TRANSPORT=false → GET {base}/api/transport, falling back to the
built-in routes on failure.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import requests

from tripplanner import config
from tripplanner.db.cache import get_cache
from tripplanner.schemas.transport import TransportOption, TransportSegment
from tripplanner.modules.tool_usage.city_tool import CityTool

logger = logging.getLogger(__name__)


def _opt(mode, carrier, minutes, cost, segments, transfers=0, cancellation=False, discounted=False):
    return TransportOption(
        mode=mode, carrier=carrier, total_minutes=minutes, total_cost=cost,
        transfers=transfers, segments=tuple(TransportSegment(*s) for s in segments),
        cancellation_available=cancellation, discounted=discounted,
    )


# ── Built-in routes ───────────────────────────────────────────────────────────
_STUB_ROUTES: dict[str, list[TransportOption]] = {
    "seoul-tokyo": [
        _opt("plane", "Korean Air", 145, 220000, [("ICN", "NRT", "09:20", "11:45", "Korean Air", "KE702")], cancellation=True),
        _opt("plane", "ANA", 155, 198000, [("ICN", "HND", "14:30", "16:45", "ANA", "NH864")], discounted=True),
        _opt("plane", "Asiana", 150, 205000, [("ICN", "NRT", "11:00", "13:30", "Asiana", "OZ102")]),
        _opt("plane", "Jeju Air", 140, 165000, [("ICN", "NRT", "07:30", "09:50", "Jeju Air", "7C1101")], discounted=True),
    ],
    "seoul-osaka": [
        _opt("plane", "Asiana", 120, 185000, [("ICN", "KIX", "10:15", "12:15", "Asiana", "OZ112")]),
        _opt("plane", "Korean Air", 125, 195000, [("ICN", "KIX", "13:40", "15:45", "Korean Air", "KE722")]),
        _opt("plane", "Jin Air", 115, 155000, [("ICN", "KIX", "08:00", "09:55", "Jin Air", "LJ202")], discounted=True),
    ],
    "seoul-jeju": [
        _opt("plane", "Jeju Air", 65, 55000, [("GMP", "CJU", "08:00", "09:05", "Jeju Air", "7C101")], discounted=True),
        _opt("plane", "Korean Air", 70, 78000, [("ICN", "CJU", "13:30", "14:40", "Korean Air", "KE1201")]),
        _opt("plane", "Asiana", 65, 72000, [("GMP", "CJU", "09:30", "10:35", "Asiana", "OZ8901")]),
    ],
    "seoul-busan": [
        _opt("train", "KTX", 150, 59800, [("Seoul Station", "Busan Station", "06:00", "08:30", "KTX")]),
        _opt("train", "KTX", 155, 59800, [("Seoul Station", "Busan Station", "09:00", "11:35", "KTX")]),
        _opt("bus", "Kumho Express", 270, 35000, [("Seoul Express Bus Terminal", "Busan Central Bus Terminal", "07:30", "12:00", "Kumho Express")]),
        _opt("plane", "Air Busan", 55, 65000, [("GMP", "PUS", "10:20", "11:15", "Air Busan", "BX711")], discounted=True),
    ],
    "seoul-fukuoka": [
        _opt("plane", "Korean Air", 110, 165000, [("ICN", "FUK", "10:30", "12:20", "Korean Air", "KE787")]),
        _opt("plane", "Asiana", 115, 158000, [("ICN", "FUK", "14:00", "15:55", "Asiana", "OZ131")], discounted=True),
    ],
    "seoul-kyoto": [
        _opt("plane", "Korean Air + JR", 210, 225000, [
            ("ICN", "KIX", "10:15", "12:15", "Korean Air", "KE722"),
            ("KIX", "Kyoto", "13:30", "14:45", "JR Haruka"),
        ], transfers=1),
    ],
    "seoul-paris": [
        _opt("plane", "Air France", 720, 1250000, [("ICN", "CDG", "13:30", "18:30", "Air France", "AF262")]),
        _opt("plane", "Korean Air", 735, 1380000, [("ICN", "CDG", "11:15", "16:30", "Korean Air", "KE901")]),
    ],
}


def _generic_option(origin: str, destination: str) -> TransportOption:
    return _opt("plane", "Generic Airline", 180, 250000,
                [(origin, destination, "09:00", "12:00", "Generic Airline")])


class TransportTool:
    """Searches transport options from the proxy or the built-in route table."""

    def __init__(self, cache=None, city_tool: CityTool | None = None) -> None:
        self.cache = cache if cache is not None else get_cache()
        self.city_tool = city_tool or CityTool()

    def search(
        self,
        origin: str,
        destination: str,
        depart_at: str,
        modes: Optional[Iterable[str]] = None,
    ) -> list[TransportOption]:
        """Return transport options, filtered to *modes* when given."""
        cache_key = f"transport_{origin}_{destination}_{depart_at}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            options = [TransportOption.from_dict(d) for d in cached]
        else:
            options = None
            if config.PLACES_PROXY_BASE_URL and not config.USE_STUB_TRANSPORT:
                try:
                    options = self._fetch_proxy(origin, destination, depart_at)
                except RuntimeError as exc:
                    logger.warning("Transport proxy failed, using built-in routes: %s", exc)
            if options is None:
                options = self._lookup(origin, destination)
            self.cache.set(cache_key, [o.to_dict() for o in options])

        wanted = set(modes or ())
        if wanted:
            options = [o for o in options if o.mode in wanted]
        return options

    def deals(self) -> list[TransportOption]:
        """Every built-in option that is discounted or has cancellation seats."""
        return [
            o for route in _STUB_ROUTES.values() for o in route
            if o.discounted or o.cancellation_available
        ]

    # ── internals ─────────────────────────────────────────────────────────

    def _lookup(self, origin: str, destination: str) -> list[TransportOption]:
        src = self.city_tool.normalize(origin)
        dst = self.city_tool.normalize(destination)

        options = _STUB_ROUTES.get(f"{src}-{dst}")
        if options:
            return list(options)

        options = _STUB_ROUTES.get(f"{dst}-{src}")
        if options:
            return [o.reversed() for o in options]

        logger.info("No built-in route %s-%s; returning generic option", src, dst)
        return [_generic_option(origin, destination)]

    def _fetch_proxy(
        self,
        origin: str,
        destination: str,
        depart_at: str,
    ) -> list[TransportOption]:
        """Full option list for the route; mode filtering happens in search()."""
        url = config.PLACES_PROXY_BASE_URL.rstrip("/") + "/api/transport"
        params = {"from": origin, "to": destination, "departAt": depart_at}
        try:
            resp = requests.get(url, params=params, timeout=config.PROXY_REQUEST_TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise RuntimeError(f"transport proxy error: {exc}") from exc
        if not isinstance(data, list):
            raise RuntimeError(f"transport proxy returned {type(data).__name__}, expected a list")
        return [TransportOption.from_dict(d) for d in data if isinstance(d, dict)]
