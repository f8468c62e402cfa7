"""
modules/planning/ranking.py
----------------------------
Sort keys for transport results and place cards.

Transport: ascending cost / duration / transfers, missing values last.
Places:    descending rating / review count, missing values as 0.
"""

from __future__ import annotations
import math
from typing import Callable, Iterable, Optional

from tripplanner.schemas.itinerary import Place, as_number
from tripplanner.schemas.transport import TransportOption


def _or_inf(value: Optional[float]) -> float:
    return math.inf if value is None else value


def by_cost(option: TransportOption) -> float:
    return _or_inf(option.total_cost)


def by_duration(option: TransportOption) -> float:
    return _or_inf(option.total_minutes)


def by_transfers(option: TransportOption) -> float:
    return _or_inf(option.transfers)


TRANSPORT_SORT_KEYS: dict[str, Callable[[TransportOption], float]] = {
    "cost":      by_cost,
    "duration":  by_duration,
    "transfers": by_transfers,
}


def rank_transport(options: Iterable[TransportOption], sort_by: str = "cost") -> list[TransportOption]:
    """Return a new list ordered by *sort_by*; raises ValueError for unknown keys."""
    key = TRANSPORT_SORT_KEYS.get(sort_by)
    if key is None:
        raise ValueError(
            f"unknown sort key {sort_by!r}; expected one of {sorted(TRANSPORT_SORT_KEYS)}"
        )
    return sorted(options, key=key)


def sort_places_by_rating(places: Iterable[Place]) -> list[Place]:
    return sorted(places, key=lambda p: as_number(p.rating), reverse=True)


def sort_places_by_review_count(places: Iterable[Place]) -> list[Place]:
    return sorted(places, key=lambda p: as_number(p.review_count), reverse=True)
