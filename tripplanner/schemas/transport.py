"""
schemas/transport.py
--------------------
Transport search results (plane / train / bus options between two cities).
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Optional


@dataclass(frozen=True)
class TransportSegment:
    origin: str
    destination: str
    depart: str                  # "HH:MM"
    arrive: str                  # "HH:MM"
    carrier: Optional[str] = None
    flight_number: Optional[str] = None

    def reversed(self) -> "TransportSegment":
        return replace(self, origin=self.destination, destination=self.origin)


@dataclass(frozen=True)
class TransportOption:
    mode: str                    # "plane" | "train" | "bus"
    carrier: str
    total_minutes: Optional[int] = None
    total_cost: Optional[int] = None
    transfers: Optional[int] = None
    segments: tuple[TransportSegment, ...] = field(default_factory=tuple)
    cancellation_available: bool = False
    discounted: bool = False

    def reversed(self) -> "TransportOption":
        """Same option travelled in the opposite direction."""
        return replace(self, segments=tuple(s.reversed() for s in reversed(self.segments)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "carrier": self.carrier,
            "totalMinutes": self.total_minutes,
            "totalCost": self.total_cost,
            "transfers": self.transfers,
            "segments": [
                {k: v for k, v in {
                    "from": s.origin,
                    "to": s.destination,
                    "depart": s.depart,
                    "arrive": s.arrive,
                    "carrier": s.carrier,
                    "flightNumber": s.flight_number,
                }.items() if v is not None}
                for s in self.segments
            ],
            "cancellationAvailable": self.cancellation_available,
            "discounted": self.discounted,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransportOption":
        return cls(
            mode=data.get("mode", ""),
            carrier=data.get("carrier", ""),
            total_minutes=data.get("totalMinutes"),
            total_cost=data.get("totalCost"),
            transfers=data.get("transfers"),
            segments=tuple(
                TransportSegment(
                    origin=s.get("from", ""),
                    destination=s.get("to", ""),
                    depart=s.get("depart", ""),
                    arrive=s.get("arrive", ""),
                    carrier=s.get("carrier"),
                    flight_number=s.get("flightNumber"),
                )
                for s in data.get("segments", [])
            ),
            cancellation_available=bool(data.get("cancellationAvailable", False)),
            discounted=bool(data.get("discounted", False)),
        )
