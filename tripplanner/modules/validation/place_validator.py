"""
modules/validation/place_validator.py
--------------------------------------
Data-quality guards applied to place records received from a catalog proxy,
before they are cached or handed to the itinerary builder.

  ✓ Non-empty id and name
  ✓ Coordinates present and numeric
  ✓ Latitude in [-90, 90], longitude in [-180, 180]
  ✓ Coordinates are not both exactly 0.0 (likely missing)
  ✓ Rating in [0, 5] if present
  ✓ Review count >= 0 if present

Unknown categories are accepted: the scorer treats them as weight-neutral.

Usage:
    from tripplanner.modules.validation import validate_place, filter_valid

    clean_records = filter_valid(records, validate_place)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: Human-readable list of failure reasons.
        record: The input record dict (for logging purposes).
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    record: dict = field(default_factory=dict, repr=False)

    def __bool__(self) -> bool:
        return self.valid


def _coords(record: dict[str, Any]) -> tuple[Any, Any]:
    pos = record.get("position")
    if isinstance(pos, dict):
        return pos.get("lat"), pos.get("lng", pos.get("lon"))
    return record.get("lat"), record.get("lon")


def validate_place(record: dict[str, Any]) -> ValidationResult:
    """Validate one place record (camelCase `position` or flat lat/lon)."""
    errors: list[str] = []

    # ── Identity ───────────────────────────────────────────────────────────
    if not str(record.get("id") or "").strip():
        errors.append("id must not be empty or NULL")
    if not str(record.get("name") or "").strip():
        errors.append("name must not be empty or NULL")

    # ── Coordinates ────────────────────────────────────────────────────────
    lat, lon = _coords(record)
    if lat is None or lon is None:
        errors.append(f"lat/lng must not be NULL (got lat={lat!r}, lng={lon!r})")
    else:
        try:
            lat = float(lat)
            lon = float(lon)
        except (TypeError, ValueError):
            errors.append(f"lat/lng must be numeric (got lat={lat!r}, lng={lon!r})")
            return ValidationResult(valid=False, errors=errors, record=record)

        if not (-90.0 <= lat <= 90.0):
            errors.append(f"lat={lat} is outside valid range [-90, 90]")
        if not (-180.0 <= lon <= 180.0):
            errors.append(f"lng={lon} is outside valid range [-180, 180]")
        if lat == 0.0 and lon == 0.0:
            errors.append("lat=0.0 and lng=0.0: likely a missing/default value")

    # ── Popularity fields ──────────────────────────────────────────────────
    rating = record.get("rating")
    if rating is not None:
        try:
            r = float(rating)
            if not (0.0 <= r <= 5.0):
                errors.append(f"rating={r} is outside valid range [0, 5]")
        except (TypeError, ValueError):
            errors.append(f"rating={rating!r} must be numeric")

    reviews = record.get("reviewCount", record.get("review_count"))
    if reviews is not None:
        try:
            if int(reviews) < 0:
                errors.append(f"reviewCount={reviews} must be >= 0")
        except (TypeError, ValueError):
            errors.append(f"reviewCount={reviews!r} must be an integer")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)


def filter_valid(
    items: list[T],
    validator: Callable[[dict], ValidationResult],
    to_dict: Callable[[T], dict] | None = None,
) -> list[T]:
    """
    Keep the items that pass *validator*, in their original order.

    *to_dict* converts non-dict items (e.g. Place.to_dict); without it an item
    is validated as-is if it is a dict, else via its __dict__.  Each rejected
    record is logged at WARNING level with its reasons.
    """
    valid_items: list[T] = []
    rejected = 0

    for item in items:
        record_dict = (
            to_dict(item)
            if to_dict is not None
            else (item if isinstance(item, dict) else item.__dict__)
        )
        result = validator(record_dict)
        if result.valid:
            valid_items.append(item)
        else:
            rejected += 1
            logger.warning(
                "Rejected place %r: %s",
                record_dict.get("name", record_dict.get("id", "?")),
                "; ".join(result.errors),
            )

    if rejected:
        logger.warning(
            "%d/%d place records rejected; %d passed.",
            rejected, len(items), len(valid_items),
        )

    return valid_items
