"""
Activity domain model.

An Activity is a tagged record: the shared fields plus a kind-specific
payload (RunDetails or RideDetails). Derived metrics are computed once in
the constructor functions and never recomputed.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from constants import (
    DISTANCE_UNIT,
    DURATION_ICON,
    DURATION_UNIT,
    KIND_PROFILES,
    MONTHS,
)
from core.errors import InvalidActivityError
from core.validation import is_positive_number

Location = Tuple[float, float]


class ActivityKind(str, Enum):
    RUN = "running"
    RIDE = "cycling"

    @property
    def profile(self) -> Dict[str, str]:
        return KIND_PROFILES[self.value]


@dataclass(frozen=True)
class RunDetails:
    cadence_spm: float
    pace_min_per_km: float


@dataclass(frozen=True)
class RideDetails:
    elevation_gain_m: float
    speed_kmh: float


@dataclass(frozen=True)
class Activity:
    id: str
    created_at: datetime
    location: Location
    distance_km: float
    duration_min: float
    kind: ActivityKind
    details: Union[RunDetails, RideDetails]
    title: str

    @property
    def derived_metric(self) -> float:
        if self.kind is ActivityKind.RUN:
            return self.details.pace_min_per_km
        return self.details.speed_kmh

    @property
    def kind_specific_value(self) -> float:
        if self.kind is ActivityKind.RUN:
            return self.details.cadence_spm
        return self.details.elevation_gain_m

    @property
    def icon(self) -> str:
        return self.kind.profile['icon']


_last_id_ns = 0


def _next_activity_id() -> str:
    """Time-derived id, strictly increasing within the process."""
    global _last_id_ns
    now_ns = time.time_ns()
    if now_ns <= _last_id_ns:
        now_ns = _last_id_ns + 1
    _last_id_ns = now_ns
    return str(now_ns)


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place, using the exact binary value of the float."""
    return float(Decimal(value).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def derive_metric(kind: ActivityKind, distance_km: float, duration_min: float) -> float:
    """Pace (min/km) for runs, speed (km/h) for rides."""
    try:
        if kind is ActivityKind.RUN:
            raw = duration_min / distance_km
        elif kind is ActivityKind.RIDE:
            raw = distance_km / (duration_min / 60)
        else:
            raise InvalidActivityError(f"Unknown activity kind: {kind!r}")
    except (ZeroDivisionError, OverflowError) as exc:
        raise InvalidActivityError(f"Cannot derive metric for {kind.value}") from exc
    if not math.isfinite(raw):
        raise InvalidActivityError(f"Derived metric overflowed for {kind.value}: {raw!r}")
    return round_one_decimal(raw)


def format_title(kind: ActivityKind, created_at: datetime) -> str:
    """e.g. 'Running on October 19'."""
    name = kind.value
    return f"{name[0].upper()}{name[1:]} on {MONTHS[created_at.month - 1]} {created_at.day}"


def _normalize_location(location: Any) -> Location:
    if not isinstance(location, (list, tuple)) or len(location) != 2:
        raise InvalidActivityError(f"Location must be a (latitude, longitude) pair, got {location!r}")
    try:
        lat = float(location[0])
        lng = float(location[1])
    except (TypeError, ValueError) as exc:
        raise InvalidActivityError(f"Location coordinates must be numbers, got {location!r}") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidActivityError(f"Location coordinates must be finite, got {location!r}")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise InvalidActivityError(f"Location out of range: {location!r}")
    return (lat, lng)


def create_activity(
    kind: ActivityKind,
    location: Location,
    duration_min: float,
    distance_km: float,
    kind_value: float,
    *,
    now: Optional[datetime] = None,
) -> Activity:
    """
    Build a validated Activity of the given kind.

    Args:
        kind: Run or Ride discriminator
        location: (latitude, longitude)
        duration_min: Duration in minutes, > 0
        distance_km: Distance in kilometres, > 0
        kind_value: Cadence (spm) for runs, elevation gain (m) for rides, > 0
        now: Creation timestamp; defaults to the current local time

    Raises:
        InvalidActivityError: any numeric field is not a finite number > 0,
            the location is malformed, or the kind is unknown.
    """
    try:
        kind = ActivityKind(kind)
    except ValueError as exc:
        raise InvalidActivityError(f"Unknown activity kind: {kind!r}") from exc

    for name, value in (
        ('duration_min', duration_min),
        ('distance_km', distance_km),
        ('kind_value', kind_value),
    ):
        if not is_positive_number(value):
            raise InvalidActivityError(f"{name} must be a finite number greater than zero, got {value!r}")

    coords = _normalize_location(location)
    created_at = now or datetime.now()
    metric = derive_metric(kind, distance_km, duration_min)

    if kind is ActivityKind.RUN:
        details = RunDetails(cadence_spm=float(kind_value), pace_min_per_km=metric)
    else:
        details = RideDetails(elevation_gain_m=float(kind_value), speed_kmh=metric)

    return Activity(
        id=_next_activity_id(),
        created_at=created_at,
        location=coords,
        distance_km=float(distance_km),
        duration_min=float(duration_min),
        kind=kind,
        details=details,
        title=format_title(kind, created_at),
    )


def create_run(location, duration_min, distance_km, cadence_spm, *, now=None) -> Activity:
    return create_activity(ActivityKind.RUN, location, duration_min, distance_km, cadence_spm, now=now)


def create_ride(location, duration_min, distance_km, elevation_gain_m, *, now=None) -> Activity:
    return create_activity(ActivityKind.RIDE, location, duration_min, distance_km, elevation_gain_m, now=now)


def activity_summary(activity: Activity) -> Dict[str, Any]:
    """Plain record consumed by the list renderer."""
    profile = activity.kind.profile
    return {
        'id': activity.id,
        'kind': activity.kind.value,
        'title': activity.title,
        'icon': profile['icon'],
        'color': profile['color'],
        'distance_km': activity.distance_km,
        'duration_min': activity.duration_min,
        'derived_metric': activity.derived_metric,
        'kind_specific_value': activity.kind_specific_value,
        'units': {
            'distance': DISTANCE_UNIT,
            'duration': DURATION_UNIT,
            'derived_metric': profile['metric_unit'],
            'kind_specific_value': profile['specific_unit'],
        },
        'icons': {
            'distance': profile['icon'],
            'duration': DURATION_ICON,
            'derived_metric': profile['metric_icon'],
            'kind_specific_value': profile['specific_icon'],
        },
        'labels': {
            'derived_metric': profile['metric_label'],
            'kind_specific_value': profile['specific_label'],
        },
    }
