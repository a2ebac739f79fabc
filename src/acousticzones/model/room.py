"""
Room Size Validation
====================
Estimates the room diameter from deployed survey points and checks it
against the studio standard.

The ultrasonic distance of each point is read as a radius from the room
center, so the farthest point doubled gives the diameter estimate.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, List, Optional

from acousticzones.config import DEFAULT_SETTINGS, EngineSettings
from acousticzones.model.readings import DeployedPoint
from acousticzones.model.units import to_meters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomCheckResult:
    ok: bool
    estimated_meters: Optional[float]
    reason: str


# State before anything has been deployed
INITIAL_ROOM_CHECK = RoomCheckResult(ok=True, estimated_meters=None, reason="")


def _format_meters(value: float) -> str:
    """Two decimals at most, without trailing zeros (6.0 -> '6', 123456.78 kept)."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def valid_distances_m(points: Iterable[DeployedPoint], default_unit: str) -> List[float]:
    """Distances in meters, dropping parse failures and non-positive values."""
    meters = []
    for point in points:
        value = to_meters(point.reading.distance, default_unit)
        if value is not None and value > 0:
            meters.append(value)
    return meters


def check_room_size(
    points: Iterable[DeployedPoint],
    settings: EngineSettings = DEFAULT_SETTINGS
) -> RoomCheckResult:
    """Validate the deployed point set against the studio-standard diameter range."""
    lo, hi = settings.studio_min_m, settings.studio_max_m
    meters = valid_distances_m(points, settings.default_distance_unit)

    if not meters:
        return RoomCheckResult(
            ok=False,
            estimated_meters=None,
            reason="No valid distance values found. Please import/deploy valid data.",
        )

    max_radius = max(meters)
    estimated = round(max_radius * 2, 2)
    ok = lo <= estimated <= hi

    if ok:
        reason = f"Studio standard detected ({lo:g}–{hi:g}m)."
    else:
        reason = f"Not studio standard: estimated ~{_format_meters(estimated)}m (expected {lo:g}–{hi:g}m)."

    logger.debug(f"Room check: {len(meters)} distances, max radius {max_radius:.3f} m -> {reason}")
    return RoomCheckResult(ok=ok, estimated_meters=estimated, reason=reason)
