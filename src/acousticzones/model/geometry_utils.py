"""
Spatial Mapping
===============
Places deployed survey points in the 3D room and derives the room geometry
(bounds, walls, furniture) from the full point set.

Coordinate system: y is up, the survey device sits at the origin, angles are
measured on the horizontal x/z plane.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import re
from typing import Dict, Iterable, List, Optional, Tuple

from math import pi
import numpy as np

from acousticzones.config import (
    DEFAULT_DISTANCE_UNIT, LAYER_OFFSET_M, LAYER_SPACING_M, ROOM_MARGIN_M,
    WALL_HEIGHT_M, WALL_THICKNESS_M,
)
from acousticzones.model.readings import DeployedPoint
from acousticzones.model.units import to_meters

logger = logging.getLogger(__name__)

_TRAILING_DIGITS = re.compile(r"(\d+)\s*$")


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180


@dataclass(frozen=True)
class Placement:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class RoomBounds:
    """
    Room extents on the horizontal plane, already expanded by the margin.
    north/south are z extents, east/west are x extents.
    """
    north: float
    south: float
    east: float
    west: float

    @property
    def width(self) -> float:
        return self.east - self.west

    @property
    def depth(self) -> float:
        return self.north - self.south

    @property
    def center(self) -> Tuple[float, float]:
        """(x, z) of the room center."""
        return (self.east + self.west) / 2, (self.north + self.south) / 2


@dataclass(frozen=True)
class Box:
    """Axis-aligned box; (x, z) is the footprint center and y is the base height."""
    name: str
    w: float
    h: float
    d: float
    x: float
    y: float
    z: float


def layer_index(layer: str) -> int:
    """
    Zero-based layer ordinal from the trailing number of the label
    ("Layer 3" -> 2). Unparsable labels map to the first layer.
    """
    match = _TRAILING_DIGITS.search(str(layer or ""))
    if not match:
        return 0
    return max(int(match.group(1)) - 1, 0)


def layer_height(layer: str) -> float:
    return layer_index(layer) * LAYER_SPACING_M + LAYER_OFFSET_M


def place_point(
    point: DeployedPoint,
    default_unit: str = DEFAULT_DISTANCE_UNIT
) -> Optional[Placement]:
    """
    Polar-to-Cartesian placement of one point.
    Returns None if the angle or distance does not parse or the distance is not positive.
    """
    angle = point.reading.angle
    radius = to_meters(point.reading.distance, default_unit)
    if not math.isfinite(angle) or radius is None or radius <= 0:
        return None

    theta = deg2rad(angle)
    return Placement(
        x=float(np.cos(theta) * radius),
        y=layer_height(point.reading.layer),
        z=float(np.sin(theta) * radius),
    )


def room_bounds(
    placements: Iterable[Placement],
    margin: float = ROOM_MARGIN_M
) -> RoomBounds:
    """
    Running min/max of x and z across all placements, expanded by the margin.
    Extents start at the origin, so the survey device is always inside the room.
    """
    xz = np.array([(p.x, p.z) for p in placements], dtype=float).reshape(-1, 2)
    north = float(np.max(xz[:, 1], initial=0.0))
    south = float(np.min(xz[:, 1], initial=0.0))
    east = float(np.max(xz[:, 0], initial=0.0))
    west = float(np.min(xz[:, 0], initial=0.0))

    return RoomBounds(
        north=north + margin,
        south=south - margin,
        east=east + margin,
        west=west - margin,
    )


def map_points(
    points: Iterable[DeployedPoint],
    default_unit: str = DEFAULT_DISTANCE_UNIT
) -> Tuple[Dict[str, Placement], RoomBounds]:
    """Place every valid point and compute the room bounds. Invalid points are skipped."""
    placements: Dict[str, Placement] = {}
    skipped = 0
    for point in points:
        placement = place_point(point, default_unit)
        if placement is None:
            skipped += 1
            logger.debug(f"Skipping point '{point.key}': no valid angle/distance.")
            continue
        placements[point.key] = placement

    if skipped:
        logger.info(f"{skipped} point(s) excluded from placement.")

    return placements, room_bounds(placements.values())


def room_layout(
    bounds: RoomBounds,
    wall_height: float = WALL_HEIGHT_M,
    wall_thickness: float = WALL_THICKNESS_M
) -> List[Box]:
    """
    Walls and furniture derived from the room bounds.
    Walls stand on the floor along each bound; furniture is placed relative to
    the room center and the walls.
    """
    cx, cz = bounds.center
    width, depth = bounds.width, bounds.depth

    walls = [
        Box("wall_north", width, wall_height, wall_thickness, cx, 0.0, bounds.north),
        Box("wall_south", width, wall_height, wall_thickness, cx, 0.0, bounds.south),
        Box("wall_east", wall_thickness, wall_height, depth, bounds.east, 0.0, cz),
        Box("wall_west", wall_thickness, wall_height, depth, bounds.west, 0.0, cz),
    ]

    furniture = [
        Box("chair", 0.45, 0.9, 0.45, cx - 0.8, 0.0, bounds.south + 0.35),
        Box("cabinet", 0.6, 1.4, 0.45, bounds.east - 0.35, 0.0, cz - 0.6),
        Box("bench", 1.2, 0.4, 0.45, bounds.west + 0.6, 0.0, cz + 0.5),
        Box("desk", 0.8, 0.6, 0.5, cx + 0.7, 0.0, bounds.north - 0.4),
    ]

    return walls + furniture
