"""Tests for spatial placement and room geometry."""
import math

import pytest

from acousticzones.config import LAYER_OFFSET_M, LAYER_SPACING_M, ROOM_MARGIN_M, WALL_HEIGHT_M
from acousticzones.model.geometry_utils import (
    Placement, layer_height, layer_index, map_points, place_point, room_bounds, room_layout,
)
from acousticzones.model.readings import deploy_readings

from conftest import make_reading


@pytest.mark.parametrize("label, index", [
    ("Layer 1", 0),
    ("Layer 2", 1),
    ("Layer 4", 3),
    ("layer12", 11),
    ("", 0),
    ("Top", 0),
    ("Layer 0", 0),
])
def test_layer_index(label, index):
    assert layer_index(label) == index


def test_layer_height():
    assert layer_height("Layer 1") == pytest.approx(LAYER_OFFSET_M)
    assert layer_height("Layer 3") == pytest.approx(2 * LAYER_SPACING_M + LAYER_OFFSET_M)


def test_scenario_placements(scenario_points):
    p1 = place_point(scenario_points[0])
    assert p1.x == pytest.approx(0.0, abs=1e-9)
    assert p1.z == pytest.approx(2.0)
    assert p1.y == pytest.approx(LAYER_OFFSET_M)

    p2 = place_point(scenario_points[1])
    assert p2.x == pytest.approx(-1.2)
    assert p2.z == pytest.approx(0.0, abs=1e-9)
    assert p2.y == pytest.approx(LAYER_SPACING_M + LAYER_OFFSET_M)


@pytest.mark.parametrize("angle, distance", [
    (math.nan, "200"),
    (math.inf, "200"),
    (45.0, ""),
    (45.0, "abc"),
    (45.0, 0),
    (45.0, "-30 cm"),
])
def test_invalid_points_are_not_placed(angle, distance):
    (point,) = deploy_readings([make_reading(angle=angle, distance=distance)])
    assert place_point(point) is None


def test_excluded_points_do_not_affect_bounds():
    points = deploy_readings([
        make_reading(angle=0.0, distance="100"),
        make_reading(angle=math.nan, distance="900"),
        make_reading(angle=0.0, distance="-500"),
    ])
    placements, bounds = map_points(points)
    assert list(placements) == [points[0].key]
    assert bounds.east == pytest.approx(1.0 + ROOM_MARGIN_M)
    assert bounds.west == pytest.approx(-ROOM_MARGIN_M)


def test_room_bounds(scenario_points):
    _, bounds = map_points(scenario_points)
    assert bounds.north == pytest.approx(2.0 + ROOM_MARGIN_M)
    assert bounds.south == pytest.approx(-ROOM_MARGIN_M)
    assert bounds.east == pytest.approx(ROOM_MARGIN_M)
    assert bounds.west == pytest.approx(-1.2 - ROOM_MARGIN_M)
    assert bounds.width == pytest.approx(1.2 + 2 * ROOM_MARGIN_M)
    assert bounds.depth == pytest.approx(2.0 + 2 * ROOM_MARGIN_M)
    cx, cz = bounds.center
    assert cx == pytest.approx(-0.6)
    assert cz == pytest.approx(1.0)


def test_empty_bounds_are_margin_only():
    bounds = room_bounds([])
    assert (bounds.north, bounds.south, bounds.east, bounds.west) == pytest.approx(
        (ROOM_MARGIN_M, -ROOM_MARGIN_M, ROOM_MARGIN_M, -ROOM_MARGIN_M)
    )


def test_room_layout_follows_bounds():
    bounds = room_bounds([Placement(2.0, 0.3, 1.0), Placement(-1.0, 0.3, -2.0)])
    boxes = {b.name: b for b in room_layout(bounds)}

    assert {"wall_north", "wall_south", "wall_east", "wall_west"} <= set(boxes)
    assert boxes["wall_north"].z == pytest.approx(bounds.north)
    assert boxes["wall_south"].z == pytest.approx(bounds.south)
    assert boxes["wall_east"].x == pytest.approx(bounds.east)
    assert boxes["wall_west"].x == pytest.approx(bounds.west)
    assert boxes["wall_north"].w == pytest.approx(bounds.width)
    assert boxes["wall_east"].d == pytest.approx(bounds.depth)
    assert all(b.h == WALL_HEIGHT_M for n, b in boxes.items() if n.startswith("wall_"))

    # furniture stays inside the room
    for name in ("chair", "cabinet", "bench", "desk"):
        box = boxes[name]
        assert bounds.west < box.x < bounds.east
        assert bounds.south < box.z < bounds.north
