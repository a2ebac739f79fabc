"""Tests for the studio-standard room size check."""
import pytest

from acousticzones.config import EngineSettings
from acousticzones.model.readings import deploy_readings
from acousticzones.model.room import check_room_size

from conftest import make_reading


def _points(*distances):
    return deploy_readings([make_reading(distance=d) for d in distances])


def test_upper_boundary_is_inclusive():
    result = check_room_size(_points(250))
    assert result.estimated_meters == pytest.approx(5.0)
    assert result.ok is True


def test_lower_boundary_is_inclusive():
    result = check_room_size(_points("1.5 m"))
    assert result.estimated_meters == pytest.approx(3.0)
    assert result.ok is True


def test_too_small_room():
    result = check_room_size(_points(100))
    assert result.estimated_meters == pytest.approx(2.0)
    assert result.ok is False
    assert "2m" in result.reason
    assert result.reason.startswith("Not studio standard")


def test_too_large_room():
    result = check_room_size(_points("3 m", 120))
    assert result.estimated_meters == pytest.approx(6.0)
    assert result.ok is False
    assert "~6m" in result.reason


def test_uses_farthest_point(scenario_points):
    result = check_room_size(scenario_points)
    assert result.estimated_meters == pytest.approx(4.0)
    assert result.ok is True
    assert result.reason.startswith("Studio standard detected")


def test_parse_failures_and_non_positive_are_ignored():
    result = check_room_size(_points("n/a", 0, -50, 200))
    assert result.estimated_meters == pytest.approx(4.0)
    assert result.ok is True


def test_no_valid_distances():
    result = check_room_size(_points("", "abc", 0))
    assert result.ok is False
    assert result.estimated_meters is None
    assert "no valid distance values" in result.reason.lower()


def test_no_points():
    result = check_room_size([])
    assert result.ok is False
    assert result.estimated_meters is None


def test_custom_range():
    settings = EngineSettings(studio_min_m=1.0, studio_max_m=2.0)
    assert check_room_size(_points(100), settings).ok is True


def test_large_estimate_is_reported_in_full():
    result = check_room_size(_points("61728.39 m"))
    assert result.estimated_meters == pytest.approx(123456.78)
    assert "~123456.78m" in result.reason
