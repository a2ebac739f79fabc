import pytest

from acousticzones.model.readings import Reading, deploy_readings


def make_reading(angle=0.0, distance="200", classification="neutral", layer="Layer 1"):
    return Reading(
        angle=angle,
        decibel=60.0,
        distance=distance,
        reverberation=400.0,
        classification_label=classification,
        layer=layer,
    )


@pytest.fixture
def scenario_readings():
    """Two points: a hotspot at 90° / 200 cm on layer 1 and a deadspot at 180° / 120 on layer 2."""
    return [
        make_reading(angle=90.0, distance="200cm", classification="Hot Spot", layer="Layer 1"),
        make_reading(angle=180.0, distance="120", classification="Dead Spot", layer="Layer 2"),
    ]


@pytest.fixture
def scenario_points(scenario_readings):
    return deploy_readings(scenario_readings)
