"""
Configuration & Constants
=========================
This module serves as the central registry for file paths and for the
numeric conventions of the acoustic zone engine.

Why is this file needed?
------------------------
1. Visibility: Conventions such as "a distance without a unit is in
   centimeters" or "three treatments satisfy a point" live here as named
   constants instead of literals scattered through the model.
2. Tuning: The values the engine may be asked to vary (decay base,
   satisfaction threshold, default severity) are bundled in EngineSettings,
   which is passed explicitly to the state reducer.
3. Deployment: It resolves the assets directory for development and for
   PyInstaller builds (sys._MEIPASS).

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_SURVEY_PATH (str): Absolute path to the bundled sample survey.
    EngineSettings: Tunable engine parameters.
"""
import sys
import os
from dataclasses import dataclass
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/acousticzones/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_SURVEY_PATH: str = os.path.join(ASSETS_PATH, "sample_survey.csv")

# Studio standard (estimated room diameter, meters)
STUDIO_MIN_M: float = 3.0
STUDIO_MAX_M: float = 5.0

# Distances
# Source sheets are recorded in centimeters, so a bare number is read as cm.
DEFAULT_DISTANCE_UNIT: str = "cm"
# Divisor taking a value in the given unit to meters.
UNIT_DIVISORS: dict[str, float] = {"cm": 100.0, "mm": 1000.0, "m": 1.0}

# Spatial layout (meters)
LAYER_SPACING_M: float = 0.45
LAYER_OFFSET_M: float = 0.3
ROOM_MARGIN_M: float = 0.3
WALL_HEIGHT_M: float = 4.0
WALL_THICKNESS_M: float = 0.12

# Treatment model
DEFAULT_SEVERITY: int = 70
DIMINISH_BASE: float = 0.7
SATISFIED_THRESHOLD: int = 3

# Presentation hints
SELECTED_SCALE: float = 1.35


@dataclass(frozen=True)
class EngineSettings:
    """Tunable parameters of the treatment model and room validation."""
    default_severity: int = DEFAULT_SEVERITY
    diminish_base: float = DIMINISH_BASE
    satisfied_threshold: int = SATISFIED_THRESHOLD
    studio_min_m: float = STUDIO_MIN_M
    studio_max_m: float = STUDIO_MAX_M
    default_distance_unit: str = DEFAULT_DISTANCE_UNIT

    def __post_init__(self) -> None:
        if self.default_distance_unit not in UNIT_DIVISORS:
            raise ValueError(f"Unknown distance unit: {self.default_distance_unit!r}")
        if not 0.0 < self.diminish_base <= 1.0:
            raise ValueError(f"diminish_base must be in (0, 1], got {self.diminish_base}")
        if self.satisfied_threshold < 1:
            raise ValueError(f"satisfied_threshold must be >= 1, got {self.satisfied_threshold}")


DEFAULT_SETTINGS = EngineSettings()
