"""
Survey Readings
===============
Defines the typed shape of a single acoustic survey reading and the deployed
point built from it.

Why is this file needed?
------------------------
1. Ingestion Boundary: Rows arrive from spreadsheets as loose string dicts.
   `normalize_row` coerces them once into a strict `Reading`; the rest of the
   engine only ever sees typed readings.
2. Identity: `make_point_key` gives every deployed reading a deterministic,
   unique key, even when two sensors report identical values.
3. Table Tools: Search and sort filters over raw rows, used before deploying.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from acousticzones.model.zones import Zone, classify_zone

logger = logging.getLogger(__name__)

DEFAULT_LAYER = "Layer 1"

# Raw row columns as they appear in the survey sheets
RAW_FIELDS = ("angle", "db", "ultrasonic", "rt60", "classification", "layer")

Distance = Union[float, str]


@dataclass(frozen=True)
class Reading:
    """
    One acoustic measurement.

    `distance` keeps its raw form (number or string with a unit suffix);
    unit resolution happens in `acousticzones.model.units`.
    """
    angle: float                # degrees
    decibel: float
    distance: Distance
    reverberation: float
    classification_label: str
    layer: str = DEFAULT_LAYER

    @property
    def zone(self) -> Zone:
        return classify_zone(self.classification_label)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the raw row layout."""
        return {
            "angle": _format_number(self.angle),
            "db": _format_number(self.decibel),
            "ultrasonic": _format_number(self.distance),
            "rt60": _format_number(self.reverberation),
            "classification": self.classification_label,
            "layer": self.layer,
        }


@dataclass(frozen=True)
class DeployedPoint:
    key: str
    reading: Reading
    zone: Zone
    index: int


def _to_float(value: Any) -> float:
    """Numeric coercion; NaN marks a value that failed to parse."""
    if value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(",", ".")
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def _format_number(value: Any) -> str:
    """Render numbers without a trailing '.0' and NaN as an empty string."""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if value is None:
        return ""
    return str(value).strip()


def _raw_distance(value: Any) -> Distance:
    """Keep unit suffixes intact; bare numerics become floats."""
    if isinstance(value, (int, float)):
        return float(value)
    text = "" if value is None else str(value).strip()
    try:
        return float(text)
    except ValueError:
        return text


def _is_empty(value: Any) -> bool:
    return value is None or not str(value).strip()


def is_blank_row(row: Mapping[str, Any]) -> bool:
    """A row with neither an angle nor a decibel value carries no reading."""
    return _is_empty(row.get("angle")) and _is_empty(row.get("db"))


def normalize_row(row: Mapping[str, Any]) -> Reading:
    """Coerce a raw survey row into a Reading."""
    classification = re.sub(r"\s+", "", str(row.get("classification") or "")).lower()
    layer = str(row.get("layer") or "").strip() or DEFAULT_LAYER
    return Reading(
        angle=_to_float(row.get("angle")),
        decibel=_to_float(row.get("db")),
        distance=_raw_distance(row.get("ultrasonic")),
        reverberation=_to_float(row.get("rt60")),
        classification_label=classification,
        layer=layer,
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> List[Reading]:
    """Normalize every non-blank row."""
    readings = [normalize_row(r) for r in rows if not is_blank_row(r)]
    logger.debug(f"Normalized {len(readings)} readings.")
    return readings


def make_point_key(reading: Reading, index: int) -> str:
    """
    Deterministic key from layer, angle, distance and ordinal index.
    The index keeps duplicate sensor values apart.
    """
    layer = reading.layer or DEFAULT_LAYER
    return f"{layer}__{_format_number(reading.angle)}__{_format_number(reading.distance)}__{index}"


def deploy_readings(readings: Sequence[Reading]) -> tuple[DeployedPoint, ...]:
    """Build the full deployed point set for one deployment batch."""
    return tuple(
        DeployedPoint(
            key=make_point_key(reading, index),
            reading=reading,
            zone=reading.zone,
            index=index,
        )
        for index, reading in enumerate(readings)
    )


# ------------------------------------------------------------------------------
# Table search / sort
# ------------------------------------------------------------------------------
def search_rows(rows: Sequence[Mapping[str, Any]], query: str) -> List[Mapping[str, Any]]:
    """Case-insensitive substring search across all fields of each row."""
    if not query:
        return list(rows)
    needle = query.lower()
    return [
        row for row in rows
        if any(needle in str(v).lower() for v in row.values())
    ]


def filter_rows(rows: Sequence[Mapping[str, Any]], option: str) -> List[Mapping[str, Any]]:
    """
    Sort-menu filter: "HOTSPOT", "DEADSPOT", "Layer N", anything else keeps all.
    """
    def compact(row: Mapping[str, Any]) -> str:
        return re.sub(r"\s+", "", str(row.get("classification") or "")).lower()

    if option == "HOTSPOT":
        return [r for r in rows if compact(r) == Zone.HOTSPOT.value]
    if option == "DEADSPOT":
        return [r for r in rows if compact(r) == Zone.DEADSPOT.value]
    if option.startswith("Layer"):
        return [r for r in rows if r.get("layer") == option]
    return list(rows)
