"""
Distance Unit Conversion
========================
Survey distances arrive as bare numbers or as strings with a unit suffix
("120 cm", "1.2 m", "4500 mm"). Everything downstream works in meters.

A value without a suffix is read in DEFAULT_DISTANCE_UNIT (centimeters),
matching how the source sheets are recorded.
"""
import math
import re
from typing import Optional

from acousticzones.config import DEFAULT_DISTANCE_UNIT, UNIT_DIVISORS

_NON_NUMERIC = re.compile(r"[^\d.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


def parse_magnitude(value: object) -> Optional[float]:
    """
    Read the magnitude of a distance. Numbers are taken as they are; strings are
    stripped of everything but digits, '.' and '-' and the leading number is read.
    Returns None if nothing numeric remains or the value is not finite.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    cleaned = _NON_NUMERIC.sub("", str(value).strip())
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def to_meters(value: object, default_unit: str = DEFAULT_DISTANCE_UNIT) -> Optional[float]:
    """
    Convert a distance with an optional unit suffix into meters.

    Unit resolution is by substring, in order: "cm", "mm", "m".
    Returns None when the value cannot be parsed.
    """
    number = parse_magnitude(value)
    if number is None:
        return None
    if isinstance(value, (int, float)):
        return number / UNIT_DIVISORS[default_unit]

    lower = str(value).strip().lower()
    if "cm" in lower:
        return number / UNIT_DIVISORS["cm"]
    if "mm" in lower:
        return number / UNIT_DIVISORS["mm"]
    if "m" in lower:
        return number

    return number / UNIT_DIVISORS[default_unit]
