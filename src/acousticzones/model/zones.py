"""
Zone Classification
===================
Maps free-text classification labels from the survey sheets onto the three
canonical zones, and holds the zone palette used by the color model.
"""
from enum import StrEnum
from typing import Dict, Tuple

RGB = Tuple[int, int, int]


class Zone(StrEnum):
    HOTSPOT = "hotspot"
    DEADSPOT = "deadspot"
    NEUTRAL = "neutral"


# Base display colors (8-bit RGB)
ZONE_COLORS: Dict[Zone, RGB] = {
    Zone.HOTSPOT: (0xB2, 0x22, 0x22),   # dark red
    Zone.DEADSPOT: (0x42, 0x92, 0xC6),  # blue
    Zone.NEUTRAL: (0x2A, 0x9D, 0x8F),   # teal
}
RESOLVED_COLOR: RGB = (0xFF, 0xFF, 0xFF)


def classify_zone(label: object) -> Zone:
    """
    Classify a raw label. First match wins: "hot" -> hotspot,
    "dead" -> deadspot, anything else (including None/empty) -> neutral.

    Classifying an already canonical zone returns the same zone.
    """
    text = str(label or "").lower()
    if "hot" in text:
        return Zone.HOTSPOT
    if "dead" in text:
        return Zone.DEADSPOT
    return Zone.NEUTRAL


def pretty_zone(label: object) -> str:
    """Upper-case display label for a zone or raw classification ('—' if empty)."""
    if not label:
        return "—"
    return classify_zone(label).value.upper()
