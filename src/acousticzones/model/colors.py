"""
Color Model
===========
Derives the display color of a survey point from its zone, its treatment
effect, the before/after toggle and its satisfied status.

Colors are 8-bit RGB triples; blending is channel-wise linear interpolation.
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from acousticzones.model.effects import PointEffect
from acousticzones.model.zones import RESOLVED_COLOR, RGB, ZONE_COLORS, Zone
from acousticzones.utils import round_half_up


def hex_to_rgb(value: str) -> RGB:
    text = value.lstrip("#")
    if len(text) != 6:
        raise ValueError(f"Expected #RRGGBB, got '{value}'")
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def blend_color(start: Sequence[int], end: Sequence[int], t: float) -> RGB:
    """Linear interpolation start -> end at t, rounded half up per channel."""
    a = np.asarray(start, dtype=float)
    b = np.asarray(end, dtype=float)
    r, g, bl = (round_half_up(c) for c in a + (b - a) * t)
    return r, g, bl


def display_color(
    zone: Zone,
    effect: Optional[PointEffect],
    show_after: bool,
    satisfied: bool
) -> RGB:
    """
    1. satisfied               -> resolved color
    2. "before" mode           -> base zone color
    3. nothing applied yet     -> base zone color
    4. otherwise               -> neutral..base blend by severity/100
    """
    base = ZONE_COLORS[zone]
    if satisfied:
        return RESOLVED_COLOR
    if not show_after:
        return base
    if effect is None or not effect.applied:
        return base

    t = min(max(effect.severity / 100, 0.0), 1.0)
    return blend_color(ZONE_COLORS[Zone.NEUTRAL], base, t)
