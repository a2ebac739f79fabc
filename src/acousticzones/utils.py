import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (24.5 -> 25, -0.5 -> 0)."""
    # Snap float noise first so 24.499999999999996 still counts as a half.
    return int(math.floor(round(value, 9) + 0.5))

def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))
