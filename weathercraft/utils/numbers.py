"""Number formatting helpers shared by the engines."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2).

    Python's round() uses banker's rounding, which would make reason strings
    and confidences flip on exact halves.
    """
    return int(math.floor(value + 0.5))


def fmt_number(value: float) -> str:
    """Render integral floats without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
