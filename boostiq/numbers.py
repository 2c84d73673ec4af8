"""Number helpers that reproduce JavaScript ``Math.round`` and number output."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int | float:
    """Round like JavaScript's ``Math.round`` (halves go towards +inf).

    Non-finite values come back unchanged.
    """
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def format_number(value: int | float) -> str:
    """Render a number the way JavaScript stringifies it."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        return repr(float(value))
    return str(value)
