"""Rounding policy for share counts."""

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_away_from_zero(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    The float is converted to Decimal exactly, so only values whose binary
    representation is an exact tie are rounded outward. Python's built-in
    round() rounds ties to even and is not used for share counts.

    Raises:
        ValueError: If value is NaN or infinite
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value!r}")
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))
