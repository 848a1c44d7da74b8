"""
Domain validation for values entering the weighting arithmetic.

Every division and product in the allocation pipeline is guarded here so
that zero, negative or non-finite inputs surface as explicit errors instead
of NaN or infinite results.
"""

import math
from typing import Optional

from ..errors import DomainViolationError


def require_positive_finite(value: float, field: str, symbol: Optional[str] = None) -> float:
    """
    Validate that a value is a positive finite number.

    Args:
        value: Value to check
        field: Name of the field the value belongs to
        symbol: Symbol of the equity the value belongs to, if any

    Returns:
        The value, unchanged

    Raises:
        DomainViolationError: If the value is zero, negative, NaN or infinite
    """
    if not math.isfinite(value) or value <= 0:
        owner = f" for {symbol}" if symbol else ""
        raise DomainViolationError(
            f"{field} must be a positive finite number{owner}, got {value!r}",
            field=field,
            value=value,
            symbol=symbol,
            context={"field": field, "value": value, "symbol": symbol}
        )
    return value