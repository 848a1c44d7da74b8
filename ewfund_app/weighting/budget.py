"""Minimum budget calculation"""

import math

from ..data.validators import require_positive_finite
from ..errors import DomainViolationError
from ..models.tables import WeightTable


def minimum_budget(weights: WeightTable) -> float:
    """
    Cost of one index unit: weight(e) shares of every equity e

    min_budget = sum(price * weight)

    math.fsum keeps the result independent of iteration order.

    Args:
        weights: Relative weights per equity

    Returns:
        Positive finite budget

    Raises:
        DomainViolationError: If the table is empty, a price is not
            positive and finite, or the sum overflows
    """
    if not weights:
        raise DomainViolationError(
            "Cannot compute a minimum budget for an empty weight table",
            field="min_budget",
            value=0.0
        )

    costs = []
    for equity, weight in weights.items():
        require_positive_finite(equity.price, "price", equity.symbol)
        costs.append(equity.price * weight)

    total = math.fsum(costs)
    return require_positive_finite(total, "min_budget")
