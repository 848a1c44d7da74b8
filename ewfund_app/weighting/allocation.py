"""Share allocation for a target portfolio budget"""

from ..data.models import Equity
from ..data.validators import require_positive_finite
from ..models.tables import AllocationTable, WeightTable
from ..utils.rounding import round_half_away_from_zero


def allocate_shares(target_budget: float, min_budget: float, weights: WeightTable) -> AllocationTable:
    """
    Scale weights into integer share counts

    multiple = target_budget / min_budget
    shares = round(weight * multiple), ties away from zero

    The realized cost drifts from target_budget because of rounding.

    Args:
        target_budget: Total portfolio size to approximate
        min_budget: Cost of one index unit
        weights: Relative weights per equity

    Returns:
        AllocationTable in weight table order

    Raises:
        DomainViolationError: If target_budget or min_budget is not
            positive and finite
    """
    require_positive_finite(target_budget, "target_budget")
    require_positive_finite(min_budget, "min_budget")

    multiple = target_budget / min_budget

    shares: dict[Equity, int] = {}
    for equity, weight in weights.items():
        shares[equity] = round_half_away_from_zero(weight * multiple)

    return AllocationTable(
        shares,
        target_budget=target_budget,
        min_budget=min_budget,
        multiple=multiple,
    )
