"""Equal market weight calculations"""

from collections.abc import Iterable

from ..data.models import Equity
from ..data.validators import require_positive_finite
from ..models.tables import WeightTable


def max_market_cap(equities: Iterable[Equity]) -> float:
    """Largest market capitalization in the set, 0.0 when empty."""
    return max((equity.market_cap for equity in equities), default=0.0)


def compute_relative_weights(equities: Iterable[Equity], max_cap: float) -> WeightTable:
    """
    Calculate the relative weight of every equity

    weight = max_cap / market_cap

    The equity holding the largest cap gets exactly 1.0, smaller companies
    get proportionally more weight.

    Args:
        equities: Decoded equities
        max_cap: Largest market cap in the set

    Returns:
        WeightTable in input order

    Raises:
        DomainViolationError: If max_cap or any market cap is not positive
            and finite. An empty decode (max_cap 0.0) lands here too.
    """
    require_positive_finite(max_cap, "max_market_cap")

    weights: dict[Equity, float] = {}
    for equity in equities:
        require_positive_finite(equity.market_cap, "market_cap", equity.symbol)
        weights[equity] = max_cap / equity.market_cap

    return WeightTable(weights, max_market_cap=max_cap)
