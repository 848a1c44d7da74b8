"""Data models for weighting and allocation results"""

import math
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ..data.models import Equity


class WeightTable(Mapping):
    """
    Relative weight per equity, max_market_cap / market_cap.

    Read-only mapping keyed by Equity; iteration follows decode order.
    """

    def __init__(self, weights: Mapping[Equity, float], max_market_cap: float):
        self._weights = MappingProxyType(dict(weights))
        self.max_market_cap = max_market_cap

    def __getitem__(self, equity: Equity) -> float:
        return self._weights[equity]

    def __iter__(self) -> Iterator[Equity]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"WeightTable({len(self)} equities, max_market_cap={self.max_market_cap!r})"

    def by_symbol(self) -> dict[str, float]:
        """Weights keyed by symbol."""
        return {equity.symbol: weight for equity, weight in self._weights.items()}


class AllocationTable(Mapping):
    """
    Integer share count per equity for a target budget.

    ``multiple`` is target_budget / min_budget, the number of index units
    bought. Rounding means realized_cost() drifts from target_budget; the
    drift is reported, never corrected.
    """

    def __init__(self, shares: Mapping[Equity, int], target_budget: float,
                 min_budget: float, multiple: float):
        self._shares = MappingProxyType(dict(shares))
        self.target_budget = target_budget
        self.min_budget = min_budget
        self.multiple = multiple

    def __getitem__(self, equity: Equity) -> int:
        return self._shares[equity]

    def __iter__(self) -> Iterator[Equity]:
        return iter(self._shares)

    def __len__(self) -> int:
        return len(self._shares)

    def __repr__(self) -> str:
        return (f"AllocationTable({len(self)} equities, target_budget={self.target_budget!r}, "
                f"multiple={self.multiple!r})")

    def by_symbol(self) -> dict[str, int]:
        """Share counts keyed by symbol."""
        return {equity.symbol: shares for equity, shares in self._shares.items()}

    def realized_cost(self) -> float:
        """Cost of buying every allocated share at its listed price."""
        return math.fsum(equity.price * shares for equity, shares in self._shares.items())

    def drift(self) -> float:
        """Target budget minus realized cost; positive means unspent cash."""
        return self.target_budget - self.realized_cost()
