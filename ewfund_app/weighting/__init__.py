"""Weighting engine: relative weights, minimum budget and share allocation"""

from .allocation import allocate_shares
from .budget import minimum_budget
from .calculator import IndexCalculator, IndexSnapshot
from .weights import compute_relative_weights, max_market_cap

__all__ = [
    "IndexCalculator",
    "IndexSnapshot",
    "allocate_shares",
    "compute_relative_weights",
    "max_market_cap",
    "minimum_budget",
]
