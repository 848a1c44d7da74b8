"""Index calculator coordinating weights, minimum budget and allocation"""

from dataclasses import dataclass
from typing import Optional

import structlog

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import DecodeResult
from ..errors import AllocationCalculationError, DomainViolationError
from ..models.tables import AllocationTable, WeightTable
from .allocation import allocate_shares
from .budget import minimum_budget
from .weights import compute_relative_weights

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IndexSnapshot:
    """Weights, minimum budget and allocation computed for one run"""
    weights: WeightTable
    min_budget: float
    allocation: AllocationTable


class IndexCalculator:
    """
    Runs the weighting stages in order on a decoded constituents table
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def calculate(self, decoded: DecodeResult, target_budget: Optional[float] = None) -> IndexSnapshot:
        """
        Compute weights, minimum budget and share allocation

        Args:
            decoded: Output of the table decoder
            target_budget: Portfolio size, configured allocation.target_budget if None

        Returns:
            IndexSnapshot with all three results

        Raises:
            DomainViolationError: If any input is outside the arithmetic domain
            AllocationCalculationError: If a stage fails for any other reason
        """
        if target_budget is None:
            target_budget = self.config.allocation.target_budget

        weights = self._run_stage(
            "weight",
            lambda: compute_relative_weights(decoded.equities, decoded.max_market_cap),
            {"equity_count": len(decoded), "max_market_cap": decoded.max_market_cap}
        )
        logger.info("Relative weights computed", equities=len(weights),
                    max_market_cap=weights.max_market_cap)

        min_budget = self._run_stage(
            "budget",
            lambda: minimum_budget(weights),
            {"equity_count": len(weights)}
        )
        logger.info("Minimum budget computed", min_budget=min_budget)

        allocation = self._run_stage(
            "allocate",
            lambda: allocate_shares(target_budget, min_budget, weights),
            {"target_budget": target_budget, "min_budget": min_budget}
        )
        logger.info(
            "Shares allocated",
            multiple=allocation.multiple,
            realized_cost=allocation.realized_cost(),
            drift=allocation.drift()
        )

        return IndexSnapshot(weights=weights, min_budget=min_budget, allocation=allocation)

    def _run_stage(self, stage, compute, calculation_input):
        try:
            return compute()
        except DomainViolationError:
            raise
        except (ArithmeticError, ValueError, TypeError) as e:
            raise AllocationCalculationError(
                f"{stage} stage failed: {str(e)}",
                stage=stage,
                calculation_input=calculation_input
            ) from e
