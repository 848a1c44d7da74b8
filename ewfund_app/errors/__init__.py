"""
Error classification for the index fund allocator.

This module provides a structured exception hierarchy for the errors that can
end a run: problems with the published constituents table, domain violations
in the weighting arithmetic, and system-level failures such as an unreachable
data source.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    MissingColumnError,
    RowShapeError,
    DuplicateSymbolError,
    FieldParseError,
    InvalidPriceError,
    InvalidMarketCapError,
    DomainViolationError,
)
from .system_failures import (
    SystemFailureError,
    SourceUnavailableError,
    TransientSourceError,
    AllocationCalculationError,
    ConfigurationError,
)
from .recovery import (
    RecoverableError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "MissingColumnError",
    "RowShapeError",
    "DuplicateSymbolError",
    "FieldParseError",
    "InvalidPriceError",
    "InvalidMarketCapError",
    "DomainViolationError",
    # System Failures
    "SystemFailureError",
    "SourceUnavailableError",
    "TransientSourceError",
    "AllocationCalculationError",
    "ConfigurationError",
    # Recovery Categories
    "RecoverableError",
]
