"""
System failure error classifications.

These exceptions represent failures outside the input data itself: the data
source could not be read, a calculation failed unexpectedly, or the run was
configured with invalid parameters.
"""

from typing import Optional, Dict, Any

from .recovery import RecoverableError


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class SourceUnavailableError(SystemFailureError):
    """The constituents table could not be obtained."""

    def __init__(self, message: str, source: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.status_code = status_code


class TransientSourceError(SourceUnavailableError, RecoverableError):
    """Source failure that may succeed on another attempt (network, 5xx)."""

    def __init__(self, message: str, source: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        SourceUnavailableError.__init__(self, message, source=source,
                                        status_code=status_code, **kwargs)
        self.recoverable = True


class AllocationCalculationError(SystemFailureError):
    """Unexpected failure while computing weights, budget or shares."""

    def __init__(self, message: str, stage: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.stage = stage
        self.calculation_input = calculation_input


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
