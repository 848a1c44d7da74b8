"""
Data quality error classifications for constituents table processing.

These exceptions categorize the problems that can be found in the published
CSV: missing or malformed structure, unparseable numeric fields and values
that are outside the domain of the weighting arithmetic.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for problems with the input table."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data


class MissingColumnError(MalformedDataError):
    """Header row lacks one or more required columns."""

    def __init__(self, message: str, missing_roles: Optional[list] = None,
                 expected_labels: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing_roles = missing_roles or []
        self.expected_labels = expected_labels or []


class RowShapeError(MalformedDataError):
    """Data row field count does not match the header."""

    def __init__(self, message: str, row_number: Optional[int] = None,
                 expected_fields: Optional[int] = None,
                 actual_fields: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.row_number = row_number
        self.expected_fields = expected_fields
        self.actual_fields = actual_fields


class DuplicateSymbolError(MalformedDataError):
    """The same symbol appears on more than one row."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 first_row: Optional[int] = None,
                 duplicate_row: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.first_row = first_row
        self.duplicate_row = duplicate_row


class FieldParseError(DataQualityError):
    """A numeric field could not be parsed."""

    def __init__(self, message: str, row_number: Optional[int] = None,
                 field: Optional[str] = None, raw_value: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.row_number = row_number
        self.field = field
        self.raw_value = raw_value


class InvalidPriceError(FieldParseError):
    """Price field is not a finite decimal number."""
    pass


class InvalidMarketCapError(FieldParseError):
    """Market Cap field is not a finite decimal number."""
    pass


class DomainViolationError(DataQualityError):
    """Value is outside the domain of the weighting arithmetic."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[float] = None, symbol: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.symbol = symbol
