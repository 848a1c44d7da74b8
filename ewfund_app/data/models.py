"""
Canonical data models for decoded constituents data.

This module defines immutable data structures that represent clean, validated
rows of the constituents table after decoding from raw CSV text.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Equity:
    """One index constituent. Equal and hashable by value, usable as a mapping key."""
    symbol: str          # Ticker symbol
    name: str            # Display name
    sector: str          # Sector classification
    price: float         # Share price, 32-bit precision
    market_cap: float    # Market capitalization, 64-bit precision


@dataclass(frozen=True)
class ColumnMap:
    """Resolved header positions for each logical column role."""
    symbol: int
    name: int
    sector: int
    price: int
    market_cap: int
    width: int           # Number of columns in the header


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding a constituents table."""
    equities: tuple[Equity, ...]
    max_market_cap: float
    skipped_rows: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.equities)
