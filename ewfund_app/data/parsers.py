"""
Constituents table parsers for converting raw CSV text to equity records.

This module resolves the header row to logical column roles by exact name
matching, independent of column order, and decodes every data row into an
immutable Equity while tracking the largest market capitalization seen.
"""

import csv
import io
import math
import struct
from collections.abc import Iterable, Iterator, Sequence
from typing import Optional

import structlog

from ..config.defaults import ColumnLabels
from ..errors import (
    DuplicateSymbolError,
    FieldParseError,
    InvalidMarketCapError,
    InvalidPriceError,
    MissingColumnError,
    MissingDataError,
    RowShapeError,
)
from .models import ColumnMap, DecodeResult, Equity

logger = structlog.get_logger(__name__)

ROLES = ("symbol", "name", "sector", "price", "market_cap")

ABORT = "abort"
SKIP = "skip"

_UTF8_BOM = "\ufeff"


def read_csv_rows(text: str) -> Iterator[list[str]]:
    """
    Tokenise CSV text into rows of string fields.

    Blank lines are dropped and a leading UTF-8 byte order mark is removed.
    """
    if text.startswith(_UTF8_BOM):
        text = text[len(_UTF8_BOM):]

    for row in csv.reader(io.StringIO(text)):
        if row:
            yield row


def resolve_columns(header: Sequence[str], labels: ColumnLabels = ColumnLabels()) -> ColumnMap:
    """
    Map header labels to positional indexes for each column role.

    Args:
        header: Header row, one column name per cell
        labels: Expected header label for each role

    Returns:
        ColumnMap with an index for every role

    Raises:
        MissingColumnError: If any role has no matching column
    """
    wanted = {getattr(labels, role): role for role in ROLES}
    positions: dict[str, Optional[int]] = dict.fromkeys(ROLES)

    for index, value in enumerate(header):
        role = wanted.get(value)
        if role is not None and positions[role] is None:
            positions[role] = index

    missing = [role for role in ROLES if positions[role] is None]
    if missing:
        expected = [getattr(labels, role) for role in missing]
        raise MissingColumnError(
            f"Missing required column(s): {', '.join(expected)}",
            missing_roles=missing,
            expected_labels=expected,
            raw_data=",".join(header),
            context={"header": list(header)}
        )

    return ColumnMap(width=len(header), **positions)


def parse_equity_row(row: Sequence[str], columns: ColumnMap, row_number: int) -> Equity:
    """
    Decode a single data row into an Equity.

    Args:
        row: Data row fields
        columns: Resolved header positions
        row_number: 1-based data row number, used in error messages

    Returns:
        Decoded Equity

    Raises:
        RowShapeError: If the row width differs from the header
        InvalidPriceError: If the price field is not a finite number
        InvalidMarketCapError: If the market cap field is not a finite number
    """
    if len(row) != columns.width:
        raise RowShapeError(
            f"Row {row_number} has {len(row)} fields, header has {columns.width}",
            row_number=row_number,
            expected_fields=columns.width,
            actual_fields=len(row),
            raw_data=",".join(row)
        )

    price = _parse_price(row[columns.price], row_number)
    market_cap = _parse_market_cap(row[columns.market_cap], row_number)

    return Equity(
        symbol=row[columns.symbol],
        name=row[columns.name],
        sector=row[columns.sector],
        price=price,
        market_cap=market_cap,
    )


def decode_table(
    rows: Iterable[Sequence[str]],
    *,
    labels: ColumnLabels = ColumnLabels(),
    malformed_row_policy: str = ABORT
) -> DecodeResult:
    """
    Decode a header plus data rows into equities and the largest market cap.

    Malformed numeric fields are handled by ``malformed_row_policy``:
    ``"abort"`` raises the first FieldParseError, ``"skip"`` logs a warning,
    records the row number in ``skipped_rows`` and moves on. Rows with the
    wrong number of fields and duplicate symbols always abort.

    Args:
        rows: Header row followed by data rows
        labels: Expected header label for each role
        malformed_row_policy: "abort" or "skip"

    Returns:
        DecodeResult; max_market_cap is 0.0 when no row decoded

    Raises:
        MissingDataError: If there is no header row
        MissingColumnError: If a required column is absent
        RowShapeError: If a row width differs from the header
        FieldParseError: On a malformed field under the abort policy
        DuplicateSymbolError: If a symbol occurs twice
    """
    if malformed_row_policy not in (ABORT, SKIP):
        raise ValueError(f"Unknown malformed row policy: {malformed_row_policy!r}")

    iterator = iter(rows)
    header = next(iterator, None)
    if header is None:
        raise MissingDataError("Constituents table is empty, no header row", data_type="header")

    columns = resolve_columns(header, labels)

    equities: list[Equity] = []
    skipped: list[int] = []
    seen: dict[str, int] = {}
    largest = 0.0

    for row_number, row in enumerate(iterator, start=1):
        try:
            equity = parse_equity_row(row, columns, row_number)
        except FieldParseError as e:
            if malformed_row_policy == ABORT:
                raise
            logger.warning(
                "Skipping malformed row",
                row_number=row_number,
                field=e.field,
                raw_value=e.raw_value,
                error=str(e)
            )
            skipped.append(row_number)
            continue

        if equity.symbol in seen:
            raise DuplicateSymbolError(
                f"Symbol {equity.symbol!r} on row {row_number} already appeared on row {seen[equity.symbol]}",
                symbol=equity.symbol,
                first_row=seen[equity.symbol],
                duplicate_row=row_number
            )
        seen[equity.symbol] = row_number

        largest = max(largest, equity.market_cap)
        equities.append(equity)

    logger.debug(
        "Constituents table decoded",
        equities=len(equities),
        skipped_rows=len(skipped),
        max_market_cap=largest
    )

    return DecodeResult(
        equities=tuple(equities),
        max_market_cap=largest,
        skipped_rows=tuple(skipped),
    )


def decode_csv_text(
    text: str,
    *,
    labels: ColumnLabels = ColumnLabels(),
    malformed_row_policy: str = ABORT
) -> DecodeResult:
    """Tokenise and decode a complete constituents CSV document."""
    return decode_table(
        read_csv_rows(text),
        labels=labels,
        malformed_row_policy=malformed_row_policy,
    )


def _parse_price(raw: str, row_number: int) -> float:
    """
    Parse a price and narrow it to 32-bit float precision.

    Values that overflow to infinity or underflow to zero once narrowed are
    parse failures, the same as text that is not a number.
    """
    try:
        value = float(raw)
        narrowed = struct.unpack("f", struct.pack("f", value))[0]
        if not math.isfinite(narrowed):
            raise ValueError("not a finite single precision number")
        if narrowed == 0.0 and value != 0.0:
            raise ValueError("underflows single precision")
        return narrowed
    except (ValueError, OverflowError) as e:
        raise InvalidPriceError(
            f"Invalid Price {raw!r} on row {row_number}: {e}",
            row_number=row_number,
            field="price",
            raw_value=raw
        )


def _parse_market_cap(raw: str, row_number: int) -> float:
    """Parse a market capitalization at full 64-bit precision."""
    try:
        value = float(raw)
        if not math.isfinite(value):
            raise ValueError("not a finite number")
        return value
    except ValueError as e:
        raise InvalidMarketCapError(
            f"Invalid Market Cap {raw!r} on row {row_number}: {e}",
            row_number=row_number,
            field="market_cap",
            raw_value=raw
        )
