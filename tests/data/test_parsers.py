"""Tests for constituents table decoding"""

import struct

import pytest

from ewfund_app.config.defaults import ColumnLabels
from ewfund_app.data.models import ColumnMap, Equity
from ewfund_app.data.parsers import (
    decode_csv_text,
    decode_table,
    parse_equity_row,
    read_csv_rows,
    resolve_columns,
)
from ewfund_app.errors import (
    DuplicateSymbolError,
    FieldParseError,
    InvalidMarketCapError,
    InvalidPriceError,
    MissingColumnError,
    MissingDataError,
    RowShapeError,
)


HEADER = ["Symbol", "Name", "Sector", "Price", "Market Cap"]


class TestResolveColumns:
    """Test header to column role resolution"""

    def test_published_order(self):
        """Test the column order used by the published dataset"""
        columns = resolve_columns(HEADER)

        assert columns == ColumnMap(symbol=0, name=1, sector=2, price=3, market_cap=4, width=5)

    def test_reordered_header(self):
        """Test that resolution does not depend on column order"""
        columns = resolve_columns(["Market Cap", "Symbol", "Price", "Name", "Sector"])

        assert columns.market_cap == 0
        assert columns.symbol == 1
        assert columns.price == 2
        assert columns.name == 3
        assert columns.sector == 4

    def test_extra_columns_ignored(self):
        """Test headers carrying more columns than the five roles"""
        header = ["Symbol", "Name", "Sector", "Price", "Price/Earnings",
                  "Dividend Yield", "Market Cap", "EBITDA"]
        columns = resolve_columns(header)

        assert columns.price == 3
        assert columns.market_cap == 6
        assert columns.width == 8

    def test_missing_market_cap(self):
        """Test that a missing column fails instead of reading column 0"""
        with pytest.raises(MissingColumnError) as exc_info:
            resolve_columns(["Symbol", "Name", "Sector", "Price"])

        assert exc_info.value.missing_roles == ["market_cap"]
        assert exc_info.value.expected_labels == ["Market Cap"]
        assert "Market Cap" in str(exc_info.value)

    def test_all_missing_roles_listed(self):
        """Test that every unresolved role is reported at once"""
        with pytest.raises(MissingColumnError) as exc_info:
            resolve_columns(["Symbol", "Ticker"])

        assert exc_info.value.missing_roles == ["name", "sector", "price", "market_cap"]

    def test_label_match_is_exact(self):
        """Test that labels differing in case or spacing do not match"""
        with pytest.raises(MissingColumnError) as exc_info:
            resolve_columns(["symbol", "Name", "Sector", "Price", "Market Cap "])

        assert exc_info.value.missing_roles == ["symbol", "market_cap"]

    def test_custom_labels(self):
        """Test resolution with configured labels"""
        labels = ColumnLabels(symbol="Ticker", market_cap="MarketCap")
        columns = resolve_columns(["Ticker", "Name", "Sector", "Price", "MarketCap"], labels)

        assert columns.symbol == 0
        assert columns.market_cap == 4


class TestParseEquityRow:
    """Test single row decoding"""

    def test_parse_basic_row(self):
        """Test decoding a well formed row"""
        columns = resolve_columns(HEADER)
        equity = parse_equity_row(["AAA", "Alpha Co", "Tech", "10.0", "1000000"], columns, 1)

        assert equity == Equity(symbol="AAA", name="Alpha Co", sector="Tech",
                                price=10.0, market_cap=1000000.0)

    def test_price_narrowed_to_single_precision(self):
        """Test that price keeps 32-bit float precision"""
        columns = resolve_columns(HEADER)
        equity = parse_equity_row(["AAA", "Alpha Co", "Tech", "10.1", "1000000"], columns, 1)

        assert equity.price == struct.unpack("f", struct.pack("f", 10.1))[0]
        assert equity.price == pytest.approx(10.1, rel=1e-6)

    def test_market_cap_keeps_double_precision(self):
        """Test that large market caps are not narrowed"""
        columns = resolve_columns(HEADER)
        equity = parse_equity_row(["AAPL", "Apple Inc.", "IT", "155.15", "809508034020"], columns, 1)

        assert equity.market_cap == 809508034020.0

    def test_scientific_notation(self):
        """Test market caps written in exponent form"""
        columns = resolve_columns(HEADER)
        equity = parse_equity_row(["AAA", "Alpha Co", "Tech", "10", "1.5e9"], columns, 1)

        assert equity.market_cap == 1500000000.0

    def test_invalid_price(self):
        """Test unparseable price"""
        columns = resolve_columns(HEADER)

        with pytest.raises(InvalidPriceError) as exc_info:
            parse_equity_row(["AAA", "Alpha Co", "Tech", "n/a", "1000000"], columns, 7)

        assert exc_info.value.row_number == 7
        assert exc_info.value.field == "price"
        assert exc_info.value.raw_value == "n/a"

    def test_invalid_market_cap(self):
        """Test market cap with thousands separators"""
        columns = resolve_columns(HEADER)

        with pytest.raises(InvalidMarketCapError) as exc_info:
            parse_equity_row(["AAA", "Alpha Co", "Tech", "10", "$1,000,000"], columns, 3)

        assert exc_info.value.field == "market_cap"
        assert exc_info.value.row_number == 3

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf", ""])
    def test_non_finite_market_cap_rejected(self, raw):
        """Test that NaN, infinity and empty fields are parse failures"""
        columns = resolve_columns(HEADER)

        with pytest.raises(InvalidMarketCapError):
            parse_equity_row(["AAA", "Alpha Co", "Tech", "10", raw], columns, 1)

    @pytest.mark.parametrize("raw", ["1e39", "1e40", "-1e39", "nan", "inf"])
    def test_price_overflowing_single_precision(self, raw):
        """Test prices that are not finite once narrowed to 32-bit floats"""
        columns = resolve_columns(HEADER)

        with pytest.raises(InvalidPriceError) as exc_info:
            parse_equity_row(["AAA", "Alpha Co", "Tech", raw, "1000000"], columns, 1)

        assert exc_info.value.raw_value == raw

    def test_price_underflowing_single_precision(self):
        """Test that a tiny nonzero price is not silently turned into zero"""
        columns = resolve_columns(HEADER)

        with pytest.raises(InvalidPriceError):
            parse_equity_row(["AAA", "Alpha Co", "Tech", "1e-46", "1000000"], columns, 1)

    def test_row_shape_mismatch(self):
        """Test a row with fewer fields than the header"""
        columns = resolve_columns(HEADER)

        with pytest.raises(RowShapeError) as exc_info:
            parse_equity_row(["AAA", "Alpha Co", "10.0", "1000000"], columns, 4)

        assert exc_info.value.row_number == 4
        assert exc_info.value.expected_fields == 5
        assert exc_info.value.actual_fields == 4


class TestDecodeTable:
    """Test whole table decoding"""

    def test_scenario_a(self, scenario_a_csv, alpha, beta):
        """Test decoding the two-row reference table"""
        result = decode_csv_text(scenario_a_csv)

        assert result.equities == (alpha, beta)
        assert result.max_market_cap == 1000000.0
        assert result.skipped_rows == ()
        assert [e.symbol for e in result.equities] == ["AAA", "BBB"]

    def test_reordered_columns_decode_identically(self, scenario_a_csv):
        """Test that column order does not change the decoded records"""
        reordered = (
            "Market Cap,Symbol,Price,Name,Sector\n"
            "1000000,AAA,10.0,Alpha Co,Tech\n"
            "500000,BBB,5.0,Beta Co,Energy\n"
        )

        assert decode_csv_text(reordered) == decode_csv_text(scenario_a_csv)

    def test_running_maximum(self):
        """Test that the largest market cap is tracked regardless of position"""
        rows = [
            HEADER,
            ["A", "A", "S", "1", "10"],
            ["B", "B", "S", "1", "300"],
            ["C", "C", "S", "1", "20"],
        ]

        assert decode_table(rows).max_market_cap == 300.0

    def test_header_only(self):
        """Test that a table without data rows decodes to nothing"""
        result = decode_table([HEADER])

        assert result.equities == ()
        assert result.max_market_cap == 0.0

    def test_empty_input(self):
        """Test that input without a header is rejected"""
        with pytest.raises(MissingDataError):
            decode_table([])

    def test_missing_column_in_table(self):
        """Test that a missing column fails before any row is read"""
        text = "Symbol,Name,Sector,Price\nAAA,Alpha Co,Tech,10.0\n"

        with pytest.raises(MissingColumnError):
            decode_csv_text(text)

    def test_abort_policy_raises(self):
        """Test that the default policy stops at the first malformed field"""
        rows = [HEADER, ["A", "A", "S", "1", "10"], ["B", "B", "S", "oops", "20"]]

        with pytest.raises(InvalidPriceError):
            decode_table(rows)

    def test_skip_policy_drops_malformed_rows(self):
        """Test that the skip policy records and skips malformed rows"""
        rows = [
            HEADER,
            ["A", "A", "S", "1", "10"],
            ["B", "B", "S", "oops", "999"],
            ["C", "C", "S", "2", "not-a-number"],
            ["D", "D", "S", "3", "30"],
        ]
        result = decode_table(rows, malformed_row_policy="skip")

        assert [e.symbol for e in result.equities] == ["A", "D"]
        assert result.skipped_rows == (2, 3)
        assert result.max_market_cap == 30.0

    def test_skip_policy_drops_overflowing_price(self):
        """Test that a price overflowing 32-bit floats is skipped, not kept as inf"""
        text = ("Symbol,Name,Sector,Price,Market Cap\n"
                "AAA,A,T,10,1000\n"
                "BBB,B,T,1e39,500\n")
        result = decode_csv_text(text, malformed_row_policy="skip")

        assert [e.symbol for e in result.equities] == ["AAA"]
        assert result.skipped_rows == (2,)

    def test_skip_policy_still_rejects_row_shape(self):
        """Test that row shape errors are fatal under both policies"""
        rows = [HEADER, ["A", "A", "S", "1"]]

        with pytest.raises(RowShapeError):
            decode_table(rows, malformed_row_policy="skip")

    def test_unknown_policy(self):
        """Test that an unknown policy name is rejected"""
        with pytest.raises(ValueError):
            decode_table([HEADER], malformed_row_policy="ignore")

    def test_duplicate_symbol(self):
        """Test that repeated symbols are rejected at decode time"""
        rows = [
            HEADER,
            ["A", "A", "S", "1", "10"],
            ["B", "B", "S", "1", "20"],
            ["A", "A2", "S", "2", "30"],
        ]

        with pytest.raises(DuplicateSymbolError) as exc_info:
            decode_table(rows)

        assert exc_info.value.symbol == "A"
        assert exc_info.value.first_row == 1
        assert exc_info.value.duplicate_row == 3

    def test_field_parse_error_is_not_zero_filled(self):
        """Test that a failed field never becomes a zero value"""
        rows = [HEADER, ["A", "A", "S", "", "10"]]

        with pytest.raises(FieldParseError):
            decode_table(rows)


class TestReadCsvRows:
    """Test CSV tokenisation"""

    def test_quoted_fields(self):
        """Test names containing commas"""
        text = 'Symbol,Name,Sector,Price,Market Cap\nBRK.B,"Berkshire Hathaway, Inc.",Financials,191.42,491000000000\n'
        rows = list(read_csv_rows(text))

        assert rows[1][1] == "Berkshire Hathaway, Inc."
        assert len(rows[1]) == 5

    def test_blank_lines_skipped(self):
        """Test that blank lines do not produce rows"""
        rows = list(read_csv_rows("Symbol,Name\n\nA,B\n\n"))

        assert rows == [["Symbol", "Name"], ["A", "B"]]

    def test_byte_order_mark_removed(self):
        """Test that a UTF-8 BOM does not hide the first header label"""
        rows = list(read_csv_rows("\ufeffSymbol,Name\nA,B\n"))

        assert rows[0][0] == "Symbol"

    def test_crlf_line_endings(self, scenario_a_csv):
        """Test Windows line endings"""
        result = decode_csv_text(scenario_a_csv.replace("\n", "\r\n"))

        assert [e.symbol for e in result.equities] == ["AAA", "BBB"]
