"""
CreativeGroups Payroll - Spreadsheet Reading Tests
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from app.utils.error_handling import InvalidFileException, MissingColumnsException
from app.utils.spreadsheet import (
    cell_text,
    open_workbook,
    parse_date,
    parse_decimal,
    read_header_row,
    resolve_header,
)
from fixtures.workbooks import build_workbook


def _missing(required):
    return lambda columns: [name for name in required if name not in columns]


class TestCellText:

    def test_integral_float_has_no_decimal_point(self):
        assert cell_text(26.0) == "26"

    def test_fractional_float(self):
        assert cell_text(27.5) == "27.5"

    def test_none_is_empty(self):
        assert cell_text(None) == ""

    def test_datetime_at_midnight_is_a_date(self):
        assert cell_text(datetime(2025, 8, 1)) == "2025-08-01"

    def test_text_is_trimmed(self):
        assert cell_text("  PF001 ") == "PF001"


class TestParsing:

    @pytest.mark.parametrize("text,expected", [
        ("26", Decimal("26")),
        ("27.5", Decimal("27.5")),
        ("15,000.00", Decimal("15000.00")),
        (" 0 ", Decimal("0")),
    ])
    def test_parse_decimal(self, text, expected):
        assert parse_decimal(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "NaN", "inf"])
    def test_parse_decimal_rejects(self, text):
        assert parse_decimal(text) is None

    @pytest.mark.parametrize("text", ["2025-08-15", "15/08/2025", "15-08-2025", "15-Aug-2025"])
    def test_parse_date_formats(self, text):
        assert parse_date(text) == date(2025, 8, 15)

    def test_unparseable_date_is_none(self):
        assert parse_date("sometime") is None


class TestOpenWorkbook:

    def test_garbage_bytes(self):
        with pytest.raises(InvalidFileException):
            open_workbook(b"this is not a workbook")

    def test_empty_bytes(self):
        with pytest.raises(InvalidFileException) as exc_info:
            open_workbook(b"")
        assert exc_info.value.message == "No file uploaded."

    def test_reads_first_sheet(self):
        sheet = open_workbook(build_workbook(["name", "pf"], [["Asha", "PF001"]]))
        assert sheet.cell(2, 1) == "Asha"
        assert sheet.cell(2, 2) == "PF001"
        assert sheet.cell(0, 1) == ""


class TestHeaderResolution:

    def test_header_on_row_one(self):
        sheet = open_workbook(build_workbook(["Name", "PF"]))
        header = resolve_header(sheet, _missing(["name", "pf"]))

        assert header.row == 1
        assert header.column("name") == 1
        assert header.column("pf") == 2

    def test_header_on_row_two(self):
        sheet = open_workbook(build_workbook(["name", "pf"], header_row=2))
        header = resolve_header(sheet, _missing(["name", "pf"]))

        assert header.row == 2

    def test_first_duplicate_header_wins(self):
        sheet = open_workbook(build_workbook(["name", "pf", "PF"]))
        assert read_header_row(sheet, 1)["pf"] == 2

    def test_missing_columns_reported_for_second_row(self):
        sheet = open_workbook(build_workbook(["name", "pf"], header_row=2))
        with pytest.raises(MissingColumnsException) as exc_info:
            resolve_header(sheet, _missing(["name", "pf", "esi"]))

        assert exc_info.value.details["missing_columns"] == ["esi"]
        assert exc_info.value.message == "Missing required column(s): esi"

    def test_second_row_reported_even_when_first_row_is_closer(self):
        sheet = open_workbook(build_workbook(["name", "pf"]))
        with pytest.raises(MissingColumnsException) as exc_info:
            resolve_header(sheet, _missing(["name", "pf", "esi"]))

        assert exc_info.value.details["missing_columns"] == ["name", "pf", "esi"]
