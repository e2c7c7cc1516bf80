"""
CreativeGroups Payroll - Spreadsheet Reading

Thin layer over openpyxl used by the employee and payroll uploads:
- open_workbook(bytes) returns the first sheet as a Sheet
- Sheet.cell(row, col) always returns trimmed text ("" for empty cells)
- resolve_header() tries candidate header rows in order and keeps the best

Rows and columns are 1-based, as in Excel.
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Sequence
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException as OpenpyxlInvalidFileException

from app.utils.error_handling import InvalidFileException, MissingColumnsException

logger = logging.getLogger(__name__)


HEADER_CANDIDATE_ROWS = (1, 2)

# Text date layouts accepted in upload cells, tried in order
DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%d-%b-%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%Y/%m/%d",
)


def cell_text(value: Any) -> str:
    """Render a raw cell value the way a user sees it in the sheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def parse_decimal(text: str) -> Optional[Decimal]:
    """Parse a numeric cell, allowing thousands separators. None if not a number."""
    cleaned = text.strip().replace(",", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_date(text: str) -> Optional[date]:
    """Parse a date cell. Unrecognised text gives None."""
    cleaned = text.strip()
    if not cleaned:
        return None
    # Datetime cells come through cell_text as ISO with a time part
    if "T" in cleaned:
        cleaned = cleaned.split("T", 1)[0]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


class Sheet:
    """Read-only view of one worksheet."""

    def __init__(self, worksheet):
        self._worksheet = worksheet

    @property
    def title(self) -> str:
        return self._worksheet.title

    def cell(self, row: int, col: int) -> str:
        if row < 1 or col < 1:
            return ""
        return cell_text(self._worksheet.cell(row=row, column=col).value)

    def last_used_column(self) -> int:
        return self._worksheet.max_column or 0

    def last_used_row(self) -> int:
        return self._worksheet.max_row or 0


def open_workbook(data: bytes) -> Sheet:
    """
    Open an .xlsx payload and return its first worksheet.

    Raises:
        InvalidFileException: If the bytes are not a readable workbook
    """
    if not data:
        raise InvalidFileException("No file uploaded.")
    try:
        workbook = load_workbook(io.BytesIO(data), data_only=True)
    except (OpenpyxlInvalidFileException, BadZipFile, KeyError, ValueError, OSError) as exc:
        logger.warning(f"Unreadable workbook: {exc}")
        raise InvalidFileException() from exc

    if not workbook.worksheets:
        raise InvalidFileException("The workbook has no worksheets.")
    return Sheet(workbook.worksheets[0])


# ===========================================
# HEADER RESOLUTION
# ===========================================

@dataclass
class HeaderMatch:
    """Column layout found on a candidate header row."""
    row: int
    columns: Dict[str, int] = field(default_factory=dict)
    missing: List[str] = field(default_factory=list)

    def column(self, name: str) -> int:
        """1-based column index of a header, 0 when absent."""
        return self.columns.get(name.lower(), 0)

    def value(self, sheet: Sheet, row: int, name: str) -> str:
        col = self.column(name)
        return sheet.cell(row, col) if col else ""


def read_header_row(sheet: Sheet, row: int) -> Dict[str, int]:
    """Map lower-cased header text to column index. First occurrence wins."""
    columns: Dict[str, int] = {}
    for col in range(1, sheet.last_used_column() + 1):
        name = sheet.cell(row, col).lower()
        if name and name not in columns:
            columns[name] = col
    return columns


def resolve_header(
    sheet: Sheet,
    find_missing: Callable[[Dict[str, int]], List[str]],
    candidates: Sequence[int] = HEADER_CANDIDATE_ROWS,
) -> HeaderMatch:
    """
    Try each candidate header row in order and return the first that has
    every required column. When none qualifies, the missing names of the
    last candidate are reported, even if an earlier row came closer.

    Args:
        sheet: Sheet to probe
        find_missing: Returns the required column names absent from a header map
        candidates: Row numbers to try

    Raises:
        MissingColumnsException: With the missing names of the last candidate
    """
    last: Optional[HeaderMatch] = None
    for row in candidates:
        columns = read_header_row(sheet, row)
        last = HeaderMatch(row=row, columns=columns, missing=find_missing(columns))
        if not last.missing:
            return last

    raise MissingColumnsException(last.missing if last else [])
