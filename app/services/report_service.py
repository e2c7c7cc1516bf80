"""
CreativeGroups Payroll - Statutory Report Service

Renders the two monthly compliance returns from persisted payroll entries:
- ECR challan (PF): "#~#" delimited UTF-8 text with a TOTAL line
- ESI return: single-sheet .xlsx workbook

Download Rules:
- No employee of the company may carry a live validation error
- An entry with 0 working days and no leaving date must carry a reason code
"""

import io
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.employee import Employee
from app.models.payroll import PayrollEntry
from app.services.employee_service import EmployeeService
from app.services.employee_validation import is_blank
from app.services.payroll_service import PayrollService
from app.services.statutory_calculators import (
    calculate_pf_contribution,
    esi_wages,
    round_rupees,
)
from app.utils.error_handling import BusinessRuleException, ErrorCode

logger = logging.getLogger(__name__)


ECR_DELIMITER = "#~#"
ECR_HEADER = ECR_DELIMITER.join([
    "UAN",
    "Employee Name",
    "Gross Wages",
    "EPF Wages",
    "EPS Wages",
    "EDLI Wages",
    "EE Share",
    "EPS Contribution",
    "ER Share",
    "NCP Days",
    "Reason",
    "Refund",
])
ECR_MEDIA_TYPE = "text/plain"

# Header labels as printed on the ESIC monthly contribution template
ESI_HEADERS = [
    "IP Number \n(10 Digits)",
    "IP Name\n( Only alphabets and space )",
    "No of Days for which wages paid/payable during the month",
    "Total Monthly Wages",
    " Reason Code for Zero \n workings days(numeric only; provide 0 for all other reasons- Click on the link for reference)",
    " Last Working Day\n( Format DD/MM/YYYY  or DD-MM-YYYY)",
]
ESI_COLUMN_WIDTHS = [15, 30, 25, 20, 30, 20]
ESI_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Content-Disposition is latin-1 encoded, so month labels are reduced to ASCII
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9.-]+")

EMPLOYEE_ERRORS_MESSAGE = "Cannot download reports. Employee master table has errors."
MISSING_REASON_MESSAGE = (
    "Cannot download reports. Active employees with 0 working days must have proper reason codes."
)


@dataclass
class ReportFile:
    """Rendered report ready to stream."""
    content: bytes
    filename: str
    media_type: str


# ===========================================
# ELIGIBILITY
# ===========================================

def is_ecr_eligible(entry: PayrollEntry) -> bool:
    """Active employee with a PF number, no leaving date and some attendance."""
    employee = entry.employee
    return (
        employee.is_active
        and not is_blank(employee.pf_number)
        and employee.leaving_date is None
        and entry.working_days > 0
    )


def is_esi_eligible(entry: PayrollEntry) -> bool:
    """Active employee with an ESI number who either worked or left with a reason."""
    employee = entry.employee
    if not employee.is_active or is_blank(employee.esi_number):
        return False
    if entry.working_days > 0:
        return True
    return entry.working_days == 0 and employee.leaving_date is not None and entry.reason != 0


def esi_reason_code(entry: PayrollEntry) -> int:
    if entry.working_days == 0 or entry.employee.leaving_date is not None:
        return entry.reason
    return 0


def lacks_reason_code(entry: PayrollEntry) -> bool:
    """Zero attendance without leaving date needs an explicit reason."""
    return (
        entry.working_days == 0
        and entry.employee.leaving_date is None
        and entry.reason == 0
    )


# ===========================================
# RENDERERS
# ===========================================

def _money(value: Decimal) -> str:
    return f"{Decimal(value):.2f}"


def render_ecr(entries: Sequence[PayrollEntry]) -> str:
    """
    Render ECR challan text for already-filtered entries.

    Reason is always 0 here since leaving employees never reach the ECR.
    """
    lines = [ECR_HEADER]
    total_ee = total_eps = total_er = 0

    for entry in entries:
        pf = calculate_pf_contribution(entry.basic_da)
        lines.append(ECR_DELIMITER.join([
            entry.employee.pf_number.strip(),
            entry.employee.name,
            _money(entry.gross_salary),
            _money(pf.epf_wages),
            _money(pf.eps_wages),
            _money(pf.edli_wages),
            str(pf.employee_share),
            str(pf.eps_contribution),
            str(pf.employer_share),
            str(round_rupees(entry.ncp)),
            "0",
            str(pf.refund),
        ]))
        total_ee += pf.employee_share
        total_eps += pf.eps_contribution
        total_er += pf.employer_share

    lines.append(ECR_DELIMITER.join(
        ["TOTAL", "", "", "", "", "", str(total_ee), str(total_eps), str(total_er), "", "", ""]
    ))
    return "\n".join(lines) + "\n"


def render_esi(entries: Sequence[PayrollEntry]) -> bytes:
    """Render the ESI return workbook for already-filtered entries."""
    wb = Workbook()
    ws = wb.active
    ws.title = "ESI_Report"

    header_font = Font(bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for col, label in enumerate(ESI_HEADERS, start=1):
        cell = ws.cell(row=1, column=col, value=label)
        cell.font = header_font
        cell.alignment = header_alignment
    for col, width in enumerate(ESI_COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col)].width = width
    ws.row_dimensions[1].height = 50

    for row, entry in enumerate(entries, start=2):
        employee = entry.employee
        leaving = employee.leaving_date.strftime("%d/%m/%Y") if employee.leaving_date else ""
        ws.cell(row=row, column=1, value=employee.esi_number.strip())
        ws.cell(row=row, column=2, value=employee.name)
        ws.cell(row=row, column=3, value=float(entry.working_days))
        ws.cell(row=row, column=4, value=float(esi_wages(entry.gross_salary)))
        ws.cell(row=row, column=5, value=esi_reason_code(entry))
        ws.cell(row=row, column=6, value=leaving)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _stamp(now: Optional[datetime]) -> str:
    return (now or datetime.now()).strftime("%Y%m%d_%H%M%S")


def safe_filename_part(label: str) -> str:
    """Reduce a free-text label to ASCII letters, digits, dots and dashes joined by underscores."""
    return _UNSAFE_FILENAME.sub("_", label).strip("_") or "month"


# ===========================================
# SERVICE
# ===========================================

class ReportService:
    """Builds ECR and ESI downloads for a company's payroll month."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _entries(self, company_id: int, payroll_month_id: int) -> List[PayrollEntry]:
        result = await self.db.execute(
            select(PayrollEntry)
            .join(Employee, PayrollEntry.employee_id == Employee.id)
            .options(selectinload(PayrollEntry.employee))
            .execution_options(populate_existing=True)
            .where(
                PayrollEntry.company_id == company_id,
                PayrollEntry.payroll_month_id == payroll_month_id,
            )
            .order_by(Employee.name, PayrollEntry.id)
        )
        return list(result.scalars().all())

    async def check_download(
        self,
        company_id: int,
        payroll_month_id: int,
    ) -> Tuple[bool, Optional[str]]:
        """
        Evaluate the download rules.

        Returns:
            (True, None) when reports may be generated, else (False, reason)
        """
        live_errors = await EmployeeService(self.db).live_errors(company_id)
        if live_errors:
            return False, EMPLOYEE_ERRORS_MESSAGE

        entries = await self._entries(company_id, payroll_month_id)
        if any(lacks_reason_code(entry) for entry in entries):
            return False, MISSING_REASON_MESSAGE

        return True, None

    async def _require_download(self, company_id: int, payroll_month_id: int) -> None:
        allowed, message = await self.check_download(company_id, payroll_month_id)
        if not allowed:
            code = (
                ErrorCode.EMPLOYEE_MASTER_ERRORS
                if message == EMPLOYEE_ERRORS_MESSAGE
                else ErrorCode.MISSING_REASON_CODES
            )
            raise BusinessRuleException(message, code=code)

    async def generate_ecr(
        self,
        company_id: int,
        payroll_month_id: int,
        now: Optional[datetime] = None,
    ) -> ReportFile:
        """Generate the ECR challan text file."""
        await PayrollService(self.db).get_month_for_company(payroll_month_id, company_id)
        await self._require_download(company_id, payroll_month_id)

        entries = [e for e in await self._entries(company_id, payroll_month_id) if is_ecr_eligible(e)]
        logger.info(
            f"ECR for company {company_id}, month {payroll_month_id}: {len(entries)} eligible entries"
        )
        if not entries:
            raise BusinessRuleException(
                "No eligible employees found for PF report generation.",
                code=ErrorCode.NO_ELIGIBLE_EMPLOYEES,
            )

        return ReportFile(
            content=render_ecr(entries).encode("utf-8"),
            filename=f"ECR_Challan_{_stamp(now)}.txt",
            media_type=ECR_MEDIA_TYPE,
        )

    async def generate_esi(
        self,
        company_id: int,
        payroll_month_id: int,
        now: Optional[datetime] = None,
    ) -> ReportFile:
        """Generate the ESI return workbook."""
        month = await PayrollService(self.db).get_month_for_company(payroll_month_id, company_id)
        await self._require_download(company_id, payroll_month_id)

        entries = [e for e in await self._entries(company_id, payroll_month_id) if is_esi_eligible(e)]
        logger.info(
            f"ESI for company {company_id}, month {payroll_month_id}: {len(entries)} eligible entries"
        )
        if not entries:
            raise BusinessRuleException(
                "No eligible employees found for ESI report generation.",
                code=ErrorCode.NO_ELIGIBLE_EMPLOYEES,
            )

        return ReportFile(
            content=render_esi(entries),
            filename=f"ESI_Report_{safe_filename_part(month.month)}_{_stamp(now)}.xlsx",
            media_type=ESI_MEDIA_TYPE,
        )
