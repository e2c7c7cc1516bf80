"""
CreativeGroups Payroll - Payroll Upload Service

Turns an uploaded attendance/wages sheet into the payroll entries of one
company's payroll month.

Upload flow:
1. Gate: the company's employee master must have no validation errors
2. Resolve the header (row 1, else row 2) and read rows until the first row
   with both PF and ESI blank
3. Match each row to a master employee by PF or ESI number
4. Backfill active employees without a leaving date who were not uploaded
5. Any row error rejects the whole upload; otherwise the month's entries
   are replaced in one commit

Concurrent uploads for the same company and month are last-write-wins.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.employee import Employee
from app.models.payroll import PayrollEntry
from app.services.employee_service import EmployeeService
from app.services.employee_validation import identifier_key, is_blank
from app.services.payroll_service import PayrollService
from app.services.statutory_calculators import compute_ncp
from app.utils.error_handling import (
    BusinessRuleException,
    CompanyNotFoundException,
    DatabaseException,
    ErrorCode,
    UploadRejectedException,
)
from app.utils.spreadsheet import Sheet, open_workbook, parse_decimal, resolve_header

logger = logging.getLogger(__name__)


PAYROLL_REQUIRED_COLUMNS = ("name", "working_days", "basic", "gross_salary")
GATE_MESSAGE = "Cannot upload payroll. Please fix all employee master errors first."


def _missing_payroll_columns(columns: Dict[str, int]) -> List[str]:
    missing = []
    if "pf" not in columns and "esi" not in columns:
        missing.append("pf or esi")
    missing.extend(name for name in PAYROLL_REQUIRED_COLUMNS if name not in columns)
    return missing


def _normalize_nil(value: str) -> str:
    return "" if value.strip().lower() == "nil" else value.strip()


# ===========================================
# RECONCILIATION
# ===========================================

@dataclass
class ReconciledEntry:
    """One computed payroll line, not yet persisted."""
    employee: Employee
    working_days: Decimal
    basic_da: Decimal
    gross_salary: Decimal
    ncp: Decimal
    reason: int = 0
    backfilled: bool = False


@dataclass
class ReconcileResult:
    entries: List[ReconciledEntry] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def backfilled_count(self) -> int:
        return sum(1 for entry in self.entries if entry.backfilled)


def match_employee(
    employees: Sequence[Employee],
    pf_number: str,
    esi_number: str,
) -> Optional[Employee]:
    """First master employee whose PF or ESI number matches, ignoring case."""
    pf_key = identifier_key(pf_number)
    esi_key = identifier_key(esi_number)
    for employee in employees:
        if pf_key and identifier_key(employee.pf_number) == pf_key:
            return employee
        if esi_key and identifier_key(employee.esi_number) == esi_key:
            return employee
    return None


def reconcile_rows(
    sheet: Sheet,
    employees: Sequence[Employee],
    total_days: int,
) -> ReconcileResult:
    """
    Read payroll rows and match them against the employee master.

    Row numbers in error messages count from 1 at the first row below the
    header. Processing continues past a bad row so every error is reported.
    """
    header = resolve_header(sheet, _missing_payroll_columns)
    result = ReconcileResult()
    seen_ids = set()

    row = header.row + 1
    while True:
        pf_number = header.value(sheet, row, "pf")
        esi_number = header.value(sheet, row, "esi")
        if is_blank(pf_number) and is_blank(esi_number):
            break

        current = row
        n = current - header.row
        row += 1

        name = header.value(sheet, current, "name")
        pf_number = _normalize_nil(pf_number)
        esi_number = _normalize_nil(esi_number)

        working_text = header.value(sheet, current, "working_days")
        working_days = parse_decimal(working_text)
        if working_days is None:
            result.errors.append(f"Row {n}: Invalid working days '{working_text}' for employee '{name}'")
            continue

        basic_text = header.value(sheet, current, "basic")
        basic_da = parse_decimal(basic_text)
        if basic_da is None:
            result.errors.append(f"Row {n}: Invalid basic salary '{basic_text}' for employee '{name}'")
            continue

        gross_text = header.value(sheet, current, "gross_salary")
        gross_salary = parse_decimal(gross_text)
        if gross_salary is None:
            result.errors.append(f"Row {n}: Invalid gross salary '{gross_text}' for employee '{name}'")
            continue

        if not pf_number and not esi_number:
            result.errors.append(f"Row {n}: No valid PF or ESI number for employee '{name}'")
            continue

        employee = match_employee(employees, pf_number, esi_number)
        if employee is None:
            identifier = f"PF: '{pf_number}'" if pf_number else f"ESI: '{esi_number}'"
            result.errors.append(f"Row {n}: Employee with {identifier} not found in master table")
            continue

        if employee.id in seen_ids:
            result.errors.append(
                f"Row {n}: Employee '{name or employee.name}' appears more than once in upload"
            )
            continue
        seen_ids.add(employee.id)

        result.entries.append(ReconciledEntry(
            employee=employee,
            working_days=working_days,
            basic_da=basic_da,
            gross_salary=gross_salary,
            ncp=compute_ncp(total_days, working_days),
        ))

    # Full coverage: everyone still employed gets a line for the month
    for employee in employees:
        if employee.id in seen_ids:
            continue
        if not employee.is_active or employee.leaving_date is not None:
            continue
        result.entries.append(ReconciledEntry(
            employee=employee,
            working_days=Decimal("0"),
            basic_da=Decimal("0"),
            gross_salary=Decimal("0"),
            ncp=Decimal(total_days),
            backfilled=True,
        ))

    return result


@dataclass
class PayrollUploadResult:
    message: str
    uploaded_count: int
    backfilled_count: int


# ===========================================
# SERVICE
# ===========================================

class PayrollUploadService:
    """Gate and reconciler for payroll sheet uploads."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.employees = EmployeeService(db)
        self.payroll = PayrollService(db)

    async def can_upload(self, company_id: int) -> Tuple[bool, Optional[str], int]:
        """
        Live check of the employee master.

        Returns:
            (allowed, message, number of employees with errors)
        """
        errors = await self.employees.live_errors(company_id)
        if errors:
            return False, GATE_MESSAGE, len(errors)
        return True, None, 0

    async def upload(
        self,
        company_id: int,
        payroll_month_id: int,
        content: bytes,
    ) -> PayrollUploadResult:
        """
        Replace a company's payroll entries for a month from a sheet.

        Raises:
            BusinessRuleException: Employee master has errors
            UploadRejectedException: One or more rows failed; nothing written
        """
        if await self.db.get(Company, company_id) is None:
            raise CompanyNotFoundException(company_id)

        allowed, message, error_count = await self.can_upload(company_id)
        if not allowed:
            raise BusinessRuleException(
                message,
                code=ErrorCode.EMPLOYEE_MASTER_ERRORS,
                details={"employees_with_errors": error_count},
            )

        payroll_month = await self.payroll.get_month_for_company(payroll_month_id, company_id)
        sheet = open_workbook(content)
        employees = await self.employees.company_employees(company_id)

        logger.info(
            f"Payroll upload for company {company_id}, month {payroll_month_id} "
            f"({payroll_month.month}, {payroll_month.total_days} days)"
        )
        result = reconcile_rows(sheet, employees, payroll_month.total_days)

        if result.errors:
            logger.warning(
                f"Payroll upload rejected for company {company_id}: {len(result.errors)} row errors"
            )
            raise UploadRejectedException(result.errors)

        try:
            await self.db.execute(
                delete(PayrollEntry).where(
                    PayrollEntry.company_id == company_id,
                    PayrollEntry.payroll_month_id == payroll_month_id,
                )
            )
            self.db.add_all([
                PayrollEntry(
                    employee_id=entry.employee.id,
                    company_id=company_id,
                    payroll_month_id=payroll_month_id,
                    working_days=entry.working_days,
                    basic_da=entry.basic_da,
                    gross_salary=entry.gross_salary,
                    ncp=entry.ncp,
                    reason=entry.reason,
                )
                for entry in result.entries
            ])
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(f"Saving payroll entries failed for company {company_id}: {exc}")
            raise DatabaseException("Failed to save payroll entries.", original_error=exc) from exc

        logger.info(
            f"Payroll upload saved for company {company_id}: {len(result.entries)} entries, "
            f"{result.backfilled_count} backfilled"
        )
        return PayrollUploadResult(
            message="Payroll uploaded successfully",
            uploaded_count=len(result.entries),
            backfilled_count=result.backfilled_count,
        )
