"""
CreativeGroups Payroll - Employee Service

Business logic for the employee master.

Every change to a company's employee set ends with a single re-validation
of the whole company before the commit, so stored error values always
reflect the full sibling set.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.employee import Employee
from app.models.payroll import PayrollEntry
from app.services.employee_validation import collect_errors, revalidate_company
from app.utils.error_handling import (
    CompanyNotFoundException,
    DuplicateEntryException,
    EmployeeNotFoundException,
    IdMismatchException,
    ValidationException,
)
from app.utils.spreadsheet import Sheet, open_workbook, parse_date, resolve_header

logger = logging.getLogger(__name__)


EMPLOYEE_UPLOAD_COLUMNS = ("name", "joining_date", "pf", "esi")


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def exact_key(company_id: int, name: Optional[str], pf_number: Optional[str], esi_number: Optional[str]) -> Tuple:
    """Identity used to skip re-inserting an employee that already exists."""
    return (
        company_id,
        _clean(name).lower(),
        _clean(pf_number).lower(),
        _clean(esi_number).lower(),
    )


def _missing_employee_columns(columns: Dict[str, int]) -> List[str]:
    return [name for name in EMPLOYEE_UPLOAD_COLUMNS if name not in columns]


def read_employee_rows(sheet: Sheet) -> List[Dict[str, Any]]:
    """
    Read employee rows from an upload sheet.

    Data starts below the header and stops at the first row with a blank
    name. Unparseable dates are read as empty.
    """
    header = resolve_header(sheet, _missing_employee_columns)
    rows = []
    row = header.row + 1
    while True:
        name = header.value(sheet, row, "name")
        if not name:
            break
        rows.append({
            "name": name,
            "joining_date": parse_date(header.value(sheet, row, "joining_date")),
            "leaving_date": parse_date(header.value(sheet, row, "leaving_date")),
            "pf_number": header.value(sheet, row, "pf"),
            "esi_number": header.value(sheet, row, "esi"),
        })
        row += 1
    return rows


@dataclass
class EmployeeUploadResult:
    """Outcome of an employee master upload."""
    added: int = 0
    skipped: int = 0
    with_errors: int = 0
    employees: List[Employee] = field(default_factory=list)


class EmployeeService:
    """Service for employee master operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ===========================================
    # LOOKUPS
    # ===========================================

    async def _get_company(self, company_id: int) -> Company:
        company = await self.db.get(Company, company_id)
        if company is None:
            raise CompanyNotFoundException(company_id)
        return company

    async def company_employees(self, company_id: int) -> List[Employee]:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.company_id == company_id)
            .order_by(Employee.id)
        )
        return list(result.scalars().all())

    async def list_employees(
        self,
        company_id: int,
        search_name: Optional[str] = None,
        search_pf: Optional[str] = None,
        search_esi: Optional[str] = None,
    ) -> List[Employee]:
        """Employees of a company ordered by name, with optional substring filters."""
        query = select(Employee).where(Employee.company_id == company_id)

        if search_name and search_name.strip():
            query = query.where(func.lower(Employee.name).contains(search_name.strip().lower()))
        if search_pf and search_pf.strip():
            query = query.where(func.lower(Employee.pf_number).contains(search_pf.strip().lower()))
        if search_esi and search_esi.strip():
            query = query.where(func.lower(Employee.esi_number).contains(search_esi.strip().lower()))

        query = query.order_by(Employee.name, Employee.id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_employee(self, employee_id: int) -> Employee:
        employee = await self.db.get(Employee, employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)
        return employee

    async def error_overview(self, company_id: int) -> Tuple[bool, List[Employee]]:
        """All employees of a company, rows with a stored error first."""
        employees = await self.company_employees(company_id)
        with_errors = [e for e in employees if e.error]
        clean = [e for e in employees if not e.error]
        return bool(with_errors), with_errors + clean

    async def live_errors(self, company_id: int) -> List[Tuple[Employee, str]]:
        """
        Evaluate the validation rule now, ignoring stored error values.

        Used by the payroll upload gate and the report download check.
        """
        company = await self.db.get(Company, company_id)
        employees = await self.company_employees(company_id)
        return [(row, error) for row, error in collect_errors(company, employees) if error]

    # ===========================================
    # RE-VALIDATION
    # ===========================================

    async def revalidate(self, company_id: int, batch: Sequence[Employee] = ()) -> int:
        """Flush pending changes and rewrite the error of every employee of a company."""
        await self.db.flush()
        company = await self.db.get(Company, company_id)
        employees = await self.company_employees(company_id)
        return revalidate_company(company, employees, batch)

    # ===========================================
    # MUTATIONS
    # ===========================================

    async def create_employee(
        self,
        company_id: int,
        name: str,
        pf_number: Optional[str] = "",
        esi_number: Optional[str] = "",
        joining_date: Optional[date] = None,
        leaving_date: Optional[date] = None,
        is_active: bool = True,
    ) -> Employee:
        """Create one employee. An exact name/PF/ESI match in the company is a conflict."""
        await self._get_company(company_id)

        key = exact_key(company_id, name, pf_number, esi_number)
        existing = await self.company_employees(company_id)
        if any(exact_key(e.company_id, e.name, e.pf_number, e.esi_number) == key for e in existing):
            raise DuplicateEntryException("Employee", message="Employee already exists.")

        employee = Employee(
            company_id=company_id,
            name=_clean(name),
            pf_number=_clean(pf_number),
            esi_number=_clean(esi_number),
            joining_date=joining_date,
            leaving_date=leaving_date,
            is_active=is_active,
        )
        self.db.add(employee)

        await self.revalidate(company_id)
        await self.db.commit()
        await self.db.refresh(employee)

        logger.info(f"Created employee {employee.id} in company {company_id}")
        return employee

    def _apply_fields(self, employee: Employee, data: Dict[str, Any]) -> None:
        employee.name = _clean(data.get("name"))
        employee.pf_number = _clean(data.get("pf_number"))
        employee.esi_number = _clean(data.get("esi_number"))
        employee.joining_date = data.get("joining_date")
        employee.leaving_date = data.get("leaving_date")
        employee.company_id = data["company_id"]
        if data.get("is_active") is not None:
            employee.is_active = data["is_active"]

    async def update_employee(self, employee_id: int, data: Dict[str, Any]) -> Employee:
        """
        Replace an employee's fields.

        The id in the payload must match the path id. Both the old and the
        new company are re-validated when the employee moves.
        """
        if data.get("id") is not None and data["id"] != employee_id:
            raise IdMismatchException(employee_id, data["id"])

        employee = await self.get_employee(employee_id)
        await self._get_company(data["company_id"])

        old_company_id = employee.company_id
        self._apply_fields(employee, data)

        await self.revalidate(employee.company_id)
        if old_company_id != employee.company_id:
            await self.revalidate(old_company_id)

        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def bulk_fix(self, fixes: Sequence[Dict[str, Any]]) -> List[Employee]:
        """
        Apply a batch of corrections keyed by employee id.

        An unknown id fails the whole batch and nothing is written. Each
        affected company is re-validated once.

        Returns:
            Employees of the first fix's company
        """
        if not fixes:
            raise ValidationException("No fixes provided.")

        touched = set()
        try:
            for fix in fixes:
                employee = await self.db.get(Employee, fix["id"])
                if employee is None:
                    raise EmployeeNotFoundException(
                        fix["id"], message=f"Employee with ID {fix['id']} not found."
                    )
                await self._get_company(fix["company_id"])
                touched.add(employee.company_id)
                self._apply_fields(employee, fix)
                touched.add(employee.company_id)

            for company_id in sorted(touched):
                await self.revalidate(company_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Applied {len(fixes)} employee fixes across {len(touched)} companies")
        return await self.list_employees(fixes[0]["company_id"])

    async def delete_employee(self, employee_id: int) -> None:
        """Delete an employee with its payroll entries."""
        employee = await self.get_employee(employee_id)
        company_id = employee.company_id

        await self.db.execute(
            delete(PayrollEntry).where(PayrollEntry.employee_id == employee_id)
        )
        await self.db.delete(employee)

        await self.revalidate(company_id)
        await self.db.commit()
        logger.info(f"Deleted employee {employee_id} from company {company_id}")

    async def delete_company_employees(self, company_id: int) -> int:
        """Delete every employee of a company with their payroll entries."""
        employees = await self.company_employees(company_id)
        if not employees:
            raise EmployeeNotFoundException(
                message=f"No employees found for company ID {company_id}."
            )

        employee_ids = [e.id for e in employees]
        await self.db.execute(
            delete(PayrollEntry).where(PayrollEntry.employee_id.in_(employee_ids))
        )
        for employee in employees:
            await self.db.delete(employee)

        await self.revalidate(company_id)
        await self.db.commit()
        logger.info(f"Deleted {len(employees)} employees from company {company_id}")
        return len(employees)

    # ===========================================
    # UPLOAD
    # ===========================================

    async def upload_employees(self, company_id: int, content: bytes) -> EmployeeUploadResult:
        """
        Load employees from a spreadsheet.

        Rows matching an existing employee, or an earlier row of the same
        file, on name/PF/ESI are skipped silently. Accepted rows form the
        batch for re-validation.
        """
        await self._get_company(company_id)
        rows = read_employee_rows(open_workbook(content))

        seen = {
            exact_key(e.company_id, e.name, e.pf_number, e.esi_number)
            for e in await self.company_employees(company_id)
        }

        result = EmployeeUploadResult()
        accepted: List[Employee] = []
        for row in rows:
            key = exact_key(company_id, row["name"], row["pf_number"], row["esi_number"])
            if key in seen:
                result.skipped += 1
                continue
            seen.add(key)

            employee = Employee(
                company_id=company_id,
                name=_clean(row["name"]),
                pf_number=_clean(row["pf_number"]),
                esi_number=_clean(row["esi_number"]),
                joining_date=row["joining_date"],
                leaving_date=row["leaving_date"],
                is_active=True,
            )
            self.db.add(employee)
            accepted.append(employee)

        try:
            await self.revalidate(company_id, batch=accepted)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        result.added = len(accepted)
        result.with_errors = sum(1 for e in accepted if e.error)
        result.employees = accepted

        logger.info(
            f"Employee upload for company {company_id}: {len(rows)} rows, "
            f"{result.added} added, {result.skipped} skipped, {result.with_errors} with errors"
        )
        return result
