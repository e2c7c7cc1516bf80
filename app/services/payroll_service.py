"""
CreativeGroups Payroll - Payroll Service

Payroll months and manual maintenance of payroll entries.

NCP (non contributing period) is always derived from the month's total
days and the entry's working days, never taken from input.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.company import Company
from app.models.employee import Employee
from app.models.payroll import DEFAULT_TOTAL_DAYS, PayrollEntry, PayrollMonth
from app.services.statutory_calculators import compute_ncp
from app.utils.error_handling import (
    BusinessRuleException,
    CompanyNotFoundException,
    DuplicateEntryException,
    EmployeeNotFoundException,
    IdMismatchException,
    NotFoundException,
    PayrollMonthNotFoundException,
)

logger = logging.getLogger(__name__)


class PayrollService:
    """
    Payroll service for payroll months and their entries.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ===========================================
    # PAYROLL MONTHS
    # ===========================================

    async def list_months(self, company_id: Optional[int] = None) -> List[PayrollMonth]:
        query = select(PayrollMonth)
        if company_id is not None:
            query = query.where(PayrollMonth.company_id == company_id)
        result = await self.db.execute(query.order_by(PayrollMonth.id))
        return list(result.scalars().all())

    async def get_month(self, payroll_month_id: int) -> PayrollMonth:
        month = await self.db.get(PayrollMonth, payroll_month_id)
        if month is None:
            raise PayrollMonthNotFoundException(payroll_month_id)
        return month

    async def get_month_for_company(self, payroll_month_id: int, company_id: int) -> PayrollMonth:
        """Payroll month that must belong to the given company."""
        month = await self.get_month(payroll_month_id)
        if month.company_id != company_id:
            raise BusinessRuleException(
                "Payroll month does not belong to this company.",
                details={"company_id": company_id, "payroll_month_id": payroll_month_id},
            )
        return month

    async def create_month(
        self,
        company_id: int,
        month: str,
        total_days: int = DEFAULT_TOTAL_DAYS,
    ) -> PayrollMonth:
        """Create a payroll month for a company."""
        if await self.db.get(Company, company_id) is None:
            raise CompanyNotFoundException(company_id)

        payroll_month = PayrollMonth(
            company_id=company_id,
            month=month.strip(),
            total_days=total_days,
        )
        self.db.add(payroll_month)
        await self.db.commit()
        await self.db.refresh(payroll_month)

        logger.info(f"Created payroll month '{payroll_month.month}' for company {company_id}")
        return payroll_month

    async def update_month(self, payroll_month_id: int, data: Dict[str, Any]) -> PayrollMonth:
        """
        Update a payroll month.

        A new total_days re-derives the NCP of every entry in the same commit.
        A month that already has entries cannot move to another company,
        since its entries belong to that company's employees.
        """
        if data.get("id") is not None and data["id"] != payroll_month_id:
            raise IdMismatchException(payroll_month_id, data["id"])

        payroll_month = await self.get_month(payroll_month_id)
        result = await self.db.execute(
            select(PayrollEntry).where(PayrollEntry.payroll_month_id == payroll_month_id)
        )
        entries = list(result.scalars().all())

        new_company_id = data.get("company_id")
        if new_company_id is not None and new_company_id != payroll_month.company_id:
            if await self.db.get(Company, new_company_id) is None:
                raise CompanyNotFoundException(new_company_id)
            if entries:
                raise BusinessRuleException(
                    "Payroll month has entries and cannot be moved to another company.",
                    details={"payroll_month_id": payroll_month_id, "entries": len(entries)},
                )
            payroll_month.company_id = new_company_id
        if data.get("month") is not None:
            payroll_month.month = data["month"].strip()
        if data.get("total_days") is not None:
            payroll_month.total_days = data["total_days"]

        for entry in entries:
            entry.ncp = compute_ncp(payroll_month.total_days, entry.working_days)

        await self.db.commit()
        logger.info(f"Updated payroll month {payroll_month_id}; NCP re-derived for {len(entries)} entries")
        await self.db.refresh(payroll_month)
        return payroll_month

    async def delete_month(self, payroll_month_id: int) -> None:
        """Delete a payroll month together with its entries."""
        payroll_month = await self.get_month(payroll_month_id)
        await self.db.execute(
            delete(PayrollEntry).where(PayrollEntry.payroll_month_id == payroll_month_id)
        )
        await self.db.delete(payroll_month)
        await self.db.commit()
        logger.info(f"Deleted payroll month {payroll_month_id}")

    # ===========================================
    # PAYROLL ENTRIES
    # ===========================================

    async def list_entries(
        self,
        company_id: int,
        payroll_month_id: int,
        search_name: Optional[str] = None,
        search_pf: Optional[str] = None,
        search_esi: Optional[str] = None,
    ) -> List[PayrollEntry]:
        """
        Entries of a company's month for active employees.

        Zero working day rows come first, then by employee name.
        """
        query = (
            select(PayrollEntry)
            .join(Employee, PayrollEntry.employee_id == Employee.id)
            .options(selectinload(PayrollEntry.employee))
            .where(
                PayrollEntry.company_id == company_id,
                PayrollEntry.payroll_month_id == payroll_month_id,
                Employee.is_active == True,
            )
        )

        if search_name and search_name.strip():
            query = query.where(func.lower(Employee.name).contains(search_name.strip().lower()))
        if search_pf and search_pf.strip():
            query = query.where(func.lower(Employee.pf_number).contains(search_pf.strip().lower()))
        if search_esi and search_esi.strip():
            query = query.where(func.lower(Employee.esi_number).contains(search_esi.strip().lower()))

        query = query.execution_options(populate_existing=True).order_by(
            case((PayrollEntry.working_days == 0, 0), else_=1),
            Employee.name,
            PayrollEntry.id,
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_entry(self, entry_id: int) -> PayrollEntry:
        result = await self.db.execute(
            select(PayrollEntry)
            .options(selectinload(PayrollEntry.employee))
            .where(PayrollEntry.id == entry_id)
            .execution_options(populate_existing=True)
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundException("Payroll entry", entry_id, message="Payroll entry not found.")
        return entry

    async def add_entry(
        self,
        employee_id: int,
        payroll_month_id: int,
        working_days: Decimal,
        basic_da: Decimal,
        gross_salary: Decimal,
        reason: int = 0,
    ) -> PayrollEntry:
        """
        Add one payroll entry by hand.

        The company is copied from the employee. A second entry for the
        same employee and month is a conflict.
        """
        employee = await self.db.get(Employee, employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)
        payroll_month = await self.get_month_for_company(payroll_month_id, employee.company_id)

        existing = await self.db.execute(
            select(PayrollEntry.id).where(
                PayrollEntry.employee_id == employee_id,
                PayrollEntry.payroll_month_id == payroll_month_id,
            )
        )
        if existing.first() is not None:
            raise DuplicateEntryException(
                "Payroll entry",
                message="A payroll entry already exists for this employee and month.",
                details={"employee_id": employee_id, "payroll_month_id": payroll_month_id},
            )

        entry = PayrollEntry(
            employee_id=employee_id,
            company_id=employee.company_id,
            payroll_month_id=payroll_month_id,
            working_days=working_days,
            basic_da=basic_da,
            gross_salary=gross_salary,
            ncp=compute_ncp(payroll_month.total_days, working_days),
            reason=reason,
        )
        self.db.add(entry)
        await self.db.commit()

        return await self.get_entry(entry.id)

    async def update_entry(
        self,
        entry_id: int,
        working_days: Decimal,
        basic_da: Decimal,
        gross_salary: Decimal,
        reason: int,
    ) -> PayrollEntry:
        """Update attendance, wages and reason of an entry; NCP is re-derived."""
        entry = await self.get_entry(entry_id)
        payroll_month = await self.get_month(entry.payroll_month_id)

        entry.working_days = working_days
        entry.basic_da = basic_da
        entry.gross_salary = gross_salary
        entry.reason = reason
        entry.ncp = compute_ncp(payroll_month.total_days, working_days)

        await self.db.commit()
        return await self.get_entry(entry_id)

    async def delete_entry(self, entry_id: int) -> None:
        entry = await self.get_entry(entry_id)
        await self.db.delete(entry)
        await self.db.commit()
