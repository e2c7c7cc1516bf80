"""
CreativeGroups Payroll - Payroll Service Tests

Payroll months and manual payroll entry maintenance.
"""

from decimal import Decimal

import pytest
from sqlalchemy import select

from app.models.company import Company
from app.models.payroll import DEFAULT_TOTAL_DAYS, PayrollEntry
from app.services.payroll_service import PayrollService
from app.utils.error_handling import (
    BusinessRuleException,
    CompanyNotFoundException,
    DuplicateEntryException,
    IdMismatchException,
    NotFoundException,
    PayrollMonthNotFoundException,
)


class TestPayrollMonths:
    """Test payroll month maintenance."""

    @pytest.mark.asyncio
    async def test_create_month_defaults_total_days(self, db_session, test_company):
        month = await PayrollService(db_session).create_month(test_company.id, " September 2025 ")

        assert month.month == "September 2025"
        assert month.total_days == DEFAULT_TOTAL_DAYS

    @pytest.mark.asyncio
    async def test_create_month_unknown_company(self, db_session):
        with pytest.raises(CompanyNotFoundException):
            await PayrollService(db_session).create_month(999, "September 2025")

    @pytest.mark.asyncio
    async def test_list_months_by_company(self, db_session, test_company, test_month):
        service = PayrollService(db_session)
        await service.create_month(test_company.id, "September 2025", 30)

        months = await service.list_months(test_company.id)
        assert [m.month for m in months] == ["August 2025", "September 2025"]
        assert await service.list_months(test_company.id + 1) == []

    @pytest.mark.asyncio
    async def test_update_month(self, db_session, test_month):
        month = await PayrollService(db_session).update_month(
            test_month.id, {"id": test_month.id, "total_days": 30},
        )

        assert month.total_days == 30
        assert month.month == "August 2025"

    @pytest.mark.asyncio
    async def test_update_month_id_mismatch(self, db_session, test_month):
        with pytest.raises(IdMismatchException):
            await PayrollService(db_session).update_month(test_month.id, {"id": test_month.id + 1})

    @pytest.mark.asyncio
    async def test_changing_total_days_rederives_ncp(self, db_session, test_month, test_employees):
        service = PayrollService(db_session)
        entry = await service.add_entry(
            test_employees[0].id, test_month.id,
            Decimal("22"), Decimal("15000"), Decimal("18000"),
        )
        assert entry.ncp == Decimal("9")
        entry_id = entry.id

        await service.update_month(test_month.id, {"total_days": 28})

        entry = await service.get_entry(entry_id)
        assert entry.ncp == Decimal("6")

    @pytest.mark.asyncio
    async def test_month_with_entries_cannot_change_company(
        self, db_session, test_organization, test_month, test_employees,
    ):
        service = PayrollService(db_session)
        other = Company(name="Other Mills", pf_enabled=True, esi_enabled=True, organization_id=test_organization.id)
        db_session.add(other)
        await db_session.commit()
        await service.add_entry(
            test_employees[0].id, test_month.id,
            Decimal("26"), Decimal("15000"), Decimal("18000"),
        )

        with pytest.raises(BusinessRuleException):
            await service.update_month(test_month.id, {"company_id": other.id})

    @pytest.mark.asyncio
    async def test_empty_month_can_change_company(self, db_session, test_organization, test_company):
        service = PayrollService(db_session)
        month = await service.create_month(test_company.id, "September 2025", 30)
        other = Company(name="Other Mills", pf_enabled=True, esi_enabled=True, organization_id=test_organization.id)
        db_session.add(other)
        await db_session.commit()

        month = await service.update_month(month.id, {"company_id": other.id})
        assert month.company_id == other.id

    @pytest.mark.asyncio
    async def test_delete_month_removes_entries(self, db_session, test_company, test_month, test_employees):
        service = PayrollService(db_session)
        await service.add_entry(
            test_employees[0].id, test_month.id,
            Decimal("26"), Decimal("15000"), Decimal("18000"),
        )
        month_id = test_month.id

        await service.delete_month(month_id)

        assert (await db_session.execute(select(PayrollEntry))).scalars().all() == []
        with pytest.raises(PayrollMonthNotFoundException):
            await service.get_month(month_id)


class TestPayrollEntries:
    """Test manual entry maintenance."""

    @pytest.mark.asyncio
    async def test_add_entry_derives_ncp_and_company(self, db_session, test_company, test_month, test_employees):
        entry = await PayrollService(db_session).add_entry(
            test_employees[0].id, test_month.id,
            Decimal("27.5"), Decimal("15000"), Decimal("18000"),
        )

        assert entry.company_id == test_company.id
        assert entry.ncp == Decimal("3.5")
        assert entry.reason == 0
        assert entry.employee.name == "Asha"

    @pytest.mark.asyncio
    async def test_second_entry_for_same_month_conflicts(self, db_session, test_month, test_employees):
        service = PayrollService(db_session)
        await service.add_entry(
            test_employees[0].id, test_month.id,
            Decimal("26"), Decimal("15000"), Decimal("18000"),
        )

        with pytest.raises(DuplicateEntryException):
            await service.add_entry(
                test_employees[0].id, test_month.id,
                Decimal("20"), Decimal("12000"), Decimal("14000"),
            )

    @pytest.mark.asyncio
    async def test_add_entry_month_of_another_company(self, db_session, test_company, test_employees):
        service = PayrollService(db_session)
        other_month = await service.create_month(test_company.id, "September 2025")
        other_month.company_id = test_company.id + 100
        await db_session.commit()

        with pytest.raises(BusinessRuleException):
            await service.add_entry(
                test_employees[0].id, other_month.id,
                Decimal("26"), Decimal("15000"), Decimal("18000"),
            )

    @pytest.mark.asyncio
    async def test_update_entry_recomputes_ncp(self, db_session, test_month, test_employees):
        service = PayrollService(db_session)
        entry = await service.add_entry(
            test_employees[1].id, test_month.id,
            Decimal("0"), Decimal("0"), Decimal("0"),
        )
        assert entry.ncp == Decimal("31")

        entry = await service.update_entry(
            entry.id, Decimal("20"), Decimal("10000"), Decimal("12000"), reason=0,
        )
        assert entry.ncp == Decimal("11")
        assert entry.gross_salary == Decimal("12000")

    @pytest.mark.asyncio
    async def test_list_entries_zero_days_first(self, db_session, test_month, test_employees):
        service = PayrollService(db_session)
        company_id = test_month.company_id
        await service.add_entry(
            test_employees[0].id, test_month.id,
            Decimal("26"), Decimal("15000"), Decimal("18000"),
        )
        await service.add_entry(
            test_employees[1].id, test_month.id,
            Decimal("0"), Decimal("0"), Decimal("0"),
        )

        entries = await service.list_entries(company_id, test_month.id)
        assert [e.employee.name for e in entries] == ["Bala", "Asha"]

        entries = await service.list_entries(company_id, test_month.id, search_pf="pf001")
        assert [e.employee.name for e in entries] == ["Asha"]

    @pytest.mark.asyncio
    async def test_delete_entry(self, db_session, test_month, test_employees):
        service = PayrollService(db_session)
        entry = await service.add_entry(
            test_employees[0].id, test_month.id,
            Decimal("26"), Decimal("15000"), Decimal("18000"),
        )

        await service.delete_entry(entry.id)

        with pytest.raises(NotFoundException):
            await service.get_entry(entry.id)
