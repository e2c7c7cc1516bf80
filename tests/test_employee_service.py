"""
CreativeGroups Payroll - Employee Service Tests

Tests for employee master maintenance, uploads and re-validation.
"""

from datetime import date

import pytest
from sqlalchemy import select

from app.models.employee import Employee
from app.models.payroll import PayrollEntry
from app.services.employee_service import EmployeeService, read_employee_rows
from app.services.employee_validation import (
    DUPLICATE_PF_IN_DATABASE,
    PF_REQUIRED,
)
from app.utils.error_handling import (
    CompanyNotFoundException,
    DuplicateEntryException,
    EmployeeNotFoundException,
    IdMismatchException,
    MissingColumnsException,
)
from app.utils.spreadsheet import open_workbook
from fixtures.workbooks import EMPLOYEE_HEADER, build_workbook


def employee_data(company_id, **overrides):
    data = {
        "name": "Dev",
        "pf_number": "PF004",
        "esi_number": "ESI004",
        "joining_date": date(2024, 1, 1),
        "leaving_date": None,
        "company_id": company_id,
        "is_active": True,
    }
    data.update(overrides)
    return data


async def reload(db_session, company_id):
    result = await db_session.execute(
        select(Employee)
        .where(Employee.company_id == company_id)
        .order_by(Employee.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


class TestReadEmployeeRows:

    def test_stops_at_blank_name(self):
        sheet = open_workbook(build_workbook(EMPLOYEE_HEADER, [
            ["Dev", "2024-01-01", "", "PF004", "ESI004"],
            ["", "", "", "", ""],
            ["Hidden", "2024-01-01", "", "PF009", "ESI009"],
        ]))
        rows = read_employee_rows(sheet)

        assert len(rows) == 1
        assert rows[0]["joining_date"] == date(2024, 1, 1)
        assert rows[0]["leaving_date"] is None

    def test_leaving_date_column_is_optional(self):
        header = ["name", "joining_date", "pf", "esi"]
        sheet = open_workbook(build_workbook(header, [["Dev", "01/02/2024", "PF004", "NIL"]]))
        rows = read_employee_rows(sheet)

        assert rows[0]["joining_date"] == date(2024, 2, 1)
        assert rows[0]["esi_number"] == "NIL"

    def test_missing_columns(self):
        sheet = open_workbook(build_workbook(["name", "pf"], header_row=2))
        with pytest.raises(MissingColumnsException) as exc_info:
            read_employee_rows(sheet)
        assert exc_info.value.details["missing_columns"] == ["joining_date", "esi"]


class TestEmployeeService:
    """Test single employee operations."""

    @pytest.mark.asyncio
    async def test_create_employee(self, db_session, test_company, test_employees):
        employee = await EmployeeService(db_session).create_employee(
            company_id=test_company.id, name=" Dev ", pf_number="PF004", esi_number="ESI004",
        )

        assert employee.id is not None
        assert employee.name == "Dev"
        assert employee.error is None

    @pytest.mark.asyncio
    async def test_create_exact_duplicate_conflicts(self, db_session, test_company, test_employees):
        with pytest.raises(DuplicateEntryException) as exc_info:
            await EmployeeService(db_session).create_employee(
                company_id=test_company.id, name="asha", pf_number="pf001", esi_number="esi001",
            )
        assert exc_info.value.message == "Employee already exists."
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_create_in_unknown_company(self, db_session):
        with pytest.raises(CompanyNotFoundException):
            await EmployeeService(db_session).create_employee(company_id=999, name="Dev")

    @pytest.mark.asyncio
    async def test_create_with_duplicate_pf_flags_both_rows(self, db_session, test_company, test_employees):
        employee = await EmployeeService(db_session).create_employee(
            company_id=test_company.id, name="Dev", pf_number="PF001", esi_number="ESI004",
        )

        assert employee.error == DUPLICATE_PF_IN_DATABASE
        rows = await reload(db_session, test_company.id)
        assert rows[0].error == DUPLICATE_PF_IN_DATABASE

    @pytest.mark.asyncio
    async def test_update_clears_sibling_error(self, db_session, test_company, test_employees):
        service = EmployeeService(db_session)
        dev = await service.create_employee(
            company_id=test_company.id, name="Dev", pf_number="PF001", esi_number="ESI004",
        )

        updated = await service.update_employee(dev.id, employee_data(test_company.id, id=dev.id))

        assert updated.error is None
        rows = await reload(db_session, test_company.id)
        assert all(row.error is None for row in rows)

    @pytest.mark.asyncio
    async def test_update_id_mismatch(self, db_session, test_company, test_employees):
        with pytest.raises(IdMismatchException):
            await EmployeeService(db_session).update_employee(
                test_employees[0].id, employee_data(test_company.id, id=test_employees[0].id + 1),
            )

    @pytest.mark.asyncio
    async def test_update_unknown_employee(self, db_session, test_company):
        with pytest.raises(EmployeeNotFoundException):
            await EmployeeService(db_session).update_employee(999, employee_data(test_company.id))

    @pytest.mark.asyncio
    async def test_delete_employee_removes_payroll_entries(
        self, db_session, test_company, test_month, test_employees,
    ):
        asha = test_employees[0]
        db_session.add(PayrollEntry(
            employee_id=asha.id, company_id=test_company.id, payroll_month_id=test_month.id,
            working_days=26, basic_da=15000, gross_salary=18000, ncp=5, reason=0,
        ))
        await db_session.commit()

        await EmployeeService(db_session).delete_employee(asha.id)

        entries = (await db_session.execute(select(PayrollEntry))).scalars().all()
        assert entries == []
        assert len(await reload(db_session, test_company.id)) == 2

    @pytest.mark.asyncio
    async def test_error_overview_puts_errors_first(self, db_session, test_company, test_employees):
        service = EmployeeService(db_session)
        await service.create_employee(company_id=test_company.id, name="Dev", pf_number="", esi_number="ESI004")

        has_errors, employees = await service.error_overview(test_company.id)

        assert has_errors
        assert employees[0].name == "Dev"
        assert employees[0].error == PF_REQUIRED
        assert len(employees) == 4

    @pytest.mark.asyncio
    async def test_list_employees_search(self, db_session, test_company, test_employees):
        service = EmployeeService(db_session)

        assert [e.name for e in await service.list_employees(test_company.id)] == ["Asha", "Bala", "Chitra"]
        assert [e.name for e in await service.list_employees(test_company.id, search_name="HIT")] == ["Chitra"]
        assert [e.name for e in await service.list_employees(test_company.id, search_esi="nil")] == ["Bala"]


class TestBulkFix:
    """Test batch corrections."""

    @pytest.mark.asyncio
    async def test_fixes_are_applied_together(self, db_session, test_company, test_employees):
        service = EmployeeService(db_session)
        dev = await service.create_employee(
            company_id=test_company.id, name="Dev", pf_number="PF001", esi_number="ESI004",
        )

        employees = await service.bulk_fix([
            employee_data(test_company.id, id=dev.id, pf_number="PF004"),
        ])

        assert len(employees) == 4
        assert all(e.error is None for e in employees)

    @pytest.mark.asyncio
    async def test_unknown_id_rolls_back_whole_batch(self, db_session, test_company, test_employees):
        company_id = test_company.id
        asha_id = test_employees[0].id

        with pytest.raises(EmployeeNotFoundException) as exc_info:
            await EmployeeService(db_session).bulk_fix([
                employee_data(company_id, id=asha_id, name="Asha Renamed", pf_number="PF001", esi_number="ESI001"),
                employee_data(company_id, id=999),
            ])

        assert exc_info.value.message == "Employee with ID 999 not found."
        # Rollback expires loaded instances, so read them back
        rows = await reload(db_session, company_id)
        assert rows[0].name == "Asha"


class TestEmployeeUpload:
    """Test employee master uploads."""

    @pytest.mark.asyncio
    async def test_upload_adds_skips_and_flags(self, db_session, test_company, test_employees):
        content = build_workbook(EMPLOYEE_HEADER, [
            ["Asha", "2020-01-01", "", "PF001", "ESI001"],
            ["Dev", "2024-01-01", "", "PF004", "ESI004"],
            ["Esha", "2024-02-01", "", "PF001", "ESI005"],
            ["Esha", "2024-02-01", "", "PF001", "ESI005"],
        ])

        result = await EmployeeService(db_session).upload_employees(test_company.id, content)

        assert result.added == 2
        assert result.skipped == 2
        assert result.with_errors == 1
        assert [e.name for e in result.employees] == ["Dev", "Esha"]
        assert result.employees[1].error == DUPLICATE_PF_IN_DATABASE

        rows = await reload(db_session, test_company.id)
        assert len(rows) == 5
        # The existing row sharing the PF number is flagged too
        assert rows[0].error == DUPLICATE_PF_IN_DATABASE

    @pytest.mark.asyncio
    async def test_upload_to_unknown_company(self, db_session):
        content = build_workbook(EMPLOYEE_HEADER, [["Dev", "2024-01-01", "", "PF004", "ESI004"]])
        with pytest.raises(CompanyNotFoundException):
            await EmployeeService(db_session).upload_employees(999, content)


class TestDeleteCompanyEmployees:

    @pytest.mark.asyncio
    async def test_deletes_all(self, db_session, test_company, test_employees):
        count = await EmployeeService(db_session).delete_company_employees(test_company.id)

        assert count == 3
        assert await reload(db_session, test_company.id) == []

    @pytest.mark.asyncio
    async def test_revalidates_company_after_delete(self, db_session, test_company, test_employees, monkeypatch):
        service = EmployeeService(db_session)
        calls = []
        original = service.revalidate

        async def recording_revalidate(company_id, batch=()):
            calls.append(company_id)
            return await original(company_id, batch)

        monkeypatch.setattr(service, "revalidate", recording_revalidate)
        company_id = test_company.id

        await service.delete_company_employees(company_id)

        assert calls == [company_id]

    @pytest.mark.asyncio
    async def test_no_employees(self, db_session, test_company):
        with pytest.raises(EmployeeNotFoundException) as exc_info:
            await EmployeeService(db_session).delete_company_employees(test_company.id)
        assert exc_info.value.message == f"No employees found for company ID {test_company.id}."
