"""
CreativeGroups Payroll - Employee Validation Tests

Unit tests for the employee master validation rule.
"""

from types import SimpleNamespace

import pytest

from app.services.employee_validation import (
    DUPLICATE_ESI_IN_DATABASE,
    DUPLICATE_ESI_IN_UPLOAD,
    DUPLICATE_PF_IN_DATABASE,
    DUPLICATE_PF_IN_UPLOAD,
    ESI_REQUIRED,
    INVALID_COMPANY,
    NAME_REQUIRED,
    PF_REQUIRED,
    collect_errors,
    identifier_key,
    is_esi_nil,
    revalidate_company,
    validate_employee,
)


def company(pf=True, esi=True):
    return SimpleNamespace(id=1, pf_enabled=pf, esi_enabled=esi)


def row(name="Asha", pf="PF001", esi="ESI001", id=None):
    return SimpleNamespace(id=id, name=name, pf_number=pf, esi_number=esi, error=None)


class TestIdentifierHelpers:
    """Test identifier normalisation."""

    def test_identifier_key_trims_and_uppercases(self):
        assert identifier_key("  pf001 ") == "PF001"

    def test_blank_identifier_has_empty_key(self):
        assert identifier_key("   ") == ""
        assert identifier_key(None) == ""

    @pytest.mark.parametrize("value", ["NIL", "nil", " Nil "])
    def test_esi_nil_any_case(self, value):
        assert is_esi_nil(value)

    def test_blank_is_not_nil(self):
        assert not is_esi_nil("")


class TestRequiredFields:
    """Test the required field checks, first failure wins."""

    def test_valid_row(self):
        assert validate_employee(row(), company()) is None

    def test_name_required_before_everything(self):
        assert validate_employee(row(name="  ", pf="", esi=""), None) == NAME_REQUIRED

    def test_invalid_company(self):
        assert validate_employee(row(), None) == INVALID_COMPANY

    def test_pf_required_when_pf_enabled(self):
        assert validate_employee(row(pf=" "), company(pf=True)) == PF_REQUIRED

    def test_pf_not_required_when_pf_disabled(self):
        assert validate_employee(row(pf=""), company(pf=False)) is None

    def test_esi_required_when_esi_enabled(self):
        assert validate_employee(row(esi=""), company(esi=True)) == ESI_REQUIRED

    def test_esi_nil_satisfies_esi_requirement(self):
        assert validate_employee(row(esi="nil"), company(esi=True)) is None

    def test_pf_checked_before_esi(self):
        assert validate_employee(row(pf="", esi=""), company()) == PF_REQUIRED


class TestDuplicates:
    """Test duplicate detection in the batch and in the database."""

    def test_duplicate_pf_in_upload_ignores_case_and_spaces(self):
        first = row(pf="pf001", esi="ESI001")
        second = row(name="Bala", pf=" PF001 ", esi="ESI002")
        batch = [first, second]

        assert validate_employee(second, company(), batch=batch) == DUPLICATE_PF_IN_UPLOAD
        assert validate_employee(first, company(), batch=batch) == DUPLICATE_PF_IN_UPLOAD

    def test_duplicate_esi_in_upload(self):
        first = row(pf="PF001", esi="ESI001")
        second = row(name="Bala", pf="PF002", esi="esi001")

        assert validate_employee(second, company(), batch=[first, second]) == DUPLICATE_ESI_IN_UPLOAD

    def test_duplicate_pf_in_database(self):
        existing = row(id=1, pf="PF001", esi="ESI001")
        new = row(id=2, name="Bala", pf="PF001", esi="ESI002")

        assert validate_employee(new, company(), persisted=[existing, new]) == DUPLICATE_PF_IN_DATABASE

    def test_duplicate_esi_in_database(self):
        existing = row(id=1, pf="PF001", esi="ESI001")
        new = row(id=2, name="Bala", pf="PF002", esi="ESI001")

        assert validate_employee(new, company(), persisted=[existing, new]) == DUPLICATE_ESI_IN_DATABASE

    def test_upload_duplicate_reported_before_database_duplicate(self):
        existing = row(id=1, pf="PF001", esi="ESI001")
        a = row(id=2, name="Bala", pf="PF001", esi="ESI002")
        b = row(id=3, name="Chitra", pf="PF001", esi="ESI003")

        error = validate_employee(a, company(), batch=[a, b], persisted=[existing, a, b])
        assert error == DUPLICATE_PF_IN_UPLOAD

    def test_nil_never_duplicates(self):
        a = row(id=1, pf="PF001", esi="NIL")
        b = row(id=2, name="Bala", pf="PF002", esi="nil")

        assert validate_employee(b, company(), batch=[a, b], persisted=[a, b]) is None

    def test_blank_identifiers_never_duplicate(self):
        a = row(id=1, pf="", esi="ESI001")
        b = row(id=2, name="Bala", pf="", esi="ESI002")

        assert validate_employee(b, company(pf=False), persisted=[a, b]) is None

    def test_row_is_not_its_own_duplicate(self):
        a = row(id=1)
        assert validate_employee(a, company(), batch=[a], persisted=[a]) is None


class TestRevalidateCompany:
    """Test whole-company re-validation."""

    def test_fixing_one_row_clears_its_sibling(self):
        a = row(id=1, pf="PF001", esi="ESI001")
        b = row(id=2, name="Bala", pf="PF001", esi="ESI002")

        assert revalidate_company(company(), [a, b]) == 2
        assert a.error == DUPLICATE_PF_IN_DATABASE
        assert b.error == DUPLICATE_PF_IN_DATABASE

        b.pf_number = "PF002"
        assert revalidate_company(company(), [a, b]) == 0
        assert a.error is None
        assert b.error is None

    def test_batch_rows_get_upload_message_existing_rows_database_message(self):
        existing = row(id=1, pf="PF001", esi="ESI001")
        new = row(id=2, name="Bala", pf="PF001", esi="ESI002")

        revalidate_company(company(), [existing, new], batch=[new])

        assert new.error == DUPLICATE_PF_IN_DATABASE
        assert existing.error == DUPLICATE_PF_IN_DATABASE

    def test_running_twice_gives_same_errors(self):
        rows = [
            row(id=1, pf="PF001", esi="ESI001"),
            row(id=2, name="Bala", pf="pf001 ", esi="ESI002"),
            row(id=3, name="Chitra", pf="PF003", esi="esi002"),
            row(id=4, name="", pf="PF004", esi="ESI004"),
            row(id=5, name="Dev", pf="PF005", esi="NIL"),
        ]

        first_count = revalidate_company(company(), rows)
        first = [r.error for r in rows]
        second_count = revalidate_company(company(), rows)

        assert first_count == second_count == 4
        assert [r.error for r in rows] == first

    def test_running_twice_with_batch_gives_same_errors(self):
        existing = row(id=1, pf="PF001", esi="ESI001")
        new_a = row(id=2, name="Bala", pf="PF009", esi="ESI002")
        new_b = row(id=3, name="Chitra", pf="PF009", esi="ESI003")
        new_c = row(id=4, name="Dev", pf="PF001", esi="ESI004")
        rows = [existing, new_a, new_b, new_c]
        batch = [new_a, new_b, new_c]

        first_count = revalidate_company(company(), rows, batch=batch)
        first = [r.error for r in rows]
        second_count = revalidate_company(company(), rows, batch=batch)

        assert first == [
            DUPLICATE_PF_IN_DATABASE,
            DUPLICATE_PF_IN_UPLOAD,
            DUPLICATE_PF_IN_UPLOAD,
            DUPLICATE_PF_IN_DATABASE,
        ]
        assert first_count == second_count == 4
        assert [r.error for r in rows] == first

    def test_collect_errors_does_not_write(self):
        a = row(id=1, name="")
        results = collect_errors(company(), [a])

        assert results == [(a, NAME_REQUIRED)]
        assert a.error is None
