"""
CreativeGroups Payroll - Employee Validation Rule

Decides the error text of one employee master row. A row's duplicate status
depends on every other row of the company, so whenever a company's employee
set changes the whole set is re-validated in one pass (revalidate_company).

Checks run in order and the first failure wins:
1. Name is required
2. Company must resolve
3. PF number required when the company is PF enabled
4. ESI number required when the company is ESI enabled, unless it is "NIL"
5. Duplicate PF number among the rows of the current batch
6. Duplicate ESI number among the rows of the current batch
7. Duplicate PF number among the persisted rows of the company
8. Duplicate ESI number among the persisted rows of the company

Identifier comparison trims and ignores case. Blank identifiers never count
as duplicates, and "NIL" never takes part in ESI duplicate detection.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from app.models.employee import ESI_NIL

logger = logging.getLogger(__name__)


# ===========================================
# MESSAGES
# ===========================================

NAME_REQUIRED = "Name is required."
INVALID_COMPANY = "Invalid company."
PF_REQUIRED = "PF Number required."
ESI_REQUIRED = "ESI Number required."
DUPLICATE_PF_IN_UPLOAD = "Duplicate PF Number in upload."
DUPLICATE_ESI_IN_UPLOAD = "Duplicate ESI Number in upload."
DUPLICATE_PF_IN_DATABASE = "Duplicate PF Number in database."
DUPLICATE_ESI_IN_DATABASE = "Duplicate ESI Number in database."


# ===========================================
# IDENTIFIER HELPERS
# ===========================================

def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_esi_nil(value: Optional[str]) -> bool:
    """True when the ESI value is the "intentionally absent" sentinel."""
    return not is_blank(value) and value.strip().upper() == ESI_NIL


def identifier_key(value: Optional[str]) -> str:
    """Comparison key for PF/ESI numbers. Empty string means "no value"."""
    if is_blank(value):
        return ""
    return value.strip().upper()


def _pf_key(row: Any) -> str:
    return identifier_key(row.pf_number)


def _esi_key(row: Any) -> str:
    if is_esi_nil(row.esi_number):
        return ""
    return identifier_key(row.esi_number)


def _same_row(row: Any, other: Any) -> bool:
    if row is other:
        return True
    return row.id is not None and row.id == other.id


def _has_duplicate(row: Any, key: str, siblings: Iterable[Any], key_of) -> bool:
    if not key:
        return False
    return any(key_of(other) == key and not _same_row(row, other) for other in siblings)


# ===========================================
# RULE
# ===========================================

def validate_employee(
    row: Any,
    company: Optional[Any],
    batch: Sequence[Any] = (),
    persisted: Sequence[Any] = (),
) -> Optional[str]:
    """
    Return the first validation failure for an employee row, or None.

    Args:
        row: Object with id, name, pf_number and esi_number attributes
        company: The owning company (pf_enabled/esi_enabled), None if unresolved
        batch: Rows of the current mutation batch, the row itself may be included
        persisted: Rows of the company as they stand in the database
    """
    if is_blank(row.name):
        return NAME_REQUIRED
    if company is None:
        return INVALID_COMPANY
    if company.pf_enabled and is_blank(row.pf_number):
        return PF_REQUIRED

    esi_nil = is_esi_nil(row.esi_number)
    if company.esi_enabled and is_blank(row.esi_number) and not esi_nil:
        return ESI_REQUIRED

    pf_key = _pf_key(row)
    esi_key = _esi_key(row)

    if _has_duplicate(row, pf_key, batch, _pf_key):
        return DUPLICATE_PF_IN_UPLOAD
    if _has_duplicate(row, esi_key, batch, _esi_key):
        return DUPLICATE_ESI_IN_UPLOAD
    if _has_duplicate(row, pf_key, persisted, _pf_key):
        return DUPLICATE_PF_IN_DATABASE
    if _has_duplicate(row, esi_key, persisted, _esi_key):
        return DUPLICATE_ESI_IN_DATABASE

    return None


def collect_errors(
    company: Optional[Any],
    employees: Sequence[Any],
    batch: Sequence[Any] = (),
) -> List[Tuple[Any, Optional[str]]]:
    """
    Evaluate the rule for every employee of a company without writing anything.

    Rows that belong to the batch are first checked against the other batch
    rows; every row is then checked against the full company set.
    """
    batch_ids = {id(row) for row in batch}
    results = []
    for row in employees:
        siblings = batch if id(row) in batch_ids else ()
        results.append((row, validate_employee(row, company, siblings, employees)))
    return results


def revalidate_company(
    company: Optional[Any],
    employees: Sequence[Any],
    batch: Sequence[Any] = (),
) -> int:
    """
    Recompute and store the error of every employee of a company.

    Returns:
        Number of rows left with an error
    """
    error_count = 0
    for row, error in collect_errors(company, employees, batch):
        row.error = error
        if error:
            error_count += 1

    logger.info(
        "Re-validated %d employees of company %s: %d with errors",
        len(employees),
        getattr(company, "id", None),
        error_count,
    )
    return error_count
