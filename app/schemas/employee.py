"""
CreativeGroups Payroll - Employee Schemas

Pydantic schemas for the employee master.

Blank names and identifiers are accepted on input: they are not rejected
but stored with a validation error on the row, so the master can be fixed
in place.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


# ===========================================
# REQUESTS
# ===========================================

class EmployeeBase(BaseModel):
    """Base employee schema."""
    name: str = Field("", max_length=200)
    joining_date: Optional[date] = None
    leaving_date: Optional[date] = None
    pf_number: str = Field("", max_length=50)
    esi_number: str = Field("", max_length=50)
    is_active: bool = True


class EmployeeCreate(EmployeeBase):
    """Create employee request."""
    company_id: int


class EmployeeUpdate(EmployeeBase):
    """Update employee request. When given, id must equal the path id."""
    id: Optional[int] = None
    company_id: int


class EmployeeFix(EmployeeBase):
    """One correction of a bulk fix."""
    id: int
    company_id: int


# ===========================================
# RESPONSES
# ===========================================

class EmployeeResponse(EmployeeBase):
    """Employee response with its stored validation error."""
    id: int
    company_id: int
    error: Optional[str] = None
    has_leaving_date: bool = False

    class Config:
        from_attributes = True


class EmployeeUploadResponse(BaseModel):
    """Employee master upload outcome."""
    message: str
    added: int
    skipped: int
    with_errors: int
    employees: List[EmployeeResponse] = []


class EmployeeErrorOverview(BaseModel):
    """Employees of a company, rows with errors first."""
    has_errors: bool
    employees: List[EmployeeResponse] = []


class EmployeeDeleteResponse(BaseModel):
    message: str
    deleted_count: int
