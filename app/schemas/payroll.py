"""
CreativeGroups Payroll - Payroll Schemas

Pydantic schemas for payroll months, payroll entries, uploads and report
readiness.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.models.payroll import DEFAULT_TOTAL_DAYS


# ===========================================
# PAYROLL MONTH SCHEMAS
# ===========================================

class PayrollMonthCreate(BaseModel):
    """Create payroll month request."""
    company_id: int
    month: str = Field(..., min_length=1, max_length=50)
    total_days: int = Field(DEFAULT_TOTAL_DAYS, ge=1, le=31)


class PayrollMonthUpdate(BaseModel):
    """Update payroll month request. When given, id must equal the path id."""
    id: Optional[int] = None
    company_id: Optional[int] = None
    month: Optional[str] = Field(None, min_length=1, max_length=50)
    total_days: Optional[int] = Field(None, ge=1, le=31)


class PayrollMonthResponse(BaseModel):
    """Payroll month response."""
    id: int
    company_id: int
    month: str
    total_days: int

    class Config:
        from_attributes = True


# ===========================================
# PAYROLL ENTRY SCHEMAS
# ===========================================

class EmployeeSummary(BaseModel):
    """Employee fields shown beside a payroll entry."""
    id: int
    name: str
    pf_number: str
    esi_number: str
    leaving_date: Optional[date] = None
    is_active: bool
    has_leaving_date: bool

    class Config:
        from_attributes = True


class PayrollEntryCreate(BaseModel):
    """Manual payroll entry. NCP is derived, never supplied."""
    employee_id: int
    payroll_month_id: int
    working_days: Decimal = Field(..., ge=0)
    basic_da: Decimal = Field(..., ge=0)
    gross_salary: Decimal = Field(..., ge=0)
    reason: int = Field(0, ge=0)


class PayrollEntryUpdate(BaseModel):
    """Update payroll entry request."""
    working_days: Decimal = Field(..., ge=0)
    basic_da: Decimal = Field(..., ge=0)
    gross_salary: Decimal = Field(..., ge=0)
    reason: int = Field(0, ge=0)


class PayrollEntryResponse(BaseModel):
    """Payroll entry response."""
    id: int
    employee_id: int
    company_id: int
    payroll_month_id: int
    working_days: Decimal
    basic_da: Decimal
    gross_salary: Decimal
    ncp: Decimal
    reason: int
    employee: EmployeeSummary

    class Config:
        from_attributes = True


# ===========================================
# UPLOAD AND REPORT READINESS
# ===========================================

class PayrollUploadResponse(BaseModel):
    """Successful payroll upload."""
    message: str
    uploaded_count: int
    backfilled_count: int


class CanUploadResponse(BaseModel):
    can_upload: bool
    message: Optional[str] = None
    employees_with_errors: int = 0


class CanDownloadResponse(BaseModel):
    can_download: bool
    message: Optional[str] = None

