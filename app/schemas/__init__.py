"""
CreativeGroups Payroll - Schemas Package

Pydantic schemas for request/response validation.
"""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    Credentials,
    SeedAdminResponse,
    SeedAllResponse,
)
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
)
from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeFix,
    EmployeeResponse,
    EmployeeUploadResponse,
    EmployeeErrorOverview,
    EmployeeDeleteResponse,
)
from app.schemas.payroll import (
    PayrollMonthCreate,
    PayrollMonthUpdate,
    PayrollMonthResponse,
    EmployeeSummary,
    PayrollEntryCreate,
    PayrollEntryUpdate,
    PayrollEntryResponse,
    PayrollUploadResponse,
    CanUploadResponse,
    CanDownloadResponse,
)
