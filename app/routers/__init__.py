"""
CreativeGroups Payroll - Routers Package

FastAPI route handlers.

Routers:
- auth: Login
- seed: Bootstrap accounts
- organizations: Tenant organizations
- users: User accounts
- companies: Companies and their PF/ESI registration
- employees: Employee master
- payroll: Payroll months
- payroll_upload: Payroll upload, entries and statutory reports
"""

from app.routers import (
    auth,
    seed,
    organizations,
    users,
    companies,
    employees,
    payroll,
    payroll_upload,
)

__all__ = [
    "auth",
    "seed",
    "organizations",
    "users",
    "companies",
    "employees",
    "payroll",
    "payroll_upload",
]
