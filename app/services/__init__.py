"""
CreativeGroups Payroll - Services Package

Business logic services.
"""

from app.services.auth_service import AuthService
from app.services.seed_service import SeedService
from app.services.organization_service import OrganizationService
from app.services.user_service import UserService
from app.services.company_service import CompanyService
from app.services.employee_service import EmployeeService
from app.services.payroll_service import PayrollService
from app.services.payroll_upload_service import PayrollUploadService
from app.services.report_service import ReportService

# Statutory Calculators
from app.services.statutory_calculators.pf_service import PFCalculator
from app.services.statutory_calculators.esi_service import ESICalculator

__all__ = [
    "AuthService",
    "SeedService",
    "OrganizationService",
    "UserService",
    "CompanyService",
    "EmployeeService",
    "PayrollService",
    "PayrollUploadService",
    "ReportService",
    "PFCalculator",
    "ESICalculator",
]
