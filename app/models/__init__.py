"""
CreativeGroups Payroll - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from app.models.base import BaseModel, TimestampMixin
from app.models.organization import Organization
from app.models.user import User, UserRole, ROLE_CODES
from app.models.company import Company
from app.models.employee import Employee, ESI_NIL
from app.models.payroll import PayrollMonth, PayrollEntry, DEFAULT_TOTAL_DAYS

__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    # Tenancy
    "Organization",
    "User",
    "UserRole",
    "ROLE_CODES",
    "Company",
    # Employee master
    "Employee",
    "ESI_NIL",
    # Payroll
    "PayrollMonth",
    "PayrollEntry",
    "DEFAULT_TOTAL_DAYS",
]
