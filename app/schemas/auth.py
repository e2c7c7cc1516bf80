"""
CreativeGroups Payroll - Authentication Schemas

Pydantic schemas for login and account seeding.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ===========================================
# LOGIN
# ===========================================

class LoginRequest(BaseModel):
    """Login request."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=255)


class LoginResponse(BaseModel):
    """
    Login outcome.

    For an organization login, user_id and organization_id are both the
    organization's id and role is "Organization".
    """
    success: bool
    user_id: Optional[int] = None
    username: Optional[str] = None
    role: Optional[str] = None
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None
    message: str


# ===========================================
# SEEDING
# ===========================================

class Credentials(BaseModel):
    username: str
    password: str


class SeedAdminResponse(Credentials):
    """Response of admin creation."""
    message: str


class SeedAllResponse(BaseModel):
    """Response of full seeding."""
    message: str
    admin: Credentials
    organization: Credentials
    user: Credentials
