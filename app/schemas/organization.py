"""
CreativeGroups Payroll - Organization Schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class OrganizationCreate(BaseModel):
    """Create organization request."""
    name: str = Field(..., min_length=1, max_length=200)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=255)


class OrganizationUpdate(OrganizationCreate):
    """Update organization request. Every field is replaced."""
    is_active: bool = True


class OrganizationResponse(BaseModel):
    """Organization response. The password is never returned."""
    id: int
    name: str
    username: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
