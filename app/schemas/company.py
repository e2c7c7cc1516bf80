"""
CreativeGroups Payroll - Company Schemas
"""

from typing import Optional

from pydantic import BaseModel, Field


class CompanyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    pf_enabled: bool = False
    esi_enabled: bool = False
    organization_id: Optional[int] = None


class CompanyCreate(CompanyBase):
    """Create company request."""
    pass


class CompanyUpdate(CompanyBase):
    """Update company request. When given, id must equal the path id."""
    id: Optional[int] = None
    is_active: bool = True


class CompanyResponse(CompanyBase):
    """Company response."""
    id: int
    is_active: bool

    class Config:
        from_attributes = True
