"""
CreativeGroups Payroll - User Schemas

Roles are accepted by name ("Admin", "organization", ...) or by their
numeric code (1 Admin, 2 Organization, 3 User) and returned by name.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.user import UserRole


def parse_role(value: Any) -> UserRole:
    """Resolve a role given by name (any case) or numeric code."""
    if isinstance(value, UserRole):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid role: {value}")
    if isinstance(value, int):
        return UserRole.from_code(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return UserRole.from_code(int(text))
        for role in UserRole:
            if role.value.lower() == text.lower():
                return role
    raise ValueError(f"Invalid role: {value}")


class UserCreate(BaseModel):
    """Create user request."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=255)
    role: UserRole
    organization_id: Optional[int] = None

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v):
        return parse_role(v)


class UserUpdate(UserCreate):
    """Update user request. Every field is replaced."""
    is_active: bool = True


class UserResponse(BaseModel):
    """User response. The password is never returned."""
    id: int
    username: str
    role: UserRole
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
