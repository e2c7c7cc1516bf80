"""
CreativeGroups Payroll - User Model

Login accounts. Three roles:
- Admin: manages every organization and unassigned company
- Organization: organization-level account, never tied to an organization_id
- User: office user, always belongs to an organization
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, TimestampMixin

if TYPE_CHECKING:
    from app.models.organization import Organization


class UserRole(str, Enum):
    """User roles. Numeric codes are accepted on input for API compatibility."""
    ADMIN = "Admin"
    ORGANIZATION = "Organization"
    USER = "User"

    @property
    def code(self) -> int:
        return ROLE_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "UserRole":
        for role, role_code in ROLE_CODES.items():
            if role_code == code:
                return role
        raise ValueError(f"Unknown role code: {code}")


ROLE_CODES = {
    UserRole.ADMIN: 1,
    UserRole.ORGANIZATION: 2,
    UserRole.USER: 3,
}


class User(BaseModel, TimestampMixin):
    """Login account."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # Stored as entered; login compares plaintext
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(
            UserRole,
            name="userrole",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
    )
    organization_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    organization: Mapped[Optional["Organization"]] = relationship(
        "Organization", back_populates="users",
    )

    @property
    def organization_name(self) -> Optional[str]:
        """Requires the organization relationship to be loaded."""
        return self.organization.name if self.organization else None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
