"""
CreativeGroups Payroll - Organization Model

An organization is a tenant that owns companies and users. It can also log
in directly with its own username and password.

Organizations are never physically removed: deleting one flips is_active.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, TimestampMixin

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.user import User


class Organization(BaseModel, TimestampMixin):
    """Tenant organization."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # Stored as entered; login compares plaintext
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    users: Mapped[List["User"]] = relationship("User", back_populates="organization")
    companies: Mapped[List["Company"]] = relationship("Company", back_populates="organization")

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, username={self.username})>"
