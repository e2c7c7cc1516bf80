"""
CreativeGroups Payroll - Company Model

A company holds the employee master and its payroll months. The PF and ESI
flags decide which identifiers are mandatory for its employees.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.organization import Organization


class Company(BaseModel):
    """Employer registered for PF and/or ESI."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    pf_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    esi_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # NULL means admin-managed (not assigned to an organization)
    organization_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    organization: Mapped[Optional["Organization"]] = relationship(
        "Organization", back_populates="companies",
    )

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name})>"
