"""
CreativeGroups Payroll - Employee Model

Employee master record. The error column holds the first validation failure
found for the row (see app.services.employee_validation) or NULL when the
row is clean. It is rewritten for the whole company whenever the company's
employee set changes.
"""

from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.payroll import PayrollEntry


# ESI value meaning "intentionally absent"
ESI_NIL = "NIL"


class Employee(BaseModel):
    """Employee master row."""

    __tablename__ = "employees"

    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    joining_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    leaving_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Statutory identifiers (PF number doubles as UAN)
    pf_number: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    esi_number: Mapped[str] = mapped_column(String(50), default="", nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    error: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    company: Mapped["Company"] = relationship("Company")
    payroll_entries: Mapped[List["PayrollEntry"]] = relationship(
        "PayrollEntry",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def has_leaving_date(self) -> bool:
        return self.leaving_date is not None

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name={self.name}, pf={self.pf_number})>"
