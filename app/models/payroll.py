"""
CreativeGroups Payroll - Payroll Models

PayrollMonth: a labelled month for one company with its day count.
PayrollEntry: one employee's attendance and wages for a payroll month.

After an upload there is exactly one entry per (employee, month). That is
kept by replacing the whole (company, month) entry set on every upload,
not by a unique constraint.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.employee import Employee


DEFAULT_TOTAL_DAYS = 30


class PayrollMonth(BaseModel):
    """Payroll period of a company, e.g. "August 2025"."""

    __tablename__ = "payroll_months"

    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Free text label, not parsed
    month: Mapped[str] = mapped_column(String(50), nullable=False)
    # NCP baseline, entered independently of the label
    total_days: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_TOTAL_DAYS, nullable=False,
    )

    company: Mapped["Company"] = relationship("Company")
    entries: Mapped[List["PayrollEntry"]] = relationship(
        "PayrollEntry",
        back_populates="payroll_month",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<PayrollMonth(id={self.id}, month={self.month})>"


class PayrollEntry(BaseModel):
    """Attendance and wages of one employee for one payroll month."""

    __tablename__ = "payroll_entries"

    employee_id: Mapped[int] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Copied from the employee when the entry is written
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    payroll_month_id: Mapped[int] = mapped_column(
        ForeignKey("payroll_months.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    working_days: Mapped[Decimal] = mapped_column(
        Numeric(precision=6, scale=2), default=Decimal("0"), nullable=False,
    )
    basic_da: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2), default=Decimal("0"), nullable=False,
    )
    gross_salary: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2), default=Decimal("0"), nullable=False,
    )
    # Non contributing period: max(0, total_days - working_days)
    ncp: Mapped[Decimal] = mapped_column(
        Numeric(precision=6, scale=2), default=Decimal("0"), nullable=False,
    )
    reason: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="payroll_entries",
    )
    payroll_month: Mapped["PayrollMonth"] = relationship(
        "PayrollMonth", back_populates="entries",
    )

    def __repr__(self) -> str:
        return (
            f"<PayrollEntry(id={self.id}, employee_id={self.employee_id}, "
            f"month_id={self.payroll_month_id})>"
        )
