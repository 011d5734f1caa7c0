"""Payroll record ORM model.

The no-overlap rule is enforced in storage by an exclusion constraint
(btree_gist) over daterange(pay_period_start, pay_period_end, '[)') for
non-cancelled rows; see the initial migration.
"""

from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel

NO_OVERLAP_CONSTRAINT = "ex_payroll_record_no_overlap"

_Money = Numeric(12, 2, asdecimal=False)


class PayrollRecord(EntityModel, Base):
    __tablename__ = "payroll_record"

    employee_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pay_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    pay_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    base_salary: Mapped[float] = mapped_column(_Money, nullable=False)
    overtime: Mapped[float] = mapped_column(_Money, nullable=False, default=0)
    bonuses: Mapped[float] = mapped_column(_Money, nullable=False, default=0)
    allowances: Mapped[float] = mapped_column(_Money, nullable=False, default=0)
    deductions: Mapped[float] = mapped_column(_Money, nullable=False, default=0)
    tax: Mapped[float] = mapped_column(_Money, nullable=False, default=0)
    gross_pay: Mapped[float | None] = mapped_column(_Money, nullable=True)
    net_pay: Mapped[float] = mapped_column(_Money, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    processed_by_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True
    )
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paid_by_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        CheckConstraint("pay_period_start < pay_period_end", name="ck_payroll_record_period"),
        Index("ix_payroll_record_employee_period", "employee_id", "pay_period_start"),
    )
