"""Employee ORM model. manager_id forms the reporting hierarchy."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from hrms.infrastructure.persistence.database import Base
from hrms.infrastructure.persistence.models.mixins import EntityModel


class Employee(EntityModel, Base):
    """Employee entity. Table: employee."""

    __tablename__ = "employee"

    employee_code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    department_id: Mapped[str] = mapped_column(
        String, ForeignKey("department.id"), nullable=False, index=True
    )
    position_id: Mapped[str] = mapped_column(
        String, ForeignKey("position.id"), nullable=False, index=True
    )
    manager_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    employment_type: Mapped[str] = mapped_column(String, nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    termination_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    salary: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)


# Case-insensitive email uniqueness.
Index("ux_employee_email_lower", func.lower(Employee.email), unique=True)
