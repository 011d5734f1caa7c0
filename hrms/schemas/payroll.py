"""Payroll API schemas. Money fields are non-negative; gross and net are never accepted as input."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from hrms.domain.enums import PayrollStatus
from hrms.domain.value_objects import PayFigures
from hrms.schemas.common import PartialUpdate


class PayrollRecordCreateRequest(BaseModel):
    employee_id: str = Field(..., min_length=1)
    pay_period_start: date
    pay_period_end: date
    base_salary: float = Field(..., ge=0)
    overtime: float = Field(default=0, ge=0)
    bonuses: float = Field(default=0, ge=0)
    allowances: float = Field(default=0, ge=0)
    deductions: float = Field(default=0, ge=0)
    tax: float = Field(default=0, ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: str | None = None

    def figures(self) -> PayFigures:
        return PayFigures(
            base_salary=self.base_salary,
            overtime=self.overtime,
            bonuses=self.bonuses,
            allowances=self.allowances,
            deductions=self.deductions,
            tax=self.tax,
        )


class PayrollRecordUpdate(PartialUpdate):
    """Partial update of a DRAFT or PROCESSED record. Status moves through process/pay/delete."""

    not_nullable = frozenset({
        "employee_id",
        "pay_period_start",
        "pay_period_end",
        "base_salary",
        "overtime",
        "bonuses",
        "allowances",
        "deductions",
        "tax",
        "currency",
    })

    employee_id: str | None = None
    pay_period_start: date | None = None
    pay_period_end: date | None = None
    base_salary: float | None = Field(default=None, ge=0)
    overtime: float | None = Field(default=None, ge=0)
    bonuses: float | None = Field(default=None, ge=0)
    allowances: float | None = Field(default=None, ge=0)
    deductions: float | None = Field(default=None, ge=0)
    tax: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    notes: str | None = None


class PayrollRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    pay_period_start: date
    pay_period_end: date
    base_salary: float
    overtime: float
    bonuses: float
    allowances: float
    deductions: float
    tax: float
    gross_pay: float | None = None
    net_pay: float
    status: PayrollStatus
    currency: str = "USD"
    notes: str | None = None
    processed_at: datetime | None = None
    processed_by_id: str | None = None
    paid_at: datetime | None = None
    paid_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PayTotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    gross_pay: float
    net_pay: float
    deductions: float
    tax: float
    records: int


class PayrollSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    all_time: PayTotalsResponse
    year_to_date: PayTotalsResponse
    status_counts: dict[str, int]
    average_gross_pay: float
    average_net_pay: float
    recent_records: list[PayrollRecordResponse] = Field(default_factory=list)
