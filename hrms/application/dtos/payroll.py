"""DTOs for payroll records."""

from dataclasses import dataclass, field
from datetime import date, datetime

from hrms.domain.enums import PayrollStatus
from hrms.domain.value_objects import PayFigures, PayPeriod


@dataclass(frozen=True)
class PayrollRecordCreate:
    """Write-model; gross_pay and net_pay are computed by the service, never taken from input."""

    employee_id: str
    pay_period_start: date
    pay_period_end: date
    base_salary: float
    overtime: float
    bonuses: float
    allowances: float
    deductions: float
    tax: float
    gross_pay: float
    net_pay: float
    currency: str = "USD"
    notes: str | None = None
    status: PayrollStatus = PayrollStatus.DRAFT


@dataclass(frozen=True)
class PayrollRecordResult:
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
    gross_pay: float | None
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

    @property
    def owner_id(self) -> str:
        return self.employee_id

    @property
    def figures(self) -> PayFigures:
        return PayFigures(
            base_salary=self.base_salary,
            overtime=self.overtime,
            bonuses=self.bonuses,
            allowances=self.allowances,
            deductions=self.deductions,
            tax=self.tax,
        )

    @property
    def period(self) -> PayPeriod:
        return PayPeriod(self.pay_period_start, self.pay_period_end)


@dataclass(frozen=True)
class PayrollFilters:
    employee_id: str | None = None
    status: PayrollStatus | None = None
    period_from: date | None = None
    period_to: date | None = None


@dataclass(frozen=True)
class PayTotals:
    gross_pay: float = 0.0
    net_pay: float = 0.0
    deductions: float = 0.0
    tax: float = 0.0
    records: int = 0


@dataclass(frozen=True)
class PayrollSummary:
    employee_id: str
    all_time: PayTotals
    year_to_date: PayTotals
    status_counts: dict[str, int]
    average_gross_pay: float
    average_net_pay: float
    recent_records: list[PayrollRecordResult] = field(default_factory=list)
