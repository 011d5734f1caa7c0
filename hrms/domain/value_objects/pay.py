"""Payroll value objects: pay figures and pay periods."""

from dataclasses import dataclass
from datetime import date

# Stored figures may drift from recomputed ones by at most this much.
PAY_TOLERANCE = 0.01


def _money(value: float) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class PayFigures:
    """Inputs to gross and net pay.

    gross = base + overtime + bonuses + allowances
    net = gross - deductions - tax
    """

    base_salary: float
    overtime: float = 0.0
    bonuses: float = 0.0
    allowances: float = 0.0
    deductions: float = 0.0
    tax: float = 0.0

    @property
    def gross_pay(self) -> float:
        return _money(self.base_salary + self.overtime + self.bonuses + self.allowances)

    @property
    def total_deductions(self) -> float:
        return _money(self.deductions + self.tax)

    @property
    def net_pay(self) -> float:
        return _money(self.gross_pay - self.deductions - self.tax)

    def reconciles(self, stored_gross: float | None, stored_net: float) -> bool:
        """True when stored figures match the recomputed ones within PAY_TOLERANCE.

        Records created before gross pay was persisted have stored_gross None;
        only net pay is compared for those.
        """
        if stored_gross is not None and abs(self.gross_pay - stored_gross) > PAY_TOLERANCE:
            return False
        return abs(self.net_pay - stored_net) <= PAY_TOLERANCE


@dataclass(frozen=True)
class PayPeriod:
    """Half-open date range [start, end)."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days

    def overlaps(self, other: "PayPeriod") -> bool:
        return self.start < other.end and other.start < self.end
