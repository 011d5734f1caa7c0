"""Payroll use cases."""

from hrms.application.use_cases.payroll.payroll_operations import PayrollService

__all__ = ["PayrollService"]
