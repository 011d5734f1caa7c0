"""Employee use cases."""

from hrms.application.use_cases.employees.employee_operations import EmployeeService

__all__ = ["EmployeeService"]
