"""Services package."""

from employee_api.services.employee_rules_service import EmployeeRulesService
from employee_api.services.employee_service import EmployeeService

__all__ = [
    "EmployeeRulesService",
    "EmployeeService",
]
