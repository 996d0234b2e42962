"""
Employee repository.
"""

from employee_search.models.employee import Employee
from employee_search.repositories.base import QueryByExampleRepository


class EmployeeRepository(QueryByExampleRepository[Employee]):
    """Example-query repository for employees."""

    model = Employee
