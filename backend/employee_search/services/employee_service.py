"""
Employee search service.

Turns search inputs into query-by-example probes and matchers and hands
them to the EmployeeRepository.
"""

import logging
from typing import List, Optional

from employee_search.core.logging_config import log_with_context
from employee_search.models.employee import Employee
from employee_search.repositories.employee import EmployeeRepository
from employee_search.repositories.example import Example, ExampleMatcher, StringMatcher

logger = logging.getLogger(__name__)


# Case-insensitive substring match on every populated field
CUSTOM_SEARCH_MATCHER = (
    ExampleMatcher.matching()
    .with_ignore_case()
    .with_string_matcher(StringMatcher.CONTAINING)
    .with_ignore_null_values()
)


class EmployeeService:
    """
    Query-by-example operations over employees.

    Attributes:
        repository: EmployeeRepository used for every query
    """

    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    async def find_employees_by_example(self, probe: Employee) -> List[Employee]:
        """
        Find employees whose populated fields equal the probe's.

        Uses the default matcher: exact, case-sensitive, None fields ignored.
        """
        employees = await self.repository.find_all(Example.of(probe))
        log_with_context(
            logger,
            "info",
            "Employee search by example completed",
            operation="find_by_example",
            result_count=len(employees),
        )
        return employees

    async def find_employees_with_custom_matcher(
        self,
        first_name: Optional[str],
        department: Optional[str]
    ) -> List[Employee]:
        """
        Find employees by partial, case-insensitive first name and department.

        Args:
            first_name: Substring of the first name, or None for any
            department: Substring of the department, or None for any

        Returns:
            Matching employees; every employee when both inputs are None
        """
        probe = Employee(first_name=first_name, department=department)
        employees = await self.repository.find_all(
            Example.of(probe, CUSTOM_SEARCH_MATCHER)
        )
        log_with_context(
            logger,
            "info",
            "Employee search completed",
            operation="search",
            first_name=first_name,
            department=department,
            result_count=len(employees),
        )
        return employees

    async def find_one_employee_by_example(self, probe: Employee) -> Optional[Employee]:
        """
        Find the single employee matching the probe exactly.

        Raises:
            IncorrectResultSizeError: If more than one employee matches
        """
        return await self.repository.find_one(Example.of(probe))

    async def count_employees_by_example(self, probe: Employee) -> int:
        return await self.repository.count(Example.of(probe))

    async def exists_by_example(self, probe: Employee) -> bool:
        return await self.repository.exists(Example.of(probe))
