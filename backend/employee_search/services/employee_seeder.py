"""
Demo dataset for the employee table.

Loads a fixed set of employees so the search endpoints have
something to find. Seeding is skipped when the table already has rows.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from employee_search.models.employee import Employee
from employee_search.repositories.employee import EmployeeRepository

logger = logging.getLogger(__name__)


DEMO_EMPLOYEES = [
    {"first_name": "John", "last_name": "Smith", "department": "IT", "position": "Tech Lead", "salary": "95000.00"},
    {"first_name": "Jane", "last_name": "Doe", "department": "IT", "position": "Developer", "salary": "85000.00"},
    {"first_name": "Mike", "last_name": "Johnson", "department": "IT", "position": "Developer", "salary": "82000.00"},
    {"first_name": "Sarah", "last_name": "Williams", "department": "HR", "position": "Manager", "salary": "78000.00"},
    {"first_name": "Thomas", "last_name": "Smith", "department": "Marketing", "position": "Manager", "salary": "80000.00"},
    {"first_name": "Anna", "last_name": "Smith", "department": "Sales", "position": "Manager", "salary": "79000.00"},
    {"first_name": "Robert", "last_name": "Smith", "department": "Operations", "position": "Manager", "salary": "81000.00"},
    {"first_name": "Johnny", "last_name": "Walker", "department": "Engineering", "position": "Software Engineer", "salary": "92000.00"},
    {"first_name": "Emily", "last_name": "Brown", "department": "Engineering", "position": "Senior Engineer", "salary": "105000.00"},
    {"first_name": "David", "last_name": "Lee", "department": "Engineering", "position": "Engineer", "salary": "88000.00"},
    {"first_name": "Lisa", "last_name": "Chen", "department": "Engineering", "position": "DevOps Engineer", "salary": "90000.00"},
    {"first_name": "Kevin", "last_name": "Patel", "department": "Finance", "position": "Analyst", "salary": "70000.00"},
]


async def seed_employees(session: AsyncSession) -> int:
    """
    Insert the demo employees if the table is empty.

    Args:
        session: Database session (caller commits)

    Returns:
        Number of employees inserted (0 when the table already had rows)
    """
    repo = EmployeeRepository(session)

    existing = await repo.count()
    if existing:
        logger.info(
            "Employee table already populated, skipping seed",
            extra={"existing": existing}
        )
        return 0

    employees = [
        Employee(**{**row, "salary": Decimal(row["salary"])})
        for row in DEMO_EMPLOYEES
    ]
    await repo.save_all(employees)

    logger.info(
        f"Seeded {len(employees)} employees",
        extra={"inserted": len(employees)}
    )
    return len(employees)
