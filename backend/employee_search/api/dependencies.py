"""
FastAPI dependency functions.

Provides the request-scoped database session and the repository and
service objects built on top of it.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_search.core.database import get_db
from employee_search.repositories.employee import EmployeeRepository
from employee_search.services.employee_service import EmployeeService


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


def get_employee_repository(db: DatabaseSession) -> EmployeeRepository:
    """
    Dependency to inject EmployeeRepository.

    Args:
        db: Database session from dependency injection

    Returns:
        EmployeeRepository bound to the request's session
    """
    return EmployeeRepository(db)


EmployeeRepo = Annotated[EmployeeRepository, Depends(get_employee_repository)]


def get_employee_service(repo: EmployeeRepo) -> EmployeeService:
    """Dependency to inject EmployeeService."""
    return EmployeeService(repo)


EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
