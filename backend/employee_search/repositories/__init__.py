"""
Repository layer for data access.

Provides data access abstractions following the Repository pattern,
isolating database access from business logic.
"""

from employee_search.repositories.example import (
    Example,
    ExampleMatcher,
    GenericPropertyMatcher,
    MatchMode,
    NullHandler,
    StringMatcher,
)
from employee_search.repositories.base import QueryByExampleRepository
from employee_search.repositories.employee import EmployeeRepository

__all__ = [
    "Example",
    "ExampleMatcher",
    "GenericPropertyMatcher",
    "MatchMode",
    "NullHandler",
    "StringMatcher",
    "QueryByExampleRepository",
    "EmployeeRepository",
]
