"""
Pydantic schemas for employee endpoints.

JSON payloads use camelCase field names (firstName, lastName, ...);
snake_case names are accepted on input as well.
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from employee_search.models.employee import Employee


# Salary is a Decimal in Python and a plain number on the wire
Salary = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class EmployeeProbe(BaseModel):
    """
    Request body describing an example employee.

    Every field is optional. Fields left out (or null) do not
    constrain the search.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: Optional[int] = Field(default=None, description="Primary key")
    first_name: Optional[str] = Field(default=None, description="Given name")
    last_name: Optional[str] = Field(default=None, description="Family name")
    department: Optional[str] = Field(default=None, description="Department name")
    position: Optional[str] = Field(default=None, description="Job title")
    salary: Optional[Salary] = Field(default=None, description="Annual salary")

    def to_entity(self) -> Employee:
        """Build a transient Employee to use as a query probe."""
        return Employee(**self.model_dump())


class EmployeeResponse(BaseModel):
    """Employee as returned by the API."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    first_name: str
    last_name: str
    department: str
    position: str
    salary: Salary
