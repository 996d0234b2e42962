"""
Employee model.

A row in the employee table. Instances built without a session
(e.g. ``Employee(department="IT")``) double as query-by-example probes:
attributes that are never set read as None.
"""

from sqlalchemy import Column, Integer, Numeric, String

from employee_search.models.base import Base, ModelMixin


class Employee(Base, ModelMixin):
    """
    Employee model.

    Attributes:
        id: Integer primary key
        first_name: Given name
        last_name: Family name
        department: Department name (e.g. "IT", "Engineering")
        position: Job title (e.g. "Developer", "Manager")
        salary: Annual salary as Decimal with two fractional digits
    """

    __tablename__ = "employee"
    __repr_attrs__ = ("id", "first_name", "last_name")

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Integer primary key"
    )

    first_name = Column(
        String(100),
        nullable=False,
        doc="Given name"
    )

    last_name = Column(
        String(100),
        nullable=False,
        doc="Family name"
    )

    department = Column(
        String(100),
        nullable=False,
        doc="Department the employee belongs to"
    )

    position = Column(
        String(100),
        nullable=False,
        doc="Job title"
    )

    salary = Column(
        Numeric(10, 2),
        nullable=False,
        doc="Annual salary"
    )
