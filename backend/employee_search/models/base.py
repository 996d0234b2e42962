"""
Base model and mixins for SQLAlchemy ORM.

Provides the declarative base shared by all models and
common helpers for serialization and representation.
"""

from typing import Any

from sqlalchemy.orm import declarative_base


# SQLAlchemy declarative base for all ORM models
Base = declarative_base()


class ModelMixin:
    """
    Mixin providing common model utilities.

    Subclasses list the attributes shown by __repr__ in ``__repr_attrs__``.
    """

    __repr_attrs__: tuple[str, ...] = ("id",)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model instance to dictionary keyed by attribute name.

        Note:
            Only includes mapped columns, not relationships.
        """
        return {
            attr.key: getattr(self, attr.key)
            for attr in self.__mapper__.column_attrs
        }

    def __repr__(self) -> str:
        attrs = ", ".join(
            f"{key}={getattr(self, key)!r}"
            for key in self.__repr_attrs__
        )
        return f"{self.__class__.__name__}({attrs})"
