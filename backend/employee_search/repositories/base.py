"""
Generic repository with query-by-example support.

Subclasses bind a model class; every example-query operation
(find_all, find_one, count, exists) accepts an ``Example`` of that model.
"""

import logging
from typing import Any, Generic, Iterable, List, Optional, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from employee_search.core.exceptions import IncorrectResultSizeError, InvalidExampleError
from employee_search.repositories.example import Example, collect_criteria, combine_criteria

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class QueryByExampleRepository(Generic[ModelT]):
    """
    Repository providing CRUD basics and example queries for one model.

    Attributes:
        model: Mapped model class (set by subclasses)
        session: SQLAlchemy async session for database operations
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _where(self, example: Example) -> ColumnElement[bool]:
        if not isinstance(example.probe, self.model):
            raise InvalidExampleError(
                f"Probe of type {example.probe_type.__name__} cannot query "
                f"{self.model.__name__}"
            )

        criteria = collect_criteria(example)
        logger.debug(
            "Building example query",
            extra={
                "entity": self.model.__name__,
                "criteria": len(criteria),
                "match_mode": example.matcher.match_mode.value,
            }
        )
        return combine_criteria(criteria, example.matcher.match_mode)

    def _default_order(self) -> Sequence[Any]:
        return sa_inspect(self.model).primary_key

    async def find_all(
        self,
        example: Optional[Example] = None,
        order_by: Optional[Sequence[Any]] = None
    ) -> List[ModelT]:
        """
        Find every row matching the example.

        Args:
            example: Probe and matcher; None returns all rows
            order_by: Columns to order by (primary key when omitted)

        Returns:
            Matching model instances
        """
        stmt = select(self.model)
        if example is not None:
            stmt = stmt.where(self._where(example))
        stmt = stmt.order_by(*(order_by or self._default_order()))

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one(self, example: Example) -> Optional[ModelT]:
        """
        Find the single row matching the example.

        Returns:
            The matching instance, or None when nothing matches

        Raises:
            IncorrectResultSizeError: If more than one row matches
        """
        stmt = (
            select(self.model)
            .where(self._where(example))
            .order_by(*self._default_order())
            .limit(2)
        )
        result = await self.session.execute(stmt)
        rows = result.scalars().all()

        if not rows:
            return None
        if len(rows) > 1:
            raise IncorrectResultSizeError(
                expected_size=1,
                actual_size=await self.count(example)
            )
        return rows[0]

    async def count(self, example: Optional[Example] = None) -> int:
        """Count rows matching the example (all rows when None)."""
        stmt = select(func.count()).select_from(self.model)
        if example is not None:
            stmt = stmt.where(self._where(example))

        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def exists(self, example: Example) -> bool:
        """Check whether at least one row matches the example."""
        stmt = select(select(self.model).where(self._where(example)).exists())
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def get(self, entity_id: Any) -> Optional[ModelT]:
        """Retrieve a row by primary key."""
        return await self.session.get(self.model, entity_id)

    async def save(self, entity: ModelT) -> ModelT:
        """
        Add an instance and flush it so generated fields are populated.

        Note:
            The caller owns the transaction and must commit.
        """
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def save_all(self, entities: Iterable[ModelT]) -> List[ModelT]:
        """Add several instances in one flush."""
        entities = list(entities)
        self.session.add_all(entities)
        await self.session.flush()
        return entities
