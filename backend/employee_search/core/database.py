"""
Database configuration and session management.

Provides SQLAlchemy async engine setup, session factory, and dependency
injection for database sessions in FastAPI routes.
"""

import logging
from pathlib import Path
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from employee_search.core.config import settings
from employee_search.models.base import Base

logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    database = make_url(database_url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def get_async_engine() -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    For SQLite:
    - Uses StaticPool so every session shares one connection
      (required for in-memory databases)
    - Enables check_same_thread=False for async compatibility
    - Turns on foreign key enforcement and case-sensitive LIKE per connection

    Returns:
        Configured AsyncEngine instance
    """
    if settings.is_sqlite:
        _ensure_sqlite_directory(settings.database_url)

    connect_args: dict = {"check_same_thread": False} if settings.is_sqlite else {}

    engine_kwargs = {
        "echo": settings.database_echo,
        "connect_args": connect_args,
    }

    if settings.is_sqlite:
        engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(
        settings.database_url,
        **engine_kwargs,
    )

    if settings.is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            # LIKE is case-insensitive in SQLite unless told otherwise
            cursor.execute("PRAGMA case_sensitive_like=ON")
            cursor.close()

    return engine


# Global async engine instance
engine = get_async_engine()


async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def create_tables() -> None:
    """Create every table registered on Base.metadata."""
    from employee_search import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """Drop every table registered on Base.metadata."""
    from employee_search import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def init_db() -> None:
    """
    Initialize the database at application startup.

    Creates tables when DB_CREATE_ALL is on, then loads the demo
    dataset when SEED_DEMO_DATA is on and the employee table is empty.
    """
    if settings.db_create_all:
        await create_tables()
        logger.info("Database tables created")

    if settings.seed_demo_data:
        from employee_search.services.employee_seeder import seed_employees

        async with async_session_maker() as session:
            inserted = await seed_employees(session)
            await session.commit()

        logger.info(
            "Demo dataset loaded",
            extra={"inserted": inserted}
        )


async def close_db() -> None:
    """
    Close the database connection.

    Should be called at application shutdown to cleanly close
    all database connections.
    """
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function to get database session.

    Provides a database session for FastAPI route handlers.
    Commits when the handler returns, rolls back and re-raises on error.

    Yields:
        AsyncSession instance for database operations
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
