"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- Database session fixtures (empty and seeded)
- HTTP client fixture for API tests
"""

import os
import sys
from pathlib import Path

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_ALL"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["LOG_JSON"] = "true"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture(scope="function")
async def async_session():
    """
    Provide an async database session over empty tables.

    Creates tables before the test and drops them after.
    """
    from employee_search.core.database import async_session_maker, create_tables, drop_tables

    await create_tables()

    async with async_session_maker() as session:
        yield session
        await session.commit()

    await drop_tables()


@pytest.fixture(scope="function")
async def seeded_session(async_session):
    """
    Provide a database session with the demo employees committed.
    """
    from employee_search.services.employee_seeder import seed_employees

    await seed_employees(async_session)
    await async_session.commit()
    return async_session


@pytest.fixture
async def client():
    """
    Provide an httpx AsyncClient wired to the application.

    Dependency overrides set by a test are cleared afterwards.
    """
    from httpx import AsyncClient, ASGITransport
    from employee_search.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
