"""
Seed the demo employee dataset.

Creates the employee table if needed and inserts the demo employees
when the table is empty. Uses DATABASE_URL from the environment / .env.

Usage:
    python scripts/seed_employees.py
"""

import asyncio
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from employee_search.core.config import settings
from employee_search.core.database import async_session_maker, close_db, create_tables
from employee_search.services.employee_seeder import seed_employees


async def main():
    """Main entry point."""
    print("=" * 60)
    print("Seeding Demo Employees")
    print(f"Database: {settings.database_url}")
    print("=" * 60)

    try:
        await create_tables()

        async with async_session_maker() as session:
            inserted = await seed_employees(session)
            await session.commit()

        if inserted:
            print(f"\nInserted {inserted} employees.")
        else:
            print("\nEmployee table already populated, nothing to do.")
    except Exception as e:
        print(f"\nError seeding employees: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
