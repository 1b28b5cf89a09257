"""
Database initialization and testing utilities.
"""

import asyncio
import logging
import sys
from typing import Dict, Any

import asyncpg

from lunchly.db.connection import (
    connect_database,
    disconnect_database,
    get_database,
    get_async_engine,
    db_manager,
    Base,
)
from lunchly.config import settings
import lunchly.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


async def create_database_if_not_exists() -> bool:
    """Create the PostgreSQL database if it doesn't exist."""
    if not settings.database_url.startswith(("postgresql://", "postgres://")):
        logger.info("Not a PostgreSQL URL, skipping database creation")
        return False

    try:
        # Connect to postgres database to create our target database
        postgres_url = settings.database_url.replace(f"/{settings.database_name}", "/postgres")
        conn = await asyncpg.connect(postgres_url)

        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1",
                settings.database_name
            )

            if not exists:
                await conn.execute(f'CREATE DATABASE "{settings.database_name}"')
                logger.info(f"Database '{settings.database_name}' created successfully")
                return True

            logger.info(f"Database '{settings.database_name}' already exists")
            return False
        finally:
            await conn.close()

    except Exception as e:
        logger.error(f"Error creating database: {e}")
        return False


async def create_tables() -> bool:
    """Create all tables defined in models."""
    try:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("All tables created successfully")
            return True

    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        return False


async def drop_tables() -> bool:
    """Drop all tables (use with caution!)."""
    try:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("All tables dropped successfully")
            return True

    except Exception as e:
        logger.error(f"Error dropping tables: {e}")
        return False


async def test_database_operations() -> Dict[str, Any]:
    """Check connectivity and that both tables can be queried."""
    results = {
        "connection_test": False,
        "query_test": False,
        "errors": []
    }

    try:
        logger.info("Testing database connection...")
        results["connection_test"] = await db_manager.health_check()

        if not results["connection_test"]:
            results["errors"].append("Connection test failed")
            return results

        logger.info("Testing table queries...")
        db = await get_database()
        counts = {}
        for table in ("customers", "reservations"):
            counts[table] = await db.fetch_val(f"SELECT COUNT(*) FROM {table}")
        results["query_test"] = True
        results["counts"] = counts
        logger.info(f"Row counts: {counts}")

    except Exception as e:
        logger.error(f"Database test error: {e}")
        results["errors"].append(str(e))

    return results


async def initialize_database() -> bool:
    """Initialize database with tables."""
    logger.info("Starting database initialization...")

    await create_database_if_not_exists()
    await connect_database()

    tables_created = await create_tables()
    test_results = await test_database_operations()

    success = (
        tables_created and
        test_results["connection_test"] and
        test_results["query_test"]
    )

    if success:
        logger.info("Database initialization completed successfully!")
    else:
        logger.error(f"Database initialization failed. Errors: {test_results.get('errors', [])}")

    return success


async def reset_database() -> bool:
    """Reset database by dropping and recreating all tables."""
    logger.warning("Resetting database - this will delete all data!")

    if not await drop_tables():
        return False

    if not await create_tables():
        return False

    logger.info("Database reset completed successfully!")
    return True


async def main():
    """Main function for running database operations."""
    if len(sys.argv) < 2:
        print("Usage: python -m lunchly.db.init_db [init|test|reset]")
        return

    command = sys.argv[1].lower()

    try:
        if command == "init":
            success = await initialize_database()
            print(f"Database initialization: {'SUCCESS' if success else 'FAILED'}")

        elif command == "test":
            await connect_database()
            results = await test_database_operations()
            print("Database Test Results:")
            for key, value in results.items():
                print(f"  {key}: {value}")

        elif command == "reset":
            success = await reset_database()
            print(f"Database reset: {'SUCCESS' if success else 'FAILED'}")

        else:
            print(f"Unknown command: {command}")
            print("Available commands: init, test, reset")

    finally:
        await disconnect_database()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
