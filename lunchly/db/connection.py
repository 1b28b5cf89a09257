import logging
from functools import lru_cache
from typing import Optional

from databases import Database
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from lunchly.config import settings

logger = logging.getLogger(__name__)

# SQLAlchemy setup
Base = declarative_base()


@lru_cache()
def get_async_engine() -> AsyncEngine:
    """Async engine used for table creation and ORM seeding."""
    return create_async_engine(
        settings.async_database_url,
        echo=settings.debug,
        poolclass=NullPool,  # Use databases package for connection pooling
        future=True,
    )


@lru_cache()
def get_session_factory() -> async_sessionmaker:
    """Session factory for SQLAlchemy ORM."""
    return async_sessionmaker(
        bind=get_async_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


class DatabaseManager:
    """Database manager for handling connections and lifecycle."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.database_url
        self.database: Optional[Database] = None

    def _pool_options(self) -> dict:
        # sqlite connections take no pool arguments
        if self.url.startswith(("postgresql", "postgres")):
            return {
                "min_size": settings.database_min_connections,
                "max_size": settings.database_max_connections,
            }
        return {}

    async def connect(self) -> None:
        """Open the connection pool."""
        try:
            self.database = Database(self.url, **self._pool_options())
            await self.database.connect()
            logger.info(f"Database connected successfully: {self.database.url.dialect}")
        except Exception as e:
            logger.error(f"Failed to connect to database: {e}")
            self.database = None
            raise

    async def disconnect(self) -> None:
        """Close database connections."""
        if self.database:
            await self.database.disconnect()
            logger.info("Database disconnected")
        self.database = None

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            if not self.database:
                return False

            result = await self.database.fetch_val("SELECT 1 AS health_check")
            return result == 1

        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.database is not None and self.database.is_connected


# Global database manager instance
db_manager = DatabaseManager()


async def get_database() -> Database:
    """Get the database instance."""
    if not db_manager.database:
        raise RuntimeError("Database not initialized. Call connect_database() first.")
    return db_manager.database


async def connect_database() -> None:
    """Initialize database connection."""
    await db_manager.connect()


async def disconnect_database() -> None:
    """Close database connection."""
    await db_manager.disconnect()


# Dependency for FastAPI
async def get_db():
    """FastAPI dependency for database access."""
    return await get_database()

