import logging
from contextlib import asynccontextmanager

from lunchly.errors import LunchlyError, StoreError

logger = logging.getLogger(__name__)


class Repository:
    """Shared plumbing for repositories backed by a `databases.Database`-like store."""

    def __init__(self, db):
        self.db = db

    @asynccontextmanager
    async def _store_call(self, operation: str):
        """Re-raise any store failure raised inside the block as StoreError."""
        try:
            yield
        except LunchlyError:
            raise
        except Exception as e:
            logger.error(f"Store error during {operation}: {e}")
            raise StoreError(f"{operation} failed") from e
