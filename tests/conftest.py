"""
Shared fixtures: a throwaway sqlite store with the real table definitions.
"""
import pytest
from databases import Database
from sqlalchemy import create_engine

from lunchly.db.connection import Base
from lunchly.repositories import CustomerRepository
from lunchly.schemas import Customer
import lunchly.models  # noqa: F401


@pytest.fixture
async def database(tmp_path):
    db_file = tmp_path / "lunchly-test.db"

    engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(engine)
    engine.dispose()

    db = Database(f"sqlite:///{db_file}")
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
def repo(database):
    return CustomerRepository(database)


@pytest.fixture
def make_customer(repo):
    """Save a customer and return it."""
    async def _make(first_name, last_name, phone=None, notes=None):
        customer = Customer(first_name=first_name, last_name=last_name, phone=phone, notes=notes)
        await repo.save(customer)
        return customer
    return _make


@pytest.fixture
def add_reservations(database):
    """Insert `count` reservations for a customer, one day apart."""
    async def _add(customer_id, count=1, num_guests=2):
        for day in range(count):
            await database.execute(
                """
                INSERT INTO reservations (customer_id, start_at, num_guests)
                VALUES (:customer_id, :start_at, :num_guests)
                """,
                {
                    "customer_id": customer_id,
                    "start_at": f"2026-03-{day + 1:02d} 19:00:00",
                    "num_guests": num_guests,
                },
            )
    return _add


class FailingStore:
    """Store handle whose every call blows up like a dropped connection."""

    async def fetch_all(self, query, values=None):
        raise ConnectionError("connection reset by peer")

    async def fetch_one(self, query, values=None):
        raise ConnectionError("connection reset by peer")

    async def fetch_val(self, query, values=None):
        raise ConnectionError("connection reset by peer")

    async def execute(self, query, values=None):
        raise ConnectionError("connection reset by peer")


@pytest.fixture
def failing_store():
    return FailingStore()
