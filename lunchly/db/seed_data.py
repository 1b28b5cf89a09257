"""
Data seeding script for the Lunchly database.
"""

import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy import select, delete, func

from lunchly.db.connection import get_session_factory
from lunchly.models import CustomerTable, ReservationTable

logger = logging.getLogger(__name__)


class DataSeeder:
    """Data seeding utility class."""

    def __init__(self, data_dir: Optional[Path] = None, session_factory: Optional[async_sessionmaker] = None):
        self.data_dir = data_dir or Path(__file__).parent.parent.parent / "data"
        self.session_factory = session_factory or get_session_factory()
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = self.session_factory()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()

    def load_json_data(self, filename: str) -> List[Dict[str, Any]]:
        """Load data from JSON file."""
        file_path = self.data_dir / filename
        if not file_path.exists():
            logger.error(f"Data file not found: {file_path}")
            return []

        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info(f"Loaded {len(data)} records from {filename}")
        return data

    async def clear_all_data(self) -> bool:
        """Clear all existing data from tables."""
        try:
            logger.info("Clearing existing data...")

            # Delete in order to respect foreign key constraints
            await self.session.execute(delete(ReservationTable))
            await self.session.execute(delete(CustomerTable))

            await self.session.commit()
            logger.info("All existing data cleared successfully")
            return True

        except Exception as e:
            logger.error(f"Error clearing data: {e}")
            await self.session.rollback()
            return False

    async def seed_customers(self) -> bool:
        """Seed customers together with their reservations."""
        try:
            logger.info("Seeding customers...")
            customers_data = self.load_json_data("customers.json")

            if not customers_data:
                logger.warning("No customer data to seed")
                return True

            customers = []
            for data in customers_data:
                customer = CustomerTable(
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    phone=data.get("phone"),
                    notes=data.get("notes"),
                )
                for reservation in data.get("reservations", []):
                    customer.reservations.append(ReservationTable(
                        start_at=datetime.fromisoformat(reservation["start_at"]),
                        num_guests=reservation["num_guests"],
                        notes=reservation.get("notes"),
                    ))
                customers.append(customer)

            self.session.add_all(customers)
            await self.session.commit()

            logger.info(f"Successfully seeded {len(customers)} customers")
            return True

        except Exception as e:
            logger.error(f"Error seeding customers: {e}")
            await self.session.rollback()
            return False

    async def verify_data(self) -> Dict[str, int]:
        """Verify seeded data by counting records."""
        customer_count = await self.session.scalar(select(func.count()).select_from(CustomerTable))
        reservation_count = await self.session.scalar(select(func.count()).select_from(ReservationTable))

        counts = {
            "customers": customer_count or 0,
            "reservations": reservation_count or 0,
        }

        logger.info(f"Data verification: {counts}")
        return counts

    async def seed_all_data(self, clear_existing: bool = True) -> bool:
        """Seed all data from JSON files."""
        logger.info("Starting data seeding process...")

        if clear_existing and not await self.clear_all_data():
            return False

        if not await self.seed_customers():
            return False

        counts = await self.verify_data()
        logger.info(f"Data seeding completed successfully! Final counts: {counts}")
        return True


async def seed_database(clear_existing: bool = True) -> bool:
    """Main function to seed the database."""
    async with DataSeeder() as seeder:
        return await seeder.seed_all_data(clear_existing)


async def verify_database() -> Dict[str, int]:
    """Verify database contents."""
    async with DataSeeder() as seeder:
        return await seeder.verify_data()


async def clear_database() -> bool:
    """Clear all data from database."""
    async with DataSeeder() as seeder:
        return await seeder.clear_all_data()


async def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python -m lunchly.db.seed_data [seed|verify|clear]")
        print("Commands:")
        print("  seed   - Seed database with sample data (clears existing data)")
        print("  verify - Verify database contents")
        print("  clear  - Clear all data from database")
        return

    command = sys.argv[1].lower()

    if command == "seed":
        if not await seed_database(clear_existing=True):
            print("Database seeding failed!")
            sys.exit(1)
        print("Database seeded successfully!")

    elif command == "verify":
        counts = await verify_database()
        print("Database Contents:")
        for table, count in counts.items():
            print(f"  {table}: {count} records")

    elif command == "clear":
        if not await clear_database():
            print("Database clearing failed!")
            sys.exit(1)
        print("Database cleared successfully!")

    else:
        print(f"Unknown command: {command}")
        print("Available commands: seed, verify, clear")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
