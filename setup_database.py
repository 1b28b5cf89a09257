#!/usr/bin/env python3
"""
Complete database setup script for Lunchly.
This script handles database creation, migrations, and data seeding.
"""

import asyncio
import logging
import subprocess
import sys
from pathlib import Path

from lunchly.db.connection import connect_database, disconnect_database
from lunchly.db.init_db import create_database_if_not_exists, test_database_operations
from lunchly.db.seed_data import seed_database, verify_database


async def run_alembic_upgrade():
    """Run Alembic migrations."""
    print("🔄 Running database migrations...")
    result = subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=Path(__file__).parent,
        capture_output=True,
        text=True
    )

    if result.returncode == 0:
        print("✅ Database migrations completed successfully!")
        return True

    print(f"❌ Migration failed: {result.stderr}")
    return False


async def quick_test():
    """Quick database connectivity test."""
    print("🔍 Quick Database Test")
    print("=" * 30)

    await connect_database()
    try:
        results = await test_database_operations()
    finally:
        await disconnect_database()

    if results["connection_test"] and results["query_test"]:
        print("✅ Database connection: OK")
        print(f"✅ Row counts: {results['counts']}")
        return True

    print(f"❌ Database test failed: {results['errors']}")
    return False


async def setup_complete_database():
    """Complete database setup process."""
    print("🚀 Starting Lunchly Database Setup")
    print("=" * 60)

    print("\n📋 Step 1: Creating database...")
    await create_database_if_not_exists()

    print("\n📋 Step 2: Running migrations...")
    if not await run_alembic_upgrade():
        return False

    print("\n📋 Step 3: Testing database operations...")
    if not await quick_test():
        return False

    print("\n📋 Step 4: Seeding sample data...")
    if not await seed_database(clear_existing=True):
        print("❌ Data seeding failed!")
        return False
    print("✅ Sample data seeded successfully!")

    print("\n📋 Step 5: Verifying setup...")
    counts = await verify_database()
    for table, count in counts.items():
        print(f"  {table}: {count} records")

    print("\n🎉 Database setup completed successfully!")
    print("  Start the API with: python start_server.py")
    return True


def print_usage():
    """Print usage information."""
    print("Lunchly Database Setup")
    print("=" * 40)
    print("Usage: python setup_database.py [command]")
    print("\nCommands:")
    print("  setup    - Complete database setup (default)")
    print("  test     - Quick connectivity test")
    print("  migrate  - Run migrations only")
    print("  seed     - Seed data only")
    print("  verify   - Verify database contents")


async def main():
    """Main CLI function."""
    command = sys.argv[1].lower() if len(sys.argv) > 1 else "setup"

    if command == "setup":
        success = await setup_complete_database()
    elif command == "test":
        success = await quick_test()
    elif command == "migrate":
        success = await run_alembic_upgrade()
    elif command == "seed":
        success = await seed_database(clear_existing=True)
        print("✅ Database seeded successfully!" if success else "❌ Database seeding failed!")
    elif command == "verify":
        counts = await verify_database()
        print("📊 Database Contents:")
        for table, count in counts.items():
            print(f"  {table}: {count} records")
        success = True
    elif command in ["help", "-h", "--help"]:
        print_usage()
        success = True
    else:
        print(f"Unknown command: {command}")
        print_usage()
        success = False

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n⚠️  Setup interrupted by user")
        sys.exit(1)
