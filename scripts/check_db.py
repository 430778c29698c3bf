#!/usr/bin/env python3
# scripts/check_db.py - Check database connection, tables and lookup seeding
import sys
import os

from sqlalchemy import inspect, select, func

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from household.core.config import settings  # noqa: E402
from household.core.db import db_manager  # noqa: E402
from household.models import Base, FeeType, ActivityType, Frequency  # noqa: E402


def check_database_connection() -> bool:
    """Report connectivity, missing tables and lookup row counts"""
    print("Database Connection Check")
    print("=" * 40)
    print(f"Environment: {settings.ENV}")
    print(f"Database: {settings.DATABASE_URL.split('@')[-1] if '@' in settings.DATABASE_URL else settings.DATABASE_URL}")
    print("-" * 40)

    health = db_manager.health_check()
    if health["status"] != "healthy":
        print(f"Connection failed: {health.get('error')}")
        print("\nTroubleshooting:")
        print("1. Check DATABASE_URL in your .env file")
        print("2. For PostgreSQL, make sure the server is running and the database exists")
        return False

    print(f"Connection successful ({health['response_time_ms']} ms)")

    existing = set(inspect(db_manager.engine).get_table_names())
    expected = set(Base.metadata.tables)
    missing = sorted(expected - existing)
    print(f"Tables in database: {len(existing)}")
    if missing:
        print("Missing tables (run 'alembic upgrade head'):")
        for table in missing:
            print(f"  - {table}")
        return False

    with db_manager.transaction() as session:
        for model in (FeeType, ActivityType, Frequency):
            count = session.execute(select(func.count()).select_from(model)).scalar_one()
            print(f"{model.__tablename__}: {count} rows")

    return True


if __name__ == "__main__":
    if check_database_connection():
        sys.exit(0)
    else:
        sys.exit(1)
