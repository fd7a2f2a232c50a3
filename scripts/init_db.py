#!/usr/bin/env python3
"""
Database Setup Script

Checks that the configured database is reachable, then creates any
missing tables.
Usage: python scripts/init_db.py
"""
import sys
sys.path.insert(0, '.')

from jobmatch.core.config import get_settings
from jobmatch.db.postgres import Database
from jobmatch.db.schema import create_schema


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("JOBMATCH - DATABASE SETUP")
    print("=" * 50)

    db = Database.from_settings(settings)
    db.connect()
    try:
        print(f"\n[1] Testing connection ({db.dialect})...")
        if settings.database_url is None:
            print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
        if not db.ping():
            print("    ❌ Database: FAILED")
            return 1
        print("    ✅ Database: CONNECTED")

        print("\n[2] Creating tables...")
        create_schema(db)
        print("    ✅ Schema ready")
    finally:
        db.dispose()

    print("\n" + "=" * 50)
    print("Setup complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
