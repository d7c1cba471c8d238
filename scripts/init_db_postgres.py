#!/usr/bin/env python3
"""
PostgreSQL database initialization script for Business Planner
Creates the planner tables, timestamps trigger and indexes
"""

import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bizplanner.core.database import PostgreSQLDatabase
from bizplanner.core.schema import init_schema


def get_database_url():
    """Get database URL from environment variable"""
    url = os.environ.get('DATABASE_URL')
    if not url:
        print("Error: DATABASE_URL environment variable not set")
        print("Set it to your PostgreSQL connection string")
        sys.exit(1)
    return url


def init_database() -> bool:
    """Initialize the PostgreSQL database with the planner schema"""
    print("Connecting to PostgreSQL...")
    db = PostgreSQLDatabase(get_database_url())

    try:
        init_schema(db)
    except db.errors as e:
        print(f"✗ Database error: {e}")
        return False

    print("✓ Database schema created successfully!")
    print(f"✓ Tables: {', '.join(db.get_table_names())}")
    return True


if __name__ == "__main__":
    print("=" * 60)
    print("Business Planner - PostgreSQL Database Initialization")
    print("=" * 60)
    print()

    success = init_database()

    if success:
        print("\n" + "=" * 60)
        print("Database initialization complete!")
        print("=" * 60)
        sys.exit(0)
    else:
        sys.exit(1)
