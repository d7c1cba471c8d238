#!/usr/bin/env python3
"""
Database initialization script for Business Planner
Creates the SQLite database with the planner tables
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bizplanner.core.config import Config
from bizplanner.core.database import SQLiteDatabase
from bizplanner.core.schema import init_schema


def init_database(db_path: Path = None, overwrite: bool = None) -> bool:
    """Initialize the database with the planner schema"""
    db_path = Path(db_path) if db_path else Config().get_database_path()

    # Check if database already exists
    if db_path.exists():
        if overwrite is None:
            response = input(f"Database already exists at {db_path}. Overwrite? (yes/no): ")
            overwrite = response.lower() == 'yes'
        if not overwrite:
            print("Aborting database initialization.")
            return False
        db_path.unlink()

    print(f"Creating database at {db_path}...")
    db = SQLiteDatabase(db_path, create=True)

    try:
        init_schema(db)
    except db.errors as e:
        print(f"✗ Database error: {e}")
        return False

    print("✓ Database schema created successfully!")
    print(f"✓ Database location: {db_path}")
    print(f"\n✓ Tables created: {', '.join(db.get_table_names())}")
    return True


if __name__ == "__main__":
    print("=" * 60)
    print("Business Planner - Database Initialization")
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
