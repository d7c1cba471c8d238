"""
Database utilities and connection management
Supports both SQLite (local development) and PostgreSQL (hosted production)

Usage:
    # SQLite (default for local dev, uses USE_SQLITE=1 env var)
    db = get_database()

    # PostgreSQL (production, uses DATABASE_URL env var)
    db = get_database()  # Automatically uses PostgreSQL if DATABASE_URL is set
"""

import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple, Union
from contextlib import contextmanager

from .config import Config

# Try to import psycopg2 for PostgreSQL support
try:
    import psycopg2
    import psycopg2.extras
    POSTGRES_AVAILABLE = True
except ImportError:
    POSTGRES_AVAILABLE = False


class DatabaseBase(ABC):
    """Abstract base class for database operations"""

    # Exception types raised by the driver; wrapped by the data-access layer
    errors: Tuple[type, ...] = ()
    dialect: str = ""

    @abstractmethod
    def get_connection(self):
        """Get a database connection"""
        pass

    @abstractmethod
    def execute(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        """Execute a SELECT query and return results as list of dicts"""
        pass

    @abstractmethod
    def execute_one(self, query: str, params: Tuple = ()) -> Optional[Dict[str, Any]]:
        """Execute a SELECT query and return single result"""
        pass

    @abstractmethod
    def execute_insert(self, query: str, params: Tuple = ()) -> int:
        """Execute an INSERT and return the new row id"""
        pass

    @abstractmethod
    def execute_write(self, query: str, params: Tuple = ()) -> int:
        """Execute an UPDATE or DELETE and return the affected row count"""
        pass

    @abstractmethod
    def execute_ddl(self, statement: str) -> None:
        """Execute a schema statement"""
        pass


class SQLiteDatabase(DatabaseBase):
    """SQLite database implementation for local development"""

    errors = (sqlite3.Error,)
    dialect = "sqlite"

    def __init__(self, db_path: Optional[Path] = None, create: bool = False):
        if db_path is None:
            db_path = Config().get_database_path()

        self.db_path = Path(db_path)

        if create:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            sqlite3.connect(self.db_path).close()
        elif not self.db_path.exists():
            raise FileNotFoundError(
                f"Database not found at {self.db_path}. "
                "Run 'python scripts/init_db.py' to create it."
            )

    @contextmanager
    def get_connection(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def execute(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            rows = cursor.fetchall()
            return [dict(row) for row in rows]

    def execute_one(self, query: str, params: Tuple = ()) -> Optional[Dict[str, Any]]:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            row = cursor.fetchone()
            return dict(row) if row else None

    def execute_insert(self, query: str, params: Tuple = ()) -> int:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            conn.commit()
            return cursor.lastrowid

    def execute_write(self, query: str, params: Tuple = ()) -> int:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            conn.commit()
            return cursor.rowcount

    def execute_ddl(self, statement: str) -> None:
        with self.get_connection() as conn:
            conn.executescript(statement)
            conn.commit()

    def table_exists(self, table_name: str) -> bool:
        query = "SELECT name FROM sqlite_master WHERE type='table' AND name=?;"
        result = self.execute_one(query, (table_name,))
        return result is not None

    def get_table_names(self) -> List[str]:
        query = "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;"
        rows = self.execute(query)
        return [row['name'] for row in rows if not row['name'].startswith('sqlite_')]


class PostgreSQLDatabase(DatabaseBase):
    """PostgreSQL database implementation for hosted production"""

    dialect = "postgresql"

    def __init__(self, database_url: str):
        if not POSTGRES_AVAILABLE:
            raise ImportError(
                "psycopg2 not installed. Run: pip install psycopg2-binary"
            )
        self.database_url = database_url
        self.db_path = database_url  # For compatibility with existing code
        self.errors = (psycopg2.Error,)

    @contextmanager
    def get_connection(self):
        conn = psycopg2.connect(self.database_url)
        try:
            yield conn
        finally:
            conn.close()

    def _convert_query(self, query: str) -> str:
        """Convert SQLite-style ? placeholders to PostgreSQL %s"""
        return query.replace('?', '%s')

    def execute(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        query = self._convert_query(query)

        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
                cursor.execute(query, params)
                rows = cursor.fetchall()
                return [dict(row) for row in rows]

    def execute_one(self, query: str, params: Tuple = ()) -> Optional[Dict[str, Any]]:
        query = self._convert_query(query)

        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
                cursor.execute(query, params)
                row = cursor.fetchone()
                return dict(row) if row else None

    def execute_insert(self, query: str, params: Tuple = ()) -> int:
        query = self._convert_query(query)

        # Add RETURNING id for INSERT statements to get the inserted ID
        if 'RETURNING' not in query.upper():
            query = query.rstrip().rstrip(';') + ' RETURNING id'

        with self.get_connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(query, params)
                conn.commit()
                result = cursor.fetchone()
                return result[0] if result else 0

    def execute_write(self, query: str, params: Tuple = ()) -> int:
        query = self._convert_query(query)

        with self.get_connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(query, params)
                conn.commit()
                return cursor.rowcount

    def execute_ddl(self, statement: str) -> None:
        with self.get_connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(statement)
            conn.commit()

    def table_exists(self, table_name: str) -> bool:
        query = """
            SELECT table_name FROM information_schema.tables
            WHERE table_schema = 'public' AND table_name = ?;
        """
        result = self.execute_one(query, (table_name,))
        return result is not None

    def get_table_names(self) -> List[str]:
        query = """
            SELECT table_name FROM information_schema.tables
            WHERE table_schema = 'public' ORDER BY table_name;
        """
        rows = self.execute(query)
        return [row['table_name'] for row in rows]


Database = Union[SQLiteDatabase, PostgreSQLDatabase]


def get_database(config: Optional[Config] = None) -> Database:
    """
    Factory function to get the appropriate database instance.

    Uses PostgreSQL if DATABASE_URL is set, otherwise falls back to SQLite.
    Set USE_SQLITE=1 to force SQLite even if DATABASE_URL is set.
    """
    config = config or Config()
    database_url = config.get_database_url()

    if database_url:
        return PostgreSQLDatabase(database_url)
    return SQLiteDatabase(config.get_database_path())
