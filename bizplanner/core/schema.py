"""
Table definitions for the six planner entities.

Both dialects keep dates and times as ISO text so rows read back exactly as
they were written; list-valued columns (milestones, tags) hold JSON text.
"""

from typing import Dict, List

TABLE_NAMES = ["tasks", "goals", "events", "notes", "contacts", "planner_settings"]

_SQLITE_TIMESTAMP = "(strftime('%Y-%m-%d %H:%M:%f', 'now'))"

_COLUMNS: Dict[str, str] = {
    "tasks": """
        title TEXT NOT NULL DEFAULT '',
        description TEXT,
        due_date TEXT,
        due_time TEXT,
        priority TEXT DEFAULT 'normal',
        status TEXT DEFAULT 'pending',
        category TEXT
    """,
    "goals": """
        title TEXT NOT NULL DEFAULT '',
        description TEXT,
        category TEXT DEFAULT 'personal',
        timeframe TEXT DEFAULT 'short-term',
        target_date TEXT,
        status TEXT DEFAULT 'not-started',
        progress INTEGER DEFAULT 0,
        milestones TEXT DEFAULT '[]'
    """,
    "events": """
        title TEXT NOT NULL DEFAULT '',
        description TEXT,
        date TEXT,
        start_time TEXT,
        end_time TEXT,
        event_type TEXT DEFAULT 'meeting',
        location TEXT,
        color TEXT
    """,
    "notes": """
        title TEXT NOT NULL DEFAULT '',
        content TEXT,
        category TEXT DEFAULT 'general',
        tags TEXT DEFAULT '[]',
        is_pinned BOOLEAN DEFAULT FALSE,
        color TEXT
    """,
    "contacts": """
        name TEXT NOT NULL DEFAULT '',
        company TEXT,
        position TEXT,
        email TEXT,
        phone TEXT,
        secondary_phone TEXT,
        address TEXT,
        category TEXT DEFAULT 'other',
        notes TEXT,
        is_favorite BOOLEAN DEFAULT FALSE,
        avatar_url TEXT
    """,
    "planner_settings": """
        company_name TEXT,
        logo_url TEXT,
        slogan TEXT,
        primary_color TEXT,
        accent_color TEXT,
        theme TEXT,
        week_starts_on TEXT,
        time_format TEXT,
        date_format TEXT
    """,
}


def sqlite_statements() -> List[str]:
    """CREATE TABLE/TRIGGER statements for SQLite"""
    statements = []
    for table in TABLE_NAMES:
        statements.append(f"""
            CREATE TABLE IF NOT EXISTS {table} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                {_COLUMNS[table].strip()},
                created_at DATETIME DEFAULT {_SQLITE_TIMESTAMP},
                updated_at DATETIME DEFAULT {_SQLITE_TIMESTAMP}
            );
        """)
        statements.append(f"""
            CREATE TRIGGER IF NOT EXISTS {table}_updated_at AFTER UPDATE ON {table}
            BEGIN
                UPDATE {table} SET updated_at = {_SQLITE_TIMESTAMP}
                WHERE id = NEW.id;
            END;
        """)
    statements.append("CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date);")
    statements.append("CREATE INDEX IF NOT EXISTS idx_events_date ON events(date);")
    return statements


def postgres_statements() -> List[str]:
    """CREATE TABLE/TRIGGER statements for PostgreSQL"""
    statements = [
        """
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = CURRENT_TIMESTAMP;
            RETURN NEW;
        END;
        $$ language 'plpgsql';
        """
    ]
    for table in TABLE_NAMES:
        statements.append(f"""
            CREATE TABLE IF NOT EXISTS {table} (
                id SERIAL PRIMARY KEY,
                {_COLUMNS[table].strip()},
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
        """)
        statements.append(f"""
            DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table};
            CREATE TRIGGER update_{table}_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW
                EXECUTE FUNCTION update_updated_at_column();
        """)
    statements.append("CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date);")
    statements.append("CREATE INDEX IF NOT EXISTS idx_events_date ON events(date);")
    return statements


def init_schema(db) -> None:
    """Create every planner table on the given database (idempotent)"""
    statements = postgres_statements() if db.dialect == "postgresql" else sqlite_statements()
    for statement in statements:
        db.execute_ddl(statement)
