"""
SQL DDL for the application's single table.
There is no migration step: tables are created when absent, nothing else.
"""
import sqlite3

CREATE_ITEMS_TABLE = """
CREATE TABLE IF NOT EXISTS items (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT    NOT NULL,
    price       REAL    NOT NULL,
    quantity    INTEGER NOT NULL
);
"""

ALL_TABLES = [
    CREATE_ITEMS_TABLE,
]


def create_tables(conn: sqlite3.Connection) -> None:
    """Create all tables (IF NOT EXISTS, safe on every start)."""
    cursor = conn.cursor()
    for ddl in ALL_TABLES:
        cursor.execute(ddl)
    conn.commit()
