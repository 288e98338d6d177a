"""
Schema expectations for the dashboard store.

The tables belong to the dashboard service and are never created or migrated
here. `verify_schema` only checks that the columns this tool reads and writes
are present.
"""

import sqlite3

from dashsync.core.dashboards.exceptions import StoreError

# Table -> columns used by dashsync
REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "dashboard": ("id", "title", "slug", "data"),
    "dashboard_tag": ("dashboard_id", "term"),
}


def get_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    """Return the column names of a table (empty if the table is missing)."""
    cursor = conn.execute(f"PRAGMA table_info({table})")
    names = set()
    for row in cursor.fetchall():
        names.add(row["name"] if isinstance(row, dict) else row[1])
    return names


def verify_schema(conn: sqlite3.Connection) -> None:
    """
    Check that the dashboard tables exist with the expected columns.

    Raises:
        StoreError: If a table or column is missing
    """
    try:
        for table, columns in REQUIRED_COLUMNS.items():
            present = get_columns(conn, table)
            if not present:
                raise StoreError(f"table '{table}' not found, is this a dashboard database?")
            missing = [c for c in columns if c not in present]
            if missing:
                raise StoreError(f"table '{table}' is missing columns: {', '.join(missing)}")
    except sqlite3.Error as e:
        raise StoreError(f"schema check failed: {e}") from e
