"""
SQLite connection management for the dashboard store.

The operator's database is opened as-is: no journal mode or pragma changes,
no schema creation. Connections run in autocommit mode so every statement is
its own write; a run that fails part-way leaves earlier dashboards updated
and relies on the run's backup file for rollback.

Usage:
    from dashsync.core.store import get_connection

    with get_connection(db_path) as conn:
        cursor = conn.execute("SELECT id, title FROM dashboard")
        for row in cursor:
            print(row["id"], row["title"])
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from dashsync.core.dashboards.exceptions import StoreError


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """
    Row factory that returns rows as dictionaries.

    Enables dict-like access to query results: row["column_name"]
    instead of positional access: row[0].
    """
    fields = [column[0] for column in cursor.description]
    return dict(zip(fields, row))


def configure_connection(conn: sqlite3.Connection) -> None:
    """Use dict rows; leave every other setting of the file untouched."""
    conn.row_factory = dict_factory


def connect(db_path: Path | str) -> sqlite3.Connection:
    """
    Open an autocommit connection to an existing database file.

    Raises:
        StoreError: If the file does not exist or cannot be opened
    """
    db_path = Path(db_path)
    if not db_path.is_file():
        raise StoreError(f"database file not found: {db_path}")

    try:
        conn = sqlite3.connect(str(db_path), isolation_level=None)
    except sqlite3.Error as e:
        raise StoreError(f"cannot open {db_path}: {e}") from e

    configure_connection(conn)
    return conn


@contextmanager
def get_connection(db_path: Path | str) -> Iterator[sqlite3.Connection]:
    """
    Get a database connection as a context manager.

    The connection is closed when the context exits, on every exit path.

    Args:
        db_path: Path to the SQLite database file

    Yields:
        Configured SQLite connection
    """
    conn = connect(db_path)
    try:
        yield conn
    finally:
        conn.close()
