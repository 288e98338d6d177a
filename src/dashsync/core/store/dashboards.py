"""
Dashboard store adapter.

Reads and writes rows of the `dashboard` and `dashboard_tag` tables. This
module only executes queries; matching, diffing and backups live in
dashsync.core.sync.
"""

import logging
import sqlite3
from typing import Any

from dashsync.core.dashboards.exceptions import StoreError
from dashsync.core.store.schema import verify_schema

logger = logging.getLogger(__name__)


class DashboardStore:
    """
    Query wrapper around an open SQLite connection.

    Every sqlite3 failure is re-raised as StoreError.

    Example:
        >>> with get_connection(db_path) as conn:
        ...     store = DashboardStore(conn)
        ...     for row in store.list_dashboards():
        ...         print(row["id"], row["title"])
    """

    def __init__(self, conn: sqlite3.Connection, *, verify: bool = True) -> None:
        """
        Initialize the store.

        Args:
            conn: SQLite connection (must have dict row factory configured)
            verify: Check that the dashboard tables exist
        """
        self.conn = conn
        if verify:
            verify_schema(conn)

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[dict[str, Any]]:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"query failed: {e}") from e

    def _execute(self, sql: str, params: tuple[Any, ...]) -> int:
        try:
            cursor = self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StoreError(f"statement failed: {e}") from e
        return cursor.rowcount

    # ------------------------------------------------------------------
    # dashboard table
    # ------------------------------------------------------------------

    def count(self) -> int:
        """Return the number of dashboard rows."""
        rows = self._query("SELECT COUNT(*) AS count FROM dashboard")
        return int(rows[0]["count"])

    def list_dashboards(self) -> list[dict[str, Any]]:
        """Return id, title, slug and data of every dashboard, ordered by id."""
        return self._query("SELECT id, data, title, slug FROM dashboard ORDER BY id")

    def find_by_title(self, title: str) -> list[dict[str, Any]]:
        """Return every dashboard row whose title column equals `title`."""
        return self._query(
            "SELECT id, data, title, slug FROM dashboard WHERE title = ? ORDER BY id",
            (title,),
        )

    def update_dashboard(self, dashboard_id: int, title: str, slug: str, data: str) -> None:
        """
        Update title, slug and content of one dashboard in a single statement.

        Raises:
            StoreError: If the statement fails or no row has `dashboard_id`
        """
        changed = self._execute(
            "UPDATE dashboard SET title = ?, slug = ?, data = ? WHERE id = ?",
            (title, slug, data, dashboard_id),
        )
        if changed != 1:
            raise StoreError(f"update of dashboard id {dashboard_id} touched {changed} rows")
        logger.debug(f"Updated dashboard row id={dashboard_id} slug={slug}")

    # ------------------------------------------------------------------
    # dashboard_tag table
    # ------------------------------------------------------------------

    def get_tags(self, dashboard_id: int) -> list[str]:
        """Return the tags of a dashboard, sorted by term."""
        rows = self._query(
            "SELECT term FROM dashboard_tag WHERE dashboard_id = ? ORDER BY term ASC",
            (dashboard_id,),
        )
        return [row["term"] for row in rows]

    def insert_tag(self, dashboard_id: int, term: str) -> None:
        self._execute(
            "INSERT INTO dashboard_tag (dashboard_id, term) VALUES (?, ?)",
            (dashboard_id, term),
        )

    def delete_tag(self, dashboard_id: int, term: str) -> None:
        self._execute(
            "DELETE FROM dashboard_tag WHERE dashboard_id = ? AND term = ?",
            (dashboard_id, term),
        )
