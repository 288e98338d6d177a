"""
Store layer for dashsync.

Provides connection management and the query adapter for the dashboard
service's SQLite database (tables `dashboard` and `dashboard_tag`).

Usage:
    from dashsync.core.store import DashboardStore, get_connection

    with get_connection(db_path) as conn:
        store = DashboardStore(conn)
        print(store.count())
"""

from dashsync.core.store.connection import get_connection
from dashsync.core.store.dashboards import DashboardStore
from dashsync.core.store.schema import REQUIRED_COLUMNS, verify_schema

__all__ = [
    "DashboardStore",
    "get_connection",
    "verify_schema",
    "REQUIRED_COLUMNS",
]
