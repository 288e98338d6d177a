"""
Pytest configuration and shared fixtures.

Provides a Grafana-shaped SQLite database (tables `dashboard` and
`dashboard_tag`), JSON file helpers and row readers used across the suite.
"""

import json
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from dashsync.core.config.models import SyncConfig
from dashsync.core.dashboards.models import ImportMode
from dashsync.core.store import DashboardStore, get_connection
from dashsync.core.sync.context import RunContext

# The columns dashsync touches, plus a few Grafana ones it must leave alone
GRAFANA_DDL = """
CREATE TABLE dashboard (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    slug TEXT NOT NULL,
    title TEXT NOT NULL,
    data TEXT NOT NULL,
    org_id INTEGER NOT NULL DEFAULT 1
);
CREATE TABLE dashboard_tag (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    dashboard_id INTEGER NOT NULL,
    term TEXT NOT NULL
);
"""


def dashboard_doc(title: str, uid: str, tags: list[str] | None = None, **extra: Any) -> dict:
    """Build a minimal Grafana-like dashboard document."""
    doc: dict[str, Any] = {
        "title": title,
        "uid": uid,
        "tags": tags or [],
        "schemaVersion": 16,
        "panels": [{"id": 1, "type": "graph", "title": f"{title} panel"}],
    }
    doc.update(extra)
    return doc


@pytest.fixture
def make_doc() -> Callable[..., dict]:
    """Factory for dashboard documents (title, uid, tags, extra fields)."""
    return dashboard_doc


# ==============================================================================
# Database Fixtures
# ==============================================================================


@pytest.fixture
def make_db(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory creating a dashboard database.

    Each dashboard is a dict with `doc`, `slug` and optional `tags`/`title`
    (the title column, defaulting to the document title). Data is stored as
    compact JSON, the way the dashboard service writes it.
    """

    def _make(dashboards: list[dict[str, Any]], name: str = "grafana.db") -> Path:
        db_path = tmp_path / name
        conn = sqlite3.connect(str(db_path))
        conn.executescript(GRAFANA_DDL)
        for dash in dashboards:
            doc = dash["doc"]
            cursor = conn.execute(
                "INSERT INTO dashboard (slug, title, data) VALUES (?, ?, ?)",
                (dash["slug"], dash.get("title", doc["title"]), json.dumps(doc)),
            )
            for tag in dash.get("tags", doc.get("tags") or []):
                conn.execute(
                    "INSERT INTO dashboard_tag (dashboard_id, term) VALUES (?, ?)",
                    (cursor.lastrowid, tag),
                )
        conn.commit()
        conn.close()
        return db_path

    return _make


@pytest.fixture
def sample_dashboards() -> list[dict[str, Any]]:
    """Three dashboards: CPU (id 1), Memory (id 2), Disk IO (id 3)."""
    return [
        {"doc": dashboard_doc("CPU", "abc123", ["perf", "net"]), "slug": "cpu"},
        {"doc": dashboard_doc("Memory", "mem001", ["infra"]), "slug": "memory"},
        {"doc": dashboard_doc("Disk IO", "disk01"), "slug": "disk-io"},
    ]


@pytest.fixture
def db_path(make_db, sample_dashboards) -> Path:
    """Dashboard database populated with the sample dashboards."""
    return make_db(sample_dashboards)


@pytest.fixture
def read_row(db_path: Path) -> Callable[[int], dict[str, Any]]:
    """Read one dashboard row by id with a fresh connection."""

    def _read(dashboard_id: int) -> dict[str, Any]:
        with get_connection(db_path) as conn:
            return conn.execute(
                "SELECT id, title, slug, data FROM dashboard WHERE id = ?", (dashboard_id,)
            ).fetchone()

    return _read


@pytest.fixture
def read_tags(db_path: Path) -> Callable[[int], list[str]]:
    """Read the sorted tags of one dashboard with a fresh connection."""

    def _read(dashboard_id: int) -> list[str]:
        with get_connection(db_path) as conn:
            return DashboardStore(conn).get_tags(dashboard_id)

    return _read


@pytest.fixture
def store(db_path: Path):
    """Store adapter over an open connection to the sample database."""
    with get_connection(db_path) as conn:
        yield DashboardStore(conn)


@pytest.fixture
def run_context(store: DashboardStore, db_path: Path) -> Callable[[ImportMode], RunContext]:
    """Factory for a RunContext bound to the sample database."""

    def _start(mode: ImportMode) -> RunContext:
        return RunContext.start(store, db_path, mode)

    return _start


@pytest.fixture
def config(tmp_path: Path) -> SyncConfig:
    """Config exporting into a temporary directory."""
    return SyncConfig(export_dir=tmp_path / "export")


# ==============================================================================
# File Fixtures
# ==============================================================================


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSON document into tmp_path/inputs and return its path."""
    inputs = tmp_path / "inputs"
    inputs.mkdir(exist_ok=True)

    def _write(name: str, content: dict[str, Any] | str) -> Path:
        path = inputs / name
        text = content if isinstance(content, str) else json.dumps(content, indent=4)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


def backup_files(db_path: Path) -> list[Path]:
    """Return the `<db>.<timestamp>` backups next to a database file."""
    return sorted(
        p for p in db_path.parent.glob(f"{db_path.name}.*") if p.suffix[1:].isdigit()
    )


@pytest.fixture
def backups_of() -> Callable[[Path], list[Path]]:
    return backup_files
