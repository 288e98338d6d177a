"""
Dashboard sync service: clean API for export and import runs.

Wraps core/sync/ into a service the CLI (or tests) can call. Each call opens
its own connection and its own RunContext; the connection is closed on every
exit path, including errors.

Usage:
    >>> from dashsync.core.services.sync import DashboardSyncService
    >>> service = DashboardSyncService(Path("grafana.db"), config)
    >>> service.export()
    >>> service.import_items(["cpu.json", "mem.json;Memory;memory-usage"])
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from dashsync.core.config.models import SyncConfig
from dashsync.core.dashboards.models import ExportResult, ImportMode, ImportResult
from dashsync.core.store.connection import get_connection
from dashsync.core.store.dashboards import DashboardStore
from dashsync.core.sync.by_title import import_by_title, parse_import_items
from dashsync.core.sync.by_uid import import_by_uid
from dashsync.core.sync.context import RunContext
from dashsync.core.sync.export import export_dashboards

logger = logging.getLogger(__name__)


class DashboardSyncService:
    """
    Runs export and import operations against one database file.

    No transactional atomicity is provided across dashboards: statements are
    committed as they run, and a failure part-way leaves earlier dashboards
    updated. The run backup (written before the first change) is the rollback
    path.

    Example:
        >>> service = DashboardSyncService(Path("grafana.db"))
        >>> result = service.import_items(["cpu.json"], mode=ImportMode.UID)
        >>> print(f"imported {result.imported} of {result.input_count}")
    """

    def __init__(self, db_path: Path | str, config: SyncConfig | None = None) -> None:
        self.db_path = Path(db_path)
        self.config = config or SyncConfig()

    @property
    def mode(self) -> ImportMode:
        return ImportMode.UID if self.config.uid_mode else ImportMode.TITLE

    def export(self, export_dir: Path | str | None = None) -> ExportResult:
        """
        Export every dashboard to `<export_dir>/<slug>.json`.

        Raises:
            DashboardSyncError: On store, parse or file errors
        """
        start_time = time.time()
        target = Path(export_dir) if export_dir is not None else self.config.export_dir

        with get_connection(self.db_path) as conn:
            result = export_dashboards(DashboardStore(conn), target)

        result.duration_seconds = time.time() - start_time
        logger.info(f"Exported {result.count} dashboards to {target}")
        return result

    def import_items(self, raw_items: list[str], mode: ImportMode | None = None) -> ImportResult:
        """
        Import JSON files into the database.

        Args:
            raw_items: Import arguments. Title matching accepts
                'file.json' or 'file.json;old title;new slug'; identifier
                matching takes each argument as a bare path.
            mode: Matching strategy (defaults to the configured one)

        Returns:
            ImportResult summary

        Raises:
            DashboardSyncError: On any fatal condition
        """
        start_time = time.time()
        mode = mode or self.mode

        # Title items are validated before the database is touched
        items = parse_import_items(raw_items) if mode is ImportMode.TITLE else None

        with get_connection(self.db_path) as conn:
            store = DashboardStore(conn)
            ctx = RunContext.start(store, self.db_path, mode, debug=self.config.debug)
            if items is not None:
                result = import_by_title(ctx, items)
            else:
                result = import_by_uid(ctx, [Path(raw) for raw in raw_items])

        result.duration_seconds = time.time() - start_time
        return result
