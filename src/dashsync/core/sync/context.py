"""
Per-run state shared by the import strategies.

A RunContext is built for one run and passed down explicitly; nothing about a
run (backup flag, imported counters, sidecars) is kept at module level.
"""

from dataclasses import dataclass, field
from pathlib import Path

from dashsync.core.dashboards.models import ImportMode, ImportResult
from dashsync.core.store.dashboards import DashboardStore
from dashsync.core.sync.backup import BackupManager, write_sidecar
from dashsync.core.sync.tags import TagDiff, TagReconciler


@dataclass
class RunContext:
    """
    Collaborators and accumulators of one import run.

    Attributes:
        store: Store adapter bound to the run's connection
        backups: Backup manager holding the database bytes captured at start
        result: Summary filled in as the run progresses
        debug: Verbosity level (0-2)
    """

    store: DashboardStore
    backups: BackupManager
    result: ImportResult
    debug: int = 0
    tags: TagReconciler = field(init=False)

    def __post_init__(self) -> None:
        self.tags = TagReconciler(self.store)

    @classmethod
    def start(
        cls, store: DashboardStore, db_path: Path, mode: ImportMode, *, debug: int = 0
    ) -> "RunContext":
        """Capture the database file and create an empty result."""
        return cls(
            store=store,
            backups=BackupManager.capture(db_path),
            result=ImportResult(mode=mode),
            debug=debug,
        )

    def ensure_backed_up(self) -> Path:
        path = self.backups.ensure_backed_up()
        self.result.backup_path = path
        return path

    def reconcile_tags(self, dashboard_id: int, tags: list[str], label: str) -> TagDiff:
        """Reconcile tags, backing up the database before the first tag write."""
        return self.tags.reconcile(
            dashboard_id, tags, label=label, before_write=self.ensure_backed_up
        )

    def save_previous(self, source: Path, previous_content: str) -> Path:
        path = write_sidecar(source, previous_content)
        self.result.sidecars.append(path)
        return path
