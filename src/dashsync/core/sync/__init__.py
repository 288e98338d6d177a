"""
Sync layer for dashsync.

Provides the reconciliation strategies between dashboard JSON files and the
dashboard SQLite store.

The sync layer handles:
- Tag reconciliation (tags.py)
- Lazy once-per-run database backup and `.was` sidecars (backup.py)
- Identifier matching, bulk and keyed by uid (by_uid.py)
- Title matching, per item with rename overrides (by_title.py)
- Export of all dashboards to JSON (export.py)

All per-run state lives in a RunContext (context.py) passed explicitly.
"""

from dashsync.core.sync.backup import BackupManager, sidecar_path, write_sidecar
from dashsync.core.sync.by_title import import_by_title, parse_import_item, parse_import_items
from dashsync.core.sync.by_uid import import_by_uid
from dashsync.core.sync.context import RunContext
from dashsync.core.sync.export import export_dashboards
from dashsync.core.sync.tags import TagDiff, TagReconciler, compute_tag_diff

__all__ = [
    "BackupManager",
    "RunContext",
    "TagDiff",
    "TagReconciler",
    "compute_tag_diff",
    "export_dashboards",
    "import_by_title",
    "import_by_uid",
    "parse_import_item",
    "parse_import_items",
    "sidecar_path",
    "write_sidecar",
]
