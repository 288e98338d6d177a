"""
Export pipeline: write every dashboard's content to `<export-dir>/<slug>.json`.

Read-only with respect to the database, so no backup is taken. The first
write failure aborts the remaining exports.
"""

import logging
from pathlib import Path

from dashsync.core.dashboards.codec import canonicalize, write_text
from dashsync.core.dashboards.exceptions import FileAccessError
from dashsync.core.dashboards.models import ExportResult
from dashsync.core.store.dashboards import DashboardStore

logger = logging.getLogger(__name__)


def export_path(export_dir: Path, slug: str) -> Path:
    """
    Return `<export_dir>/<slug>.json`.

    Raises:
        FileAccessError: If the slug would place the file outside `export_dir`
    """
    path = export_dir / f"{slug}.json"
    if path.resolve().parent != export_dir.resolve():
        raise FileAccessError(str(path), f"slug '{slug}' leaves the export directory")
    return path


def export_dashboards(store: DashboardStore, export_dir: Path | str) -> ExportResult:
    """
    Dump all dashboards as canonical JSON files named by slug.

    Args:
        store: Store adapter
        export_dir: Output directory (created if missing)

    Returns:
        ExportResult listing the written files

    Raises:
        ParseError: If a stored data blob is not well-formed JSON
        FileAccessError: If the directory or a file cannot be written
    """
    export_dir = Path(export_dir)
    try:
        export_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileAccessError(str(export_dir), f"cannot create: {e.strerror or e}") from e

    result = ExportResult()
    for row in store.list_dashboards():
        path = export_path(export_dir, row["slug"])
        write_text(path, canonicalize(row["data"], f"dashboard id {row['id']}"))
        logger.info(f"Written '{row['title']}' to {path}")
        result.written.append(path)
    return result
