"""
Identifier matching: bulk import of JSON documents keyed by their uid.

Flow:
1. Load every dashboard row and index it by the uid inside its data
2. Parse every input file and pair it with its record; unknown and duplicate
   uids are fatal and are detected before anything is written
3. For each input: reconcile tags, then update title/slug/data if the
   canonical content, title or derived slug differ
4. Back up the database once, before the first write of any kind

Identifier mismatches are pipeline integrity errors here, never soft skips.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from dashsync.core.dashboards.codec import read_document
from dashsync.core.dashboards.exceptions import DashboardNotFoundError, DuplicateUidError
from dashsync.core.dashboards.models import DashboardDocument, DashboardRecord, ImportResult
from dashsync.core.dashboards.slug import slugify
from dashsync.core.store.dashboards import DashboardStore
from dashsync.core.sync.context import RunContext
from dashsync.core.sync.records import record_from_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingImport:
    """An input document paired with the record it will be merged into."""

    path: Path
    document: DashboardDocument
    canonical: str
    slug: str
    record: DashboardRecord

    @property
    def uid(self) -> str:
        return self.document.uid

    @property
    def content_unchanged(self) -> bool:
        return (
            self.record.document.title == self.document.title
            and self.record.slug == self.slug
            and self.record.canonical == self.canonical
        )


def load_uid_map(store: DashboardStore) -> dict[str, DashboardRecord]:
    """
    Index all database dashboards by the uid embedded in their content.

    Rows without a uid cannot be matched and are left out.

    Raises:
        ParseError: If stored content is not a valid dashboard document
        ConsistencyError: If a title column disagrees with its content
    """
    records: dict[str, DashboardRecord] = {}
    for row in store.list_dashboards():
        record = record_from_row(row)
        if not record.document.uid:
            logger.warning(f"Dashboard id {record.id} {record.label} has no uid, ignoring")
            continue
        previous = records.get(record.document.uid)
        if previous is not None:
            logger.warning(
                f"uid={record.document.uid} is used by dashboard ids {previous.id} and "
                f"{record.id}, using id {record.id}"
            )
        records[record.document.uid] = record
    return records


def pair_inputs(
    paths: list[Path], records: dict[str, DashboardRecord]
) -> list[PendingImport]:
    """
    Parse input files and pair each with its database record.

    Raises:
        FileAccessError: If a file cannot be read
        ParseError: If a file is not a valid dashboard document
        DashboardNotFoundError: If a uid has no database record
        DuplicateUidError: If two inputs share a uid
    """
    pending: dict[str, PendingImport] = {}
    for path in paths:
        document, canonical = read_document(path)
        record = records.get(document.uid)
        if record is None:
            raise DashboardNotFoundError(
                f"{path}: uid={document.uid} not found in SQLite, "
                f"attempted to import '{document.title}'",
                uid=document.uid,
                title=document.title,
            )
        other = pending.get(document.uid)
        if other is not None:
            raise DuplicateUidError(document.uid, str(path), str(other.path))

        pending[document.uid] = PendingImport(
            path=path,
            document=document,
            canonical=canonical,
            slug=slugify(document.title),
            record=record,
        )
    return list(pending.values())


def _apply(ctx: RunContext, item: PendingImport) -> bool:
    """Merge one paired input; returns True if anything was written."""
    record = item.record
    if ctx.debug > 1:
        logger.debug(f"json: {item.path} {item.document!r}\ndb: {record.label} {record!r}")

    tags = ctx.reconcile_tags(record.id, item.document.tags, f"{item.uid} {item.document.title}")

    if item.content_unchanged:
        return tags.changed

    ctx.ensure_backed_up()
    ctx.store.update_dashboard(record.id, item.document.title, item.slug, item.canonical)

    if ctx.debug > 0:
        logger.debug(
            f"{item.path}: updated uid: {item.uid}: tags updated: {tags.changed}\n"
            f"new: {item.canonical}\nold: {record.canonical}"
        )
    logger.info(
        f"{item.path}: updated dashboard: uid: {item.uid} "
        f"title: '{record.document.title}' -> '{item.document.title}', "
        f"slug: '{record.slug}' -> '{item.slug}', "
        f"tags: {tags.changed}:{list(tags.json_tags)} "
        f"(data {len(record.canonical)} -> {len(item.canonical)} bytes)"
    )

    ctx.save_previous(item.path, record.canonical)
    return True


def import_by_uid(ctx: RunContext, paths: list[Path]) -> ImportResult:
    """
    Import JSON files by matching their uid against database content.

    Args:
        ctx: Run context (store, backups, result accumulator)
        paths: JSON files to import

    Returns:
        The run's ImportResult with counts and artifacts
    """
    records = load_uid_map(ctx.store)
    pending = pair_inputs(paths, records)

    result = ctx.result
    result.db_count = ctx.store.count()
    result.input_count = len(pending)

    for item in pending:
        if _apply(ctx, item):
            result.imported += 1

    logger.info(
        f"SQLite DB has {result.db_count} dashboards, there were {result.input_count} "
        f"JSONs to import, imported {result.imported}"
    )
    return result
