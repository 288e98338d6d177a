"""
Title matching: per-item import that tolerates stale title references.

Each item is either ``file.json`` or ``file.json;old title;new slug``:

1. ``file.json``: find the dashboard whose title equals the document title,
   check the uid, then replace its data. Title and slug stay as they are.
2. ``file.json;old title;new slug``: find the dashboard titled
   ``old title``, check the uid, then replace its data, set its title to the
   document title and its slug to ``new slug``.

A uid mismatch between the document and the matched dashboard is logged and
the item is skipped; the run continues with the next item.
"""

import logging
from pathlib import Path

from dashsync.core.dashboards.codec import read_document
from dashsync.core.dashboards.exceptions import (
    AmbiguousTitleError,
    DashboardNotFoundError,
    ItemSyntaxError,
    UidMismatchError,
)
from dashsync.core.dashboards.models import ImportItem, ImportResult, SkippedItem
from dashsync.core.sync.context import RunContext
from dashsync.core.sync.records import record_from_row

logger = logging.getLogger(__name__)

ITEM_SEPARATOR = ";"


def parse_import_item(raw: str) -> ImportItem:
    """
    Parse one import argument.

    Example:
        >>> parse_import_item("cpu.json;CPU usage;cpu")
        ImportItem(path=PosixPath('cpu.json'), old_title='CPU usage', new_slug='cpu')

    Raises:
        ItemSyntaxError: If the item does not have exactly one or three parts
    """
    parts = raw.split(ITEM_SEPARATOR)
    if len(parts) == 1:
        return ImportItem(path=Path(parts[0]))
    if len(parts) == 3:
        return ImportItem(path=Path(parts[0]), old_title=parts[1], new_slug=parts[2])
    raise ItemSyntaxError(raw)


def parse_import_items(raw_items: list[str]) -> list[ImportItem]:
    """Parse all import arguments up front so bad syntax fails before any write."""
    return [parse_import_item(raw) for raw in raw_items]


def _import_item(ctx: RunContext, index: int, item: ImportItem) -> None:
    """Import one item; raises UidMismatchError when the uids disagree."""
    logger.info(f"Importing #{index} json: {item.path}")
    document, canonical = read_document(item.path)

    lookup_title = item.old_title if item.has_override else document.title
    rows = ctx.store.find_by_title(lookup_title)
    if not rows:
        raise DashboardNotFoundError(
            f"dashboard titled: '{lookup_title}' not found", title=lookup_title
        )
    if len(rows) > 1:
        raise AmbiguousTitleError(lookup_title, [row["id"] for row in rows])

    record = record_from_row(rows[0], check_title=False)
    if record.document.uid != document.uid:
        raise UidMismatchError(document.uid, record.document.uid)

    new_slug = item.new_slug if item.new_slug is not None else record.slug

    ctx.ensure_backed_up()
    ctx.store.update_dashboard(record.id, document.title, new_slug, canonical)
    tags = ctx.reconcile_tags(record.id, document.tags, f"{document.uid} {document.title}")

    if ctx.debug > 0:
        logger.debug(
            f"Updated (title: '{lookup_title}' -> '{document.title}', "
            f"slug: '{record.slug}' -> '{new_slug}', tags: {tags.changed}:{document.tags}):\n"
            f"{record.canonical}\nTo:\n{canonical}"
        )
    else:
        logger.info(
            f"Updated dashboard: title: '{lookup_title}' -> '{document.title}', "
            f"slug: '{record.slug}' -> '{new_slug}', tags: {tags.changed}:{document.tags}"
        )

    ctx.save_previous(item.path, record.canonical)


def import_by_title(ctx: RunContext, items: list[ImportItem]) -> ImportResult:
    """
    Import JSON files by matching dashboard titles.

    Args:
        ctx: Run context (store, backups, result accumulator)
        items: Parsed import items

    Returns:
        The run's ImportResult; uid mismatches are listed in `skipped`
    """
    result = ctx.result
    result.db_count = ctx.store.count()
    result.input_count = len(items)

    for index, item in enumerate(items, start=1):
        try:
            _import_item(ctx, index, item)
        except UidMismatchError as e:
            logger.warning(f"{item.path}: {e}, skipping")
            result.skipped.append(SkippedItem(path=str(item.path), reason=str(e)))
            continue
        result.imported += 1

    logger.info(
        f"SQLite DB has {result.db_count} dashboards, there were {result.input_count} "
        f"JSONs to import, imported {result.imported}, skipped {len(result.skipped)}"
    )
    return result
