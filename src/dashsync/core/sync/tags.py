"""
Tag reconciliation between a JSON document and the dashboard_tag table.

Tags only in JSON are inserted, tags only in the database are deleted, shared
tags are left alone. Each differing tag is one statement; there is no batching
and no rollback, so a failure part-way leaves the tag set partially updated.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from dashsync.core.store.dashboards import DashboardStore

logger = logging.getLogger(__name__)


def _joined(tags: Iterable[str]) -> str:
    return ",".join(sorted({t.casefold() for t in tags}))


@dataclass(frozen=True)
class TagDiff:
    """
    Difference between a dashboard's database tags and its JSON tags.

    Attributes:
        db_tags: Sorted tags currently stored
        json_tags: Sorted, de-duplicated tags from the document
        to_insert: Tags present only in JSON
        to_delete: Tags present only in the database
    """

    db_tags: tuple[str, ...]
    json_tags: tuple[str, ...]
    to_insert: tuple[str, ...] = field(default=())
    to_delete: tuple[str, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return bool(self.to_insert or self.to_delete)

    def describe(self) -> str:
        return f"'{','.join(self.db_tags)}' -> '{','.join(self.json_tags)}'"


def compute_tag_diff(db_tags: Iterable[str], json_tags: Iterable[str]) -> TagDiff:
    """
    Compute the insert/delete sets that turn `db_tags` into `json_tags`.

    Comparison is order-insensitive and case-insensitive: when the sorted,
    comma-joined forms match, the diff is empty without looking further.

    Example:
        >>> diff = compute_tag_diff(["perf", "net"], ["infra", "perf"])
        >>> diff.to_insert, diff.to_delete
        (('infra',), ('net',))
    """
    db = tuple(sorted(set(db_tags)))
    wanted = tuple(sorted(set(json_tags)))
    if _joined(db) == _joined(wanted):
        return TagDiff(db_tags=db, json_tags=wanted)

    db_set, wanted_set = set(db), set(wanted)
    return TagDiff(
        db_tags=db,
        json_tags=wanted,
        to_insert=tuple(sorted(wanted_set - db_set)),
        to_delete=tuple(sorted(db_set - wanted_set)),
    )


class TagReconciler:
    """
    Applies tag diffs through the store adapter.

    Example:
        >>> reconciler = TagReconciler(store)
        >>> diff = reconciler.reconcile(12, ["infra", "perf"], label="abc123 CPU")
        >>> diff.changed
        True
    """

    def __init__(self, store: DashboardStore) -> None:
        self.store = store

    def reconcile(
        self,
        dashboard_id: int,
        json_tags: Iterable[str],
        *,
        label: str,
        before_write: Callable[[], object] | None = None,
    ) -> TagDiff:
        """
        Make the stored tags of `dashboard_id` match `json_tags`.

        Args:
            dashboard_id: Dashboard primary key
            json_tags: Desired tags from the JSON document
            label: Dashboard description for log lines (uid and title)
            before_write: Called once before the first statement when
                anything needs to change (used to trigger the run backup)

        Returns:
            The applied TagDiff; `changed` tells whether anything was written
        """
        diff = compute_tag_diff(self.store.get_tags(dashboard_id), json_tags)
        if not diff.changed:
            return diff

        if before_write is not None:
            before_write()

        for tag in diff.to_insert:
            self.store.insert_tag(dashboard_id, tag)
            logger.debug(
                f"Updating dashboard '{label}' id: {dashboard_id}, {diff.describe()}, "
                f"inserted '{tag}' tag"
            )
        for tag in diff.to_delete:
            self.store.delete_tag(dashboard_id, tag)
            logger.debug(
                f"Updating dashboard '{label}' id: {dashboard_id}, {diff.describe()}, "
                f"deleted '{tag}' tag"
            )

        logger.info(
            f"Updated dashboard '{label}' id: {dashboard_id}, {diff.describe()}, "
            f"added: {len(diff.to_insert)}, removed: {len(diff.to_delete)}"
        )
        return diff
