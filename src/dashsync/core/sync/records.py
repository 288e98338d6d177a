"""Conversion of dashboard rows into DashboardRecord models."""

from typing import Any

from dashsync.core.dashboards.codec import canonicalize, parse_document
from dashsync.core.dashboards.exceptions import ConsistencyError
from dashsync.core.dashboards.models import DashboardRecord, StoredDocument


def record_from_row(row: dict[str, Any], *, check_title: bool = True) -> DashboardRecord:
    """
    Parse a `dashboard` row into a DashboardRecord.

    Args:
        row: Row with id, title, slug and data columns
        check_title: Enforce that the title column equals the title in data

    Raises:
        ParseError: If the stored data is not a valid dashboard document
        ConsistencyError: If `check_title` and the titles disagree
    """
    source = f"dashboard id {row['id']} (*{row['slug']}.json*)"
    document = parse_document(row["data"], source, model=StoredDocument)
    if check_title and row["title"] != document.title:
        raise ConsistencyError(row["id"], row["title"], document.title)

    return DashboardRecord(
        id=row["id"],
        title=row["title"],
        slug=row["slug"],
        data=row["data"],
        document=document,
        canonical=canonicalize(row["data"], source),
    )
