"""
Dashboard documents: models, JSON codec, slugs and error taxonomy.

Usage:
    from dashsync.core.dashboards import parse_document, canonicalize, slugify

    doc = parse_document(raw_bytes, source="cpu.json")
    slug = slugify(doc.title)
"""

from dashsync.core.dashboards.codec import (
    canonicalize,
    parse_document,
    read_document,
    write_text,
)
from dashsync.core.dashboards.exceptions import (
    AmbiguousTitleError,
    ConsistencyError,
    DashboardNotFoundError,
    DashboardSyncError,
    DuplicateUidError,
    FileAccessError,
    ItemSyntaxError,
    ParseError,
    StoreError,
    UidMismatchError,
)
from dashsync.core.dashboards.models import (
    DashboardDocument,
    DashboardRecord,
    ExportResult,
    ImportItem,
    ImportMode,
    ImportResult,
    SkippedItem,
    StoredDocument,
)
from dashsync.core.dashboards.slug import slugify

__all__ = [
    # Codec
    "canonicalize",
    "parse_document",
    "read_document",
    "write_text",
    "slugify",
    # Models
    "DashboardDocument",
    "DashboardRecord",
    "ExportResult",
    "ImportItem",
    "ImportMode",
    "ImportResult",
    "SkippedItem",
    "StoredDocument",
    # Exceptions
    "AmbiguousTitleError",
    "ConsistencyError",
    "DashboardNotFoundError",
    "DashboardSyncError",
    "DuplicateUidError",
    "FileAccessError",
    "ItemSyntaxError",
    "ParseError",
    "StoreError",
    "UidMismatchError",
]
