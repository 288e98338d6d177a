"""
Typed exceptions for dashboard reconciliation.

Core layers raise these; only the CLI turns them into a diagnostic and an
exit code.
"""


class DashboardSyncError(Exception):
    """Base exception for all dashsync errors."""


class ParseError(DashboardSyncError):
    """Malformed JSON or a missing required field."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class ConsistencyError(DashboardSyncError):
    """Stored title column disagrees with the title inside stored content."""

    def __init__(self, dashboard_id: int, column_title: str, data_title: str) -> None:
        self.dashboard_id = dashboard_id
        self.column_title = column_title
        self.data_title = data_title
        super().__init__(
            f"SQLite internal inconsistency for dashboard id {dashboard_id}: "
            f"'{column_title}' != '{data_title}'"
        )


class DashboardNotFoundError(DashboardSyncError, LookupError):
    """No database record matches the given uid or title."""

    def __init__(self, message: str, *, uid: str | None = None, title: str | None = None):
        self.uid = uid
        self.title = title
        super().__init__(message)


class AmbiguousTitleError(DashboardSyncError):
    """More than one database record carries the lookup title."""

    def __init__(self, title: str, ids: list[int]) -> None:
        self.title = title
        self.ids = ids
        super().__init__(
            f"dashboard title '{title}' is ambiguous, matches ids: "
            f"{', '.join(str(i) for i in ids)}"
        )


class DuplicateUidError(DashboardSyncError):
    """Two input documents share a uid in one identifier-matching run."""

    def __init__(self, uid: str, path: str, other_path: str) -> None:
        self.uid = uid
        self.path = path
        self.other_path = other_path
        super().__init__(f"{path}: duplicate json uid '{uid}', collision with {other_path}")


class UidMismatchError(DashboardSyncError):
    """Title-matched record carries a different uid than the input document."""

    def __init__(self, json_uid: str, db_uid: str) -> None:
        self.json_uid = json_uid
        self.db_uid = db_uid
        super().__init__(f"UID mismatch, json value: {json_uid}, database value: {db_uid}")


class ItemSyntaxError(DashboardSyncError):
    """Import item is neither 'file.json' nor 'file.json;old title;new slug'."""

    def __init__(self, item: str) -> None:
        self.item = item
        super().__init__(
            f"invalid item '{item}': provide jsons either as 'filename.json' "
            "or as 'fn.json;old title;new slug'"
        )


class StoreError(DashboardSyncError):
    """A query or statement against the SQLite store failed."""


class FileAccessError(DashboardSyncError):
    """Reading or writing a file failed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"{path}: {reason}")
