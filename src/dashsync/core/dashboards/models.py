"""
Pydantic models for dashboards and reconciliation runs.

These models provide type-safe data structures for:
- DashboardDocument: The JSON representation (title, uid, tags + extra fields)
- StoredDocument: The same, read from the database, where uid may be missing
- DashboardRecord: A row of the `dashboard` table with its parsed content
- ImportItem: One CLI import item, optionally carrying a rename override
- ImportResult/ExportResult: Run summaries returned to the CLI
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImportMode(str, Enum):
    """How input documents are paired with database records."""

    UID = "uid"
    TITLE = "title"


class DashboardDocument(BaseModel):
    """
    Dashboard JSON document.

    Only the fields needed for reconciliation are declared; everything else
    is kept as extra data so the document round-trips verbatim.
    """

    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1)
    uid: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, v: Any) -> Any:
        # Grafana writes "tags": null for untagged dashboards
        return [] if v is None else v


class StoredDocument(DashboardDocument):
    """
    Dashboard content as stored in the `dashboard` table.

    Older rows may predate uids; a missing uid reads as "" and never matches
    an input document.
    """

    uid: str = ""

    @field_validator("uid", mode="before")
    @classmethod
    def _null_uid(cls, v: Any) -> Any:
        return "" if v is None else v


class DashboardRecord(BaseModel):
    """
    A row of the `dashboard` table.

    Attributes:
        id: Store-assigned primary key
        title: Title column
        slug: URL slug column
        data: Serialized JSON exactly as stored
        document: Parsed form of `data`
        canonical: Canonical text of `data`, used for change detection
    """

    id: int
    title: str
    slug: str
    data: str
    document: StoredDocument
    canonical: str

    @property
    def label(self) -> str:
        """Short description used in log lines."""
        return f"*{self.slug}.json*"


class ImportItem(BaseModel):
    """One import argument: a JSON path with an optional rename override."""

    model_config = ConfigDict(frozen=True)

    path: Path
    old_title: str | None = None
    new_slug: str | None = None

    @property
    def has_override(self) -> bool:
        return self.old_title is not None


class SkippedItem(BaseModel):
    """An import item that was skipped without failing the run."""

    path: str
    reason: str


class ImportResult(BaseModel):
    """Summary of one import run."""

    mode: ImportMode
    db_count: int = 0
    input_count: int = 0
    imported: int = 0
    skipped: list[SkippedItem] = Field(default_factory=list)
    backup_path: Path | None = None
    sidecars: list[Path] = Field(default_factory=list)
    duration_seconds: float = 0.0


class ExportResult(BaseModel):
    """Summary of one export run."""

    written: list[Path] = Field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def count(self) -> int:
        return len(self.written)
