"""
Tests for identifier matching (bulk import keyed by uid).

Tests cover:
- Round-trip idempotence after export
- Tag-only changes trigger a backup and count as imported
- Title/content changes update title, slug and data, and write sidecars
- Unknown and duplicate uids fail before anything is written
- Stored title/content inconsistency is fatal
- Exactly one database backup per run
"""

from pathlib import Path

import pytest

from dashsync.core.dashboards.codec import canonicalize
from dashsync.core.dashboards.exceptions import (
    ConsistencyError,
    DashboardNotFoundError,
    DuplicateUidError,
    FileAccessError,
)
from dashsync.core.dashboards.models import ImportMode
from dashsync.core.services.sync import DashboardSyncService
from dashsync.core.store import DashboardStore, get_connection
from dashsync.core.sync.by_uid import import_by_uid, load_uid_map, pair_inputs
from dashsync.core.sync.context import RunContext


def _uid_import(db_path: Path, paths: list[Path]):
    with get_connection(db_path) as conn:
        ctx = RunContext.start(DashboardStore(conn), db_path, ImportMode.UID)
        return import_by_uid(ctx, paths)


class TestLoadUidMap:
    """Tests for indexing database dashboards by uid."""

    def test_index_by_uid(self, store: DashboardStore) -> None:
        records = load_uid_map(store)
        assert set(records) == {"abc123", "mem001", "disk01"}
        assert records["abc123"].id == 1
        assert records["abc123"].canonical == canonicalize(records["abc123"].data)

    def test_title_inconsistency_is_fatal(self, make_db, make_doc) -> None:
        db = make_db(
            [{"doc": make_doc("CPU", "abc123"), "slug": "cpu", "title": "CPU v2"}],
            name="broken.db",
        )
        with get_connection(db) as conn:
            with pytest.raises(ConsistencyError) as exc_info:
                load_uid_map(DashboardStore(conn))
        assert exc_info.value.column_title == "CPU v2"
        assert exc_info.value.data_title == "CPU"

    def test_duplicate_uid_in_database_uses_last_row(self, make_db, make_doc) -> None:
        db = make_db(
            [
                {"doc": make_doc("A", "same"), "slug": "a"},
                {"doc": make_doc("B", "same"), "slug": "b"},
            ],
            name="dupes.db",
        )
        with get_connection(db) as conn:
            records = load_uid_map(DashboardStore(conn))
        assert records["same"].id == 2

    def test_rows_without_uid_are_ignored(self, make_db, make_doc) -> None:
        db = make_db(
            [
                {"doc": make_doc("CPU", "abc123"), "slug": "cpu"},
                {"doc": {"title": "Legacy", "panels": []}, "slug": "legacy"},
                {"doc": {"title": "Nulled", "uid": None}, "slug": "nulled"},
            ],
            name="legacy.db",
        )
        with get_connection(db) as conn:
            records = load_uid_map(DashboardStore(conn))
        assert list(records) == ["abc123"]


class TestPairInputs:
    """Tests for input validation before any write."""

    def test_unknown_uid(self, store, write_json, make_doc) -> None:
        path = write_json("new.json", make_doc("New", "nope"))
        with pytest.raises(DashboardNotFoundError) as exc_info:
            pair_inputs([path], load_uid_map(store))
        assert exc_info.value.uid == "nope"
        assert "not found in SQLite" in str(exc_info.value)

    def test_duplicate_uid(self, store, write_json, make_doc) -> None:
        first = write_json("a.json", make_doc("CPU", "abc123"))
        second = write_json("b.json", make_doc("CPU copy", "abc123"))
        with pytest.raises(DuplicateUidError) as exc_info:
            pair_inputs([first, second], load_uid_map(store))
        assert exc_info.value.other_path == str(first)

    def test_slug_derived_from_title(self, store, write_json, make_doc) -> None:
        path = write_json("cpu.json", make_doc("CPU Usage (all)", "abc123"))
        [item] = pair_inputs([path], load_uid_map(store))
        assert item.slug == "cpu-usage-all"
        assert item.record.id == 1


class TestImportByUid:
    """End-to-end identifier matching runs."""

    def test_round_trip_is_idempotent(self, db_path, config, read_row, backups_of) -> None:
        service = DashboardSyncService(db_path, config)
        exported = service.export()
        before = [read_row(i) for i in (1, 2, 3)]

        result = service.import_items([str(p) for p in exported.written], mode=ImportMode.UID)

        assert result.db_count == 3
        assert result.input_count == 3
        assert result.imported == 0
        assert result.backup_path is None
        assert result.sidecars == []
        assert backups_of(db_path) == []
        assert [read_row(i) for i in (1, 2, 3)] == before

    def test_row_without_uid_does_not_block_import(
        self, make_db, make_doc, write_json, read_tags
    ) -> None:
        db = make_db(
            [
                {"doc": make_doc("CPU", "abc123", ["perf"]), "slug": "cpu"},
                {"doc": {"title": "Legacy", "panels": []}, "slug": "legacy"},
            ],
            name="legacy.db",
        )
        path = write_json("cpu.json", make_doc("CPU Total", "abc123", ["perf"]))

        result = _uid_import(db, [path])

        assert result.db_count == 2
        assert result.imported == 1
        with get_connection(db) as conn:
            rows = DashboardStore(conn).list_dashboards()
        assert rows[0]["title"] == "CPU Total"
        assert rows[1]["title"] == "Legacy"

    def test_tag_only_change(self, make_db, make_doc, write_json, backups_of) -> None:
        """Test the content matches byte for byte but the tag rows differ."""
        doc = make_doc("CPU", "abc123", ["infra", "perf"])
        db = make_db([{"doc": doc, "slug": "cpu", "tags": ["perf", "net"]}], name="tags.db")
        path = write_json("cpu.json", doc)

        result = _uid_import(db, [path])

        with get_connection(db) as conn:
            store = DashboardStore(conn)
            assert store.get_tags(1) == ["infra", "perf"]
            assert store.list_dashboards()[0]["slug"] == "cpu"
        assert result.imported == 1
        assert result.sidecars == []
        assert len(backups_of(db)) == 1

    def test_content_and_title_change(
        self, db_path, write_json, make_doc, read_row, read_tags
    ) -> None:
        old_canonical = canonicalize(read_row(2)["data"])
        doc = make_doc("Memory Usage", "mem001", ["infra", "mem"], refresh="30s")
        path = write_json("memory.json", doc)

        result = _uid_import(db_path, [path])

        row = read_row(2)
        assert result.imported == 1
        assert row["title"] == "Memory Usage"
        assert row["slug"] == "memory-usage"
        assert row["data"] == canonicalize(doc)
        assert read_tags(2) == ["infra", "mem"]
        assert result.sidecars == [path.with_name("memory.json.was")]
        assert result.sidecars[0].read_text() == old_canonical

    def test_unknown_uid_has_no_side_effects(
        self, db_path, write_json, make_doc, read_row, read_tags, backups_of
    ) -> None:
        changed = write_json("cpu.json", make_doc("CPU!", "abc123", ["x"]))
        unknown = write_json("new.json", make_doc("New", "zzz"))
        before = read_row(1)

        with pytest.raises(DashboardNotFoundError):
            _uid_import(db_path, [changed, unknown])

        assert backups_of(db_path) == []
        assert read_row(1) == before
        assert read_tags(1) == ["net", "perf"]
        assert not changed.with_name("cpu.json.was").exists()

    def test_duplicate_uid_fails_before_touching_database(
        self, db_path, write_json, make_doc, read_row, backups_of
    ) -> None:
        first = write_json("a.json", make_doc("CPU A", "abc123"))
        second = write_json("b.json", make_doc("CPU B", "abc123"))

        with pytest.raises(DuplicateUidError):
            _uid_import(db_path, [first, second])

        assert read_row(1)["title"] == "CPU"
        assert backups_of(db_path) == []

    def test_single_backup_for_many_updates(
        self, db_path, write_json, make_doc, backups_of
    ) -> None:
        original = db_path.read_bytes()
        paths = [
            write_json("cpu.json", make_doc("CPU 2", "abc123")),
            write_json("mem.json", make_doc("Memory 2", "mem001")),
            write_json("disk.json", make_doc("Disk 2", "disk01", ["io"])),
        ]

        result = _uid_import(db_path, paths)

        backups = backups_of(db_path)
        assert result.imported == 3
        assert len(backups) == 1
        assert result.backup_path == backups[0]
        assert backups[0].read_bytes() == original
        assert len(result.sidecars) == 3

    def test_override_syntax_not_interpreted(self, db_path, config) -> None:
        """Test that uid mode takes every item as a plain path."""
        service = DashboardSyncService(db_path, config)
        with pytest.raises(FileAccessError) as exc_info:
            service.import_items(["cpu.json;CPU;cpu"], mode=ImportMode.UID)
        assert "cpu.json;CPU;cpu" in exc_info.value.path
