"""
dashsync CLI - Main application entry point.

    dashsync grafana.db                         # export all dashboards to JSON
    dashsync grafana.db a.json b.json           # import by title
    dashsync grafana.db 'a.json;Old title;new-slug'
    DASHSYNC_UID_MODE=1 dashsync grafana.db *.json   # import by uid
"""

import logging
import sys
import time
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from dashsync import __version__
from dashsync.cli.errors import ExitCode, print_error, print_sync_error
from dashsync.core.config import SyncConfig, load_config, load_layered_env
from dashsync.core.dashboards.exceptions import DashboardSyncError
from dashsync.core.dashboards.models import ExportResult, ImportResult
from dashsync.core.services.sync import DashboardSyncService

app = typer.Typer(
    name="dashsync",
    help="Export dashboards from a SQLite database to JSON and import edited JSON back",
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()

USAGE = """\
Required args: grafana.db file name and list(*) of jsons to import.
If only db file name given, it will output all dashboards to jsons.
Each list item can be either filename.json or 'fn.json;old title;new slug'.
If DASHSYNC_UID_MODE is set (or --uid-mode given), JSONs are imported by
matching their internal uid with the SQLite database.\
"""


def setup_logging(debug: int = 0) -> None:
    """
    Configure logging for a run.

    Args:
        debug: 0 logs run progress (INFO), 1+ adds per-tag and per-update details
    """
    level = logging.DEBUG if debug > 0 else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("dashsync").setLevel(level)


def _resolve_config(
    uid_mode: bool | None, export_dir: Path | None, debug: int
) -> SyncConfig:
    """Load layered config and apply command-line overrides."""
    load_layered_env()
    config = load_config()
    overrides: dict[str, object] = {}
    if uid_mode is not None:
        overrides["uid_mode"] = uid_mode
    if export_dir is not None:
        overrides["export_dir"] = export_dir
    if debug:
        overrides["debug"] = min(debug, 2)
    return config.model_copy(update=overrides)


def _print_export(result: ExportResult) -> None:
    console.print(f"[green]Exported {result.count} dashboards[/green]")


def _print_import(result: ImportResult) -> None:
    console.print(
        f"SQLite DB has {result.db_count} dashboards, there were {result.input_count} "
        f"JSONs to import ({result.mode.value} mode), "
        f"[green]imported {result.imported}[/green]"
    )
    for skipped in result.skipped:
        console.print(f"[yellow]Skipped[/yellow] {skipped.path}: {skipped.reason}")
    if result.backup_path is not None:
        console.print(f"[dim]Database backup: {result.backup_path}[/dim]")
        console.print(
            "[dim]If all is fine, delete the db backup file and the *.was json backups[/dim]"
        )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"dashsync version {__version__}")
        raise typer.Exit(0)


@app.command()
def main(
    db_file: Path | None = typer.Argument(
        None,
        help="Dashboard SQLite database file (e.g. grafana.db)",
        show_default=False,
    ),
    items: list[str] | None = typer.Argument(
        None,
        help="JSON files to import: 'file.json' or 'file.json;old title;new slug'",
        show_default=False,
    ),
    uid_mode: bool | None = typer.Option(
        None,
        "--uid-mode/--title-mode",
        help="Match JSON to dashboards by uid (default: by title, or DASHSYNC_UID_MODE)",
        show_default=False,
    ),
    export_dir: Path | None = typer.Option(
        None,
        "--export-dir",
        "-o",
        help="Export directory (default: sqlite, or DASHSYNC_EXPORT_DIR)",
    ),
    debug: int = typer.Option(
        0,
        "--debug",
        "-d",
        count=True,
        help="Debug output, repeat for full comparisons",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Reconcile dashboards between a SQLite database and JSON files.

    With only DB_FILE, every dashboard is exported to <export-dir>/<slug>.json.
    With ITEMS, the JSON files are merged back into the database. Before the
    first change the original database is copied to DB_FILE.<unix-ns>, and
    each updated dashboard's previous JSON is saved as <item>.was.
    """
    start_time = time.time()

    try:
        config = _resolve_config(uid_mode, export_dir, debug)
    except ValidationError as e:
        print_error("Invalid configuration", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    setup_logging(config.debug)

    if db_file is None:
        console.print(USAGE, highlight=False)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    service = DashboardSyncService(db_file, config)
    try:
        if items:
            _print_import(service.import_items(items))
        else:
            _print_export(service.export())
    except DashboardSyncError as e:
        raise typer.Exit(print_sync_error(e))

    console.print(f"[dim]Time: {time.time() - start_time:.3f}s[/dim]")


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
