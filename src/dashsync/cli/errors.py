"""
Standardized error handling and exit codes for the dashsync CLI.

Core layers raise typed DashboardSyncError subclasses; this module turns them
into a one-line diagnostic with optional guidance and an exit code.
"""

from enum import IntEnum

from rich.console import Console

from dashsync.core.dashboards.exceptions import (
    AmbiguousTitleError,
    ConsistencyError,
    DashboardNotFoundError,
    DashboardSyncError,
    DuplicateUidError,
    ItemSyntaxError,
    ParseError,
)

console = Console(stderr=True, soft_wrap=True)


class ExitCode(IntEnum):
    """Standard exit codes for dashsync operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Fatal sync error (store, lookup, consistency) or missing arguments."""

    USER_ERROR = 2
    """Bad input the user can fix (item syntax, invalid JSON files)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {problem}", highlight=False)

    if reason:
        console.print(f"[dim]{reason}[/dim]", highlight=False)

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}", highlight=False)


# Exception type -> (reason, solution)
_GUIDANCE: dict[type[DashboardSyncError], tuple[str | None, str | None]] = {
    ParseError: (None, "fix the JSON file and re-run"),
    ConsistencyError: (
        "The title column and the title inside the stored JSON disagree",
        "repair the dashboard in the dashboard service, then re-run",
    ),
    DashboardNotFoundError: (
        "No database dashboard matches this input",
        "export the database first to see current titles and uids",
    ),
    AmbiguousTitleError: (
        "Several dashboards share this title",
        "use --uid-mode, or rename one of them in the dashboard service",
    ),
    DuplicateUidError: ("Each uid may be imported only once per run", None),
    ItemSyntaxError: (None, "dashsync DB 'file.json;old title;new slug'"),
}


def exit_code_for(error: DashboardSyncError) -> ExitCode:
    """Map an error to its exit code."""
    if isinstance(error, (ItemSyntaxError, ParseError)):
        return ExitCode.USER_ERROR
    return ExitCode.GENERAL_ERROR


def print_sync_error(error: DashboardSyncError) -> ExitCode:
    """
    Print a diagnostic for a sync error and return the exit code to use.

    Example:
        >>> code = print_sync_error(DuplicateUidError("abc", "a.json", "b.json"))
        >>> code
        <ExitCode.GENERAL_ERROR: 1>
    """
    reason, solution = None, None
    for error_type, guidance in _GUIDANCE.items():
        if isinstance(error, error_type):
            reason, solution = guidance
            break

    print_error(str(error), reason=reason, solution=solution)
    return exit_code_for(error)
