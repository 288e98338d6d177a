"""
dashsync - Dashboard JSON <-> SQLite reconciliation

A CLI tool that exports dashboards stored in a SQLite database to JSON files
and merges edited JSON files back into the database.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from dashsync.core.config.models import SyncConfig
from dashsync.core.dashboards.models import DashboardDocument, DashboardRecord

__all__ = ["SyncConfig", "DashboardDocument", "DashboardRecord", "__version__"]
