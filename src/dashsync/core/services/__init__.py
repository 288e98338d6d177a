"""Service layer: entry points shared by the CLI and tests."""

from dashsync.core.services.sync import DashboardSyncService

__all__ = ["DashboardSyncService"]
