"""
Run backups: one full database copy per run, plus per-dashboard sidecars.

The database bytes are captured when the run starts, before any mutation, so
the backup holds the original content no matter when it is first requested.
"""

import logging
import time
from pathlib import Path

from dashsync.core.dashboards.codec import write_text
from dashsync.core.dashboards.exceptions import FileAccessError

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".was"


class BackupManager:
    """
    Lazily writes a single timestamped copy of the database file.

    Example:
        >>> backups = BackupManager.capture(Path("grafana.db"))
        >>> backups.ensure_backed_up()   # writes grafana.db.<unix-ns>
        >>> backups.ensure_backed_up()   # no-op, same path
    """

    def __init__(self, db_path: Path, contents: bytes) -> None:
        self.db_path = db_path
        self._contents = contents
        self.backup_path: Path | None = None

    @classmethod
    def capture(cls, db_path: Path | str) -> "BackupManager":
        """
        Read the database file as it is at run start.

        Raises:
            FileAccessError: If the file cannot be read
        """
        db_path = Path(db_path)
        try:
            contents = db_path.read_bytes()
        except OSError as e:
            raise FileAccessError(str(db_path), f"cannot read: {e.strerror or e}") from e
        return cls(db_path, contents)

    @property
    def backed_up(self) -> bool:
        return self.backup_path is not None

    def ensure_backed_up(self) -> Path:
        """
        Write the captured bytes to `<db>.<unix-ns>` once per run.

        Returns:
            Path of the backup file

        Raises:
            FileAccessError: If the backup cannot be written
        """
        if self.backup_path is not None:
            return self.backup_path

        path = self.db_path.with_name(f"{self.db_path.name}.{time.time_ns()}")
        try:
            path.write_bytes(self._contents)
        except OSError as e:
            raise FileAccessError(str(path), f"cannot write backup: {e.strerror or e}") from e

        self.backup_path = path
        logger.info(f"Original db file backed up as '{path}'")
        return path


def sidecar_path(source: Path | str) -> Path:
    """Return the `.was` sidecar path for an input file."""
    source = Path(source)
    return source.with_name(source.name + SIDECAR_SUFFIX)


def write_sidecar(source: Path | str, previous_content: str) -> Path:
    """
    Save a dashboard's pre-update canonical content next to its input file.

    Raises:
        FileAccessError: If the sidecar cannot be written
    """
    path = write_text(sidecar_path(source), previous_content)
    logger.debug(f"Saved previous content to {path}")
    return path
