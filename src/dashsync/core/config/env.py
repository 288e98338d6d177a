"""Environment loading helpers.

dashsync reads its toggles (DASHSYNC_UID_MODE, DASHSYNC_EXPORT_DIR,
DASHSYNC_DEBUG) from the environment. Values can also come from .env files:
- OS environment (highest precedence)
- Project environment files (.env, .env.local in the working directory)
- User environment file (~/.config/dashsync/.env)

A .env file never overrides a variable already exported in the shell.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def default_user_env_path() -> Path:
    """User-level env file, honouring XDG_CONFIG_HOME."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "dashsync" / ".env"


def _env_file_values(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    return {str(k): str(v) for k, v in dotenv_values(path).items() if k and v is not None}


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, Path]:
    """Load environment variables from user + project .env files.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        Mapping of each key that was set to the file it came from.
    """
    base = project_dir if project_dir is not None else Path.cwd()
    user_files = [default_user_env_path()] if user_env_paths is None else list(user_env_paths)
    project_files = (
        [base / ".env", base / ".env.local"]
        if project_env_paths is None
        else list(project_env_paths)
    )

    protected = set(os.environ)
    loaded: dict[str, Path] = {}
    for path in [*user_files, *project_files]:
        for key, value in _env_file_values(Path(path)).items():
            if key in protected:
                continue
            os.environ[key] = value
            loaded[key] = Path(path)

    for key, source in loaded.items():
        logger.debug(f"{key} loaded from {source}")
    return loaded
