"""
Configuration loading with layered merging.

Implements the precedence chain:
    defaults < project config (.dashsync.json) < env vars

Command-line options are applied on top by the CLI.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import SyncConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".dashsync.json"

ENV_UID_MODE = "DASHSYNC_UID_MODE"
ENV_EXPORT_DIR = "DASHSYNC_EXPORT_DIR"
ENV_DEBUG = "DASHSYNC_DEBUG"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .dashsync.json in the working directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / PROJECT_CONFIG_NAME


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None


def is_truthy(value: str) -> bool:
    """Env toggle semantics: anything but '', '0' and 'false' is on."""
    return value.strip().lower() not in ("false", "0", "")


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        DASHSYNC_UID_MODE - overrides uid_mode
        DASHSYNC_EXPORT_DIR - overrides export_dir
        DASHSYNC_DEBUG - overrides debug (0-2)

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if (uid_mode := os.environ.get(ENV_UID_MODE)) is not None:
        result["uid_mode"] = is_truthy(uid_mode)

    if export_dir := os.environ.get(ENV_EXPORT_DIR):
        result["export_dir"] = export_dir

    if debug_str := os.environ.get(ENV_DEBUG):
        try:
            debug = int(debug_str)
        except ValueError:
            logger.warning(f"Invalid {ENV_DEBUG} value '{debug_str}', ignoring")
        else:
            if 0 <= debug <= 2:
                result["debug"] = debug
            else:
                logger.warning(f"{ENV_DEBUG} must be 0-2, got {debug}, ignoring")

    return result


def load_config(project_dir: Path | None = None) -> SyncConfig:
    """
    Load configuration with full precedence chain.

    Args:
        project_dir: Directory holding .dashsync.json (defaults to cwd)

    Returns:
        Validated SyncConfig
    """
    config_dict: dict[str, Any] = SyncConfig().model_dump()

    project_config = load_json_file(get_project_config_path(project_dir))
    if project_config:
        config_dict.update(project_config)

    config_dict = apply_env_overrides(config_dict)
    return SyncConfig.model_validate(config_dict)
