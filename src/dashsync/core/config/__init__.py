"""
Configuration model and loading.

This module provides the Pydantic model for dashsync configuration with
layered merging: defaults < .dashsync.json < env vars < CLI options.
"""

from .env import load_layered_env
from .loader import get_project_config_path, load_config
from .models import SyncConfig

__all__ = [
    "SyncConfig",
    "get_project_config_path",
    "load_config",
    "load_layered_env",
]
