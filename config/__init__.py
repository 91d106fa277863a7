"""
Configuration module for the permission engine.

Exports the configuration models and loader functions.
"""

from .defaults import DEFAULT_AUDIT_CAPACITY, DEFAULT_PROMPT_TIMEOUT_SECONDS
from .permissions_config import PermissionsConfig
from .main_config import Config
from .loader import (
    get_config,
    get_working_directory,
    load_config,
    load_config_file,
    merge_configs,
    strip_jsonc_comments,
)

__all__ = [
    # Constants
    "DEFAULT_AUDIT_CAPACITY",
    "DEFAULT_PROMPT_TIMEOUT_SECONDS",
    # Config models
    "Config",
    "PermissionsConfig",
    # Loader functions
    "load_config",
    "get_config",
    "get_working_directory",
    "load_config_file",
    "merge_configs",
    "strip_jsonc_comments",
]
