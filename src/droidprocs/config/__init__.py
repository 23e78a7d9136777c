"""
Configuration management for the droidprocs package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config,
    set_config_path,
)
from .loader import load_main_config, load_toml_file
from .validators import (
    validate_classification_settings,
    validate_config,
    validate_platform_settings,
    validate_procfs_settings,
    validate_ps_settings,
)

__all__ = [
    "get_config",
    "set_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "load_toml_file",
    "load_main_config",
    "validate_config",
    "validate_procfs_settings",
    "validate_classification_settings",
    "validate_ps_settings",
    "validate_platform_settings",
]
