"""
Configuration validation utilities.

Turns the raw dictionaries read from config.toml into validated settings
dataclasses. Missing keys fall back to the dataclass defaults.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    ClassificationSettings,
    PlatformSettings,
    ProcfsSettings,
    ProcsConfig,
    PsSettings,
)
from ..validation import (
    ValidationError,
    validate_absolute_path,
    validate_binary_name,
    validate_boolean,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

_DEFAULT_PROCFS = ProcfsSettings()
_DEFAULT_CLASSIFICATION = ClassificationSettings()
_DEFAULT_PS = PsSettings()
_DEFAULT_PLATFORM = PlatformSettings()


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_procfs_settings(procfs_data: Dict[str, Any]) -> ProcfsSettings:
    """
    Validate the [procfs] section.

    Raises:
        ValidationError: If validation fails
    """
    root = validate_absolute_path(
        procfs_data.get("root", _DEFAULT_PROCFS.root),
        field_name="procfs.root",
    )

    page_size = validate_positive_integer(
        procfs_data.get("page_size", _DEFAULT_PROCFS.page_size),
        min_value=0,
        max_value=1 << 30,
        field_name="procfs.page_size",
    )
    if page_size and page_size & (page_size - 1):
        raise ValidationError(
            f"procfs.page_size must be a power of two, got {page_size}",
            field_name="procfs.page_size",
            value=page_size,
        )

    cpuctl_tasks = validate_absolute_path(
        procfs_data.get("cpuctl_tasks", _DEFAULT_PROCFS.cpuctl_tasks),
        field_name="procfs.cpuctl_tasks",
    )

    enhanced_attribution = validate_enum_choice(
        procfs_data.get("enhanced_attribution", _DEFAULT_PROCFS.enhanced_attribution),
        valid_choices=["auto", "on", "off"],
        field_name="procfs.enhanced_attribution",
        case_sensitive=False,
    )

    return ProcfsSettings(
        root=root,
        page_size=page_size,
        cpuctl_tasks=cpuctl_tasks,
        enhanced_attribution=enhanced_attribution,
    )


def validate_classification_settings(data: Dict[str, Any]) -> ClassificationSettings:
    """Validate the [classification] section."""
    require_app_data_dir = validate_boolean(
        data.get("require_app_data_dir", _DEFAULT_CLASSIFICATION.require_app_data_dir),
        field_name="classification.require_app_data_dir",
    )
    app_data_dir = validate_absolute_path(
        data.get("app_data_dir", _DEFAULT_CLASSIFICATION.app_data_dir),
        field_name="classification.app_data_dir",
    )
    return ClassificationSettings(
        require_app_data_dir=require_app_data_dir,
        app_data_dir=app_data_dir,
    )


def validate_ps_settings(data: Dict[str, Any]) -> PsSettings:
    """Validate the [ps] section."""
    command = validate_non_empty_string(
        data.get("command", _DEFAULT_PS.command),
        field_name="ps.command",
    )
    su_binary = validate_binary_name(
        data.get("su_binary", _DEFAULT_PS.su_binary),
        field_name="ps.su_binary",
    )
    return PsSettings(command=command.strip(), su_binary=su_binary)


def validate_platform_settings(data: Dict[str, Any]) -> PlatformSettings:
    """Validate the [platform] section."""
    sdk_version = validate_positive_integer(
        data.get("sdk_version", _DEFAULT_PLATFORM.sdk_version),
        min_value=1,
        max_value=1000,
        field_name="platform.sdk_version",
    )
    return PlatformSettings(sdk_version=sdk_version)


def validate_config(config_data: Dict[str, Any]) -> ProcsConfig:
    """
    Validate a whole parsed config.toml.

    Args:
        config_data: Raw configuration from TOML

    Returns:
        Validated ProcsConfig instance

    Raises:
        ValidationError: If any section is invalid
    """
    config = ProcsConfig(
        procfs=validate_procfs_settings(_section(config_data, "procfs")),
        classification=validate_classification_settings(
            _section(config_data, "classification")
        ),
        ps=validate_ps_settings(_section(config_data, "ps")),
        platform=validate_platform_settings(_section(config_data, "platform")),
    )
    logger.debug(f"Validated configuration: {config}")
    return config
