"""
Configuration data models.

These dataclasses mirror the sections of `config.toml`. Defaults match a
stock Android device so the library works without any configuration file.
"""

from dataclasses import dataclass, field


@dataclass
class ProcfsSettings:
    """
    Settings for reading the process pseudo-filesystem, `[procfs]` section.
    """

    # Mount point of procfs.
    root: str = "/proc"
    # Memory page size in bytes. 0 means ask the running kernel.
    page_size: int = 0
    # Existence of this file means the kernel uses scheduler cgroups.
    cpuctl_tasks: str = "/dev/cpuctl/tasks"
    # 'auto' detects scheduler cgroups through cpuctl_tasks; 'on'/'off' force it.
    enhanced_attribution: str = "auto"


@dataclass
class ClassificationSettings:
    """
    Settings for the app-process classifier, `[classification]` section.
    """

    # Require <app_data_dir>/<package> to exist before calling a process an app.
    require_app_data_dir: bool = True
    app_data_dir: str = "/data/data"


@dataclass
class PsSettings:
    """
    Settings for the privileged ps path, `[ps]` section.
    """

    command: str = "toolbox ps -p -P -x -c"
    # Name of the privilege-elevation helper binary.
    su_binary: str = "su"


@dataclass
class PlatformSettings:
    """
    Target platform facts, `[platform]` section.
    """

    # API level of the device; decides which app-id naming scheme ps uses.
    sdk_version: int = 24


@dataclass
class ProcsConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    procfs: ProcfsSettings = field(default_factory=ProcfsSettings)
    classification: ClassificationSettings = field(default_factory=ClassificationSettings)
    ps: PsSettings = field(default_factory=PsSettings)
    platform: PlatformSettings = field(default_factory=PlatformSettings)
