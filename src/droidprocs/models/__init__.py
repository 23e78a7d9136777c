"""
Data models for the droidprocs package.

Configuration Models:
- Settings for procfs access, classification, the ps path and the platform

Procfs Models:
- Typed views of /proc/<pid>/stat, statm, status and cgroup

ps Models:
- Records parsed from privileged `ps` output and the batch result

App Models:
- Name, pid and uid summaries of running app processes
"""

from .config import (
    ClassificationSettings,
    PlatformSettings,
    ProcfsSettings,
    ProcsConfig,
    PsSettings,
)
from .procfs import (
    CgroupInfo,
    ControlGroup,
    ProcessState,
    SchedulingPolicy,
    StatInfo,
    StatmInfo,
    StatusInfo,
)
from .apps import RunningAppProcessInfo
from .ps import ProcessStatusInfo, PsResult

__all__ = [
    # Configuration
    "ClassificationSettings",
    "PlatformSettings",
    "ProcfsSettings",
    "ProcsConfig",
    "PsSettings",
    # Procfs
    "CgroupInfo",
    "ControlGroup",
    "ProcessState",
    "SchedulingPolicy",
    "StatInfo",
    "StatmInfo",
    "StatusInfo",
    # Apps
    "RunningAppProcessInfo",
    # ps
    "ProcessStatusInfo",
    "PsResult",
]
