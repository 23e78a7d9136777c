"""
Interaction with the operating system outside procfs.

- commands: privileged command execution
- identity: user name to uid resolution
- packages: package metadata service interface
"""

from .commands import CommandResult, CommandRunner, SuCommandRunner, run_command
from .identity import (
    AID_APP_START,
    AID_READPROC,
    AID_SYSTEM,
    ANDROID_IDS,
    android_uid_for_name,
    app_id,
    current_uid,
    uid_for_name,
)
from .packages import PackageService, StaticPackageService

__all__ = [
    "AID_APP_START",
    "AID_READPROC",
    "AID_SYSTEM",
    "ANDROID_IDS",
    "CommandResult",
    "CommandRunner",
    "PackageService",
    "StaticPackageService",
    "SuCommandRunner",
    "android_uid_for_name",
    "app_id",
    "current_uid",
    "run_command",
    "uid_for_name",
]
