"""
App-process classification.

Decides whether a ProcessRecord hosts an installed application and, if so,
builds an AppProcessRecord carrying its uid and foreground state. Kernel
threads, native daemons and anything else that does not look like an app
raise NotAppProcessError, an expected routing signal rather than a failure.
"""

import logging
import os
import re
from typing import Optional

from ..models.config import ClassificationSettings, ProcfsSettings
from ..procfs.process import AppProcessRecord, ProcessRecord
from ..validation import NotAppProcessError, ProcFileError
from .foreground import ForegroundProbe

logger = logging.getLogger(__name__)

# Java package name, optionally followed by ':' and a process suffix.
APP_PROCESS_NAME = re.compile(r"^([A-Za-z][A-Za-z0-9_]*[.:])*[A-Za-z][A-Za-z0-9_]*$")

# cpuacct cgroup path of an app: /uid_<uid>/pid_<pid>.
_CPUACCT_UID = re.compile(r"(?:^|/)uid_(\d+)(?:/|$)")


def is_app_process_name(cmdline_token: str) -> bool:
    """
    Check the naming heuristic on a process's first cmdline argument.

    Kernel threads have an empty cmdline (or a bracketed name in ps), native
    executables are paths. App processes are named after their package.
    """
    if not cmdline_token or cmdline_token.startswith("["):
        return False
    return APP_PROCESS_NAME.match(cmdline_token) is not None


def resolve_enhanced_attribution(settings: ProcfsSettings) -> bool:
    """
    Decide whether scheduler cgroups can be used to attribute uid and foreground.

    'auto' checks for the cpuctl tasks file, 'on'/'off' force the answer.
    """
    mode = settings.enhanced_attribution
    if mode == "on":
        return True
    if mode == "off":
        return False
    return os.path.exists(settings.cpuctl_tasks)


def cgroup_uid(process: ProcessRecord) -> Optional[int]:
    """
    Read the uid an app was accounted to from its cpuacct cgroup path.

    Returns:
        The uid, or None if the cgroup has no uid_<N> component.
    """
    cpuacct = process.cgroup().get_group("cpuacct")
    if cpuacct is None:
        return None
    match = _CPUACCT_UID.search(cpuacct.group)
    return int(match.group(1)) if match else None


def resolve_app_uid(process: ProcessRecord, enhanced_attribution: bool) -> int:
    """
    Determine the uid of an app process.

    With enhanced attribution the cpuacct cgroup is tried first; the real
    uid from status is the fallback and the only source otherwise.

    Raises:
        ProcFileError: If status is needed and cannot be read.
    """
    if enhanced_attribution:
        try:
            uid = cgroup_uid(process)
        except ProcFileError as e:
            logger.debug(f"cgroup of pid {process.pid} unusable, using status: {e}")
            uid = None
        if uid is not None:
            return uid
    return process.status().uid


def classify(
    process: ProcessRecord,
    cmdline_token: str,
    foreground_probe: ForegroundProbe,
    enhanced_attribution: bool = False,
    settings: Optional[ClassificationSettings] = None,
) -> AppProcessRecord:
    """
    Turn a ProcessRecord into an AppProcessRecord.

    Args:
        process: The record to classify.
        cmdline_token: First argument of the process's cmdline ('' if empty).
        foreground_probe: Queried for the foreground flag.
        enhanced_attribution: Whether scheduler cgroups may be used for the uid.
        settings: Classification settings; defaults apply when None.

    Returns:
        A new AppProcessRecord sharing the record's pid, name and proc root.

    Raises:
        NotAppProcessError: If the process is not an app process.
        ProcFileError: If uid or foreground state cannot be read.
    """
    settings = settings or ClassificationSettings()

    if not cmdline_token:
        raise NotAppProcessError(process.pid, "empty cmdline")
    if cmdline_token.startswith("["):
        raise NotAppProcessError(process.pid, "kernel thread")
    if not is_app_process_name(cmdline_token):
        raise NotAppProcessError(process.pid, f"'{cmdline_token}' is not a package name")

    package_name = cmdline_token.split(":", 1)[0]
    if settings.require_app_data_dir:
        data_dir = os.path.join(settings.app_data_dir, package_name)
        if not os.path.exists(data_dir):
            raise NotAppProcessError(process.pid, f"no data directory {data_dir}")

    uid = resolve_app_uid(process, enhanced_attribution)
    foreground = bool(foreground_probe(process))

    app = AppProcessRecord(
        pid=process.pid,
        name=cmdline_token,
        proc_root=process.proc_root,
        page_size=process.page_size,
        uid=uid,
        foreground=foreground,
    )
    app._cache.update(process._cache)
    return app
