"""
Foreground detection for app processes.

Whether a process hosts the visible UI is a platform decision. The classifier
asks an injected probe, a callable taking the ProcessRecord and returning a
bool. Two probes based on what the platform exposes in procfs are provided.
"""

import logging
from typing import Protocol

from ..procfs.process import ProcessRecord

logger = logging.getLogger(__name__)

# cpu cgroup Android moves backgrounded apps into.
BACKGROUND_CPU_GROUP = "bg_non_interactive"


class ForegroundProbe(Protocol):
    """Answers "is this process hosting the visible UI?"."""

    def __call__(self, process: ProcessRecord) -> bool:
        ...


class CgroupForegroundProbe:
    """
    Foreground if the process's cpu cgroup is not the background group.

    Applies on kernels with scheduler cgroups (/dev/cpuctl).

    Raises:
        ProcFileError: If /proc/<pid>/cgroup cannot be read or parsed.
    """

    def __call__(self, process: ProcessRecord) -> bool:
        cpu = process.cgroup().get_group("cpu")
        if cpu is None:
            logger.debug(f"pid {process.pid} has no cpu cgroup")
            return False
        return BACKGROUND_CPU_GROUP not in cpu.group


class SchedPolicyForegroundProbe:
    """
    Foreground if the process runs under the normal scheduling policy.

    Backgrounded apps are moved to SCHED_BATCH on kernels without scheduler
    cgroups.

    Raises:
        ProcFileError: If /proc/<pid>/stat cannot be read or parsed.
    """

    def __call__(self, process: ProcessRecord) -> bool:
        return process.stat().policy == 0


def default_foreground_probe(enhanced_attribution: bool) -> ForegroundProbe:
    """Pick the probe matching the kernel's capabilities."""
    if enhanced_attribution:
        return CgroupForegroundProbe()
    return SchedPolicyForegroundProbe()
