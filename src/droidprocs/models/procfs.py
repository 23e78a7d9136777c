"""
Typed views of the per-process files under /proc/<pid>.

Every class here is produced by a parser in droidprocs.procfs.parsers and is
immutable. Memory values are kept in the kernel's own unit (pages) alongside
the page size so that the byte-valued properties are the only sizes callers
need to touch.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple


class ProcessState(str, Enum):
    """Single-character process state codes reported by the kernel."""

    UNINTERRUPTIBLE_SLEEP = "D"
    RUNNING = "R"
    SLEEPING = "S"
    STOPPED = "T"
    PAGING = "W"
    DEAD = "X"
    ZOMBIE = "Z"

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS = {
    ProcessState.UNINTERRUPTIBLE_SLEEP: "uninterruptible sleep",
    ProcessState.RUNNING: "running",
    ProcessState.SLEEPING: "sleeping",
    ProcessState.STOPPED: "stopped",
    ProcessState.PAGING: "paging",
    ProcessState.DEAD: "dead",
    ProcessState.ZOMBIE: "zombie",
}


class SchedulingPolicy(IntEnum):
    """Values of the `policy` field in /proc/<pid>/stat (sched.h)."""

    OTHER = 0
    FIFO = 1
    RR = 2
    BATCH = 3
    IDLE = 5

    @classmethod
    def label_for(cls, value: int) -> str:
        try:
            return cls(value).name.lower()
        except ValueError:
            return f"unknown({value})"


@dataclass(frozen=True)
class StatInfo:
    """
    Parsed /proc/<pid>/stat.

    Attributes:
        pid: Process ID (field 1).
        comm: Executable name without the surrounding parentheses (field 2).
        state: Process state code.
        ppid: Parent process ID.
        pgrp: Process group ID.
        session: Session ID.
        utime: Time scheduled in user mode, in clock ticks.
        stime: Time scheduled in kernel mode, in clock ticks.
        cutime: Waited-for children's user time, in clock ticks.
        cstime: Waited-for children's kernel time, in clock ticks.
        priority: Kernel priority value.
        nice: Niceness, -20 (high) to 19 (low).
        num_threads: Number of threads in the process.
        start_time: Time the process started after boot, in clock ticks.
        vsize: Virtual memory size in bytes.
        rss_pages: Resident set size in pages.
        rt_priority: Real-time priority, 0 for normal processes.
        policy: Scheduling policy, see SchedulingPolicy.
        fields: Every raw field after the name boundary, starting with state.
    """

    pid: int
    comm: str
    state: ProcessState
    ppid: int
    pgrp: int
    session: int
    utime: int
    stime: int
    cutime: int
    cstime: int
    priority: int
    nice: int
    num_threads: int
    start_time: int
    vsize: int
    rss_pages: int
    rt_priority: int
    policy: int
    fields: Tuple[str, ...] = field(repr=False)

    @property
    def cpu_time_ticks(self) -> int:
        return self.utime + self.stime

    @property
    def user_mode_percent(self) -> Optional[int]:
        """Share of CPU time spent in user mode, or None if never scheduled."""
        total = self.cpu_time_ticks
        if total <= 0:
            return None
        return (self.utime * 100) // total

    @property
    def kernel_mode_percent(self) -> Optional[int]:
        total = self.cpu_time_ticks
        if total <= 0:
            return None
        return (self.stime * 100) // total

    @property
    def is_real_time(self) -> bool:
        return 1 <= self.rt_priority <= 99

    @property
    def policy_label(self) -> str:
        return SchedulingPolicy.label_for(self.policy)

    @property
    def state_label(self) -> str:
        return self.state.label


@dataclass(frozen=True)
class StatmInfo:
    """
    Parsed /proc/<pid>/statm. All counts are in pages; use the properties for bytes.
    """

    size_pages: int
    resident_pages: int
    shared_pages: int
    text_pages: int
    lib_pages: int
    data_pages: int
    dirty_pages: int
    page_size: int

    @property
    def size(self) -> int:
        """Total program size in bytes."""
        return self.size_pages * self.page_size

    @property
    def resident_set_size(self) -> int:
        """Resident set size in bytes."""
        return self.resident_pages * self.page_size

    @property
    def shared(self) -> int:
        """Resident shared (file-backed) memory in bytes."""
        return self.shared_pages * self.page_size


@dataclass(frozen=True)
class StatusInfo:
    """Parsed /proc/<pid>/status: the real uid/gid plus every raw label."""

    uid: int
    gid: int
    values: Dict[str, str] = field(default_factory=dict, repr=False)

    def get(self, label: str, default: Optional[str] = None) -> Optional[str]:
        """Return the raw value for a label such as 'VmRSS' or 'Threads'."""
        return self.values.get(label, default)


@dataclass(frozen=True)
class ControlGroup:
    """One line of /proc/<pid>/cgroup: `id:subsystems:group`."""

    id: int
    subsystems: Tuple[str, ...]
    group: str


@dataclass(frozen=True)
class CgroupInfo:
    """Parsed /proc/<pid>/cgroup."""

    groups: Tuple[ControlGroup, ...]

    def get_group(self, subsystem: str) -> Optional[ControlGroup]:
        """Return the group a subsystem (e.g. 'cpu', 'cpuacct') is mounted under."""
        for group in self.groups:
            if subsystem in group.subsystems:
                return group
        return None
