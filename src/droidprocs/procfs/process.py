"""
Process records backed by /proc/<pid>.

A ProcessRecord is a snapshot taken by one scan. Its sub-structures (stat,
statm, status, ...) are read on first access and kept for the lifetime of
the record; a new scan builds new records. Pids are reused by the kernel, so
a record must never be kept around as a handle to "the same" process.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, TypeVar

from ..models.procfs import CgroupInfo, StatInfo, StatmInfo, StatusInfo
from ..validation import ProcFileError, ProcFileUnreadableError
from .parsers import (
    extract_comm,
    parse_cgroup,
    parse_cmdline,
    parse_scalar,
    parse_stat,
    parse_statm,
    parse_status,
)
from .reader import DEFAULT_PAGE_SIZE, proc_path, read_proc_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_cmdline(proc_root: str, pid: int) -> Tuple[str, ...]:
    """Read and split /proc/<pid>/cmdline."""
    return parse_cmdline(read_proc_file(proc_path(proc_root, pid, "cmdline")))


def read_process_name(proc_root: str, pid: int) -> Tuple[str, Tuple[str, ...]]:
    """
    Determine the name of a process.

    The name is the first cmdline argument. Kernel threads have an empty
    cmdline, for them the executable name from stat is used instead.

    Returns:
        Tuple of (name, cmdline tokens).

    Raises:
        ProcFileError: If neither cmdline nor stat yields a name.
    """
    try:
        tokens = read_cmdline(proc_root, pid)
    except ProcFileUnreadableError as e:
        logger.debug(f"cmdline of pid {pid} unreadable, falling back to stat: {e}")
        tokens = ()
    if tokens:
        return tokens[0], tokens
    stat_path = proc_path(proc_root, pid, "stat")
    return extract_comm(read_proc_file(stat_path), path=str(stat_path)), tokens


@dataclass
class ProcessRecord:
    """
    A process found under the proc root.

    Attributes:
        pid: Process ID.
        name: First cmdline argument, or the stat name for kernel threads.
        proc_root: Mount point of procfs the record was read from.
        page_size: Bytes per memory page, used to convert statm to bytes.
    """

    pid: int
    name: str
    proc_root: str = "/proc"
    page_size: int = DEFAULT_PAGE_SIZE
    _cache: Dict[str, Any] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.pid, bool) or not isinstance(self.pid, int) or self.pid < 1:
            raise ValueError(f"pid must be a positive integer, got {self.pid!r}")

    @classmethod
    def from_pid(
        cls, pid: int, proc_root: str = "/proc", page_size: int = DEFAULT_PAGE_SIZE
    ) -> "ProcessRecord":
        """
        Build a record by reading the process name from procfs.

        Raises:
            ProcFileError: If the process cannot be read (for example it exited).
        """
        name, tokens = read_process_name(proc_root, pid)
        record = cls(pid=pid, name=name, proc_root=proc_root, page_size=page_size)
        record._cache["cmdline"] = tokens
        return record

    def path(self, filename: str) -> Path:
        return proc_path(self.proc_root, self.pid, filename)

    def read(self, filename: str) -> bytes:
        """Read a raw file from this process's directory."""
        return read_proc_file(self.path(filename))

    def _parsed(self, key: str, parse: Callable[[bytes, str], T], filename: str) -> T:
        if key not in self._cache:
            self._cache[key] = parse(self.read(filename), str(self.path(filename)))
        return self._cache[key]

    def stat(self) -> StatInfo:
        """Parsed /proc/<pid>/stat."""
        return self._parsed("stat", parse_stat, "stat")

    def statm(self) -> StatmInfo:
        """Parsed /proc/<pid>/statm, with sizes convertible to bytes."""
        return self._parsed(
            "statm",
            lambda raw, path: parse_statm(raw, self.page_size, path),
            "statm",
        )

    def status(self) -> StatusInfo:
        """Parsed /proc/<pid>/status."""
        return self._parsed("status", parse_status, "status")

    def cgroup(self) -> CgroupInfo:
        """Parsed /proc/<pid>/cgroup."""
        return self._parsed("cgroup", parse_cgroup, "cgroup")

    def cmdline(self) -> Tuple[str, ...]:
        """Command line arguments of the process."""
        return self._parsed("cmdline", lambda raw, path: parse_cmdline(raw), "cmdline")

    def oom_score(self) -> int:
        """The kernel's current OOM-killer badness score."""
        return self._parsed("oom_score", parse_scalar, "oom_score")

    def oom_adj(self) -> int:
        """Legacy OOM adjustment (-17 to 15)."""
        return self._parsed("oom_adj", parse_scalar, "oom_adj")

    def oom_score_adj(self) -> int:
        """OOM score adjustment (-1000 to 1000); lower survives longer."""
        return self._parsed("oom_score_adj", parse_scalar, "oom_score_adj")

    def display_fields(self) -> List[Tuple[str, object]]:
        """
        Ordered (label, value) pairs describing the process.

        Files that cannot be read are left out rather than failing the whole
        description.
        """
        rows: List[Tuple[str, object]] = [("NAME", self.name), ("PID", self.pid)]
        rows.extend(self._optional_rows("status", self._status_rows))
        rows.extend(self._optional_rows("stat", self._stat_rows))
        rows.extend(self._optional_rows("statm", self._statm_rows))
        for label, reader in (
            ("OOM SCORE", self.oom_score),
            ("OOM ADJ", self.oom_adj),
            ("OOM SCORE ADJ", self.oom_score_adj),
        ):
            rows.extend(self._optional_rows(label, lambda: [(label, reader())]))
        return rows

    def _optional_rows(
        self, what: str, build: Callable[[], List[Tuple[str, object]]]
    ) -> List[Tuple[str, object]]:
        try:
            return build()
        except ProcFileError as e:
            logger.debug(f"Skipping {what} of pid {self.pid}: {e}")
            return []

    def _status_rows(self) -> List[Tuple[str, object]]:
        status = self.status()
        return [("UID/GID", f"{status.uid}/{status.gid}")]

    def _stat_rows(self) -> List[Tuple[str, object]]:
        stat = self.stat()
        rows: List[Tuple[str, object]] = [
            ("PPID", stat.ppid),
            ("STATE", stat.state_label),
            ("START TIME (ticks)", stat.start_time),
            ("CPU TIME (ticks)", stat.cpu_time_ticks),
            ("NICE", stat.nice),
            ("SCHEDULING POLICY", stat.policy_label),
            ("SCHEDULING PRIORITY", "real-time" if stat.is_real_time else "non-real-time"),
        ]
        if stat.user_mode_percent is not None:
            rows.append(("TIME EXECUTED IN USER MODE", f"{stat.user_mode_percent}%"))
            rows.append(("TIME EXECUTED IN KERNEL MODE", f"{stat.kernel_mode_percent}%"))
        return rows

    def _statm_rows(self) -> List[Tuple[str, object]]:
        statm = self.statm()
        return [("SIZE", statm.size), ("RSS", statm.resident_set_size)]


@dataclass
class AppProcessRecord(ProcessRecord):
    """
    A process hosting an installed application.

    Only the classifier builds these. `name` is the process name the app
    runtime set, e.g. `com.example.app` or `com.example.app:remote`.

    Attributes:
        uid: Linux uid the app runs as.
        foreground: Whether the process was hosting visible UI when classified.
    """

    uid: int = -1
    foreground: bool = False

    @property
    def package_name(self) -> str:
        """The package name, i.e. the process name without any `:suffix`."""
        return self.name.split(":", 1)[0]

    @property
    def is_secondary_process(self) -> bool:
        return ":" in self.name

    def display_fields(self) -> List[Tuple[str, object]]:
        rows = super().display_fields()
        rows[2:2] = [
            ("PACKAGE", self.package_name),
            ("POLICY", "fg" if self.foreground else "bg"),
            ("UID", self.uid),
        ]
        return rows
