"""
Process records produced by parsing privileged `ps` output.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# u{user_id}_a{app_id} is used on API 17+ for multi-user support.
MULTI_USER_APP_ID = re.compile(r"^u\d+_a\d+$")
# app_{app_id} is used below API 17.
LEGACY_APP_ID = re.compile(r"^app_\d+$")

MULTI_USER_MIN_SDK = 17


@dataclass(frozen=True)
class ProcessStatusInfo:
    """
    One process as reported by `toolbox ps -p -P -x -c`.

    vsize and rss are in bytes even though ps reports kilobytes.
    """

    user: str
    uid: int
    pid: int
    ppid: int
    vsize: int
    rss: int
    cpu: int
    priority: int
    niceness: int
    real_time_priority: int
    scheduling_policy: int
    policy: str
    wchan: str
    pc: str
    state: str
    name: str
    user_time_ms: int
    system_time_ms: int

    def is_app(self, sdk_version: Optional[int] = None) -> bool:
        """
        Check whether the owning user name follows the app-id convention.

        Args:
            sdk_version: Platform API level. Defaults to the configured one.
        """
        if sdk_version is None:
            # Deferred: the config package imports models at load time.
            from ..config import get_config
            sdk_version = get_config().platform.sdk_version
        if sdk_version >= MULTI_USER_MIN_SDK:
            return MULTI_USER_APP_ID.match(self.user) is not None
        return LEGACY_APP_ID.match(self.user) is not None

    def display_fields(self) -> List[Tuple[str, object]]:
        """Ordered (label, value) pairs for showing this record."""
        return [
            ("USER", self.user),
            ("UID", self.uid),
            ("PID", self.pid),
            ("PPID", self.ppid),
            ("VSIZE", self.vsize),
            ("RSS", self.rss),
            ("CPU", self.cpu),
            ("PRIORITY", self.priority),
            ("NICE", self.niceness),
            ("RT PRIORITY", self.real_time_priority),
            ("SCHED POLICY", self.scheduling_policy),
            ("POLICY", self.policy),
            ("WCHAN", self.wchan),
            ("PC", self.pc),
            ("STATE", self.state),
            ("NAME", self.name),
            ("USER TIME (ms)", self.user_time_ms),
            ("SYSTEM TIME (ms)", self.system_time_ms),
        ]


@dataclass
class PsResult:
    """
    Outcome of one privileged ps run.

    Attributes:
        root_granted: False when the privileged command could not run at all.
        processes: Parsed records, empty when root was denied.
        skipped_lines: Count of lines that did not parse (header included).
    """

    root_granted: bool
    processes: List[ProcessStatusInfo]
    skipped_lines: int = 0
