"""
Lightweight per-app process summaries.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class RunningAppProcessInfo:
    """
    Name, pid and uid of a running app process.

    Mirrors the summary the platform's activity service returns for its own
    running processes, built here from a procfs scan instead.
    """

    name: str
    pid: int
    uid: int

    def display_fields(self) -> List[Tuple[str, object]]:
        return [("NAME", self.name), ("PID", self.pid), ("UID", self.uid)]
