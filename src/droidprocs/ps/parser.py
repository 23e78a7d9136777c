"""
Parser for the output of `toolbox ps -p -P -x -c`.

With those flags every process line has the columns

    USER PID PPID VSIZE RSS CPU PRIO NICE RTPRI SCHED [PCY] WCHAN PC S NAME (u:N, s:N)

VSIZE and RSS are in kilobytes, PCY (bg/fg/un/er) is missing on kernels
without scheduler cgroups. The `(u:.., s:..)` suffix added by -x carries the
user and system CPU time. Some builds also print the two times as bare
columns after NAME; when they do, those columns are used.
"""

import logging
import re
from typing import Callable

from ..models.ps import ProcessStatusInfo
from ..system.identity import uid_for_name
from ..validation import LineParseError

logger = logging.getLogger(__name__)

PS_LINE_PATTERN = re.compile(
    r"^(?P<user>\S+)\s+(?P<pid>\d+)\s+(?P<ppid>\d+)\s+(?P<vsize>\d+)\s+(?P<rss>\d+)\s+"
    r"(?P<cpu>\d+)\s+(?P<priority>-?\d+)\s+(?P<niceness>-?\d+)\s+(?P<rt_priority>\d+)\s+"
    r"(?P<sched>\d+)\s+(?:(?P<policy>bg|fg|un|er)\s+)?(?P<wchan>\S+)\s+(?P<pc>\S+)\s+"
    r"(?P<state>[DRSTWXZ])\s+(?P<name>\S+)"
    r"(?:\s+(?P<utime>\d+)\s+(?P<stime>\d+))?"
    r"\s+\(u:(?P<suffix_u>\d+),\s*s:(?P<suffix_s>\d+)\)$"
)

KILOBYTE = 1024


def parse_ps_line(line: str, resolve_uid: Callable[[str], int] = uid_for_name) -> ProcessStatusInfo:
    """
    Parse one line of ps output.

    The uid is resolved from the USER column with the same name lookup used
    everywhere else, so it agrees with /proc/<pid>/status for the same
    process.

    Args:
        line: A single output line, trailing newline allowed.
        resolve_uid: User name to uid lookup.

    Returns:
        The parsed record with vsize and rss converted to bytes.

    Raises:
        LineParseError: If the line is a header, truncated, or otherwise does
            not have the expected columns.
    """
    text = line.strip()
    match = PS_LINE_PATTERN.match(text)
    if match is None:
        raise LineParseError("The line does not match the expected output", line=line)

    groups = match.groupdict()
    if groups["utime"] is not None:
        user_time, system_time = groups["utime"], groups["stime"]
    else:
        user_time, system_time = groups["suffix_u"], groups["suffix_s"]

    try:
        return ProcessStatusInfo(
            user=groups["user"],
            uid=resolve_uid(groups["user"]),
            pid=int(groups["pid"]),
            ppid=int(groups["ppid"]),
            vsize=int(groups["vsize"]) * KILOBYTE,
            rss=int(groups["rss"]) * KILOBYTE,
            cpu=int(groups["cpu"]),
            priority=int(groups["priority"]),
            niceness=int(groups["niceness"]),
            real_time_priority=int(groups["rt_priority"]),
            scheduling_policy=int(groups["sched"]),
            policy=groups["policy"] or "",
            wchan=groups["wchan"],
            pc=groups["pc"],
            state=groups["state"],
            name=groups["name"],
            user_time_ms=int(user_time),
            system_time_ms=int(system_time),
        )
    except (ValueError, KeyError) as e:
        raise LineParseError(f"Error parsing line '{text}'", line=line) from e
