"""
Parsers for the per-process files under /proc/<pid>.

Each parser is a pure function from the raw file content (bytes or str) to a
typed structure. Text that does not have the expected layout raises
ProcFileMalformedError; the optional `path` argument only enriches the error.

See proc(5) for the layouts.
"""

import logging
from typing import Optional, Tuple, Union

from ..models.procfs import (
    CgroupInfo,
    ControlGroup,
    ProcessState,
    StatInfo,
    StatmInfo,
    StatusInfo,
)
from ..validation import ProcFileMalformedError

logger = logging.getLogger(__name__)

RawContent = Union[bytes, str]

# Fields that must follow the ")" of /proc/<pid>/stat: state (3) up to policy (41).
STAT_MIN_FIELDS = 39

# Offsets into the fields after the ")" boundary (proc(5) number minus 3).
_STAT_STATE = 0
_STAT_PPID = 1
_STAT_PGRP = 2
_STAT_SESSION = 3
_STAT_UTIME = 11
_STAT_STIME = 12
_STAT_CUTIME = 13
_STAT_CSTIME = 14
_STAT_PRIORITY = 15
_STAT_NICE = 16
_STAT_NUM_THREADS = 17
_STAT_STARTTIME = 19
_STAT_VSIZE = 20
_STAT_RSS = 21
_STAT_RT_PRIORITY = 37
_STAT_POLICY = 38

# Newer kernels report tracing-stop and dead in lower case.
_STATE_ALIASES = {"t": "T", "x": "X"}


def _to_text(raw: RawContent) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def _to_int(value: str, field_name: str, path: Optional[str]) -> int:
    try:
        return int(value)
    except ValueError:
        raise ProcFileMalformedError(
            f"Field '{field_name}' is not an integer: {value!r}", path=path
        ) from None


def _parse_state(code: str, path: Optional[str]) -> ProcessState:
    code = _STATE_ALIASES.get(code, code)
    try:
        return ProcessState(code)
    except ValueError:
        raise ProcFileMalformedError(f"Unknown process state {code!r}", path=path) from None


def _name_bounds(text: str, path: Optional[str]) -> Tuple[int, int]:
    # The name may itself contain ')' so the boundary is the last one.
    open_idx = text.find("(")
    close_idx = text.rfind(")")
    if open_idx < 0 or close_idx < open_idx:
        raise ProcFileMalformedError(
            f"No parenthesised process name in stat: {text[:64]!r}", path=path
        )
    return open_idx, close_idx


def extract_comm(raw: RawContent, path: Optional[str] = None) -> str:
    """
    Return only the executable name (field 2) of a stat line.

    Used as the process name for kernel threads, whose cmdline is empty.
    """
    text = _to_text(raw).strip()
    open_idx, close_idx = _name_bounds(text, path)
    return text[open_idx + 1:close_idx]


def parse_stat(raw: RawContent, path: Optional[str] = None) -> StatInfo:
    """
    Parse /proc/<pid>/stat.

    The second field is the executable name in parentheses. It may contain
    spaces and parentheses, so the fields are split only after the last ')'.

    Raises:
        ProcFileMalformedError: If the name boundary is missing, too few fields
            follow it, or a numeric field does not parse.
    """
    text = _to_text(raw).strip()
    open_idx, close_idx = _name_bounds(text, path)

    pid = _to_int(text[:open_idx].strip(), "pid", path)
    comm = text[open_idx + 1:close_idx]
    fields = tuple(text[close_idx + 1:].split())
    if len(fields) < STAT_MIN_FIELDS:
        raise ProcFileMalformedError(
            f"Expected at least {STAT_MIN_FIELDS} fields after the name, got {len(fields)}",
            path=path,
        )

    def number(index: int, field_name: str) -> int:
        return _to_int(fields[index], field_name, path)

    return StatInfo(
        pid=pid,
        comm=comm,
        state=_parse_state(fields[_STAT_STATE], path),
        ppid=number(_STAT_PPID, "ppid"),
        pgrp=number(_STAT_PGRP, "pgrp"),
        session=number(_STAT_SESSION, "session"),
        utime=number(_STAT_UTIME, "utime"),
        stime=number(_STAT_STIME, "stime"),
        cutime=number(_STAT_CUTIME, "cutime"),
        cstime=number(_STAT_CSTIME, "cstime"),
        priority=number(_STAT_PRIORITY, "priority"),
        nice=number(_STAT_NICE, "nice"),
        num_threads=number(_STAT_NUM_THREADS, "num_threads"),
        start_time=number(_STAT_STARTTIME, "starttime"),
        vsize=number(_STAT_VSIZE, "vsize"),
        rss_pages=number(_STAT_RSS, "rss"),
        rt_priority=number(_STAT_RT_PRIORITY, "rt_priority"),
        policy=number(_STAT_POLICY, "policy"),
        fields=fields,
    )


def parse_statm(raw: RawContent, page_size: int, path: Optional[str] = None) -> StatmInfo:
    """
    Parse /proc/<pid>/statm.

    Only size and resident are required; the remaining columns default to 0
    when a kernel omits them.

    Args:
        raw: File content.
        page_size: Bytes per page, used by the byte-valued properties.
    """
    parts = _to_text(raw).split()
    if len(parts) < 2:
        raise ProcFileMalformedError(
            f"Expected at least 2 fields in statm, got {len(parts)}", path=path
        )
    names = ("size", "resident", "shared", "text", "lib", "data", "dirty")
    values = [_to_int(value, name, path) for name, value in zip(names, parts)]
    values.extend([0] * (len(names) - len(values)))
    return StatmInfo(
        size_pages=values[0],
        resident_pages=values[1],
        shared_pages=values[2],
        text_pages=values[3],
        lib_pages=values[4],
        data_pages=values[5],
        dirty_pages=values[6],
        page_size=page_size,
    )


def parse_status(raw: RawContent, path: Optional[str] = None) -> StatusInfo:
    """
    Parse /proc/<pid>/status.

    The real uid and gid are the first tokens after the `Uid:` and `Gid:`
    labels. Every other `Label: value` line is kept verbatim.
    """
    values = {}
    for line in _to_text(raw).splitlines():
        label, sep, value = line.partition(":")
        if not sep:
            continue
        values[label.strip()] = value.strip()

    def first_id(label: str) -> int:
        tokens = values.get(label, "").split()
        if not tokens:
            raise ProcFileMalformedError(f"No '{label}:' line in status", path=path)
        return _to_int(tokens[0], label, path)

    return StatusInfo(uid=first_id("Uid"), gid=first_id("Gid"), values=values)


def parse_scalar(raw: RawContent, path: Optional[str] = None) -> int:
    """Parse a file holding a single integer (oom_score, oom_adj, oom_score_adj)."""
    return _to_int(_to_text(raw).strip(), "value", path)


def parse_cmdline(raw: RawContent) -> Tuple[str, ...]:
    """
    Split /proc/<pid>/cmdline into its NUL-separated arguments.

    Empty tokens (trailing NULs, padding left by processes that rewrite
    their argv) are dropped. Kernel threads yield an empty tuple.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return tuple(
        token.decode("utf-8", errors="replace")
        for token in raw.split(b"\x00")
        if token
    )


def parse_cgroup(raw: RawContent, path: Optional[str] = None) -> CgroupInfo:
    """
    Parse /proc/<pid>/cgroup, one `hierarchy-id:subsystems:group` per line.
    """
    groups = []
    for line in _to_text(raw).splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split(":", 2)
        if len(parts) != 3:
            raise ProcFileMalformedError(f"Malformed cgroup line: {line!r}", path=path)
        hierarchy_id, subsystems, group = parts
        groups.append(
            ControlGroup(
                id=_to_int(hierarchy_id, "hierarchy-id", path),
                subsystems=tuple(s for s in subsystems.split(",") if s),
                group=group,
            )
        )
    return CgroupInfo(groups=tuple(groups))
