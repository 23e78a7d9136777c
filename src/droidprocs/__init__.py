"""
droidprocs: process information for Android devices from procfs and ps.

Two independent paths are provided:

- an unprivileged procfs scan (`ProcessQuery`, `scan_processes`) that
  reads /proc/<pid> records and classifies app processes,
- a root-only path (`collect_ps`) that parses `toolbox ps` output run in a
  privileged shell.
"""

from .aggregation import (
    ProcessQuery,
    compare_by_name,
    compare_by_oom_score_adj,
    list_app_processes,
    list_foreground_app_processes,
    list_processes,
    sort_processes,
)
from .classification import (
    CgroupForegroundProbe,
    ForegroundProbe,
    SchedPolicyForegroundProbe,
    classify,
)
from .config import clear_config_cache, get_config, set_config, set_config_path
from .models import (
    ProcessState,
    ProcessStatusInfo,
    ProcsConfig,
    PsResult,
    RunningAppProcessInfo,
    StatInfo,
    StatmInfo,
    StatusInfo,
)
from .procfs import (
    AppProcessRecord,
    ProcessRecord,
    is_process_info_hidden,
    list_pids,
    scan_processes,
)
from .ps import collect_ps, is_root_available, parse_ps_line, run_ps
from .system import CommandResult, CommandRunner, PackageService, StaticPackageService, uid_for_name
from .validation import (
    LineParseError,
    NotAppProcessError,
    ProcFileError,
    ProcFileMalformedError,
    ProcFileUnreadableError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "AppProcessRecord",
    "CgroupForegroundProbe",
    "CommandResult",
    "CommandRunner",
    "ForegroundProbe",
    "LineParseError",
    "NotAppProcessError",
    "PackageService",
    "ProcFileError",
    "ProcFileMalformedError",
    "ProcFileUnreadableError",
    "ProcessQuery",
    "ProcessRecord",
    "ProcessState",
    "ProcessStatusInfo",
    "ProcsConfig",
    "PsResult",
    "RunningAppProcessInfo",
    "SchedPolicyForegroundProbe",
    "StatInfo",
    "StatmInfo",
    "StaticPackageService",
    "StatusInfo",
    "ValidationError",
    "classify",
    "clear_config_cache",
    "collect_ps",
    "compare_by_name",
    "compare_by_oom_score_adj",
    "get_config",
    "is_process_info_hidden",
    "is_root_available",
    "list_app_processes",
    "list_foreground_app_processes",
    "list_pids",
    "list_processes",
    "parse_ps_line",
    "run_ps",
    "scan_processes",
    "set_config",
    "set_config_path",
    "sort_processes",
    "uid_for_name",
]
