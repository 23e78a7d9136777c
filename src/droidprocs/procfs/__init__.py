"""
Access to the process pseudo-filesystem: readers, parsers, records and scans.
"""

from .mounts import hidepid_value, is_process_info_hidden
from .parsers import (
    STAT_MIN_FIELDS,
    extract_comm,
    parse_cgroup,
    parse_cmdline,
    parse_scalar,
    parse_stat,
    parse_statm,
    parse_status,
)
from .process import AppProcessRecord, ProcessRecord, read_process_name
from .reader import proc_path, read_proc_file, resolve_page_size
from .scanner import list_pids, scan_pids, scan_processes

__all__ = [
    "AppProcessRecord",
    "ProcessRecord",
    "STAT_MIN_FIELDS",
    "extract_comm",
    "hidepid_value",
    "is_process_info_hidden",
    "list_pids",
    "parse_cgroup",
    "parse_cmdline",
    "parse_scalar",
    "parse_stat",
    "parse_statm",
    "parse_status",
    "proc_path",
    "read_proc_file",
    "read_process_name",
    "resolve_page_size",
    "scan_pids",
    "scan_processes",
]
