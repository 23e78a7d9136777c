"""
Enumeration of the process pseudo-filesystem.

Each scan is a synchronous snapshot: the directory is listed once, then every
pid is read in turn. A process may exit between the listing and the read;
that pid is simply absent from the result.
"""

import logging
import os
from typing import Callable, List, Optional, TypeVar

from ..validation import ProcFileError
from .process import ProcessRecord
from .reader import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


def list_pids(proc_root: str = "/proc", log: Optional[logging.Logger] = None) -> List[int]:
    """
    List the pids under the proc root.

    Entries whose name is not a plain decimal number (`self`, `thread-self`,
    `meminfo`, ...) are skipped without error.

    Returns:
        Pids in directory order, which carries no meaning. Empty if the proc
        root itself cannot be listed.
    """
    log = log or logger
    try:
        entries = os.listdir(proc_root)
    except OSError as e:
        log.warning(f"Cannot list {proc_root}: {type(e).__name__}: {e}")
        return []
    return [int(entry) for entry in entries if entry.isascii() and entry.isdigit()]


def scan_pids(
    build: Callable[[int], Optional[T]],
    proc_root: str = "/proc",
    log: Optional[logging.Logger] = None,
) -> List[T]:
    """
    Apply `build` to every pid under the proc root and collect the results.

    Args:
        build: Turns a pid into a result. Returning None excludes the pid;
            raising ProcFileError drops it as unreadable or malformed.
        proc_root: Mount point of procfs.
        log: Logger for per-pid failures, defaults to this module's logger.

    Returns:
        A fully materialised list. One failing pid never aborts the scan.
    """
    log = log or logger
    results: List[T] = []
    for pid in list_pids(proc_root, log):
        try:
            item = build(pid)
        except ProcFileError as e:
            # System processes are not readable by apps when SELinux is enforcing.
            log.debug(f"Error reading from {proc_root}/{pid}: {e}")
            continue
        if item is not None:
            results.append(item)
    return results


def scan_processes(
    proc_root: str = "/proc",
    page_size: int = DEFAULT_PAGE_SIZE,
    log: Optional[logging.Logger] = None,
) -> List[ProcessRecord]:
    """Build a ProcessRecord for every readable process."""
    return scan_pids(
        lambda pid: ProcessRecord.from_pid(pid, proc_root=proc_root, page_size=page_size),
        proc_root=proc_root,
        log=log,
    )
