"""
Raw access to files under the process pseudo-filesystem.
"""

import logging
import os
from pathlib import Path
from typing import Union

from ..validation import ProcFileUnreadableError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 4096


def proc_path(proc_root: Union[str, Path], pid: int, filename: str) -> Path:
    """Build `<proc_root>/<pid>/<filename>`."""
    return Path(proc_root) / str(pid) / filename


def read_proc_file(path: Union[str, Path]) -> bytes:
    """
    Read a procfs file in one go.

    Args:
        path: Absolute path of the file.

    Returns:
        The raw file content.

    Raises:
        ProcFileUnreadableError: If the file is missing, access is denied or the
            process exited while it was being read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ProcFileUnreadableError(
            f"Cannot read {path}: {type(e).__name__}: {e}", path=str(path)
        ) from e


def resolve_page_size(configured: int = 0) -> int:
    """
    Return the page size in bytes used to scale statm values.

    Args:
        configured: Explicit page size; 0 asks the running kernel.
    """
    if configured > 0:
        return configured
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
    except (ValueError, OSError, AttributeError) as e:
        logger.debug(f"Page size not available from sysconf: {e}")
        return DEFAULT_PAGE_SIZE
    return page_size if page_size > 0 else DEFAULT_PAGE_SIZE
