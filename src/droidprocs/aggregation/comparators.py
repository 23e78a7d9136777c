"""
Orderings for process listings.

Both comparators are total: they always return -1, 0 or 1 and never raise
for unreadable procfs data.
"""

import logging
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, TypeVar

from ..procfs.process import ProcessRecord
from ..validation import ProcFileError, handle_error

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=ProcessRecord)


def compare_by_name(first: ProcessRecord, second: ProcessRecord) -> int:
    """Case-insensitive comparison of process names."""
    a, b = first.name.casefold(), second.name.casefold()
    return (a > b) - (a < b)


def compare_by_oom_score_adj(first: ProcessRecord, second: ProcessRecord) -> int:
    """
    Order by oom_score_adj ascending, i.e. the processes the OOM killer spares
    longest come first.

    Equal scores are ordered by name. If the score of either process cannot
    be read (it exited, or access is denied) the two are ordered by name
    alone, so a listing sorted with this comparator is only partially ordered
    by score when some scores were unreadable.
    """
    try:
        a, b = first.oom_score_adj(), second.oom_score_adj()
    except ProcFileError as e:
        logger.debug(f"oom_score_adj unavailable for pid {first.pid} or {second.pid}, ordering by name: {e}")
        return compare_by_name(first, second)
    if a != b:
        return -1 if a < b else 1
    return compare_by_name(first, second)


SORT_KEYS: Dict[str, Callable[[ProcessRecord, ProcessRecord], int]] = {
    "name": compare_by_name,
    "oom_score_adj": compare_by_oom_score_adj,
}


def sort_processes(processes: Iterable[P], by: str = "name", reverse: bool = False) -> List[P]:
    """
    Return the processes sorted by one of the known orderings.

    Args:
        processes: Records from one scan.
        by: 'name' or 'oom_score_adj'.
        reverse: Sort descending.

    Raises:
        ValueError: If `by` is not a known ordering.
    """
    comparator = SORT_KEYS.get(by)
    if comparator is None:
        error = ValueError(f"Unknown sort order '{by}', expected one of {sorted(SORT_KEYS)}")
        handle_error(error, context="sorting processes", reraise=True, logger=logger)
    return sorted(processes, key=cmp_to_key(comparator), reverse=reverse)
