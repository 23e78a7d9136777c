"""
Query layer: process listings, foreground filtering and orderings.
"""

from .comparators import (
    SORT_KEYS,
    compare_by_name,
    compare_by_oom_score_adj,
    sort_processes,
)
from .query import (
    ProcessQuery,
    is_system_uid,
    list_app_processes,
    list_foreground_app_processes,
    list_processes,
)

__all__ = [
    "ProcessQuery",
    "SORT_KEYS",
    "compare_by_name",
    "compare_by_oom_score_adj",
    "is_system_uid",
    "list_app_processes",
    "list_foreground_app_processes",
    "list_processes",
    "sort_processes",
]
