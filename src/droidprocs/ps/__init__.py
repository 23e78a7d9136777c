"""
The root-only path: parsing privileged `ps` output.
"""

from .parser import PS_LINE_PATTERN, parse_ps_line
from .runner import (
    collect_ps,
    is_root_available,
    parse_ps_output,
    run_ps,
    select_apps,
)

__all__ = [
    "PS_LINE_PATTERN",
    "collect_ps",
    "is_root_available",
    "parse_ps_line",
    "parse_ps_output",
    "run_ps",
    "select_apps",
]
