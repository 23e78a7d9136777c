"""
Detection of a restricted procfs mount.

Android 7.0+ mounts procfs with `hidepid=2`, hiding the /proc/<pid>
directories of other users. Unprivileged scans then only see the caller's
own processes.
"""

import logging
from typing import Callable, Optional

import psutil

from ..system.identity import AID_READPROC, uid_for_name

logger = logging.getLogger(__name__)

# hidepid values that hide other users' or unptraceable processes (named forms since Linux 5.8).
RESTRICTIVE_HIDEPID = frozenset({"1", "2", "4", "noaccess", "invisible", "ptraceable"})


def hidepid_value(mount_options: str) -> Optional[str]:
    """Return the hidepid option value from a comma separated option string."""
    for option in mount_options.split(","):
        key, sep, value = option.strip().partition("=")
        if sep and key == "hidepid":
            return value
    return None


def is_process_info_hidden(
    proc_root: str = "/proc",
    resolve_uid: Callable[[str], int] = uid_for_name,
) -> bool:
    """
    Check whether procfs hides other users' processes.

    The mount table is looked up through psutil. When it cannot be read,
    the presence of the `readproc` group (AID 3009, added alongside hidepid)
    is used as the signal instead.

    Returns:
        True if unprivileged enumeration will be incomplete.
    """
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, psutil.Error) as e:
        logger.debug(f"Error reading the mount table, checking for 'readproc': {e}")
        partitions = None

    if partitions is not None:
        for partition in partitions:
            if partition.mountpoint == proc_root:
                value = hidepid_value(partition.opts)
                hidden = value in RESTRICTIVE_HIDEPID
                logger.debug(f"{proc_root} mounted with options '{partition.opts}', hidden={hidden}")
                return hidden

    return resolve_uid("readproc") == AID_READPROC
