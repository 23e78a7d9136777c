"""
Batch collection of process info through a privileged ps.

Root is optional on a device. A denied or failing privileged command is an
expected condition: it yields an empty result flagged `root_granted=False`,
never an exception.
"""

import logging
from typing import Callable, Iterable, List, Optional

from ..config import get_config
from ..models.config import ProcsConfig
from ..models.ps import ProcessStatusInfo, PsResult
from ..system.commands import CommandRunner, SuCommandRunner
from ..system.identity import current_uid, uid_for_name
from ..validation import LineParseError
from .parser import parse_ps_line

logger = logging.getLogger(__name__)


def parse_ps_output(
    lines: Iterable[str],
    su_binary: str = "su",
    own_uid: Optional[int] = None,
    resolve_uid: Callable[[str], int] = uid_for_name,
) -> PsResult:
    """
    Parse every line of ps output independently.

    Unparsable lines (the header, truncated rows) are counted and skipped.
    The elevation helper itself shows up in the listing while it runs ps; it
    is dropped when it runs as the caller's own uid.

    Returns:
        A PsResult with root_granted=True.
    """
    own_uid = current_uid() if own_uid is None else own_uid
    processes: List[ProcessStatusInfo] = []
    skipped = 0
    for line in lines:
        try:
            info = parse_ps_line(line, resolve_uid=resolve_uid)
        except LineParseError as e:
            skipped += 1
            logger.debug(f"Skipping ps line {line!r}: {e}")
            continue
        if info.name == su_binary and info.uid == own_uid:
            continue
        processes.append(info)
    return PsResult(root_granted=True, processes=processes, skipped_lines=skipped)


def collect_ps(
    runner: Optional[CommandRunner] = None,
    config: Optional[ProcsConfig] = None,
    own_uid: Optional[int] = None,
    resolve_uid: Callable[[str], int] = uid_for_name,
) -> PsResult:
    """
    Run ps in a privileged shell once and parse its output.

    Args:
        runner: Privileged command runner. Defaults to `su -c`.
        config: Configuration; the global one when None.
        own_uid: Uid of the caller, for hiding the elevation helper.
        resolve_uid: User name to uid lookup.

    Returns:
        PsResult. `root_granted` is False (and `processes` empty) when the
        command did not succeed, which lets callers tell "no root" apart from
        "root but zero processes".
    """
    config = config or get_config()
    runner = runner or SuCommandRunner(config.ps.su_binary)

    result = runner.run(config.ps.command)
    if not result.is_successful:
        logger.info(f"Privileged ps unavailable (exit code {result.exit_code})")
        return PsResult(root_granted=False, processes=[])

    ps_result = parse_ps_output(
        result.stdout,
        su_binary=config.ps.su_binary,
        own_uid=own_uid,
        resolve_uid=resolve_uid,
    )
    logger.debug(
        f"Parsed {len(ps_result.processes)} processes from ps, skipped {ps_result.skipped_lines} lines"
    )
    return ps_result


def run_ps(
    runner: Optional[CommandRunner] = None,
    config: Optional[ProcsConfig] = None,
) -> List[ProcessStatusInfo]:
    """Run ps as root and return only the parsed processes (empty without root)."""
    return collect_ps(runner=runner, config=config).processes


def select_apps(
    processes: Iterable[ProcessStatusInfo], sdk_version: Optional[int] = None
) -> List[ProcessStatusInfo]:
    """Keep the ps records owned by an app user id."""
    if sdk_version is None:
        sdk_version = get_config().platform.sdk_version
    return [info for info in processes if info.is_app(sdk_version)]


def is_root_available(runner: Optional[CommandRunner] = None) -> bool:
    """Check whether the privileged shell accepts commands."""
    runner = runner or SuCommandRunner(get_config().ps.su_binary)
    return runner.run("id").is_successful
