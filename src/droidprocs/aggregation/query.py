"""
Process listings over one procfs scan.

ProcessQuery ties the scanner, the file parsers and the classifier together.
Whether scheduler cgroups are used for uid and foreground attribution is a
single capability flag, resolved from configuration unless given explicitly.
"""

import logging
import os
from typing import Dict, List, Optional

from ..classification import (
    ForegroundProbe,
    classify,
    default_foreground_probe,
    resolve_enhanced_attribution,
)
from ..config import get_config
from ..models.apps import RunningAppProcessInfo
from ..models.config import ProcsConfig
from ..procfs import (
    AppProcessRecord,
    ProcessRecord,
    is_process_info_hidden,
    resolve_page_size,
    scan_pids,
    scan_processes,
)
from ..system.identity import AID_NOBODY, AID_SYSTEM
from ..system.packages import PackageService
from ..validation import NotAppProcessError, ProcFileError

logger = logging.getLogger(__name__)


def is_system_uid(uid: int) -> bool:
    """Fixed system ids occupy 1000-9999; apps start at 10000."""
    return AID_SYSTEM <= uid <= AID_NOBODY


class ProcessQuery:
    """
    Lists processes and app processes from the proc root.

    Every call performs a fresh, fully materialised scan; nothing is cached
    between calls apart from application labels.

    Args:
        config: Configuration; the global one when None.
        foreground_probe: Decides the foreground flag of app processes.
            Defaults to the probe matching the attribution mode.
        enhanced_attribution: Use scheduler cgroups for uid and foreground.
            Resolved from `procfs.enhanced_attribution` when None.
        logger: Receives per-pid diagnostics. Defaults to this module's logger.
    """

    def __init__(
        self,
        config: Optional[ProcsConfig] = None,
        foreground_probe: Optional[ForegroundProbe] = None,
        enhanced_attribution: Optional[bool] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or get_config()
        if enhanced_attribution is None:
            enhanced_attribution = resolve_enhanced_attribution(self.config.procfs)
        self.enhanced_attribution = enhanced_attribution
        self.foreground_probe = foreground_probe or default_foreground_probe(enhanced_attribution)
        self.logger = logger or globals()["logger"]
        self.proc_root = self.config.procfs.root
        self.page_size = resolve_page_size(self.config.procfs.page_size)
        self._labels: Dict[str, str] = {}

    def list_processes(self) -> List[ProcessRecord]:
        """All processes readable under the proc root."""
        return scan_processes(self.proc_root, self.page_size, self.logger)

    def list_app_processes(self) -> List[AppProcessRecord]:
        """All processes that host an installed application."""
        return scan_pids(self.app_process, self.proc_root, self.logger)

    def app_process(self, pid: int) -> Optional[AppProcessRecord]:
        """
        Read and classify a single pid.

        Returns:
            The app record, or None if the process is not an app process.

        Raises:
            ProcFileError: If the process cannot be read.
        """
        record = ProcessRecord.from_pid(pid, proc_root=self.proc_root, page_size=self.page_size)
        tokens = record.cmdline()
        try:
            return classify(
                record,
                tokens[0] if tokens else "",
                self.foreground_probe,
                enhanced_attribution=self.enhanced_attribution,
                settings=self.config.classification,
            )
        except NotAppProcessError as e:
            self.logger.debug(str(e))
            return None

    def is_foreground_app(self, process: AppProcessRecord, package_service: PackageService) -> bool:
        """
        Check whether an app process is a user app shown in the foreground.

        System uids, secondary processes (`package:suffix`) and packages
        without a launch intent are excluded even when in the foreground.
        """
        return (
            process.foreground
            and not is_system_uid(process.uid)
            and not process.is_secondary_process
            and package_service.get_launch_intent(process.package_name) is not None
        )

    def list_foreground_app_processes(self, package_service: PackageService) -> List[AppProcessRecord]:
        """User-launchable apps currently in the foreground."""
        return [
            process
            for process in self.list_app_processes()
            if self.is_foreground_app(process, package_service)
        ]

    def is_my_process_in_foreground(self, pid: Optional[int] = None) -> bool:
        """
        Check whether the calling process (or `pid`) is an app in the foreground.

        Any failure to read or classify the process answers False.
        """
        pid = os.getpid() if pid is None else pid
        try:
            process = self.app_process(pid)
        except ProcFileError as e:
            self.logger.debug(f"Error finding process {pid}: {type(e).__name__}: {e}")
            return False
        return process is not None and process.foreground

    def running_app_process_info(self) -> List[RunningAppProcessInfo]:
        """Name, pid and uid of every running app process."""
        return [
            RunningAppProcessInfo(name=process.name, pid=process.pid, uid=process.uid)
            for process in self.list_app_processes()
        ]

    def app_label(self, process: AppProcessRecord, package_service: PackageService) -> str:
        """
        The user-visible label of the process's package.

        Falls back to the package name when the service knows no label.
        Labels are remembered for the lifetime of the query.
        """
        package = process.package_name
        if package not in self._labels:
            self._labels[package] = package_service.get_label(package) or package
        return self._labels[package]

    def process_info_hidden(self) -> bool:
        """Whether procfs hides other users' processes from this scan."""
        return is_process_info_hidden(self.proc_root)


def list_processes(config: Optional[ProcsConfig] = None) -> List[ProcessRecord]:
    return ProcessQuery(config).list_processes()


def list_app_processes(config: Optional[ProcsConfig] = None) -> List[AppProcessRecord]:
    return ProcessQuery(config).list_app_processes()


def list_foreground_app_processes(
    package_service: PackageService, config: Optional[ProcsConfig] = None
) -> List[AppProcessRecord]:
    return ProcessQuery(config).list_foreground_app_processes(package_service)
