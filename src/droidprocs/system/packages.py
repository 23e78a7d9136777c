"""
Package metadata lookups.

Whether a package has a launchable entry point and what its display label is
are answered by the platform's package service, which lives outside this
library. Callers pass an object satisfying PackageService.
"""

import logging
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class PackageService(Protocol):
    """The subset of the platform package manager the library consumes."""

    def get_launch_intent(self, package_name: str) -> Optional[str]:
        """Return the launch intent (or activity) for a package, None if not launchable."""
        ...

    def get_label(self, package_name: str) -> Optional[str]:
        """Return the user-visible application label, None if unknown."""
        ...


class StaticPackageService:
    """
    A PackageService backed by fixed tables.

    Useful when package metadata has been exported from the device
    ahead of time (for example `pm dump` output), and in tests.
    """

    def __init__(
        self,
        launch_intents: Optional[Dict[str, str]] = None,
        labels: Optional[Dict[str, str]] = None,
    ):
        self.launch_intents = dict(launch_intents or {})
        self.labels = dict(labels or {})

    def get_launch_intent(self, package_name: str) -> Optional[str]:
        return self.launch_intents.get(package_name)

    def get_label(self, package_name: str) -> Optional[str]:
        return self.labels.get(package_name)
