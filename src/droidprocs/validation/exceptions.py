"""
Exception types and error handling helpers.

This module defines the failure classes shared by the procfs readers, the
ps-output parser and the classifier, plus the configuration error machinery
used by the config layer.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when configuration validation fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ProcFileError(Exception):
    """
    Base class for failures reading or parsing a file under /proc/<pid>.

    Attributes:
        path: The file that failed, when known.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ProcFileUnreadableError(ProcFileError):
    """The file is missing, not permitted, or the process exited mid-read."""


class ProcFileMalformedError(ProcFileError):
    """The file was read but its text does not have the expected layout."""


class NotAppProcessError(Exception):
    """
    Raised by the classifier when a process does not host application code.

    This is a routing signal, not a failure: the process is still a valid
    ProcessRecord, it just does not belong in app listings.
    """

    def __init__(self, pid: int, reason: str = ""):
        message = f"Process {pid} is not an app process"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.pid = pid
        self.reason = reason


class LineParseError(Exception):
    """A line of ps output does not match the expected column layout."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)
