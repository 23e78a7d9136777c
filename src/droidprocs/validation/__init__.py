"""
Error types and input validation for the droidprocs package.
"""

from .exceptions import (
    ErrorSeverity,
    LineParseError,
    NotAppProcessError,
    ProcFileError,
    ProcFileMalformedError,
    ProcFileUnreadableError,
    ValidationError,
    handle_config_error,
    handle_error,
)
from .validators import (
    validate_absolute_path,
    validate_binary_name,
    validate_boolean,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
)

__all__ = [
    "ErrorSeverity",
    "LineParseError",
    "NotAppProcessError",
    "ProcFileError",
    "ProcFileMalformedError",
    "ProcFileUnreadableError",
    "ValidationError",
    "handle_config_error",
    "handle_error",
    "validate_absolute_path",
    "validate_binary_name",
    "validate_boolean",
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_positive_integer",
]
