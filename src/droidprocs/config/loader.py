"""
Reading of config.toml.

Every key of the configuration is optional, and so is the file itself: on a
device the library usually runs without one.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path) -> Dict[str, Any]:
    """
    Parse a TOML file into a dictionary.

    Raises:
        OSError: If the file cannot be opened.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {file_path}",
            severity=ErrorSeverity.CRITICAL,
            logger=logger,
        )
        raise


def load_main_config(config_path: Path) -> Optional[Dict[str, Any]]:
    """
    Read the main configuration file.

    Returns:
        The raw sections, or None when there is no file at `config_path`.
    """
    if not config_path.is_file():
        logger.debug(f"No configuration file at {config_path}")
        return None
    logger.info(f"Loading configuration from: {config_path}")
    return load_toml_file(config_path)
