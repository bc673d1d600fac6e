"""Validation utilities for chestnav CLI arguments."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def validate_path(path: Path, must_exist: bool = True, must_be_dir: bool = True) -> bool:
    """Validate a file system path.

    Args:
        path: Path to validate
        must_exist: Whether the path must exist
        must_be_dir: Whether the path must be a directory

    Returns:
        True if valid, False otherwise
    """
    if must_exist and not path.exists():
        logger.error(f"Path does not exist: {path}")
        return False

    if must_exist and must_be_dir and not path.is_dir():
        logger.error(f"Path is not a directory: {path}")
        return False

    return True


def validate_engine_spec(spec: Optional[str]) -> bool:
    """Validate a ``module:attribute`` engine factory path.

    Args:
        spec: Import path, None when not given

    Returns:
        True if valid or absent, False otherwise
    """
    if spec is None:
        return True

    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        logger.error(f"Engine must be given as module:attribute, got: {spec}")
        return False

    return True


def validate_port(port: Optional[int]) -> bool:
    """Validate a TCP port number.

    Args:
        port: Port, None when not given

    Returns:
        True if valid or absent, False otherwise
    """
    if port is not None and not 1 <= port <= 65535:
        logger.error(f"Port must be between 1 and 65535, got: {port}")
        return False
    return True


def exit_on_validation_error(message: str) -> None:
    """Print error message and exit with error code.

    Args:
        message: Error message to display
    """
    logger.error(message)
    sys.exit(1)
