"""Shared utilities for chestnav CLI commands."""

from .output import OutputFormatter, format_config, format_search_rows, format_sidebar
from .validation import exit_on_validation_error, validate_engine_spec, validate_path, validate_port

__all__ = [
    "OutputFormatter",
    "format_search_rows",
    "format_sidebar",
    "format_config",
    "validate_path",
    "validate_engine_spec",
    "validate_port",
    "exit_on_validation_error",
]
