"""chestnav Core Exceptions Package - Core exception classes for error handling.

This package contains the exception hierarchy for the chestnav system. These
exceptions provide clear error categorization and enable proper error handling
throughout the application.

The exception hierarchy is designed to:
- Provide specific exception types for different error categories
- Keep non-errors (unresolved links, stale results) out of the hierarchy
- Support structured error messages and context
"""

from .core import (
    ChestNavError,
    ConfigurationError,
    ContentEngineError,
    MalformedLinkError,
    ModelError,
    UntrustedOriginError,
    ValidationError,
)

__all__ = [
    # Base exception
    "ChestNavError",

    # Domain-specific exceptions
    "ValidationError",
    "ModelError",
    "MalformedLinkError",
    "UntrustedOriginError",
    "ContentEngineError",
    "ConfigurationError",
]
