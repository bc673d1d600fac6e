"""chestnav Core Exceptions - Core exception classes for error handling.

This module contains the exception hierarchy for the chestnav system. These
exceptions provide clear error categorization and enable proper error handling
throughout the application.
"""

from typing import Optional, Any, Dict


class ChestNavError(Exception):
    """Base exception for all chestnav-specific errors.

    This is the root exception class that all other chestnav exceptions
    inherit from. It provides common functionality for error handling,
    context tracking, and debugging.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize chestnav error.

        Args:
            message: Human-readable error description
            context: Optional dictionary with error context (e.g., URLs, identifiers)
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message

    def add_context(self, key: str, value: Any) -> "ChestNavError":
        """Add context information to the error."""
        self.context[key] = value
        return self


class ValidationError(ChestNavError):
    """Raised when data validation fails.

    This exception is used when input data doesn't meet expected format,
    type, or business rule requirements.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        reason: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize validation error.

        Args:
            field: Name of the field that failed validation
            value: The invalid value
            reason: Description of why validation failed
            context: Optional additional context
        """
        message = f"Validation failed for field '{field}': {reason}"
        super().__init__(message, context)
        self.field = field
        self.value = value
        self.reason = reason


class ModelError(ChestNavError):
    """Raised when domain model operations fail."""

    def __init__(
        self,
        model_type: str,
        operation: str,
        reason: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize model error.

        Args:
            model_type: Type of model that caused the error (e.g., "ChestItem")
            operation: Operation that failed (e.g., "from_dict")
            reason: Description of what went wrong
            context: Optional additional context
        """
        message = f"{model_type} {operation} failed: {reason}"
        super().__init__(message, context)
        self.model_type = model_type
        self.operation = operation
        self.reason = reason


class MalformedLinkError(ChestNavError):
    """Raised when a followed link cannot be parsed.

    A malformed link is fatal to the single navigation attempt that produced
    it. Links that parse but match nothing in the content engine are not
    errors; they resolve to an "unresolved" location instead.
    """

    def __init__(
        self,
        url: str,
        reason: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize malformed link error.

        Args:
            url: The URL that failed to parse
            reason: Description of what is wrong with it
            context: Optional additional context
            cause: Optional underlying parse exception
        """
        message = f"Malformed link '{url}': {reason}"
        super().__init__(message, context, cause)
        self.url = url
        self.reason = reason


class UntrustedOriginError(ChestNavError):
    """Raised when a privileged operation is invoked from a non-local origin."""

    def __init__(
        self,
        origin: Optional[str],
        operation: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize untrusted origin error.

        Args:
            origin: Origin of the caller, None when the caller sent none
            operation: Privileged operation that was refused
            context: Optional additional context
        """
        message = f"Calling '{operation}' from an untrusted origin: {origin or '<none>'}"
        super().__init__(message, context)
        self.origin = origin
        self.operation = operation


class ContentEngineError(ChestNavError):
    """Raised when a content engine call fails.

    This exception wraps failures of the external content engine so that
    services can report which operation was being performed.
    """

    def __init__(
        self,
        operation: Optional[str] = None,
        identifier: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize content engine error.

        Args:
            operation: Engine operation that failed (e.g., "search", "read")
            identifier: Chest identifier involved in the operation
            reason: Description of what went wrong
            context: Optional additional context
            cause: Optional underlying engine exception
        """
        parts = []
        if operation:
            parts.append(f"operation={operation}")
        if identifier:
            parts.append(f"identifier={identifier}")

        prefix = f"Content engine error ({', '.join(parts)})" if parts else "Content engine error"
        message = f"{prefix}: {reason}" if reason else prefix

        super().__init__(message, context, cause)
        self.operation = operation
        self.identifier = identifier
        self.reason = reason


class ConfigurationError(ChestNavError):
    """Raised when configuration is invalid or missing.

    This exception is used for errors related to configuration files,
    environment variables, or system setup issues.
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize configuration error.

        Args:
            config_key: Configuration key that caused the error
            config_value: Invalid configuration value
            reason: Description of what went wrong
            context: Optional additional context
        """
        if config_key:
            message = f"Configuration error for '{config_key}': {reason}"
        else:
            message = f"Configuration error: {reason}" if reason else "Configuration error"

        super().__init__(message, context)
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason
