"""
Core configuration for chestnav.

This package contains the unified configuration system shared by the CLI,
the HTTP API and browser sessions.
"""

__all__ = ["config"]
