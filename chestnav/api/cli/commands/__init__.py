"""chestnav CLI commands package - modular command implementations."""

from .serve import serve_command
from .resolve import resolve_command
from .search import search_command
from .outline import outline_command
from .config import config_command

__all__ = [
    "serve_command",
    "resolve_command",
    "search_command",
    "outline_command",
    "config_command",
]
