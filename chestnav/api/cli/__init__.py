"""chestnav CLI API package - modular command-line interface."""

# Commands are imported lazily in main.py when needed

__all__ = [
    "serve_command",
    "resolve_command",
    "search_command",
    "outline_command",
    "config_command",
]
