"""chestnav - Navigation core for browsing documentation chests."""

__version__ = "0.3.0"
__description__ = "Navigation core for browsing documentation chests"

__all__ = [
    "BrowserSession",
    "SearchSelector",
    "CommandChannel",
    "HostCommand",
    "create_app",
]

def __getattr__(name: str):
    """Lazy import so the CLI starts without loading the web stack."""
    if name == "BrowserSession":
        from .session import BrowserSession
        return BrowserSession
    elif name == "SearchSelector":
        from .selection import SearchSelector
        return SearchSelector
    elif name in ("CommandChannel", "HostCommand"):
        from . import commands
        return getattr(commands, name)
    elif name == "create_app":
        from .http_api import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
