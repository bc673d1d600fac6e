"""ContentSurface protocol for chestnav - the view that displays chest content."""

from typing import Protocol


class ContentSurface(Protocol):
    """Abstract protocol for the hosted content view.

    The surface loads URLs (``docs://`` content, the local placeholder page,
    or external pages) and keeps its own navigation history; chestnav keeps
    none beyond the current path snapshot.
    """

    def load_url(self, url: str) -> None:
        """Start loading a URL."""
        ...

    def load_html(self, html: str, base_url: str) -> None:
        """Display a locally generated document (used for inline error pages)."""
        ...

    def go_back(self) -> None:
        """Navigate one step back in the surface's history."""
        ...

    def go_forward(self) -> None:
        """Navigate one step forward in the surface's history."""
        ...

    def reload(self) -> None:
        """Reload the current document."""
        ...
