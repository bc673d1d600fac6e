"""Base service class for chestnav services."""

from abc import ABC

from interfaces.content_engine import ContentEngine


class BaseService(ABC):
    """Base service class providing common functionality and dependency management."""

    def __init__(self, content_engine: ContentEngine):
        """Initialize service with content engine dependency.

        Args:
            content_engine: Content engine implementation
        """
        self._engine = content_engine

    @property
    def engine(self) -> ContentEngine:
        """Get content engine instance."""
        return self._engine

    def chest_tag(self, identifier: str) -> str:
        """Get the display tag for a chest, falling back to its identifier."""
        tag = self._engine.tag_for_identifier(identifier)
        return tag if tag is not None else identifier
