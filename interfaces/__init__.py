"""Interfaces package for chestnav - abstract protocols for external collaborators."""

from .content_engine import ContentEngine
from .content_surface import ContentSurface

__all__ = [
    "ContentEngine",
    "ContentSurface",
]
