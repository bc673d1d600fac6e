"""Content engine providers for chestnav."""

from .loader import create_engine, load_engine_factory
from .static_engine import StaticContentEngine

__all__ = [
    "StaticContentEngine",
    "create_engine",
    "load_engine_factory",
]
