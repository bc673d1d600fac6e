"""Providers package for chestnav - concrete implementations of abstract interfaces."""

from .engine import StaticContentEngine, create_engine, load_engine_factory

__all__ = [
    # Content engine providers
    "StaticContentEngine",
    "create_engine",
    "load_engine_factory",
]
