"""Argument parser utilities for chestnav CLI commands."""

from .main_parser import create_main_parser, setup_subparsers
from .serve_parser import add_serve_subparser
from .resolve_parser import add_resolve_subparser
from .search_parser import add_search_subparser
from .outline_parser import add_outline_subparser
from .config_parser import add_config_subparser

__all__ = [
    "create_main_parser",
    "setup_subparsers",
    "add_serve_subparser",
    "add_resolve_subparser",
    "add_search_subparser",
    "add_outline_subparser",
    "add_config_subparser",
]
