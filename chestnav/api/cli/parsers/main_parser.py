"""Main argument parser for chestnav CLI."""

import argparse
from pathlib import Path


def create_main_parser() -> argparse.ArgumentParser:
    """Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    from chestnav import __version__

    parser = argparse.ArgumentParser(
        prog="chestnav",
        description="Navigate documentation chests: resolve links, search, and build outlines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chestnav serve --manifest ./chests.yaml
  chestnav resolve docs://cpp/std/vector.html --engine mypackage.engine:create_engine
  chestnav resolve ../string.html --context docs://cpp/std/vector.html
  chestnav search push_back --limit 20
  chestnav outline docs://cpp/std/vector.html
  chestnav config show
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"chestnav {__version__}",
    )

    return parser


def setup_subparsers(parser: argparse.ArgumentParser) -> argparse._SubParsersAction:
    """Set up subparsers for the main parser.

    Args:
        parser: Main argument parser

    Returns:
        Subparsers action for adding command parsers
    """
    return parser.add_subparsers(dest="command", help="Available commands")


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add common arguments used across multiple commands.

    Args:
        parser: Parser to add arguments to
    """
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file path (YAML, TOML or JSON)",
    )


def add_engine_arguments(parser: argparse.ArgumentParser) -> None:
    """Add content engine selection arguments to a parser.

    Args:
        parser: Parser to add arguments to
    """
    parser.add_argument(
        "--engine",
        metavar="MODULE:ATTR",
        help="Content engine factory import path (overrides engine.factory)",
    )

    parser.add_argument(
        "--manifest",
        type=Path,
        help="Chest manifest served by the built-in static engine",
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add output format arguments to a parser.

    Args:
        parser: Parser to add arguments to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON",
    )
