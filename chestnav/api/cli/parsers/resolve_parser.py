"""Resolve command argument parser for chestnav CLI."""

import argparse

from .main_parser import add_common_arguments, add_engine_arguments


def add_resolve_subparser(subparsers) -> argparse.ArgumentParser:
    """Add resolve command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured resolve subparser
    """
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a link to its item and page paths",
        description="Resolve an absolute or relative link and print the result as JSON"
    )

    resolve_parser.add_argument(
        "url",
        help="Link to resolve (docs://..., file://..., or relative to --context)",
    )

    resolve_parser.add_argument(
        "--context",
        metavar="URL",
        help="URL of the current page; relative links resolve against it",
    )

    add_common_arguments(resolve_parser)
    add_engine_arguments(resolve_parser)

    return resolve_parser
