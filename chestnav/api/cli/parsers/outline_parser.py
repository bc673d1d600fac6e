"""Outline command argument parser for chestnav CLI."""

import argparse

from .main_parser import add_common_arguments, add_engine_arguments, add_output_arguments


def add_outline_subparser(subparsers) -> argparse.ArgumentParser:
    """Add outline command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured outline subparser
    """
    outline_parser = subparsers.add_parser(
        "outline",
        help="Print the sidebar of a page",
        description="Resolve a content URL and print the sidebar built for its page"
    )

    outline_parser.add_argument(
        "url",
        help="Content URL of the page (docs://<identifier>/<path>)",
    )

    add_common_arguments(outline_parser)
    add_engine_arguments(outline_parser)
    add_output_arguments(outline_parser)

    return outline_parser
