"""Search command argument parser for chestnav CLI."""

import argparse

from .main_parser import add_common_arguments, add_engine_arguments, add_output_arguments


def add_search_subparser(subparsers) -> argparse.ArgumentParser:
    """Add search command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured search subparser
    """
    search_parser = subparsers.add_parser(
        "search",
        help="Search installed chests",
        description="Search all chests and print the grouped result rows"
    )

    search_parser.add_argument(
        "query",
        help="Search text",
    )

    search_parser.add_argument(
        "--limit",
        type=int,
        help="Maximum number of engine results (default: search.result_count)",
    )

    add_common_arguments(search_parser)
    add_engine_arguments(search_parser)
    add_output_arguments(search_parser)

    return search_parser
