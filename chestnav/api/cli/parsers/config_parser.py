"""Config command argument parser for chestnav CLI."""

import argparse

from .main_parser import add_common_arguments


def add_config_subparser(subparsers) -> argparse.ArgumentParser:
    """Add config command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured config subparser
    """
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
        description="Show the effective configuration after all sources are merged"
    )

    add_common_arguments(config_parser)

    config_subparsers = config_parser.add_subparsers(
        dest="config_command",
        help="Configuration commands",
        required=True
    )

    config_subparsers.add_parser(
        "show",
        help="Print the effective configuration as JSON"
    )

    return config_parser
