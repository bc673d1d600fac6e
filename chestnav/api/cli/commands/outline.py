"""Outline command module - prints the sidebar of a page."""

import argparse
import sys

from core.exceptions import MalformedLinkError
from ..utils.config_helpers import args_to_config, create_registry
from ..utils.output import OutputFormatter, format_sidebar


async def outline_command(args: argparse.Namespace) -> None:
    """Execute the outline command.

    Args:
        args: Parsed command-line arguments
    """
    formatter = OutputFormatter(verbose=args.verbose)
    registry = create_registry(args_to_config(args))
    resolver = registry.create_url_resolver()
    outline = registry.create_outline_service()

    try:
        resolution = resolver.resolve(args.url)
    except MalformedLinkError as e:
        formatter.error(str(e))
        sys.exit(1)

    formatter.verbose_info(f"Resolved {args.url} as {resolution.kind.value}")
    sidebar = outline.sidebar_for(resolution.page_path)

    if args.json:
        formatter.json_output(sidebar.to_dict())
        return

    for line in format_sidebar(sidebar):
        print(line)
