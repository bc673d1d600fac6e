"""Resolve command module - resolves a link and prints the result."""

import argparse
import sys

from core.exceptions import MalformedLinkError
from ..utils.config_helpers import args_to_config, create_registry
from ..utils.output import OutputFormatter


async def resolve_command(args: argparse.Namespace) -> None:
    """Execute the resolve command.

    With ``--context`` the context URL is resolved first and its item path
    is used as the current location, exactly as when following a link from
    that page.

    Args:
        args: Parsed command-line arguments
    """
    formatter = OutputFormatter(verbose=args.verbose)
    resolver = create_registry(args_to_config(args)).create_url_resolver()

    try:
        current_path = None
        if args.context:
            context = resolver.resolve(args.context)
            current_path = context.item_path
            formatter.verbose_info(f"Context path: {current_path}")

        resolution = resolver.resolve(args.url, current_path)
    except MalformedLinkError as e:
        formatter.error(str(e))
        sys.exit(1)

    formatter.json_output(resolution.to_dict())
