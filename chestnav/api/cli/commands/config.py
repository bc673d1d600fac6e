"""Config command module - shows the effective configuration."""

import argparse
import sys

from loguru import logger

from ..utils.config_helpers import args_to_config
from ..utils.output import format_config


async def config_command(args: argparse.Namespace) -> None:
    """Execute the config command with appropriate subcommand.

    Args:
        args: Parsed command-line arguments
    """
    subcommand_handlers = {
        "show": config_show_command,
    }

    handler = subcommand_handlers.get(args.config_command)
    if handler:
        await handler(args)
    else:
        logger.error(f"Unknown config command: {args.config_command}")
        sys.exit(1)


async def config_show_command(args: argparse.Namespace) -> None:
    """Handle config show command."""
    config = args_to_config(args)
    print(format_config(config.to_dict()))
