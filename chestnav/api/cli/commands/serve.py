"""Serve command module - runs the HTTP API."""

import argparse

from loguru import logger

from chestnav.server import run_server
from ..utils.config_helpers import args_to_config
from ..utils.validation import exit_on_validation_error, validate_engine_spec, validate_port


async def serve_command(args: argparse.Namespace) -> None:
    """Execute the serve command.

    Args:
        args: Parsed command-line arguments
    """
    if not validate_engine_spec(args.engine) or not validate_port(args.port):
        exit_on_validation_error("Invalid serve arguments")

    config = args_to_config(args)
    if not config.engine.factory and not config.engine.manifest:
        exit_on_validation_error("No content engine configured: use --engine or --manifest")

    logger.debug(f"Serving with {config!r}")
    # uvicorn runs its own event loop; the server blocks until shutdown
    run_server(config, verbose=args.verbose)
