"""Serve command argument parser for chestnav CLI."""

import argparse

from .main_parser import add_common_arguments, add_engine_arguments


def add_serve_subparser(subparsers) -> argparse.ArgumentParser:
    """Add serve command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured serve subparser
    """
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
        description="Serve search, lookup, outline and chest assets over HTTP"
    )

    add_common_arguments(serve_parser)
    add_engine_arguments(serve_parser)

    serve_parser.add_argument(
        "--host",
        help="Host to bind to (default: 127.0.0.1)",
    )

    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: 7474)",
    )

    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: also trust the local development origin",
    )

    return serve_parser
