"""Modular CLI entry point for chestnav."""

import argparse
import asyncio
import sys

from loguru import logger

from .utils.validation import (
    exit_on_validation_error,
    validate_engine_spec,
    validate_path,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Whether to enable verbose logging
    """
    logger.remove()

    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
        )


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments shared by the engine-backed commands.

    Args:
        args: Parsed arguments to validate
    """
    manifest = getattr(args, "manifest", None)
    if manifest is not None and not validate_path(manifest, must_exist=True, must_be_dir=False):
        exit_on_validation_error(f"Invalid manifest: {manifest}")

    if not validate_engine_spec(getattr(args, "engine", None)):
        exit_on_validation_error(f"Invalid engine: {args.engine}")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the complete argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    from .parsers import (
        add_config_subparser,
        add_outline_subparser,
        add_resolve_subparser,
        add_search_subparser,
        add_serve_subparser,
        create_main_parser,
        setup_subparsers,
    )

    parser = create_main_parser()
    subparsers = setup_subparsers(parser)

    add_serve_subparser(subparsers)
    add_resolve_subparser(subparsers)
    add_search_subparser(subparsers)
    add_outline_subparser(subparsers)
    add_config_subparser(subparsers)

    return parser


async def async_main(argv=None) -> None:
    """Async main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(getattr(args, "verbose", False))
    validate_args(args)

    try:
        if args.command == "serve":
            from .commands.serve import serve_command
            await serve_command(args)
        elif args.command == "resolve":
            from .commands.resolve import resolve_command
            await resolve_command(args)
        elif args.command == "search":
            from .commands.search import search_command
            await search_command(args)
        elif args.command == "outline":
            from .commands.outline import outline_command
            await outline_command(args)
        elif args.command == "config":
            from .commands.config import config_command
            await config_command(args)
        else:
            logger.error(f"Unknown command: {args.command}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        logger.opt(exception=True).debug("Full error details")
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        asyncio.run(async_main())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
