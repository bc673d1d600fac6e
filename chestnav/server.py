"""Standalone API server script for chestnav.

This module provides a standalone server that can be run independently
of the CLI for API-only deployments.
"""

import sys
from typing import Optional

import uvicorn
from loguru import logger

from .core.config import ChestNavConfig, set_config


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the server."""
    logger.remove()

    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True
    )


def run_server(config: Optional[ChestNavConfig] = None, verbose: bool = False) -> None:
    """Run the chestnav API server.

    The application is built by ``create_app`` inside uvicorn, from the
    configuration installed here as the global one.

    Args:
        config: Configuration to serve with, loaded hierarchically when omitted
        verbose: Enable verbose logging
    """
    config = config or ChestNavConfig.load_hierarchical()
    set_config(config)

    logger.info(f"Starting chestnav API server on {config.server.host}:{config.server.port}")
    if config.engine.factory:
        logger.info(f"Content engine: {config.engine.factory}")
    elif config.engine.manifest:
        logger.info(f"Chest manifest: {config.engine.manifest}")

    uvicorn.run(
        "chestnav.http_api:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        log_level="info" if verbose else "warning",
        reload=config.server.reload,
        access_log=verbose
    )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="chestnav API Server")
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--engine", help="Content engine factory (module:attribute)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    setup_logging(args.verbose)

    overrides = {}
    server = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
    if args.reload:
        server["reload"] = True
    if server:
        overrides["server"] = server
    if args.engine:
        overrides["engine"] = {"factory": args.engine}

    run_server(ChestNavConfig.load_hierarchical(**overrides), verbose=args.verbose)
