"""
Configuration helper utilities for CLI commands.

This module provides utilities to bridge CLI arguments with the unified
configuration system.
"""

import argparse
from pathlib import Path

from chestnav.core.config.unified_config import ChestNavConfig


def args_to_config(args: argparse.Namespace, project_dir: Path | None = None) -> ChestNavConfig:
    """
    Convert CLI arguments to unified configuration.

    Args:
        args: Parsed CLI arguments
        project_dir: Project directory for config file loading

    Returns:
        ChestNavConfig instance
    """
    config_overrides = {}

    # Engine configuration
    engine_config = {}
    if hasattr(args, 'engine') and args.engine:
        engine_config['factory'] = args.engine
    if hasattr(args, 'manifest') and args.manifest:
        engine_config['manifest'] = str(args.manifest)

    if engine_config:
        config_overrides['engine'] = engine_config

    # Server configuration
    server_config = {}
    if hasattr(args, 'host') and args.host:
        server_config['host'] = args.host
    if hasattr(args, 'port') and args.port:
        server_config['port'] = args.port
    if hasattr(args, 'reload') and args.reload:
        server_config['reload'] = True

    if server_config:
        config_overrides['server'] = server_config

    # Search configuration
    if hasattr(args, 'limit') and args.limit:
        config_overrides['search'] = {'result_count': args.limit}

    if hasattr(args, 'debug') and args.debug:
        config_overrides['debug'] = True

    config_file = getattr(args, 'config', None)

    return ChestNavConfig.load_hierarchical(
        project_dir=project_dir,
        config_file=config_file,
        **config_overrides
    )


def create_registry(config: ChestNavConfig):
    """
    Build a provider registry configured for a CLI command.

    Args:
        config: Effective configuration

    Returns:
        Configured ProviderRegistry
    """
    from registry import ProviderRegistry

    registry = ProviderRegistry()
    registry.configure(config.to_dict())
    return registry
