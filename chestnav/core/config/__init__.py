"""
Configuration management package for chestnav.

This package provides a unified configuration system that supports:
- Multiple configuration sources (environment variables, config files, runtime overrides)
- Type-safe configuration validation using Pydantic
"""

from .settings_sources import (
    JsonConfigSettingsSource,
    TomlConfigSettingsSource,
    YamlConfigSettingsSource,
    create_config_sources,
    find_config_files,
)
from .unified_config import (
    ChestNavConfig,
    ContentConfig,
    EngineConfig,
    SearchConfig,
    ServerConfig,
    get_config,
    reset_config,
    set_config,
)

__all__ = [
    "ChestNavConfig",
    "ServerConfig",
    "EngineConfig",
    "ContentConfig",
    "SearchConfig",
    "get_config",
    "set_config",
    "reset_config",
    "YamlConfigSettingsSource",
    "TomlConfigSettingsSource",
    "JsonConfigSettingsSource",
    "create_config_sources",
    "find_config_files",
]
