"""
Unified configuration system for chestnav.

This module provides a single, type-safe configuration model covering the
HTTP server, the content engine, content display and search, with
hierarchical loading from multiple sources.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

from core.types import Theme
from .settings_sources import create_config_sources, deep_merge, find_config_files


class ServerConfig(BaseModel):
    """HTTP API server configuration."""

    host: str = Field(
        default='127.0.0.1',
        description="Host to bind the HTTP API to"
    )

    port: int = Field(
        default=7474,
        ge=1,
        le=65535,
        description="Port for the HTTP API"
    )

    reload: bool = Field(
        default=False,
        description="Enable uvicorn auto-reload"
    )

    access_token: SecretStr | None = Field(
        default=None,
        description="Token privileged requests must send in the X-ChestNav-Token header"
    )


class EngineConfig(BaseModel):
    """Content engine configuration."""

    factory: str | None = Field(
        default=None,
        description="Import path 'module:attribute' of the content engine factory"
    )

    manifest: str | None = Field(
        default=None,
        description="Path to a YAML/JSON chest manifest served by the static engine"
    )


class ContentConfig(BaseModel):
    """Content display configuration."""

    theme: Theme = Field(
        default=Theme.LIGHT,
        description="Theme used when reading assets"
    )

    placeholder_page: str = Field(
        default='blank.html',
        description="File name of the local blank page shown when nothing is open"
    )

    home_tag: str = Field(
        default='Home',
        description="Tag shown while the placeholder page is displayed"
    )

    @field_validator('theme', mode='before')
    @classmethod
    def parse_theme(cls, v: Any) -> Any:
        """Accept theme names in any case."""
        if isinstance(v, str):
            return Theme.from_string(v)
        return v


class SearchConfig(BaseModel):
    """Search configuration."""

    result_count: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Maximum number of results requested from the engine"
    )


class ChestNavConfig(BaseSettings):
    """
    Unified configuration for chestnav.

    Configuration Sources (in order of precedence):
    1. Runtime parameters (highest priority)
    2. Environment variables (CHESTNAV_*)
    3. Config files found by find_config_files, and an explicit --config file
    4. Project config file (.chestnav.json)
    5. User config file (~/.chestnav/config.json)
    6. Default values (lowest priority)

    Environment Variable Examples:
        CHESTNAV_SERVER__PORT=8080
        CHESTNAV_SERVER__ACCESS_TOKEN=change-me
        CHESTNAV_ENGINE__FACTORY=mypackage.engine:create_engine
        CHESTNAV_CONTENT__THEME=dark
        CHESTNAV_SEARCH__RESULT_COUNT=100
        CHESTNAV_DEBUG=true
    """

    model_config = SettingsConfigDict(
        env_prefix='CHESTNAV_',
        env_nested_delimiter='__',
        case_sensitive=False,
        validate_default=True,
        extra='ignore',
        env_file=None,
    )

    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP API server configuration"
    )

    engine: EngineConfig = Field(
        default_factory=EngineConfig,
        description="Content engine configuration"
    )

    content: ContentConfig = Field(
        default_factory=ContentConfig,
        description="Content display configuration"
    )

    search: SearchConfig = Field(
        default_factory=SearchConfig,
        description="Search configuration"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode (trusts the local development origin)"
    )

    @classmethod
    def load_hierarchical(cls,
                          project_dir: Path | None = None,
                          config_file: Path | None = None,
                          **override_values: Any) -> 'ChestNavConfig':
        """
        Load configuration from hierarchical sources.

        Args:
            project_dir: Project directory to search for config files
            config_file: Explicit config file (YAML, TOML or JSON)
            **override_values: Runtime parameter overrides

        Returns:
            Loaded and validated configuration
        """
        if project_dir is None:
            project_dir = Path.cwd()

        files: list[Path] = [
            Path.home() / '.chestnav' / 'config.json',
            project_dir / '.chestnav.json',
        ]
        files.extend(find_config_files([project_dir, Path.home() / '.config' / 'chestnav']))
        explicit = Path(config_file) if config_file is not None else None
        if explicit is not None:
            files.append(explicit)

        config_data: dict[str, Any] = {}
        seen: set[Path] = set()
        for path in files:
            if path in seen or (path != explicit and not path.exists()):
                continue
            seen.add(path)
            for source in create_config_sources(cls, [path]):
                logger.debug(f"Loading configuration from {path}")
                deep_merge(config_data, source())

        deep_merge(config_data, EnvSettingsSource(cls)())
        deep_merge(config_data, override_values)

        return cls(**config_data)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert configuration to dictionary format.

        Returns:
            Configuration as dictionary
        """
        return self.model_dump(mode='json', exclude_none=True)

    def save_to_file(self, file_path: Path) -> None:
        """
        Save configuration to JSON file.

        Args:
            file_path: Path to save configuration file
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def __repr__(self) -> str:
        return (
            f"ChestNavConfig("
            f"server={self.server.host}:{self.server.port}, "
            f"engine.factory={self.engine.factory}, "
            f"content.theme={self.content.theme.value}, "
            f"debug={self.debug})"
        )


# Global configuration instance
_config_instance: ChestNavConfig | None = None


def get_config() -> ChestNavConfig:
    """
    Get the global configuration instance.

    Returns:
        Global ChestNavConfig instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = ChestNavConfig.load_hierarchical()
    return _config_instance


def set_config(config: ChestNavConfig) -> None:
    """
    Set the global configuration instance.

    Args:
        config: Configuration instance to set as global
    """
    global _config_instance
    _config_instance = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config_instance
    _config_instance = None
