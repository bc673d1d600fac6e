"""
Custom settings sources for chestnav configuration management.

This module provides custom Pydantic settings sources that extend the default
configuration loading capabilities to support YAML, TOML and JSON
configuration files.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, Union

import yaml
from loguru import logger
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class BaseFileConfigSettingsSource(PydanticBaseSettingsSource, ABC):
    """
    Abstract base class for file-based configuration sources.

    This class provides the common framework for loading configuration
    from various file formats (YAML, TOML, JSON) with consistent behavior.
    """

    def __init__(
        self,
        settings_cls: Type[BaseSettings],
        config_file: Union[str, Path, List[Union[str, Path]]]
    ):
        """
        Initialize file-based configuration source.

        Args:
            settings_cls: The settings class
            config_file: Path(s) to configuration file(s)
        """
        super().__init__(settings_cls)

        if isinstance(config_file, (str, Path)):
            self.config_files = [Path(config_file)]
        else:
            self.config_files = [Path(f) for f in config_file]

        self._data = self._load_files()

    def _load_files(self) -> Dict[str, Any]:
        """Load and merge data from all configuration files."""
        merged_data: Dict[str, Any] = {}

        for config_file in self.config_files:
            if config_file.exists():
                try:
                    file_data = self.load_file(config_file)
                    if file_data:
                        # Later files override earlier ones
                        deep_merge(merged_data, file_data)
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning(f"Failed to load config file {config_file}: {e}")
            elif len(self.config_files) == 1:
                logger.warning(f"Config file {config_file} not found")

        return merged_data

    @abstractmethod
    def load_file(self, path: Path) -> Dict[str, Any]:
        """
        Load configuration data from a specific file.

        Args:
            path: Path to the configuration file

        Returns:
            Dictionary containing configuration data
        """
        pass

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> Tuple[Any, str, bool]:
        """Get field value from configuration data."""
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        """Return the loaded configuration data."""
        return self._data

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(config_files={[str(f) for f in self.config_files]})'


class YamlConfigSettingsSource(BaseFileConfigSettingsSource):
    """Configuration source for YAML files."""

    def load_file(self, path: Path) -> Dict[str, Any]:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}


class TomlConfigSettingsSource(BaseFileConfigSettingsSource):
    """Configuration source for TOML files."""

    def load_file(self, path: Path) -> Dict[str, Any]:
        with open(path, 'rb') as f:
            return tomllib.load(f)


class JsonConfigSettingsSource(BaseFileConfigSettingsSource):
    """Configuration source for JSON files."""

    def load_file(self, path: Path) -> Dict[str, Any]:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}


def deep_merge(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``updates`` into ``target`` in place, recursing into mappings."""
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            deep_merge(target[key], value)
        else:
            target[key] = value
    return target


def create_config_sources(
    settings_cls: Type[BaseSettings],
    config_files: Optional[List[Union[str, Path]]] = None,
) -> List[PydanticBaseSettingsSource]:
    """
    Create a settings source per configuration file, chosen by extension.

    Args:
        settings_cls: Settings class
        config_files: List of configuration files to load

    Returns:
        List of configured settings sources, in the order given
    """
    sources: List[PydanticBaseSettingsSource] = []

    for config_file in config_files or []:
        config_path = Path(config_file)
        suffix = config_path.suffix.lower()

        if suffix in ('.yaml', '.yml'):
            sources.append(YamlConfigSettingsSource(settings_cls, config_path))
        elif suffix == '.toml':
            sources.append(TomlConfigSettingsSource(settings_cls, config_path))
        elif suffix == '.json':
            sources.append(JsonConfigSettingsSource(settings_cls, config_path))
        else:
            logger.warning(f"Unknown config file format: {config_path}")

    return sources


def find_config_files(
    base_dirs: Optional[List[Union[str, Path]]] = None,
    config_names: Optional[List[str]] = None,
) -> List[Path]:
    """
    Find configuration files in common locations.

    Args:
        base_dirs: Directories to search (defaults to common config locations)
        config_names: Config file names to look for

    Returns:
        List of found configuration files in priority order
    """
    if base_dirs is None:
        dirs = [
            Path.cwd(),
            Path.home() / '.config' / 'chestnav',
        ]
    else:
        dirs = [Path(d) for d in base_dirs]

    if config_names is None:
        config_names = [
            'chestnav.yaml',
            'chestnav.yml',
            'chestnav.toml',
            'chestnav.json',
        ]

    found_files = []

    for base_dir in dirs:
        if not base_dir.exists():
            continue

        for config_name in config_names:
            config_path = base_dir / config_name
            if config_path.exists() and config_path.is_file():
                found_files.append(config_path)

    return found_files
