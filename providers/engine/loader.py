"""Content engine loading for chestnav."""

import importlib
from typing import Any

from loguru import logger

from core.exceptions import ConfigurationError


def load_engine_factory(spec: str) -> Any:
    """Import the object named by a ``module:attribute`` string.

    Args:
        spec: Import path, e.g. ``mypackage.engine:create_engine``

    Returns:
        The referenced object (a factory or an engine instance)

    Raises:
        ConfigurationError: If the spec is malformed or cannot be imported
    """
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError("engine.factory", spec, "Expected 'module:attribute'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError("engine.factory", spec, f"Cannot import {module_name}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigurationError(
                "engine.factory", spec, f"{module_name} has no attribute {attr_path}"
            ) from e

    logger.debug(f"Loaded engine factory {spec}")
    return target


def create_engine(spec: str) -> Any:
    """Build a content engine from a ``module:attribute`` import path.

    Callables are invoked without arguments; anything else is used as the
    engine itself.
    """
    target = load_engine_factory(spec)
    if callable(target):
        return target()
    return target
