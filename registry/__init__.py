"""Provider registry and dependency injection container for chestnav."""

from typing import Any, Dict, Optional, Type, TypeVar

from loguru import logger

from core.exceptions import ConfigurationError
from core.models import SearchParameters
from interfaces.content_engine import ContentEngine
from providers.engine import StaticContentEngine, create_engine
from services.base_service import BaseService
from services.outline_service import OutlineService
from services.search_service import SearchService
from services.url_resolver import DEFAULT_HOME_TAG, DEFAULT_PLACEHOLDER_PAGE, UrlResolver

T = TypeVar('T')


class ProviderRegistry:
    """Registry for managing provider implementations and dependency injection."""

    def __init__(self):
        """Initialize the provider registry."""
        self._providers: Dict[str, Any] = {}
        self._singletons: Dict[str, Any] = {}
        self._config: Dict[str, Any] = {}

    def configure(self, config: Dict[str, Any]) -> None:
        """Configure the registry with application settings.

        Args:
            config: Configuration dictionary (``ChestNavConfig.to_dict()``)
        """
        self._config = config.copy()
        self._register_engine_provider()
        logger.info("Provider registry configured")

    def register_provider(self, name: str, implementation: Any, singleton: bool = True) -> None:
        """Register a provider implementation.

        Args:
            name: Provider name/identifier
            implementation: Factory callable or ready instance
            singleton: Whether to use singleton pattern for this provider
        """
        self._providers[name] = (implementation, singleton)

        # Clear existing singleton if registered
        if name in self._singletons:
            del self._singletons[name]

        logger.debug(f"Registered {getattr(implementation, '__name__', type(implementation).__name__)} as {name}")

    def register_engine(self, engine: ContentEngine) -> None:
        """Register a ready content engine instance."""
        self._providers["engine"] = (engine, True)
        self._singletons["engine"] = engine
        logger.debug(f"Registered {type(engine).__name__} as engine")

    def has_provider(self, name: str) -> bool:
        return name in self._providers

    def get_provider(self, name: str) -> Any:
        """Get a provider instance for the specified name.

        Args:
            name: Provider name to get

        Returns:
            Provider instance

        Raises:
            ValueError: If no provider is registered for the name
        """
        if name not in self._providers:
            raise ValueError(f"No provider registered for {name}")

        implementation, is_singleton = self._providers[name]

        if is_singleton:
            if name not in self._singletons:
                self._singletons[name] = self._create_instance(implementation)
            return self._singletons[name]
        else:
            return self._create_instance(implementation)

    def get_engine(self) -> ContentEngine:
        """Get the configured content engine.

        Raises:
            ConfigurationError: If no engine is configured
        """
        if "engine" not in self._providers:
            raise ConfigurationError(
                "engine", None, "No content engine configured (set engine.factory or engine.manifest)"
            )
        return self.get_provider("engine")

    def create_service(self, service_class: Type[T]) -> T:
        """Create a service instance with the content engine injected.

        Args:
            service_class: Service class to instantiate

        Returns:
            Service instance with dependencies injected
        """
        if not issubclass(service_class, BaseService):
            raise ValueError(f"{service_class} must inherit from BaseService")

        return service_class(self.get_engine())

    def create_url_resolver(self) -> UrlResolver:
        """Create a UrlResolver with all dependencies.

        Returns:
            Configured UrlResolver instance
        """
        content_config = self._config.get('content', {})
        return UrlResolver(
            self.get_engine(),
            placeholder_page=content_config.get('placeholder_page', DEFAULT_PLACEHOLDER_PAGE),
            home_tag=content_config.get('home_tag', DEFAULT_HOME_TAG),
        )

    def create_outline_service(self) -> OutlineService:
        """Create an OutlineService with all dependencies.

        Returns:
            Configured OutlineService instance
        """
        return OutlineService(self.get_engine())

    def create_search_service(self) -> SearchService:
        """Create a SearchService with all dependencies.

        Returns:
            Configured SearchService instance
        """
        result_count = self._config.get('search', {}).get('result_count')
        parameters = SearchParameters(result_count) if result_count else None
        return SearchService(self.get_engine(), default_parameters=parameters)

    def _register_engine_provider(self) -> None:
        """Register the content engine named by the configuration, if any."""
        engine_config = self._config.get('engine', {})
        factory: Optional[str] = engine_config.get('factory')
        manifest: Optional[str] = engine_config.get('manifest')

        if factory:
            self.register_provider("engine", lambda: create_engine(factory), singleton=True)
        elif manifest:
            self.register_provider(
                "engine", lambda: StaticContentEngine.from_manifest(manifest), singleton=True
            )
        else:
            logger.debug("No content engine configured")

    def _create_instance(self, implementation: Any) -> Any:
        """Create an instance from a factory, or return a ready instance.

        Args:
            implementation: Factory callable or instance

        Returns:
            Provider instance
        """
        if not callable(implementation):
            return implementation
        try:
            return implementation()
        except Exception as e:
            logger.error(f"Failed to create instance: {e}")
            raise


# Global registry instance (lazy initialization)
_registry = None


def get_registry() -> ProviderRegistry:
    """Get the global registry instance.

    Returns:
        Global ProviderRegistry instance
    """
    global _registry
    if _registry is None:
        _registry = ProviderRegistry()
    return _registry


def configure_registry(config: Dict[str, Any]) -> None:
    """Configure the global provider registry.

    Args:
        config: Configuration dictionary
    """
    get_registry().configure(config)


def reset_registry() -> None:
    """Drop the global registry so the next call builds a fresh one."""
    global _registry
    _registry = None


def get_provider(name: str) -> Any:
    """Get a provider from the global registry.

    Args:
        name: Provider name

    Returns:
        Provider instance
    """
    return get_registry().get_provider(name)


def create_url_resolver() -> UrlResolver:
    """Create a UrlResolver from the global registry."""
    return get_registry().create_url_resolver()


def create_outline_service() -> OutlineService:
    """Create an OutlineService from the global registry."""
    return get_registry().create_outline_service()


def create_search_service() -> SearchService:
    """Create a SearchService from the global registry.

    Returns:
        Configured SearchService instance
    """
    return get_registry().create_search_service()


__all__ = [
    'ProviderRegistry',
    'get_registry',
    'configure_registry',
    'reset_registry',
    'get_provider',
    'create_url_resolver',
    'create_outline_service',
    'create_search_service',
]
