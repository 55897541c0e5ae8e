"""
Plugin registry for managing available snippet generators.

Plugins are keyed by the exact ``(target, client)`` pair they declare.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .core.plugin import GeneratorPlugin
from .logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class UnsupportedTargetClient(RegistryError, LookupError):
    """No plugin is registered for the requested pair."""

    def __init__(self, target: str, client: str, available: Optional[List[str]] = None):
        self.target = target
        self.client = client
        message = f"No plugin registered for target/client: {target}/{client}"
        if available:
            message += f". Clients for {target}: {', '.join(available)}"
        super().__init__(message)


class PluginRegistrationConflict(RegistryError):
    """A plugin is already registered for the pair."""

    def __init__(self, target: str, client: str):
        self.target = target
        self.client = client
        super().__init__(f"A plugin is already registered for {target}/{client}")


class InvalidPluginError(RegistryError, TypeError):
    """Object does not implement the plugin interface."""

    pass


def _check_plugin(plugin: Any):
    if not isinstance(plugin, GeneratorPlugin):
        raise InvalidPluginError(
            f"{plugin!r} does not implement the plugin interface "
            "(target, client, generate)"
        )
    for attr in ("target", "client"):
        value = getattr(plugin, attr)
        if not isinstance(value, str) or not value:
            raise InvalidPluginError(f"Plugin {attr} must be a non-empty string: {plugin!r}")


class PluginRegistry:
    """Registry of generator plugins keyed by ``(target, client)``."""

    def __init__(self):
        """Initialize empty registry."""
        self._plugins: Dict[Tuple[str, str], GeneratorPlugin] = {}
        self._frozen = False

    def register(self, plugin: Any, replace: bool = False) -> GeneratorPlugin:
        """
        Register a plugin.

        Args:
            plugin: Plugin instance, or a plugin class to instantiate
            replace: If True, replace an existing registration

        Returns:
            The registered plugin instance

        Raises:
            RegistryError: If the registry is frozen
            InvalidPluginError: If the plugin does not implement the interface
            PluginRegistrationConflict: If the pair is taken and replace is False
        """
        if self._frozen:
            raise RegistryError("Registry is frozen; build a new one with create_registry()")

        if isinstance(plugin, type):
            plugin = plugin()
        _check_plugin(plugin)

        key = (plugin.target, plugin.client)
        if key in self._plugins and not replace:
            logger.error("Duplicate plugin registration for %s/%s", *key)
            raise PluginRegistrationConflict(*key)

        self._plugins[key] = plugin
        logger.debug("Registered plugin %s/%s: %s", key[0], key[1], type(plugin).__name__)
        return plugin

    def freeze(self):
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find(self, target: str, client: str) -> Optional[GeneratorPlugin]:
        """Return the plugin for the pair, or None."""
        return self._plugins.get((target, client))

    def resolve(self, target: str, client: str) -> GeneratorPlugin:
        """
        Get the plugin for a pair.

        Raises:
            UnsupportedTargetClient: If no plugin is registered for the pair
        """
        plugin = self.find(target, client)
        if plugin is None:
            available = self.list_targets().get(target)
            raise UnsupportedTargetClient(target, client, available)
        return plugin

    def list(self) -> List[Tuple[str, str]]:
        """Registered pairs in registration order."""
        return list(self._plugins)

    def list_targets(self) -> Dict[str, List[str]]:
        """Map each target to its clients, both in registration order."""
        result: Dict[str, List[str]] = {}
        for target, client in self._plugins:
            result.setdefault(target, []).append(client)
        return result

    def is_supported(self, target: str, client: str) -> bool:
        return (target, client) in self._plugins

    def get_plugin_info(self, target: str, client: str) -> Dict[str, Any]:
        """
        Get information about a registered plugin.

        Raises:
            UnsupportedTargetClient: If no plugin is registered for the pair
        """
        plugin = self.resolve(target, client)
        describe = getattr(plugin, "describe", None)
        if callable(describe):
            return describe()
        return {
            "target": plugin.target,
            "client": plugin.client,
            "title": getattr(plugin, "title", "") or f"{plugin.target}/{plugin.client}",
            "link": getattr(plugin, "link", ""),
            "class": type(plugin).__name__,
            "module": type(plugin).__module__,
            "adapted": False,
        }

    def __contains__(self, key) -> bool:
        return key in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __iter__(self) -> Iterator[GeneratorPlugin]:
        return iter(self._plugins.values())


def create_registry(plugins: Iterable[Any] = ()) -> PluginRegistry:
    """Build an unfrozen registry from plugin classes or instances."""
    registry = PluginRegistry()
    for plugin in plugins:
        registry.register(plugin)
    return registry


# Global registry instance - created once
_global_registry: Optional[PluginRegistry] = None


def get_registry() -> PluginRegistry:
    """Get the global plugin registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        from .plugins import BUILTIN_PLUGINS

        registry = create_registry(BUILTIN_PLUGINS)
        registry.freeze()
        _global_registry = registry
        logger.debug("Global registry built with %d plugins", len(registry))
    return _global_registry


# Public API functions using the global registry


def list_supported() -> List[Tuple[str, str]]:
    """List all supported (target, client) pairs."""
    return get_registry().list()


def resolve_plugin(target: str, client: str) -> GeneratorPlugin:
    """Resolve a plugin from the global registry."""
    return get_registry().resolve(target, client)
