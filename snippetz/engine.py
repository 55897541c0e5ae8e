"""
Snippet engine facade.

Resolves the plugin for a ``(target, client)`` pair and runs it; the single
entry point callers use to turn a request into snippet text.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .core.config import GenerationOptions, get_config_manager
from .core.request import CanonicalRequest
from .logging_config import get_logger
from .registry import PluginRegistry, RegistryError, get_registry

logger = get_logger(__name__)

OptionsLike = Union[None, GenerationOptions, Mapping[str, Any], str, Path]


class SnippetResult:
    """Container for a generated snippet and metadata."""

    def __init__(
        self,
        snippet: str,
        target: str,
        client: str,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.snippet = snippet
        self.target = target
        self.client = client
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, target: str, client: str, message: str, exception: Exception = None
    ) -> "SnippetResult":
        """Create a failed result."""
        result = cls(snippet="", target=target, client=client)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    def __repr__(self) -> str:
        status = "ok" if self.success else f"error: {self.error_message}"
        return f"<SnippetResult {self.target}/{self.client} {status}>"


def resolve_options(target: str, options: OptionsLike = None) -> GenerationOptions:
    """
    Turn any accepted options form into ``GenerationOptions``.

    Args:
        target: Target whose defaults apply
        options: None, GenerationOptions, a mapping of overrides or a
            path to a JSON config file

    Returns:
        Options for the target
    """
    if isinstance(options, GenerationOptions):
        return options
    manager = get_config_manager()
    if options is None:
        return manager.get_options(target)
    if isinstance(options, (str, Path)):
        return manager.get_options(target, config_file=options)
    if isinstance(options, Mapping):
        return manager.get_options(target, custom_options=options)
    raise TypeError(f"Invalid options type: {type(options).__name__}")


class SnippetEngine:
    """Generates snippets through a plugin registry."""

    def __init__(self, registry: Optional[PluginRegistry] = None):
        """
        Args:
            registry: Registry to resolve plugins from (global one by default)
        """
        self._registry = registry

    @property
    def registry(self) -> PluginRegistry:
        if self._registry is None:
            self._registry = get_registry()
        return self._registry

    def generate(
        self,
        request: CanonicalRequest,
        target: str,
        client: str,
        options: OptionsLike = None,
    ) -> str:
        """
        Generate one snippet.

        Raises:
            UnsupportedTargetClient: If no plugin exists for the pair
        """
        try:
            plugin = self.registry.resolve(target, client)
        except RegistryError:
            logger.warning("Unsupported target/client requested: %s/%s", target, client)
            raise

        logger.debug("Generating %s/%s with %s", target, client, type(plugin).__name__)
        return plugin.generate(request, resolve_options(target, options))

    def try_generate(
        self,
        request: CanonicalRequest,
        target: str,
        client: str,
        options: OptionsLike = None,
    ) -> SnippetResult:
        """Generate one snippet, reporting failures in the result."""
        try:
            resolved = resolve_options(target, options)
            snippet = self.generate(request, target, client, resolved)
        except Exception as e:
            return SnippetResult.error(target, client, str(e), e)

        info = self.registry.get_plugin_info(target, client)
        metadata = {
            "title": info.get("title"),
            "adapted": info.get("adapted", False),
            "warnings": get_config_manager().validate_options(resolved),
        }
        return SnippetResult(snippet, target, client, metadata)

    def generate_all(
        self, request: CanonicalRequest, options: OptionsLike = None
    ) -> List[SnippetResult]:
        """Generate a snippet for every registered pair, in registration order."""
        return [
            self.try_generate(request, target, client, options)
            for target, client in self.registry.list()
        ]

    def clients(self) -> List[Tuple[str, str]]:
        """Supported ``(target, client)`` pairs."""
        return self.registry.list()


# Default engine instance
_default_engine: Optional[SnippetEngine] = None


def get_engine() -> SnippetEngine:
    """Get the engine bound to the global registry."""
    global _default_engine
    if _default_engine is None:
        _default_engine = SnippetEngine()
    return _default_engine


def generate_snippet(
    request: CanonicalRequest,
    target: str,
    client: str,
    options: OptionsLike = None,
) -> str:
    """
    Generate a snippet with the global registry.

    Args:
        request: Request to render
        target: Target language identifier, e.g. ``"python"``
        client: Client library identifier, e.g. ``"requests"``
        options: None, GenerationOptions, mapping or config file path

    Returns:
        Snippet text

    Raises:
        UnsupportedTargetClient: If no plugin exists for the pair
    """
    return get_engine().generate(request, target, client, options)
