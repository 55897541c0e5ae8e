"""
snippetz: HTTP request code snippet generator.

Turns a canonical HTTP request description into code snippets for many
target languages and client libraries.
"""

from .core.config import GenerationOptions, load_options
from .core.request import (
    BasicAuth,
    BearerAuth,
    BinaryBody,
    CanonicalRequest,
    DigestAuth,
    FilePart,
    FormUrlEncodedBody,
    GraphQLBody,
    HttpMethod,
    JsonBody,
    MultipartBody,
    NoAuth,
    NoBody,
    OAuth2Auth,
    RequestModelError,
    TextBody,
)
from .engine import SnippetEngine, SnippetResult, generate_snippet, get_engine
from .registry import (
    InvalidPluginError,
    PluginRegistrationConflict,
    PluginRegistry,
    RegistryError,
    UnsupportedTargetClient,
    create_registry,
    get_registry,
    list_supported,
    resolve_plugin,
)

# Version info
__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Request model
    "CanonicalRequest",
    "HttpMethod",
    "RequestModelError",
    "NoAuth",
    "BasicAuth",
    "BearerAuth",
    "DigestAuth",
    "OAuth2Auth",
    "NoBody",
    "TextBody",
    "JsonBody",
    "FormUrlEncodedBody",
    "MultipartBody",
    "FilePart",
    "GraphQLBody",
    "BinaryBody",
    # Options
    "GenerationOptions",
    "load_options",
    # Engine
    "SnippetEngine",
    "SnippetResult",
    "generate_snippet",
    "get_engine",
    # Registry
    "PluginRegistry",
    "RegistryError",
    "UnsupportedTargetClient",
    "PluginRegistrationConflict",
    "InvalidPluginError",
    "create_registry",
    "get_registry",
    "list_supported",
    "resolve_plugin",
]
