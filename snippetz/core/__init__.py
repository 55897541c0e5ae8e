"""
Core snippet generation components.

Provides the request model, options and base classes used by all plugins.
"""

from .builder import CodeBuilder
from .config import (
    ConfigError,
    ConfigManager,
    GenerationOptions,
    get_config_manager,
    load_options,
)
from .plugin import GeneratorPlugin, RenderNotes, SnippetPlugin
from .prepare import PreparedRequest, prepare
from .request import (
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
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
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
    # Plugin interface
    "GeneratorPlugin",
    "SnippetPlugin",
    "RenderNotes",
    "PreparedRequest",
    "prepare",
    "CodeBuilder",
    # Configuration system
    "GenerationOptions",
    "ConfigManager",
    "ConfigError",
    "get_config_manager",
    "load_options",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
