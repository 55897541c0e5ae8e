"""
Canonical request model.

The single, library-agnostic description of an HTTP request that every
snippet plugin consumes. Auth and body are closed tagged variants: exactly
one variant is active and absent values default to the ``none`` variant.
"""

import json
from dataclasses import dataclass, field, replace as dataclass_replace
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Union


class RequestModelError(ValueError):
    """Raised when a request is structurally invalid."""

    pass


class HttpMethod(str, Enum):
    """Recognized HTTP verbs."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, value: Union["HttpMethod", str]) -> Union["HttpMethod", str]:
        """Normalize a recognized verb, pass anything else through unchanged."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value:
            raise RequestModelError(f"Invalid HTTP method: {value!r}")
        try:
            return cls(value.upper())
        except ValueError:
            return value


Pair = Tuple[str, str]
Pairs = Tuple[Pair, ...]


def _check_str(owner: Any, name: str, optional: bool = False):
    value = getattr(owner, name)
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise RequestModelError(
            f"{type(owner).__name__}.{name} must be a string, got {type(value).__name__}"
        )


def _check_bytes(owner: Any, name: str, optional: bool = False):
    value = getattr(owner, name)
    if value is None and optional:
        return
    if isinstance(value, (bytearray, memoryview)):
        object.__setattr__(owner, name, bytes(value))
    elif not isinstance(value, bytes):
        raise RequestModelError(
            f"{type(owner).__name__}.{name} must be bytes, got {type(value).__name__}"
        )


# Auth variants


@dataclass(frozen=True)
class NoAuth:
    kind: ClassVar[str] = "none"


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = ""

    kind: ClassVar[str] = "basic"

    def __post_init__(self):
        _check_str(self, "username")
        _check_str(self, "password")


@dataclass(frozen=True)
class BearerAuth:
    token: str

    kind: ClassVar[str] = "bearer"

    def __post_init__(self):
        _check_str(self, "token")


@dataclass(frozen=True)
class DigestAuth:
    username: str
    password: str = ""

    kind: ClassVar[str] = "digest"

    def __post_init__(self):
        _check_str(self, "username")
        _check_str(self, "password")


@dataclass(frozen=True)
class OAuth2Auth:
    """OAuth2 credentials; only the access token reaches the snippet."""

    access_token: str = ""
    token_type: str = "Bearer"
    flow: str = "authorizationCode"
    scopes: Tuple[str, ...] = ()

    kind: ClassVar[str] = "oauth2"

    def __post_init__(self):
        _check_str(self, "access_token")
        _check_str(self, "token_type", optional=True)
        _check_str(self, "flow", optional=True)
        if isinstance(self.scopes, str):
            raise RequestModelError("OAuth2Auth.scopes must be a sequence of strings")
        scopes = tuple(self.scopes)
        if not all(isinstance(scope, str) for scope in scopes):
            raise RequestModelError(f"OAuth2Auth.scopes must be strings, got {scopes!r}")
        object.__setattr__(self, "scopes", scopes)


Auth = Union[NoAuth, BasicAuth, BearerAuth, DigestAuth, OAuth2Auth]
AUTH_VARIANTS = (NoAuth, BasicAuth, BearerAuth, DigestAuth, OAuth2Auth)


# Body variants


@dataclass(frozen=True)
class NoBody:
    kind: ClassVar[str] = "none"


@dataclass(frozen=True)
class TextBody:
    content: str
    mime_type: str = "text/plain"

    kind: ClassVar[str] = "text"

    def __post_init__(self):
        _check_str(self, "content")
        _check_str(self, "mime_type", optional=True)


@dataclass(frozen=True)
class JsonBody:
    value: Any

    kind: ClassVar[str] = "json"

    def __post_init__(self):
        try:
            json.dumps(self.value)
        except (TypeError, ValueError) as e:
            raise RequestModelError(f"JsonBody.value is not JSON-serializable: {e}") from e


@dataclass(frozen=True)
class FormUrlEncodedBody:
    fields: Pairs = ()

    kind: ClassVar[str] = "formUrlEncoded"

    def __post_init__(self):
        object.__setattr__(self, "fields", normalize_pairs(self.fields, "fields"))


@dataclass(frozen=True)
class FilePart:
    """A file part of a multipart body, referenced by filename."""

    name: str
    filename: str
    content_type: Optional[str] = None
    content: Optional[bytes] = None

    def __post_init__(self):
        _check_str(self, "name")
        _check_str(self, "filename")
        _check_str(self, "content_type", optional=True)
        _check_bytes(self, "content", optional=True)


@dataclass(frozen=True)
class MultipartBody:
    fields: Pairs = ()
    files: Tuple[FilePart, ...] = ()

    kind: ClassVar[str] = "multipart"

    def __post_init__(self):
        object.__setattr__(self, "fields", normalize_pairs(self.fields, "fields"))
        files = tuple(self.files or ())
        for part in files:
            if not isinstance(part, FilePart):
                raise RequestModelError(f"Multipart files must be FilePart, got {part!r}")
        object.__setattr__(self, "files", files)


@dataclass(frozen=True)
class GraphQLBody:
    query: str
    variables: Optional[Dict[str, Any]] = None
    operation_name: Optional[str] = None

    kind: ClassVar[str] = "graphql"

    def __post_init__(self):
        _check_str(self, "query")
        _check_str(self, "operation_name", optional=True)
        if self.variables is not None and not isinstance(self.variables, Mapping):
            raise RequestModelError(
                f"GraphQLBody.variables must be an object, got {type(self.variables).__name__}"
            )
        try:
            json.dumps(self.variables)
        except (TypeError, ValueError) as e:
            raise RequestModelError(f"GraphQLBody.variables is not JSON-serializable: {e}") from e

    def payload(self) -> Dict[str, Any]:
        """Return the JSON document sent over the wire."""
        data: Dict[str, Any] = {"query": self.query}
        if self.variables is not None:
            data["variables"] = self.variables
        if self.operation_name:
            data["operationName"] = self.operation_name
        return data


@dataclass(frozen=True)
class BinaryBody:
    content: bytes = b""
    mime_type: str = "application/octet-stream"
    filename: Optional[str] = None

    kind: ClassVar[str] = "binary"

    def __post_init__(self):
        _check_bytes(self, "content")
        _check_str(self, "mime_type", optional=True)
        _check_str(self, "filename", optional=True)


Body = Union[
    NoBody,
    TextBody,
    JsonBody,
    FormUrlEncodedBody,
    MultipartBody,
    GraphQLBody,
    BinaryBody,
]
BODY_VARIANTS = (
    NoBody,
    TextBody,
    JsonBody,
    FormUrlEncodedBody,
    MultipartBody,
    GraphQLBody,
    BinaryBody,
)


def normalize_pairs(
    value: Union[Iterable[Any], Mapping[str, Any], None], label: str = "pairs"
) -> Pairs:
    """
    Convert mappings, ``(name, value)`` sequences or ``{"name", "value"}``
    dicts into a tuple of string pairs, preserving order.
    """
    if value is None:
        return ()
    if isinstance(value, Mapping):
        items: Iterable[Any] = value.items()
    elif isinstance(value, (str, bytes)):
        raise RequestModelError(f"{label} must be a sequence of pairs, got a string")
    elif isinstance(value, Iterable):
        items = value
    else:
        raise RequestModelError(
            f"{label} must be a sequence of pairs, got {type(value).__name__}"
        )

    pairs = []
    for item in items:
        if isinstance(item, Mapping):
            if "name" not in item:
                raise RequestModelError(f"{label} entry is missing 'name': {item!r}")
            name, val = item["name"], item.get("value", "")
        else:
            try:
                name, val = item
            except (TypeError, ValueError):
                raise RequestModelError(
                    f"{label} entries must be (name, value) pairs, got {item!r}"
                )
        pairs.append((str(name), "" if val is None else str(val)))
    return tuple(pairs)


@dataclass(frozen=True)
class CanonicalRequest:
    """Normalized description of one HTTP request."""

    method: Union[HttpMethod, str]
    url: str
    headers: Pairs = ()
    query_params: Pairs = ()
    cookies: Pairs = ()
    auth: Auth = field(default_factory=NoAuth)
    body: Body = field(default_factory=NoBody)

    def __post_init__(self):
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        if not isinstance(self.url, str):
            raise RequestModelError(f"url must be a string, got {type(self.url).__name__}")

        object.__setattr__(self, "headers", normalize_pairs(self.headers, "headers"))
        object.__setattr__(
            self, "query_params", normalize_pairs(self.query_params, "query_params")
        )
        object.__setattr__(self, "cookies", normalize_pairs(self.cookies, "cookies"))

        if self.auth is None:
            object.__setattr__(self, "auth", NoAuth())
        if self.body is None:
            object.__setattr__(self, "body", NoBody())

        if not isinstance(self.auth, AUTH_VARIANTS):
            raise RequestModelError(f"Unsupported auth variant: {self.auth!r}")
        if not isinstance(self.body, BODY_VARIANTS):
            raise RequestModelError(f"Unsupported body variant: {self.body!r}")

    @property
    def method_name(self) -> str:
        """The verb as text, e.g. ``"GET"`` or a custom ``"PURGE"``."""
        if isinstance(self.method, HttpMethod):
            return self.method.value
        return self.method

    @property
    def is_standard_method(self) -> bool:
        return isinstance(self.method, HttpMethod)

    def replace(self, **changes: Any) -> "CanonicalRequest":
        """Return a copy with the given fields replaced."""
        return dataclass_replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CanonicalRequest":
        """
        Build a request from a JSON-compatible mapping.

        Args:
            data: Mapping with ``method``, ``url`` and optional ``headers``,
                ``queryParams``, ``cookies``, ``auth`` and ``body`` keys.

        Returns:
            CanonicalRequest instance

        Raises:
            RequestModelError: If the mapping is structurally invalid
        """
        if not isinstance(data, Mapping):
            raise RequestModelError("Request description must be an object")
        if "url" not in data:
            raise RequestModelError("Request description is missing 'url'")

        query = data.get("queryParams", data.get("query_params"))
        return cls(
            method=data.get("method", "GET"),
            url=data["url"],
            headers=normalize_pairs(data.get("headers"), "headers"),
            query_params=normalize_pairs(query, "queryParams"),
            cookies=normalize_pairs(data.get("cookies"), "cookies"),
            auth=auth_from_dict(data.get("auth")),
            body=body_from_dict(data.get("body")),
        )


def auth_from_dict(data: Optional[Mapping[str, Any]]) -> Auth:
    """Build an auth variant from ``{"type": ..., ...}``."""
    if not data:
        return NoAuth()
    if not isinstance(data, Mapping):
        raise RequestModelError(f"auth must be an object, got {type(data).__name__}")
    kind = data.get("type", "none")

    if kind == "none":
        return NoAuth()
    if kind == "basic":
        return BasicAuth(
            data.get("username", data.get("user", "")),
            data.get("password", data.get("pass", "")),
        )
    if kind == "bearer":
        return BearerAuth(data.get("token", ""))
    if kind == "digest":
        return DigestAuth(
            data.get("username", data.get("user", "")),
            data.get("password", data.get("pass", "")),
        )
    if kind == "oauth2":
        return OAuth2Auth(
            access_token=data.get("accessToken", data.get("access_token", "")),
            token_type=data.get("tokenType", data.get("token_type", "Bearer")),
            flow=data.get("flow", "authorizationCode"),
            scopes=data.get("scopes") or (),
        )
    raise RequestModelError(f"Unknown auth type: {kind!r}")


def body_from_dict(data: Optional[Mapping[str, Any]]) -> Body:
    """Build a body variant from ``{"type": ..., ...}``."""
    if not data:
        return NoBody()
    if not isinstance(data, Mapping):
        raise RequestModelError(f"body must be an object, got {type(data).__name__}")
    kind = data.get("type", "none")

    if kind == "none":
        return NoBody()
    if kind == "text":
        return TextBody(data.get("content", ""), data.get("mimeType", "text/plain"))
    if kind == "json":
        return JsonBody(data.get("value"))
    if kind == "formUrlEncoded":
        return FormUrlEncodedBody(normalize_pairs(data.get("fields"), "fields"))
    if kind == "multipart":
        entries = data.get("files") or ()
        if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
            raise RequestModelError("multipart files must be a list of objects")
        return MultipartBody(
            normalize_pairs(data.get("fields"), "fields"),
            tuple(_file_part_from_dict(entry) for entry in entries),
        )
    if kind == "graphql":
        return GraphQLBody(
            data.get("query", ""),
            data.get("variables"),
            data.get("operationName"),
        )
    if kind == "binary":
        content = data.get("content") or b""
        if isinstance(content, str):
            content = content.encode("utf-8")
        return BinaryBody(
            content,
            data.get("mimeType", "application/octet-stream"),
            data.get("filename"),
        )
    raise RequestModelError(f"Unknown body type: {kind!r}")


def _file_part_from_dict(data: Any) -> FilePart:
    if not isinstance(data, Mapping):
        raise RequestModelError(f"multipart file entry must be an object, got {data!r}")
    if "name" not in data:
        raise RequestModelError(f"multipart file entry is missing 'name': {data!r}")
    return FilePart(
        name=data["name"],
        filename=data.get("filename", data.get("fileName", data["name"])),
        content_type=data.get("contentType"),
    )
