"""
Render-ready view of a canonical request.

Plugins never work on the raw request directly: :func:`prepare` merges the
query string, derives auth, cookie and content-type headers, serializes
the body and applies credential redaction, so every plugin sees the same
normalized facts.
"""

import base64
from dataclasses import dataclass
from typing import Any, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from .config import GenerationOptions
from .request import (
    Auth,
    BasicAuth,
    BearerAuth,
    BinaryBody,
    Body,
    CanonicalRequest,
    DigestAuth,
    FormUrlEncodedBody,
    GraphQLBody,
    JsonBody,
    MultipartBody,
    NoAuth,
    OAuth2Auth,
    Pair,
    Pairs,
    TextBody,
)
from .escaping import json_text

REDACTED = "REDACTED"
OAUTH2_PLACEHOLDER = "YOUR_ACCESS_TOKEN"

SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "x-api-key",
    "api-key",
    "x-auth-token",
    "x-access-token",
}
SENSITIVE_QUERY_PARAMS = {"api_key", "apikey", "access_token", "token", "auth"}
AUTH_SCHEMES = {"basic", "bearer", "digest", "token", "negotiate"}


def redact_value(value: str) -> str:
    """Redact a credential, keeping a leading auth scheme if present."""
    scheme, sep, _ = value.partition(" ")
    if sep and scheme.lower() in AUTH_SCHEMES:
        return f"{scheme} {REDACTED}"
    return REDACTED


def _redact_userinfo(url: str) -> str:
    parts = urlsplit(url)
    if parts.password is None:
        return url
    userinfo, _, host = parts.netloc.rpartition("@")
    username = userinfo.partition(":")[0]
    return urlunsplit(parts._replace(netloc=f"{username}:{REDACTED}@{host}"))


def _redact_pairs(pairs: Pairs, names) -> Pairs:
    return tuple(
        (name, redact_value(value) if name.lower() in names else value)
        for name, value in pairs
    )


def _redact_auth(auth: Auth) -> Auth:
    if isinstance(auth, BasicAuth):
        return BasicAuth(auth.username, REDACTED)
    if isinstance(auth, DigestAuth):
        return DigestAuth(auth.username, REDACTED)
    if isinstance(auth, BearerAuth):
        return BearerAuth(REDACTED)
    if isinstance(auth, OAuth2Auth):
        return OAuth2Auth(REDACTED, auth.token_type, auth.flow, auth.scopes)
    return auth


def encode_query(pairs: Pairs) -> str:
    """Percent-encode query pairs (``%20`` for spaces)."""
    return urlencode(pairs, quote_via=quote, safe="")


def encode_form(pairs: Pairs) -> str:
    """Encode form fields as ``application/x-www-form-urlencoded``."""
    return urlencode(pairs)


@dataclass(frozen=True)
class PreparedRequest:
    """Normalized facts about a request, shared by all plugins."""

    request: CanonicalRequest
    method: str
    url: str
    base_url: str
    url_query: str
    query: Pairs
    extra_query: Pairs
    headers: Pairs
    cookies: Pairs
    auth: Auth
    body: Body
    derived_content_type: Optional[str]
    redacted: bool

    # URL views

    @property
    def full_url(self) -> str:
        """The URL including all query parameters."""
        parts = [p for p in (self.url_query, encode_query(self.extra_query)) if p]
        if not parts:
            return self.base_url
        return f"{self.base_url}?{'&'.join(parts)}"

    @property
    def host(self) -> str:
        return urlsplit(self.base_url).netloc

    @property
    def scheme(self) -> str:
        return urlsplit(self.base_url).scheme or "https"

    @property
    def path_and_query(self) -> str:
        """Request target for the request line, e.g. ``/items?page=2``."""
        split = urlsplit(self.full_url)
        if not split.netloc:
            return self.full_url
        path = split.path or "/"
        return f"{path}?{split.query}" if split.query else path

    # Header views

    def find_header(self, name: str) -> Optional[str]:
        """First value of a header, case-insensitive, including derived ones."""
        lowered = name.lower()
        for key, value in self.all_headers():
            if key.lower() == lowered:
                return value
        return None

    def has_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(key.lower() == lowered for key, _ in self.headers)

    @property
    def content_type(self) -> Optional[str]:
        """Effective content type (explicit header first)."""
        lowered = "content-type"
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return self.derived_content_type

    def auth_header(self) -> Optional[Pair]:
        """``Authorization`` header for header-expressible auth variants."""
        auth = self.auth
        if isinstance(auth, BasicAuth):
            token = f"{auth.username}:{auth.password}"
            if self.redacted:
                return ("Authorization", f"Basic {REDACTED}")
            encoded = base64.b64encode(token.encode("utf-8")).decode("ascii")
            return ("Authorization", f"Basic {encoded}")
        if isinstance(auth, BearerAuth):
            return ("Authorization", f"Bearer {auth.token}")
        if isinstance(auth, OAuth2Auth):
            token = auth.access_token or OAUTH2_PLACEHOLDER
            return ("Authorization", f"{auth.token_type or 'Bearer'} {token}")
        return None

    def cookie_header(self) -> Optional[Pair]:
        if not self.cookies:
            return None
        return ("Cookie", "; ".join(f"{name}={value}" for name, value in self.cookies))

    def all_headers(
        self,
        include_auth: bool = True,
        include_cookies: bool = True,
        include_content_type: bool = True,
    ) -> Pairs:
        """
        Explicit headers plus derived ones, in a stable order.

        Args:
            include_auth: Add the auth header (skip when auth is rendered natively)
            include_cookies: Add the Cookie header built from cookies
            include_content_type: Add the derived Content-Type header

        Returns:
            Tuple of (name, value) pairs
        """
        headers = list(self.headers)
        if include_auth and not self.has_header("authorization"):
            auth = self.auth_header()
            if auth:
                headers.append(auth)
        if include_cookies:
            cookie = self.cookie_header()
            if cookie:
                headers.append(cookie)
        if (
            include_content_type
            and self.derived_content_type
            and not self.has_header("content-type")
        ):
            headers.append(("Content-Type", self.derived_content_type))
        return tuple(headers)

    @staticmethod
    def merge_duplicates(headers: Pairs) -> Tuple[Pairs, bool]:
        """
        Collapse repeated header names for mapping-based client APIs.

        Returns:
            The merged pairs and whether anything was merged
        """
        merged: dict = {}
        names: dict = {}
        changed = False
        for name, value in headers:
            key = name.lower()
            if key in merged:
                merged[key] = f"{merged[key]}, {value}"
                changed = True
            else:
                merged[key] = value
                names[key] = name
        return tuple((names[k], v) for k, v in merged.items()), changed

    # Body views

    @property
    def has_body(self) -> bool:
        return self.body.kind != "none"

    @property
    def json_value(self) -> Any:
        """Body as a JSON value for JSON and GraphQL bodies, else None."""
        if isinstance(self.body, JsonBody):
            return self.body.value
        if isinstance(self.body, GraphQLBody):
            return self.body.payload()
        return None

    @property
    def is_json(self) -> bool:
        return isinstance(self.body, (JsonBody, GraphQLBody))

    def body_text(self) -> Optional[str]:
        """The body as text, or None when it has no textual form."""
        body = self.body
        if isinstance(body, TextBody):
            return body.content
        if isinstance(body, (JsonBody, GraphQLBody)):
            return json_text(self.json_value)
        if isinstance(body, FormUrlEncodedBody):
            return encode_form(body.fields)
        if isinstance(body, BinaryBody):
            return self.binary_text()
        return None

    def binary_text(self) -> Optional[str]:
        if not isinstance(self.body, BinaryBody):
            return None
        return decode_text(self.body.content)

    @property
    def binary_filename(self) -> Optional[str]:
        if isinstance(self.body, BinaryBody):
            return self.body.filename
        return None

    @property
    def multipart(self) -> Optional[MultipartBody]:
        return self.body if isinstance(self.body, MultipartBody) else None

    @property
    def form_fields(self) -> Pairs:
        if isinstance(self.body, FormUrlEncodedBody):
            return self.body.fields
        return ()

    @property
    def has_digest(self) -> bool:
        return isinstance(self.auth, DigestAuth)

    @property
    def has_auth(self) -> bool:
        return not isinstance(self.auth, NoAuth)


def decode_text(data: bytes) -> Optional[str]:
    """Decode UTF-8 bytes, or return None when they are not valid UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def derive_content_type(body: Body) -> Optional[str]:
    """Content type implied by a body variant; multipart lets the client decide."""
    if isinstance(body, (JsonBody, GraphQLBody)):
        return "application/json"
    if isinstance(body, FormUrlEncodedBody):
        return "application/x-www-form-urlencoded"
    if isinstance(body, TextBody):
        return body.mime_type or "text/plain"
    if isinstance(body, BinaryBody):
        return body.mime_type or "application/octet-stream"
    return None


def prepare(
    request: CanonicalRequest, options: Optional[GenerationOptions] = None
) -> PreparedRequest:
    """
    Build the render-ready view of a request.

    Args:
        request: Canonical request (never modified)
        options: Generation options; only ``redact_credentials`` is read here

    Returns:
        PreparedRequest
    """
    redact = bool(options and options.redact_credentials)

    url = request.url.split("#", 1)[0]
    if redact:
        url = _redact_userinfo(url)
    base_url, _, url_query = url.partition("?")
    extra_query = request.query_params
    headers = request.headers
    cookies = request.cookies
    auth = request.auth

    if redact:
        extra_query = _redact_pairs(extra_query, SENSITIVE_QUERY_PARAMS)
        headers = _redact_pairs(headers, SENSITIVE_HEADERS)
        cookies = tuple((name, REDACTED) for name, _ in cookies)
        auth = _redact_auth(auth)
        if url_query:
            own = tuple(parse_qsl(url_query, keep_blank_values=True))
            redacted_own = _redact_pairs(own, SENSITIVE_QUERY_PARAMS)
            if redacted_own != own:
                url_query = encode_query(redacted_own)

    query = tuple(parse_qsl(url_query, keep_blank_values=True)) + extra_query

    return PreparedRequest(
        request=request,
        method=request.method_name,
        url=url,
        base_url=base_url,
        url_query=url_query,
        query=query,
        extra_query=extra_query,
        headers=headers,
        cookies=cookies,
        auth=auth,
        body=request.body,
        derived_content_type=derive_content_type(request.body),
        redacted=redact,
    )
