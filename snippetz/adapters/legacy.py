"""
Adapter from the canonical request model to the legacy HAR converters.

A plugin without a native implementation subclasses :class:`AdaptedPlugin`
and names the legacy converter it delegates to. The adapter function is a
class attribute too, so each plugin can swap either one independently.
"""

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, TypedDict

from ..core.config import GenerationOptions
from ..core.plugin import RenderNotes, SnippetPlugin
from ..core.prepare import PreparedRequest, prepare
from ..core.request import (
    BinaryBody,
    CanonicalRequest,
    DigestAuth,
    FormUrlEncodedBody,
    MultipartBody,
    TextBody,
)
from ..logging_config import get_logger

logger = get_logger(__name__)


class LegacyPair(TypedDict):
    name: str
    value: str


class LegacyParam(TypedDict, total=False):
    name: str
    value: str
    fileName: str
    contentType: str


class LegacyPostData(TypedDict, total=False):
    mimeType: str
    text: str
    params: List[LegacyParam]


class LegacyRequest(TypedDict):
    """HAR request object, the input shape of the legacy converters."""

    method: str
    url: str
    httpVersion: str
    headers: List[LegacyPair]
    queryString: List[LegacyPair]
    cookies: List[LegacyPair]
    postData: LegacyPostData


LegacyConverter = Callable[[Dict[str, Any], Dict[str, Any]], str]


@dataclass(frozen=True)
class AdaptedRequest:
    """A legacy request plus notes on anything that could not be mapped."""

    har: LegacyRequest
    notes: Tuple[str, ...] = ()


def _pairs(pairs) -> List[LegacyPair]:
    return [{"name": name, "value": value} for name, value in pairs]


def _post_data(prepared: PreparedRequest, notes: List[str]) -> LegacyPostData:
    body = prepared.body
    mime = prepared.content_type or ""

    if isinstance(body, MultipartBody):
        params: List[LegacyParam] = [
            {"name": name, "value": value} for name, value in body.fields
        ]
        for part in body.files:
            param: LegacyParam = {"name": part.name, "fileName": part.filename}
            if part.content_type:
                param["contentType"] = part.content_type
            if part.content is not None:
                notes.append(
                    f"Inline content of file part '{part.name}' is not supported; "
                    f"reading '{part.filename}' from disk instead"
                )
            params.append(param)
        return {"mimeType": "multipart/form-data", "params": params}

    if isinstance(body, FormUrlEncodedBody):
        return {
            "mimeType": mime,
            "params": [{"name": n, "value": v} for n, v in body.fields],
            "text": prepared.body_text() or "",
        }

    if isinstance(body, BinaryBody):
        if body.filename:
            notes.append(
                f"Reading the body from '{body.filename}' is not supported and was omitted"
            )
            return {}
        text = prepared.binary_text()
        if text is None:
            notes.append("Binary body is not supported and was omitted")
            return {}
        return {"mimeType": mime, "text": text}

    if isinstance(body, TextBody) or prepared.is_json:
        return {"mimeType": mime, "text": prepared.body_text() or ""}

    return {}


def adapt(
    request: CanonicalRequest, options: Optional[GenerationOptions] = None
) -> AdaptedRequest:
    """
    Map a canonical request onto the legacy HAR request shape.

    Args:
        request: Canonical request (never modified)
        options: Generation options (redaction is applied before mapping)

    Returns:
        AdaptedRequest with the HAR object and degradation notes
    """
    prepared = prepare(request, options)
    notes: List[str] = []

    if isinstance(prepared.auth, DigestAuth):
        notes.append("Digest authentication is not supported and was omitted")

    headers = prepared.all_headers(include_cookies=False, include_content_type=False)

    har: LegacyRequest = {
        "method": prepared.method,
        "url": prepared.base_url,
        "httpVersion": "HTTP/1.1",
        "headers": _pairs(headers),
        "queryString": _pairs(prepared.query),
        "cookies": _pairs(prepared.cookies),
        "postData": _post_data(prepared, notes),
    }
    return AdaptedRequest(har, tuple(notes))


class AdaptedPlugin(SnippetPlugin):
    """Plugin implemented by delegating to a legacy HAR converter."""

    converter: ClassVar[Optional[LegacyConverter]] = None
    adapter: ClassVar[Callable[..., AdaptedRequest]] = staticmethod(adapt)

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        if self.converter is None:
            raise NotImplementedError(f"{type(self).__name__} has no legacy converter")

        adapted = self.adapter(prepared.request, options)
        notes.extend(adapted.notes)
        return self.converter(adapted.har, self.legacy_options(options))

    def legacy_options(self, options: GenerationOptions) -> Dict[str, Any]:
        """Translate generation options into the converters' option dict."""
        return {"indent": self.indent(options)}

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["adapted"] = True
        return info
