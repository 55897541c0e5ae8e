"""Loaders for request descriptions.

A request description is a JSON object accepted by
:meth:`CanonicalRequest.from_dict`. The CLI reads one from a file, a URL
or standard input; each loader returns a display label for the source
together with the parsed request.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .core.request import CanonicalRequest, RequestModelError
from .logging_config import get_logger

logger = get_logger(__name__)

JSON_CONTENT_TYPES = ("application/json", "+json")


class RequestLoaderError(Exception):
    """A request description could not be read or parsed."""

    pass


def _build_request(source: str, data: Any) -> CanonicalRequest:
    try:
        request = CanonicalRequest.from_dict(data)
    except RequestModelError as e:
        logger.error(f"Invalid request description in {source}: {e}")
        raise RequestLoaderError(f"Invalid request description in {source}: {e}") from e
    logger.info(f"Loaded {request.method_name} {request.url} from {source}")
    return request


def load_request_from_file(file_path: str | Path) -> tuple[str, CanonicalRequest]:
    """Load a request description from a local file.

    Args:
        file_path: Path to the description.

    Returns:
        Tuple of (source label, request).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        RequestLoaderError: If the file is unreadable or not a valid description.
    """
    path = Path(file_path)
    logger.debug(f"Reading request description from {path}")

    if not path.is_file():
        logger.error(f"Request description not found: {path}")
        raise FileNotFoundError(f"Request description not found: {path}")

    if path.suffix.lower() != ".json":
        logger.warning(f"Reading {path} as JSON despite its '{path.suffix}' suffix")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise RequestLoaderError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}", exc_info=True)
        raise RequestLoaderError(f"Cannot read {path}: {e}") from e

    return f"📄 {path}", _build_request(str(path), data)


def load_request_from_url(url: str, timeout: int = 30) -> tuple[str, CanonicalRequest]:
    """Fetch a request description over HTTP.

    Args:
        url: Location of the description.
        timeout: Seconds to wait for the server.

    Returns:
        Tuple of (source label, request).

    Raises:
        RequestLoaderError: If the URL is malformed, the fetch fails or
            the body is not a valid description.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        logger.error(f"Refusing to fetch request description from {url!r}")
        raise RequestLoaderError(f"Invalid URL: {url}")

    logger.debug(f"Fetching request description from {url} (timeout {timeout}s)")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Timed out fetching {url}")
        raise RequestLoaderError(f"Request timeout after {timeout}s: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Cannot connect to {url}: {e}")
        raise RequestLoaderError(f"Connection error for {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error(f"{url} answered with HTTP {status}")
        raise RequestLoaderError(f"HTTP error {status} for {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Fetching {url} failed: {e}", exc_info=True)
        raise RequestLoaderError(f"Fetching {url} failed: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    if not any(marker in content_type for marker in JSON_CONTENT_TYPES):
        logger.warning(f"{url} is served as {content_type or 'unknown'}, parsing as JSON anyway")

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"Body of {url} is not JSON: {e}")
        raise RequestLoaderError(f"Invalid JSON from {url}: {e}") from e

    return f"🌐 {url}", _build_request(url, data)


def load_request_from_stdin(stream: TextIO | None = None) -> tuple[str, CanonicalRequest]:
    """Read a request description from standard input (or ``stream``)."""
    stream = stream or sys.stdin
    logger.debug("Reading request description from stdin")

    try:
        data = json.loads(stream.read())
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON on stdin: {e}")
        raise RequestLoaderError(f"Invalid JSON on stdin: {e}") from e

    return "📥 stdin", _build_request("stdin", data)


def load_request(
    file_path: str | Path | None = None,
    url: str | None = None,
    stdin: bool = False,
    timeout: int = 30,
) -> tuple[str, CanonicalRequest]:
    """Load a request description from exactly one source.

    Args:
        file_path: Local description file.
        url: URL serving the description.
        stdin: Read the description from standard input.
        timeout: Seconds to wait when fetching ``url``.

    Returns:
        Tuple of (source label, request).

    Raises:
        RequestLoaderError: If zero or several sources are given, or loading fails.
        FileNotFoundError: If ``file_path`` doesn't exist.
    """
    sources = [name for name, given in (("file", file_path), ("url", url), ("stdin", stdin)) if given]
    if len(sources) != 1:
        detail = ", ".join(sources) or "none"
        logger.error(f"Expected one request source, got: {detail}")
        raise RequestLoaderError(f"Exactly one of file, url or stdin is required (got {detail})")

    if file_path:
        return load_request_from_file(file_path)
    if url:
        return load_request_from_url(url, timeout)
    return load_request_from_stdin()
