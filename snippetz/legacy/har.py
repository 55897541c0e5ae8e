"""
HAR request normalization for the legacy converters.

The converters in this package predate the canonical request model and
consume HTTP Archive (HAR) request objects. :func:`normalize` enriches a
HAR request with the derived lookup fields they expect.
"""

import copy
import json
from typing import Any, Dict, List
from urllib.parse import quote, urlencode


def _pairs(entries: List[Dict[str, Any]]) -> List[tuple]:
    return [(e.get("name", ""), e.get("value", "")) for e in entries or []]


def _reduce_pairs(pairs) -> Dict[str, Any]:
    """Map names to values, turning repeated names into lists."""
    result: Dict[str, Any] = {}
    for name, value in pairs:
        if name in result:
            existing = result[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[name] = [existing, value]
        else:
            result[name] = value
    return result


def normalize(har: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a normalized copy of a HAR request.

    Adds ``fullUrl``, ``queryObj``, ``headersObj``, ``cookiesObj``,
    ``allHeaders`` and, for parseable bodies, ``postData.jsonObj`` /
    ``postData.paramsObj``.

    Args:
        har: HAR request object

    Returns:
        New dict; the input is not modified
    """
    req = copy.deepcopy(har)
    req.setdefault("method", "GET")
    req.setdefault("httpVersion", "HTTP/1.1")
    req.setdefault("headers", [])
    req.setdefault("queryString", [])
    req.setdefault("cookies", [])
    req.setdefault("postData", {})

    query = _pairs(req["queryString"])
    req["queryObj"] = _reduce_pairs(query)
    req["fullUrl"] = req["url"]
    if query:
        separator = "&" if "?" in req["url"] else "?"
        req["fullUrl"] = req["url"] + separator + urlencode(query, quote_via=quote, safe="")

    req["headersObj"] = _reduce_pairs(_pairs(req["headers"]))
    req["cookiesObj"] = _reduce_pairs(_pairs(req["cookies"]))

    all_headers = dict(req["headersObj"])
    lowered = {name.lower() for name in all_headers}
    if req["cookies"] and "cookie" not in lowered:
        all_headers["cookie"] = "; ".join(
            f"{name}={value}" for name, value in _pairs(req["cookies"])
        )

    post = req["postData"]
    mime = post.get("mimeType", "")
    if mime and "content-type" not in lowered and not mime.startswith("multipart/"):
        all_headers["content-type"] = mime
    req["allHeaders"] = all_headers

    if post.get("params"):
        post["paramsObj"] = _reduce_pairs(_pairs(post["params"]))
    if "json" in mime and post.get("text"):
        try:
            post["jsonObj"] = json.loads(post["text"])
        except ValueError:
            pass

    return req


def header_items(all_headers: Dict[str, Any], exclude=()) -> List[tuple]:
    """Flatten ``allHeaders`` to pairs, skipping excluded (lowercase) names."""
    items = []
    for name, value in all_headers.items():
        if name.lower() in exclude:
            continue
        if isinstance(value, list):
            items.extend((name, v) for v in value)
        else:
            items.append((name, value))
    return items


def header_dict(all_headers: Dict[str, Any], exclude=()) -> Dict[str, str]:
    """``allHeaders`` with repeated values joined by ``", "``."""
    return {
        name: ", ".join(value) if isinstance(value, list) else value
        for name, value in all_headers.items()
        if name.lower() not in exclude
    }
