"""
Clojure clj-http converter (HAR input).
"""

from typing import Any, Dict, List

from ..core.escaping import CLOJURE
from .har import header_dict, normalize

SHORTHAND_METHODS = {"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"}


def _string_map(values: Dict[str, Any]) -> str:
    entries = []
    for name, value in values.items():
        if isinstance(value, list):
            rendered = "[" + " ".join(CLOJURE.literal(v) for v in value) + "]"
        else:
            rendered = CLOJURE.literal(value)
        entries.append(f"{CLOJURE.literal(name)} {rendered}")
    return "{" + "\n ".join(entries) + "}"


def _align(key: str, value: str, pad: str) -> str:
    """Indent continuation lines of a map value under its key."""
    return value.replace("\n", "\n" + pad + " " * (len(key) + 1))


def convert(har: Dict[str, Any], options: Dict[str, Any] = None) -> str:
    req = normalize(har)
    post = req["postData"]
    mime = post.get("mimeType", "")
    method = req["method"].upper()

    params: List[tuple] = []

    headers = header_dict(req["allHeaders"], exclude=("cookie", "content-type"))
    if headers:
        params.append((":headers", _string_map(headers)))

    if req["queryObj"]:
        params.append((":query-params", _string_map(req["queryObj"])))

    if req["cookies"]:
        cookies = " ".join(
            f"{CLOJURE.literal(c['name'])} {{:value {CLOJURE.literal(c.get('value', ''))}}}"
            for c in req["cookies"]
        )
        params.append((":cookies", "{" + cookies + "}"))

    if mime.startswith("multipart/") and post.get("params"):
        parts = []
        for param in post["params"]:
            name = CLOJURE.literal(param["name"])
            if param.get("fileName"):
                content = f"(clojure.java.io/file {CLOJURE.literal(param['fileName'])})"
            else:
                content = CLOJURE.literal(param.get("value", ""))
            parts.append(f"{{:name {name} :content {content}}}")
        params.append((":multipart", "[" + "\n ".join(parts) + "]"))
    elif mime == "application/x-www-form-urlencoded" and post.get("paramsObj"):
        params.append((":form-params", _string_map(post["paramsObj"])))
    elif post.get("text"):
        content_type = ":json" if "json" in mime else CLOJURE.literal(mime or "text/plain")
        params.append((":content-type", content_type))
        params.append((":body", CLOJURE.literal(post["text"])))

    url = CLOJURE.literal(req["url"])
    if method in SHORTHAND_METHODS:
        head = f"(client/{method.lower()} {url}"
    else:
        head = f"(client/request {{:method :{method.lower()} :url {url}}}"
        # request takes a single map; merge the options into it
        if params:
            head = f"(client/request (merge {{:method :{method.lower()} :url {url}}}"

    lines = ["(require '[clj-http.client :as client])", ""]
    if not params:
        lines.append(head + ")")
        return "\n".join(lines)

    pad = " " * (len(head) + 2)
    body_lines = []
    for i, (key, value) in enumerate(params):
        entry = f"{key} {_align(key, value, pad)}"
        body_lines.append(entry if i == 0 else pad + entry)

    closing = "}))" if method not in SHORTHAND_METHODS else "})"
    lines.append(f"{head} {{" + "\n".join(body_lines) + closing)
    return "\n".join(lines)
