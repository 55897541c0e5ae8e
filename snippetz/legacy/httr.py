"""
R httr converter (HAR input).
"""

from typing import Any, Dict

from ..core.builder import CodeBuilder
from ..core.escaping import R
from .har import header_items, normalize


def _named_list(pairs, indent: str) -> str:
    if not pairs:
        return "list()"
    items = [f"{indent}{R.literal(name)} = {value}" for name, value in pairs]
    return "list(\n" + ",\n".join(items) + "\n)"


def convert(har: Dict[str, Any], options: Dict[str, Any] = None) -> str:
    options = options or {}
    indent = options.get("indent", "  ")
    req = normalize(har)
    post = req["postData"]
    mime = post.get("mimeType", "")
    code = CodeBuilder(indent)

    code.push("library(httr)")
    code.blank()
    code.push(f"url <- {R.literal(req['url'])}")

    args = [R.literal(req["method"]), "url"]

    query = [(q["name"], R.literal(q.get("value", ""))) for q in req["queryString"]]
    if query:
        code.blank()
        code.push(f"queryString <- {_named_list(query, indent)}")
        args.append("query = queryString")

    encode = None
    if mime.startswith("multipart/") and post.get("params"):
        parts = []
        for param in post["params"]:
            if param.get("fileName"):
                parts.append((param["name"], f"upload_file({R.literal(param['fileName'])})"))
            else:
                parts.append((param["name"], R.literal(param.get("value", ""))))
        code.blank()
        code.push(f"payload <- {_named_list(parts, indent)}")
        encode = "multipart"
    elif mime == "application/x-www-form-urlencoded" and post.get("params"):
        fields = [(p["name"], R.literal(p.get("value", ""))) for p in post["params"]]
        code.blank()
        code.push(f"payload <- {_named_list(fields, indent)}")
        encode = "form"
    elif post.get("text"):
        code.blank()
        code.push(f"payload <- {R.literal(post['text'])}")
        encode = "json" if "json" in mime else "raw"

    if encode:
        code.blank()
        code.push(f"encode <- {R.literal(encode)}")
        args.extend(["body = payload", "encode = encode"])

    headers = [
        (name, value)
        for name, value in header_items(req["allHeaders"], exclude=("cookie",))
        if name.lower() != "content-type"
    ]
    if headers:
        pairs = ", ".join(f"{R.literal(n)} = {R.literal(v)}" for n, v in headers)
        args.append(f"add_headers({pairs})")

    if req["cookies"]:
        pairs = ", ".join(
            f"{R.literal(c['name'])} = {R.literal(c.get('value', ''))}"
            for c in req["cookies"]
        )
        args.append(f"set_cookies({pairs})")

    content_type = req["allHeaders"].get("content-type") or next(
        (v for n, v in req["headersObj"].items() if n.lower() == "content-type"), None
    )
    if content_type and not mime.startswith("multipart/"):
        if isinstance(content_type, list):
            content_type = content_type[0]
        args.append(f"content_type({R.literal(content_type)})")

    code.blank()
    code.push(f"response <- VERB({', '.join(args)})")
    code.blank()
    code.push('content(response, "text")')

    return code.join()
