"""
jQuery ``$.ajax`` converter (HAR input).
"""

from typing import Any, Dict

from ..core.builder import CodeBuilder
from ..core.escaping import JAVASCRIPT, js_literal
from .har import header_dict, normalize


def convert(har: Dict[str, Any], options: Dict[str, Any] = None) -> str:
    options = options or {}
    indent = options.get("indent", "  ")
    req = normalize(har)
    post = req["postData"]
    mime = post.get("mimeType", "")
    code = CodeBuilder(indent)

    settings = [
        ("async", "true"),
        ("crossDomain", "true"),
        ("url", JAVASCRIPT.literal(req["fullUrl"])),
        ("method", JAVASCRIPT.literal(req["method"])),
    ]

    headers = header_dict(req["allHeaders"])
    if headers:
        settings.append(("headers", js_literal(headers, indent, 1)))

    if mime.startswith("multipart/form-data"):
        if any(p.get("fileName") for p in post.get("params", [])):
            code.push('const fileInput = document.querySelector("input[type=file]");')
        code.push("const form = new FormData();")
        for param in post.get("params", []):
            if param.get("fileName"):
                code.push(
                    f"form.append({JAVASCRIPT.literal(param['name'])}, "
                    f"fileInput.files[0], {JAVASCRIPT.literal(param['fileName'])});"
                )
            else:
                code.push(
                    f"form.append({JAVASCRIPT.literal(param['name'])}, "
                    f"{JAVASCRIPT.literal(param.get('value', ''))});"
                )
        code.blank()
        settings.extend(
            [
                ("processData", "false"),
                ("contentType", "false"),
                ("mimeType", JAVASCRIPT.literal("multipart/form-data")),
                ("data", "form"),
            ]
        )
    elif mime == "application/x-www-form-urlencoded" and post.get("paramsObj"):
        settings.append(("data", js_literal(post["paramsObj"], indent, 1)))
    elif post.get("text") is not None and post.get("text") != "":
        settings.append(("processData", "false"))
        if "jsonObj" in post:
            data = f"JSON.stringify({js_literal(post['jsonObj'], indent, 1)})"
        else:
            data = JAVASCRIPT.literal(post["text"])
        settings.append(("data", data))

    code.push("const settings = {")
    for i, (key, value) in enumerate(settings):
        comma = "," if i < len(settings) - 1 else ""
        code.push(f"{key}: {value}{comma}", 1)
    code.push("};")
    code.blank()
    code.push("$.ajax(settings).done(function (response) {")
    code.push("console.log(response);", 1)
    code.push("});")

    return code.join()
