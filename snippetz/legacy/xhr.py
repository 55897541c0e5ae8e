"""
Browser ``XMLHttpRequest`` converter (HAR input).
"""

from typing import Any, Dict

from ..core.builder import CodeBuilder
from ..core.escaping import JAVASCRIPT, js_literal
from .har import header_items, normalize


def convert(har: Dict[str, Any], options: Dict[str, Any] = None) -> str:
    options = options or {}
    indent = options.get("indent", "  ")
    req = normalize(har)
    post = req["postData"]
    mime = post.get("mimeType", "")
    code = CodeBuilder(indent)
    exclude = ()

    if mime.startswith("multipart/form-data"):
        params = post.get("params", [])
        if any(p.get("fileName") for p in params):
            code.push('const fileInput = document.querySelector("input[type=file]");')
        code.push("const data = new FormData();")
        for param in params:
            name = JAVASCRIPT.literal(param["name"])
            if param.get("fileName"):
                filename = JAVASCRIPT.literal(param["fileName"])
                code.push(f"data.append({name}, fileInput.files[0], {filename});")
            else:
                code.push(f"data.append({name}, {JAVASCRIPT.literal(param.get('value', ''))});")
        # the browser sets the multipart boundary itself
        exclude = ("content-type",)
    elif "jsonObj" in post:
        code.push(f"const data = JSON.stringify({js_literal(post['jsonObj'], indent)});")
    elif post.get("text"):
        code.push(f"const data = {JAVASCRIPT.literal(post['text'])};")
    else:
        code.push("const data = null;")

    code.blank()
    code.push("const xhr = new XMLHttpRequest();")
    code.push("xhr.withCredentials = true;")
    code.blank()
    code.push('xhr.addEventListener("readystatechange", function () {')
    code.push("if (this.readyState === this.DONE) {", 1)
    code.push("console.log(this.responseText);", 2)
    code.push("}", 1)
    code.push("});")
    code.blank()
    code.push(
        f"xhr.open({JAVASCRIPT.literal(req['method'])}, "
        f"{JAVASCRIPT.literal(req['fullUrl'])});"
    )
    for name, value in header_items(req["allHeaders"], exclude):
        code.push(
            f"xhr.setRequestHeader({JAVASCRIPT.literal(name)}, "
            f"{JAVASCRIPT.literal(value)});"
        )
    code.blank()
    code.push("xhr.send(data);")

    return code.join()
