"""
C libcurl converter (HAR input).
"""

from typing import Any, Dict

from ..core.builder import CodeBuilder
from ..core.escaping import C
from .har import header_items, normalize


def convert(har: Dict[str, Any], options: Dict[str, Any] = None) -> str:
    options = options or {}
    req = normalize(har)
    post = req["postData"]
    mime = post.get("mimeType", "")
    code = CodeBuilder(options.get("indent", "  "))

    code.push("CURL *hnd = curl_easy_init();")
    code.blank()
    code.push(f"curl_easy_setopt(hnd, CURLOPT_CUSTOMREQUEST, {C.literal(req['method'])});")
    code.push("curl_easy_setopt(hnd, CURLOPT_WRITEDATA, stdout);")
    code.push(f"curl_easy_setopt(hnd, CURLOPT_URL, {C.literal(req['fullUrl'])});")

    headers = header_items(req["allHeaders"], exclude=("cookie",))
    if mime.startswith("multipart/"):
        headers = [(n, v) for n, v in headers if n.lower() != "content-type"]
    if headers:
        code.blank()
        code.push("struct curl_slist *headers = NULL;")
        for name, value in headers:
            code.push(f"headers = curl_slist_append(headers, {C.literal(f'{name}: {value}')});")
        code.push("curl_easy_setopt(hnd, CURLOPT_HTTPHEADER, headers);")

    if req["cookies"]:
        cookies = "; ".join(f"{c['name']}={c['value']}" for c in req["cookies"])
        code.blank()
        code.push(f"curl_easy_setopt(hnd, CURLOPT_COOKIE, {C.literal(cookies)});")

    if mime.startswith("multipart/") and post.get("params"):
        code.blank()
        code.push("curl_mime *mime = curl_mime_init(hnd);")
        code.push("curl_mimepart *part;")
        for param in post["params"]:
            code.push("part = curl_mime_addpart(mime);")
            code.push(f"curl_mime_name(part, {C.literal(param['name'])});")
            if param.get("fileName"):
                code.push(f"curl_mime_filedata(part, {C.literal(param['fileName'])});")
            else:
                code.push(
                    f"curl_mime_data(part, {C.literal(param.get('value', ''))}, "
                    "CURL_ZERO_TERMINATED);"
                )
        code.push("curl_easy_setopt(hnd, CURLOPT_MIMEPOST, mime);")
    elif post.get("text"):
        code.blank()
        code.push(f"curl_easy_setopt(hnd, CURLOPT_POSTFIELDS, {C.literal(post['text'])});")

    code.blank()
    code.push("CURLcode ret = curl_easy_perform(hnd);")

    return code.join()
