"""
python/python3: standard library ``http.client``.
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import PYTHON, python_dict, python_literal
from ...core.plugin import (
    BINARY_NOTE,
    BINARY_PLACEHOLDER,
    MERGED_HEADERS_NOTE,
    RenderNotes,
    SnippetPlugin,
)
from ...core.prepare import PreparedRequest

BOUNDARY = "----011000010111000001101001"


class Python3Plugin(SnippetPlugin):
    """Renders a snippet using only ``http.client``."""

    target = "python"
    client = "python3"
    title = "http.client"
    link = "https://docs.python.org/3/library/http.client.html"

    comment_prefix = "#"
    default_indent = 4

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        code = CodeBuilder(indent)

        self.drop_digest(prepared, notes)

        code.push("import http.client")
        if prepared.is_json:
            code.push("import json")
        code.blank()

        connection = "HTTPConnection" if prepared.scheme == "http" else "HTTPSConnection"
        code.push(f"conn = http.client.{connection}({PYTHON.literal(prepared.host)})")
        code.blank()

        has_payload = self._push_payload(code, prepared, indent, notes)

        headers = list(prepared.all_headers())
        if prepared.multipart is not None and not prepared.has_header("content-type"):
            headers.append(("Content-Type", f"multipart/form-data; boundary={BOUNDARY}"))
        if headers:
            merged, changed = prepared.merge_duplicates(tuple(headers))
            if changed:
                notes.add(MERGED_HEADERS_NOTE)
            code.push(f"headers = {python_dict(merged, indent)}")
            code.blank()

        args = [PYTHON.literal(prepared.method), PYTHON.literal(prepared.path_and_query)]
        if has_payload:
            args.append("body=payload")
        if headers:
            args.append("headers=headers")
        code.push(f"conn.request({', '.join(args)})")
        code.blank()
        code.push("res = conn.getresponse()")
        code.push("data = res.read()")
        code.blank()
        code.push('print(data.decode("utf-8"))')
        return code.join()

    def _push_payload(
        self, code: CodeBuilder, prepared: PreparedRequest, indent: str, notes: RenderNotes
    ) -> bool:
        if prepared.is_json:
            code.push(f"payload = json.dumps({python_literal(prepared.json_value, indent)})")
            code.blank()
            return True

        multipart = prepared.multipart
        if multipart is not None:
            code.push("body = []")
            for name, value in multipart.fields:
                head = (
                    f"--{BOUNDARY}\r\n"
                    f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                    f"{value}\r\n"
                )
                code.push(f"body.append({PYTHON.literal(head)}.encode(\"utf-8\"))")
            for part in multipart.files:
                head = (
                    f"--{BOUNDARY}\r\n"
                    f'Content-Disposition: form-data; name="{part.name}"; '
                    f'filename="{part.filename}"\r\n'
                )
                if part.content_type:
                    head += f"Content-Type: {part.content_type}\r\n"
                head += "\r\n"
                code.push(f"body.append({PYTHON.literal(head)}.encode(\"utf-8\"))")
                code.push(f"with open({PYTHON.literal(part.filename)}, \"rb\") as f:")
                code.push("body.append(f.read())", 1)
                code.push('body.append(b"\\r\\n")')
            code.push(f"body.append({PYTHON.literal(f'--{BOUNDARY}--')}.encode(\"utf-8\"))")
            code.push('payload = b"".join(body)')
            code.blank()
            return True

        if prepared.binary_filename:
            code.push(f"with open({PYTHON.literal(prepared.binary_filename)}, \"rb\") as f:")
            code.push("payload = f.read()", 1)
            code.blank()
            return True

        if not prepared.has_body:
            return False

        text = prepared.body_text()
        if text is None:
            notes.add(BINARY_NOTE)
            code.push(f"with open({PYTHON.literal(BINARY_PLACEHOLDER)}, \"rb\") as f:")
            code.push("payload = f.read()", 1)
        elif not text:
            return False
        elif text.isascii():
            code.push(f"payload = {PYTHON.literal(text)}")
        else:
            code.push(f"payload = {PYTHON.literal(text)}.encode(\"utf-8\")")
        code.blank()
        return True
