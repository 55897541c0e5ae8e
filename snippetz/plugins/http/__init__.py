"""
http/http1.1: the raw request message.
"""

from typing import List

from ...core.config import GenerationOptions
from ...core.plugin import RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest, decode_text

BOUNDARY = "----011000010111000001101001"


class Http11Plugin(SnippetPlugin):
    """Renders the request as an HTTP/1.1 message."""

    target = "http"
    client = "http1.1"
    title = "HTTP/1.1"
    link = "https://tools.ietf.org/html/rfc7230"

    # A raw message has no comment syntax
    comment_prefix = None

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        self.drop_digest(prepared, notes)

        headers = list(prepared.all_headers())
        body = self._body(prepared, notes)
        exact = prepared.body_text() is not None and not prepared.binary_filename

        if prepared.multipart is not None and not prepared.has_header("content-type"):
            headers.append(("Content-Type", f"multipart/form-data; boundary={BOUNDARY}"))
        if body and exact and not prepared.has_header("content-length"):
            headers.append(("Content-Length", str(len(body.encode("utf-8")))))

        lines = [f"{prepared.method} {prepared.path_and_query} HTTP/1.1"]
        if not prepared.has_header("host"):
            lines.append(f"Host: {prepared.host}")
        lines.extend(f"{name}: {value}" for name, value in headers)

        message = options.line_ending.join(lines) + options.line_ending
        if body:
            message += options.line_ending + body
        return message

    def format_code(self, code: str, options: GenerationOptions) -> str:
        # The body is sent verbatim; only a trailing line break is dropped
        if code.endswith(options.line_ending):
            code = code[: -len(options.line_ending)]
        return code

    def _body(self, prepared: PreparedRequest, notes: RenderNotes) -> str:
        multipart = prepared.multipart
        if multipart is not None:
            return self._multipart(multipart)

        if prepared.binary_filename:
            return f"<contents of {prepared.binary_filename}>"
        text = prepared.body_text()
        if text is not None:
            return text
        if prepared.has_body:
            notes.add("Binary body cannot be shown as text")
            return "<binary data>"
        return ""

    def _multipart(self, multipart) -> str:
        parts: List[str] = []
        for name, value in multipart.fields:
            parts.append(
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n"
            )
        for part in multipart.files:
            head = (
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{part.name}"; '
                f'filename="{part.filename}"\r\n'
            )
            if part.content_type:
                head += f"Content-Type: {part.content_type}\r\n"
            content = decode_text(part.content) if part.content is not None else None
            if content is None:
                content = f"<contents of {part.filename}>"
            parts.append(f"{head}\r\n{content}\r\n")
        parts.append(f"--{BOUNDARY}--\r\n")
        return "".join(parts)
