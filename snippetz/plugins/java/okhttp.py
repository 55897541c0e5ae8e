"""
java/okhttp
"""

from typing import List, Optional

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import JAVA
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest

# OkHttp rejects these methods without a request body
BODY_REQUIRED = ("POST", "PUT", "PATCH", "PROPPATCH", "REPORT")


class OkHttpPlugin(SnippetPlugin):
    """Renders an OkHttp ``Request.Builder`` chain in Java."""

    target = "java"
    client = "okhttp"
    title = "OkHttp"
    link = "http://square.github.io/okhttp/"

    comment_prefix = "//"
    default_indent = 2

    string = JAVA
    semicolon = ";"

    # Syntax hooks, overridden for Kotlin

    def declare(self, type_name: str, name: str, value: str, end: bool = True) -> str:
        return f"{type_name} {name} = {value}" + (self.semicolon if end else "")

    def new(self, expression: str) -> str:
        return f"new {expression}"

    def media_type(self, content_type: str) -> str:
        return f"MediaType.parse({self.string.literal(content_type)})"

    def text_body(self, text: str) -> str:
        return f"RequestBody.create({self.string.literal(text)}, mediaType)"

    def file_body(self, filename: str, media_type: str) -> str:
        file = self.new(f"File({self.string.literal(filename)})")
        return f"RequestBody.create({file}, {media_type})"

    def empty_body(self) -> str:
        return "RequestBody.create(new byte[0], null)"

    # Rendering

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        code = CodeBuilder(indent)
        self.drop_digest(prepared, notes)

        code.push(self.declare("OkHttpClient", "client", self.new("OkHttpClient()")))
        code.blank()

        body = self._push_body(code, prepared, notes)
        if body is not None:
            code.blank()
        lit = self.string.literal

        code.push(self.declare("Request", "request", self.new("Request.Builder()"), end=False))
        code.push(f".url({lit(prepared.full_url)})", 1)
        code.push(self._method_call(prepared, body), 1)

        headers = prepared.all_headers()
        if body is not None:
            # The request body carries the Content-Type
            headers = tuple(h for h in headers if h[0].lower() != "content-type")
        for name, value in headers:
            code.push(f".addHeader({lit(name)}, {lit(value)})", 1)
        code.push(f".build(){self.semicolon}", 1)
        code.blank()
        code.push(
            self.declare("Response", "response", "client.newCall(request).execute()")
        )
        return code.join()

    def _method_call(self, prepared: PreparedRequest, body: Optional[str]) -> str:
        method = prepared.method
        standard = prepared.request.is_standard_method
        if standard and body is None and method in ("GET", "HEAD"):
            return f".{method.lower()}()"
        if standard and body is not None and method in ("POST", "PUT", "PATCH", "DELETE"):
            return f".{method.lower()}(body)"
        if standard and body is None and method == "DELETE":
            return ".delete()"
        return f".method({self.string.literal(method)}, {body or 'null'})"

    def _push_body(
        self, code: CodeBuilder, prepared: PreparedRequest, notes: RenderNotes
    ) -> Optional[str]:
        """Emit the body declaration and return its variable name."""
        lit = self.string.literal
        multipart = prepared.multipart
        if multipart is not None:
            chain: List[str] = [".setType(MultipartBody.FORM)"]
            for name, value in multipart.fields:
                chain.append(f".addFormDataPart({lit(name)}, {lit(value)})")
            for part in multipart.files:
                media = self.media_type(part.content_type or "application/octet-stream")
                chain.append(
                    f".addFormDataPart({lit(part.name)}, {lit(part.filename)}, "
                    f"{self.file_body(part.filename, media)})"
                )
            chain.append(f".build(){self.semicolon}")
            builder = self.new("MultipartBody.Builder()")
            code.push(self.declare("RequestBody", "body", builder, end=False))
            code.push_many(chain, 1)
            return "body"

        if prepared.form_fields:
            chain = [f".add({lit(name)}, {lit(value)})" for name, value in prepared.form_fields]
            chain.append(f".build(){self.semicolon}")
            builder = self.new("FormBody.Builder()")
            code.push(self.declare("RequestBody", "body", builder, end=False))
            code.push_many(chain, 1)
            return "body"

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if not filename and not text:
            if prepared.method.upper() not in BODY_REQUIRED:
                return None
            if prepared.content_type:
                code.push(
                    self.declare("MediaType", "mediaType", self.media_type(prepared.content_type))
                )
                code.push(self.declare("RequestBody", "body", self.text_body("")))
            else:
                code.push(self.declare("RequestBody", "body", self.empty_body()))
            return "body"

        content_type = prepared.content_type or "application/octet-stream"
        code.push(self.declare("MediaType", "mediaType", self.media_type(content_type)))
        if filename:
            value = self.file_body(filename, "mediaType")
        else:
            value = self.text_body(text)
        code.push(self.declare("RequestBody", "body", value))
        return "body"
