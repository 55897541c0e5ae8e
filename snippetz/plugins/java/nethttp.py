"""
java/nethttp: ``java.net.http`` (Java 11+).
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import JAVA
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest, encode_form

# Headers the JDK client sets itself and refuses to accept
RESTRICTED_HEADERS = {"connection", "content-length", "expect", "host", "upgrade"}


class NetHttpPlugin(SnippetPlugin):
    """Renders an ``HttpRequest`` sent with ``HttpClient``."""

    target = "java"
    client = "nethttp"
    title = "java.net.http"
    link = "https://openjdk.java.net/groups/net/httpclient/intro.html"

    comment_prefix = "//"
    default_indent = 2

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        code = CodeBuilder(indent)
        self.drop_digest(prepared, notes)

        code.push("HttpRequest request = HttpRequest.newBuilder()")
        code.push(f".uri(URI.create({JAVA.literal(prepared.full_url)}))", 1)
        for name, value in prepared.all_headers():
            if name.lower() in RESTRICTED_HEADERS:
                notes.add(f"The {name} header is managed by the client and was omitted")
                continue
            code.push(f".header({JAVA.literal(name)}, {JAVA.literal(value)})", 1)
        code.push(
            f".method({JAVA.literal(prepared.method)}, {self._publisher(prepared, notes)})",
            1,
        )
        code.push(".build();", 1)
        code.push(
            "HttpResponse<String> response = HttpClient.newHttpClient()"
            ".send(request, HttpResponse.BodyHandlers.ofString());"
        )
        code.push("System.out.println(response.body());")
        return code.join()

    def _publisher(self, prepared: PreparedRequest, notes: RenderNotes) -> str:
        multipart = prepared.multipart
        if multipart is not None:
            notes.add("java.net.http has no multipart support; fields are sent url-encoded")
            if multipart.files:
                notes.add("File parts were omitted")
            if not multipart.fields:
                return "HttpRequest.BodyPublishers.noBody()"
            text = encode_form(multipart.fields)
            return f"HttpRequest.BodyPublishers.ofString({JAVA.literal(text)})"

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            return f"HttpRequest.BodyPublishers.ofFile(Path.of({JAVA.literal(filename)}))"
        if text:
            return f"HttpRequest.BodyPublishers.ofString({JAVA.literal(text)})"
        return "HttpRequest.BodyPublishers.noBody()"
