"""
csharp/httpclient: ``System.Net.Http.HttpClient``.
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import CSHARP
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest

# Static properties of System.Net.Http.HttpMethod
HTTP_METHODS = {
    "GET": "Get",
    "POST": "Post",
    "PUT": "Put",
    "PATCH": "Patch",
    "DELETE": "Delete",
    "HEAD": "Head",
    "OPTIONS": "Options",
    "TRACE": "Trace",
}


class HttpClientPlugin(SnippetPlugin):
    """Renders an ``HttpRequestMessage`` sent through ``HttpClient``."""

    target = "csharp"
    client = "httpclient"
    title = "HttpClient"
    link = "https://docs.microsoft.com/en-us/dotnet/api/system.net.http.httpclient"

    comment_prefix = "//"
    default_indent = 4

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        code = CodeBuilder(indent)
        self.drop_digest(prepared, notes)

        method = HTTP_METHODS.get(prepared.method)
        if method and prepared.request.is_standard_method:
            method_expr = f"HttpMethod.{method}"
        else:
            method_expr = f"new HttpMethod({CSHARP.literal(prepared.method)})"

        code.push("using System.Net.Http.Headers;")
        code.blank()
        code.push("var client = new HttpClient();")
        code.push("var request = new HttpRequestMessage")
        code.push("{")
        code.push(f"Method = {method_expr},", 1)
        code.push(f"RequestUri = new Uri({CSHARP.literal(prepared.full_url)}),", 1)

        # Content-Type is a content header and travels with the body
        headers = [
            (name, value)
            for name, value in prepared.all_headers(include_content_type=False)
            if name.lower() != "content-type"
        ]
        if headers:
            code.push("Headers =", 1)
            code.push("{", 1)
            for name, value in headers:
                code.push(f"{{ {CSHARP.literal(name)}, {CSHARP.literal(value)} }},", 2)
            code.push("},", 1)

        content = self._content(prepared, notes)
        if content:
            code.push(f"Content = {content[0]}", 1)
            for line, level in content[1:]:
                code.push(line, level)
        code.push("};")
        code.push("using (var response = await client.SendAsync(request))")
        code.push("{")
        code.push("response.EnsureSuccessStatusCode();", 1)
        code.push("var body = await response.Content.ReadAsStringAsync();", 1)
        code.push("Console.WriteLine(body);", 1)
        code.push("}")
        return code.join()

    def _content(self, prepared: PreparedRequest, notes: RenderNotes):
        """Lines of the ``Content`` initializer as ``(text, level)`` pairs."""
        multipart = prepared.multipart
        if multipart is not None:
            lines = [("{", 1)]
            for name, value in multipart.fields:
                lines.append(
                    (f"{{ new StringContent({CSHARP.literal(value)}), {CSHARP.literal(name)} }},", 2)
                )
            for part in multipart.files:
                lines.append(
                    (
                        f"{{ new StreamContent(File.OpenRead({CSHARP.literal(part.filename)})), "
                        f"{CSHARP.literal(part.name)}, {CSHARP.literal(part.filename)} }},",
                        2,
                    )
                )
            lines.append(("},", 1))
            return ["new MultipartFormDataContent", *lines]

        if prepared.form_fields:
            lines = [("{", 1)]
            for name, value in prepared.form_fields:
                lines.append(
                    (
                        f"new KeyValuePair<string, string>({CSHARP.literal(name)}, "
                        f"{CSHARP.literal(value)}),",
                        2,
                    )
                )
            lines.append(("}),", 1))
            return ["new FormUrlEncodedContent(new[]", *lines]

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            head = f"new StreamContent(File.OpenRead({CSHARP.literal(filename)}))"
        elif text:
            head = f"new StringContent({CSHARP.literal(text)})"
        else:
            return None

        content_type = prepared.content_type
        if not content_type:
            return [head + ","]
        return [
            head,
            ("{", 1),
            ("Headers =", 2),
            ("{", 2),
            (f"ContentType = MediaTypeHeaderValue.Parse({CSHARP.literal(content_type)})", 3),
            ("}", 2),
            ("},", 1),
        ]
