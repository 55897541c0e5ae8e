"""
go/native: ``net/http`` from the standard library.
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import GO
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth


class GoNativePlugin(SnippetPlugin):
    """Renders a Go program using ``net/http``."""

    target = "go"
    client = "native"
    title = "NewRequest"
    link = "http://golang.org/pkg/net/http/#NewRequest"

    comment_prefix = "//"

    def indent(self, options: GenerationOptions) -> str:
        # gofmt indents with tabs unless told otherwise
        if options.indent_size is None and not options.use_tabs:
            return "\t"
        return super().indent(options)

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        imports = {"fmt", "io", "net/http"}
        self.drop_digest(prepared, notes)

        body = CodeBuilder(indent)
        body.push(f"url := {GO.literal(prepared.full_url)}", 1)
        body.blank()

        payload = self._payload(prepared, body, imports, notes)

        body.push(f"req, _ := http.NewRequest({GO.literal(prepared.method)}, url, {payload})", 1)
        body.blank()

        auth = prepared.auth
        basic = isinstance(auth, BasicAuth)
        for name, value in prepared.all_headers(include_auth=not basic):
            body.push(f"req.Header.Add({GO.literal(name)}, {GO.literal(value)})", 1)
        if prepared.multipart is not None and not prepared.has_header("content-type"):
            body.push('req.Header.Set("Content-Type", writer.FormDataContentType())', 1)
        if basic:
            body.push(
                f"req.SetBasicAuth({GO.literal(auth.username)}, {GO.literal(auth.password)})",
                1,
            )
        body.blank()

        body.push("res, _ := http.DefaultClient.Do(req)", 1)
        body.blank()
        body.push("defer res.Body.Close()", 1)
        body.push("body, _ := io.ReadAll(res.Body)", 1)
        body.blank()
        body.push("fmt.Println(res)", 1)
        body.push("fmt.Println(string(body))", 1)

        code = CodeBuilder(indent)
        code.push("package main")
        code.blank()
        code.push("import (")
        for name in sorted(imports):
            code.push(GO.literal(name), 1)
        code.push(")")
        code.blank()
        code.push("func main() {")
        code.push(body.join())
        code.push("}")
        return code.join()

    def _payload(self, prepared: PreparedRequest, body: CodeBuilder, imports, notes) -> str:
        """Emit the payload statements and return the request body argument."""
        multipart = prepared.multipart
        if multipart is not None:
            imports.update({"bytes", "mime/multipart"})
            if multipart.files:
                imports.add("os")
            body.push("payload := &bytes.Buffer{}", 1)
            body.push("writer := multipart.NewWriter(payload)", 1)
            for name, value in multipart.fields:
                body.push(f"_ = writer.WriteField({GO.literal(name)}, {GO.literal(value)})", 1)
            for i, part in enumerate(multipart.files):
                body.push(f"file{i}, _ := os.Open({GO.literal(part.filename)})", 1)
                body.push(f"defer file{i}.Close()", 1)
                body.push(
                    f"part{i}, _ := writer.CreateFormFile("
                    f"{GO.literal(part.name)}, {GO.literal(part.filename)})",
                    1,
                )
                body.push(f"_, _ = io.Copy(part{i}, file{i})", 1)
            body.push("_ = writer.Close()", 1)
            body.blank()
            return "payload"

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            imports.add("os")
            body.push(f"payload, _ := os.Open({GO.literal(filename)})", 1)
            body.push("defer payload.Close()", 1)
            body.blank()
            return "payload"

        if text:
            imports.add("strings")
            body.push(f"payload := strings.NewReader({GO.literal(text)})", 1)
            body.blank()
            return "payload"

        return "nil"
