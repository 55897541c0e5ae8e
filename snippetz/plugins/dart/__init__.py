"""
dart/http: ``package:http``.
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import DART
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest


class DartHttpPlugin(SnippetPlugin):
    """Renders a Dart program using ``http.Request``."""

    target = "dart"
    client = "http"
    title = "http"
    link = "https://pub.dev/packages/http"

    comment_prefix = "//"

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        self.drop_digest(prepared, notes)
        multipart = prepared.multipart
        uses_io = False

        body = CodeBuilder(indent)
        headers = self.header_map(prepared, notes)
        if multipart is not None:
            headers = tuple(h for h in headers if h[0].lower() != "content-type")
        if headers:
            body.push("final headers = {", 1)
            for name, value in headers:
                body.push(f"{DART.literal(name)}: {DART.literal(value)},", 2)
            body.push("};", 1)
        body.push(f"final url = Uri.parse({DART.literal(prepared.full_url)});", 1)

        request_class = "MultipartRequest" if multipart is not None else "Request"
        body.push(
            f"final request = http.{request_class}({DART.literal(prepared.method)}, url);", 1
        )
        if headers:
            body.push("request.headers.addAll(headers);", 1)

        if multipart is not None:
            seen = set()
            for name, value in multipart.fields:
                if name in seen:
                    notes.add("Repeated multipart field names keep only the last value")
                seen.add(name)
                body.push(f"request.fields[{DART.literal(name)}] = {DART.literal(value)};", 1)
            for part in multipart.files:
                body.push(
                    "request.files.add(await http.MultipartFile.fromPath("
                    f"{DART.literal(part.name)}, {DART.literal(part.filename)}));",
                    1,
                )
        else:
            filename = prepared.binary_filename
            text = prepared.body_text()
            if prepared.has_body and text is None and not filename:
                notes.add(BINARY_NOTE)
                filename = BINARY_PLACEHOLDER
            if filename:
                uses_io = True
                body.push(
                    f"request.bodyBytes = await File({DART.literal(filename)}).readAsBytes();", 1
                )
            elif text:
                body.push(f"request.body = {DART.literal(text)};", 1)

        body.blank()
        body.push("final response = await request.send();", 1)
        body.blank()
        body.push("print(response.statusCode);", 1)
        body.push("print(await response.stream.bytesToString());", 1)

        code = CodeBuilder(indent)
        if uses_io:
            code.push("import 'dart:io';")
            code.blank()
        code.push("import 'package:http/http.dart' as http;")
        code.blank()
        code.push("void main() async {")
        code.push(body.join())
        code.push("}")
        return code.join()
