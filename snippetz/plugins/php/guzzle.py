"""
php/guzzle
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import PHP
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth, DigestAuth
from .common import php_array, php_string_map


class GuzzlePlugin(SnippetPlugin):
    """Renders a Guzzle ``Client::request`` call."""

    target = "php"
    client = "guzzle"
    title = "Guzzle"
    link = "http://docs.guzzlephp.org/en/stable/"

    comment_prefix = "//"
    default_indent = 4

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        request_options = []

        auth = prepared.auth
        native_auth = isinstance(auth, (BasicAuth, DigestAuth))

        headers = prepared.all_headers(include_auth=not native_auth)
        if prepared.multipart is not None:
            headers = tuple(h for h in headers if h[0].lower() != "content-type")
        if headers:
            # Guzzle takes a list of values for repeated headers
            request_options.append(("'headers'", php_string_map(headers, indent, 1)))

        if native_auth:
            credentials = [PHP.literal(auth.username), PHP.literal(auth.password)]
            if isinstance(auth, DigestAuth):
                credentials.append("'digest'")
            request_options.append(("'auth'", f"[{', '.join(credentials)}]"))

        request_options.extend(self._body_options(prepared, indent, notes))

        call = f"$client->request({PHP.literal(prepared.method)}, {PHP.literal(prepared.full_url)}"
        if request_options:
            call += f", {php_array(request_options, indent)}"
        call += ");"

        code = CodeBuilder(indent)
        code.push("<?php")
        code.blank()
        code.push("$client = new \\GuzzleHttp\\Client();")
        code.blank()
        code.push(f"$response = {call}")
        code.blank()
        code.push("echo $response->getBody();")
        return code.join()

    def _body_options(self, prepared: PreparedRequest, indent: str, notes: RenderNotes):
        multipart = prepared.multipart
        if multipart is not None:
            parts = []
            for name, value in multipart.fields:
                entry = [("'name'", PHP.literal(name)), ("'contents'", PHP.literal(value))]
                parts.append((None, php_array(entry, indent, 2)))
            for part in multipart.files:
                entry = [
                    ("'name'", PHP.literal(part.name)),
                    (
                        "'contents'",
                        f"\\GuzzleHttp\\Psr7\\Utils::tryFopen({PHP.literal(part.filename)}, 'r')",
                    ),
                    ("'filename'", PHP.literal(part.filename)),
                ]
                if part.content_type:
                    entry.append(
                        (
                            "'headers'",
                            f"['Content-Type' => {PHP.literal(part.content_type)}]",
                        )
                    )
                parts.append((None, php_array(entry, indent, 2)))
            return [("'multipart'", php_array(parts, indent, 1))]

        fields = prepared.form_fields
        if fields and len({name for name, _ in fields}) == len(fields):
            return [("'form_params'", php_string_map(fields, indent, 1))]

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            return [("'body'", f"\\GuzzleHttp\\Psr7\\Utils::tryFopen({PHP.literal(filename)}, 'r')")]
        if text:
            return [("'body'", PHP.literal(text))]
        return []
