"""
php/curl: the ext-curl extension.
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import PHP
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth
from .common import php_array


class PhpCurlPlugin(SnippetPlugin):
    """Renders a ``curl_setopt_array`` call."""

    target = "php"
    client = "curl"
    title = "cURL"
    link = "http://php.net/manual/en/book.curl.php"

    comment_prefix = "//"
    default_indent = 4

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        self.drop_digest(prepared, notes)

        curl_options = [
            ("CURLOPT_URL", PHP.literal(prepared.full_url)),
            ("CURLOPT_RETURNTRANSFER", "true"),
            ("CURLOPT_ENCODING", '""'),
            ("CURLOPT_MAXREDIRS", "10"),
            ("CURLOPT_TIMEOUT", "30"),
            ("CURLOPT_HTTP_VERSION", "CURL_HTTP_VERSION_1_1"),
            ("CURLOPT_CUSTOMREQUEST", PHP.literal(prepared.method)),
        ]

        postfields = self._postfields(prepared, indent, notes)
        if postfields is not None:
            curl_options.append(("CURLOPT_POSTFIELDS", postfields))

        if prepared.cookies:
            curl_options.append(("CURLOPT_COOKIE", PHP.literal(prepared.cookie_header()[1])))

        auth = prepared.auth
        basic = isinstance(auth, BasicAuth)
        if basic:
            curl_options.append(
                ("CURLOPT_USERPWD", PHP.literal(f"{auth.username}:{auth.password}"))
            )

        headers = prepared.all_headers(include_auth=not basic, include_cookies=False)
        if prepared.multipart is not None:
            # curl writes the multipart Content-Type with its boundary
            headers = tuple(h for h in headers if h[0].lower() != "content-type")
        if headers:
            lines = [(None, PHP.literal(f"{name}: {value}")) for name, value in headers]
            curl_options.append(("CURLOPT_HTTPHEADER", php_array(lines, indent, 1)))

        code = CodeBuilder(indent)
        code.push("<?php")
        code.blank()
        code.push("$curl = curl_init();")
        code.blank()
        code.push(f"curl_setopt_array($curl, {php_array(curl_options, indent)});")
        code.blank()
        code.push("$response = curl_exec($curl);")
        code.push("$err = curl_error($curl);")
        code.blank()
        code.push("curl_close($curl);")
        code.blank()
        code.push("if ($err) {")
        code.push('echo "cURL Error #:" . $err;', 1)
        code.push("} else {")
        code.push("echo $response;", 1)
        code.push("}")
        return code.join()

    def _postfields(self, prepared: PreparedRequest, indent: str, notes: RenderNotes):
        multipart = prepared.multipart
        if multipart is not None:
            entries = []
            seen = set()
            for name, value in multipart.fields:
                if name in seen:
                    notes.add("Repeated multipart field names keep only the last value")
                seen.add(name)
                entries.append((PHP.literal(name), PHP.literal(value)))
            for part in multipart.files:
                content_type = PHP.literal(part.content_type or "")
                entries.append(
                    (
                        PHP.literal(part.name),
                        f"new CURLFile({PHP.literal(part.filename)}, {content_type}, "
                        f"{PHP.literal(part.filename)})",
                    )
                )
            return php_array(entries, indent, 1)

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            return f"file_get_contents({PHP.literal(filename)})"
        if text:
            return PHP.literal(text)
        return None
