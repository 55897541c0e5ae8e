"""
shell/curl
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import shell_quote, shell_word
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth, DigestAuth


class CurlPlugin(SnippetPlugin):
    """Renders a ``curl`` command line."""

    target = "shell"
    client = "curl"
    title = "cURL"
    link = "http://curl.se/"

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        args = []

        if prepared.method == "HEAD":
            args.append("--head")
        else:
            args.append(f"--request {shell_word(prepared.method)}")
        args.append(f"--url {shell_quote(prepared.full_url)}")

        auth = prepared.auth
        native_auth = isinstance(auth, (BasicAuth, DigestAuth))
        for name, value in prepared.all_headers(
            include_auth=not native_auth, include_cookies=False
        ):
            args.append(f"--header {shell_quote(f'{name}: {value}')}")

        if prepared.cookies:
            args.append(f"--cookie {shell_quote(prepared.cookie_header()[1])}")

        if isinstance(auth, DigestAuth):
            args.append("--digest")
        if native_auth:
            args.append(f"--user {shell_quote(f'{auth.username}:{auth.password}')}")

        args.extend(self._body_args(prepared, notes))

        code = CodeBuilder(self.indent(options), line_join=" \\\n")
        code.push(f"curl {args[0]}")
        for arg in args[1:]:
            code.push(arg, 1)
        return code.join()

    def _body_args(self, prepared: PreparedRequest, notes: RenderNotes) -> list:
        multipart = prepared.multipart
        if multipart is not None:
            args = []
            for name, value in multipart.fields:
                args.append(f"--form-string {shell_quote(f'{name}={value}')}")
            for part in multipart.files:
                field = f"{part.name}=@{part.filename}"
                if part.content_type:
                    field += f";type={part.content_type}"
                args.append(f"--form {shell_quote(field)}")
            return args

        if prepared.form_fields:
            return [
                f"--data-urlencode {shell_quote(f'{name}={value}')}"
                for name, value in prepared.form_fields
            ]

        if prepared.binary_filename:
            return [f"--data-binary {shell_quote('@' + prepared.binary_filename)}"]

        text = prepared.body_text()
        if text is not None:
            return [f"--data-raw {shell_quote(text)}"] if text else []

        if prepared.has_body:
            notes.add(BINARY_NOTE)
            return [f"--data-binary {shell_quote('@' + BINARY_PLACEHOLDER)}"]
        return []
