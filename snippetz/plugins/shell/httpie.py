"""
shell/httpie
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import shell_quote, shell_word
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth, DigestAuth

# Characters that separate an HTTPie request item into name and value
_ITEM_SEPARATORS = ":=@"


def item_name(name: str) -> str:
    """Escape separator characters inside a request item name."""
    escaped = name.replace("\\", "\\\\")
    for char in _ITEM_SEPARATORS:
        escaped = escaped.replace(char, "\\" + char)
    return escaped


class HttpiePlugin(SnippetPlugin):
    """Renders an ``http`` (HTTPie) command line."""

    target = "shell"
    client = "httpie"
    title = "HTTPie"
    link = "https://httpie.io/"

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        flags = []
        items = []
        piped = None
        redirect = None

        auth = prepared.auth
        native_auth = isinstance(auth, (BasicAuth, DigestAuth))
        if native_auth:
            if isinstance(auth, DigestAuth):
                flags.append("--auth-type digest")
            flags.append(f"--auth {shell_quote(f'{auth.username}:{auth.password}')}")

        multipart = prepared.multipart
        if multipart is not None:
            flags.append("--multipart")
            for name, value in multipart.fields:
                items.append(shell_quote(f"{item_name(name)}={value}"))
            for part in multipart.files:
                field = f"{item_name(part.name)}@{part.filename}"
                if part.content_type:
                    field += f";type={part.content_type}"
                items.append(shell_quote(field))
        elif prepared.form_fields:
            flags.append("--form")
            for name, value in prepared.form_fields:
                items.append(shell_quote(f"{item_name(name)}={value}"))
        elif prepared.binary_filename:
            redirect = prepared.binary_filename
        elif prepared.has_body:
            text = prepared.body_text()
            if text is None:
                notes.add(BINARY_NOTE)
                redirect = BINARY_PLACEHOLDER
            elif text:
                piped = text

        headers = prepared.all_headers(include_auth=not native_auth)
        header_items = [
            shell_quote(f"{item_name(name)}:{value}") for name, value in headers
        ]

        command = " ".join(
            ["http", *flags, shell_word(prepared.method), shell_quote(prepared.full_url)]
        )
        if piped is not None:
            command = f"printf '%s' {shell_quote(piped)} | {command}"

        code = CodeBuilder(self.indent(options), line_join=" \\\n")
        code.push(command)
        for item in header_items + items:
            code.push(item, 1)
        if redirect is not None:
            code.push(f"< {shell_quote(redirect)}", 1)
        return code.join()
