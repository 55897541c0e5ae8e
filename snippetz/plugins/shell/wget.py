"""
shell/wget
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import shell_quote, shell_word
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest, encode_form
from ...core.request import BasicAuth, DigestAuth


class WgetPlugin(SnippetPlugin):
    """Renders a GNU ``wget`` command line."""

    target = "shell"
    client = "wget"
    title = "Wget"
    link = "https://www.gnu.org/software/wget/"

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        args = ["--quiet", f"--method {shell_word(prepared.method)}"]

        auth = prepared.auth
        native_auth = isinstance(auth, (BasicAuth, DigestAuth))
        for name, value in prepared.all_headers(include_auth=not native_auth):
            args.append(f"--header {shell_quote(f'{name}: {value}')}")

        if native_auth:
            args.append(f"--user {shell_quote(auth.username)}")
            args.append(f"--password {shell_quote(auth.password)}")
            if isinstance(auth, BasicAuth):
                args.append("--auth-no-challenge")

        args.extend(self._body_args(prepared, notes))
        args.append("--output-document")
        args.append(f"- {shell_quote(prepared.full_url)}")

        code = CodeBuilder(self.indent(options), line_join=" \\\n")
        code.push(f"wget {args[0]}")
        for arg in args[1:]:
            code.push(arg, 1)
        return code.join()

    def _body_args(self, prepared: PreparedRequest, notes: RenderNotes) -> list:
        multipart = prepared.multipart
        if multipart is not None:
            notes.add("wget cannot send multipart bodies; fields are sent url-encoded")
            if multipart.files:
                notes.add("File parts were omitted")
            if multipart.fields:
                return [f"--body-data {shell_quote(encode_form(multipart.fields))}"]
            return []

        if prepared.binary_filename:
            return [f"--body-file {shell_quote(prepared.binary_filename)}"]

        text = prepared.body_text()
        if text:
            return [f"--body-data {shell_quote(text)}"]

        if prepared.has_body and text is None:
            notes.add(BINARY_NOTE)
            return [f"--body-file {shell_quote(BINARY_PLACEHOLDER)}"]
        return []
