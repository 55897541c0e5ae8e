"""
js/axios
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import JAVASCRIPT, js_object
from ...core.plugin import RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth
from .common import BrowserFiles, js_entries, render_body


class AxiosPlugin(SnippetPlugin):
    """Renders a snippet for axios."""

    target = "js"
    client = "axios"
    title = "Axios"
    link = "https://axios-http.com/"

    comment_prefix = "//"
    file_source = BrowserFiles

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        files = self.file_source()
        self.drop_digest(prepared, notes)

        preamble, data = render_body(
            prepared, indent, notes, files, stringify_json=False
        )

        auth = prepared.auth
        basic = isinstance(auth, BasicAuth)

        entries = [
            ("method", JAVASCRIPT.literal(prepared.method)),
            ("url", JAVASCRIPT.literal(prepared.full_url)),
        ]
        headers = self.header_map(prepared, notes, include_auth=not basic)
        if headers:
            entries.append(("headers", js_object(headers, indent, 1)))
        if basic:
            credentials = [
                ("username", JAVASCRIPT.literal(auth.username)),
                ("password", JAVASCRIPT.literal(auth.password)),
            ]
            entries.append(("auth", js_entries(credentials, indent, 1)))
        if data is not None:
            entries.append(("data", data))

        code = CodeBuilder(indent)
        code.push('import axios from "axios";')
        code.push_many(files.imports)
        code.blank()
        if preamble:
            code.push_many(preamble)
            code.blank()
        code.push(f"const options = {js_entries(entries, indent)};")
        code.blank()
        code.push("try {")
        code.push("const { data } = await axios.request(options);", 1)
        code.push("console.log(data);", 1)
        code.push("} catch (error) {")
        code.push("console.error(error);", 1)
        code.push("}")
        return code.join()
