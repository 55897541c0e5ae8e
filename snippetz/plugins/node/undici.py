"""
node/undici
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import JAVASCRIPT, js_object
from ...core.plugin import RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ..js.common import NodeFiles, js_entries, render_body


class UndiciPlugin(SnippetPlugin):
    """Renders a snippet for undici's ``request``."""

    target = "node"
    client = "undici"
    title = "undici"
    link = "https://undici.nodejs.org/"

    comment_prefix = "//"

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        files = NodeFiles()
        self.drop_digest(prepared, notes)

        preamble, body = render_body(prepared, indent, notes, files)

        entries = [("method", JAVASCRIPT.literal(prepared.method))]
        headers = self.header_map(prepared, notes)
        if headers:
            entries.append(("headers", js_object(headers, indent, 1)))
        if body is not None:
            entries.append(("body", body))

        code = CodeBuilder(indent)
        code.push('import { request } from "undici";')
        code.push_many(files.imports)
        code.blank()
        if preamble:
            code.push_many(preamble)
            code.blank()
        code.push(
            f"const {{ statusCode, body }} = await request("
            f"{JAVASCRIPT.literal(prepared.full_url)}, {js_entries(entries, indent)});"
        )
        code.blank()
        code.push("console.log(statusCode);")
        code.push("console.log(await body.text());")
        return code.join()
