"""
js/fetch
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import JAVASCRIPT
from ...core.plugin import RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from .common import BrowserFiles, js_entries, pairs_literal, render_body


class FetchPlugin(SnippetPlugin):
    """Renders a snippet for the Fetch API."""

    target = "js"
    client = "fetch"
    title = "fetch"
    link = "https://developer.mozilla.org/en-US/docs/Web/API/fetch"

    comment_prefix = "//"
    file_source = BrowserFiles

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        files = self.file_source()
        self.drop_digest(prepared, notes)

        preamble, body = render_body(prepared, indent, notes, files)

        entries = [("method", JAVASCRIPT.literal(prepared.method))]
        # fetch accepts a list of pairs, so repeated headers survive
        headers = prepared.all_headers()
        if headers:
            entries.append(("headers", pairs_literal(headers, indent, 1)))
        if body is not None:
            entries.append(("body", body))

        code = CodeBuilder(indent)
        if files.imports:
            code.push_many(files.imports)
            code.blank()
        code.push(f"const url = {JAVASCRIPT.literal(prepared.full_url)};")
        if preamble:
            code.blank()
            code.push_many(preamble)
        code.blank()
        code.push(f"const options = {js_entries(entries, indent)};")
        code.blank()
        code.push("try {")
        code.push("const response = await fetch(url, options);", 1)
        code.push("const data = await response.text();", 1)
        code.push("console.log(data);", 1)
        code.push("} catch (error) {")
        code.push("console.error(error);", 1)
        code.push("}")
        return code.join()
