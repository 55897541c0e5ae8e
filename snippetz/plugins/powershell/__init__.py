"""
powershell/restmethod and powershell/webrequest
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import POWERSHELL
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest

# Members of [Microsoft.PowerShell.Commands.WebRequestMethod]
WEB_REQUEST_METHODS = {"GET", "HEAD", "POST", "PUT", "DELETE", "TRACE", "OPTIONS", "PATCH"}


def hashtable(entries, indent: str, level: int = 0) -> str:
    """Render ``(key, expression)`` entries as a multi-line hashtable."""
    if not entries:
        return "@{}"
    pad = indent * (level + 1)
    lines = [f"{pad}{key} = {value}" for key, value in entries]
    return "@{\n" + "\n".join(lines) + f"\n{indent * level}}}"


class PowerShellPlugin(SnippetPlugin):
    """Base for the two web cmdlets; they take the same parameters."""

    target = "powershell"
    cmdlet = ""
    output = "$response"

    default_indent = 4

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        code = CodeBuilder(indent)
        self.drop_digest(prepared, notes)

        params = [("Uri", POWERSHELL.literal(prepared.full_url))]
        if prepared.method in WEB_REQUEST_METHODS and prepared.request.is_standard_method:
            params.append(("Method", POWERSHELL.literal(prepared.method)))
        else:
            params.append(("CustomMethod", POWERSHELL.literal(prepared.method)))

        # Content-Type goes through -ContentType, not the header table
        headers = [
            (name, value)
            for name, value in self.header_map(prepared, notes, include_content_type=False)
            if name.lower() != "content-type"
        ]
        if headers:
            entries = [(POWERSHELL.literal(n), POWERSHELL.literal(v)) for n, v in headers]
            code.push(f"$headers = {hashtable(entries, indent)}")
            code.blank()
            params.append(("Headers", "$headers"))

        if prepared.multipart is None and prepared.content_type:
            params.append(("ContentType", POWERSHELL.literal(prepared.content_type)))

        params.extend(self._body_params(prepared, indent, notes))

        code.push(f"$params = {hashtable(params, indent)}")
        code.blank()
        code.push(f"$response = {self.cmdlet} @params")
        code.push(self.output)
        return code.join()

    def _body_params(self, prepared: PreparedRequest, indent: str, notes: RenderNotes):
        multipart = prepared.multipart
        if multipart is not None:
            grouped = {}
            for name, value in multipart.fields:
                grouped.setdefault(name, []).append(POWERSHELL.literal(value))
            for part in multipart.files:
                grouped.setdefault(part.name, []).append(
                    f"(Get-Item -Path {POWERSHELL.literal(part.filename)})"
                )
            entries = []
            for name, values in grouped.items():
                value = values[0] if len(values) == 1 else f"@({', '.join(values)})"
                entries.append((POWERSHELL.literal(name), value))
            return [("Form", hashtable(entries, indent, 1))]

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            return [("InFile", POWERSHELL.literal(filename))]
        if text:
            return [("Body", POWERSHELL.literal(text))]
        return []


class RestMethodPlugin(PowerShellPlugin):
    client = "restmethod"
    title = "Invoke-RestMethod"
    link = "https://docs.microsoft.com/en-us/powershell/module/Microsoft.PowerShell.Utility/Invoke-RestMethod"

    cmdlet = "Invoke-RestMethod"


class WebRequestPlugin(PowerShellPlugin):
    client = "webrequest"
    title = "Invoke-WebRequest"
    link = "https://docs.microsoft.com/en-us/powershell/module/Microsoft.PowerShell.Utility/Invoke-WebRequest"

    cmdlet = "Invoke-WebRequest"
    output = "$response.Content"


__all__ = ["PowerShellPlugin", "RestMethodPlugin", "WebRequestPlugin"]
