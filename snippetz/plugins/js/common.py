"""
JavaScript rendering helpers shared by the browser and Node.js plugins.
"""

from typing import List, Optional, Tuple

from ...core.escaping import JAVASCRIPT, js_literal, js_object
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes
from ...core.prepare import PreparedRequest


def js_entries(entries, indent: str, level: int = 0) -> str:
    """
    Render ``(key, expression)`` entries as an object literal.

    Expressions spanning several lines must already be indented for
    ``level + 1``.
    """
    if not entries:
        return "{}"
    pad = indent * (level + 1)
    lines = [f"{pad}{key}: {value}" for key, value in entries]
    return "{\n" + ",\n".join(lines) + f"\n{indent * level}}}"


def has_duplicates(pairs) -> bool:
    names = [name.lower() for name, _ in pairs]
    return len(set(names)) != len(names)


def pairs_literal(pairs, indent: str, level: int = 0) -> str:
    """Object literal for unique names, else an array of ``[name, value]``."""
    if has_duplicates(pairs):
        return js_literal([[name, value] for name, value in pairs], indent, level)
    return js_object(pairs, indent, level)


class BrowserFiles:
    """Refers to files through ``<input type="file">`` elements."""

    def __init__(self):
        self.imports: List[str] = []

    def part(self, part) -> str:
        selector = f'input[name="{part.name}"]'
        return f"document.querySelector({JAVASCRIPT.literal(selector)}).files[0]"

    def binary(self, filename: str) -> str:
        selector = 'input[type="file"]'
        return f"document.querySelector({JAVASCRIPT.literal(selector)}).files[0]"


class NodeFiles:
    """Reads files from disk with ``node:fs``."""

    def __init__(self):
        self.imports: List[str] = []

    def _use_fs(self):
        if not self.imports:
            self.imports.append('import { readFileSync } from "node:fs";')

    def part(self, part) -> str:
        self._use_fs()
        blob_options = ""
        if part.content_type:
            blob_options = f", {{ type: {JAVASCRIPT.literal(part.content_type)} }}"
        return f"new Blob([readFileSync({JAVASCRIPT.literal(part.filename)})]{blob_options})"

    def binary(self, filename: str) -> str:
        self._use_fs()
        return f"readFileSync({JAVASCRIPT.literal(filename)})"


def render_body(
    prepared: PreparedRequest,
    indent: str,
    notes: RenderNotes,
    files,
    level: int = 1,
    stringify_json: bool = True,
) -> Tuple[List[str], Optional[str]]:
    """
    Build the body expression of a request.

    Args:
        prepared: Normalized request view
        indent: One indentation level
        notes: Collector for degradation notes
        files: ``BrowserFiles`` or ``NodeFiles`` instance
        level: Nesting level the expression is placed at
        stringify_json: Wrap JSON values in ``JSON.stringify``

    Returns:
        Statements to emit before the request and the body expression
        (None when there is no body)
    """
    if prepared.is_json:
        value = js_literal(prepared.json_value, indent, level)
        return [], f"JSON.stringify({value})" if stringify_json else value

    if prepared.form_fields:
        fields = pairs_literal(prepared.form_fields, indent, level)
        return [], f"new URLSearchParams({fields})"

    multipart = prepared.multipart
    if multipart is not None:
        lines = ["const form = new FormData();"]
        for name, value in multipart.fields:
            lines.append(
                f"form.append({JAVASCRIPT.literal(name)}, {JAVASCRIPT.literal(value)});"
            )
        for part in multipart.files:
            lines.append(
                f"form.append({JAVASCRIPT.literal(part.name)}, {files.part(part)}, "
                f"{JAVASCRIPT.literal(part.filename)});"
            )
        return lines, "form"

    if prepared.binary_filename:
        return [], files.binary(prepared.binary_filename)

    if not prepared.has_body:
        return [], None

    text = prepared.body_text()
    if text is None:
        notes.add(BINARY_NOTE)
        return [], files.binary(BINARY_PLACEHOLDER)
    if not text:
        return [], None
    return [], JAVASCRIPT.literal(text)
