"""
rust/reqwest
"""

import json
from typing import Any, List

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import RUST
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth

# Associated constants of reqwest::Method
METHOD_CONSTANTS = {"GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "CONNECT", "PATCH", "TRACE"}


def json_macro_body(value: Any, indent: str, level: int = 0) -> str:
    """Render a JSON value inside ``json!``; strings use Rust escapes."""
    pad = indent * (level + 1)
    if isinstance(value, dict):
        if not value:
            return "{}"
        items = [
            f"{pad}{RUST.literal(str(k))}: {json_macro_body(v, indent, level + 1)}"
            for k, v in value.items()
        ]
        return "{\n" + ",\n".join(items) + f"\n{indent * level}}}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{pad}{json_macro_body(v, indent, level + 1)}" for v in value]
        return "[\n" + ",\n".join(items) + f"\n{indent * level}]"
    if isinstance(value, str):
        return RUST.literal(value)
    return json.dumps(value)


class ReqwestPlugin(SnippetPlugin):
    """Renders an async reqwest program."""

    target = "rust"
    client = "reqwest"
    title = "reqwest"
    link = "https://docs.rs/reqwest/latest/reqwest/"

    comment_prefix = "//"
    default_indent = 4

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        self.drop_digest(prepared, notes)

        body = CodeBuilder(indent)
        body.push(f"let url = {RUST.literal(prepared.full_url)};", 1)
        body.blank()

        chain = self._body_chain(prepared, body, indent, notes)

        if prepared.method in METHOD_CONSTANTS and prepared.request.is_standard_method:
            method = f"reqwest::Method::{prepared.method}"
        else:
            method = f"reqwest::Method::from_bytes({RUST.literal(prepared.method)}.as_bytes())?"

        auth = prepared.auth
        basic = isinstance(auth, BasicAuth)
        calls = [f".request({method}, url)"]
        for name, value in prepared.all_headers(include_auth=not basic):
            calls.append(f".header({RUST.literal(name)}, {RUST.literal(value)})")
        if basic:
            calls.append(
                f".basic_auth({RUST.literal(auth.username)}, Some({RUST.literal(auth.password)}))"
            )
        calls.extend(chain)
        calls.extend([".send()", ".await?;"])

        body.push("let client = reqwest::Client::new();", 1)
        body.push("let response = client", 1)
        body.push_many(calls, 2)
        body.blank()
        body.push("let body = response.text().await?;", 1)
        body.push('println!("{}", body);', 1)
        body.blank()
        body.push("Ok(())", 1)

        code = CodeBuilder(indent)
        if prepared.is_json:
            code.push("use serde_json::json;")
            code.blank()
        code.push("#[tokio::main]")
        code.push("async fn main() -> Result<(), Box<dyn std::error::Error>> {")
        code.push(body.join())
        code.push("}")
        return code.join()

    def _body_chain(
        self, prepared: PreparedRequest, body: CodeBuilder, indent: str, notes: RenderNotes
    ) -> List[str]:
        """Emit statements the body needs and return the builder calls for it."""
        if prepared.is_json:
            value = json_macro_body(prepared.json_value, indent, 1)
            body.push(f"let payload = json!({value});", 1)
            body.blank()
            return [".json(&payload)"]

        if prepared.form_fields:
            pairs = ", ".join(
                f"({RUST.literal(name)}, {RUST.literal(value)})"
                for name, value in prepared.form_fields
            )
            return [f".form(&[{pairs}])"]

        multipart = prepared.multipart
        if multipart is not None:
            body.push("let form = reqwest::multipart::Form::new()", 1)
            lines = [
                f".text({RUST.literal(name)}, {RUST.literal(value)})"
                for name, value in multipart.fields
            ]
            for part in multipart.files:
                part_expr = (
                    f"reqwest::multipart::Part::bytes(std::fs::read({RUST.literal(part.filename)})?)"
                    f".file_name({RUST.literal(part.filename)})"
                )
                if part.content_type:
                    part_expr += f".mime_str({RUST.literal(part.content_type)})?"
                lines.append(f".part({RUST.literal(part.name)}, {part_expr})")
            if lines:
                lines[-1] += ";"
            else:
                body.append_to_last(";")
            body.push_many(lines, 2)
            body.blank()
            return [".multipart(form)"]

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            return [f".body(std::fs::read({RUST.literal(filename)})?)"]
        if text:
            return [f".body({RUST.literal(text)})"]
        return []
