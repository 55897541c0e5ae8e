"""
Shared rendering for the template-driven Python client plugins.

``requests`` and ``httpx`` take nearly identical keyword arguments, so the
plugins only differ in a handful of hooks: the import lines, how the
request function is called, and how raw bodies and digest auth are spelled.
"""

from typing import Any, Dict, List, Optional, Tuple

from ...core.config import GenerationOptions
from ...core.escaping import PYTHON
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth, DigestAuth
from .templates import engine


def multi_dict(pairs) -> Dict[str, Any]:
    """Group pairs by name; repeated names collect their values in a list."""
    grouped: Dict[str, Any] = {}
    for name, value in pairs:
        if name not in grouped:
            grouped[name] = value
        elif isinstance(grouped[name], list):
            grouped[name].append(value)
        else:
            grouped[name] = [grouped[name], value]
    return grouped


class PythonClientPlugin(SnippetPlugin):
    """Base for Python plugins rendered through the shared templates."""

    target = "python"
    comment_prefix = "#"
    default_indent = 4
    template_engine = engine
    template_name = "sync_client.py.j2"

    # Module imported by the snippet and prefix of the call expression
    module = ""
    call_prefix = ""
    # Keyword used for raw text and bytes bodies
    content_keyword = "data"
    native_cookies = False

    shortcuts = frozenset({"get", "head", "options", "post", "put", "patch", "delete"})
    body_shortcuts = shortcuts

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        indent = self.indent(options)
        imports = self.imports()
        context: Dict[str, Any] = {
            "url": prepared.base_url,
            "params": prepared.query,
            "headers": (),
            "cookies": (),
        }
        kwargs: List[str] = []

        if prepared.query:
            kwargs.append("params=params")

        auth_arg = self.auth_argument(prepared, imports)
        native_auth = auth_arg is not None
        if not native_auth:
            self.drop_digest(prepared, notes)

        cookies_native = self.native_cookies and len(
            {name for name, _ in prepared.cookies}
        ) == len(prepared.cookies)

        headers = self.header_map(
            prepared,
            notes,
            include_auth=not native_auth,
            include_cookies=not cookies_native,
        )
        if headers:
            context["headers"] = headers
            kwargs.append("headers=headers")

        if cookies_native and prepared.cookies:
            context["cookies"] = prepared.cookies
            kwargs.append("cookies=cookies")

        if auth_arg is not None:
            kwargs.append(f"auth={auth_arg}")

        body, body_kwargs = self.body_arguments(prepared, indent, notes)
        kwargs.extend(body_kwargs)

        call, args = self.call(prepared, bool(body_kwargs))
        context.update(body, imports=imports, call=call, args=args + kwargs, indent=indent)
        return self.render_template(self.template_name, context)

    # Hooks

    def imports(self) -> List[str]:
        return [f"import {self.module}"]

    def call(self, prepared: PreparedRequest, has_body: bool) -> Tuple[str, List[str]]:
        """Return the call expression and its leading positional arguments."""
        verb = prepared.method.lower()
        if (
            prepared.request.is_standard_method
            and verb in self.shortcuts
            and (not has_body or verb in self.body_shortcuts)
        ):
            return f"{self.call_prefix}.{verb}", ["url"]
        return f"{self.call_prefix}.request", [PYTHON.literal(prepared.method), "url"]

    def auth_argument(self, prepared: PreparedRequest, imports: List[str]) -> Optional[str]:
        auth = prepared.auth
        credentials = f"{PYTHON.literal(getattr(auth, 'username', ''))}, " + (
            PYTHON.literal(getattr(auth, "password", ""))
        )
        if isinstance(auth, BasicAuth):
            return f"({credentials})"
        if isinstance(auth, DigestAuth):
            return self.digest_auth(credentials, imports)
        return None

    def digest_auth(self, credentials: str, imports: List[str]) -> Optional[str]:
        """Auth expression for digest credentials, or None when the client has none."""
        return None

    def text_body(self, text: str) -> str:
        return PYTHON.literal(text)

    def file_body(self, filename: str) -> str:
        return f"open({PYTHON.literal(filename)}, \"rb\")"

    # Body

    def body_arguments(
        self, prepared: PreparedRequest, indent: str, notes: RenderNotes
    ) -> Tuple[Dict[str, Any], List[str]]:
        """
        Template values and keyword arguments for the request body.

        ``payload`` holds data rendered as a Python literal, ``payload_code``
        and ``files`` hold ready-made expressions. Absent keys mean no
        assignment.
        """
        body: Dict[str, Any] = {}
        kwargs: List[str] = []

        if prepared.is_json:
            body["payload"] = prepared.json_value
            kwargs.append("json=payload")
            return body, kwargs

        if prepared.form_fields:
            body["payload"] = multi_dict(prepared.form_fields)
            kwargs.append("data=payload")
            return body, kwargs

        multipart = prepared.multipart
        if multipart is not None:
            if multipart.fields:
                body["payload"] = multi_dict(multipart.fields)
                kwargs.append("data=payload")
            if multipart.files:
                body["files"] = self.files_literal(multipart.files, indent)
                kwargs.append("files=files")
            return body, kwargs

        if prepared.binary_filename:
            body["payload_code"] = self.file_body(prepared.binary_filename)
            kwargs.append(f"{self.content_keyword}=payload")
            return body, kwargs

        if prepared.has_body:
            text = prepared.body_text()
            if text is None:
                notes.add(BINARY_NOTE)
                body["payload_code"] = self.file_body(BINARY_PLACEHOLDER)
                kwargs.append(f"{self.content_keyword}=payload")
            elif text:
                body["payload_code"] = self.text_body(text)
                kwargs.append(f"{self.content_keyword}=payload")
        return body, kwargs

    def files_literal(self, files, indent: str) -> str:
        items = []
        for part in files:
            parts = [
                PYTHON.literal(part.filename),
                f"open({PYTHON.literal(part.filename)}, \"rb\")",
            ]
            if part.content_type:
                parts.append(PYTHON.literal(part.content_type))
            items.append(f"{indent}({PYTHON.literal(part.name)}, ({', '.join(parts)})),")
        return "[\n" + "\n".join(items) + "\n]"
