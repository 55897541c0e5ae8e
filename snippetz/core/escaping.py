"""
String literal utilities for safe snippet generation.

Handles quoting and escaping of header values, URLs and bodies for the
literal syntax of each target language, plus rendering of JSON values as
Python and JavaScript literals.
"""

import json
import math
import re
from typing import Any, Dict, Optional


class StringStyle:
    """Escaping rules for one flavour of quoted string literal."""

    def __init__(
        self,
        quote: str,
        escapes: Dict[str, str],
        control_format: Optional[str] = None,
    ):
        """
        Args:
            quote: Delimiter placed around the literal
            escapes: Character replacements applied inside the literal
            control_format: Format for remaining control characters,
                given the code point; None keeps them verbatim
        """
        self.quote = quote
        self.escapes = escapes
        self.control_format = control_format

    def escape(self, value: str) -> str:
        """Escape a value without adding delimiters."""
        out = []
        for char in str(value):
            replacement = self.escapes.get(char)
            if replacement is not None:
                out.append(replacement)
            elif self.control_format and _is_control(char):
                out.append(self.control_format.format(ord(char)))
            else:
                out.append(char)
        return "".join(out)

    def literal(self, value: Any) -> str:
        """Return ``value`` as a complete quoted literal."""
        return f"{self.quote}{self.escape(value)}{self.quote}"

    __call__ = literal


def _is_control(char: str) -> bool:
    code = ord(char)
    return code < 0x20 or code == 0x7F


_C_BASE = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_JAVA_BASE = {**_C_BASE, "\b": "\\b", "\f": "\\f"}

PYTHON = StringStyle('"', _C_BASE, "\\x{:02x}")
JAVASCRIPT = StringStyle(
    '"', {**_JAVA_BASE, "\u2028": "\\u2028", "\u2029": "\\u2029"}, "\\u{:04x}"
)
GO = StringStyle('"', _C_BASE, "\\x{:02x}")
JAVA = StringStyle('"', _JAVA_BASE, "\\u{:04x}")
CSHARP = StringStyle('"', {**_JAVA_BASE, "\0": "\\0"}, "\\u{:04x}")
CLOJURE = StringStyle('"', _JAVA_BASE, "\\u{:04x}")
KOTLIN = StringStyle('"', {**_C_BASE, "\b": "\\b", "$": "\\$"}, "\\u{:04x}")
DART = StringStyle('"', {**_JAVA_BASE, "$": "\\$"}, "\\u{:04x}")
RUST = StringStyle('"', _C_BASE, "\\u{{{:x}}}")
C = StringStyle('"', _C_BASE, "\\{:03o}")
R = StringStyle('"', _C_BASE, "\\x{:02x}")
PHP = StringStyle(
    '"',
    {**_C_BASE, "$": "\\$", "\v": "\\v", "\f": "\\f", "\x1b": "\\e"},
    "\\x{:02x}",
)
RUBY = StringStyle('"', {**_C_BASE, "#": "\\#"}, "\\x{:02x}")
# PowerShell also treats typographic double quotes as delimiters
POWERSHELL = StringStyle(
    '"',
    {
        "`": "``",
        "$": "`$",
        '"': '`"',
        "“": "`“",
        "”": "`”",
        "„": "`„",
        "\n": "`n",
        "\r": "`r",
        "\t": "`t",
        "\0": "`0",
    },
)
SHELL = StringStyle("'", {"'": "'\\''"})
# bash/zsh ANSI-C quoting, used when a value holds control characters
SHELL_ANSI = StringStyle("$'", {"\\": "\\\\", "'": "\\'", **_C_BASE}, "\\x{:02x}")


def shell_quote(value: Any) -> str:
    """Quote a value as a single shell word."""
    value = str(value)
    if any(_is_control(char) for char in value):
        return "$'" + SHELL_ANSI.escape(value) + "'"
    return SHELL.literal(value)


# Characters that never need quoting in a POSIX shell word
_SHELL_SAFE = re.compile(r"[\w@%+=:,./-]+", re.ASCII)


def shell_word(value: Any) -> str:
    """Return ``value`` bare when it is a safe shell word, quoted otherwise."""
    value = str(value)
    if _SHELL_SAFE.fullmatch(value):
        return value
    return shell_quote(value)


def json_text(value: Any, indent: Optional[int] = None) -> str:
    """Serialize a JSON value deterministically, keeping key order."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def indent_block(text: str, prefix: str, first_line: bool = False) -> str:
    """Prefix continuation lines (and optionally the first) of a block."""
    lines = text.split("\n")
    start = 0 if first_line else 1
    for i in range(start, len(lines)):
        if lines[i]:
            lines[i] = prefix + lines[i]
    return "\n".join(lines)


def python_literal(value: Any, indent: str = "    ", level: int = 0) -> str:
    """
    Render a JSON-compatible value as Python source.

    Dicts and lists spread over multiple lines; scalars use Python syntax
    (``True``, ``None``, ...). Strings go through :data:`PYTHON`.
    """
    pad = indent * (level + 1)
    end_pad = indent * level

    if isinstance(value, dict):
        if not value:
            return "{}"
        items = [
            f"{pad}{PYTHON.literal(str(k))}: {python_literal(v, indent, level + 1)},"
            for k, v in value.items()
        ]
        return "{\n" + "\n".join(items) + f"\n{end_pad}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{pad}{python_literal(v, indent, level + 1)}," for v in value]
        return "[\n" + "\n".join(items) + f"\n{end_pad}]"

    return _python_scalar(value)


def _python_scalar(value: Any) -> str:
    if value is None:
        return "None"
    if value is True:
        return "True"
    if value is False:
        return "False"
    if isinstance(value, float):
        if math.isnan(value):
            return 'float("nan")'
        if math.isinf(value):
            return 'float("inf")' if value > 0 else 'float("-inf")'
        return repr(value)
    if isinstance(value, int):
        return str(value)
    return PYTHON.literal(str(value))


def python_pairs(pairs, indent: str = "    ", level: int = 0) -> str:
    """Render ``(name, value)`` pairs as a Python list of tuples."""
    if not pairs:
        return "[]"
    pad = indent * (level + 1)
    items = [
        f"{pad}({PYTHON.literal(name)}, {PYTHON.literal(value)}),"
        for name, value in pairs
    ]
    return "[\n" + "\n".join(items) + f"\n{indent * level}]"


def python_dict(pairs, indent: str = "    ", level: int = 0) -> str:
    """Render unique ``(name, value)`` pairs as a Python dict literal."""
    return python_literal(dict(pairs), indent, level)


def js_literal(value: Any, indent: str = "  ", level: int = 0) -> str:
    """
    Render a JSON-compatible value as a JavaScript expression.

    JSON is a JavaScript subset, so the serialized document is reused and
    re-indented to sit at ``level``.
    """
    width = len(indent.expandtabs(4)) or None
    text = json.dumps(value, indent=width, ensure_ascii=False)
    if indent == "\t":
        text = _tabs_for_json_indent(text)
    text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    return indent_block(text, indent * level)


def _tabs_for_json_indent(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        stripped = line.lstrip(" ")
        depth = (len(line) - len(stripped)) // 4
        lines.append("\t" * depth + stripped)
    return "\n".join(lines)


def js_object(pairs, indent: str = "  ", level: int = 0) -> str:
    """Render unique ``(name, value)`` pairs as a JavaScript object literal."""
    return js_literal(dict(pairs), indent, level)
