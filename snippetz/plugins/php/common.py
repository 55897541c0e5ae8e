"""
PHP array rendering shared by the PHP plugins.
"""

from ...core.escaping import PHP


def php_array(entries, indent: str, level: int = 0) -> str:
    """
    Render ``(key, expression)`` entries as a short array literal.

    A key of None produces a list element. Expressions spanning several
    lines must already be indented for ``level + 1``.
    """
    if not entries:
        return "[]"
    pad = indent * (level + 1)
    lines = []
    for key, value in entries:
        if key is None:
            lines.append(f"{pad}{value},")
        else:
            lines.append(f"{pad}{key} => {value},")
    return "[\n" + "\n".join(lines) + f"\n{indent * level}]"


def php_string_map(pairs, indent: str, level: int = 0) -> str:
    """Array of string keys to string values (or lists for repeated keys)."""
    grouped = {}
    for name, value in pairs:
        grouped.setdefault(name, []).append(value)

    entries = []
    for name, values in grouped.items():
        if len(values) == 1:
            rendered = PHP.literal(values[0])
        else:
            rendered = "[" + ", ".join(PHP.literal(v) for v in values) + "]"
        entries.append((PHP.literal(name), rendered))
    return php_array(entries, indent, level)
