"""
Line accumulator for building snippets.
"""

from typing import List


class CodeBuilder:
    """Collects indented lines and joins them into a snippet."""

    def __init__(self, indent: str = "  ", line_join: str = "\n"):
        self.indent = indent
        self.line_join = line_join
        self.lines: List[str] = []

    def indent_line(self, line: str, level: int = 0) -> str:
        return f"{self.indent * level}{line}" if line else ""

    def push(self, line: str, level: int = 0) -> "CodeBuilder":
        """Append a line at the given indentation level."""
        self.lines.append(self.indent_line(line, level))
        return self

    def push_many(self, lines, level: int = 0) -> "CodeBuilder":
        for line in lines:
            self.push(line, level)
        return self

    def blank(self) -> "CodeBuilder":
        """Append an empty line, never two in a row."""
        if self.lines and self.lines[-1] != "":
            self.lines.append("")
        return self

    def append_to_last(self, text: str) -> "CodeBuilder":
        if self.lines:
            self.lines[-1] += text
        else:
            self.lines.append(text)
        return self

    def join(self) -> str:
        while self.lines and self.lines[-1] == "":
            self.lines.pop()
        return self.line_join.join(self.lines)
