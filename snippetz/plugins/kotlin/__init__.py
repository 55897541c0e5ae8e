"""
kotlin/okhttp
"""

from ...core.escaping import KOTLIN
from ..java.okhttp import OkHttpPlugin


class KotlinOkHttpPlugin(OkHttpPlugin):
    """Renders the OkHttp builder chain with the Kotlin extension functions."""

    target = "kotlin"
    client = "okhttp"
    title = "OkHttp"
    link = "http://square.github.io/okhttp/"

    default_indent = 4

    string = KOTLIN
    semicolon = ""

    def declare(self, type_name: str, name: str, value: str, end: bool = True) -> str:
        return f"val {name} = {value}"

    def new(self, expression: str) -> str:
        return expression

    def media_type(self, content_type: str) -> str:
        return f"{self.string.literal(content_type)}.toMediaType()"

    def text_body(self, text: str) -> str:
        return f"{self.string.literal(text)}.toRequestBody(mediaType)"

    def file_body(self, filename: str, media_type: str) -> str:
        return f"File({self.string.literal(filename)}).asRequestBody({media_type})"

    def empty_body(self) -> str:
        return "ByteArray(0).toRequestBody()"


__all__ = ["KotlinOkHttpPlugin"]
