"""
python/requests
"""

from typing import List

from ...core.escaping import PYTHON
from .common import PythonClientPlugin


class RequestsPlugin(PythonClientPlugin):
    """Renders a snippet for the ``requests`` library."""

    client = "requests"
    title = "Requests"
    link = "https://requests.readthedocs.io/"

    module = "requests"
    call_prefix = "requests"
    native_cookies = True

    def digest_auth(self, credentials: str, imports: List[str]) -> str:
        imports.append("from requests.auth import HTTPDigestAuth")
        return f"HTTPDigestAuth({credentials})"

    def text_body(self, text: str) -> str:
        # http.client encodes str bodies as latin-1
        if text.isascii():
            return PYTHON.literal(text)
        return f"{PYTHON.literal(text)}.encode(\"utf-8\")"
