"""
python/httpx_sync and python/httpx_async
"""

from typing import List

from ...core.escaping import PYTHON
from .common import PythonClientPlugin


class HttpxSyncPlugin(PythonClientPlugin):
    """Renders a snippet for the synchronous ``httpx`` API."""

    client = "httpx_sync"
    title = "HTTPX (sync)"
    link = "https://www.python-httpx.org/"

    module = "httpx"
    call_prefix = "httpx"
    content_keyword = "content"

    # httpx shortcut functions only take a body for these verbs
    body_shortcuts = frozenset({"post", "put", "patch"})

    def digest_auth(self, credentials: str, imports: List[str]) -> str:
        return f"httpx.DigestAuth({credentials})"

    def file_body(self, filename: str) -> str:
        return f"open({PYTHON.literal(filename)}, \"rb\").read()"


class HttpxAsyncPlugin(HttpxSyncPlugin):
    """Renders a snippet for ``httpx.AsyncClient`` run with asyncio."""

    client = "httpx_async"
    title = "HTTPX (async)"

    template_name = "async_client.py.j2"
    call_prefix = "client"

    def imports(self) -> List[str]:
        return ["import asyncio", "", "import httpx"]
