import pytest

from snippetz.core.request import CanonicalRequest, JsonBody
from snippetz.plugins import BUILTIN_PLUGINS
from snippetz.registry import create_registry

from .samples import API_URL


@pytest.fixture
def simple_request():
    return CanonicalRequest("GET", API_URL)


@pytest.fixture
def bearer_request():
    return CanonicalRequest(
        "GET", API_URL, headers=[("Authorization", "Bearer abc123")]
    )


@pytest.fixture
def json_request():
    return CanonicalRequest("POST", API_URL, body=JsonBody({"a": 1}))


@pytest.fixture
def registry():
    """A fresh, unfrozen registry with the builtin plugins."""
    return create_registry(BUILTIN_PLUGINS)


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(
        '{"method": "POST", "url": "https://api.example.com/items",'
        ' "headers": [["Accept", "application/json"]],'
        ' "body": {"type": "json", "value": {"a": 1}}}',
        encoding="utf-8",
    )
    return path
