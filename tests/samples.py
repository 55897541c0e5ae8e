"""Sample requests shared by the test modules."""

from snippetz.core.request import (
    BasicAuth,
    BearerAuth,
    BinaryBody,
    CanonicalRequest,
    DigestAuth,
    FilePart,
    FormUrlEncodedBody,
    GraphQLBody,
    JsonBody,
    MultipartBody,
    TextBody,
)

API_URL = "https://api.example.com/items"


def make_requests():
    """Structurally valid requests covering every auth and body variant."""
    return {
        "get": CanonicalRequest("GET", API_URL),
        "head": CanonicalRequest("HEAD", API_URL),
        "custom_method": CanonicalRequest("PURGE", API_URL),
        "query": CanonicalRequest(
            "GET",
            API_URL + "?sort=asc",
            query_params=[("page", "2"), ("tag", "a b"), ("tag", "c")],
        ),
        "headers": CanonicalRequest(
            "GET",
            API_URL,
            headers=[
                ("Accept", "application/json"),
                ("X-Quote", 'it\'s "quoted" \\ here $HOME `cmd` #{x}'),
                ("X-Dup", "one"),
                ("X-Dup", "two"),
            ],
        ),
        "cookies": CanonicalRequest(
            "GET", API_URL, cookies=[("session", "s1"), ("theme", "dark")]
        ),
        "basic": CanonicalRequest("GET", API_URL, auth=BasicAuth("user", "p@ss")),
        "bearer": CanonicalRequest("GET", API_URL, auth=BearerAuth("abc123")),
        "digest": CanonicalRequest("GET", API_URL, auth=DigestAuth("user", "secret")),
        "json": CanonicalRequest(
            "POST",
            API_URL,
            body=JsonBody({"name": "widget", "tags": ["a", "b"], "price": 9.5, "ok": True}),
        ),
        "text": CanonicalRequest("PUT", API_URL, body=TextBody("hello\nworld", "text/plain")),
        "form": CanonicalRequest(
            "POST", API_URL, body=FormUrlEncodedBody([("a", "1"), ("b", "x y")])
        ),
        "multipart": CanonicalRequest(
            "POST",
            API_URL,
            body=MultipartBody(
                fields=[("title", "report")],
                files=[FilePart("file", "report.pdf", "application/pdf")],
            ),
        ),
        "graphql": CanonicalRequest(
            "POST",
            API_URL,
            body=GraphQLBody("query { items { id } }", {"first": 10}),
        ),
        "binary_file": CanonicalRequest(
            "POST", API_URL, body=BinaryBody(b"", "image/png", "image.png")
        ),
        "binary_text": CanonicalRequest("POST", API_URL, body=BinaryBody(b"plain bytes")),
        "binary_raw": CanonicalRequest("POST", API_URL, body=BinaryBody(b"\xff\xfe\x00")),
        "patch_json": CanonicalRequest("PATCH", API_URL, body=JsonBody([1, 2, 3])),
        "delete": CanonicalRequest("DELETE", API_URL),
    }
