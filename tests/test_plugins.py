import ast
import json
import re
import shlex

import pytest

from snippetz.core.config import GenerationOptions
from snippetz.core.plugin import DIGEST_NOTE, MERGED_HEADERS_NOTE
from snippetz.core.request import (
    BasicAuth,
    CanonicalRequest,
    FilePart,
    JsonBody,
    MultipartBody,
)
from snippetz.engine import generate_snippet
from snippetz.plugins.python.common import PythonClientPlugin
from snippetz.registry import UnsupportedTargetClient, get_registry

from .samples import API_URL, make_requests

PAIRS = get_registry().list()
REQUESTS = make_requests()
# Clients that split the URL into host and request target
SPLIT_URL = {("http", "http1.1"), ("python", "python3")}
PYTHON_CLIENTS = [client for target, client in PAIRS if target == "python"]


def render(target, client, request, **options):
    return get_registry().resolve(target, client).generate(request, GenerationOptions(**options))


def shell_words(snippet):
    return shlex.split(snippet.replace(" \\\n", " "))


def assignment(snippet, name):
    """Evaluate the literal assigned to ``name`` in a Python snippet."""
    for node in ast.walk(ast.parse(snippet)):
        if isinstance(node, ast.Assign) and any(
            isinstance(t, ast.Name) and t.id == name for t in node.targets
        ):
            return node.value
    raise AssertionError(f"{name} is not assigned")


QUOTED = re.compile(r'"((?:[^"\\\n]|\\.)*)"')
POWERSHELL_QUOTED = re.compile(r'"((?:[^"`\n]|`.)*)"')
BACKSLASH_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}
# Characters that start interpolation unless escaped with a backslash
INTERPOLATION = {"dart": "$", "kotlin": "$", "php": "$", "ruby": "#"}


def decode_backslashed(text, interpolation=""):
    """Decode a double-quoted literal; None if it would not survive the compiler."""
    out = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            char = next(chars, "")
            if char in BACKSLASH_ESCAPES:
                out.append(BACKSLASH_ESCAPES[char])
            elif char and char in interpolation:
                out.append(char)
            else:
                return None
        elif char in interpolation:
            return None
        else:
            out.append(char)
    return "".join(out)


def decode_powershell(text):
    out = []
    chars = iter(text)
    for char in chars:
        if char == "`":
            char = next(chars, "")
            out.append({"n": "\n", "r": "\r", "t": "\t", "0": "\0"}.get(char, char))
        elif char == "$":
            return None
        else:
            out.append(char)
    return "".join(out)


def embedded_json(snippet):
    decoder = json.JSONDecoder()
    found = []
    for i, char in enumerate(snippet):
        if char in "{[":
            try:
                found.append(decoder.raw_decode(snippet, i)[0])
            except ValueError:
                continue
    return found


def snippet_values(target, snippet):
    """String literals and JSON structures of a snippet, decoded the way its language would."""
    if target == "python":
        values = []
        for node in ast.walk(ast.parse(snippet)):
            if isinstance(node, (ast.Constant, ast.Dict, ast.List)):
                try:
                    values.append(ast.literal_eval(node))
                except ValueError:
                    continue
        return values
    if target == "shell":
        return shell_words(snippet)
    if target == "http":
        head, _, body = snippet.partition("\n\n")
        return head.split("\n") + [body]
    if target == "powershell":
        literals = [decode_powershell(m) for m in POWERSHELL_QUOTED.findall(snippet)]
    else:
        interpolation = INTERPOLATION.get(target, "")
        literals = [decode_backslashed(m, interpolation) for m in QUOTED.findall(snippet)]
    return [v for v in literals if v is not None] + embedded_json(snippet)


def matches_json(value, expected):
    if value == expected:
        return True
    if isinstance(value, str):
        try:
            return json.loads(value) == expected
        except ValueError:
            return False
    return False


@pytest.mark.parametrize("target,client", PAIRS, ids=[f"{t}-{c}" for t, c in PAIRS])
class TestEveryPlugin:
    @pytest.mark.parametrize("name", sorted(REQUESTS))
    def test_contains_method_and_host(self, target, client, name):
        request = REQUESTS[name]
        snippet = render(target, client, request)
        assert snippet.strip()
        assert request.method_name.lower() in snippet.lower()
        assert "api.example.com" in snippet

    @pytest.mark.parametrize("name", sorted(REQUESTS))
    def test_deterministic(self, target, client, name):
        request = REQUESTS[name]
        assert render(target, client, request) == render(target, client, request)

    def test_request_not_mutated(self, target, client):
        request = REQUESTS["multipart"]
        before = request.replace()
        render(target, client, request, redact_credentials=True)
        assert request == before

    def test_bearer_header(self, target, client, bearer_request):
        snippet = generate_snippet(bearer_request, target, client)
        if (target, client) in SPLIT_URL:
            assert "api.example.com" in snippet and "/items" in snippet
        else:
            assert API_URL in snippet
        assert "Bearer abc123" in snippet

    def test_bearer_redacted(self, target, client, bearer_request):
        snippet = generate_snippet(bearer_request, target, client, {"redact_credentials": True})
        assert "api.example.com" in snippet
        assert "abc123" not in snippet

    def test_basic_password_redacted(self, target, client):
        request = CanonicalRequest("GET", API_URL, auth=BasicAuth("user", "p@ss"))
        snippet = generate_snippet(request, target, client, {"redact_credentials": True})
        assert "p@ss" not in snippet
        assert "dXNlcjpwQHNz" not in snippet

    def test_no_trailing_whitespace(self, target, client):
        snippet = render(target, client, REQUESTS["json"])
        if target != "http":
            assert all(line == line.rstrip() for line in snippet.split("\n"))
        assert not snippet.endswith("\n")


@pytest.mark.parametrize("target,client", PAIRS, ids=[f"{t}-{c}" for t, c in PAIRS])
class TestLiteralRoundTrip:
    BODY = {"note": 'say "hi" \\ $HOME #{x} `cmd`', "items": [1, 2.5, True, None]}

    def test_header_value_survives(self, target, client):
        request = REQUESTS["headers"]
        value = dict(request.headers)["X-Quote"]
        accepted = {value, f"X-Quote: {value}", f"X-Quote:{value}"}
        found = snippet_values(target, render(target, client, request))
        assert accepted & {v for v in found if isinstance(v, str)}

    def test_json_body_survives(self, target, client):
        request = CanonicalRequest("POST", API_URL, body=JsonBody(self.BODY))
        found = snippet_values(target, render(target, client, request))
        assert any(matches_json(value, self.BODY) for value in found)


class TestUnsupported:
    def test_cobol(self, simple_request):
        with pytest.raises(UnsupportedTargetClient):
            generate_snippet(simple_request, "cobol", "anything")


class TestPythonSnippets:
    @pytest.mark.parametrize("client", PYTHON_CLIENTS)
    @pytest.mark.parametrize("name", sorted(REQUESTS))
    def test_snippets_parse(self, client, name):
        ast.parse(render("python", client, REQUESTS[name]))

    @pytest.mark.parametrize("client", ["requests", "httpx_sync", "httpx_async"])
    def test_json_payload_round_trips(self, client, json_request):
        snippet = render("python", client, json_request)
        assert ast.literal_eval(assignment(snippet, "payload")) == {"a": 1}

    def test_python3_json_payload(self, json_request):
        snippet = render("python", "python3", json_request)
        call = assignment(snippet, "payload")
        assert ast.literal_eval(call.args[0]) == {"a": 1}

    def test_header_with_quotes_round_trips(self):
        snippet = render("python", "requests", REQUESTS["headers"])
        headers = ast.literal_eval(assignment(snippet, "headers"))
        assert headers["X-Quote"] == 'it\'s "quoted" \\ here $HOME `cmd` #{x}'

    def test_requests_merges_duplicate_headers(self):
        snippet = render("python", "requests", REQUESTS["headers"])
        assert f"# {MERGED_HEADERS_NOTE}" in snippet
        assert ast.literal_eval(assignment(snippet, "headers"))["X-Dup"] == "one, two"

    def test_requests_shortcut_and_custom_method(self):
        assert "requests.get(url)" in render("python", "requests", REQUESTS["get"])
        assert 'requests.request("PURGE", url)' in render(
            "python", "requests", REQUESTS["custom_method"]
        )

    def test_requests_native_auth_and_cookies(self):
        snippet = render("python", "requests", REQUESTS["basic"])
        assert 'auth=("user", "p@ss")' in snippet
        assert "Authorization" not in snippet
        snippet = render("python", "requests", REQUESTS["cookies"])
        assert ast.literal_eval(assignment(snippet, "cookies")) == {"session": "s1", "theme": "dark"}

    def test_requests_digest(self):
        snippet = render("python", "requests", REQUESTS["digest"])
        assert "from requests.auth import HTTPDigestAuth" in snippet
        assert 'auth=HTTPDigestAuth("user", "secret")' in snippet

    def test_client_without_digest_support_notes_it(self):
        class BareClientPlugin(PythonClientPlugin):
            client = "bare"
            module = "bare"
            call_prefix = "bare"

        snippet = BareClientPlugin().generate(REQUESTS["digest"])
        assert snippet.startswith(f"# {DIGEST_NOTE}")
        assert "secret" not in snippet
        assert "bare.get(url)" in snippet
        ast.parse(snippet)

    def test_httpx_digest_and_content(self):
        assert 'auth=httpx.DigestAuth("user", "secret")' in render(
            "python", "httpx_sync", REQUESTS["digest"]
        )
        assert "content=payload" in render("python", "httpx_sync", REQUESTS["text"])

    def test_httpx_async_uses_client(self):
        snippet = render("python", "httpx_async", REQUESTS["json"])
        assert "async with httpx.AsyncClient() as client:" in snippet
        assert "await client.post(url, headers=headers, json=payload)" in snippet
        assert "asyncio.run(main())" in snippet

    def test_query_params_kept_as_pairs(self):
        snippet = render("python", "requests", REQUESTS["query"])
        assert ast.literal_eval(assignment(snippet, "params")) == [
            ("sort", "asc"),
            ("page", "2"),
            ("tag", "a b"),
            ("tag", "c"),
        ]

    def test_indent_option(self, json_request):
        snippet = render("python", "requests", json_request, indent_size=2)
        assert '\n  "a": 1,' in snippet


class TestShellSnippets:
    def test_curl_header_survives_shell_parsing(self):
        words = shell_words(render("shell", "curl", REQUESTS["headers"]))
        assert 'X-Quote: it\'s "quoted" \\ here $HOME `cmd` #{x}' in words
        assert words[:3] == ["curl", "--request", "GET"]

    def test_curl_json_body(self, json_request):
        words = shell_words(render("shell", "curl", json_request))
        assert json.loads(words[words.index("--data-raw") + 1]) == {"a": 1}

    def test_curl_auth_and_cookies(self):
        words = shell_words(render("shell", "curl", REQUESTS["digest"]))
        assert "--digest" in words
        assert words[words.index("--user") + 1] == "user:secret"
        words = shell_words(render("shell", "curl", REQUESTS["cookies"]))
        assert words[words.index("--cookie") + 1] == "session=s1; theme=dark"

    def test_curl_multipart(self):
        words = shell_words(render("shell", "curl", REQUESTS["multipart"]))
        assert "title=report" in words
        assert "file=@report.pdf;type=application/pdf" in words

    def test_curl_head(self):
        assert render("shell", "curl", REQUESTS["head"]).startswith("curl --head")

    def test_httpie_header_items(self):
        words = shell_words(render("shell", "httpie", REQUESTS["headers"]))
        assert words[:3] == ["http", "GET", API_URL]
        assert 'X-Quote:it\'s "quoted" \\ here $HOME `cmd` #{x}' in words

    def test_httpie_piped_json(self, json_request):
        words = shell_words(render("shell", "httpie", json_request))
        assert words[:2] == ["printf", "%s"]
        assert json.loads(words[2]) == {"a": 1}

    def test_wget_body(self, json_request):
        words = shell_words(render("shell", "wget", json_request))
        assert json.loads(words[words.index("--body-data") + 1]) == {"a": 1}
        assert words[-2:] == ["-", API_URL]

    @pytest.mark.parametrize(
        "client,flag",
        [("curl", "--request"), ("wget", "--method"), ("httpie", None)],
    )
    def test_method_is_one_shell_word(self, client, flag):
        words = shell_words(render("shell", client, CanonicalRequest("M SEARCH;id", API_URL)))
        if flag:
            assert words[words.index(flag) + 1] == "M SEARCH;id"
        else:
            assert words[1] == "M SEARCH;id"
        assert "id" not in words


class TestOtherSnippets:
    def test_http_message_body(self, json_request):
        message = render("http", "http1.1", json_request)
        head, body = message.split("\n\n", 1)
        assert head.split("\n")[:2] == ["POST /items HTTP/1.1", "Host: api.example.com"]
        assert "Content-Length: 8" in head
        assert json.loads(body) == {"a": 1}

    def test_go_indents_with_tabs(self):
        snippet = render("go", "native", REQUESTS["get"])
        assert "\n\turl := " in snippet
        assert 'http.NewRequest("GET", url, nil)' in snippet

    def test_go_respects_indent_size(self):
        assert "\n    url := " in render("go", "native", REQUESTS["get"], indent_size=4)

    def test_go_imports_os_only_for_files(self):
        fields_only = CanonicalRequest("POST", API_URL, body=MultipartBody(fields=[("a", "1")]))
        snippet = render("go", "native", fields_only)
        assert '"mime/multipart"' in snippet
        assert '"os"' not in snippet
        with_file = CanonicalRequest(
            "POST", API_URL, body=MultipartBody(files=[FilePart("file", "a.txt")])
        )
        assert '"os"' in render("go", "native", with_file)

    def test_fetch_keeps_duplicate_headers(self):
        snippet = render("js", "fetch", REQUESTS["headers"])
        assert snippet.count('"X-Dup"') == 2
        assert MERGED_HEADERS_NOTE not in snippet

    def test_jquery_json_body(self, json_request):
        snippet = render("js", "jquery", json_request)
        assert "JSON.stringify(" in snippet
        assert '"content-type": "application/json"' in snippet

    def test_libcurl_custom_request(self):
        assert 'CURLOPT_CUSTOMREQUEST, "PURGE"' in render("c", "libcurl", REQUESTS["custom_method"])

    def test_http_message_binary_file(self):
        message = render("http", "http1.1", REQUESTS["binary_file"])
        head, body = message.split("\n\n", 1)
        assert body == "<contents of image.png>"
        assert "Content-Length" not in head

    @pytest.mark.parametrize("target", ["java", "kotlin"])
    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
    def test_okhttp_bodiless_write_gets_empty_body(self, target, method):
        snippet = render(target, "okhttp", CanonicalRequest(method, API_URL))
        assert ".method(" not in snippet
        assert f".{method.lower()}(body)" in snippet
        assert "new byte[0]" in snippet or "ByteArray(0).toRequestBody()" in snippet

    def test_okhttp_empty_body_keeps_content_type(self):
        request = CanonicalRequest("POST", API_URL, headers=[("Content-Type", "text/plain")])
        snippet = render("java", "okhttp", request)
        assert 'MediaType.parse("text/plain")' in snippet
        assert 'RequestBody.create("", mediaType)' in snippet

    def test_okhttp_get_has_no_body(self):
        snippet = render("java", "okhttp", REQUESTS["get"])
        assert "RequestBody" not in snippet
        assert ".get()" in snippet


class TestDegradationComments:
    def test_note_is_emitted(self):
        snippet = render("js", "fetch", REQUESTS["digest"])
        assert snippet.startswith(f"// {DIGEST_NOTE}")
        assert "secret" not in snippet

    def test_option_disables_notes(self):
        snippet = render("js", "fetch", REQUESTS["digest"], degradation_comments=False)
        assert DIGEST_NOTE not in snippet

    def test_no_comments_disables_notes(self):
        snippet = render("js", "fetch", REQUESTS["digest"], include_comments=False)
        assert DIGEST_NOTE not in snippet

    def test_plugin_policy(self):
        plugin = get_registry().resolve("js", "fetch")
        options = GenerationOptions()
        assert plugin.wants_degradation_comments(options)
        assert plugin.wants_degradation_comments(GenerationOptions(degradation_comments=False)) is False

    def test_adapted_plugin_note(self):
        snippet = render("js", "jquery", REQUESTS["digest"])
        assert snippet.startswith("// Digest authentication is not supported and was omitted")

    def test_binary_placeholder(self):
        snippet = render("shell", "curl", REQUESTS["binary_raw"])
        assert snippet.startswith("# Binary body cannot be inlined")
        assert "@body.bin" in snippet

    def test_http_message_has_no_comments(self):
        message = render("http", "http1.1", REQUESTS["digest"])
        assert message.startswith("GET /items HTTP/1.1")
