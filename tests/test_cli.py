import io
import json
from unittest import mock

import pytest
import requests

from snippetz.cli import create_parser, main
from snippetz.utils import (
    RequestLoaderError,
    load_request,
    load_request_from_file,
    load_request_from_stdin,
    load_request_from_url,
)

DESCRIPTION = {
    "method": "POST",
    "url": "https://api.example.com/items",
    "body": {"type": "json", "value": {"a": 1}},
}


def fake_response(data, content_type="application/json"):
    response = mock.Mock()
    response.json.return_value = data
    response.headers = {"content-type": content_type}
    response.raise_for_status.return_value = None
    return response


class TestLoaders:
    def test_load_from_file(self, request_file):
        source, request = load_request_from_file(request_file)
        assert source.endswith(str(request_file))
        assert request.method_name == "POST"
        assert request.headers == (("Accept", "application/json"),)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_request_from_file(tmp_path / "missing.json")

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RequestLoaderError, match="Invalid JSON"):
            load_request_from_file(path)

    def test_invalid_description(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text(json.dumps({"method": "GET"}), encoding="utf-8")
        with pytest.raises(RequestLoaderError, match="Invalid request description"):
            load_request_from_file(path)

    def test_load_from_stdin(self):
        source, request = load_request_from_stdin(io.StringIO(json.dumps(DESCRIPTION)))
        assert source == "📥 stdin"
        assert request.url == "https://api.example.com/items"

    def test_load_from_url(self):
        with mock.patch("snippetz.utils.requests.get") as get:
            get.return_value = fake_response(DESCRIPTION)
            source, request = load_request_from_url("https://example.com/req.json", timeout=5)
        get.assert_called_once_with("https://example.com/req.json", timeout=5)
        assert source == "🌐 https://example.com/req.json"
        assert request.method_name == "POST"

    def test_url_errors(self):
        with pytest.raises(RequestLoaderError, match="Invalid URL"):
            load_request_from_url("not a url")
        with mock.patch("snippetz.utils.requests.get") as get:
            get.side_effect = requests.exceptions.Timeout()
            with pytest.raises(RequestLoaderError, match="timeout"):
                load_request_from_url("https://example.com/req.json")
        with mock.patch("snippetz.utils.requests.get") as get:
            get.side_effect = requests.exceptions.ConnectionError("refused")
            with pytest.raises(RequestLoaderError, match="Connection error"):
                load_request_from_url("https://example.com/req.json")

    def test_exactly_one_source(self, request_file):
        with pytest.raises(RequestLoaderError):
            load_request()
        with pytest.raises(RequestLoaderError):
            load_request(request_file, url="https://example.com/req.json")


class TestParser:
    def test_generate_requires_target_and_client(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["generate", "request.json"])

    def test_generate_arguments(self):
        args = create_parser().parse_args(
            ["generate", "request.json", "-t", "python", "-c", "requests", "--indent", "2"]
        )
        assert args.file == "request.json"
        assert (args.target, args.client, args.indent) == ("python", "requests", 2)
        assert not args.redact


class TestMain:
    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_list(self, capsys):
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "libcurl" in out
        assert "httpx_async" in out

    def test_list_unknown_target(self, capsys):
        assert main(["list", "--target", "cobol"]) == 1
        assert "Unsupported target" in capsys.readouterr().err

    def test_generate_plain(self, request_file, capsys):
        assert main(["generate", str(request_file), "-t", "shell", "-c", "curl", "--plain"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("curl --request POST")
        assert "https://api.example.com/items" in out

    def test_generate_redacted(self, tmp_path, capsys):
        path = tmp_path / "request.json"
        path.write_text(
            json.dumps(dict(DESCRIPTION, auth={"type": "bearer", "token": "abc123"})),
            encoding="utf-8",
        )
        assert main(["generate", str(path), "-t", "shell", "-c", "curl", "--redact"]) == 0
        out = capsys.readouterr().out
        assert "Bearer REDACTED" in out
        assert "abc123" not in out

    def test_generate_to_file(self, request_file, tmp_path, capsys):
        output = tmp_path / "snippet.py"
        argv = ["generate", str(request_file), "-t", "python", "-c", "requests", "-o", str(output)]
        assert main(argv) == 0
        assert output.read_text(encoding="utf-8").startswith("import requests")
        captured = capsys.readouterr()
        assert "saved to" in captured.err
        assert captured.out == ""

    def test_generate_unsupported_pair(self, request_file, capsys):
        assert main(["generate", str(request_file), "-t", "cobol", "-c", "x"]) == 1
        assert "Generation failed" in capsys.readouterr().err

    def test_generate_without_input(self, capsys):
        assert main(["generate", "-t", "shell", "-c", "curl"]) == 1
        assert "Input source required" in capsys.readouterr().err

    def test_generate_missing_file(self, tmp_path, capsys):
        missing = str(tmp_path / "missing.json")
        assert main(["generate", missing, "-t", "shell", "-c", "curl"]) == 1
        assert "Failed to load input" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "field,value",
        [("auth", "basic"), ("body", ["a"]), ("headers", 5)],
    )
    def test_generate_malformed_description(self, tmp_path, capsys, field, value):
        path = tmp_path / "request.json"
        path.write_text(json.dumps(dict(DESCRIPTION, **{field: value})), encoding="utf-8")
        assert main(["generate", str(path), "-t", "shell", "-c", "curl"]) == 1
        captured = capsys.readouterr()
        assert "Failed to load input" in captured.err
        assert captured.out == ""

    def test_generate_bad_config(self, request_file, tmp_path, capsys):
        config = tmp_path / "options.json"
        config.write_text("[1, 2]", encoding="utf-8")
        argv = ["generate", str(request_file), "-t", "shell", "-c", "curl", "--config", str(config)]
        assert main(argv) == 1
        assert "Error" in capsys.readouterr().err

    def test_generate_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(DESCRIPTION)))
        assert main(["generate", "--stdin", "-t", "node", "-c", "fetch", "--plain"]) == 0
        assert "fetch(" in capsys.readouterr().out

    def test_generate_from_url(self, capsys):
        with mock.patch("snippetz.utils.requests.get") as get:
            get.return_value = fake_response(DESCRIPTION)
            argv = ["generate", "--url", "https://example.com/req.json", "-t", "shell", "-c", "wget"]
            assert main(argv) == 0
        assert "wget" in capsys.readouterr().out

    def test_verbose_metadata(self, request_file, capsys):
        argv = ["--verbose", "generate", str(request_file), "-t", "js", "-c", "jquery"]
        assert main(argv) == 0
        captured = capsys.readouterr()
        assert "Generation Metadata" in captured.err
        assert "Generation Metadata" not in captured.out

    def test_all_plain(self, request_file, capsys):
        assert main(["all", str(request_file), "--plain"]) == 0
        out = capsys.readouterr().out
        assert "### c/libcurl" in out
        assert "### shell/wget" in out
