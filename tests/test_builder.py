import pytest

from snippetz.core.builder import CodeBuilder
from snippetz.core.templates import TemplateEngine, TemplateError, create_template_engine
from snippetz.plugins.python.templates import engine as python_engine


class TestCodeBuilder:
    def test_push_with_levels(self):
        code = CodeBuilder("  ")
        code.push("a").push("b", 1).push("c", 2)
        assert code.join() == "a\n  b\n    c"

    def test_blank_never_doubles(self):
        code = CodeBuilder()
        code.blank().push("a").blank().blank().push("b").blank()
        assert code.join() == "a\n\nb"

    def test_append_to_last(self):
        code = CodeBuilder("\t")
        code.push("body", 1).append_to_last(";")
        assert code.join() == "\tbody;"
        assert CodeBuilder().append_to_last("x").join() == "x"

    def test_push_many(self):
        code = CodeBuilder("  ")
        code.push_many(["a", "", "b"], 1)
        assert code.lines == ["  a", "", "  b"]

    def test_custom_line_join(self):
        code = CodeBuilder("  ", line_join=" \\\n")
        code.push("curl").push("--url x", 1)
        assert code.join() == "curl \\\n  --url x"


class TestTemplateEngine:
    def test_render_template(self):
        engine = create_template_engine({"t.j2": "x = {{ value | pystr }}"})
        assert engine.render_template("t.j2", {"value": 'a"b'}) == 'x = "a\\"b"'

    def test_literal_filters(self):
        engine = create_template_engine(
            {
                "dict.j2": "{{ items | pydict }}",
                "pairs.j2": "{{ items | pypairs('  ') }}",
                "literal.j2": "{{ value | pyliteral('  ') }}",
            }
        )
        items = [("a", "1"), ("b", "it's")]
        assert engine.render_template("dict.j2", {"items": items}) == (
            '{\n    "a": "1",\n    "b": "it\'s",\n}'
        )
        assert engine.render_template("pairs.j2", {"items": items}).startswith('[\n  ("a", "1"),')
        assert engine.render_template("literal.j2", {"value": [None, True]}) == (
            "[\n  None,\n  True,\n]"
        )

    def test_missing_template(self):
        with pytest.raises(TemplateError):
            TemplateEngine().render_template("missing.j2", {})

    def test_undefined_variable(self):
        engine = create_template_engine({"t.j2": "{{ missing }}"})
        with pytest.raises(TemplateError):
            engine.render_template("t.j2", {})


class TestPythonTemplates:
    def context(self, **values):
        base = {
            "imports": ["import requests"],
            "url": "https://api.example.com/items",
            "params": (),
            "headers": (),
            "cookies": (),
            "call": "requests.get",
            "args": ["url"],
            "indent": "    ",
        }
        base.update(values)
        return base

    def test_minimal_snippet(self):
        snippet = python_engine.render_template("sync_client.py.j2", self.context())
        assert snippet == (
            "import requests\n\n"
            'url = "https://api.example.com/items"\n\n'
            "response = requests.get(url)\n\n"
            "print(response.text)"
        )

    def test_null_json_payload_is_assigned(self):
        snippet = python_engine.render_template(
            "sync_client.py.j2", self.context(payload=None, args=["url", "json=payload"])
        )
        assert "payload = None\n" in snippet

    def test_payload_code_and_files(self):
        snippet = python_engine.render_template(
            "sync_client.py.j2",
            self.context(payload_code='open("a.bin", "rb")', files="[]"),
        )
        assert 'payload = open("a.bin", "rb")\n\nfiles = []\n\nresponse' in snippet
