"""
ruby/native: ``net/http`` from the standard library.
"""

from ...core.builder import CodeBuilder
from ...core.config import GenerationOptions
from ...core.escaping import RUBY
from ...core.plugin import BINARY_NOTE, BINARY_PLACEHOLDER, RenderNotes, SnippetPlugin
from ...core.prepare import PreparedRequest
from ...core.request import BasicAuth

# Net::HTTP request classes for the verbs it defines
REQUEST_CLASSES = {
    "GET": "Get",
    "POST": "Post",
    "PUT": "Put",
    "PATCH": "Patch",
    "DELETE": "Delete",
    "HEAD": "Head",
    "OPTIONS": "Options",
    "TRACE": "Trace",
}


class RubyNativePlugin(SnippetPlugin):
    """Renders a Ruby script using ``Net::HTTP``."""

    target = "ruby"
    client = "native"
    title = "net::http"
    link = "http://ruby-doc.org/stdlib-2.2.1/libdoc/net/http/rdoc/Net/HTTP.html"

    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        code = CodeBuilder(self.indent(options))
        self.drop_digest(prepared, notes)

        code.push("require 'uri'")
        code.push("require 'net/http'")
        code.blank()
        code.push(f"url = URI({RUBY.literal(prepared.full_url)})")
        code.blank()
        code.push("http = Net::HTTP.new(url.host, url.port)")
        if prepared.scheme == "https":
            code.push("http.use_ssl = true")
        code.blank()

        request_class = REQUEST_CLASSES.get(prepared.method)
        if request_class and prepared.request.is_standard_method:
            code.push(f"request = Net::HTTP::{request_class}.new(url)")
        else:
            code.push(
                f"request = Net::HTTPGenericRequest.new({RUBY.literal(prepared.method)}, "
                "true, true, url)"
            )

        auth = prepared.auth
        basic = isinstance(auth, BasicAuth)
        seen = set()
        for name, value in prepared.all_headers(include_auth=not basic):
            # Assignment replaces a field; repeats must be added
            if name.lower() in seen:
                code.push(f"request.add_field({RUBY.literal(name)}, {RUBY.literal(value)})")
            else:
                code.push(f"request[{RUBY.literal(name)}] = {RUBY.literal(value)}")
            seen.add(name.lower())

        if basic:
            code.push(
                f"request.basic_auth({RUBY.literal(auth.username)}, "
                f"{RUBY.literal(auth.password)})"
            )

        self._push_body(code, prepared, notes)

        code.blank()
        code.push("response = http.request(request)")
        code.push("puts response.read_body")
        return code.join()

    def _push_body(self, code: CodeBuilder, prepared: PreparedRequest, notes: RenderNotes):
        multipart = prepared.multipart
        if multipart is not None:
            entries = [
                f"[{RUBY.literal(name)}, {RUBY.literal(value)}]"
                for name, value in multipart.fields
            ]
            for part in multipart.files:
                extra = ""
                if part.content_type:
                    extra = f", {{ content_type: {RUBY.literal(part.content_type)} }}"
                entries.append(
                    f"[{RUBY.literal(part.name)}, File.open({RUBY.literal(part.filename)})"
                    f"{extra}]"
                )
            code.push(f"request.set_form([{', '.join(entries)}], 'multipart/form-data')")
            return

        filename = prepared.binary_filename
        text = prepared.body_text()
        if prepared.has_body and text is None and not filename:
            notes.add(BINARY_NOTE)
            filename = BINARY_PLACEHOLDER

        if filename:
            code.push(f"request.body = File.binread({RUBY.literal(filename)})")
        elif text:
            code.push(f"request.body = {RUBY.literal(text)}")
