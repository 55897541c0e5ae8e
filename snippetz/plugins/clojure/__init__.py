"""
clojure/clj_http, rendered by the legacy HAR converter.
"""

from ...adapters.legacy import AdaptedPlugin
from ...legacy import clj_http


class CljHttpPlugin(AdaptedPlugin):
    target = "clojure"
    client = "clj_http"
    title = "clj-http"
    link = "https://github.com/dakrone/clj-http"

    comment_prefix = ";;"
    converter = staticmethod(clj_http.convert)


__all__ = ["CljHttpPlugin"]
