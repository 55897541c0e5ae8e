"""
js/xhr, rendered by the legacy HAR converter.
"""

from ...adapters.legacy import AdaptedPlugin
from ...legacy import xhr


class XhrPlugin(AdaptedPlugin):
    target = "js"
    client = "xhr"
    title = "XMLHttpRequest"
    link = "https://developer.mozilla.org/en-US/docs/Web/API/XMLHttpRequest"

    comment_prefix = "//"
    converter = staticmethod(xhr.convert)
