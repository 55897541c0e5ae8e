"""
js/jquery, rendered by the legacy HAR converter.
"""

from ...adapters.legacy import AdaptedPlugin
from ...legacy import jquery


class JqueryPlugin(AdaptedPlugin):
    target = "js"
    client = "jquery"
    title = "jQuery"
    link = "https://api.jquery.com/jquery.ajax/"

    comment_prefix = "//"
    converter = staticmethod(jquery.convert)
