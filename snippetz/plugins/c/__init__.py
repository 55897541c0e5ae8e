"""
c/libcurl, rendered by the legacy HAR converter.
"""

from ...adapters.legacy import AdaptedPlugin
from ...legacy import libcurl


class LibcurlPlugin(AdaptedPlugin):
    target = "c"
    client = "libcurl"
    title = "Libcurl"
    link = "http://curl.se/libcurl"

    comment_prefix = "//"
    converter = staticmethod(libcurl.convert)


__all__ = ["LibcurlPlugin"]
