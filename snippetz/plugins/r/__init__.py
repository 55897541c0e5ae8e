"""
r/httr, rendered by the legacy HAR converter.
"""

from ...adapters.legacy import AdaptedPlugin
from ...legacy import httr


class HttrPlugin(AdaptedPlugin):
    target = "r"
    client = "httr"
    title = "httr"
    link = "https://cran.r-project.org/package=httr"

    comment_prefix = "#"
    converter = staticmethod(httr.convert)


__all__ = ["HttrPlugin"]
