"""
Legacy HAR-based snippet converters.

These routines predate the canonical request model: each takes a HAR
request object plus an options dict and returns snippet text. New code
reaches them through :mod:`snippetz.adapters.legacy`.
"""

from . import clj_http, httr, jquery, libcurl, xhr
from .har import normalize

# (target, client) -> convert(har, options)
LEGACY_CONVERTERS = {
    ("c", "libcurl"): libcurl.convert,
    ("clojure", "clj_http"): clj_http.convert,
    ("js", "jquery"): jquery.convert,
    ("js", "xhr"): xhr.convert,
    ("r", "httr"): httr.convert,
}

__all__ = ["LEGACY_CONVERTERS", "normalize"]
