from .curl import CurlPlugin
from .httpie import HttpiePlugin
from .wget import WgetPlugin

__all__ = ["CurlPlugin", "HttpiePlugin", "WgetPlugin"]
