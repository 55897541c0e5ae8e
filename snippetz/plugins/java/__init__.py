from .nethttp import NetHttpPlugin
from .okhttp import OkHttpPlugin

__all__ = ["NetHttpPlugin", "OkHttpPlugin"]
