from .httpx import HttpxAsyncPlugin, HttpxSyncPlugin
from .python3 import Python3Plugin
from .requests import RequestsPlugin

__all__ = ["HttpxAsyncPlugin", "HttpxSyncPlugin", "Python3Plugin", "RequestsPlugin"]
