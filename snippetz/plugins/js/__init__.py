from .axios import AxiosPlugin
from .fetch import FetchPlugin
from .jquery import JqueryPlugin
from .xhr import XhrPlugin

__all__ = ["AxiosPlugin", "FetchPlugin", "JqueryPlugin", "XhrPlugin"]
