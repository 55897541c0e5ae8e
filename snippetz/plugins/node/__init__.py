from .axios import NodeAxiosPlugin
from .fetch import NodeFetchPlugin
from .undici import UndiciPlugin

__all__ = ["NodeAxiosPlugin", "NodeFetchPlugin", "UndiciPlugin"]
