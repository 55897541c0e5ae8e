"""
Builtin snippet plugins.

``BUILTIN_PLUGINS`` is the single source of truth for the global registry;
its order is the registration order.
"""

from .c import LibcurlPlugin
from .clojure import CljHttpPlugin
from .csharp import HttpClientPlugin
from .dart import DartHttpPlugin
from .go import GoNativePlugin
from .http import Http11Plugin
from .java import NetHttpPlugin, OkHttpPlugin
from .js import AxiosPlugin, FetchPlugin, JqueryPlugin, XhrPlugin
from .kotlin import KotlinOkHttpPlugin
from .node import NodeAxiosPlugin, NodeFetchPlugin, UndiciPlugin
from .php import GuzzlePlugin, PhpCurlPlugin
from .powershell import RestMethodPlugin, WebRequestPlugin
from .python import HttpxAsyncPlugin, HttpxSyncPlugin, Python3Plugin, RequestsPlugin
from .r import HttrPlugin
from .ruby import RubyNativePlugin
from .rust import ReqwestPlugin
from .shell import CurlPlugin, HttpiePlugin, WgetPlugin

BUILTIN_PLUGINS = (
    LibcurlPlugin,
    CljHttpPlugin,
    HttpClientPlugin,
    DartHttpPlugin,
    GoNativePlugin,
    Http11Plugin,
    NetHttpPlugin,
    OkHttpPlugin,
    AxiosPlugin,
    FetchPlugin,
    JqueryPlugin,
    XhrPlugin,
    KotlinOkHttpPlugin,
    NodeAxiosPlugin,
    NodeFetchPlugin,
    UndiciPlugin,
    PhpCurlPlugin,
    GuzzlePlugin,
    RestMethodPlugin,
    WebRequestPlugin,
    HttpxAsyncPlugin,
    HttpxSyncPlugin,
    Python3Plugin,
    RequestsPlugin,
    HttrPlugin,
    RubyNativePlugin,
    ReqwestPlugin,
    CurlPlugin,
    HttpiePlugin,
    WgetPlugin,
)

__all__ = ["BUILTIN_PLUGINS"]
