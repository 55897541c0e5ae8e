import pytest

from snippetz.core.plugin import SnippetPlugin
from snippetz.plugins import BUILTIN_PLUGINS
from snippetz.plugins.shell import CurlPlugin
from snippetz.registry import (
    InvalidPluginError,
    PluginRegistrationConflict,
    PluginRegistry,
    RegistryError,
    UnsupportedTargetClient,
    create_registry,
    get_registry,
    list_supported,
    resolve_plugin,
)


class EchoPlugin:
    """Minimal plugin that does not derive from SnippetPlugin."""

    target = "echo"
    client = "plain"

    def generate(self, request, options=None):
        return f"{request.method_name} {request.url}"


class LoudCurlPlugin(SnippetPlugin):
    target = "shell"
    client = "curl"

    def render(self, prepared, options, notes):
        return "CURL"


class TestRegistration:
    def test_register_class_and_instance(self):
        registry = PluginRegistry()
        plugin = registry.register(CurlPlugin)
        assert isinstance(plugin, CurlPlugin)
        registry.register(EchoPlugin())
        assert registry.list() == [("shell", "curl"), ("echo", "plain")]
        assert len(registry) == 2

    def test_duplicate_raises_and_keeps_original(self, registry):
        original = registry.resolve("shell", "curl")
        with pytest.raises(PluginRegistrationConflict) as excinfo:
            registry.register(LoudCurlPlugin)
        assert excinfo.value.target == "shell"
        assert excinfo.value.client == "curl"
        assert registry.resolve("shell", "curl") is original

    def test_replace_overrides(self, registry):
        registry.register(LoudCurlPlugin, replace=True)
        assert isinstance(registry.resolve("shell", "curl"), LoudCurlPlugin)
        assert len(registry) == len(BUILTIN_PLUGINS)

    def test_invalid_plugin(self):
        registry = PluginRegistry()
        with pytest.raises(InvalidPluginError):
            registry.register(object())
        with pytest.raises(TypeError):
            registry.register("not a plugin")

    def test_empty_target_rejected(self):
        class Nameless(EchoPlugin):
            target = ""

        with pytest.raises(InvalidPluginError):
            PluginRegistry().register(Nameless)

    def test_frozen_registry_rejects_registration(self, registry):
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RegistryError):
            registry.register(EchoPlugin)


class TestLookup:
    def test_resolve_unknown_pair(self, registry):
        with pytest.raises(UnsupportedTargetClient) as excinfo:
            registry.resolve("cobol", "anything")
        assert excinfo.value.target == "cobol"
        assert isinstance(excinfo.value, LookupError)

    def test_unknown_client_lists_alternatives(self, registry):
        with pytest.raises(UnsupportedTargetClient, match="requests"):
            registry.resolve("python", "urllib3")

    def test_lookup_is_exact(self, registry):
        assert registry.find("Python", "requests") is None
        assert registry.find("python", "requests") is not None

    def test_list_order_follows_registration(self, registry):
        pairs = registry.list()
        assert len(pairs) == len(BUILTIN_PLUGINS) == 30
        assert pairs[0] == ("c", "libcurl")
        assert pairs[-1] == ("shell", "wget")
        assert len(set(pairs)) == len(pairs)

    def test_list_targets(self, registry):
        targets = registry.list_targets()
        assert list(targets)[:3] == ["c", "clojure", "csharp"]
        assert targets["python"] == ["httpx_async", "httpx_sync", "python3", "requests"]
        assert targets["shell"] == ["curl", "httpie", "wget"]

    def test_membership(self, registry):
        assert ("shell", "curl") in registry
        assert registry.is_supported("go", "native")
        assert not registry.is_supported("go", "resty")
        assert {plugin.target for plugin in registry} >= {"c", "rust", "shell"}


class TestPluginInfo:
    def test_native_plugin_info(self, registry):
        info = registry.get_plugin_info("python", "requests")
        assert info["title"] == "Requests"
        assert info["class"] == "RequestsPlugin"
        assert info["adapted"] is False

    def test_adapted_plugin_info(self, registry):
        assert registry.get_plugin_info("js", "jquery")["adapted"] is True

    def test_plugin_without_describe(self):
        registry = create_registry([EchoPlugin])
        info = registry.get_plugin_info("echo", "plain")
        assert info["title"] == "echo/plain"
        assert info["class"] == "EchoPlugin"


class TestGlobalRegistry:
    def test_global_registry_is_frozen_singleton(self):
        registry = get_registry()
        assert registry is get_registry()
        assert registry.frozen
        with pytest.raises(RegistryError):
            registry.register(EchoPlugin)

    def test_module_functions(self):
        assert list_supported() == get_registry().list()
        assert resolve_plugin("shell", "curl").client == "curl"
        with pytest.raises(UnsupportedTargetClient):
            resolve_plugin("cobol", "anything")
