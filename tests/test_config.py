import json

import pytest

from snippetz.core.config import (
    EXAMPLE_CONFIG,
    ConfigError,
    ConfigManager,
    GenerationOptions,
    load_options,
)


class TestGenerationOptions:
    def test_defaults(self):
        options = GenerationOptions()
        assert options.indent_size is None
        assert options.include_comments is True
        assert options.redact_credentials is False
        assert options.degradation_comments is None
        assert options.custom == {}

    def test_indent_unit(self):
        assert GenerationOptions().indent_unit(4) == "    "
        assert GenerationOptions(indent_size=2).indent_unit(4) == "  "
        assert GenerationOptions(use_tabs=True, indent_size=8).indent_unit() == "\t"

    def test_from_dict_unknown_keys_land_in_custom(self):
        options = GenerationOptions.from_dict({"indent_size": 3, "favourite": "blue"})
        assert options.indent_size == 3
        assert options.custom == {"favourite": "blue"}

    def test_from_dict_accepts_camel_case(self):
        options = GenerationOptions.from_dict({"indentSize": 8, "redactCredentials": True})
        assert options.indent_size == 8
        assert options.redact_credentials is True

    def test_to_dict_includes_custom(self):
        data = GenerationOptions(custom={"x": 1}).to_dict()
        assert data["x"] == 1
        assert data["include_comments"] is True


class TestConfigManager:
    def test_target_defaults(self):
        manager = ConfigManager()
        assert manager.get_options("python").indent_size == 4
        assert manager.get_options("go").use_tabs is True
        assert manager.get_options("js").indent_size is None
        assert "python" in manager.list_targets()

    def test_custom_options_override_defaults(self):
        options = ConfigManager().get_options("python", {"indent_size": 2})
        assert options.indent_size == 2

    def test_config_file(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps(EXAMPLE_CONFIG), encoding="utf-8")
        options = ConfigManager().get_options("js", config_file=path)
        assert options.indent_size == 4
        assert options.redact_credentials is True
        assert options.degradation_comments is False

    def test_overrides_win_over_file(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text('{"indent_size": 4}', encoding="utf-8")
        options = ConfigManager().get_options("js", {"indent_size": 1}, path)
        assert options.indent_size == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager().get_options("js", config_file=tmp_path / "missing.json")

    def test_non_json_suffix(self, tmp_path):
        path = tmp_path / "options.yaml"
        path.write_text("indent_size: 2", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be JSON"):
            ConfigManager().get_options("js", config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            ConfigManager().get_options("js", config_file=path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            ConfigManager().get_options("js", config_file=path)

    def test_save_and_reload(self, tmp_path):
        manager = ConfigManager()
        path = tmp_path / "saved.json"
        manager.save_options(GenerationOptions(indent_size=6, redact_credentials=True), path)
        options = manager.get_options("js", config_file=path)
        assert options.indent_size == 6
        assert options.redact_credentials is True

    def test_validate_options(self):
        manager = ConfigManager()
        assert manager.validate_options(GenerationOptions()) == []

        warnings = manager.validate_options(
            GenerationOptions(
                indent_size=-1,
                line_ending="\r",
                include_comments=False,
                degradation_comments=True,
                custom={"colour": "red"},
            )
        )
        assert any("indent_size" in w for w in warnings)
        assert any("line_ending" in w for w in warnings)
        assert any("degradation_comments" in w for w in warnings)
        assert any("colour" in w for w in warnings)

    def test_validate_tabs_with_indent(self):
        warnings = ConfigManager().validate_options(GenerationOptions(indent_size=2, use_tabs=True))
        assert warnings == ["indent_size is ignored when use_tabs is set"]


class TestLoadOptions:
    def test_load_options(self):
        options = load_options("rust", {"include_comments": False})
        assert options.indent_size == 4
        assert options.include_comments is False
