"""Tests for generator configuration loading."""

import json

import pytest

from api_syntax.declarations.core.config import (
    DEFAULT_WRAP_COLUMN,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


@pytest.fixture
def manager():
    return ConfigManager()


class TestDefaults:
    def test_common_defaults(self):
        config = GeneratorConfig()

        assert config.wrap_column == DEFAULT_WRAP_COLUMN == 60
        assert config.indent == "\t"
        assert config.language_name is None
        assert config.custom == {}

    def test_language_defaults(self, manager):
        assert manager.get_config("csharp").get("allow_unsafe") is False
        assert manager.get_config("visualbasic").get("include_line_continuation") is False
        assert manager.get_config("javascript").get("camel_case_members") is True
        assert manager.get_config("aspnet").get("default_prefix") == "asp"

    def test_unknown_language_gets_common_defaults(self, manager):
        config = manager.get_config("cobol")
        assert config.wrap_column == 60
        assert config.custom == {}

    def test_defaults_are_not_shared(self, manager):
        first = manager.get_config("aspnet")
        first.custom["namespace_prefixes"]["N:Contoso"] = "contoso"

        second = manager.get_config("aspnet")
        assert "N:Contoso" not in second.get("namespace_prefixes")


class TestOverrides:
    def test_top_level_unknown_keys_become_custom(self, manager):
        config = manager.get_config("csharp", {"wrap_column": 80, "allow_unsafe": True})

        assert config.wrap_column == 80
        assert config.get("allow_unsafe") is True

    def test_custom_section_is_merged(self, manager):
        config = manager.get_config("aspnet", {"custom": {"default_prefix": "ui"}})

        assert config.get("default_prefix") == "ui"
        assert config.get("web_control_base") == "T:System.Web.UI.Control"

    def test_config_file(self, manager, tmp_path):
        path = tmp_path / "vb.json"
        path.write_text(json.dumps({"wrap_column": 72, "include_line_continuation": True}))

        config = manager.get_config("visualbasic", config_file=path)

        assert config.wrap_column == 72
        assert config.get("include_line_continuation") is True

    def test_overrides_win_over_file(self, manager, tmp_path):
        path = tmp_path / "cs.json"
        path.write_text(json.dumps({"wrap_column": 72}))

        config = manager.get_config("csharp", {"wrap_column": 100}, path)
        assert config.wrap_column == 100

    def test_load_config_helper(self):
        assert load_config("csharp", {"indent": "    "}).indent == "    "


class TestFileErrors:
    def test_missing_file(self, manager, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            manager.get_config("csharp", config_file=tmp_path / "missing.json")

    def test_non_json_suffix(self, manager, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("wrap_column: 10")
        with pytest.raises(ConfigError, match="must be JSON"):
            manager.get_config("csharp", config_file=path)

    def test_invalid_json(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            manager.get_config("csharp", config_file=path)

    def test_non_object_document(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            manager.get_config("csharp", config_file=path)


class TestValidationAndSaving:
    def test_valid_config_has_no_warnings(self, manager):
        assert manager.validate_config(manager.get_config("csharp"), "csharp") == []

    def test_warnings(self, manager):
        config = GeneratorConfig(wrap_column=0, indent="", custom={"bogus": 1})
        warnings = manager.validate_config(config, "csharp")

        assert "Invalid wrap_column: 0" in warnings
        assert "Indent must not be empty" in warnings
        assert "Unknown csharp setting: bogus" in warnings

    def test_aspnet_prefix_map_must_be_a_dict(self, manager):
        config = manager.get_config("aspnet", {"namespace_prefixes": ["asp"]})
        warnings = manager.validate_config(config, "aspnet")
        assert any("namespace_prefixes" in warning for warning in warnings)

    def test_save_round_trip(self, manager, tmp_path):
        path = tmp_path / "saved.json"
        manager.save_config(manager.get_config("javascript", {"wrap_column": 90}), path)

        saved = json.loads(path.read_text())
        assert saved["wrap_column"] == 90
        assert saved["custom"]["camel_case_members"] is True

        reloaded = manager.get_config("javascript", config_file=path)
        assert reloaded.wrap_column == 90

    def test_list_languages(self, manager):
        assert set(manager.list_languages()) == {"csharp", "visualbasic", "aspnet", "javascript"}
