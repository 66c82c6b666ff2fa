"""
Test 6: Config System (config.py)

Tests ConfigLoader layering and RoutingSettings validation.
"""

import json
import os

import pytest

from waymark.config import ConfigLoader, RoutingSettings
from waymark.faults import ConfigInvalidFault


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("WAYMARK_"):
            monkeypatch.delenv(key)


# ============================================================================
# RoutingSettings
# ============================================================================

class TestRoutingSettings:

    def test_defaults(self):
        settings = RoutingSettings()
        assert settings.default_subdomain == "www"
        assert settings.auto_generate_route_names is False
        assert settings.use_lowercase_routes is False


# ============================================================================
# ConfigLoader
# ============================================================================

class TestConfigLoader:

    def test_empty(self):
        loader = ConfigLoader.load()
        assert loader.to_dict() == {}
        assert loader.routing_settings() == RoutingSettings()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "routing.yaml"
        path.write_text("routing:\n  default_subdomain: app\n  use_lowercase_routes: true\n")
        settings = ConfigLoader.load(paths=[str(path)]).routing_settings()
        assert settings.default_subdomain == "app"
        assert settings.use_lowercase_routes is True

    def test_json_file(self, tmp_path):
        path = tmp_path / "routing.json"
        path.write_text(json.dumps({"routing": {"append_trailing_slash": True}}))
        assert ConfigLoader.load(paths=[str(path)]).routing_settings().append_trailing_slash is True

    def test_missing_file_is_skipped(self, tmp_path):
        loader = ConfigLoader.load(paths=[str(tmp_path / "missing.yaml")])
        assert loader.to_dict() == {}

    def test_unsupported_file_type(self, tmp_path):
        path = tmp_path / "routing.ini"
        path.write_text("[routing]\n")
        with pytest.raises(ConfigInvalidFault):
            ConfigLoader.load(paths=[str(path)])

    def test_later_files_override(self, tmp_path):
        base = tmp_path / "base.yaml"
        base.write_text("routing:\n  default_subdomain: app\n  use_lowercase_routes: true\n")
        prod = tmp_path / "prod.yaml"
        prod.write_text("routing:\n  default_subdomain: www2\n")
        settings = ConfigLoader.load(paths=[str(base), str(prod)]).routing_settings()
        assert settings.default_subdomain == "www2"
        assert settings.use_lowercase_routes is True

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "WAYMARK_ROUTING__AUTO_GENERATE_ROUTE_NAMES=true\n"
            "OTHER_SETTING=ignored\n"
        )
        loader = ConfigLoader.load(env_file=str(env_file))
        assert loader.get("routing.auto_generate_route_names") is True
        assert "other_setting" not in loader.to_dict()

    def test_environment_overrides_files(self, tmp_path, monkeypatch):
        path = tmp_path / "routing.yaml"
        path.write_text("routing:\n  default_subdomain: app\n")
        monkeypatch.setenv("WAYMARK_ROUTING__DEFAULT_SUBDOMAIN", "env")
        settings = ConfigLoader.load(paths=[str(path)]).routing_settings()
        assert settings.default_subdomain == "env"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("WAYMARK_ROUTING__DEFAULT_SUBDOMAIN", "env")
        loader = ConfigLoader.load(overrides={"routing": {"default_subdomain": "manual"}})
        assert loader.routing_settings().default_subdomain == "manual"

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("ROUTES_ROUTING__USE_LOWERCASE_ROUTES", "yes")
        loader = ConfigLoader.load(env_prefix="ROUTES_")
        assert loader.routing_settings().use_lowercase_routes is True

    def test_get_default(self):
        assert ConfigLoader.load().get("routing.nothing", "fallback") == "fallback"


class TestParseValue:

    @pytest.mark.parametrize("raw, expected", [
        ("true", True), ("Yes", True), ("1", True),
        ("false", False), ("no", False), ("0", False),
        ("42", 42), ("1.5", 1.5),
        ('{"a": 1}', {"a": 1}), ("[1, 2]", [1, 2]),
        ("www", "www"), ("{broken", "{broken"),
    ])
    def test_parse(self, raw, expected):
        assert ConfigLoader()._parse_value(raw) == expected


class TestRoutingSettingsValidation:

    def test_wrong_type(self):
        loader = ConfigLoader.load(overrides={"routing": {"use_lowercase_routes": "sometimes"}})
        with pytest.raises(ConfigInvalidFault) as exc_info:
            loader.routing_settings()
        assert exc_info.value.metadata["key"] == "routing.use_lowercase_routes"

    def test_numeric_subdomain_label(self):
        loader = ConfigLoader.load(overrides={"routing": {"default_subdomain": 2024}})
        assert loader.routing_settings().default_subdomain == "2024"

    def test_routing_section_must_be_mapping(self):
        loader = ConfigLoader.load(overrides={"routing": "yes"})
        with pytest.raises(ConfigInvalidFault):
            loader.routing_settings()

    def test_unknown_keys_are_ignored(self):
        loader = ConfigLoader.load(overrides={"routing": {"colour": "blue"}})
        assert loader.routing_settings() == RoutingSettings()


class TestRootLevelSettings:

    def test_root_keys_without_routing_section(self):
        loader = ConfigLoader.load(overrides={"use_lowercase_routes": True, "debug": True})
        assert loader.routing_settings().use_lowercase_routes is True

    def test_root_keys_from_yaml(self, tmp_path):
        path = tmp_path / "routing.yaml"
        path.write_text("default_subdomain: app\nappend_trailing_slash: true\n")
        settings = ConfigLoader.load(paths=[str(path)]).routing_settings()
        assert settings.default_subdomain == "app"
        assert settings.append_trailing_slash is True

    def test_root_keys_from_environment(self, monkeypatch):
        monkeypatch.setenv("WAYMARK_AUTO_GENERATE_ROUTE_NAMES", "true")
        assert ConfigLoader.load().routing_settings().auto_generate_route_names is True

    def test_routing_section_takes_precedence(self):
        loader = ConfigLoader.load(overrides={
            "default_subdomain": "root",
            "routing": {"use_lowercase_routes": True},
        })
        settings = loader.routing_settings()
        assert settings.use_lowercase_routes is True
        assert settings.default_subdomain == "www"

    def test_root_wrong_type_names_key(self):
        loader = ConfigLoader.load(overrides={"use_lowercase_routes": "sometimes"})
        with pytest.raises(ConfigInvalidFault) as exc_info:
            loader.routing_settings()
        assert exc_info.value.metadata["key"] == "use_lowercase_routes"


class TestEnvironmentStrings:

    @pytest.mark.parametrize("raw", ["no", "yes", "1", "0", "true", "1.10", "2024", "[eu]"])
    def test_string_setting_keeps_raw_text(self, monkeypatch, raw):
        monkeypatch.setenv("WAYMARK_ROUTING__DEFAULT_SUBDOMAIN", raw)
        assert ConfigLoader.load().routing_settings().default_subdomain == raw

    def test_string_setting_from_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("WAYMARK_ROUTING__DEFAULT_SUBDOMAIN=no\n")
        settings = ConfigLoader.load(env_file=str(env_file)).routing_settings()
        assert settings.default_subdomain == "no"

    def test_bool_setting_is_parsed(self, monkeypatch):
        monkeypatch.setenv("WAYMARK_ROUTING__USE_LOWERCASE_ROUTES", "no")
        monkeypatch.setenv("WAYMARK_ROUTING__APPEND_TRAILING_SLASH", "1")
        settings = ConfigLoader.load().routing_settings()
        assert settings.use_lowercase_routes is False
        assert settings.append_trailing_slash is True

    def test_get_parses_environment_values(self, monkeypatch):
        monkeypatch.setenv("WAYMARK_ROUTING__DEFAULT_SUBDOMAIN", "no")
        loader = ConfigLoader.load()
        assert loader.get("routing.default_subdomain") is False
        assert loader.to_dict() == {"routing": {"default_subdomain": False}}

    def test_override_replaces_environment_value(self, monkeypatch):
        monkeypatch.setenv("WAYMARK_ROUTING__DEFAULT_SUBDOMAIN", "env")
        loader = ConfigLoader.load(overrides={"routing": {"default_subdomain": "manual"}})
        assert loader.routing_settings().default_subdomain == "manual"
