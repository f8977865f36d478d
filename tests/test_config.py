"""
Unit tests for configuration loading and conversion to RenderConfig.

Run with:
    pytest tests/test_config.py -v
"""

import json

import pytest

from changelog_gen.config import Config, ConfigManager, parse_bool
from changelog_gen.engine import InvalidConfigError


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.order == "desc"
        assert config.show_emoji is True
        assert config.remove_type is True
        assert config.original_markdown is False
        assert config.gh_pages == "gh-pages"

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"order": "asc", "unknown_key": "value"})
        assert config.order == "asc"
        assert not hasattr(config, "unknown_key")

    def test_validate_invalid_order(self):
        config = Config(order="sideways")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.order == "desc"  # reset to default

    @pytest.mark.parametrize("raw, expected", [
        ("false", False),
        ("False", False),
        ("0", False),
        ("true", True),
        ("yes", True),
    ])
    def test_validate_parses_string_booleans(self, raw, expected):
        config = Config(show_emoji=raw)
        assert config.validate() == []
        assert config.show_emoji is expected

    def test_validate_invalid_boolean(self):
        config = Config(remove_type="maybe")
        warnings = config.validate()
        assert any("remove_type" in w for w in warnings)
        assert config.remove_type is True

    def test_validate_non_string_template(self):
        config = Config(template=42)
        warnings = config.validate()
        assert any("template" in w for w in warnings)
        assert config.template == ""

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"order": "invalid"})
        err = capsys.readouterr().err
        assert "Config warning" in err

    def test_apply_env(self):
        config = Config().apply_env({
            "CHANGELOG_ORDER": "asc",
            "CHANGELOG_CUSTOM_EMOJI": "deps📦",
            "UNRELATED": "x",
        })
        assert config.order == "asc"
        assert config.custom_emoji == "deps📦"

    def test_apply_env_server_url(self):
        config = Config().apply_env({"GITHUB_SERVER_URL": "https://ghe.example.com"})
        assert config.server_url == "https://ghe.example.com"

    def test_apply_env_ignores_empty_values(self):
        config = Config(template="## {{version}}").apply_env({"CHANGELOG_TEMPLATE": ""})
        assert config.template == "## {{version}}"


class TestToRenderConfig:

    def test_carries_options(self):
        config = Config(order="asc", show_emoji=False, filter_author=" alice ", custom_emoji="deps📦")
        render = config.to_render_config()
        assert render.order == "asc"
        assert render.show_emoji is False
        assert render.filter_author == "alice"
        assert render.registry["deps"] == "📦"
        assert render.content_filter is None

    def test_compiles_filter(self):
        render = Config(filter=r"s/\s*\(#\d+\)//").to_render_config()
        assert render.content_filter.is_rewrite

    def test_bad_filter_raises(self):
        with pytest.raises(InvalidConfigError):
            Config(filter="[unclosed").to_render_config()


@pytest.mark.parametrize("value, expected", [
    (True, True),
    ("on", True),
    ("OFF", False),
    ("", None),
    ("nope", None),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


# ---------------------------------------------------------------------------
# ConfigManager
# ---------------------------------------------------------------------------

class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        manager = ConfigManager()
        config = manager.load()
        assert config.order == "desc"
        assert manager.get_config_path() is None

    def test_load_reads_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / ".changelogrc"
        config_file.write_text(json.dumps({"order": "asc", "custom_emoji": "deps📦"}), encoding="utf-8")

        manager = ConfigManager()
        config = manager.load()
        assert config.order == "asc"
        assert config.custom_emoji == "deps📦"
        assert manager.get_config_path().name == config_file.name

    def test_load_is_cached(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        manager = ConfigManager()
        assert manager.load() is manager.load()

    def test_load_reads_home_file(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".changelogrc").write_text(json.dumps({"template": "## {{version}}\n{{feat}}"}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: home)

        manager = ConfigManager()
        assert manager.load().template == "## {{version}}\n{{feat}}"
        assert manager.get_config_path() == home / ".changelogrc"

    def test_malformed_json_returns_defaults(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".changelogrc").write_text("not valid json {{{")

        config = ConfigManager().load()
        assert config.order == "desc"  # falls back to defaults
        assert "Could not load" in capsys.readouterr().err

    def test_non_object_json_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".changelogrc").write_text('["asc"]')

        config = ConfigManager().load()
        assert config == Config()
