"""Tests for fountainkit settings."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from fountainkit.config import (
    FountainKitSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)
from fountainkit.exceptions import ConfigurationError
from fountainkit.render.options import RenderOptions


class TestDefaults:
    """Test default values and validation."""

    def test_defaults(self):
        """Default settings match the documented defaults."""
        settings = FountainKitSettings()
        assert settings.wrap_width == 64
        assert settings.show_section is False
        assert settings.show_synopsis is False
        assert settings.show_notes is False
        assert settings.html_page is False
        assert settings.inline_css is False
        assert settings.link_css is False
        assert settings.css_path == Path("fountain.css")
        assert settings.pretty is False
        assert settings.type_names is False
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.log_file is None

    @pytest.mark.parametrize("width", [0, -5])
    def test_wrap_width_must_be_positive(self, width):
        """Non-positive widths are rejected."""
        with pytest.raises(ValidationError):
            FountainKitSettings(wrap_width=width)

    def test_invalid_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            FountainKitSettings(log_level="LOUD")

    def test_log_format_case_insensitive(self):
        """Log formats are normalized to lower case."""
        assert FountainKitSettings(log_format="JSON").log_format == "json"

    def test_path_expansion(self, monkeypatch, tmp_path):
        """Environment variables and ~ expand in path fields."""
        monkeypatch.setenv("STYLE_DIR", str(tmp_path))
        settings = FountainKitSettings(css_path="$STYLE_DIR/custom.css")
        assert settings.css_path == tmp_path / "custom.css"

    def test_path_rejects_containers(self):
        """Path fields refuse lists and dicts."""
        with pytest.raises(ValidationError):
            FountainKitSettings(css_path=["a.css"])

    def test_render_options_snapshot(self):
        """RenderOptions copies the rendering fields."""
        settings = FountainKitSettings(
            wrap_width=40, show_notes=True, css_path="print.css", type_names=True
        )
        options = RenderOptions.from_settings(settings)
        assert options == RenderOptions(
            wrap_width=40,
            show_notes=True,
            css_path=Path("print.css"),
            type_names=True,
        )


class TestEnvironment:
    """Test environment variable loading."""

    def test_env_prefix(self, monkeypatch):
        """FOUNTAINKIT_ variables set fields."""
        monkeypatch.setenv("FOUNTAINKIT_WRAP_WIDTH", "72")
        monkeypatch.setenv("FOUNTAINKIT_SHOW_NOTES", "true")
        settings = FountainKitSettings.from_env()
        assert settings.wrap_width == 72
        assert settings.show_notes is True

    def test_dotenv_file(self, tmp_path):
        """A .env file in the working directory is read."""
        (tmp_path / ".env").write_text("FOUNTAINKIT_PRETTY=true\n")
        assert FountainKitSettings().pretty is True


class TestFromFile:
    """Test loading configuration files."""

    def test_yaml(self, tmp_path):
        """YAML files are loaded."""
        config = tmp_path / "config.yaml"
        config.write_text("wrap_width: 50\nshow_section: true\n")
        settings = FountainKitSettings.from_file(config)
        assert settings.wrap_width == 50
        assert settings.show_section is True

    def test_empty_yaml(self, tmp_path):
        """An empty YAML file yields defaults."""
        config = tmp_path / "config.yml"
        config.write_text("")
        assert FountainKitSettings.from_file(config).wrap_width == 64

    def test_toml(self, tmp_path):
        """TOML files are loaded."""
        config = tmp_path / "config.toml"
        config.write_text('log_level = "debug"\nhtml_page = true\n')
        settings = FountainKitSettings.from_file(config)
        assert settings.log_level == "DEBUG"
        assert settings.html_page is True

    def test_json(self, tmp_path):
        """JSON files are loaded."""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"pretty": True, "type_names": True}))
        settings = FountainKitSettings.from_file(str(config))
        assert settings.pretty is True
        assert settings.type_names is True

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FountainKitSettings.from_file(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        """Unknown extensions raise ConfigurationError."""
        config = tmp_path / "config.ini"
        config.write_text("[fountainkit]\n")
        with pytest.raises(ConfigurationError) as exc_info:
            FountainKitSettings.from_file(config)
        assert exc_info.value.details["detected_format"] == ".ini"

    def test_non_mapping(self, tmp_path):
        """A top-level list is not a configuration."""
        config = tmp_path / "config.yaml"
        config.write_text("- wrap_width\n- 50\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            FountainKitSettings.from_file(config)

    def test_misspelled_key(self, tmp_path):
        """Common misspellings get a suggestion."""
        config = tmp_path / "config.yaml"
        config.write_text("width: 50\n")
        with pytest.raises(ConfigurationError) as exc_info:
            FountainKitSettings.from_file(config)
        assert "wrap_width" in exc_info.value.hint


class TestPrecedence:
    """Test merging of configuration sources."""

    def test_file_overrides_env(self, tmp_path, monkeypatch):
        """Config files beat environment variables."""
        monkeypatch.setenv("FOUNTAINKIT_WRAP_WIDTH", "72")
        config = tmp_path / "config.yaml"
        config.write_text("wrap_width: 50\n")
        settings = FountainKitSettings.from_multiple_sources(config_files=[config])
        assert settings.wrap_width == 50

    def test_env_applies_to_unset_fields(self, tmp_path, monkeypatch):
        """Fields a file does not set still come from the environment."""
        monkeypatch.setenv("FOUNTAINKIT_SHOW_NOTES", "true")
        config = tmp_path / "config.yaml"
        config.write_text("wrap_width: 50\n")
        settings = FountainKitSettings.from_multiple_sources(config_files=[config])
        assert settings.show_notes is True

    def test_later_files_win(self, tmp_path):
        """The last config file overrides earlier ones."""
        first = tmp_path / "first.yaml"
        first.write_text("wrap_width: 50\npretty: true\n")
        second = tmp_path / "second.json"
        second.write_text('{"wrap_width": 30}')
        settings = FountainKitSettings.from_multiple_sources(
            config_files=[first, second]
        )
        assert settings.wrap_width == 30
        assert settings.pretty is True

    def test_missing_files_are_skipped(self, tmp_path):
        """Missing files fall back to defaults."""
        settings = FountainKitSettings.from_multiple_sources(
            config_files=[tmp_path / "missing.yaml"]
        )
        assert settings.wrap_width == 64

    def test_cli_args_win(self, tmp_path):
        """CLI arguments beat files, and None means not given."""
        config = tmp_path / "config.yaml"
        config.write_text("wrap_width: 50\nshow_notes: true\n")
        settings = FountainKitSettings.from_multiple_sources(
            config_files=[config],
            cli_args={"wrap_width": 80, "show_notes": None},
        )
        assert settings.wrap_width == 80
        assert settings.show_notes is True

    def test_explicit_env_file(self, tmp_path):
        """An explicit env file is read."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("FOUNTAINKIT_WRAP_WIDTH=33\n")
        settings = FountainKitSettings.from_multiple_sources(env_file=env_file)
        assert settings.wrap_width == 33


class TestGlobalSettings:
    """Test the process-wide settings instance."""

    def test_set_and_get(self):
        """set_settings replaces the global instance."""
        custom = FountainKitSettings(wrap_width=20)
        set_settings(custom)
        assert get_settings() is custom

    def test_project_config_discovered(self, tmp_path):
        """fountainkit.yaml in the working directory is picked up."""
        (tmp_path / "fountainkit.yaml").write_text("wrap_width: 44\n")
        clear_settings_cache()
        assert get_settings().wrap_width == 44

    def test_cached(self):
        """get_settings returns the same instance until cleared."""
        clear_settings_cache()
        first = get_settings()
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings() is not first


class TestSettingsForCli:
    """Test get_settings_for_cli."""

    def test_overrides(self):
        """Non-None overrides apply on top of the global settings."""
        set_settings(FountainKitSettings(wrap_width=20, pretty=True))
        settings = get_settings_for_cli(
            cli_overrides={"wrap_width": 40, "pretty": None}
        )
        assert settings.wrap_width == 40
        assert settings.pretty is True

    def test_without_overrides(self):
        """Without overrides the global instance is returned."""
        custom = FountainKitSettings(wrap_width=20)
        set_settings(custom)
        assert get_settings_for_cli() is custom

    def test_config_file(self, tmp_path):
        """An explicit config file is loaded with overrides on top."""
        config = tmp_path / "custom.toml"
        config.write_text("wrap_width = 50\nshow_synopsis = true\n")
        settings = get_settings_for_cli(
            config_file=config, cli_overrides={"wrap_width": 70}
        )
        assert settings.wrap_width == 70
        assert settings.show_synopsis is True

    def test_missing_config_file(self, tmp_path):
        """A named config file that does not exist is an error."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            get_settings_for_cli(config_file=tmp_path / "missing.yaml")
