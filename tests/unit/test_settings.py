"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from promtext.config import Settings, get_settings, load_yaml_config, reset_settings


@pytest.fixture(autouse=True)
def clean_environment(tmp_path, monkeypatch):
    """Isolate settings from the user's home directory and environment."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("LOG_LEVEL", "LOG_FORMAT", "MAX_INPUT_BYTES", "JSON_INDENT", "SORT_FAMILIES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


class TestLoadYamlConfig:
    """Tests for load_yaml_config."""

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(tmp_path / "absent.yaml") == {}

    def test_flattens_sections(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "logging:\n"
            "  level: DEBUG\n"
            "  format: json\n"
            "limits:\n"
            "  max_input_bytes: 1024\n"
            "output:\n"
            "  json_indent: 4\n"
            "  sort_families: true\n"
        )

        assert load_yaml_config(config_path) == {
            "log_level": "DEBUG",
            "log_format": "json",
            "max_input_bytes": 1024,
            "json_indent": 4,
            "sort_families": True,
        }

    def test_default_location(self, tmp_path):
        config_dir = tmp_path / ".promtext"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("limits:\n  max_input_bytes: 2048\n")

        assert load_yaml_config() == {"max_input_bytes": 2048}

    def test_invalid_yaml_warns(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("logging: [unclosed\n")

        with pytest.warns(UserWarning, match="Failed to load config"):
            assert load_yaml_config(config_path) == {}


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.log_level == "WARNING"
        assert settings.log_format == "text"
        assert settings.max_input_bytes == 64 * 1024 * 1024
        assert settings.json_indent == 2
        assert settings.sort_families is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MAX_INPUT_BYTES", "4096")
        monkeypatch.setenv("LOG_FORMAT", "json")

        settings = Settings()

        assert settings.max_input_bytes == 4096
        assert settings.log_format == "json"

    def test_environment_beats_yaml(self, tmp_path, monkeypatch):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("output:\n  json_indent: 4\n")
        monkeypatch.setenv("JSON_INDENT", "1")

        settings = get_settings(config_path=config_path, reload=True)

        assert settings.json_indent == 1

    def test_rejects_invalid_values(self):
        with pytest.raises(ValidationError):
            Settings(max_input_bytes=0)
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reload_reads_config_path(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("output:\n  sort_families: true\n")

        first = get_settings()
        second = get_settings(config_path=config_path, reload=True)

        assert first is not second
        assert first.sort_families is False
        assert second.sort_families is True
