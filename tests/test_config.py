"""Unit tests for font_bounds.config.

Covers defaults, YAML loading, lookup order and value validation.
"""

from pathlib import Path
from textwrap import dedent

import pytest

from font_bounds.config import Config
from font_bounds.exceptions import ConfigError


def write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(dedent(content), encoding="utf-8")
    return path


class TestDefaults:
    def test_default_values(self):
        config = Config()

        assert config.font == "Helvetica"
        assert config.size == 24.0
        assert config.tracking == 0.0
        assert config.charset is None
        assert config.strict_coverage is True
        assert config.font_dirs == []
        assert config.log_level == "WARNING"

    def test_missing_default_file_gives_defaults(self, tmp_path, monkeypatch):
        """Without an explicit path or env var a missing file is not an error."""
        monkeypatch.setattr("font_bounds.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")
        assert Config.load() == Config()


class TestLoad:
    """Tests for Config.load()."""

    def test_loads_yaml_values(self, tmp_path):
        path = write_config(
            tmp_path,
            """
            font: Zapfino
            size: 36
            tracking: 0.5
            charset: "Agjy"
            strict_coverage: false
            log_level: debug
            """,
        )

        config = Config.load(path)

        assert config.font == "Zapfino"
        assert config.size == 36.0
        assert isinstance(config.size, float)
        assert config.tracking == 0.5
        assert config.charset == "Agjy"
        assert config.strict_coverage is False
        assert config.log_level == "DEBUG"

    def test_env_var_is_used(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, "size: 48\n")
        monkeypatch.setenv("FONT_BOUNDS_CONFIG", str(path))

        assert Config.load().size == 48.0

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Config.load(tmp_path / "nope.yaml")

    def test_env_var_missing_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FONT_BOUNDS_CONFIG", str(tmp_path / "nope.yaml"))
        with pytest.raises(FileNotFoundError):
            Config.load()

    def test_empty_file_gives_defaults(self, tmp_path):
        assert Config.load(write_config(tmp_path, "")) == Config()

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path, "font: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML syntax"):
            Config.load(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = write_config(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            Config.load(path)

    def test_font_dirs_expand_user(self, tmp_path):
        path = write_config(tmp_path, "font_dirs:\n  - ~/fonts\n")
        config = Config.load(path)
        assert config.font_dirs == [str(Path("~/fonts").expanduser())]


class TestValidation:
    """Tests for Config.from_dict() validation."""

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"colour": "red"}, "unknown setting"),
            ({"size": 0}, "size: must be greater than 0"),
            ({"size": "big"}, "size: expected number, got str"),
            ({"scale": -1}, "scale: must be greater than 0"),
            ({"padding": -5}, "padding: must not be negative"),
            ({"tracking": True}, "tracking: expected number, got bool"),
            ({"font": ""}, "font: expected non-empty string"),
            ({"charset": 123}, "charset: expected string, got int"),
            ({"strict_coverage": "yes"}, "strict_coverage: expected boolean, got str"),
            ({"download_timeout": "10"}, "download_timeout: expected integer, got str"),
            ({"download_timeout": 0}, "download_timeout: must be at least 1"),
            ({"font_dirs": "/fonts"}, "font_dirs: expected a list of strings"),
            ({"log_level": "LOUD"}, "log_level: must be one of"),
        ],
    )
    def test_rejects_invalid_values(self, data, message):
        with pytest.raises(ConfigError, match=message):
            Config.from_dict(data)

    def test_negative_tracking_is_allowed(self):
        """Negative tracking tightens text and is valid."""
        assert Config.from_dict({"tracking": -0.5}).tracking == -0.5
