"""Tests for ssdlife.core.config module."""

from pathlib import Path

import pytest

from ssdlife.core.config import DEFAULTS, ConfigError, get_config_value, load_config, load_config_file


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty working directory and home."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr(Path, "home", lambda: home)
    return work, home


def write_user_config(home: Path, text: str) -> None:
    config_dir = home / ".config" / "ssdlife"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yaml").write_text(text)


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_returns_empty_dict_if_file_missing(self, tmp_path):
        """Returns empty dict when file doesn't exist."""
        assert load_config_file(tmp_path / "nonexistent.yaml") == {}

    def test_loads_yaml_file(self, tmp_path):
        """Loads and parses YAML config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("warning: 70\nvendor_tool: /opt/micron/msecli\n")

        assert load_config_file(config_file) == {"warning": 70, "vendor_tool": "/opt/micron/msecli"}

    def test_returns_empty_dict_on_invalid_yaml(self, tmp_path):
        """Returns empty dict when YAML is invalid."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("invalid: yaml: content: [")

        assert load_config_file(config_file) == {}

    def test_returns_empty_dict_for_empty_file(self, tmp_path):
        """Returns empty dict for empty file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_config_file(config_file) == {}

    def test_returns_empty_dict_for_non_mapping(self, tmp_path):
        """A YAML list is not a config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- warning\n- critical\n")

        assert load_config_file(config_file) == {}


class TestGetConfigValue:
    """Tests for get_config_value."""

    def test_returns_none_when_no_config(self, isolated):
        """Returns None when no config files exist."""
        assert get_config_value("warning") is None

    def test_project_config_takes_precedence(self, isolated):
        """Project config overrides user config."""
        work, home = isolated
        write_user_config(home, "warning: 60")
        (work / ".ssdlife.yaml").write_text("warning: 70")

        assert get_config_value("warning") == 70

    def test_user_config_used_as_fallback(self, isolated):
        """User config used when no project config."""
        _, home = isolated
        write_user_config(home, "critical: 95")

        assert get_config_value("critical") == 95

    def test_explicit_file_wins(self, isolated, tmp_path):
        """A file given on the command line overrides everything."""
        work, _ = isolated
        (work / ".ssdlife.yaml").write_text("warning: 70")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("warning: 50")

        assert get_config_value("warning", explicit) == 50


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, isolated):
        """Without files every default applies."""
        assert load_config() == DEFAULTS

    def test_keys_resolve_independently(self, isolated):
        """Each key comes from the highest layer that sets it."""
        work, home = isolated
        write_user_config(home, "warning: 60\ncritical: 70\n")
        (work / ".ssdlife.yaml").write_text(
            "critical: 85\n"
            "models:\n"
            "  - key: acme\n"
            "    patterns: [ACME]\n"
            "    field: SSD_Life_Left\n"
            "    kind: norm\n"
        )

        config = load_config()

        assert config["warning"] == 60
        assert config["critical"] == 85
        assert config["timeout"] == 30
        assert config["models"][0]["key"] == "acme"

    def test_null_value_keeps_default(self, isolated):
        """An empty key does not wipe out the default."""
        work, _ = isolated
        (work / ".ssdlife.yaml").write_text("models:\nwarning: 75\n")

        config = load_config()

        assert config["models"] == []
        assert config["warning"] == 75

    def test_explicit_file_must_exist(self, isolated, tmp_path):
        """A missing file named on the command line is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_explicit_file_must_parse(self, isolated, tmp_path):
        """Broken YAML in the named file is an error."""
        explicit = tmp_path / "broken.yaml"
        explicit.write_text("invalid: yaml: content: [")

        with pytest.raises(ConfigError, match="not valid YAML"):
            load_config(explicit)

    def test_explicit_file_must_be_mapping(self, isolated, tmp_path):
        """A named file holding a list is an error."""
        explicit = tmp_path / "list.yaml"
        explicit.write_text("- warning\n- critical\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config(explicit)

    def test_explicit_empty_file_is_defaults(self, isolated, tmp_path):
        """An empty named file sets nothing."""
        explicit = tmp_path / "empty.yaml"
        explicit.write_text("")

        assert load_config(explicit) == DEFAULTS

    def test_broken_project_file_is_skipped(self, isolated):
        """Implicit layers are still skipped when broken."""
        work, _ = isolated
        (work / ".ssdlife.yaml").write_text("invalid: yaml: content: [")

        assert load_config() == DEFAULTS
