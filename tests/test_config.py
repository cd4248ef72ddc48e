"""Tests for configuration loading."""

from pathlib import Path

import pytest

from sievedir.config import (
    ConfigError,
    get_config_path,
    load_config,
    resolve_sieve_dir,
)


class TestLoadConfig:
    """Tests for load_config."""

    def test_default_missing_is_empty(self):
        """No config file at the default location is fine."""
        assert load_config() == {}

    def test_default_location(self, isolated_env):
        config_dir = isolated_env / ".sievedir"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("sieve_dir: /srv/sieve\n")

        assert load_config() == {"sieve_dir": "/srv/sieve"}

    def test_explicit_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_env_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("log_level: DEBUG\n")
        monkeypatch.setenv("SIEVEDIR_CONFIG", str(config_file))

        assert get_config_path() == config_file
        assert load_config() == {"log_level": "DEBUG"}

    def test_env_path_missing_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SIEVEDIR_CONFIG", str(tmp_path / "nope.yaml"))
        with pytest.raises(FileNotFoundError):
            load_config()

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("sieve_dir: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(str(config_file))

    def test_non_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(config_file))

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)) == {}


class TestResolveSieveDir:
    """Tests for resolve_sieve_dir precedence."""

    def test_default(self, isolated_env):
        assert resolve_sieve_dir({}) == isolated_env / ".sievedir" / "scripts"

    def test_config_value(self):
        assert resolve_sieve_dir({"sieve_dir": "/srv/sieve"}) == Path("/srv/sieve")

    def test_env_beats_config(self, monkeypatch):
        monkeypatch.setenv("SIEVEDIR_DIR", "/env/sieve")
        assert resolve_sieve_dir({"sieve_dir": "/srv/sieve"}) == Path("/env/sieve")

    def test_override_beats_env(self, monkeypatch):
        monkeypatch.setenv("SIEVEDIR_DIR", "/env/sieve")
        assert resolve_sieve_dir({}, "/cli/sieve") == Path("/cli/sieve")
