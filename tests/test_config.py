"""Tests for configuration loading and precedence."""

import json
import logging
import os
from types import SimpleNamespace

from relscout.common.cache import default_cache_dir
from relscout.config import apply_cli_overrides, apply_config, default_config_paths, load_config, load_config_file
from relscout.constants import Constants


class TestLoadConfig:
    """YAML and JSON config files."""

    def test_yaml(self, tmp_path):
        """YAML config files load into a mapping."""
        path = tmp_path / "relscout.yml"
        path.write_text("cache_ttl: 120\nmax_workers: 4\n", encoding="utf-8")
        assert load_config_file(path) == {"cache_ttl": 120, "max_workers": 4}

    def test_json(self, tmp_path):
        """JSON config files load by extension."""
        path = tmp_path / "relscout.json"
        path.write_text(json.dumps({"request_timeout": 5}), encoding="utf-8")
        assert load_config(str(path)) == {"request_timeout": 5}

    def test_missing_file(self, tmp_path, caplog):
        """An explicit missing path warns and yields no settings."""
        with caplog.at_level(logging.WARNING):
            assert load_config(str(tmp_path / "absent.yml")) == {}
        assert "not found" in caplog.text

    def test_malformed_yaml(self, tmp_path):
        """Unparseable YAML yields no settings."""
        path = tmp_path / "bad.yml"
        path.write_text("cache_ttl: [unclosed\n", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_non_mapping(self, tmp_path):
        """A top-level list is not a config."""
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_env_path_is_first_candidate(self, monkeypatch, tmp_path):
        """RELSCOUT_CONFIG is searched before the default paths."""
        path = tmp_path / "env.yml"
        path.write_text("cache_ttl: 9\n", encoding="utf-8")
        monkeypatch.setenv(Constants.ENV_CONFIG, str(path))
        assert default_config_paths()[0] == path
        assert load_config() == {"cache_ttl": 9}

    def test_no_config_anywhere(self, monkeypatch, tmp_path):
        """Without any file the config is empty."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert load_config() == {}


class TestApplyConfig:
    """Mapping config keys onto Constants."""

    def test_known_keys(self):
        """Known keys are coerced and stored on Constants."""
        apply_config({"cache_ttl": "120", "request_timeout": 5, "max_workers": 3, "user_agent": "ua/1"})
        assert Constants.CACHE_TTL_SEC == 120
        assert Constants.REQUEST_TIMEOUT == 5
        assert Constants.MAX_WORKERS == 3
        assert Constants.USER_AGENT == "ua/1"

    def test_unknown_key_warns(self, caplog):
        """Unknown keys log a warning."""
        with caplog.at_level(logging.WARNING):
            apply_config({"colour": "blue"})
        assert "Unknown config key" in caplog.text

    def test_invalid_value_is_ignored(self, caplog):
        """Invalid values are logged and leave the default."""
        before = Constants.CACHE_TTL_SEC
        with caplog.at_level(logging.WARNING):
            apply_config({"cache_ttl": "soon", "max_workers": 0})
        assert Constants.CACHE_TTL_SEC == before
        assert "Invalid value" in caplog.text

    def test_none_is_skipped(self):
        """A null value leaves the default untouched."""
        before = Constants.MAX_WORKERS
        apply_config({"max_workers": None})
        assert Constants.MAX_WORKERS == before


class TestPrecedence:
    """CLI over environment over config file."""

    def _args(self, **kwargs):
        base = {"CACHE_DIR": None, "CACHE_TTL": None, "TIMEOUT": None, "JOBS": None}
        base.update(kwargs)
        return SimpleNamespace(**base)

    def test_cli_beats_config(self):
        """Command line values override the config file."""
        apply_config({"cache_ttl": 100, "max_workers": 2})
        apply_cli_overrides(self._args(CACHE_TTL=50))
        assert Constants.CACHE_TTL_SEC == 50
        assert Constants.MAX_WORKERS == 2

    def test_env_beats_config_for_cache_dir(self, monkeypatch, tmp_path):
        """RELSCOUT_CACHE_DIR overrides the configured cache directory."""
        monkeypatch.setenv(Constants.ENV_CACHE_DIR, str(tmp_path / "env"))
        apply_config({"cache_dir": str(tmp_path / "file")})
        assert default_cache_dir() == tmp_path / "env"

    def test_cli_cache_dir_beats_env(self, monkeypatch, tmp_path):
        """--cache-dir overrides the environment variable."""
        monkeypatch.setenv(Constants.ENV_CACHE_DIR, str(tmp_path / "env"))
        apply_cli_overrides(self._args(CACHE_DIR=str(tmp_path / "cli")))
        assert default_cache_dir() == tmp_path / "cli"
        assert os.environ[Constants.ENV_CACHE_DIR] == str(tmp_path / "cli")
