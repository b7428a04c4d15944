# tests/unit/config/test_settings.py - v2
"""Tests for config/settings.py - typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from psbridge.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_backend == "memory"
        assert s.cache_max_entries == 0

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "text"
        assert s.log_file is None
        assert s.log_rotation == "10MB"
        assert s.log_retention == 5


class TestSettingsValidation:
    def test_max_entries_with_null_backend(self):
        with pytest.raises(ConfigurationError, match="CACHE_MAX_ENTRIES"):
            Settings(_env_file=None, cache_backend="none", cache_max_entries=100)

    def test_negative_max_entries(self):
        with pytest.raises(ValueError, match="cache_max_entries"):
            Settings(_env_file=None, cache_max_entries=-1)

    def test_negative_retention(self):
        with pytest.raises(ValueError, match="log_retention"):
            Settings(_env_file=None, log_retention=-1)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, cache_backend="ehcache")

    def test_unknown_log_format(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_format="xml")


class TestSettingsSources:
    def test_environment(self, monkeypatch):
        monkeypatch.setenv("CACHE_MAX_ENTRIES", "1000")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings(_env_file=None)
        assert s.cache_max_entries == 1000
        assert s.log_level == "DEBUG"

    def test_env_file(self, tmp_path: Path):
        env = tmp_path / ".env"
        env.write_text("CACHE_BACKEND=none\nLOG_FORMAT=json\nUNRELATED=1\n")
        s = Settings(_env_file=env)
        assert s.cache_backend == "none"
        assert s.log_format == "json"

    def test_load_settings_overrides(self, monkeypatch):
        monkeypatch.delenv("CACHE_BACKEND", raising=False)
        monkeypatch.delenv("CACHE_MAX_ENTRIES", raising=False)
        s = load_settings(_env_file=None, cache_max_entries=50)
        assert s.cache_max_entries == 50
