"""Tests for rpmcraft.config: models and YAML loader."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from rpmcraft.config.loader import (
    CONFIG_ENV,
    DEFAULT_CONFIG_TEMPLATE,
    _expand_env_vars,
    load_config,
)
from rpmcraft.config.models import PayloadConfig, RpmcraftConfig


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with cwd and HOME pointing at empty temp dirs and no RPMCRAFT_CONFIG."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    with patch("pathlib.Path.home", return_value=home):
        yield work, home


# ── RpmcraftConfig defaults ────────────────────────────────────────


class TestRpmcraftConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_chunk_size(self, sample_config):
        assert sample_config.payload.chunk_size == 1024

    def test_ownership_not_a_setting(self):
        """Entry ownership is fixed, so the payload section has no user or group."""
        assert "user_name" not in PayloadConfig.model_fields
        assert "group_name" not in PayloadConfig.model_fields
        assert "user_name" not in DEFAULT_CONFIG_TEMPLATE

    def test_no_analyzer_plugin_by_default(self, sample_config):
        assert sample_config.plugins.analyzer is None


class TestPayloadConfig:
    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_chunk_size_rejected(self, size):
        with pytest.raises(ValidationError):
            PayloadConfig(chunk_size=size)

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            RpmcraftConfig(log_level="trace")


# ── _expand_env_vars ────────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_string_variable(self):
        with patch.dict(os.environ, {"RPM_BUILDER": "mockbuild"}):
            assert _expand_env_vars("${RPM_BUILDER}") == "mockbuild"

    def test_missing_var_becomes_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _expand_env_vars("${NOT_SET_ANYWHERE}") == ""

    def test_expands_nested_structures(self):
        with patch.dict(os.environ, {"A": "alpha", "B": "beta"}):
            result = _expand_env_vars({"outer": {"inner": "${A}"}, "list": ["${B}", "x"]})
            assert result == {"outer": {"inner": "alpha"}, "list": ["beta", "x"]}

    def test_non_string_passthrough(self):
        assert _expand_env_vars(42) == 42
        assert _expand_env_vars(None) is None


# ── load_config ─────────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_when_nothing_found(self, isolated):
        assert load_config() == RpmcraftConfig()

    def test_cli_path(self, isolated, tmp_path):
        cfg_file = tmp_path / "custom.yaml"
        cfg_file.write_text("payload:\n  chunk_size: 4096\n")
        assert load_config(str(cfg_file)).payload.chunk_size == 4096

    def test_project_local_file(self, isolated):
        work, _ = isolated
        (work / "rpmcraft.yaml").write_text("log_level: debug\n")
        assert load_config().log_level == "debug"

    def test_user_global_file(self, isolated):
        _, home = isolated
        (home / ".rpmcraft").mkdir()
        (home / ".rpmcraft" / "config.yaml").write_text("plugins:\n  analyzer: elf\n")
        assert load_config().plugins.analyzer == "elf"

    def test_env_path_beats_project_file(self, isolated, tmp_path, monkeypatch):
        work, _ = isolated
        (work / "rpmcraft.yaml").write_text("log_level: debug\n")
        env_file = tmp_path / "env.yaml"
        env_file.write_text("log_level: error\n")
        monkeypatch.setenv(CONFIG_ENV, str(env_file))
        assert load_config().log_level == "error"

    def test_cli_beats_env(self, isolated, tmp_path, monkeypatch):
        cli_file = tmp_path / "cli.yaml"
        cli_file.write_text("log_level: warn\n")
        env_file = tmp_path / "env.yaml"
        env_file.write_text("log_level: error\n")
        monkeypatch.setenv(CONFIG_ENV, str(env_file))
        assert load_config(str(cli_file)).log_level == "warn"

    def test_empty_file_skipped(self, isolated, tmp_path):
        work, _ = isolated
        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        (work / "rpmcraft.yaml").write_text("log_format: json\n")
        assert load_config(str(empty)).log_format == "json"

    def test_env_vars_expanded(self, isolated, tmp_path, monkeypatch):
        monkeypatch.setenv("RPM_ANALYZER", "elf")
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text('plugins:\n  analyzer: "${RPM_ANALYZER}"\n')
        assert load_config(str(cfg_file)).plugins.analyzer == "elf"

    def test_invalid_yaml(self, isolated, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("payload: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(bad))

    def test_invalid_values(self, isolated, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("payload:\n  chunk_size: 0\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(str(bad))

    def test_non_mapping_rejected(self, isolated, tmp_path):
        bad = tmp_path / "list.yaml"
        bad.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(str(bad))


def test_default_template_matches_defaults():
    """The `config init` template parses to the default config."""
    raw = yaml.safe_load(DEFAULT_CONFIG_TEMPLATE)
    assert RpmcraftConfig(**raw) == RpmcraftConfig()
