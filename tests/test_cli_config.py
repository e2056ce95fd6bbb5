"""Tests for the YAML config file and runtime settings resolution."""

from argparse import Namespace

import pytest
import yaml

from cli_config import (
    ActiveConfig,
    Config,
    RuntimeConfig,
    load_runtime_config,
    remember_supplied_values,
)
from errors import ConfigError


class TestRuntimeConfigResolve:
    """supplied > stored > defaults, field by field."""

    def test_precedence(self):
        supplied = RuntimeConfig(bucket="cli-bucket")
        stored = RuntimeConfig(bucket="file-bucket", pip_args="--user")
        defaults = RuntimeConfig(bucket=None, pip_args="", python="python3")
        resolved = RuntimeConfig.resolve(supplied, stored, defaults)
        assert resolved == RuntimeConfig(bucket="cli-bucket", pip_args="--user", python="python3")

    def test_empty_string_is_a_value(self):
        resolved = RuntimeConfig.resolve(
            RuntimeConfig(pip_args=""), RuntimeConfig(pip_args="--user"), RuntimeConfig()
        )
        assert resolved.pip_args == ""

    def test_unset_everywhere(self):
        assert RuntimeConfig.resolve(RuntimeConfig(), RuntimeConfig(), RuntimeConfig()).bucket is None

    def test_defaults(self):
        defaults = RuntimeConfig.defaults()
        assert defaults.bucket is None
        assert defaults.pip_args == ""
        assert defaults.python

    def test_from_args(self):
        args = Namespace(BUCKET="b", PIP_ARGS=None, PYTHON="/opt/py")
        assert RuntimeConfig.from_args(args) == RuntimeConfig(bucket="b", python="/opt/py")


class TestConfigFile:
    """Loading and saving ~/.sling.yml."""

    def test_missing_file_is_empty(self, tmp_path):
        assert Config.load(tmp_path / "missing.yml") == Config()

    def test_empty_file_is_empty(self, tmp_path):
        path = tmp_path / "sling.yml"
        path.write_text("", encoding="utf-8")
        assert Config.load(path) == Config()

    def test_round_trip(self, tmp_path):
        path = tmp_path / "sling.yml"
        config = Config(default_bucket_name="pkgs", default_pip_args="--user")
        config.save(path)
        assert Config.load(path) == config
        assert yaml.safe_load(path.read_text(encoding="utf-8"))["default_bucket_name"] == "pkgs"

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "sling.yml"
        path.write_text("default_bucket_name: pkgs\ncolor: blue\n", encoding="utf-8")
        assert Config.load(path) == Config(default_bucket_name="pkgs")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "sling.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "sling.yml"
        path.write_text("key: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_as_runtime_config(self):
        config = Config("pkgs", "--user", "/opt/py")
        assert config.as_runtime_config() == RuntimeConfig("pkgs", "--user", "/opt/py")


class TestActiveConfig:
    """Write-back happens only after a real change."""

    def test_noop_mutation_stays_clean(self, tmp_path):
        active = ActiveConfig(Config(default_bucket_name="pkgs"))
        assert not active.mutate(lambda c: setattr(c, "default_bucket_name", "pkgs"))
        active.save(tmp_path / "sling.yml")
        assert not (tmp_path / "sling.yml").exists()

    def test_change_marks_dirty_and_saves(self, tmp_path):
        active = ActiveConfig(Config())
        assert active.mutate(lambda c: setattr(c, "default_bucket_name", "pkgs"))
        assert active.dirty
        active.save(tmp_path / "sling.yml")
        assert Config.load(tmp_path / "sling.yml").default_bucket_name == "pkgs"

    def test_remember_fills_only_unset_values(self):
        active = ActiveConfig(Config(default_bucket_name="stored"))
        remember_supplied_values(active, RuntimeConfig(bucket="cli", python="/opt/py"))
        assert active.get() == Config(default_bucket_name="stored", default_python_interpreter="/opt/py")


class TestLoadRuntimeConfig:
    """End-to-end resolution against a config file."""

    def test_supplied_values_are_remembered(self, tmp_path):
        path = tmp_path / "sling.yml"
        args = Namespace(BUCKET="pkgs", PIP_ARGS=None, PYTHON=None)
        assert load_runtime_config(args, path).bucket == "pkgs"
        assert Config.load(path).default_bucket_name == "pkgs"

        later = load_runtime_config(Namespace(BUCKET=None, PIP_ARGS=None, PYTHON=None), path)
        assert later.bucket == "pkgs"

    def test_supplied_overrides_stored_bucket(self, tmp_path):
        path = tmp_path / "sling.yml"
        Config(default_bucket_name="stored").save(path)
        runtime = load_runtime_config(Namespace(BUCKET="other", PIP_ARGS="", PYTHON="py"), path)
        assert runtime.bucket == "other"
        assert Config.load(path).default_bucket_name == "stored"

    def test_nothing_supplied_leaves_file_untouched(self, tmp_path):
        path = tmp_path / "sling.yml"
        load_runtime_config(Namespace(BUCKET=None, PIP_ARGS=None, PYTHON=None), path)
        assert not path.exists()
