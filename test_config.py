#!/usr/bin/env python3
"""Tests for configuration building and config file loading.

Run with ``python test_config.py`` or via ``pytest``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from funcpipe.config.defaults import build_config
from funcpipe.config.loaders import load_config_file, save_config_file
from funcpipe.core.results import ConfigurationError


ENV_VARS = [
    "FUNCPIPE_LOG_LEVEL",
    "FUNCPIPE_LOG_FORMAT",
    "FUNCPIPE_LOG_FILE",
    "FUNCPIPE_STRICT_TYPES",
    "FUNCPIPE_LOG_STEPS",
    "FUNCPIPE_BENCH_ITERATIONS",
    "FUNCPIPE_BENCH_VALUE",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

def test_defaults(clean_env):
    config = build_config(env_file=str(clean_env / "missing.env"))

    required_sections = ["log", "execution", "bench"]
    for section in required_sections:
        assert section in config

    assert config["log"]["level"] == "WARNING"
    assert config["log"]["file"] is None
    assert config["execution"]["strict_types"] is True
    assert config["execution"]["log_steps"] is False
    assert config["bench"]["iterations"] == 100_000
    assert config["bench"]["value"] is None


def test_environment_variables(clean_env, monkeypatch):
    monkeypatch.setenv("FUNCPIPE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FUNCPIPE_LOG_FILE", str(clean_env / "logs" / "funcpipe.log"))
    monkeypatch.setenv("FUNCPIPE_STRICT_TYPES", "false")
    monkeypatch.setenv("FUNCPIPE_BENCH_ITERATIONS", "250")
    monkeypatch.setenv("FUNCPIPE_BENCH_VALUE", "12")

    config = build_config(env_file=str(clean_env / "missing.env"))

    assert config["log"]["level"] == "DEBUG"
    assert config["log"]["file"] == clean_env / "logs" / "funcpipe.log"
    assert config["execution"]["strict_types"] is False
    assert config["bench"]["iterations"] == 250
    assert config["bench"]["value"] == 12


def test_env_file(clean_env):
    env_file = clean_env / ".env"
    env_file.write_text("FUNCPIPE_STRICT_TYPES=no\nFUNCPIPE_LOG_STEPS=yes\n")

    config = build_config(env_file=str(env_file))

    assert config["execution"]["strict_types"] is False
    assert config["execution"]["log_steps"] is True


def test_overrides_are_deep_merged(clean_env):
    config = build_config(
        {"execution": {"log_steps": True}, "log": {"level": "ERROR"}},
        env_file=str(clean_env / "missing.env"),
    )

    assert config["execution"]["log_steps"] is True
    assert config["execution"]["strict_types"] is True
    assert config["log"]["level"] == "ERROR"
    assert config["log"]["format"] == "{message}"


def test_json_and_yaml_files(tmp_path):
    json_file = tmp_path / "config.json"
    json_file.write_text('{"execution": {"strict_types": false}}')
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text("log:\n  level: DEBUG\n")

    assert load_config_file(json_file) == {"execution": {"strict_types": False}}
    assert load_config_file(yaml_file) == {"log": {"level": "DEBUG"}}


def test_empty_yaml_is_empty_mapping(tmp_path):
    yaml_file = tmp_path / "empty.yml"
    yaml_file.write_text("")

    assert load_config_file(yaml_file) == {}


def test_bad_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_file(tmp_path / "nope.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config_file(broken)

    broken_yaml = tmp_path / "broken.yaml"
    broken_yaml.write_text("log: [unclosed\n")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config_file(broken_yaml)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        load_config_file(listing)


def test_saved_config_loads_back(clean_env):
    config = build_config(
        {"log": {"file": Path("/tmp/funcpipe.log")}},
        env_file=str(clean_env / "missing.env"),
    )

    for name in ["saved.json", "saved.yaml"]:
        target = clean_env / name
        save_config_file(config, target)
        loaded = load_config_file(target)
        assert loaded["execution"] == config["execution"]
        assert loaded["log"]["file"] == "/tmp/funcpipe.log"


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
