"""
Brief: Tests for YAML config loading, validation and CLI overrides.

Inputs:
  - None

Outputs:
  - None
"""

import pytest

from hldsinfo.config.config_parser import build_config, load_config_file
from hldsinfo.config.config_schema import (
    FetchConfig,
    logging_settings,
    validate_config,
)


def test_defaults():
    cfg = validate_config(None)
    assert isinstance(cfg, FetchConfig)
    assert cfg.servers == []
    assert cfg.timeout_ms == 4000
    assert cfg.logging.level == "warn"
    assert cfg.logging.stderr is True


def test_single_server_string_becomes_list():
    assert validate_config({"servers": "1.2.3.4:27015"}).servers == ["1.2.3.4:27015"]


def test_unknown_key_rejected():
    with pytest.raises(ValueError):
        validate_config({"retries": 3})


def test_non_mapping_root_rejected():
    with pytest.raises(ValueError):
        validate_config(["a", "b"])


def test_load_yaml_file(tmp_path):
    path = tmp_path / "hldsinfo.yaml"
    path.write_text(
        "servers:\n"
        "  - 10.0.0.1:27015\n"
        "  - 10.0.0.2:27016\n"
        "timeout_ms: 1500\n"
        "logging:\n"
        "  level: debug\n"
        "  stderr: false\n"
    )
    cfg = build_config(str(path))
    assert cfg.servers == ["10.0.0.1:27015", "10.0.0.2:27016"]
    assert cfg.timeout_ms == 1500
    assert logging_settings(cfg) == {
        "level": "debug",
        "stderr": False,
        "file": None,
        "syslog": False,
    }


def test_cli_overrides_file(tmp_path):
    path = tmp_path / "hldsinfo.yaml"
    path.write_text("servers: 10.0.0.1:27015\ntimeout_ms: 1500\n")
    cfg = build_config(
        str(path),
        servers=["10.0.0.9:27015"],
        timeout_ms=250,
        log_level="info",
    )
    assert cfg.servers == ["10.0.0.1:27015", "10.0.0.9:27015"]
    assert cfg.timeout_ms == 250
    assert cfg.logging.level == "info"


def test_empty_file_is_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config_file(str(path)) == {}


def test_missing_file_is_value_error(tmp_path):
    with pytest.raises(ValueError):
        load_config_file(str(tmp_path / "missing.yaml"))


def test_invalid_yaml_is_value_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("servers: [unterminated\n")
    with pytest.raises(ValueError):
        load_config_file(str(path))
