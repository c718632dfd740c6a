"""Configuration parsing helpers for the hldsinfo CLI.

Brief:
  Reads the optional YAML config file, validates it, then layers the
  command-line arguments on top.

Inputs:
  - YAML config path and parsed argparse namespace

Outputs:
  - FetchConfig
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import yaml

from .config_schema import FetchConfig, validate_config

logger = logging.getLogger(__name__)


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Brief: Read a YAML config file.

    Inputs:
      - config_path: path, or None for an empty config

    Outputs:
      - dict: parsed mapping ({} for an empty file)

    Raises:
      - ValueError: when the file cannot be read or parsed
    """
    if not config_path:
        return {}
    try:
        with open(config_path, "r") as f:
            cfg = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ValueError(f"Cannot read config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Cannot parse config {config_path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ValueError("Configuration root must be a mapping")
    return cfg


def build_config(
    config_path: Optional[str] = None,
    *,
    servers: Optional[List[str]] = None,
    timeout_ms: Optional[int] = None,
    log_level: Optional[str] = None,
) -> FetchConfig:
    """
    Brief: Merge file configuration with command-line overrides.

    Inputs:
      - config_path: optional YAML file
      - servers: addresses appended after the configured ones
      - timeout_ms: overrides the configured timeout when not None
      - log_level: overrides logging.level when not None

    Outputs:
      - FetchConfig

    Example:
      >>> build_config(servers=["127.0.0.1:27015"], timeout_ms=100).timeout_ms
      100
    """
    cfg = load_config_file(config_path)

    if servers:
        configured = cfg.get("servers") or []
        if isinstance(configured, str):
            configured = [configured]
        cfg["servers"] = list(configured) + list(servers)
    if timeout_ms is not None:
        cfg["timeout_ms"] = timeout_ms
    if log_level is not None:
        log_cfg = cfg.get("logging") or {}
        if not isinstance(log_cfg, dict):
            raise ValueError("config.logging must be a mapping when present")
        cfg["logging"] = {**log_cfg, "level": log_level}

    return validate_config(cfg)
