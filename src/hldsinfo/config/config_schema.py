"""Typed configuration for the hldsinfo CLI.

Brief:
  Pydantic models describing the optional YAML config file. Validation errors
  are re-raised as ValueError so the CLI can report them uniformly.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, validator

from ..fetcher import DEFAULT_TIMEOUT_MS


class LoggingConfig(BaseModel):
    """Brief: Logging section.

    Inputs:
      - level: debug, info, warn, error, crit
      - stderr: log to stderr
      - file: optional log file path
      - syslog: bool or mapping with address/facility/tag

    Outputs:
      - LoggingConfig instance consumed by init_logging().
    """

    level: str = "warn"
    stderr: bool = True
    file: Optional[str] = None
    syslog: Union[bool, Dict[str, Any]] = False

    class Config:
        extra = "forbid"


class FetchConfig(BaseModel):
    """Brief: Top-level configuration.

    Inputs:
      - servers: list of ``host:port`` addresses (a single string is accepted)
      - timeout_ms: per-query timeout; <= 0 disables the deadline

    Outputs:
      - FetchConfig instance with normalized field types.
    """

    servers: List[str] = Field(default_factory=list)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        extra = "forbid"

    @validator("servers", pre=True)
    def _normalize_servers(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


def validate_config(cfg: Optional[Dict[str, Any]]) -> FetchConfig:
    """
    Brief: Validate a parsed YAML mapping.

    Inputs:
      - cfg: mapping or None

    Outputs:
      - FetchConfig

    Raises:
      - ValueError: when the mapping does not match the schema

    Example:
      >>> validate_config({"timeout_ms": 250}).timeout_ms
      250
    """
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ValueError("Configuration root must be a mapping")
    try:
        return FetchConfig(**cfg)
    except Exception as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


def logging_settings(config: FetchConfig) -> Dict[str, Any]:
    """Plain mapping of the logging section for init_logging()."""
    lc = config.logging
    return {
        "level": lc.level,
        "stderr": lc.stderr,
        "file": lc.file,
        "syslog": lc.syslog,
    }
