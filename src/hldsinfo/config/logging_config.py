from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "crit": logging.CRITICAL,
    "critical": logging.CRITICAL,
}

_TAGS = {
    logging.DEBUG: "[debug]",
    logging.INFO: "[info]",
    logging.WARNING: "[warn]",
    logging.ERROR: "[error]",
    logging.CRITICAL: "[crit]",
}

DEFAULT_LEVEL = "warn"


def _level_tag(record: logging.LogRecord) -> str:
    return _TAGS.get(record.levelno, f"[lvl{record.levelno}]")


def parse_level(value: Any, default: int = logging.WARNING) -> int:
    """Map a level name such as ``"debug"`` or ``"warn"`` to a logging constant."""
    return _LEVELS.get(str(value).strip().lower(), default)


class SyslogFormatter(logging.Formatter):
    """Formatter for syslog output; syslog adds its own timestamp."""

    def __init__(self, tag: str = "hldsinfo"):
        super().__init__()
        self.tag = tag

    def format(self, record):
        record.level_tag = _level_tag(record)
        return f"{self.tag}: {record.level_tag} {record.name}: {record.getMessage()}"


class BracketLevelFormatter(logging.Formatter):
    """Adds bracketed lowercase level tags and UTC timestamps."""

    def formatTime(self, record, datefmt=None):
        """Format the record's creation time as UTC ISO-8601 with Z suffix."""
        return datetime.fromtimestamp(record.created, timezone.utc).strftime(
            "%Y-%m-%dT%H:%M:%SZ"
        )

    def format(self, record):
        record.level_tag = _level_tag(record)
        return super().format(record)


def _syslog_handler(syslog_cfg: Any) -> logging.Handler:
    tag = "hldsinfo"
    address: Any = "/dev/log"
    facility = logging.handlers.SysLogHandler.LOG_USER
    if isinstance(syslog_cfg, dict):
        address = syslog_cfg.get("address", address)
        if isinstance(address, list):
            address = tuple(address)
        facility = getattr(
            logging.handlers.SysLogHandler,
            f"LOG_{str(syslog_cfg.get('facility', 'USER')).upper()}",
            facility,
        )
        tag = str(syslog_cfg.get("tag", tag))
    handler = logging.handlers.SysLogHandler(address=address, facility=facility)
    handler.setFormatter(SyslogFormatter(tag=tag))
    return handler


def init_logging(cfg: Optional[Dict[str, Any]]) -> None:
    """
    Configure the root logger for the hldsinfo CLI.

    Args:
        cfg: Logging configuration dictionary with optional keys:
            - level: debug, info, warn, error, crit (default: warn so that
              stdout carries only the JSON report)
            - stderr: log to stderr (default: True)
            - file: path to a log file (optional)
            - syslog: True, or a dict with address/facility/tag (optional)

    Example config:
        {
            "level": "debug",
            "stderr": True,
            "file": "./hldsinfo.log",
        }
    """
    cfg = cfg or {}

    level = parse_level(cfg.get("level", DEFAULT_LEVEL))
    formatter = BracketLevelFormatter(fmt="%(asctime)s %(level_tag)s %(name)s: %(message)s")

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    if cfg.get("stderr", True):
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        root.addHandler(stderr_handler)

    file_path = cfg.get("file")
    if isinstance(file_path, str) and file_path.strip():
        path = os.path.abspath(os.path.expanduser(file_path.strip()))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    syslog_cfg = cfg.get("syslog")
    if syslog_cfg:
        try:
            root.addHandler(_syslog_handler(syslog_cfg))
        except (OSError, ValueError) as e:  # pragma: no cover - environment-specific
            logging.getLogger(__name__).warning("Failed to configure syslog: %s", e)

    logging.captureWarnings(True)
