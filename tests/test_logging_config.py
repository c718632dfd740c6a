"""
Brief: Tests for hldsinfo.config.logging_config.init_logging and formatters.

Inputs:
  - None

Outputs:
  - None
"""

import logging
import logging.handlers
from pathlib import Path

from hldsinfo.config.logging_config import (
    BracketLevelFormatter,
    SyslogFormatter,
    init_logging,
    parse_level,
)


def test_init_logging_adds_stderr_handler():
    init_logging({"level": "debug"})
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_init_logging_defaults_to_warn():
    init_logging(None)
    assert logging.getLogger().level == logging.WARNING


def test_init_logging_without_stderr():
    init_logging({"stderr": False})
    assert logging.getLogger().handlers == []


def test_init_logging_file_handler_writes(tmp_path):
    log_path = tmp_path / "logs" / "hldsinfo.log"
    init_logging({"level": "info", "file": str(log_path), "stderr": False})
    logging.getLogger("hldsinfo.test").info("file message")
    for h in logging.getLogger().handlers:
        h.flush()
    content = Path(log_path).read_text()
    assert "file message" in content
    assert "[info]" in content
    assert "hldsinfo.test" in content


def test_init_logging_syslog(monkeypatch):
    created = {}

    class DummySysLogHandler(logging.Handler):
        LOG_USER = 8
        LOG_LOCAL0 = 128

        def __init__(self, address=None, facility=None):
            super().__init__()
            created["address"] = address
            created["facility"] = facility

        def emit(self, record):
            pass

    monkeypatch.setattr(logging.handlers, "SysLogHandler", DummySysLogHandler)
    init_logging({"stderr": False, "syslog": {"address": ["127.0.0.1", 514], "facility": "local0"}})
    assert created == {"address": ("127.0.0.1", 514), "facility": 128}


def test_parse_level():
    assert parse_level("crit") == logging.CRITICAL
    assert parse_level("WARN") == logging.WARNING
    assert parse_level("bogus") == logging.WARNING


def test_bracket_formatter():
    fmt = BracketLevelFormatter(fmt="%(asctime)s %(level_tag)s %(name)s: %(message)s")
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
    out = fmt.format(record)
    assert out.endswith("[error] x: boom")
    assert out[:20].endswith("Z")


def test_syslog_formatter():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hi", None, None)
    assert SyslogFormatter(tag="t").format(record) == "t: [info] x: hi"
