"""Tests for log setup."""

import json
import logging
import sys
from pathlib import Path

from config import _config_dir
from logging_config import (JSONFormatter, get_logger, log_performance, set_console_logging,
                            setup_logging)


def console_handler():
    return next(h for h in logging.getLogger().handlers if h.get_name() == "console")


class TestSetupLogging:
    """Tests for handler wiring."""

    def test_files_and_console(self, home_dir: Path):
        """Both log files are written and the console handler uses stderr."""
        root = setup_logging(level="DEBUG")
        assert root.level == logging.DEBUG
        log_dir = _config_dir() / "logs"
        get_logger("ghost").error("boom")
        for handler in root.handlers:
            handler.flush()
        assert "boom" in (log_dir / "ghost-tab-tui.log").read_text()
        assert "boom" in (log_dir / "errors.log").read_text()
        console = console_handler()
        assert console.stream is sys.stderr
        assert console.level == logging.WARNING

    def test_unknown_level_is_info(self, home_dir: Path):
        """An unknown level name falls back to INFO."""
        assert setup_logging(level="chatty", log_to_file=False).level == logging.INFO

    def test_unwritable_log_dir(self, home_dir: Path):
        """A config path that is a file leaves only the console handler."""
        config = _config_dir()
        config.parent.mkdir(parents=True, exist_ok=True)
        config.write_text("not a directory")
        root = setup_logging(log_to_file=True)
        assert [h.get_name() for h in root.handlers] == ["console"]

    def test_console_muted_and_restored(self, home_dir: Path):
        """The console handler can be muted and turned back on."""
        setup_logging(log_to_file=False)
        set_console_logging(False)
        assert console_handler().level > logging.CRITICAL
        set_console_logging(True)
        assert console_handler().level == logging.WARNING


class TestJSONFormatter:
    """Tests for structured log lines."""

    def test_fields_and_extra(self):
        """JSON lines carry the message, level and extra data."""
        record = logging.LogRecord("ghost", logging.INFO, __file__, 10, "hi %s", ("there",), None)
        record.extra_data = {"operation": "confirm"}
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "hi there"
        assert data["level"] == "INFO"
        assert data["extra"] == {"operation": "confirm"}

    def test_performance_record(self, caplog):
        """Timings are logged with milliseconds in the extra data."""
        logger = get_logger("perf")
        with caplog.at_level(logging.INFO):
            log_performance(logger, "main-menu", 0.25, outcome="quit")
        record = caplog.records[-1]
        assert record.extra_data == {"outcome": "quit", "operation": "main-menu", "duration_ms": 250.0}
        assert "main-menu finished in 0.250s" in record.getMessage()
