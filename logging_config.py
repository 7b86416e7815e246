"""Log setup for ghost-tab-tui.

Standard output belongs to the outcome record, so nothing here ever
writes to it: the console handler is on stderr and the rest goes to
rotating files under the config directory.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

from config import _config_dir

CONSOLE_HANDLER = "console"
LOG_FILE = "ghost-tab-tui.log"
ERROR_LOG_FILE = "errors.log"

TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s (%(funcName)s:%(lineno)d): %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Above CRITICAL, so nothing reaches the handler
_MUTED = logging.CRITICAL + 1


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for piping logs into other tools."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'time': datetime.fromtimestamp(record.created).isoformat(timespec='milliseconds'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'where': f"{record.module}:{record.funcName}:{record.lineno}",
        }
        extra = getattr(record, 'extra_data', None)
        if extra:
            payload['extra'] = extra
        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter,
                      max_bytes: int, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backups, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = True,
    log_to_console: bool = True,
    json_format: bool = False,
    max_file_size: int = 5 * 1024 * 1024,
    backup_count: int = 3
) -> logging.Logger:
    """
    Configure the root logger for one invocation.

    Args:
        level: Root level name; unknown names fall back to INFO
        log_to_file: Write ghost-tab-tui.log and errors.log under the config dir
        log_to_console: Echo warnings and above to stderr
        json_format: Use JSONFormatter for the log files
        max_file_size: Rotate a log file once it reaches this many bytes
        backup_count: Rotated files kept per log

    Returns:
        The root logger
    """
    root = logging.getLogger()
    numeric = getattr(logging, level.upper(), None)
    root.setLevel(numeric if isinstance(numeric, int) else logging.INFO)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if log_to_console:
        console = logging.StreamHandler(sys.stderr)
        console.set_name(CONSOLE_HANDLER)
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        root.addHandler(console)

    if not log_to_file:
        return root

    formatter = JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)
    log_dir = _config_dir() / "logs"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers = [
            _rotating_handler(log_dir / LOG_FILE, logging.DEBUG, formatter, max_file_size, backup_count),
            _rotating_handler(log_dir / ERROR_LOG_FILE, logging.ERROR, formatter, max_file_size, backup_count),
        ]
    except OSError:
        # Read-only home: keep going with the console handler only
        return root

    for handler in handlers:
        root.addHandler(handler)
    return root


def set_console_logging(enabled: bool):
    """Mute the stderr handler while the alternate screen owns the terminal."""
    for handler in logging.getLogger().handlers:
        if handler.get_name() == CONSOLE_HANDLER:
            handler.setLevel(logging.WARNING if enabled else _MUTED)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, message: str, exc_info: bool = True, **context):
    """Log the exception being handled, with keyword context attached."""
    logger.error(message, exc_info=exc_info, extra={'extra_data': context})


def log_performance(logger: logging.Logger, operation: str, duration: float, **context):
    """Record how long an operation took."""
    data = dict(context, operation=operation, duration_ms=round(duration * 1000, 2))
    logger.info("%s finished in %.3fs", operation, duration, extra={'extra_data': data})
