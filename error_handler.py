"""Error types and the user-facing messages built from them.

Every failure that reaches the user passes through one of the
``handle_*`` helpers below: the error is logged once with its context and
a short message comes back for the TUI feedback line or stderr.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from logging_config import get_logger

logger = get_logger(__name__)


class TTYUnavailableError(RuntimeError):
    """The controlling terminal could not be opened or configured."""


class ProjectsFileError(RuntimeError):
    """A required input file is missing or unreadable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    GIT_OPERATION = "git_operation"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    TERMINAL = "terminal"
    UNKNOWN = "unknown"


_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}

# Substrings of git's stderr and the short message shown for them
_GIT_MESSAGES = [
    ("not a git repository", "not a git repository"),
    ("not fully merged", "branch is not fully merged"),
    ("checked out at", "branch is checked out in a worktree"),
    ("used by worktree", "branch is checked out in a worktree"),
    ("not found", "branch not found"),
]


@dataclass
class ErrorInfo:
    """What was logged about a failure, plus the line to show the user."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    user_message: str
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[Exception] = None


class ErrorHandler:
    """Logs failures by category and turns them into short messages."""

    def handle_error(
        self,
        exception: Exception,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> ErrorInfo:
        info = ErrorInfo(
            category=category,
            severity=severity,
            message=str(exception),
            user_message=user_message or str(exception) or type(exception).__name__,
            context={k: v for k, v in (context or {}).items() if v is not None},
            exception=exception,
        )
        self._log(info)
        return info

    def handle_git_error(
        self,
        exception: Exception,
        operation: str,
        repo_path: Optional[Path] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR
    ) -> ErrorInfo:
        """A failed git call; the message names the usual causes plainly."""
        return self.handle_error(
            exception,
            ErrorCategory.GIT_OPERATION,
            severity,
            user_message=git_user_message(exception, operation),
            context={"operation": operation, "repo_path": str(repo_path) if repo_path else None},
        )

    def handle_file_system_error(
        self,
        exception: Exception,
        operation: str,
        file_path: Optional[Path] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR
    ) -> ErrorInfo:
        where = str(file_path) if file_path else "the requested path"
        if isinstance(exception, PermissionError):
            message = f"Permission denied: {where}"
        elif isinstance(exception, (FileNotFoundError, ProjectsFileError)):
            message = str(exception) if isinstance(exception, ProjectsFileError) else f"File not found: {where}"
        elif isinstance(exception, NotADirectoryError):
            message = f"Not a directory: {where}"
        else:
            message = f"{operation} failed: {exception}"
        return self.handle_error(
            exception,
            ErrorCategory.FILE_SYSTEM,
            severity,
            user_message=message,
            context={"operation": operation, "file_path": str(file_path) if file_path else None},
        )

    def handle_configuration_error(
        self,
        exception: Exception,
        config_key: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.WARNING
    ) -> ErrorInfo:
        """A preference that could not be read; callers fall back to defaults."""
        label = f" '{config_key}'" if config_key else ""
        return self.handle_error(
            exception,
            ErrorCategory.CONFIGURATION,
            severity,
            user_message=f"Ignoring preference{label}: {exception}",
            context={"config_key": config_key},
        )

    def handle_terminal_error(
        self,
        exception: Exception,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR
    ) -> ErrorInfo:
        return self.handle_error(
            exception,
            ErrorCategory.TERMINAL,
            severity,
            user_message=f"failed to run TUI: {exception}",
            context={"operation": operation},
        )

    def _log(self, info: ErrorInfo):
        line = f"[{info.category.value}] {info.message}"
        if info.context:
            line += f" | Context: {info.context}"
        # Tracebacks only for real errors; warnings stay one line
        with_trace = info.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)
        logger.log(_LOG_LEVELS[info.severity], line, exc_info=info.exception if with_trace else None)


def git_user_message(exception: Exception, operation: str) -> str:
    """Short explanation of a git failure."""
    text = str(exception).lower()
    for needle, message in _GIT_MESSAGES:
        if needle in text:
            return message
    return str(exception) or f"git {operation} failed"


_error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    return _error_handler


def handle_git_error(
    exception: Exception,
    operation: str,
    repo_path: Optional[Path] = None,
    severity: ErrorSeverity = ErrorSeverity.ERROR
) -> ErrorInfo:
    return _error_handler.handle_git_error(exception, operation, repo_path, severity)


def handle_file_system_error(
    exception: Exception,
    operation: str,
    file_path: Optional[Path] = None,
    severity: ErrorSeverity = ErrorSeverity.ERROR
) -> ErrorInfo:
    return _error_handler.handle_file_system_error(exception, operation, file_path, severity)


def handle_configuration_error(
    exception: Exception,
    config_key: Optional[str] = None,
    severity: ErrorSeverity = ErrorSeverity.WARNING
) -> ErrorInfo:
    return _error_handler.handle_configuration_error(exception, config_key, severity)


def handle_terminal_error(
    exception: Exception,
    operation: str,
    severity: ErrorSeverity = ErrorSeverity.ERROR
) -> ErrorInfo:
    return _error_handler.handle_terminal_error(exception, operation, severity)
