"""Configuration management for Ghost Tab."""

import os
from pathlib import Path

APP_NAME = "ghost-tab"
PROJECTS_FILE = "projects"

# Single-value preference files written by the launcher.
PREFERENCE_FILES = (
    "ai-tool",
    "ghost-display",
    "tab-title",
    "terminal",
    "notification-sound",
)


def _config_dir() -> Path:
    """Get the configuration directory shared with the shell launcher."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME


def projects_file_path() -> Path:
    """Get the default projects file path."""
    return _config_dir() / PROJECTS_FILE


def preference_path(name: str) -> Path:
    """Get the path of a single-value preference file."""
    if name not in PREFERENCE_FILES:
        raise ValueError(f"unknown preference: {name}")
    return _config_dir() / name


def read_preference(name: str, default: str = "") -> str:
    """Read a preference file, falling back to the default."""
    p = preference_path(name)
    try:
        value = p.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return default
    except (OSError, UnicodeDecodeError) as e:
        # Imported lazily: error_handler -> logging_config -> config
        from error_handler import handle_configuration_error

        handle_configuration_error(e, config_key=name)
        return default
    return value or default


def log_level() -> str:
    """Log level requested through the environment."""
    return os.environ.get("GHOST_TAB_LOG_LEVEL", "INFO").upper()
