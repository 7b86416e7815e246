"""Path helpers shared by the selectors and the project wizard."""

import os
from pathlib import Path


def _home() -> str:
    return os.environ.get("HOME") or str(Path.home())


def expand_path(path: str) -> str:
    """Expand a leading ``~`` (alone or ``~/...``) to $HOME."""
    if path == "~":
        return _home()
    if path.startswith("~/"):
        return os.path.join(_home(), path[2:])
    return path


def validate_path(path: str) -> str | None:
    """Check that a path names an existing directory.

    Returns an error message, or None when the path is usable.
    """
    if path == "":
        return "path cannot be empty"

    expanded = expand_path(path)
    try:
        os.stat(expanded)
    except FileNotFoundError:
        return f"path does not exist: {expanded}"
    except OSError as e:
        return f"failed to stat path: {e}"

    if not os.path.isdir(expanded):
        return f"path is not a directory: {expanded}"
    return None


def shorten_home_path(path: str) -> str:
    """Replace a $HOME prefix with ``~``."""
    home = _home().rstrip("/")
    if not home:
        return path
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path


def normalize_project_path(path: str) -> str:
    """Collapse any run of trailing slashes; the root stays ``/``."""
    stripped = path.rstrip("/")
    if not stripped and path.startswith("/"):
        return "/"
    return stripped


def truncate_middle(text: str, width: int) -> str:
    """Shorten text to width by cutting the middle, keeping head and tail."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width == 1:
        return "…"
    keep = width - 1
    head = (keep + 1) // 2
    tail = keep - head
    return text[:head] + "…" + (text[-tail:] if tail else "")
