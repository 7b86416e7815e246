"""Pytest configuration and fixtures for ghost-tab-tui tests."""

import logging
import shutil
import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from ui.events import Key, KeyMsg


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def temp_git_repo(temp_dir: Path) -> Path:
    """Create a temporary git repository whose main branch is ``main``."""
    repo = temp_dir / "repo"
    repo.mkdir()

    def git(*args):
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)

    git("init")
    git("symbolic-ref", "HEAD", "refs/heads/main")
    git("config", "user.name", "Test User")
    git("config", "user.email", "test@example.com")
    git("config", "commit.gpgsign", "false")

    readme_file = repo / "README.md"
    readme_file.write_text("# Test Repository\n")
    git("add", "README.md")
    git("commit", "-m", "Initial commit")

    return repo


@pytest.fixture
def home_dir(temp_dir: Path, monkeypatch) -> Path:
    """Point HOME and XDG_CONFIG_HOME into the temp directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "xdg"))
    return home


@pytest.fixture
def projects_file(temp_dir: Path) -> Path:
    """A projects file with two entries."""
    path = temp_dir / "projects"
    path.write_text("alpha:/tmp/alpha\nbeta:/srv/beta project\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def keys(*names: str) -> list[KeyMsg]:
    """Build key events: single characters become runes, anything else a named key."""
    out = []
    for name in names:
        if len(name) == 1:
            out.append(KeyMsg.rune(name))
        else:
            out.append(KeyMsg(name))
    return out


def feed(model, *names: str):
    """Send keys to a model, returning the command from the last one."""
    cmd = None
    for msg in keys(*names):
        cmd = model.update(msg)
    return cmd


ENTER = Key.ENTER
ESC = Key.ESC
UP = Key.UP
DOWN = Key.DOWN
LEFT = Key.LEFT
RIGHT = Key.RIGHT
