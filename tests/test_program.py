"""Tests for the event loop helpers and outcome records."""

import json
import os
import queue
import signal
import time
from unittest.mock import patch

import pytest

from error_handler import TTYUnavailableError
from ui.events import KeyMsg, WindowSizeMsg
from ui.outcomes import (Cancelled, ConfigAction, Confirmation, InstallRequested, MenuAction,
                         ProjectAdded, SettingsConfirmed, ToolsConfirmed, to_json)
from ui.program import QUIT, Batch, Model, Program, batch, is_quit, open_tty, tick


class Echo(Model):
    """Records every message it sees."""

    def __init__(self, reply=None):
        self.seen = []
        self.reply = reply

    def update(self, msg):
        self.seen.append(msg)
        return self.reply

    def view(self):
        return "echo"

    def outcome(self):
        return None


class TestCommands:
    """Tests for command values."""

    def test_batch_drops_none(self):
        """Empty commands vanish and a single one is returned unwrapped."""
        assert batch(None, None) is None
        only = tick(0, KeyMsg)
        assert batch(None, only) is only

    def test_batch_many(self):
        """Several commands become a Batch that can carry QUIT."""
        cmd = batch(tick(0, KeyMsg), QUIT)
        assert isinstance(cmd, Batch)
        assert is_quit(cmd)

    def test_is_quit(self):
        """Only QUIT, alone or batched, ends the program."""
        assert is_quit(QUIT)
        assert not is_quit(None)
        assert not is_quit(tick(0, KeyMsg))

    def test_tick_posts_message(self):
        """A tick waits before producing its message."""
        start = time.time()
        msg = tick(0.01, lambda: "done")()
        assert msg == "done"
        assert time.time() - start >= 0.01


class TestDispatch:
    """Tests for how the program interprets commands."""

    def test_effect_reply_is_queued(self):
        """An effect's return value is queued for the loop."""
        program = Program(Echo())
        assert program._dispatch(lambda: "reply") is False
        assert program._queue.get(timeout=2) == "reply"

    def test_quit_in_batch(self):
        """QUIT inside a batch stops the loop."""
        program = Program(Echo())
        assert program._dispatch(Batch([None, QUIT])) is True

    def test_failing_effect_posts_nothing(self):
        """An effect that raises is logged and posts nothing."""
        program = Program(Echo())

        def boom():
            raise ValueError("boom")

        program._run_effect(boom)
        with pytest.raises(queue.Empty):
            program._queue.get_nowait()

    def test_reply_after_stop_dropped(self):
        """Replies arriving after shutdown are dropped."""
        program = Program(Echo())
        program._stop.set()
        program._run_effect(lambda: "late")
        assert program._queue.empty()

    def test_resizes_coalesced(self):
        """Consecutive resizes collapse and the next key is not lost."""
        program = Program(Echo())
        program._queue.put(WindowSizeMsg(90, 30))
        program._queue.put(WindowSizeMsg(100, 40))
        program._queue.put(KeyMsg("enter"))
        program._queue.put(WindowSizeMsg(120, 50))
        latest = program._latest_size(WindowSizeMsg(80, 24))
        assert latest == WindowSizeMsg(100, 40)
        assert program._next() == KeyMsg("enter")
        assert program._queue.get_nowait() == WindowSizeMsg(120, 50)

    def test_resize_handler_posts_size(self):
        """The SIGWINCH handler queues the new size without taking a lock."""

        class FixedTTY:
            def size(self):
                return 132, 43

        program = Program(Echo())
        previous = program._install_resize_handler(FixedTTY())
        try:
            handler = signal.getsignal(signal.SIGWINCH)
            assert isinstance(program._queue, queue.SimpleQueue)
            handler(signal.SIGWINCH, None)
            handler(signal.SIGWINCH, None)
        finally:
            signal.signal(signal.SIGWINCH, previous)
        assert program._next() == WindowSizeMsg(132, 43)
        assert program._latest_size(WindowSizeMsg(132, 43)) == WindowSizeMsg(132, 43)
        assert program._queue.empty()


class TestOpenTTY:
    """Tests for acquiring the terminal."""

    def test_missing_device(self, temp_dir):
        """A missing terminal device raises TTYUnavailableError."""
        with pytest.raises(TTYUnavailableError):
            with open_tty(str(temp_dir / "no-tty")):
                pass

    def test_not_a_terminal(self, temp_dir):
        """A regular file is not accepted as a terminal."""
        path = temp_dir / "plain"
        path.write_text("")
        with pytest.raises(TTYUnavailableError):
            with open_tty(str(path)):
                pass

    def test_program_run_without_tty(self, temp_dir):
        """Running without a terminal raises before drawing."""
        with pytest.raises(TTYUnavailableError):
            Program(Echo(), tty_path=str(temp_dir / "no-tty")).run()

    def test_descriptor_closed_on_failure(self, temp_dir):
        """The descriptor is closed when the device is not a terminal."""
        path = temp_dir / "plain"
        path.write_text("")
        with patch("ui.program.os.close", wraps=os.close) as close:
            with pytest.raises(TTYUnavailableError):
                with open_tty(str(path)):
                    pass
        assert close.called


class TestOutcomes:
    """Tests for outcome JSON."""

    def test_compact_single_line(self):
        """Outcomes are compact JSON on one line."""
        assert to_json(Confirmation(True)) == '{"confirmed":true}'
        assert to_json(Cancelled()) == '{"selected":false}'

    def test_menu_action_key_order_and_optional_fields(self):
        """Menu actions keep key order and omit unset fields."""
        out = to_json(MenuAction("select-project", "claude", name="p", path="/p"))
        assert out == '{"action":"select-project","name":"p","path":"/p","ai_tool":"claude"}'
        assert to_json(MenuAction("quit", "codex")) == '{"action":"quit","ai_tool":"codex"}'

    def test_menu_action_settings_fields(self):
        """Changed settings are appended, an empty sound included."""
        d = MenuAction("open-once", "claude", tab_title="project", sound_name="").to_dict()
        assert d == {"action": "open-once", "ai_tool": "claude", "tab_title": "project", "sound_name": ""}

    def test_non_ascii_kept(self):
        """Non-ASCII text is written as is."""
        out = to_json(ProjectAdded("проект", "/home/u/проект"))
        assert "проект" in out
        assert json.loads(out) == {"name": "проект", "path": "/home/u/проект", "confirmed": True}

    def test_other_shapes(self):
        """The remaining outcome records have their documented keys."""
        assert InstallRequested("kitty", "kitty").to_dict() == {
            "action": "install", "terminal": "kitty", "cask": "kitty", "selected": False,
        }
        assert ToolsConfirmed(("claude", "codex")).to_dict() == {"tools": ["claude", "codex"], "confirmed": True}
        assert ConfigAction("reinstall").to_dict() == {"action": "reinstall"}
        assert SettingsConfirmed("none", "full").to_dict() == {
            "ghost_display": "none", "tab_title": "full", "confirmed": True,
        }
