"""Event loop that runs one TUI model on the controlling terminal.

Models never perform I/O themselves. ``update`` returns a command value
(None, QUIT, a Batch, or a callable effect) and the Program interprets
it: effects run on worker threads and post exactly one reply message
back into the loop's queue. All model state is touched only by the loop
thread.
"""

import codecs
import os
import queue
import select
import signal
import termios
import threading
import time
import tty
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from error_handler import TTYUnavailableError
from logging_config import get_logger, log_exception

from .events import WindowSizeMsg, parse_keys
from .render import place_center

logger = get_logger(__name__)

TTY_PATH = "/dev/tty"

ENTER_ALT_SCREEN = "\x1b[?1049h"
EXIT_ALT_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CURSOR_HOME = "\x1b[H"
CLEAR_LINE_END = "\x1b[K"
CLEAR_BELOW = "\x1b[J"

Cmd = Callable[[], Any]


class _Quit:
    """Command that ends the program."""

    def __repr__(self) -> str:
        return "QUIT"


QUIT = _Quit()


class Batch:
    """Several commands dispatched together."""

    def __init__(self, cmds: list):
        self.cmds = cmds


def batch(*cmds):
    """Combine commands, dropping the empty ones."""
    real = [c for c in cmds if c is not None]
    if not real:
        return None
    if len(real) == 1:
        return real[0]
    return Batch(real)


def tick(seconds: float, make_msg: Callable[[], Any]) -> Cmd:
    """Effect that posts make_msg() after a delay."""
    def run():
        time.sleep(seconds)
        return make_msg()
    return run


def is_quit(cmd) -> bool:
    """Whether a command value ends the program."""
    if cmd is QUIT:
        return True
    if isinstance(cmd, Batch):
        return any(is_quit(c) for c in cmd.cmds)
    return False


class Model:
    """Common contract of the TUI models."""

    def init(self):
        """Command to run when the program starts."""
        return None

    def update(self, msg):
        """Apply one event; return a command value."""
        raise NotImplementedError

    def view(self) -> str:
        """Render the current state."""
        raise NotImplementedError

    def outcome(self):
        """The record describing how the model ended."""
        raise NotImplementedError


class TTY:
    """A raw-mode handle on the controlling terminal."""

    def __init__(self, fd: int):
        self.fd = fd

    def write(self, text: str):
        data = text.encode("utf-8")
        while data:
            n = os.write(self.fd, data)
            data = data[n:]

    def size(self) -> tuple[int, int]:
        try:
            sz = os.get_terminal_size(self.fd)
        except OSError:
            return 80, 24
        return sz.columns, sz.lines


@contextmanager
def open_tty(path: str = TTY_PATH) -> Iterator[TTY]:
    """Acquire the terminal in raw mode on the alternate screen.

    The terminal is restored on every exit path.
    """
    try:
        fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    except OSError as e:
        raise TTYUnavailableError(f"could not open {path}: {e.strerror or e}") from e

    try:
        saved = termios.tcgetattr(fd)
    except termios.error as e:
        os.close(fd)
        raise TTYUnavailableError(f"{path} is not a terminal") from e

    term = TTY(fd)
    try:
        tty.setraw(fd)
        term.write(ENTER_ALT_SCREEN + HIDE_CURSOR)
        yield term
    finally:
        try:
            term.write(SHOW_CURSOR + EXIT_ALT_SCREEN)
        finally:
            termios.tcsetattr(fd, termios.TCSAFLUSH, saved)
            os.close(fd)


class Program:
    """Runs a model until it returns QUIT."""

    def __init__(self, model: Model, tty_path: str = TTY_PATH):
        self.model = model
        self.tty_path = tty_path
        # put() must stay safe to call from the SIGWINCH handler
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._held = None
        self._stop = threading.Event()
        self._size = (0, 0)
        self._last_frame = None
        self.finished = False

    def run(self) -> Model:
        """Run to completion and return the final model."""
        with open_tty(self.tty_path) as term:
            reader = threading.Thread(target=self._read_keys, args=(term.fd,), daemon=True)
            previous_handler = self._install_resize_handler(term)
            reader.start()
            try:
                self._loop(term)
                self.finished = True
            finally:
                self._stop.set()
                if previous_handler is not None:
                    signal.signal(signal.SIGWINCH, previous_handler)
                reader.join(timeout=0.5)
        return self.model

    def _install_resize_handler(self, term: TTY):
        def on_resize(signum, frame):
            self._queue.put(WindowSizeMsg(*term.size()))

        try:
            return signal.signal(signal.SIGWINCH, on_resize)
        except ValueError:
            logger.debug("Not on the main thread; resize events disabled")
            return None

    def _loop(self, term: TTY):
        self._queue.put(WindowSizeMsg(*term.size()))
        if self._dispatch(self.model.init()):
            return

        while True:
            msg = self._next()
            if isinstance(msg, WindowSizeMsg):
                msg = self._latest_size(msg)
                self._size = (msg.width, msg.height)
                self._last_frame = None
            if self._dispatch(self.model.update(msg)):
                return
            self._render(term)

    def _next(self):
        if self._held is not None:
            msg, self._held = self._held, None
            return msg
        return self._queue.get()

    def _latest_size(self, msg: WindowSizeMsg) -> WindowSizeMsg:
        """Coalesce a run of queued resizes into the most recent one.

        The first non-resize message is held back and delivered next.
        """
        while self._held is None:
            try:
                nxt = self._queue.get_nowait()
            except queue.Empty:
                break
            if isinstance(nxt, WindowSizeMsg):
                msg = nxt
            else:
                self._held = nxt
        return msg

    def _dispatch(self, cmd) -> bool:
        """Interpret a command value; True means quit."""
        if cmd is None:
            return False
        if cmd is QUIT:
            return True
        if isinstance(cmd, Batch):
            results = [self._dispatch(c) for c in cmd.cmds]
            return any(results)
        threading.Thread(target=self._run_effect, args=(cmd,), daemon=True).start()
        return False

    def _run_effect(self, cmd: Cmd):
        try:
            msg = cmd()
        except Exception:
            log_exception(logger, "Effect raised", effect=repr(cmd))
            return
        if msg is not None and not self._stop.is_set():
            self._queue.put(msg)

    def _read_keys(self, fd: int):
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while not self._stop.is_set():
            ready, _, _ = select.select([fd], [], [], 0.05)
            if not ready:
                continue
            try:
                data = os.read(fd, 1024)
            except OSError as e:
                logger.debug(f"TTY read failed: {e}")
                return
            if not data:
                return
            for key in parse_keys(decoder.decode(data)):
                self._queue.put(key)

    def _render(self, term: TTY):
        width, height = self._size
        frame = place_center(self.model.view(), width, height)
        if frame == self._last_frame:
            return
        self._last_frame = frame
        lines = frame.split("\n")
        if height > 0:
            lines = lines[:height]
        term.write(CURSOR_HOME + (CLEAR_LINE_END + "\r\n").join(lines) + CLEAR_LINE_END + CLEAR_BELOW)
