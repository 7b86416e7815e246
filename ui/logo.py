"""Animated splash logo."""

from dataclasses import dataclass

from .events import KeyMsg
from .program import QUIT, Model, batch, tick
from .render import styled

LOGO_COLOR = 170
FRAME_SECONDS = 0.2
DISPLAY_SECONDS = 2.0

_ART = [
    "   ____  _               _     _____     _",
    "  / ___|| |__   ___  ___| |_  |_   _|_ _| |__",
    " | |  _ | '_ \\ / _ \\/ __| __|   | |/ _  | '_ \\",
    " | |_| || | | | (_) \\__ \\ |_    | | (_| | |_) |",
    "  \\____||_| |_|\\___/|___/\\__|   |_|\\__,_|_.__/",
]

LOGO_FRAMES = [
    _ART + [""],
    _ART + ["      ·  ˚  ·    ˚  ·  ˚    ·  ˚  ·"],
]


@dataclass(frozen=True)
class LogoTick:
    pass


@dataclass(frozen=True)
class LogoTimeout:
    pass


def _next_frame():
    return tick(FRAME_SECONDS, LogoTick)


class Logo(Model):
    """Shows the logo for two seconds or until a key is pressed."""

    def __init__(self):
        self.frame = 0
        self.quitting = False

    def init(self):
        return batch(_next_frame(), tick(DISPLAY_SECONDS, LogoTimeout))

    def update(self, msg):
        if isinstance(msg, LogoTick):
            self.frame = (self.frame + 1) % len(LOGO_FRAMES)
            if self.quitting:
                return None
            return _next_frame()
        if isinstance(msg, (LogoTimeout, KeyMsg)):
            self.quitting = True
            return QUIT
        return None

    def view(self) -> str:
        if self.quitting:
            return ""
        return "\n".join(styled(line, LOGO_COLOR, bold=True) for line in LOGO_FRAMES[self.frame])

    def outcome(self):
        return None
