"""Yes/no confirmation dialog."""

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import Confirmation
from .program import QUIT, Model
from .render import framed_box, styled
from .theme import HINT, NEUTRAL_TEXT, Theme

MIN_WIDTH = 30
MAX_WIDTH = 64


class ConfirmDialog(Model):
    """Asks one question; only y, n, Esc and Ctrl+C do anything."""

    def __init__(self, message: str, theme: Theme):
        self.message = message
        self.theme = theme
        self.confirmed: bool | None = None
        self.quitting = False
        self.width = 0

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            return None
        if not isinstance(msg, KeyMsg):
            return None

        key = shortcut(msg)
        if key in ("y", "Y"):
            return self._finish(True)
        if key in ("n", "N") or msg.key in (Key.ESC, Key.CTRL_C):
            return self._finish(False)
        return None

    def _finish(self, confirmed: bool):
        self.confirmed = confirmed
        self.quitting = True
        return QUIT

    def view(self) -> str:
        if self.quitting:
            return ""
        width = min(max(len(self.message) + 6, MIN_WIDTH), MAX_WIDTH)
        if 0 < self.width < width:
            width = self.width
        lines = [
            styled(self.message, NEUTRAL_TEXT, bold=True),
            "",
            styled("y/n", self.theme.primary, bold=True) + styled("  confirm or cancel", HINT),
        ]
        return "\n".join(framed_box(lines, width, self.theme.dim))

    def outcome(self) -> Confirmation:
        return Confirmation(bool(self.confirmed))
