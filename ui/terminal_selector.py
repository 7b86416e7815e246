"""Terminal emulator picker."""

from models import Terminal

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import Cancelled, InstallRequested, TerminalSelected
from .program import QUIT, Model
from .render import framed_box, spread, styled
from .theme import HINT, Theme

BOX_WIDTH = 56
MIN_INNER_WIDTH = 20

INSTALLED_COLOR = 114
NOT_INSTALLED_COLOR = 241
CURRENT_COLOR = 220


class TerminalSelector(Model):
    """Pick an installed terminal, or ask for an uninstalled one to be installed."""

    def __init__(self, terminals: list[Terminal], theme: Theme, current: str = ""):
        self.terminals = terminals
        self.theme = theme
        self.current = current
        self.cursor = 0
        self.selected: Terminal | None = None
        self.install_requested: Terminal | None = None
        self.quitting = False
        self.width = 0

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            return None
        if not isinstance(msg, KeyMsg):
            return None

        if msg.key in (Key.ESC, Key.CTRL_C):
            self.quitting = True
            return QUIT
        if not self.terminals:
            return None

        key = shortcut(msg)
        if msg.key == Key.UP or key == "k":
            self.cursor = (self.cursor - 1) % len(self.terminals)
        elif msg.key == Key.DOWN or key == "j":
            self.cursor = (self.cursor + 1) % len(self.terminals)
        elif msg.key == Key.ENTER:
            term = self.terminals[self.cursor]
            if term.installed:
                self.selected = term
            else:
                self.install_requested = term
            self.quitting = True
            return QUIT
        elif key == "i":
            term = self.terminals[self.cursor]
            if not term.installed:
                self.install_requested = term
                self.quitting = True
                return QUIT
        return None

    def view(self) -> str:
        if self.quitting:
            return ""

        box_width = BOX_WIDTH
        if 0 < self.width < box_width:
            box_width = self.width
        inner = max(box_width - 4, MIN_INNER_WIDTH)

        lines = []
        for i, term in enumerate(self.terminals):
            if i == self.cursor:
                line = styled(f" ▸ {term.display_name}", self.theme.primary, bold=True)
            else:
                line = f"   {term.display_name}"

            if term.installed:
                status = styled("✓ installed", INSTALLED_COLOR)
                if self.current and term.id == self.current:
                    status += "  " + styled("★ current", CURRENT_COLOR)
            else:
                status = styled("○ not installed", NOT_INSTALLED_COLOR)
            lines.append(spread(line, status, inner))

        hint = " ↑/↓ navigate • "
        if self.terminals and self.terminals[self.cursor].installed:
            hint += "Enter select • "
        else:
            hint += "Enter install • "
        hint += "Esc cancel"
        lines.append("")
        lines.append(styled(hint, HINT))
        return "\n".join(framed_box(lines, inner + 4, self.theme.primary, title=" Select Terminal "))

    def outcome(self):
        if self.selected is not None:
            return TerminalSelected(self.selected.id)
        if self.install_requested is not None:
            return InstallRequested(self.install_requested.id, self.install_requested.cask_name)
        return Cancelled()
