"""Top-level configuration menu."""

from dataclasses import dataclass

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import ConfigAction
from .program import QUIT, Model
from .render import framed_box, spread, styled
from .theme import HINT, Theme

BOX_WIDTH = 56
MIN_INNER_WIDTH = 20


@dataclass
class ConfigMenuItem:
    title: str
    description: str
    action: str
    status: str = ""


def config_menu_items(terminal_name: str = "", version: str = "") -> list[ConfigMenuItem]:
    """The fixed menu entries with their status annotations filled in."""
    return [
        ConfigMenuItem("Terminals", "Add, remove, or switch terminal emulator", "manage-terminals",
                       terminal_name or "not set"),
        ConfigMenuItem("Projects", "Add, remove, or open saved projects", "manage-projects"),
        ConfigMenuItem("AI Tools", "Choose which AI coding assistants to offer", "select-ai-tools"),
        ConfigMenuItem("Display Settings", "Ghost display, tab title and sound", "display-settings"),
        ConfigMenuItem("Reinstall / Update", "Re-run the installer", "reinstall",
                       f"v{version}" if version else ""),
        ConfigMenuItem("Quit", "Leave the configuration menu", "quit"),
    ]


class ConfigMenu(Model):
    """Six fixed entries; Esc and Ctrl+C mean quit."""

    def __init__(self, theme: Theme, terminal_name: str = "", version: str = ""):
        self.theme = theme
        self.items = config_menu_items(terminal_name, version)
        self.cursor = 0
        self.selected: ConfigMenuItem | None = None
        self.quitting = False
        self.width = 0

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            return None
        if not isinstance(msg, KeyMsg):
            return None

        if msg.key in (Key.ESC, Key.CTRL_C):
            self.selected = ConfigMenuItem("", "", "quit")
            self.quitting = True
            return QUIT
        if msg.key == Key.UP or shortcut(msg) == "k":
            self.cursor = (self.cursor - 1) % len(self.items)
        elif msg.key == Key.DOWN or shortcut(msg) == "j":
            self.cursor = (self.cursor + 1) % len(self.items)
        elif msg.key == Key.ENTER:
            self.selected = self.items[self.cursor]
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
        for i, item in enumerate(self.items):
            if i == self.cursor:
                line = styled(f" ▸ {item.title}", self.theme.primary, bold=True)
            else:
                line = f"   {item.title}"
            if item.status:
                line = spread(line, styled(item.status, HINT), inner)
            lines.append(line)
            lines.append("     " + styled(item.description, HINT))
            if i < len(self.items) - 1:
                lines.append("")

        lines.append("")
        lines.append(styled(" ↑/↓ navigate • Enter select • Esc quit", HINT))
        return "\n".join(framed_box(lines, inner + 4, self.theme.primary, title=" Ghost Tab Configuration "))

    def outcome(self) -> ConfigAction:
        return ConfigAction(self.selected.action if self.selected else "quit")
