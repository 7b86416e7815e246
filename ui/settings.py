"""Display settings: ghost display, tab title and notification sound."""

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import Confirmation, SettingsConfirmed
from .program import QUIT, Model
from .render import (border_bottom, border_row, border_separator, border_top, spread,
                     styled)
from .theme import HINT, NEUTRAL_DIM, NEUTRAL_TEXT, Theme

GHOST_DISPLAY_MODES = ["animated", "static", "none"]
TAB_TITLE_MODES = ["full", "project"]

# Walking backwards from Off visits the sounds in this order.
SOUNDS_REVERSED = [
    "Tink", "Submarine", "Sosumi", "Purr", "Pop", "Ping", "Morse",
    "Hero", "Glass", "Funk", "Frog", "Bottle", "Blow", "Basso",
]
SOUND_NAMES = list(reversed(SOUNDS_REVERSED))

ROW_GHOST_DISPLAY = 0
ROW_TAB_TITLE = 1
ROW_SOUND = 2
ROW_BACK = 3
ROW_COUNT = 4

SETTINGS_WIDTH = 48


def ghost_display_label(mode: str) -> str:
    return {"animated": "Animated", "static": "Static", "none": "None"}.get(mode, mode)


def tab_title_label(mode: str) -> str:
    return {"full": "Project · Tool", "project": "Project Only"}.get(mode, mode)


def sound_label(name: str) -> str:
    return name or "Off"


def _cycle(values: list[str], current: str, direction: int) -> str:
    try:
        idx = values.index(current)
    except ValueError:
        return values[0]
    return values[(idx + direction) % len(values)]


def cycle_sound_name(current: str, direction: int) -> str:
    """Step through Off and the sounds; Off sits between Tink and Basso."""
    ring = [""] + SOUND_NAMES
    if current not in ring:
        return SOUND_NAMES[0] if direction > 0 else SOUNDS_REVERSED[0]
    return ring[(ring.index(current) + direction) % len(ring)]


class SettingsPanel:
    """Settings rows and their editing keys; owned by a menu model."""

    def __init__(self, ghost_display: str = "animated", tab_title: str = "full", sound_name: str = ""):
        self.ghost_display = ghost_display
        self.tab_title = tab_title
        self.sound_name = sound_name
        self.cursor = ROW_GHOST_DISPLAY
        # Set by any cycle, even one that lands back on the starting value
        self.ghost_display_changed = False
        self.tab_title_changed = False
        self.sound_changed = False

    def sound_name_for_result(self) -> str | None:
        """The sound, only when it changed this session."""
        return self.sound_name if self.sound_changed else None

    def handle_key(self, msg: KeyMsg) -> bool:
        """Apply a key. Returns True when the panel should close."""
        key = shortcut(msg)
        if msg.key == Key.ESC:
            return True
        if msg.key == Key.UP or key == "k":
            self.cursor = (self.cursor - 1) % ROW_COUNT
        elif msg.key == Key.DOWN or key == "j":
            self.cursor = (self.cursor + 1) % ROW_COUNT
        elif msg.key == Key.LEFT or key == "h":
            self._cycle(-1)
        elif msg.key == Key.RIGHT or key == "l":
            self._cycle(1)
        elif msg.key == Key.ENTER:
            return self.cursor == ROW_BACK
        return False

    def _cycle(self, direction: int):
        if self.cursor == ROW_GHOST_DISPLAY:
            self.ghost_display = _cycle(GHOST_DISPLAY_MODES, self.ghost_display, direction)
            self.ghost_display_changed = True
        elif self.cursor == ROW_TAB_TITLE:
            self.tab_title = _cycle(TAB_TITLE_MODES, self.tab_title, direction)
            self.tab_title_changed = True
        elif self.cursor == ROW_SOUND:
            self.sound_name = cycle_sound_name(self.sound_name, direction)
            self.sound_changed = True

    def rows(self) -> list[tuple[str, str]]:
        return [
            ("Ghost Display", ghost_display_label(self.ghost_display)),
            ("Tab Title", tab_title_label(self.tab_title)),
            ("Sound", sound_label(self.sound_name)),
        ]

    def render(self, theme: Theme, width: int = SETTINGS_WIDTH) -> list[str]:
        """The settings box as a list of lines."""
        inner = width - 4
        border = theme.dim
        lines = [
            border_top(width, border, title=" Settings ", title_color=theme.primary),
            border_row("", width, border),
        ]
        for i, (label, value) in enumerate(self.rows()):
            if i == self.cursor:
                left = styled(f"▸ {label}", theme.primary, bold=True)
                right = styled(f"[{value}]", theme.primary, bold=True)
            else:
                left = styled(f"  {label}", NEUTRAL_TEXT)
                right = styled(f"[{value}]", NEUTRAL_DIM)
            lines.append(border_row(spread(left, right, inner), width, border))
        lines.append(border_row("", width, border))
        if self.cursor == ROW_BACK:
            back = styled("▸ Back", theme.primary, bold=True)
        else:
            back = styled("  Back", NEUTRAL_TEXT)
        lines.append(border_row(back, width, border))
        lines.append(border_row("", width, border))
        lines.append(border_separator(width, border))
        lines.append(border_row(styled("↑↓ navigate ←→ change Esc back", HINT), width, border))
        lines.append(border_bottom(width, border))
        return lines


class SettingsMenu(Model):
    """The settings panel on its own, for the settings-menu command."""

    def __init__(self, theme: Theme, ghost_display: str = "animated", tab_title: str = "full",
                 sound_name: str = ""):
        self.theme = theme
        self.panel = SettingsPanel(ghost_display, tab_title, sound_name)
        self.confirmed = False
        self.quitting = False

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            return None
        if not isinstance(msg, KeyMsg):
            return None
        if msg.key in (Key.ESC, Key.CTRL_C):
            self.quitting = True
            return QUIT
        if self.panel.handle_key(msg):
            self.confirmed = True
            self.quitting = True
            return QUIT
        return None

    def view(self) -> str:
        if self.quitting:
            return ""
        return "\n".join(self.panel.render(self.theme))

    def outcome(self):
        if not self.confirmed:
            return Confirmation(False)
        return SettingsConfirmed(
            ghost_display=self.panel.ghost_display,
            tab_title=self.panel.tab_title,
            sound_name=self.panel.sound_name_for_result(),
        )
