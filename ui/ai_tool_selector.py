"""AI tool pickers: single choice and checkbox multi-select."""

from models import AITool, pick_default_tool

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import Cancelled, Confirmation, ToolsConfirmed, ToolSelected
from .program import QUIT, Model
from .render import framed_box, spread, styled
from .theme import HINT, NEUTRAL_DIM, NEUTRAL_TEXT, Theme

BOX_WIDTH = 56
MIN_INNER_WIDTH = 20
DEFAULT_MARK_COLOR = 220
ERROR_COLOR = 203


class _ToolList(Model):
    """Cursor handling and framing shared by both pickers."""

    title = ""

    def __init__(self, tools: list[AITool], theme: Theme):
        self.tools = tools
        self.theme = theme
        self.cursor = 0
        self.quitting = False
        self.width = 0

    def _move(self, msg: KeyMsg) -> bool:
        if not self.tools:
            return False
        key = shortcut(msg)
        if msg.key == Key.UP or key == "k":
            self.cursor = (self.cursor - 1) % len(self.tools)
            return True
        if msg.key == Key.DOWN or key == "j":
            self.cursor = (self.cursor + 1) % len(self.tools)
            return True
        return False

    def _inner_width(self) -> int:
        box_width = BOX_WIDTH
        if 0 < self.width < box_width:
            box_width = self.width
        return max(box_width - 4, MIN_INNER_WIDTH)

    def _frame(self, lines: list[str]) -> str:
        return "\n".join(framed_box(lines, self._inner_width() + 4, self.theme.primary, title=self.title))

    def _row_text(self, i: int, text: str, installed: bool) -> str:
        if i == self.cursor:
            return styled(f" ▸ {text}", self.theme.primary, bold=True)
        return styled(f"   {text}", NEUTRAL_TEXT if installed else NEUTRAL_DIM)


class AIToolSelector(_ToolList):
    """Choose one installed tool."""

    title = " Select AI Tool "

    def __init__(self, tools: list[AITool], theme: Theme):
        super().__init__(tools, theme)
        self.selected: AITool | None = None

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            return None
        if not isinstance(msg, KeyMsg):
            return None

        if msg.key in (Key.ESC, Key.CTRL_C):
            self.quitting = True
            return QUIT
        if self._move(msg):
            return None
        if msg.key == Key.ENTER and self.tools:
            tool = self.tools[self.cursor]
            if not tool.installed:
                return None
            self.selected = tool
            self.quitting = True
            return QUIT
        return None

    def view(self) -> str:
        if self.quitting:
            return ""
        lines = [self._row_text(i, tool.label, tool.installed) for i, tool in enumerate(self.tools)]
        lines.append("")
        lines.append(styled(" ↑/↓ navigate • Enter select • Esc cancel", HINT))
        return self._frame(lines)

    def outcome(self):
        if self.selected is None:
            return Cancelled()
        return ToolSelected(self.selected.id)


class MultiAIToolSelector(_ToolList):
    """Check any number of installed tools."""

    title = " Select AI Tools "

    def __init__(self, tools: list[AITool], theme: Theme, current: list[str] | None = None):
        super().__init__(tools, theme)
        wanted = set(current or [])
        self.checked = {t.id for t in tools if t.installed and t.id in wanted}
        self.confirmed = False
        self.error = ""

    def checked_tools(self) -> list[str]:
        """Checked ids in display order."""
        return [t.id for t in self.tools if t.id in self.checked]

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            return None
        if not isinstance(msg, KeyMsg):
            return None

        if msg.key in (Key.ESC, Key.CTRL_C):
            self.quitting = True
            return QUIT
        if self._move(msg):
            return None
        if msg.key == Key.SPACE or shortcut(msg) == "x":
            self._toggle()
        elif msg.key == Key.ENTER:
            if not self.checked:
                self.error = "Select at least one tool"
                return None
            self.confirmed = True
            self.quitting = True
            return QUIT
        return None

    def _toggle(self):
        if not self.tools:
            return
        tool = self.tools[self.cursor]
        if not tool.installed:
            return
        self.error = ""
        if tool.id in self.checked:
            self.checked.discard(tool.id)
        else:
            self.checked.add(tool.id)

    def view(self) -> str:
        if self.quitting:
            return ""
        inner = self._inner_width()
        default = pick_default_tool(self.checked_tools())

        lines = []
        for i, tool in enumerate(self.tools):
            box = "[x]" if tool.id in self.checked else "[ ]"
            line = self._row_text(i, f"{box} {tool.label}", tool.installed)
            if tool.id == default:
                line = spread(line, styled("★ default", DEFAULT_MARK_COLOR), inner)
            lines.append(line)

        lines.append("")
        if self.error:
            lines.append(styled(f" Error: {self.error}", ERROR_COLOR))
        lines.append(styled(" ↑/↓ • Space toggle • Enter confirm • Esc cancel", HINT))
        return self._frame(lines)

    def outcome(self):
        if not self.confirmed:
            return Confirmation(False)
        return ToolsConfirmed(tuple(self.checked_tools()))
