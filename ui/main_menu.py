"""Main menu: projects, their worktrees, fixed actions and the AI tool switcher.

Rows are addressed by a single cursor over the flattened item list:
every project, then (when expanded) its worktrees and an "+ Add
worktree" row, then the fixed actions.
"""

from dataclasses import dataclass

from models import Project, ai_tool_display_name, cycle_tool, validate_tool
from path_utils import shorten_home_path, truncate_middle

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .ghost import GHOST_HEIGHT, GHOST_WIDTH, ZzzAnimation, render_ghost
from .outcomes import MenuAction
from .program import QUIT, Model, tick
from .render import (border_bottom, border_row, border_separator, border_top,
                     center_lines, join_horizontal, spread, styled, truncate)
from .settings import SettingsPanel
from .theme import HINT, NEUTRAL_DIM, NEUTRAL_TEXT, theme_for_tool

MENU_WIDTH = 48
CONTENT_WIDTH = MENU_WIDTH - 4
LAYOUT_GAP = 3
SIDE_LAYOUT_MIN_WIDTH = MENU_WIDTH + LAYOUT_GAP + GHOST_WIDTH + LAYOUT_GAP
ABOVE_LAYOUT_GAP = 2

BOB_SECONDS = 0.6
SLEEP_AFTER_SECONDS = 120.0

UPDATE_COLOR = 220

ACTIONS = ["add-project", "delete-project", "open-once", "plain-terminal"]

ACTION_LABELS = {
    "add-project": ("A", "Add new project", "Register a directory"),
    "delete-project": ("D", "Delete a project", "Remove it from the list"),
    "open-once": ("O", "Open once", "Pick a directory without saving it"),
    "plain-terminal": ("P", "Plain terminal", "Skip the AI tool"),
}

ACTION_SHORTCUTS = {"a": "add-project", "d": "delete-project", "o": "open-once", "p": "plain-terminal"}


@dataclass(frozen=True)
class MenuLayout:
    ghost_position: str  # "side", "above" or "hidden"
    menu_width: int
    menu_height: int


@dataclass(frozen=True)
class MenuItem:
    kind: str  # "project", "worktree", "add-worktree" or "action"
    project: int = -1
    worktree: int = -1
    action: str = ""


@dataclass(frozen=True)
class GhostTick:
    pass


class MainMenu(Model):
    """The launcher's home screen."""

    def __init__(self, projects: list[Project], ai_tools: list[str], current_ai: str,
                 ghost_display: str = "animated", tab_title: str = "full", sound_name: str = "",
                 update_version: str = ""):
        self.projects = projects
        self.ai_tools = list(ai_tools) or [current_ai]
        self.selected_ai = self.ai_tools.index(validate_tool(current_ai, self.ai_tools))
        self.theme = theme_for_tool(self.current_ai_tool)
        self.selected_item = 0
        self.expanded: set[int] = set()
        self.settings_mode = False
        self.settings = SettingsPanel(ghost_display, tab_title, sound_name)
        self.update_version = update_version
        self.width = 0
        self.height = 0
        self.result: MenuAction | None = None
        self.quitting = False

        self.bob = 0
        self.idle_seconds = 0.0
        self.sleeping = False
        self.zzz = ZzzAnimation()
        self._ticking = False

    # State accessors

    @property
    def current_ai_tool(self) -> str:
        return self.ai_tools[self.selected_ai]

    @property
    def ghost_display(self) -> str:
        return self.settings.ghost_display

    def items(self) -> list[MenuItem]:
        rows = []
        for i, project in enumerate(self.projects):
            rows.append(MenuItem("project", project=i))
            if i in self.expanded:
                rows.extend(MenuItem("worktree", project=i, worktree=j) for j in range(len(project.worktrees)))
                rows.append(MenuItem("add-worktree", project=i))
        rows.extend(MenuItem("action", action=a) for a in ACTIONS)
        return rows

    def total_items(self) -> int:
        return len(self.items())

    def calculate_layout(self, width: int, height: int) -> MenuLayout:
        """Arrange ghost and menu for a terminal size."""
        menu_height = 7 + 2 * self.total_items() + (1 if self.projects else 0)
        position = "hidden"
        if width >= SIDE_LAYOUT_MIN_WIDTH:
            position = "side"
        elif height >= menu_height + GHOST_HEIGHT + ABOVE_LAYOUT_GAP:
            position = "above"
        return MenuLayout(ghost_position=position, menu_width=MENU_WIDTH, menu_height=menu_height)

    # Navigation

    def move_up(self):
        self.selected_item = (self.selected_item - 1) % self.total_items()

    def move_down(self):
        self.selected_item = (self.selected_item + 1) % self.total_items()

    def jump_to(self, n: int):
        """Put the cursor on the n-th project (1-indexed)."""
        if not 1 <= n <= len(self.projects):
            return
        for idx, item in enumerate(self.items()):
            if item.kind == "project" and item.project == n - 1:
                self.selected_item = idx
                return

    def cycle_ai_tool(self, direction: int):
        if len(self.ai_tools) <= 1:
            return
        self.selected_ai = self.ai_tools.index(cycle_tool(self.ai_tools, self.current_ai_tool, direction))
        self.theme = theme_for_tool(self.current_ai_tool)

    def toggle_worktrees(self):
        """Expand or collapse the worktrees of the project under the cursor."""
        item = self.items()[self.selected_item]
        if item.kind == "action":
            return
        project = item.project
        if not self.projects[project].worktrees:
            return
        if project in self.expanded:
            self.expanded.discard(project)
            # Rows below the project vanish; keep the cursor on the project itself
            for idx, row in enumerate(self.items()):
                if row.kind == "project" and row.project == project:
                    self.selected_item = idx
                    break
        else:
            self.expanded.add(project)

    # Update

    def init(self):
        return self._start_ticking()

    def _start_ticking(self):
        if self.ghost_display != "animated" or self._ticking:
            return None
        self._ticking = True
        return tick(BOB_SECONDS, GhostTick)

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width, self.height = msg.width, msg.height
            return None
        if isinstance(msg, GhostTick):
            return self._on_tick()
        if not isinstance(msg, KeyMsg):
            return None

        self.idle_seconds = 0.0
        self.sleeping = False

        if msg.key == Key.CTRL_C:
            return self._finish("quit")
        if self.settings_mode:
            if self.settings.handle_key(msg):
                self.settings_mode = False
            return self._start_ticking()
        return self._update_menu(msg)

    def _on_tick(self):
        if self.quitting or self.ghost_display != "animated":
            self._ticking = False
            return None
        self.idle_seconds += BOB_SECONDS
        if self.sleeping:
            self.zzz.tick()
        elif self.idle_seconds >= SLEEP_AFTER_SECONDS:
            self.sleeping = True
            self.zzz.reset()
        else:
            self.bob = 1 - self.bob
        return tick(BOB_SECONDS, GhostTick)

    def _update_menu(self, msg: KeyMsg):
        key = shortcut(msg)
        if msg.key == Key.ESC:
            return self._finish("quit")
        if msg.key == Key.UP or key == "k":
            self.move_up()
        elif msg.key == Key.DOWN or key == "j":
            self.move_down()
        elif msg.key == Key.LEFT:
            self.cycle_ai_tool(-1)
        elif msg.key == Key.RIGHT:
            self.cycle_ai_tool(1)
        elif msg.key == Key.ENTER:
            return self._select_current()
        elif key in ("1", "2", "3", "4", "5", "6", "7", "8", "9"):
            self.jump_to(int(key))
        elif key in ("w", "W"):
            self.toggle_worktrees()
        elif key in ("s", "S"):
            self.settings_mode = True
        elif key.lower() in ACTION_SHORTCUTS:
            return self._finish(ACTION_SHORTCUTS[key.lower()])
        return None

    def _select_current(self):
        item = self.items()[self.selected_item]
        if item.kind == "action":
            return self._finish(item.action)
        project = self.projects[item.project]
        if item.kind == "project":
            return self._finish("select-project", name=project.name, path=project.path)
        if item.kind == "worktree":
            wt = project.worktrees[item.worktree]
            return self._finish("select-worktree", name=project.name, path=wt.path)
        return self._finish("add-worktree", name=project.name, path=project.path)

    def _finish(self, action: str, name: str | None = None, path: str | None = None):
        s = self.settings
        self.result = MenuAction(
            action=action,
            ai_tool=self.current_ai_tool,
            name=name,
            path=path,
            ghost_display=s.ghost_display if s.ghost_display_changed else None,
            tab_title=s.tab_title if s.tab_title_changed else None,
            sound_name=s.sound_name_for_result(),
        )
        self.quitting = True
        return QUIT

    def outcome(self) -> MenuAction:
        if self.result is None:
            return MenuAction(action="quit", ai_tool=self.current_ai_tool)
        return self.result

    # View

    def view(self) -> str:
        if self.quitting:
            return ""

        if self.settings_mode:
            box = self.settings.render(self.theme, MENU_WIDTH)
        else:
            box = self.render_menu_box()
        if self.update_version:
            box = box + ["", styled(f"Update available: v{self.update_version}", UPDATE_COLOR, bold=True)]

        layout = self.calculate_layout(self.width, self.height)
        if self.ghost_display == "none" or layout.ghost_position == "hidden":
            return "\n".join(box)

        animated = self.ghost_display == "animated"
        ghost = render_ghost(
            self.theme,
            sleeping=animated and self.sleeping,
            bob=self.bob if animated else 0,
            zzz=self.zzz,
        )
        if layout.ghost_position == "side":
            return "\n".join(join_horizontal(box, ghost, LAYOUT_GAP))
        ghost_block = center_lines(ghost, MENU_WIDTH)
        return "\n".join(ghost_block + [""] * ABOVE_LAYOUT_GAP + box)

    def render_menu_box(self) -> list[str]:
        """The framed menu, exactly calculate_layout().menu_height lines tall."""
        border = self.theme.dim
        lines = [
            border_top(MENU_WIDTH, border),
            border_row(self._title_row(), MENU_WIDTH, border),
            border_separator(MENU_WIDTH, border),
            border_row("", MENU_WIDTH, border),
        ]

        items = self.items()
        for idx, item in enumerate(items):
            if item.kind == "action" and idx > 0 and items[idx - 1].kind != "action":
                lines.append(border_separator(MENU_WIDTH, border))
            for row in self._item_rows(item, idx == self.selected_item):
                lines.append(border_row(row, MENU_WIDTH, border))

        lines.append(border_separator(MENU_WIDTH, border))
        lines.append(border_row(styled(self.help_text(), HINT), MENU_WIDTH, border))
        lines.append(border_bottom(MENU_WIDTH, border))
        return lines

    def _title_row(self) -> str:
        name = ai_tool_display_name(self.current_ai_tool)
        label = f"◂ {name} ▸" if len(self.ai_tools) > 1 else name
        return spread(styled("Ghost Tab", self.theme.primary, bold=True),
                      styled(label, self.theme.text), CONTENT_WIDTH, min_gap=5)

    def _item_rows(self, item: MenuItem, selected: bool) -> tuple[str, str]:
        primary, text = self.theme.primary, self.theme.text
        marker = "▸ " if selected else "  "

        if item.kind == "action":
            letter, label, desc = ACTION_LABELS[item.action]
            if selected:
                return (styled(f"{marker}{letter}  {label}", primary, bold=True),
                        styled(f"     {desc}", text))
            return (styled(f"{marker}{letter}  ", NEUTRAL_DIM) + styled(label, NEUTRAL_TEXT),
                    styled(f"     {desc}", NEUTRAL_DIM))

        project = self.projects[item.project]
        if item.kind == "project":
            number = str(item.project + 1) if item.project < 9 else " "
            count = len(project.worktrees)
            badge = ""
            if count:
                badge = f"{count} worktree" + ("s" if count != 1 else "")
            room = CONTENT_WIDTH - 5 - (len(badge) + 2 if badge else 0)
            head = f"{marker}{number}  {truncate(project.name, room)}"
            path = truncate_middle(shorten_home_path(project.path), CONTENT_WIDTH - 5)
            if selected:
                first = styled(head, primary, bold=True)
                second = styled(f"     {path}", text)
            else:
                first = styled(head, NEUTRAL_TEXT)
                second = styled(f"     {path}", NEUTRAL_DIM)
            if badge:
                first = spread(first, styled(badge, NEUTRAL_DIM), CONTENT_WIDTH)
            return first, second

        if item.kind == "worktree":
            wt = project.worktrees[item.worktree]
            path = truncate_middle(shorten_home_path(wt.path), CONTENT_WIDTH - 9)
            head = f"{marker}   ├─ {truncate(wt.branch, CONTENT_WIDTH - 8)}"
            tail = f"     │  {path}"
        else:
            head = f"{marker}   └─ + Add worktree"
            tail = ""
        if selected:
            return styled(head, primary, bold=True), styled(tail, text)
        return styled(head, NEUTRAL_TEXT), styled(tail, NEUTRAL_DIM)

    def help_text(self) -> str:
        """Key hints that fit on one line; optional ones drop out first."""
        segments = {
            "navigate": "↑↓ navigate",
            "ai": "←→ AI tool",
            "settings": "S settings",
            "worktrees": "w worktrees",
            "select": "⏎ select",
        }
        wanted = ["navigate", "select"]
        optional = []
        if len(self.ai_tools) > 1:
            optional.append("ai")
        if any(p.worktrees for p in self.projects):
            optional.append("worktrees")
        optional.append("settings")

        def render(keys: list[str]) -> str:
            order = ["navigate", "ai", "settings", "worktrees", "select"]
            return " ".join(segments[k] for k in order if k in keys)

        for key in optional:
            if len(render(wanted + [key])) <= CONTENT_WIDTH:
                wanted.append(key)
        return render(wanted)
