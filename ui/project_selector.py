"""Plain project list used by select-project."""

from models import Project
from path_utils import shorten_home_path, truncate_middle

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import Cancelled, ProjectSelected
from .program import QUIT, Model
from .render import framed_box, styled
from .theme import HINT, NEUTRAL_DIM, NEUTRAL_TEXT, Theme

BOX_WIDTH = 56


class ProjectSelector(Model):
    def __init__(self, projects: list[Project], theme: Theme):
        self.projects = projects
        self.theme = theme
        self.cursor = 0
        self.selected: Project | None = None
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
        if not self.projects:
            return None

        key = shortcut(msg)
        if msg.key == Key.UP or key == "k":
            self.cursor = (self.cursor - 1) % len(self.projects)
        elif msg.key == Key.DOWN or key == "j":
            self.cursor = (self.cursor + 1) % len(self.projects)
        elif key.isdigit() and key != "0":
            n = int(key)
            if n <= len(self.projects):
                self.cursor = n - 1
        elif msg.key == Key.ENTER:
            self.selected = self.projects[self.cursor]
            self.quitting = True
            return QUIT
        return None

    def view(self) -> str:
        if self.quitting:
            return ""
        box_width = BOX_WIDTH
        if 0 < self.width < box_width:
            box_width = self.width
        inner = box_width - 4

        lines = []
        for i, project in enumerate(self.projects):
            number = f"{i + 1}" if i < 9 else " "
            path = truncate_middle(shorten_home_path(project.path), max(inner - 5, 1))
            if i == self.cursor:
                lines.append(styled(f" ▸ {number} {project.name}", self.theme.primary, bold=True))
                lines.append(styled(f"     {path}", self.theme.text))
            else:
                lines.append(styled(f"   {number} {project.name}", NEUTRAL_TEXT))
                lines.append(styled(f"     {path}", NEUTRAL_DIM))
        lines.append("")
        lines.append(styled(" ↑/↓ navigate • 1-9 jump • Enter select • Esc cancel", HINT))
        return "\n".join(framed_box(lines, box_width, self.theme.primary, title=" Select Project "))

    def outcome(self):
        if self.selected is None:
            return Cancelled()
        return ProjectSelected(self.selected.name, self.selected.path)
