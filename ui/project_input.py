"""Two-step wizard collecting a project name and directory."""

from models import Project
from path_utils import normalize_project_path, validate_path
from projects import is_duplicate_project

from .autocomplete import Autocomplete, SuggestionProvider, path_suggestion_provider
from .events import Key, KeyMsg, WindowSizeMsg
from .outcomes import Confirmation, ProjectAdded
from .program import QUIT, Model
from .render import framed_box, styled
from .text_input import TextInput
from .theme import HINT, NEUTRAL_DIM, Theme

BOX_WIDTH = 60
ERROR_COLOR = 203

STEP_NAME = 0
STEP_PATH = 1


class ProjectInput(Model):
    """Name first, then a path with directory completion."""

    def __init__(self, theme: Theme, existing: list[Project] | None = None,
                 provider: SuggestionProvider | None = None):
        self.theme = theme
        self.existing = existing or []
        self.step = STEP_NAME
        self.name_input = TextInput(placeholder="my-project")
        self.path_input = TextInput(placeholder="~/code/my-project")
        self.autocomplete = Autocomplete(provider if provider is not None else path_suggestion_provider())
        self.error = ""
        self.confirmed = False
        self.quitting = False
        self.width = 0

    @property
    def name(self) -> str:
        return self.name_input.value.strip()

    @property
    def path(self) -> str:
        return normalize_project_path(self.path_input.value.strip())

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            return None
        if not isinstance(msg, KeyMsg):
            return None

        if msg.key == Key.CTRL_C:
            return self._cancel()
        if self.step == STEP_NAME:
            return self._update_name(msg)
        return self._update_path(msg)

    def _cancel(self):
        self.confirmed = False
        self.quitting = True
        return QUIT

    def _update_name(self, msg: KeyMsg):
        if msg.key == Key.ESC:
            return self._cancel()
        if msg.key == Key.ENTER:
            if not self.name:
                self.error = "project name cannot be empty"
                return None
            self.error = ""
            self.step = STEP_PATH
            return None
        if self.name_input.handle_key(msg):
            self.error = ""
        return None

    def _update_path(self, msg: KeyMsg):
        ac = self.autocomplete
        if msg.key == Key.ESC:
            if ac.visible:
                ac.dismiss()
                return None
            return self._cancel()

        if ac.visible and msg.key == Key.UP:
            ac.move_up()
            return None
        if ac.visible and msg.key == Key.DOWN:
            ac.move_down()
            return None

        if msg.key == Key.TAB or (msg.key == Key.ENTER and ac.visible):
            choice = ac.accept_selected()
            if choice:
                self.path_input.set_value(choice)
            self._refresh_suggestions()
            return None

        if msg.key == Key.ENTER:
            return self._submit()

        if self.path_input.handle_key(msg):
            self.error = ""
            self._refresh_suggestions()
        return None

    def _refresh_suggestions(self):
        value = self.path_input.value
        if not value:
            self.autocomplete.dismiss()
            return
        self.autocomplete.set_input(value)
        self.autocomplete.refresh_suggestions()

    def _submit(self):
        raw = self.path_input.value.strip()
        problem = validate_path(raw)
        if problem is None and is_duplicate_project(raw, self.existing):
            problem = "Project already exists"
        if problem:
            self.error = problem
            return None
        self.confirmed = True
        self.quitting = True
        return QUIT

    def view(self) -> str:
        if self.quitting:
            return ""
        box_width = BOX_WIDTH
        if 0 < self.width < box_width:
            box_width = self.width
        inner = box_width - 4

        on_name = self.step == STEP_NAME
        lines = [
            styled("Project Name", self.theme.primary if on_name else NEUTRAL_DIM, bold=on_name),
            "  " + self.name_input.view(on_name, self.theme.text, NEUTRAL_DIM),
            "",
            styled("Project Path", NEUTRAL_DIM if on_name else self.theme.primary, bold=not on_name),
            "  " + self.path_input.view(not on_name, self.theme.text, NEUTRAL_DIM),
        ]
        if not on_name:
            lines.extend("  " + row for row in self.autocomplete.view(self.theme, inner - 2))
        if self.error:
            lines.append("")
            lines.append(styled(f"Error: {self.error}", ERROR_COLOR))

        lines.append("")
        if on_name:
            hint = "Enter next • Esc cancel"
        else:
            hint = "Tab complete • ↑/↓ choose • Enter confirm • Esc cancel"
        lines.append(styled(hint, HINT))
        return "\n".join(framed_box(lines, box_width, self.theme.primary, title=" Add Project "))

    def outcome(self):
        if not self.confirmed:
            return Confirmation(False)
        return ProjectAdded(self.name, self.path)
