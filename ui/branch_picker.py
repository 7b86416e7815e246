"""Filterable branch list with in-place branch deletion."""

from dataclasses import dataclass

import git_utils
from error_handler import handle_git_error

from .events import Key, KeyMsg, WindowSizeMsg, shortcut
from .outcomes import BranchSelected, Cancelled
from .program import QUIT, Model
from .render import (border_bottom, border_row, border_separator, border_top, spread, styled,
                     truncate)
from .theme import HINT, NEUTRAL_DIM, NEUTRAL_TEXT, Theme

BOX_WIDTH = 52
INNER_WIDTH = BOX_WIDTH - 4
DEFAULT_HEIGHT = 24

# Lines around the list that are not branch rows
NORMAL_CHROME = 9
DELETE_CHROME = 8

ERROR_COLOR = 203
SUCCESS_COLOR = 114
DELETE_COLOR = 203


@dataclass(frozen=True)
class BranchDeleted:
    """Result of a background branch delete; error is empty on success."""
    branch: str
    error: str = ""


def delete_branch_cmd(project_path: str, branch: str):
    """Effect that deletes a branch and reports back with BranchDeleted."""
    def run():
        try:
            git_utils.delete_branch(project_path, branch)
        except RuntimeError as e:
            info = handle_git_error(e, "branch delete", project_path)
            return BranchDeleted(branch, info.user_message)
        return BranchDeleted(branch)
    return run


class BranchPicker(Model):
    """Choose a branch to create a worktree from, or delete branches."""

    def __init__(self, branches: list[str], theme: Theme, project_path: str = ""):
        self.all_branches = list(branches)
        self.filtered = list(branches)
        self.theme = theme
        self.project_path = project_path

        self.filtering = False
        self.filter_text = ""
        self.cursor = 0
        self.offset = 0

        self.delete_mode = False
        self.delete_selected = 0
        self.delete_offset = 0
        self.pending_delete = ""

        self.feedback = ""
        self.feedback_error = False

        self.selected: str | None = None
        self.quitting = False
        self.width = 0
        self.height = DEFAULT_HEIGHT

    def visible_count(self) -> int:
        chrome = DELETE_CHROME if self.delete_mode else NORMAL_CHROME
        return max(self.height - chrome, 1)

    def apply_filter(self):
        needle = self.filter_text.lower()
        self.filtered = [b for b in self.all_branches if needle in b.lower()]
        self.cursor = 0
        self.offset = 0

    @staticmethod
    def _clamp_offset(cursor: int, offset: int, visible: int, total: int) -> int:
        if cursor < offset:
            offset = cursor
        elif cursor >= offset + visible:
            offset = cursor - visible + 1
        return max(min(offset, max(total - visible, 0)), 0)

    def _scroll(self):
        visible = self.visible_count()
        self.offset = self._clamp_offset(self.cursor, self.offset, visible, len(self.filtered))
        self.delete_offset = self._clamp_offset(self.delete_selected, self.delete_offset, visible,
                                                len(self.all_branches))

    def update(self, msg):
        if isinstance(msg, WindowSizeMsg):
            self.width, self.height = msg.width, msg.height
            self._scroll()
            return None
        if isinstance(msg, BranchDeleted):
            return self._on_deleted(msg)
        if not isinstance(msg, KeyMsg):
            return None

        if msg.key == Key.CTRL_C:
            self.quitting = True
            return QUIT

        self.feedback = ""
        self.feedback_error = False

        if self.delete_mode:
            cmd = self._update_delete(msg)
        elif self.filtering:
            cmd = self._update_filter(msg)
        else:
            cmd = self._update_normal(msg)
        self._scroll()
        return cmd

    def _on_deleted(self, msg: BranchDeleted):
        if self.quitting:
            return None
        self.pending_delete = ""
        if msg.error:
            self.feedback = f"Failed: {msg.error}"
            self.feedback_error = True
            return None

        self.feedback = f"Deleted {msg.branch}"
        self.feedback_error = False
        if msg.branch in self.all_branches:
            self.all_branches.remove(msg.branch)
        self.apply_filter()
        self.delete_mode = False
        self.delete_selected = min(self.delete_selected, max(len(self.all_branches) - 1, 0))
        self._scroll()
        return None

    def _move(self, delta: int):
        if not self.filtered:
            return
        self.cursor = max(0, min(self.cursor + delta, len(self.filtered) - 1))

    def _select(self):
        if self.filtered:
            self.selected = self.filtered[self.cursor]
        self.quitting = True
        return QUIT

    def _update_normal(self, msg: KeyMsg):
        key = shortcut(msg)
        if msg.key == Key.ESC:
            self.quitting = True
            return QUIT
        if msg.key == Key.ENTER:
            return self._select()
        if msg.key == Key.UP or key == "k":
            self._move(-1)
        elif msg.key == Key.DOWN or key == "j":
            self._move(1)
        elif key == "/":
            self.filtering = True
        elif key == "d" and self.all_branches:
            self.delete_mode = True
            self.delete_selected = 0
            self.delete_offset = 0
        return None

    def _update_filter(self, msg: KeyMsg):
        if msg.key == Key.ESC:
            self.filtering = False
            self.filter_text = ""
            self.apply_filter()
            return None
        if msg.key == Key.ENTER:
            return self._select()
        if msg.key == Key.UP:
            self._move(-1)
        elif msg.key == Key.DOWN:
            self._move(1)
        elif msg.key == Key.BACKSPACE:
            if self.filter_text:
                self.filter_text = self.filter_text[:-1]
                self.apply_filter()
        elif msg.key in (Key.RUNE, Key.SPACE):
            self.filter_text += msg.char
            self.apply_filter()
        return None

    def _update_delete(self, msg: KeyMsg):
        key = shortcut(msg)
        total = len(self.all_branches)
        if msg.key == Key.ESC or key in ("q", "Q"):
            self.delete_mode = False
            return None
        if not total:
            return None
        if msg.key == Key.UP or key == "k":
            self.delete_selected = (self.delete_selected - 1) % total
        elif msg.key == Key.DOWN or key == "j":
            self.delete_selected = (self.delete_selected + 1) % total
        elif msg.key == Key.ENTER and not self.pending_delete:
            branch = self.all_branches[self.delete_selected]
            self.pending_delete = branch
            self.feedback = f"Deleting {branch}…"
            return delete_branch_cmd(self.project_path, branch)
        return None

    def view(self) -> str:
        if self.quitting:
            return ""
        border = self.theme.dim
        title = " Select Branch · Delete " if self.delete_mode else " Select Branch "
        lines = [border_top(BOX_WIDTH, border, kind="square", title=title, title_color=self.theme.primary)]

        if self.delete_mode:
            lines.append(border_row(styled("Choose a branch to delete", DELETE_COLOR, bold=True),
                                    BOX_WIDTH, border))
        else:
            lines.append(border_row(self._filter_line(), BOX_WIDTH, border))
        lines.append(border_separator(BOX_WIDTH, border))
        lines.extend(border_row(row, BOX_WIDTH, border) for row in self._list_rows())
        lines.append(border_separator(BOX_WIDTH, border))

        if self.feedback:
            color = ERROR_COLOR if self.feedback_error else SUCCESS_COLOR
            lines.append(border_row(styled(self.feedback, color), BOX_WIDTH, border))
        else:
            lines.append(border_row("", BOX_WIDTH, border))
        lines.append(border_row(styled(self._help(), HINT), BOX_WIDTH, border))
        lines.append(border_bottom(BOX_WIDTH, border, kind="square"))
        return "\n".join(lines)

    def _filter_line(self) -> str:
        if self.filtering:
            return styled("/ ", self.theme.primary, bold=True) + styled(self.filter_text, self.theme.text) \
                + styled(" ", reverse=True)
        if not self.all_branches:
            return styled("No branches available", NEUTRAL_DIM)
        count = f"{len(self.filtered)} of {len(self.all_branches)}"
        return spread(styled("Branches", NEUTRAL_TEXT), styled(count, NEUTRAL_DIM), INNER_WIDTH)

    def _list_rows(self) -> list[str]:
        visible = self.visible_count()
        if self.delete_mode:
            items, cursor, offset, color = self.all_branches, self.delete_selected, self.delete_offset, DELETE_COLOR
        else:
            items, cursor, offset, color = self.filtered, self.cursor, self.offset, self.theme.primary

        rows = []
        for i in range(offset, min(offset + visible, len(items))):
            name = truncate(items[i], INNER_WIDTH - 2)
            if i == cursor:
                rows.append(styled(f"▸ {name}", color, bold=True))
            else:
                rows.append(styled(f"  {name}", NEUTRAL_TEXT))
        if not items and not self.delete_mode:
            rows.append(styled("  no matching branches", NEUTRAL_DIM))
        return rows

    def _help(self) -> str:
        if self.delete_mode:
            return "↑↓ navigate ⏎ delete q/Esc cancel"
        if self.filtering:
            return "type to filter ⏎ select Esc clear"
        return "↑↓ navigate / filter d delete ⏎ select Esc quit"

    def outcome(self):
        if self.selected is None:
            return Cancelled()
        return BranchSelected(self.selected)
