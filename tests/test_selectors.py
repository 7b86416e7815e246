"""Tests for the small TUI models: confirm, config menu, terminal, AI tools, projects, logo."""

from conftest import DOWN, ENTER, ESC, UP, feed

from models import AITool, Project, Terminal
from ui.ai_tool_selector import AIToolSelector, MultiAIToolSelector
from ui.config_menu import ConfigMenu, config_menu_items
from ui.confirm_dialog import ConfirmDialog
from ui.events import Key, KeyMsg, WindowSizeMsg
from ui.logo import LOGO_FRAMES, Logo, LogoTick, LogoTimeout
from ui.program import QUIT, Batch
from ui.project_selector import ProjectSelector
from ui.render import strip_ansi
from ui.terminal_selector import TerminalSelector
from ui.theme import theme_for_tool

THEME = theme_for_tool("claude")


class TestConfirmDialog:
    """Tests for ConfirmDialog."""

    def test_yes(self):
        """y confirms."""
        m = ConfirmDialog("Delete project?", THEME)
        assert feed(m, "y") is QUIT
        assert m.outcome().to_dict() == {"confirmed": True}

    def test_capital_no(self):
        """N declines."""
        m = ConfirmDialog("Delete project?", THEME)
        assert feed(m, "N") is QUIT
        assert m.outcome().to_dict() == {"confirmed": False}

    def test_esc_and_ctrl_c_cancel(self):
        """Esc and Ctrl+C decline."""
        for key in (Key.ESC, Key.CTRL_C):
            m = ConfirmDialog("Delete?", THEME)
            assert feed(m, key) is QUIT
            assert m.outcome().confirmed is False

    def test_other_keys_ignored(self):
        """Typing x, Enter or Up does nothing and the dialog stays open."""
        m = ConfirmDialog("Delete?", THEME)
        assert feed(m, "x", ENTER, UP) is None
        assert not m.quitting
        assert feed(m, "y") is QUIT
        assert m.outcome().confirmed is True

    def test_cyrillic_layout_yes(self):
        """The key under y on a Russian layout confirms."""
        m = ConfirmDialog("Delete?", THEME)
        assert feed(m, "н") is QUIT
        assert m.outcome().confirmed is True

    def test_view(self):
        """The prompt shows the message and y/n in the theme colour."""
        m = ConfirmDialog("Delete project?", THEME)
        m.update(WindowSizeMsg(80, 24))
        view = m.view()
        assert "Delete project?" in strip_ansi(view)
        assert "y/n" in strip_ansi(view)
        assert "38;5;209" in view

    def test_view_empty_after_quit(self):
        """Nothing is drawn once answered."""
        m = ConfirmDialog("Delete?", THEME)
        feed(m, "y")
        assert m.view() == ""


class TestConfigMenu:
    """Tests for ConfigMenu."""

    def test_six_items(self):
        """The menu has its six fixed entries in order."""
        assert [i.action for i in config_menu_items()] == [
            "manage-terminals", "manage-projects", "select-ai-tools",
            "display-settings", "reinstall", "quit",
        ]

    def test_status_annotations(self):
        """Terminal and version annotations, with a placeholder when unset."""
        items = config_menu_items("Ghostty", "2.1.0")
        assert items[0].status == "Ghostty"
        assert items[4].status == "v2.1.0"
        assert config_menu_items()[0].status == "not set"

    def test_enter_selects(self):
        """Enter reports the highlighted entry."""
        m = ConfigMenu(THEME)
        feed(m, DOWN, DOWN, ENTER)
        assert m.outcome().to_dict() == {"action": "select-ai-tools"}

    def test_up_wraps(self):
        """Up from the top lands on Quit."""
        m = ConfigMenu(THEME)
        feed(m, UP, ENTER)
        assert m.outcome().to_dict() == {"action": "quit"}

    def test_esc_is_quit(self):
        """Esc reports quit wherever the cursor is."""
        m = ConfigMenu(THEME)
        feed(m, DOWN, ESC)
        assert m.outcome().to_dict() == {"action": "quit"}

    def test_view_title(self):
        """The title and annotations are drawn."""
        m = ConfigMenu(THEME, "Ghostty", "1.0.0")
        view = strip_ansi(m.view())
        assert "Ghost Tab Configuration" in view
        assert "Ghostty" in view
        assert "v1.0.0" in view


def terminals():
    return [
        Terminal("ghostty", "Ghostty", "ghostty", "Ghostty", installed=True),
        Terminal("kitty", "kitty", "kitty", "kitty", installed=False),
    ]


class TestTerminalSelector:
    """Tests for TerminalSelector."""

    def test_select_installed(self):
        """Enter on an installed terminal selects it."""
        m = TerminalSelector(terminals(), THEME)
        feed(m, ENTER)
        assert m.outcome().to_dict() == {"terminal": "ghostty", "selected": True}

    def test_install_request(self):
        """Enter on a missing terminal asks for its install."""
        m = TerminalSelector(terminals(), THEME)
        feed(m, DOWN, ENTER)
        assert m.outcome().to_dict() == {
            "action": "install", "terminal": "kitty", "cask": "kitty", "selected": False,
        }

    def test_i_on_installed_does_nothing(self):
        """i is ignored on an installed terminal."""
        m = TerminalSelector(terminals(), THEME)
        assert feed(m, "i") is None
        assert not m.quitting

    def test_i_on_uninstalled_requests_install(self):
        """i on a missing terminal asks for its install."""
        m = TerminalSelector(terminals(), THEME)
        assert feed(m, DOWN, "i") is QUIT
        assert m.outcome().to_dict()["action"] == "install"

    def test_navigation_wraps(self):
        """Up from the top wraps to the last terminal."""
        m = TerminalSelector(terminals(), THEME)
        feed(m, UP)
        assert m.cursor == 1

    def test_cancel(self):
        """Esc cancels."""
        m = TerminalSelector(terminals(), THEME)
        feed(m, ESC)
        assert m.outcome().to_dict() == {"selected": False}

    def test_view_current_marker(self):
        """Rows show the current and installed markers."""
        m = TerminalSelector(terminals(), THEME, current="ghostty")
        view = strip_ansi(m.view())
        assert "★ current" in view
        assert "✓ installed" in view
        assert "○ not installed" in view


def tools():
    return [
        AITool("claude", "claude", True),
        AITool("codex", "codex", False),
        AITool("copilot", "gh copilot", True),
        AITool("opencode", "opencode", True),
    ]


class TestAIToolSelector:
    """Tests for the single-choice tool picker."""

    def test_select_installed(self):
        """Enter on an installed tool selects it."""
        m = AIToolSelector(tools(), THEME)
        feed(m, DOWN, DOWN, ENTER)
        assert m.outcome().to_dict() == {"tool": "copilot", "selected": True}

    def test_refuses_uninstalled(self):
        """Enter on a missing tool is ignored."""
        m = AIToolSelector(tools(), THEME)
        assert feed(m, DOWN, ENTER) is None
        assert not m.quitting

    def test_cancel(self):
        """Esc cancels."""
        m = AIToolSelector(tools(), THEME)
        feed(m, ESC)
        assert m.outcome().to_dict() == {"selected": False}


class TestMultiAIToolSelector:
    """Tests for the checkbox tool picker."""

    def test_current_starts_checked(self):
        """Installed tools from --current start checked."""
        m = MultiAIToolSelector(tools(), THEME, current=["claude", "codex"])
        # codex is not installed, so it cannot start checked
        assert m.checked == {"claude"}

    def test_toggle_and_confirm(self):
        """Space and x toggle and Enter confirms the checked tools."""
        m = MultiAIToolSelector(tools(), THEME)
        feed(m, Key.SPACE, DOWN, DOWN, "x", ENTER)
        assert m.outcome().to_dict() == {"tools": ["claude", "copilot"], "confirmed": True}

    def test_uninstalled_cannot_be_toggled(self):
        """Missing tools cannot be checked."""
        m = MultiAIToolSelector(tools(), THEME)
        feed(m, DOWN, Key.SPACE)
        assert m.checked == set()

    def test_confirm_requires_selection(self):
        """Confirming with nothing checked shows an error."""
        m = MultiAIToolSelector(tools(), THEME)
        assert feed(m, ENTER) is None
        assert m.error == "Select at least one tool"
        assert "Select at least one tool" in strip_ansi(m.view())

    def test_cancel(self):
        """Esc cancels."""
        m = MultiAIToolSelector(tools(), THEME, current=["claude"])
        feed(m, ESC)
        assert m.outcome().to_dict() == {"confirmed": False}

    def test_default_mark_follows_priority(self):
        """The default mark follows the priority order."""
        m = MultiAIToolSelector(tools(), THEME, current=["opencode", "copilot"])
        rows = [line for line in strip_ansi(m.view()).split("\n") if "★ default" in line]
        assert len(rows) == 1
        assert "Copilot CLI" in rows[0]


class TestProjectSelector:
    """Tests for ProjectSelector."""

    def projects(self):
        return [Project("alpha", "/tmp/alpha"), Project("beta", "/tmp/beta"), Project("gamma", "/tmp/gamma")]

    def test_enter_selects(self):
        """Enter reports the project and its path."""
        m = ProjectSelector(self.projects(), THEME)
        feed(m, DOWN, ENTER)
        assert m.outcome().to_dict() == {"project": "beta", "path": "/tmp/beta", "selected": True}

    def test_digit_jump(self):
        """A digit jumps to that project."""
        m = ProjectSelector(self.projects(), THEME)
        feed(m, "3", ENTER)
        assert m.outcome().project == "gamma"

    def test_digit_out_of_range_ignored(self):
        """Digits past the last project do nothing."""
        m = ProjectSelector(self.projects(), THEME)
        feed(m, "9")
        assert m.cursor == 0

    def test_cancel(self):
        """Esc cancels."""
        m = ProjectSelector(self.projects(), THEME)
        feed(m, ESC)
        assert m.outcome().to_dict() == {"selected": False}


class TestLogo:
    """Tests for the Logo model."""

    def test_init_schedules_tick_and_timeout(self):
        """Init starts the frame tick and the timeout together."""
        cmd = Logo().init()
        assert isinstance(cmd, Batch)
        assert len(cmd.cmds) == 2

    def test_tick_advances_frame(self):
        """Each tick shows the next frame and schedules another."""
        m = Logo()
        next_cmd = m.update(LogoTick())
        assert m.frame == 1
        assert callable(next_cmd)
        m.update(LogoTick())
        assert m.frame == 0

    def test_frames_differ(self):
        """The two frames are different."""
        assert LOGO_FRAMES[0] != LOGO_FRAMES[1]

    def test_timeout_quits(self):
        """The timeout ends the logo with no outcome."""
        m = Logo()
        assert m.update(LogoTimeout()) is QUIT
        assert m.view() == ""
        assert m.outcome() is None

    def test_any_key_quits(self):
        """Any key ends the logo early."""
        m = Logo()
        assert m.update(KeyMsg.rune("q")) is QUIT

    def test_tick_after_quit_stops(self):
        """Ticks after quitting schedule nothing."""
        m = Logo()
        m.update(LogoTimeout())
        assert m.update(LogoTick()) is None
