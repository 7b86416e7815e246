"""Tests for data models and tool helpers."""

from pathlib import Path
from unittest.mock import patch

from models import (AITool, Project, cycle_tool, detect_ai_tools, detect_terminals,
                    pick_default_tool, validate_tool)


class TestProject:
    """Tests for the Project dataclass."""

    def test_worktrees_default_empty(self):
        """Each project gets its own worktree list."""
        a = Project(name="a", path="/a")
        b = Project(name="b", path="/b")
        a.worktrees.append("x")
        assert b.worktrees == []


class TestAITool:
    """Tests for AITool labels."""

    def test_installed_label(self):
        """Installed tools are marked with a check."""
        assert AITool("claude", "claude", True).label == "Claude Code ✓"

    def test_not_installed_label(self):
        """Missing tools say so."""
        assert AITool("codex", "codex", False).label == "Codex CLI (not installed)"

    def test_unknown_display_name_passes_through(self):
        """Unknown ids are shown as they are."""
        assert AITool("aider", "aider", True).display_name == "aider"


class TestDetection:
    """Tests for tool and terminal detection."""

    def test_detect_ai_tools(self):
        """Each tool command is looked up literally on PATH."""
        found = {"claude", "gh copilot"}
        with patch("models.shutil.which", side_effect=lambda cmd: "/bin/x" if cmd in found else None):
            tools = detect_ai_tools()

        assert [t.id for t in tools] == ["claude", "codex", "copilot", "opencode"]
        assert {t.id: t.installed for t in tools} == {
            "claude": True, "codex": False, "copilot": True, "opencode": False,
        }
        assert tools[2].command == "gh copilot"

    def test_detect_terminals(self, temp_dir: Path):
        """A terminal counts as installed when its app bundle exists."""
        (temp_dir / "Ghostty.app").mkdir()
        (temp_dir / "iTerm.app").mkdir()

        terminals = detect_terminals(temp_dir)

        assert [t.id for t in terminals] == ["ghostty", "iterm2", "wezterm", "kitty"]
        assert [t.installed for t in terminals] == [True, True, False, False]
        assert terminals[1].cask_name == "iterm2"


class TestCycleTool:
    """Tests for cycle_tool."""

    def test_forward_and_back(self):
        """Tools step forwards and backwards with wrap-around."""
        tools = ["claude", "codex", "copilot"]
        assert cycle_tool(tools, "claude", 1) == "codex"
        assert cycle_tool(tools, "copilot", 1) == "claude"
        assert cycle_tool(tools, "claude", -1) == "copilot"

    def test_single_and_empty(self):
        """One tool always returns itself; none returns the current id."""
        assert cycle_tool(["codex"], "claude", 1) == "codex"
        assert cycle_tool([], "claude", 1) == "claude"

    def test_unknown_current_returns_first(self):
        """An id that is not in the list restarts at the first tool."""
        assert cycle_tool(["codex", "opencode"], "claude", -1) == "codex"

    def test_full_lap_returns_to_start(self):
        """Stepping len(tools) times in either direction comes back to the start."""
        tools = ["claude", "codex", "copilot", "opencode"]
        for start in tools:
            for direction in (1, -1):
                current = start
                for _ in range(len(tools)):
                    current = cycle_tool(tools, current, direction)
                assert current == start


class TestValidateTool:
    """Tests for validate_tool."""

    def test_keeps_available_preference(self):
        """An available preference is kept."""
        assert validate_tool("codex", ["claude", "codex"]) == "codex"

    def test_falls_back_to_first(self):
        """An unavailable preference falls back to the first tool."""
        assert validate_tool("copilot", ["claude", "codex"]) == "claude"

    def test_empty_list_keeps_preference(self):
        """With no tools the preference is returned as is."""
        assert validate_tool("copilot", []) == "copilot"


class TestPickDefaultTool:
    """Tests for the priority rule."""

    def test_priority_wins_over_selection_order(self):
        """The priority order decides, not the selection order."""
        assert pick_default_tool(["opencode", "codex"]) == "codex"
        assert pick_default_tool(["copilot", "claude"]) == "claude"

    def test_no_priority_tool_uses_first(self):
        """Without a ranked tool the first selected one wins."""
        assert pick_default_tool(["aider", "goose"]) == "aider"

    def test_empty(self):
        """An empty selection has no default."""
        assert pick_default_tool([]) is None
