"""Data models for Ghost Tab."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_AI_TOOL = "claude"

# Order used when one tool must be picked out of a selection.
TOOL_PRIORITY = ["claude", "codex", "copilot", "opencode"]

AI_TOOL_NAMES = {
    "claude": "Claude Code",
    "codex": "Codex CLI",
    "copilot": "Copilot CLI",
    "opencode": "OpenCode",
}

AI_TOOL_COMMANDS = {
    "claude": "claude",
    "codex": "codex",
    "copilot": "gh copilot",
    "opencode": "opencode",
}

DEFAULT_APPLICATIONS_DIR = Path("/Applications")


@dataclass
class Worktree:
    """A secondary working tree of a project."""

    path: str
    branch: str  # short name, or "(detached)"


@dataclass
class Project:
    """A named project directory from the projects file."""

    name: str
    path: str
    worktrees: list[Worktree] = field(default_factory=list)


@dataclass
class AITool:
    """A command-line coding assistant."""

    id: str
    command: str
    installed: bool

    @property
    def display_name(self) -> str:
        return ai_tool_display_name(self.id)

    @property
    def label(self) -> str:
        if self.installed:
            return f"{self.display_name} ✓"
        return f"{self.display_name} (not installed)"


@dataclass
class Terminal:
    """A supported terminal emulator."""

    id: str
    display_name: str
    cask_name: str
    app_name: str
    installed: bool = False


SUPPORTED_TERMINALS = [
    Terminal("ghostty", "Ghostty", "ghostty", "Ghostty"),
    Terminal("iterm2", "iTerm2", "iterm2", "iTerm"),
    Terminal("wezterm", "WezTerm", "wezterm", "WezTerm"),
    Terminal("kitty", "kitty", "kitty", "kitty"),
]


def ai_tool_display_name(tool_id: str) -> str:
    """Human name for a tool id; unknown ids pass through."""
    return AI_TOOL_NAMES.get(tool_id, tool_id)


def detect_ai_tools() -> list[AITool]:
    """Probe PATH for every known AI tool."""
    return [
        AITool(id=tool_id, command=command, installed=shutil.which(command) is not None)
        for tool_id, command in AI_TOOL_COMMANDS.items()
    ]


def detect_terminals(applications_dir: Path = DEFAULT_APPLICATIONS_DIR) -> list[Terminal]:
    """Supported terminals with their installed flag resolved."""
    return [
        Terminal(
            id=t.id,
            display_name=t.display_name,
            cask_name=t.cask_name,
            app_name=t.app_name,
            installed=(applications_dir / f"{t.app_name}.app").is_dir(),
        )
        for t in SUPPORTED_TERMINALS
    ]


def cycle_tool(tools: list[str], current: str, direction: int) -> str:
    """Return the neighbour of current in tools, wrapping around."""
    if not tools:
        return current
    if len(tools) == 1:
        return tools[0]
    try:
        idx = tools.index(current)
    except ValueError:
        return tools[0]
    return tools[(idx + direction) % len(tools)]


def validate_tool(preference: str, tools: list[str]) -> str:
    """Keep the preferred tool if available, else fall back to the first one."""
    if not tools:
        return preference
    if preference in tools:
        return preference
    return tools[0]


def pick_default_tool(selection: list[str]) -> str | None:
    """Pick one tool out of a multi-selection using TOOL_PRIORITY."""
    for tool_id in TOOL_PRIORITY:
        if tool_id in selection:
            return tool_id
    return selection[0] if selection else None
