"""Per-AI-tool color palettes."""

from dataclasses import dataclass

from models import DEFAULT_AI_TOOL


@dataclass(frozen=True)
class Theme:
    """A 256-color palette; each field is an xterm color index."""

    name: str
    primary: int
    text: int
    dim: int
    bright: int


THEMES = {
    "claude": Theme("claude", primary=209, text=223, dim=166, bright=208),
    "codex": Theme("codex", primary=114, text=157, dim=71, bright=113),
    "copilot": Theme("copilot", primary=141, text=183, dim=98, bright=140),
    "opencode": Theme("opencode", primary=250, text=252, dim=244, bright=255),
}

# Neutral colors used regardless of the active tool
NEUTRAL_TEXT = 252
NEUTRAL_DIM = 245
HINT = 241


def theme_for_tool(tool_id: str) -> Theme:
    """Palette for a tool id; unknown ids get the default tool's palette."""
    return THEMES.get(tool_id, THEMES[DEFAULT_AI_TOOL])


def ansi_color(index: int) -> str:
    """Foreground escape for a 256-color index."""
    return f"\033[38;5;{index}m"
